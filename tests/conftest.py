import pytest

from core import Parser
from engine import ExpressionEvaluator


@pytest.fixture
def parser():
    return Parser()


@pytest.fixture
def evaluator():
    return ExpressionEvaluator()
