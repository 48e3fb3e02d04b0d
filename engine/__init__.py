"""Engine模块 - 表达式会话求值和批量处理"""
from .evaluator import ExpressionEvaluator

__all__ = ['ExpressionEvaluator']
