"""核心模块 - Token系统、词法分析器、解析器和AST求值器"""
from .token_system import (
    TokenType, Token, MathOperator, TOKEN_TO_OPERATOR, stringify_token
)
from .errors import (
    ExpressionError, LexError, ExpressionSyntaxError, EvalError, DivisionByZero
)
from .lexer import Lexer
from .expressions import ValueExpr, UnaryExpr, BinaryExpr, ExpressionTree
from .operators import Operators
from .parser import Parser, ConsumeStatus
from .ast_evaluator import ASTEvaluator, evaluate

__all__ = [
    'TokenType', 'Token', 'MathOperator', 'TOKEN_TO_OPERATOR', 'stringify_token',
    'ExpressionError', 'LexError', 'ExpressionSyntaxError', 'EvalError', 'DivisionByZero',
    'Lexer', 'ValueExpr', 'UnaryExpr', 'BinaryExpr', 'ExpressionTree',
    'Operators', 'Parser', 'ConsumeStatus', 'ASTEvaluator', 'evaluate'
]
