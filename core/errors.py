"""core/errors.py"""


class ExpressionError(Exception):
    """表达式处理过程中所有错误的基类"""


class LexError(ExpressionError):
    """无法识别的字符，或包含多个小数点的数字"""

    def __init__(self, message, offset=None):
        super().__init__(message)
        self.offset = offset


class ExpressionSyntaxError(ExpressionError):
    """当前Token与语法规则期望的两种类型都不匹配"""

    def __init__(self, message, offset=None):
        super().__init__(message)
        self.offset = offset


class EvalError(ExpressionError):
    """AST节点持有非法的操作符（内部不变量被破坏）"""


class DivisionByZero(ExpressionError):
    """除数恰好为0.0"""
