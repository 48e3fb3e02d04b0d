"""core/token_system.py"""
from enum import Enum


class TokenType(Enum):
    UNKNOWN = "unknown"        # 词法错误标记
    EOF = "eof"                # 输入结束
    WHITESPACE = "whitespace"
    NUMBER = "number"
    PLUS = "plus"              # +
    MINUS = "minus"            # -
    TIMES = "times"            # *
    SLASH = "slash"            # /
    CARET = "caret"            # ^ 乘方
    LPAREN = "lparen"          # ( 只识别，语法不消费
    RPAREN = "rparen"          # )


class MathOperator(Enum):
    NONE = "none"              # 一元恒等
    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"
    EXPONENTIATE = "exponentiate"


class Token:
    """源文本上的半开区间 [begin, begin+length) 加上类型，不持有文本"""

    def __init__(self, begin, length, token_type):
        self.begin = begin
        self.length = length
        self.type = token_type

    def __eq__(self, other):
        if not isinstance(other, Token):
            return NotImplemented
        return (self.begin, self.length, self.type) == (other.begin, other.length, other.type)

    def __repr__(self):
        return f"Token({self.type.name}, begin={self.begin}, length={self.length})"


# 单字符Token定义
SINGLE_CHAR_TOKENS = {
    '+': TokenType.PLUS,
    '-': TokenType.MINUS,
    '*': TokenType.TIMES,
    '/': TokenType.SLASH,
    '^': TokenType.CARET,
    '(': TokenType.LPAREN,
    ')': TokenType.RPAREN,
}

SPACING_CHARS = frozenset(' \t\r\n')
NUMERIC_CHARS = frozenset('0123456789.')

# Token类型到数学操作符的映射，词法层和AST共用同一份符号表
TOKEN_TO_OPERATOR = {
    TokenType.PLUS: MathOperator.ADD,
    TokenType.MINUS: MathOperator.SUBTRACT,
    TokenType.TIMES: MathOperator.MULTIPLY,
    TokenType.SLASH: MathOperator.DIVIDE,
    TokenType.CARET: MathOperator.EXPONENTIATE,
}

OPERATOR_SYMBOLS = {
    MathOperator.NONE: '',
    MathOperator.ADD: '+',
    MathOperator.SUBTRACT: '-',
    MathOperator.MULTIPLY: '*',
    MathOperator.DIVIDE: '/',
    MathOperator.EXPONENTIATE: '^',
}


def match_spacing(c):
    return c in SPACING_CHARS


def match_numeric(c):
    return c in NUMERIC_CHARS


def stringify_token(token, source, sout):
    """
    把token覆盖的文本追加到sout（io.StringIO）中
    Args:
        token: Token
        source: 源文本
        sout: 可增长的输出缓冲区，由调用方负责清空
    Returns:
        是否成功写入；越界或长度为0时返回False且不写入任何内容
    """
    if token.begin >= len(source) or token.length == 0:
        return False

    sout.write(source[token.begin:token.begin + token.length])
    return True
