"""core/parser.py - 递归下降解析器，单Token前瞻，生成AST

语法（优先级由低到高，全部左结合，包括乘方）:
    Term    := Factor ( ('+' | '-') Factor )*
    Factor  := Power  ( ('*' | '/') Power )*
    Power   := Unary  ( '^' Unary )*
    Unary   := '-' Number | Number
"""
import io
import logging
from enum import Enum

from config.config import PARSER_CONFIG
from core.errors import LexError, ExpressionSyntaxError
from core.expressions import ValueExpr, UnaryExpr, BinaryExpr, ExpressionTree
from core.lexer import Lexer
from core.token_system import TokenType, MathOperator, TOKEN_TO_OPERATOR, stringify_token

logger = logging.getLogger(__name__)


class ConsumeStatus(Enum):
    EOF = "eof"            # 已到输入末尾，未消费
    OK = "ok"              # 匹配主类型
    OPTIONAL = "optional"  # 匹配备选类型


class Parser:

    def __init__(self, strict=None):
        """
        Args:
            strict: 为True时，Term之后若还有未消费的Token则报错；
                    None表示使用PARSER_CONFIG中的设置
        """
        self.strict = PARSER_CONFIG["strict_trailing"] if strict is None else strict
        self.lexer = Lexer()
        self.previous = None
        self.current = None
        self._sout = io.StringIO()  # 数字文本的临时缓冲区

    # ================== Token流 ==================

    def is_at_eof(self):
        return self.current.type == TokenType.EOF

    def advance_by_token(self):
        """跳过空白，返回下一个有意义的Token（包括EOF）；遇到UNKNOWN立即报错"""
        while True:
            token = self.lexer.lex_next()

            if token.type == TokenType.UNKNOWN:
                text = self.lexer.peek_source()[token.begin:token.begin + token.length]
                raise LexError(f"Invalid token {text!r} at offset {token.begin}", offset=token.begin)

            if token.type != TokenType.WHITESPACE:
                return token

    def consume_token(self, type_main, type_optional):
        """
        检查current是否为期望的两种类型之一，匹配则前进
        Returns:
            ConsumeStatus.EOF / OK / OPTIONAL
        """
        if self.current.type == TokenType.EOF:
            return ConsumeStatus.EOF

        if self.current.type == type_main:
            status = ConsumeStatus.OK
        elif self.current.type == type_optional:
            status = ConsumeStatus.OPTIONAL
        else:
            raise ExpressionSyntaxError(
                f"Unexpected token {self._current_text()!r} at offset {self.current.begin}",
                offset=self.current.begin
            )

        self.previous = self.current
        self.current = self.advance_by_token()
        return status

    def _check(self, *token_types):
        return self.current.type in token_types

    def _current_text(self):
        if self.current.type == TokenType.EOF:
            return '<end of input>'
        source = self.lexer.peek_source()
        return source[self.current.begin:self.current.begin + self.current.length]

    def _materialize_number(self, token):
        """通过stringify_token取出数字文本并转换为float"""
        self._sout.seek(0)
        self._sout.truncate(0)

        if not stringify_token(token, self.lexer.peek_source(), self._sout):
            raise LexError(f"Empty number token at offset {token.begin}", offset=token.begin)

        text = self._sout.getvalue()
        try:
            return float(text)
        except ValueError:
            # 例如单独的 "."
            raise LexError(f"Malformed number {text!r} at offset {token.begin}", offset=token.begin) from None

    # ================== 语法规则 ==================

    def parse_unary(self):
        status = self.consume_token(TokenType.NUMBER, TokenType.MINUS)

        if status == ConsumeStatus.EOF:
            # 输入提前结束，缺失的操作数按0处理
            logger.debug("Operand missing at end of input, using 0")
            return ValueExpr(0.0)

        if status == ConsumeStatus.OK:
            return ValueExpr(self._materialize_number(self.previous))

        # 负号后必须是数字
        if self.consume_token(TokenType.NUMBER, TokenType.NUMBER) == ConsumeStatus.EOF:
            logger.debug("Operand missing after '-' at end of input, using 0")
            return UnaryExpr(ValueExpr(0.0), MathOperator.SUBTRACT)

        return UnaryExpr(ValueExpr(self._materialize_number(self.previous)), MathOperator.SUBTRACT)

    def _parse_binary_level(self, parse_operand, type_main, type_optional):
        """解析一层二元运算：先解析一个操作数，再循环消费同层操作符并左折叠"""
        left_expr = parse_operand()

        while self._check(type_main, type_optional):
            self.consume_token(type_main, type_optional)
            operator = TOKEN_TO_OPERATOR[self.previous.type]
            right_expr = parse_operand()
            left_expr = BinaryExpr(left_expr, right_expr, operator)

        return left_expr

    def parse_power(self):
        return self._parse_binary_level(self.parse_unary, TokenType.CARET, TokenType.CARET)

    def parse_factor(self):
        return self._parse_binary_level(self.parse_power, TokenType.TIMES, TokenType.SLASH)

    def parse_term(self):
        return self._parse_binary_level(self.parse_factor, TokenType.PLUS, TokenType.MINUS)

    # ================== 入口 ==================

    def parse_source(self, source):
        """
        解析整个输入
        Args:
            source: 表达式文本
        Returns:
            ExpressionTree，空输入时root为None
        """
        self.lexer.reset(source)
        self._sout.seek(0)
        self._sout.truncate(0)
        self.previous = None
        self.current = self.advance_by_token()

        if self.is_at_eof():
            logger.debug("Empty input, returning empty tree")
            return ExpressionTree()

        root = self.parse_term()

        if not self.is_at_eof():
            if self.strict:
                raise ExpressionSyntaxError(
                    f"Unexpected trailing token {self._current_text()!r} at offset {self.current.begin}",
                    offset=self.current.begin
                )
            logger.debug(f"Ignoring trailing input from offset {self.current.begin}")

        tree = ExpressionTree(root)
        logger.debug(f"Parsed expression: {source[:50]!r}")
        return tree
