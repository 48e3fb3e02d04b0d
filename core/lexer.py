"""core/lexer.py - 单遍词法分析器，按需产生Token"""
import logging

from core.token_system import (
    Token, TokenType, SINGLE_CHAR_TOKENS, match_spacing, match_numeric
)

logger = logging.getLogger(__name__)


class Lexer:

    def __init__(self, source=""):
        self.source = source
        self.position = 0
        self.limit = len(source)

    def peek_source(self):
        return self.source

    def reset(self, source):
        """复用扫描器处理新的文本"""
        self.source = source
        self.position = 0
        self.limit = len(source)

    def lex_single(self, token_type):
        mark = self.position
        self.position += 1
        return Token(mark, 1, token_type)

    def lex_spacing(self):
        start = self.position
        while self.position < self.limit and match_spacing(self.source[self.position]):
            self.position += 1
        return Token(start, self.position - start, TokenType.WHITESPACE)

    def lex_numeric(self):
        start = self.position
        dot_count = 0

        while self.position < self.limit:
            c = self.source[self.position]
            if not match_numeric(c):
                break
            if c == '.':
                dot_count += 1
            self.position += 1

        # 多个小数点：整段仍被消费，但标记为UNKNOWN
        if dot_count > 1:
            logger.debug(f"Malformed number at offset {start}: {self.source[start:self.position]!r}")
            return Token(start, self.position - start, TokenType.UNKNOWN)

        return Token(start, self.position - start, TokenType.NUMBER)

    def lex_next(self):
        """返回下一个Token"""
        if self.position >= self.limit:
            return Token(self.limit, 1, TokenType.EOF)

        symbol = self.source[self.position]

        if symbol in SINGLE_CHAR_TOKENS:
            return self.lex_single(SINGLE_CHAR_TOKENS[symbol])
        if match_spacing(symbol):
            return self.lex_spacing()
        if match_numeric(symbol):
            return self.lex_numeric()

        return self.lex_single(TokenType.UNKNOWN)

    def __iter__(self):
        """逐个产出剩余Token，包括最后的EOF"""
        while True:
            token = self.lex_next()
            yield token
            if token.type == TokenType.EOF:
                break
