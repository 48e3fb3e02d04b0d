"""
Tests for the recursive descent parser.

These tests validate:
- tree shape for precedence and left-associative folding
- token flow primitives (advance_by_token, consume_token)
- lexical and syntax errors
- reuse of one Parser across inputs
"""

import pytest

from core import (
    Parser, ConsumeStatus, TokenType, MathOperator,
    ValueExpr, UnaryExpr, BinaryExpr,
    LexError, ExpressionSyntaxError,
)


class TestTreeShape:
    """Tests for the AST built by parse_source."""

    def test_single_number(self, parser):
        assert parser.parse_source("42").root == ValueExpr(42.0)

    def test_negative_number(self, parser):
        assert parser.parse_source("-5").root == UnaryExpr(ValueExpr(5.0), MathOperator.SUBTRACT)

    def test_left_fold(self, parser):
        """a+b-c folds as ((a+b)-c)."""
        tree = parser.parse_source("1+2-3")
        assert tree.root == BinaryExpr(
            BinaryExpr(ValueExpr(1), ValueExpr(2), MathOperator.ADD),
            ValueExpr(3),
            MathOperator.SUBTRACT,
        )

    def test_precedence(self, parser):
        tree = parser.parse_source("2+3*4")
        assert tree.root == BinaryExpr(
            ValueExpr(2),
            BinaryExpr(ValueExpr(3), ValueExpr(4), MathOperator.MULTIPLY),
            MathOperator.ADD,
        )

    def test_power_is_left_associative(self, parser):
        tree = parser.parse_source("2^3^2")
        assert tree.root == BinaryExpr(
            BinaryExpr(ValueExpr(2), ValueExpr(3), MathOperator.EXPONENTIATE),
            ValueExpr(2),
            MathOperator.EXPONENTIATE,
        )

    def test_whitespace_is_skipped(self, parser):
        assert parser.parse_source("  6 /\t2 ").root == BinaryExpr(
            ValueExpr(6), ValueExpr(2), MathOperator.DIVIDE
        )

    @pytest.mark.parametrize("source", ["", "   ", "\n\t"])
    def test_empty_input_gives_empty_tree(self, parser, source):
        assert parser.parse_source(source).is_empty()

    def test_missing_operand_at_end_is_zero(self, parser):
        tree = parser.parse_source("2+")
        assert tree.root == BinaryExpr(ValueExpr(2), ValueExpr(0), MathOperator.ADD)

    def test_trailing_tokens_ignored(self, parser):
        assert parser.parse_source("2 3").root == ValueExpr(2)
        assert parser.parse_source("4)").root == ValueExpr(4)


class TestErrors:
    """Tests for lexical and syntax errors raised while parsing."""

    @pytest.mark.parametrize("source", ["1.2.3", "2+@3", "@", "3 $", "."])
    def test_lex_errors(self, parser, source):
        with pytest.raises(LexError):
            parser.parse_source(source)

    def test_lex_error_reports_offset(self, parser):
        with pytest.raises(LexError) as exc_info:
            parser.parse_source("2+@3")
        assert exc_info.value.offset == 2

    @pytest.mark.parametrize("source", ["+5", "(2)", "2*/3", "--5", "3^*2"])
    def test_syntax_errors(self, parser, source):
        with pytest.raises(ExpressionSyntaxError):
            parser.parse_source(source)

    def test_strict_rejects_trailing_tokens(self):
        strict_parser = Parser(strict=True)
        with pytest.raises(ExpressionSyntaxError):
            strict_parser.parse_source("2 3")
        assert strict_parser.parse_source("2+3").root is not None


class TestTokenFlow:
    """Tests for advance_by_token and consume_token."""

    def test_advance_skips_whitespace(self, parser):
        parser.lexer.reset("   7")
        token = parser.advance_by_token()
        assert token.type == TokenType.NUMBER
        assert token.begin == 3

    def test_consume_reports_alternative(self, parser):
        parser.lexer.reset("- 1")
        parser.current = parser.advance_by_token()
        assert parser.consume_token(TokenType.PLUS, TokenType.MINUS) == ConsumeStatus.OPTIONAL
        assert parser.previous.type == TokenType.MINUS
        assert parser.current.type == TokenType.NUMBER
        assert parser.consume_token(TokenType.NUMBER, TokenType.MINUS) == ConsumeStatus.OK
        assert parser.consume_token(TokenType.NUMBER, TokenType.MINUS) == ConsumeStatus.EOF

    def test_consume_mismatch_raises(self, parser):
        parser.lexer.reset("*")
        parser.current = parser.advance_by_token()
        with pytest.raises(ExpressionSyntaxError):
            parser.consume_token(TokenType.PLUS, TokenType.MINUS)


class TestReuse:
    """A single Parser must not leak state between inputs."""

    def test_sequential_inputs(self, parser):
        first = parser.parse_source("1+2")
        second = parser.parse_source("7")
        assert second.root == ValueExpr(7)
        assert first.root == BinaryExpr(ValueExpr(1), ValueExpr(2), MathOperator.ADD)

    def test_reuse_after_error(self, parser):
        with pytest.raises(LexError):
            parser.parse_source("1.2.3")
        assert parser.parse_source("12.5").root == ValueExpr(12.5)


class TestLongInput:
    """Long left-folded chains must parse without hitting the recursion limit."""

    def test_long_sum_chain(self, parser):
        tree = parser.parse_source("+".join(["1"] * 5000))
        assert tree.root.operator == MathOperator.ADD
        assert tree.root.right == ValueExpr(1)

    def test_long_chain_with_debug_logging(self, parser, caplog):
        import logging
        with caplog.at_level(logging.DEBUG, logger="core.parser"):
            tree = parser.parse_source("*".join(["2"] * 3000))
        assert not tree.is_empty()

    def test_deep_trees_compare_and_print(self, parser):
        source = "-".join(["3"] * 2000)
        first = parser.parse_source(source).root
        second = parser.parse_source(source).root
        assert first == second
        assert hash(first) == hash(second)
        assert first != parser.parse_source(source + "-4").root
        assert str(first).count("-") == 1999
        assert repr(first).startswith("BinaryExpr(")
