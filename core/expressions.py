"""core/expressions.py - AST节点定义（Value / Unary / Binary）

左折叠会产生很深的树，这里的比较、哈希和打印都用显式栈遍历，不递归。
"""
from core.token_system import MathOperator, OPERATOR_SYMBOLS


def _flatten(node):
    """先序展开为节点签名列表；各节点元数固定，所以序列唯一确定树结构"""
    signature = []
    stack = [node]
    while stack:
        current = stack.pop()
        if isinstance(current, BinaryExpr):
            signature.append(('binary', current.operator))
            stack.append(current.right)
            stack.append(current.left)
        elif isinstance(current, UnaryExpr):
            signature.append(('unary', current.operator, current.operand.number))
        elif isinstance(current, ValueExpr):
            signature.append(('value', current.number))
        else:
            signature.append(('other', current))
    return signature


def _render(node, as_repr):
    """后序拼接字符串"""
    parts = []
    stack = [(node, False)]
    while stack:
        current, expanded = stack.pop()
        if isinstance(current, BinaryExpr):
            if not expanded:
                stack.append((current, True))
                stack.append((current.right, False))
                stack.append((current.left, False))
                continue
            right = parts.pop()
            left = parts.pop()
            if as_repr:
                parts.append(f"BinaryExpr({left}, {right}, {current.operator})")
            else:
                parts.append(f"({left} {OPERATOR_SYMBOLS.get(current.operator, '?')} {right})")
        elif isinstance(current, UnaryExpr):
            if as_repr:
                parts.append(f"UnaryExpr(ValueExpr({current.operand.number!r}), {current.operator})")
            else:
                parts.append(f"({OPERATOR_SYMBOLS.get(current.operator, '?')}{current.operand.number!r})")
        elif isinstance(current, ValueExpr):
            parts.append(f"ValueExpr({current.number!r})" if as_repr else repr(current.number))
        else:
            parts.append(repr(current))
    return parts.pop()


class Expr:
    """所有表达式节点的基类；节点构造后不可修改"""

    __slots__ = ()

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def _init(self, **fields):
        for name, value in fields.items():
            object.__setattr__(self, name, value)

    def __eq__(self, other):
        if not isinstance(other, Expr):
            return NotImplemented
        return _flatten(self) == _flatten(other)

    def __hash__(self):
        return hash(tuple(_flatten(self)))

    def __repr__(self):
        return _render(self, as_repr=True)

    def __str__(self):
        return _render(self, as_repr=False)


class ValueExpr(Expr):
    __slots__ = ('number',)

    def __init__(self, number):
        self._init(number=float(number))


class UnaryExpr(Expr):
    __slots__ = ('operand', 'operator')

    def __init__(self, operand, operator=MathOperator.NONE):
        if not isinstance(operand, ValueExpr):
            raise TypeError(f"UnaryExpr operand must be a ValueExpr, got {type(operand).__name__}")
        # 操作符合法性在求值时检查（EvalError），这里不拦截
        self._init(operand=operand, operator=operator)


class BinaryExpr(Expr):
    __slots__ = ('left', 'right', 'operator')

    def __init__(self, left, right, operator):
        self._init(left=left, right=right, operator=operator)


class ExpressionTree:
    """持有AST根节点；root为None表示空输入"""

    def __init__(self, root=None):
        self.root = root

    def is_empty(self):
        return self.root is None

    def __repr__(self):
        return f"ExpressionTree({self.root!r})"

    def __str__(self):
        return '' if self.root is None else str(self.root)
