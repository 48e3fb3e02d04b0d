"""AST表达式求值器 - 调用统一的Operators类"""
import logging

from config.config import EVALUATOR_CONFIG
from core.errors import EvalError
from core.expressions import ValueExpr, UnaryExpr, BinaryExpr
from core.operators import Operators, BINARY_OPERATOR_FUNCTIONS
from core.token_system import MathOperator

logger = logging.getLogger(__name__)


class ASTEvaluator:
    """后序遍历AST求值，先左后右，每个节点只求值一次"""

    @staticmethod
    def evaluate(tree):
        """
        Args:
            tree: ExpressionTree
        Returns:
            float；空树返回EVALUATOR_CONFIG["empty_result"]（默认0.0）
        """
        if tree.is_empty():
            return float(EVALUATOR_CONFIG["empty_result"])

        result = ASTEvaluator.evaluate_node(tree.root)
        logger.debug(f"Evaluated expression tree = {result!r}")
        return result

    @staticmethod
    def _apply_unary(node):
        value = node.operand.number
        if node.operator == MathOperator.NONE:
            return value
        if node.operator == MathOperator.SUBTRACT:
            return Operators.neg(value)
        raise EvalError(f"Invalid operator in UnaryExpr: {node.operator}")

    @staticmethod
    def evaluate_node(node):
        """
        用显式栈做后序遍历，左折叠产生的深树不会触发递归上限
        栈元素为 (节点, 子节点是否已求值)
        """
        values = []
        stack = [(node, False)]

        while stack:
            current, children_done = stack.pop()

            if isinstance(current, ValueExpr):
                values.append(current.number)
            elif isinstance(current, UnaryExpr):
                values.append(ASTEvaluator._apply_unary(current))
            elif isinstance(current, BinaryExpr):
                if not children_done:
                    # 左子树最后入栈，先出栈求值
                    stack.append((current, True))
                    stack.append((current.right, False))
                    stack.append((current.left, False))
                    continue

                right = values.pop()
                left = values.pop()
                op_method = BINARY_OPERATOR_FUNCTIONS.get(current.operator)
                if op_method is None:
                    raise EvalError(f"Invalid operator in BinaryExpr: {current.operator}")
                values.append(op_method(left, right))
            else:
                raise EvalError(f"Unknown expression node: {type(current).__name__}")

        return values.pop()


evaluate = ASTEvaluator.evaluate
