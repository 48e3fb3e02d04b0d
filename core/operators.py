"""core/operators.py"""
import numpy as np

from core.errors import DivisionByZero
from core.token_system import MathOperator


class Operators:
    """所有算术操作符的静态方法集合（float64，IEEE-754语义，溢出得到inf而非异常）"""

    @staticmethod
    def add(operand1, operand2):
        """加法操作符"""
        with np.errstate(over='ignore', invalid='ignore'):
            return float(np.float64(operand1) + np.float64(operand2))

    @staticmethod
    def sub(operand1, operand2):
        """减法操作符"""
        with np.errstate(over='ignore', invalid='ignore'):
            return float(np.float64(operand1) - np.float64(operand2))

    @staticmethod
    def mul(operand1, operand2):
        """乘法操作符"""
        with np.errstate(over='ignore', invalid='ignore'):
            return float(np.float64(operand1) * np.float64(operand2))

    @staticmethod
    def div(operand1, operand2):
        """除法操作符：只对恰好为0.0的除数报错，其余按IEEE传播"""
        if operand2 == 0.0:
            raise DivisionByZero(f"Cannot divide {operand1!r} by 0")

        with np.errstate(over='ignore', divide='ignore', invalid='ignore'):
            return float(np.float64(operand1) / np.float64(operand2))

    @staticmethod
    def pow(operand1, operand2):
        """乘方：负数的分数次幂得到nan，溢出得到inf"""
        with np.errstate(all='ignore'):
            return float(np.power(np.float64(operand1), np.float64(operand2)))

    @staticmethod
    def neg(operand):
        return float(-np.float64(operand))


# 操作符分派表
BINARY_OPERATOR_FUNCTIONS = {
    MathOperator.ADD: Operators.add,
    MathOperator.SUBTRACT: Operators.sub,
    MathOperator.MULTIPLY: Operators.mul,
    MathOperator.DIVIDE: Operators.div,
    MathOperator.EXPONENTIATE: Operators.pow,
}
