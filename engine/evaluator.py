import logging
from collections import OrderedDict
from typing import Iterable, Optional

import numpy as np
import pandas as pd

from config.config import EVALUATOR_CONFIG
from core import Parser, ASTEvaluator, ExpressionError

logger = logging.getLogger(__name__)


class ExpressionEvaluator:

    def __init__(self, cache_size=None, strict=None):
        """
        Args:
            cache_size: 结果缓存大小，None表示使用EVALUATOR_CONFIG；0表示关闭缓存
            strict: 传给Parser，残留Token是否报错
        """
        self.parser = Parser(strict=strict)
        self.ast_evaluator = ASTEvaluator
        self.cache_size = EVALUATOR_CONFIG["cache_size"] if cache_size is None else cache_size
        # 表达式文本 -> 结果；尾部为最近使用
        self._result_cache = OrderedDict()
        self._cache_hits = 0
        self._cache_misses = 0

    def _cache_lookup(self, expression):
        """命中时刷新使用顺序并返回结果，未命中返回None"""
        result = self._result_cache.get(expression)
        if result is None:
            self._cache_misses += 1
            return None
        self._result_cache.move_to_end(expression)
        self._cache_hits += 1
        return result

    def _cache_store(self, expression, result):
        if self.cache_size <= 0:
            return
        self._result_cache[expression] = result
        if len(self._result_cache) > self.cache_size:
            evicted, _ = self._result_cache.popitem(last=False)
            logger.debug(f"Evicted cached expression: {evicted[:50]}")

    def clear_cache(self):
        logger.info(f"Dropping {len(self._result_cache)} cached results "
                    f"(hits={self._cache_hits}, misses={self._cache_misses})")
        self._result_cache.clear()
        self._cache_hits = self._cache_misses = 0

    @property
    def cache_stats(self):
        return {
            'hits': self._cache_hits,
            'misses': self._cache_misses,
            'size': len(self._result_cache),
        }

    def parse(self, expression: str):
        """只解析不求值，返回ExpressionTree"""
        return self.parser.parse_source(expression)

    def evaluate(self, expression: str) -> float:
        """
        解析并求值一个表达式
        Args:
            expression: 表达式文本
        Returns:
            float结果；错误（ExpressionError子类）原样抛出，不进入缓存
        """
        cached = self._cache_lookup(expression)
        if cached is not None:
            return cached

        result = self.ast_evaluator.evaluate(self.parse(expression))
        self._cache_store(expression, result)
        return result
    def evaluate_many(self, expressions: Iterable[str], errors: str = "raise",
                      index: Optional[Iterable] = None) -> pd.DataFrame:
        """
        批量求值
        Args:
            expressions: 表达式文本序列（list或Series）
            errors: "raise"时遇到第一个错误即抛出；"coerce"时记录错误信息，结果为NaN
            index: 结果DataFrame的索引；expressions为Series时默认沿用其索引
        Returns:
            DataFrame，列为 expression / result / error
        """
        if errors not in ("raise", "coerce"):
            raise ValueError(f"errors must be 'raise' or 'coerce', got {errors!r}")

        if isinstance(expressions, pd.Series):
            if index is None:
                index = expressions.index
            expressions = expressions.tolist()
        else:
            expressions = list(expressions)

        results = []
        messages = []
        for expression in expressions:
            try:
                results.append(self.evaluate(expression))
                messages.append(None)
            except ExpressionError as e:
                if errors == "raise":
                    raise
                logger.warning(f"Error evaluating expression '{expression[:50]}': {type(e).__name__}: {e}")
                results.append(np.nan)
                messages.append(f"{type(e).__name__}: {e}")

        frame = pd.DataFrame({
            'expression': pd.Series(expressions, dtype=object),
            'result': pd.Series(results, dtype=np.float64),
            'error': pd.Series(messages, dtype=object),
        })
        if index is not None:
            frame.index = pd.Index(index)

        failed = frame['error'].notna().sum()
        if failed:
            logger.info(f"Evaluated {len(frame)} expressions, {failed} failed")
        return frame
