"""主程序入口 - 交互式计算、单表达式求值和批量文件求值"""
import argparse
import logging
import sys

import pandas as pd

from config.config import REPL_CONFIG, LOGGING_CONFIG, validate_config
from core import ExpressionError
from engine import ExpressionEvaluator

logger = logging.getLogger(__name__)


def format_result(value):
    return REPL_CONFIG["result_format"].format(value)


def run_repl(evaluator, stdin=None, stdout=None):
    """
    交互循环：每行一个表达式，打印结果或错误信息后继续；
    读到退出命令或输入结束时返回
    Returns:
        成功求值的行数
    """
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    exit_command = REPL_CONFIG["exit_command"]
    evaluated = 0

    while True:
        print(REPL_CONFIG["prompt"], file=stdout, flush=True)
        line = stdin.readline()
        if not line:
            break

        line = line.strip()
        if line == exit_command:
            break

        try:
            result = evaluator.evaluate(line)
        except ExpressionError as e:
            # 每行相互独立：打印错误并继续
            print(f"Error: {e}", file=stdout)
            continue

        print(format_result(result), file=stdout)
        evaluated += 1

    logger.debug(f"REPL finished after {evaluated} expressions")
    return evaluated


def run_single(evaluator, expression, stdout=None, stderr=None):
    """求值单个表达式，返回进程退出码"""
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    try:
        result = evaluator.evaluate(expression)
    except ExpressionError as e:
        print(e, file=stderr)
        return 1

    print(format_result(result), file=stdout)
    return 0


def run_batch(evaluator, input_file, output_path=None, stdout=None):
    """逐行求值文件中的表达式（忽略空行），返回进程退出码"""
    stdout = stdout or sys.stdout

    with open(input_file, 'r', encoding='utf-8') as f:
        expressions = [line.strip() for line in f if line.strip()]
    logger.info(f"Loaded {len(expressions)} expressions from {input_file}")

    results = evaluator.evaluate_many(expressions, errors="coerce")

    with pd.option_context('display.max_rows', None, 'display.width', 120):
        print(results.to_string(index=False), file=stdout)

    if output_path:
        logger.info(f"Saving results to {output_path}")
        results.to_csv(output_path, index=False)

    return 1 if results['error'].notna().any() else 0


def build_arg_parser():
    parser = argparse.ArgumentParser(description="Arithmetic expression evaluator")

    parser.add_argument(
        "--expression",
        type=str,
        default=None,
        help="Evaluate a single expression and exit"
    )
    parser.add_argument(
        "--input_file",
        type=str,
        default=None,
        help="Evaluate every non-blank line of a text file"
    )
    parser.add_argument(
        "--output_path",
        type=str,
        default=None,
        help="Save batch results as CSV (with --input_file)"
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Treat trailing unconsumed input as a syntax error"
    )
    parser.add_argument(
        "--log_level",
        type=str,
        default=LOGGING_CONFIG["level"],
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: %(default)s)"
    )
    return parser


def main(args):
    # 设置日志
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format=LOGGING_CONFIG["format"]
    )
    validate_config()

    evaluator = ExpressionEvaluator(strict=True if args.strict else None)

    if args.expression is not None:
        return run_single(evaluator, args.expression)

    if args.input_file:
        return run_batch(evaluator, args.input_file, args.output_path)

    run_repl(evaluator)
    return 0


def cli():
    return main(build_arg_parser().parse_args())


if __name__ == "__main__":
    sys.exit(cli())
