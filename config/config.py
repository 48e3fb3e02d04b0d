"""配置文件"""

# 解析器参数
PARSER_CONFIG = {
    "strict_trailing": False,  # True时Term之后残留的Token视为语法错误
}

# 求值参数
EVALUATOR_CONFIG = {
    "cache_size": 1000,   # 结果缓存条目上限（LRU）
    "empty_result": 0.0,  # 空输入的占位结果
}

# 交互循环参数
REPL_CONFIG = {
    "prompt": "Enter an expression:",
    "exit_command": "end",
    "result_format": "{:.10g}",
}

# 日志配置
LOGGING_CONFIG = {
    "level": "INFO",
    "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
}


# 验证配置
def validate_config():
    """验证配置的合理性"""
    assert isinstance(PARSER_CONFIG["strict_trailing"], bool), "strict_trailing必须是bool"
    assert EVALUATOR_CONFIG["cache_size"] >= 0, "cache_size不能为负"
    assert isinstance(EVALUATOR_CONFIG["empty_result"], float), "empty_result必须是float"
    assert REPL_CONFIG["exit_command"].strip(), "exit_command不能为空"
    assert "{" in REPL_CONFIG["result_format"], "result_format必须是format模板"
    assert LOGGING_CONFIG["level"] in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
    return True
