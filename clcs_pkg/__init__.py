"""clcs package: prefix-notation calculator with a running answer and input history."""

__all__ = [
    "config",
    "types",
    "logging_config",
    "numeric",
    "operators",
    "context",
    "parser",
    "evaluator",
    "history",
    "api",
    "cli",
]

# Public API exports

__api_exports__ = [
    "evaluate",
    "reset_answer",
    "reset_session",
    "validate_expression",
    "RESET_EXPRESSION",
    "USED_SYMBOLS",
]
