from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from . import config as _config
from .api import get_context, get_history, reset_session
from .config import VERSION
from .context import EvaluationContext
from .evaluator import RESET_EXPRESSION, evaluate
from .logging_config import get_logger, setup_logging
from .numeric import format_number
from .operators import NumpyRandomSource
from .parser import close_parentheses
from .types import CalculatorError, TraceResult

logger = get_logger("cli")

REPL_COMMANDS = {
    "help",
    "quit",
    "exit",
    "verbose",
    "precision",
    "reset",
    "history",
    "prev",
    "next",
    "ans",
}


def _health_check() -> int:
    """Run health check to verify dependencies and basic operations.

    Returns:
        Exit code (0 for success, non-zero for failures)
    """
    checks_passed = 0
    checks_failed = 0

    print("Running clcs health check...")
    print("-" * 50)

    try:
        import sympy as sp

        print(f"[OK] SymPy {sp.__version__} imported successfully")
        checks_passed += 1
    except ImportError as e:
        print(f"[FAIL] SymPy import failed: {e}")
        checks_failed += 1

    try:
        import numpy

        print(f"[OK] NumPy {numpy.__version__} imported successfully")
        checks_passed += 1
    except ImportError as e:
        print(f"[FAIL] NumPy import failed: {e}")
        checks_failed += 1

    context = EvaluationContext()
    try:
        result = evaluate("+ 1 2", context)
        if result == 3:
            print("[OK] Basic evaluation works")
            checks_passed += 1
        else:
            print(f"[FAIL] Basic evaluation failed: expected 3, got {result}")
            checks_failed += 1
    except CalculatorError as e:
        print(f"[FAIL] Evaluation check failed: {e}")
        checks_failed += 1

    try:
        result = evaluate(RESET_EXPRESSION, context)
        if result == context.answer.default:
            print("[OK] Answer reset works")
            checks_passed += 1
        else:
            print(f"[FAIL] Answer reset failed: got {result}")
            checks_failed += 1
    except CalculatorError as e:
        print(f"[FAIL] Answer reset failed: {e}")
        checks_failed += 1

    print("-" * 50)
    print(f"Results: {checks_passed} passed, {checks_failed} failed")

    if checks_failed > 0:
        print("\n[WARN] Some health checks failed. Core functionality may be impaired.")
        return 1

    print("\n[OK] All health checks passed!")
    return 0


def print_result(
    outcome: float | TraceResult, output_format: str = "human"
) -> None:
    """Print an evaluation outcome.

    Args:
        outcome: Bare result or TraceResult with steps
        output_format: "json" for JSON output, "human" for human-readable
    """
    if isinstance(outcome, TraceResult):
        result, steps = outcome.result, outcome.steps
    else:
        result, steps = outcome, None

    if output_format == "json":
        payload: dict[str, Any] = {"ok": True, "result": result}
        if steps is not None:
            payload["steps"] = steps
        print(json.dumps(payload))
        return
    for step in steps or []:
        print(f"  {step}")
    print(format_number(result))


def print_error(error: CalculatorError, output_format: str = "human") -> None:
    if output_format == "json":
        print(json.dumps({"ok": False, "error": error.message, "code": error.code}))
    else:
        print("Error:", error.message)


def print_help_text() -> None:
    """Print help text for REPL commands."""
    help_text = f"""clcs version {VERSION}

Expressions use prefix notation: the operator comes first.
  + 1 2            → 3
  * (+ 1 2) 4      → 12
  + 1 * 2 3        → 7   (an operator in operand position takes the rest)
  + 5              → ans + 5

Operators:
  +  add          -  subtract      *  multiply      /  divide
  ^  power        \\  integer divide                %  modulo
  r  random integer between two bounds (inclusive)
Division, integer division and modulo by zero give 0.

Constants: pi, e, ans (result of the last evaluation)

Commands:
  help                 Show this text
  verbose              Toggle printing of every reduction step
  precision [N|+|-]    Show or set the number of decimal digits
  reset                Clear history, answer and precision
  history              List accepted expressions
  prev / next [TEXT]   Recall an older / newer expression for editing;
                       TEXT is kept as the draft returned after the newest
  ans                  Show the current answer
  quit, exit           Leave
"""
    print(help_text)


def _prefill(text: str) -> None:
    """Pre-fill the next prompt with ``text`` where readline allows it."""
    try:
        import readline
    except ImportError:
        # readline not available on Windows
        print(text)
        return

    def hook() -> None:
        readline.insert_text(text)
        readline.redisplay()

    readline.set_startup_hook(hook)


def _clear_prefill() -> None:
    try:
        import readline
    except ImportError:
        return
    readline.set_startup_hook(None)


def handle_command(raw: str, state: dict[str, Any]) -> bool:
    """Run a REPL command. Returns False if the REPL should stop."""
    context = get_context()
    history = get_history()
    parts = raw.split()
    command, args = parts[0].lower(), parts[1:]

    if command in ("quit", "exit"):
        return False
    if command == "help":
        print_help_text()
    elif command == "verbose":
        state["verbose"] = not state["verbose"]
        print(f"Verbose mode {'on' if state['verbose'] else 'off'}")
    elif command == "precision":
        if args:
            arg = args[0]
            if arg == "+":
                context.precision.increase()
            elif arg == "-":
                context.precision.decrease()
            else:
                try:
                    context.precision.set(int(arg))
                except ValueError:
                    print(f"Error: Invalid precision ({arg})")
                    return True
        print(f"Precision: {context.precision.value}")
    elif command == "reset":
        reset_session()
        state["verbose"] = False
        print("Session reset.")
    elif command == "history":
        for i, entry in enumerate(history.entries):
            print(f"{i:>4}  {entry}")
    elif command in ("prev", "next"):
        # Text after the command is the unsubmitted draft
        draft = raw.strip()[len(parts[0]):].strip()
        step = history.previous if command == "prev" else history.next
        _prefill(step(draft))
    elif command == "ans":
        print(format_number(context.answer.value))
    return True


def evaluate_line(raw: str, state: dict[str, Any], output_format: str = "human") -> bool:
    """Evaluate one REPL line and record it in history on success.

    Returns True if the evaluation succeeded.
    """
    expression = close_parentheses(raw)
    try:
        outcome = evaluate(expression, get_context(), verbose=state["verbose"])
    except CalculatorError as e:
        logger.debug("Evaluation of %r failed: %s", expression, e.code)
        print_error(e, output_format)
        return False
    print_result(outcome, output_format)
    history = get_history()
    history.reset_cursor()
    history.add(expression)
    return True


def repl_loop(output_format: str = "human", verbose: bool = False) -> None:
    """Interactive REPL loop."""
    try:
        import readline  # noqa: F401
    except ImportError:
        # readline not available on Windows - that's fine
        pass

    print("clcs: prefix notation calculator. Type 'help' for commands, 'quit' to exit.")
    state: dict[str, Any] = {"verbose": verbose}

    while True:
        try:
            raw = input(">>> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nGoodbye.")
            break
        finally:
            _clear_prefill()
        if not raw:
            continue

        command = raw.split()[0].lower()
        if command in REPL_COMMANDS:
            if not handle_command(raw, state):
                print("Goodbye.")
                break
            continue

        try:
            evaluate_line(raw, state, output_format)
        except Exception as e:
            logger.error(f"Unexpected error in REPL: {e}", exc_info=True)
            print("An error occurred. Please check your input and try again.")


def main_entry(argv: list[str] | None = None) -> int:
    """
    Main entry point for the clcs CLI.

    Args:
        argv: Optional command-line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = argparse.ArgumentParser(prog="clcs")
    parser.add_argument(
        "-e",
        "--eval",
        type=str,
        help="Evaluate one expression and exit (non-interactive)",
        dest="eval_expr",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["json", "human"],
        default="human",
        help="Output format: json (machine-readable) or human (human-readable)",
    )
    parser.add_argument(
        "-p", "--precision", type=int, help="Set result precision (decimal digits)"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Print every reduction step"
    )
    parser.add_argument(
        "--seed", type=int, help="Seed the random operator for reproducible results"
    )
    parser.add_argument(
        "-v", "--version", action="store_true", help="Show program version"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=_config.LOG_LEVEL.upper(),
        help="Set logging level",
    )
    parser.add_argument("--log-file", type=str, help="Write logs to file")
    parser.add_argument(
        "--health-check",
        action="store_true",
        help="Run health check and verify dependencies",
    )
    args = parser.parse_args(argv)

    setup_logging(level=args.log_level, log_file=args.log_file)

    if args.version:
        print(VERSION)
        return 0
    if args.health_check:
        return _health_check()

    context = get_context()
    if args.precision is not None:
        context.precision.set(args.precision)
    if args.seed is not None:
        context.random_source = NumpyRandomSource(args.seed)

    if args.eval_expr is not None:
        expr = args.eval_expr.strip()
        # Remove ">>>" prompt if present
        if expr.startswith(">>>"):
            expr = expr[3:].strip()
        state = {"verbose": args.verbose}
        return 0 if evaluate_line(expr, state, args.format) else 1

    repl_loop(args.format, verbose=args.verbose)
    return 0


if __name__ == "__main__":
    sys.exit(main_entry())
