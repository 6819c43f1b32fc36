import argparse
import logging
from typing import Optional

from calculator.parser import ParserError, parse
from calculator.tokenizer import Token, is_empty, tokenize, untokenize
from calculator.utils import format_number

__version__ = "0.1.0"

logger = logging.getLogger(__name__)

CONTINUE_PROMPT = "Continue? [Y/n] "


def build_arg_parser() -> argparse.ArgumentParser:
    arg_parser = argparse.ArgumentParser(prog="calc", description="Interactive arithmetic calculator")
    arg_parser.add_argument("--prompt", default="> ", help="input prompt (default: %(default)r)")
    arg_parser.add_argument(
        "--no-confirm",
        dest="confirm",
        action="store_false",
        help=f"don't ask {CONTINUE_PROMPT.strip()!r} after each result",
    )
    arg_parser.add_argument(
        "-e",
        "--expression",
        dest="expressions",
        action="append",
        metavar="EXPR",
        help="evaluate EXPR and exit instead of starting the REPL (may be repeated)",
    )
    arg_parser.add_argument("--debug", action="store_true", help="log tokens and results")
    arg_parser.add_argument("--version", action="version", version=f"calc {__version__}")
    return arg_parser


def print_result(tokens: list[Token]) -> bool:
    logger.debug("Evaluating %s", untokenize(tokens))
    try:
        result = parse(tokens)
    except ParserError as e:
        print(e)
        return False
    print(f"Result: {format_number(result)}")
    return True


def ask_to_continue() -> bool:
    try:
        choice = input(CONTINUE_PROMPT)
    except (EOFError, KeyboardInterrupt):
        print()
        return False
    return choice.strip().lower() != "n"


def run_repl(prompt: str, confirm: bool) -> int:
    while True:
        try:
            code = input(prompt)
        except (EOFError, KeyboardInterrupt):
            print()
            return 0

        tokens = tokenize(code)
        if is_empty(tokens):
            continue

        print_result(tokens)
        if confirm and not ask_to_continue():
            return 0


def run_expressions(expressions: list[str]) -> int:
    failed = 0
    for code in expressions:
        tokens = tokenize(code)
        if is_empty(tokens):
            continue
        if not print_result(tokens):
            failed += 1
    return 1 if failed else 0


def main(argv: Optional[list[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if args.expressions:
        return run_expressions(args.expressions)
    return run_repl(prompt=args.prompt, confirm=args.confirm)
