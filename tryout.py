from calculator.parser import ParserError, parse
from calculator.tokenizer import is_empty, tokenize
from calculator.utils import format_number

for code in [
    "5",
    "-1",
    "1 + 1",
    "8 - 3 - 2",
    "2 + 3 * 4",
    "(2 + 3) * 4",
    "2(3+4)",
    "(2)(3)",
    "--3",
    "-3^2",
    "2^3^2",
    ".5 + 5.",
    "1/0",
    "(-8)^(1/3)",
    "1..2",
    "(1 + 2",
    "2 * * 3",
    "   #",
]:
    print("=" * 10)
    print(f"code: {code!r}")
    tokens = tokenize(code)
    print(f"tokens: {' '.join(str(t) for t in tokens)}")
    if is_empty(tokens):
        print("nothing to evaluate")
        continue

    try:
        result = parse(tokens)
    except ParserError as e:
        print(e)
        continue
    print(f"result: {format_number(result)}")
