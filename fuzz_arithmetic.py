import math
import random
import re
import string
import warnings

from calculator.parser import evaluate
from calculator.tokenizer import tokenize, untokenize

warnings.filterwarnings("ignore")


def eval_py(code: str) -> float | str:
    try:
        # implicit multiplication made explicit, the rest is valid Python
        return eval(untokenize(tokenize(code)))
    except Exception as e:
        return str(e)


def eval_my(code: str) -> float | str | None:
    try:
        return evaluate(code)
    except Exception as e:
        return str(e)


if __name__ == "__main__":
    alphabet = string.digits + ".()+-*/ "

    def generate(length: int) -> str:
        return "".join(random.choices(alphabet, k=length))

    while True:
        code = generate(10)

        if re.findall(r"\*\s*\*", code):
            continue  # avoid generating powers (10**4)

        if re.findall(r"/\s*/", code):
            continue  # avoid generating int devision (10 // 3)

        res_py = eval_py(code)
        res_my = eval_my(code)
        if res_my is None:
            continue  # nothing to evaluate
        if isinstance(res_py, (int, float)) and isinstance(res_my, float):
            if math.isclose(float(res_py), res_my) or (math.isnan(res_py) and math.isnan(res_my)):
                continue
        if isinstance(res_py, str) and isinstance(res_my, str):
            continue
        if isinstance(res_py, str) and res_py.startswith("leading zeros in decimal integer literals are not permitted"):
            continue
        if isinstance(res_py, str) and "division by zero" in res_py and isinstance(res_my, float):
            continue  # IEEE division here, ZeroDivisionError in Python
        print(f"{code!r}\npy: {res_py}\nmy: {res_my}\n\n")
