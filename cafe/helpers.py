"""small input / output helpers shared by the workflows"""

import math

from termcolor import cprint, colored

from cafe.errors import ValidationError


def safe_int(value: str, minimum: int | None = None):
    """return int value or none if invalid / below minimum"""
    try:
        v = int(value)
        if minimum is not None and v < minimum:
            return None
        return v
    except ValueError:
        return None


def parse_price(value: str) -> float:
    """parse a non-negative price or raise ValidationError"""
    try:
        p = float(value)
    except ValueError:
        raise ValidationError(f"invalid price: {value!r}") from None
    if not math.isfinite(p) or p < 0:
        raise ValidationError(f"invalid price: {value!r}")
    return round(p, 2)


def require_order_id(value: str) -> int:
    """parse an order id or raise ValidationError"""
    oid = safe_int(value.strip(), minimum=1)
    if oid is None:
        raise ValidationError(f"invalid order id: {value!r}")
    return oid


def color_money(amount: float) -> str:
    """format amount as green money string"""
    return colored(f"${amount:.2f}", "green")


def ask(prompt: str) -> str:
    """prompt in magenta and return the typed line"""
    return input(colored(prompt, "magenta"))


def print_table(header: list[str], rows: list[list[str]]) -> int:
    """print header + rows tab separated, return row count"""
    if rows:
        print("\t".join(header))
    for row in rows:
        print("\t".join(row))
    return len(rows)


def read_choice() -> int:
    """keep asking until an integer is entered"""
    while True:
        choice = safe_int(input(colored("please make your choice: ", "blue")).strip())
        if choice is not None:
            return choice
        cprint("your input is invalid!", "red")
