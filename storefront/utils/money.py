from decimal import Decimal, ROUND_HALF_UP
from typing import Union

CENT = Decimal("0.01")


def to_cents(value: Union[Decimal, float, int, str]) -> Decimal:
    """Round an amount half-up to two decimal places."""
    if not isinstance(value, Decimal):
        # str() keeps floats like 99.99 from turning into 99.9899999...
        value = Decimal(str(value))
    return value.quantize(CENT, rounding=ROUND_HALF_UP)
