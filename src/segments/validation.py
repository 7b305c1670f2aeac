# validation.py
"""
Validazione degli argomenti di add() e set().

Regole:
- from/to/amount devono essere numeri reali (bool esclusi)
- from/to devono essere finiti
- from < to (intervallo semiaperto non vuoto)
- amount deve essere finito (NaN rifiutato come InvalidAmount)
"""

import math
import numbers
from typing import Any

from segments.errors import InvalidType, InvalidRange, InvalidAmount


def is_real_number(value: Any) -> bool:
    """True se value e' un numero reale (int, float, Fraction, numpy...)."""
    if isinstance(value, bool):
        return False
    return isinstance(value, numbers.Real)


def is_finite(value: numbers.Real) -> bool:
    """
    True se value e' finito. I razionali (int, Fraction) sono sempre finiti:
    math.isfinite li convertirebbe in float, con OverflowError oltre ~1e308.
    """
    if isinstance(value, numbers.Rational):
        return True
    return math.isfinite(value)


def validate_interval(from_point: Any, to_point: Any, amount: Any) -> None:
    """
    Valida gli argomenti di una mutazione.

    Args:
        from_point: inizio intervallo (incluso)
        to_point: fine intervallo (escluso)
        amount: intensita' da sommare o impostare

    Raises:
        InvalidType: argomento non numerico o punto non finito
        InvalidRange: from_point >= to_point
        InvalidAmount: amount non finito
    """
    for name, value in (('from', from_point), ('to', to_point), ('amount', amount)):
        if not is_real_number(value):
            raise InvalidType(
                f"Invalid input type: '{name}' deve essere un numero, "
                f"ricevuto {type(value).__name__} ({value!r})"
            )

    for name, value in (('from', from_point), ('to', to_point)):
        if not is_finite(value):
            raise InvalidType(
                f"Invalid input type: '{name}' deve essere finito, ricevuto {value!r}"
            )

    if from_point >= to_point:
        raise InvalidRange(
            f"Invalid input range: from ({from_point!r}) deve essere "
            f"minore di to ({to_point!r})"
        )

    if not is_finite(amount):
        raise InvalidAmount(
            f"Invalid input amount: amount deve essere finito, ricevuto {amount!r}"
        )
