# serialization.py
"""
Serializzazione della sequenza di breakpoint.

Formato testo: [[p0,i0],[p1,i1],...] senza spazi, store vuoto → [].
I numeri seguono la convenzione JSON di Python: int → 10, float → 10.0.
Altri Integral diventano int, altri Real (es. Fraction) diventano float;
un razionale oltre il range dei float viene scritto come intero piu' vicino.
"""

import json
import numbers
from typing import List, Tuple

from segments.breakpoints import Breakpoint


def _json_number(value):
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, numbers.Real):
        try:
            return float(value)
        except OverflowError:
            # Razionale oltre il range dei float: intero piu' vicino
            return round(value)
    raise TypeError(f"Valore non serializzabile: {value!r}")


def to_pairs(breakpoints: List[Breakpoint]) -> List[Tuple]:
    """Proiezione read-only: lista di tuple (point, intensity)."""
    return [(point, intensity) for point, intensity in breakpoints]


def format_breakpoints(breakpoints: List[Breakpoint]) -> str:
    """
    Examples:
        format_breakpoints([])                  → '[]'
        format_breakpoints([[10, 1], [30, 0]])  → '[[10,1],[30,0]]'
        format_breakpoints([[0.5, 1.5]])        → '[[0.5,1.5]]'
    """
    return json.dumps(
        [[point, intensity] for point, intensity in breakpoints],
        separators=(',', ':'),
        allow_nan=False,
        default=_json_number
    )
