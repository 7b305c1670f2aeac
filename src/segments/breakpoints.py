# breakpoints.py
"""
Primitive di lookup e inserimento sulla lista di breakpoint.

Una lista di breakpoint e' una List[List] di coppie [point, intensity]
ordinata per point strettamente crescente. Tutte le ricerche sono
binarie (bisect) sulla chiave point.
"""

from bisect import bisect_left, bisect_right
from typing import List

Breakpoint = List  # [point, intensity]


def _point(bp: Breakpoint):
    return bp[0]


def index_at_or_before(breakpoints: List[Breakpoint], point) -> int:
    """
    Indice dell'ultimo breakpoint con bp.point <= point, -1 se nessuno.
    """
    return bisect_right(breakpoints, point, key=_point) - 1


def find_index(breakpoints: List[Breakpoint], point) -> int:
    """
    Indice del breakpoint esattamente in point, -1 se assente.
    """
    idx = bisect_left(breakpoints, point, key=_point)
    if idx < len(breakpoints) and breakpoints[idx][0] == point:
        return idx
    return -1


def intensity_at(breakpoints: List[Breakpoint], point):
    """
    Valore della funzione a gradini in point.

    Eredita dal breakpoint piu' vicino a sinistra (incluso point stesso),
    0 se point precede tutti i breakpoint.

    Examples:
        bps = [[10, 1], [30, 0]]
        intensity_at(bps, 5)  → 0
        intensity_at(bps, 10) → 1
        intensity_at(bps, 29) → 1
        intensity_at(bps, 30) → 0
    """
    idx = index_at_or_before(breakpoints, point)
    if idx < 0:
        return 0
    return breakpoints[idx][1]


def materialize(breakpoints: List[Breakpoint], point) -> int:
    """
    Garantisce un breakpoint esattamente in point (modifica in place).

    Se assente inserisce [point, intensity_at(point)]: la funzione non
    cambia valore in nessun punto, cambia solo la rappresentazione.

    Returns:
        int: indice del breakpoint in point
    """
    idx = bisect_left(breakpoints, point, key=_point)
    if idx < len(breakpoints) and breakpoints[idx][0] == point:
        return idx

    inherited = breakpoints[idx - 1][1] if idx > 0 else 0
    breakpoints.insert(idx, [point, inherited])
    return idx
