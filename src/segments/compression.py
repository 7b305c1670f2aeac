# compression.py
"""
Compressione e trimming della lista di breakpoint.

Dopo ogni mutazione la sequenza viene riportata in forma minima:
(a) merge dei breakpoint adiacenti con la stessa intensita'
(b) rimozione degli zeri iniziali
(c) un solo zero finale, e solo se preceduto da intensita' non nulle
"""

from typing import List

from segments.breakpoints import Breakpoint


def merge_equal_neighbours(breakpoints: List[Breakpoint]) -> List[Breakpoint]:
    """Scarta ogni breakpoint con la stessa intensita' del precedente."""
    merged = []
    for point, intensity in breakpoints:
        if merged and merged[-1][1] == intensity:
            continue
        merged.append([point, intensity])
    return merged


def trim_zero_ends(breakpoints: List[Breakpoint]) -> List[Breakpoint]:
    """
    Rimuove gli zeri iniziali e riduce gli zeri finali a uno solo.

    Returns:
        Lista vuota se tutti i breakpoint sono a zero.
    """
    start = 0
    while start < len(breakpoints) and breakpoints[start][1] == 0:
        start += 1

    if start >= len(breakpoints):
        return []

    # Ultimo indice non nullo
    end = len(breakpoints) - 1
    while end > start and breakpoints[end][1] == 0:
        end -= 1

    # Tieni il primo zero finale come marcatore di chiusura
    if end < len(breakpoints) - 1:
        end += 1

    return [list(bp) for bp in breakpoints[start:end + 1]]


def normalize_zeros(breakpoints: List[Breakpoint]) -> List[Breakpoint]:
    """
    Sostituisce -0.0 con 0.0 (punti e intensita'), mantenendo il tipo.
    """
    return [
        [abs(point) if point == 0 else point, abs(intensity) if intensity == 0 else intensity]
        for point, intensity in breakpoints
    ]


def compress_and_trim(breakpoints: List[Breakpoint]) -> List[Breakpoint]:
    """
    Forma minima della sequenza. Pura e idempotente:
    compress_and_trim(compress_and_trim(x)) == compress_and_trim(x)
    """
    return normalize_zeros(trim_zero_ends(merge_equal_neighbours(breakpoints)))


def find_invariant_violations(breakpoints: List[Breakpoint]) -> List[str]:
    """
    Controlla le invarianti I1-I3 (I4 e' implicita nella rappresentazione).

    Returns:
        List[str]: descrizioni delle violazioni, vuota se la sequenza e' valida
    """
    violations = []

    for i in range(1, len(breakpoints)):
        prev_point, prev_intensity = breakpoints[i - 1]
        point, intensity = breakpoints[i]
        if not prev_point < point:
            violations.append(
                f"I1: punti non crescenti a indice {i} ({prev_point!r} -> {point!r})"
            )
        if prev_intensity == intensity:
            violations.append(
                f"I2: intensita' uguale ({intensity!r}) tra indice {i - 1} e {i}"
            )

    if breakpoints:
        if breakpoints[0][1] == 0:
            violations.append("I3: breakpoint iniziale a intensita' zero")
        trailing_zeros = 0
        for _, intensity in reversed(breakpoints):
            if intensity != 0:
                break
            trailing_zeros += 1
        if trailing_zeros > 1:
            violations.append(f"I3: {trailing_zeros} breakpoint finali a zero")

    return violations
