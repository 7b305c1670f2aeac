# errors.py
"""
Eccezioni del sistema IntensitySegments.

Tutti gli errori di input sono errori del chiamante: vengono sollevati
dalla validazione PRIMA di qualsiasi modifica allo store.
"""


class SegmentError(ValueError):
    """Base class per tutti gli errori dello store."""
    pass


class InvalidType(SegmentError, TypeError):
    """Argomento non numerico, oppure punto non finito (NaN, inf)."""
    pass


class InvalidRange(SegmentError):
    """Intervallo vuoto o invertito: from >= to."""
    pass


class InvalidAmount(SegmentError):
    """Intensita' non finita (inf, -inf, NaN), in input o come risultato."""
    pass


class SegmentInvariantError(SegmentError):
    """La sequenza di breakpoint viola I1-I4 dopo una mutazione."""

    def __init__(self, violations):
        self.violations = list(violations)
        super().__init__(
            "Invarianti violate: " + "; ".join(self.violations)
        )
