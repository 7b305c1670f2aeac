# intensity_segments.py
"""
IntensitySegments: funzione a gradini su un dominio ordinato illimitato.

Rappresentazione: lista di breakpoint [[point, intensity], ...] ordinata
per point. L'intensita' vale il valore del breakpoint precedente fino al
successivo (escluso), e 0 prima del primo breakpoint.

Operazioni:
- add(from, to, amount): somma amount su [from, to)
- set(from, to, amount): impone amount su [from, to)
- render() / str(): breakpoint in forma minima

Ogni mutazione costruisce una sequenza candidata su una copia, la
comprime, la verifica e solo allora sostituisce quella corrente:
un errore non lascia mai lo store in uno stato parziale.

Non thread-safe: chi condivide uno store tra thread deve serializzare
le chiamate ad add/set con un proprio lock.
"""

from typing import List, Tuple, Iterator

from segments.breakpoints import Breakpoint, intensity_at, materialize
from segments.compression import compress_and_trim, find_invariant_violations
from segments.errors import InvalidAmount, SegmentError, SegmentInvariantError
from segments.serialization import format_breakpoints, to_pairs
from segments.validation import validate_interval, is_finite
from shared.logger import (
    SEGMENT_LOG_CONFIG,
    log_segment_operation,
    log_rejected_operation,
    log_invariant_violation,
)


class IntensitySegments:
    """
    Store di breakpoint con invarianti:
    - I1: punti strettamente crescenti
    - I2: nessuna coppia adiacente con la stessa intensita'
    - I3: nessuno zero iniziale, al piu' uno zero finale
    - I4: intensita' 0 prima del primo breakpoint

    Examples:
        segments = IntensitySegments()
        str(segments)               → '[]'
        segments.add(10, 30, 1)     → '[[10,1],[30,0]]'
        segments.add(20, 40, 1)     → '[[10,1],[20,2],[30,1],[40,0]]'
        segments.add(10, 40, -2)    → '[[10,-1],[20,0],[30,-1],[40,0]]'
    """

    def __init__(self, store_id: str = 'segments'):
        """
        Args:
            store_id: etichetta usata nei log
        """
        self.store_id = store_id
        self._breakpoints: List[Breakpoint] = []

    # =========================================================================
    # PUBLIC API - MUTAZIONI
    # =========================================================================

    def add(self, from_point, to_point, amount) -> None:
        """
        Somma amount all'intensita' su [from_point, to_point).

        Raises:
            InvalidType, InvalidRange, InvalidAmount
        """
        self._validate('add', from_point, to_point, amount)

        candidate = self._working_copy()

        # Valore dopo 'to' prima di qualsiasi modifica
        restore_value = intensity_at(candidate, to_point)

        from_idx = materialize(candidate, from_point)
        to_idx = materialize(candidate, to_point)

        for bp in candidate[from_idx:to_idx]:
            bp[1] = bp[1] + amount
        candidate[to_idx][1] = restore_value

        self._check_finite('add', candidate[from_idx:to_idx], from_point, to_point, amount)
        self._commit('add', candidate, from_point, to_point, amount)

    def set(self, from_point, to_point, amount) -> None:
        """
        Imposta l'intensita' a amount su [from_point, to_point).

        Fuori dall'intervallo la funzione non cambia: in to_point viene
        ripristinato il valore che la funzione aveva prima della chiamata.

        Raises:
            InvalidType, InvalidRange, InvalidAmount
        """
        self._validate('set', from_point, to_point, amount)

        candidate = self._working_copy()

        restore_value = intensity_at(candidate, to_point)

        from_idx = materialize(candidate, from_point)
        to_idx = materialize(candidate, to_point)

        # Breakpoint interni a (from, to): sostituiti dal nuovo plateau
        del candidate[from_idx + 1:to_idx]
        candidate[from_idx][1] = amount
        candidate[from_idx + 1][1] = restore_value

        self._commit('set', candidate, from_point, to_point, amount)

    def clear(self) -> None:
        """Riporta lo store alla funzione identicamente nulla."""
        self._breakpoints = []

    # =========================================================================
    # PUBLIC API - LETTURA
    # =========================================================================

    def intensity_at(self, point):
        """Intensita' in point (0 prima del primo breakpoint)."""
        return intensity_at(self._breakpoints, point)

    def render(self) -> List[Tuple]:
        """Breakpoint come lista di tuple (point, intensity), in ordine."""
        return to_pairs(self._breakpoints)

    def to_string(self) -> str:
        """Forma testuale: '[[p0,i0],[p1,i1],...]', store vuoto → '[]'."""
        return format_breakpoints(self._breakpoints)

    @property
    def breakpoints(self) -> List[Breakpoint]:
        """Copia dei breakpoint [[point, intensity], ...]."""
        return [list(bp) for bp in self._breakpoints]

    @property
    def is_empty(self) -> bool:
        return not self._breakpoints

    def copy(self) -> 'IntensitySegments':
        clone = IntensitySegments(store_id=self.store_id)
        clone._breakpoints = self.breakpoints
        return clone

    def __len__(self) -> int:
        return len(self._breakpoints)

    def __iter__(self) -> Iterator[Tuple]:
        return iter(self.render())

    def __eq__(self, other) -> bool:
        if not isinstance(other, IntensitySegments):
            return NotImplemented
        return self._breakpoints == other._breakpoints

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self):
        return f"IntensitySegments(store_id={self.store_id!r}, breakpoints={self.to_string()})"

    # =========================================================================
    # INTERNAL HELPERS
    # =========================================================================

    def _working_copy(self) -> List[Breakpoint]:
        return [list(bp) for bp in self._breakpoints]

    def _validate(self, op, from_point, to_point, amount):
        try:
            validate_interval(from_point, to_point, amount)
        except SegmentError as e:
            log_rejected_operation(self.store_id, op, from_point, to_point, amount, e)
            raise

    def _check_finite(self, op, bumped, from_point, to_point, amount):
        """Rifiuta intensita' non finite prodotte dall'aritmetica (overflow)."""
        for point, intensity in bumped:
            if not is_finite(intensity):
                error = InvalidAmount(
                    f"Invalid input amount: l'intensita' in {point!r} "
                    f"diventerebbe {intensity!r}"
                )
                log_rejected_operation(self.store_id, op, from_point, to_point, amount, error)
                raise error

    def _commit(self, op, candidate, from_point, to_point, amount):
        """Comprime, verifica le invarianti e sostituisce la sequenza."""
        compressed = compress_and_trim(candidate)

        violations = find_invariant_violations(compressed)
        if violations:
            if SEGMENT_LOG_CONFIG.get('validation_mode', 'strict') == 'strict':
                raise SegmentInvariantError(violations)
            log_invariant_violation(self.store_id, violations)

        before = format_breakpoints(self._breakpoints)
        self._breakpoints = compressed

        log_segment_operation(
            self.store_id, op, from_point, to_point, amount,
            before=before,
            after=format_breakpoints(compressed)
        )
