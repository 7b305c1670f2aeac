# src/engine/scenario_runner.py
"""
ScenarioRunner: esegue sequenze di add/set descritte in YAML.

Responsabilita' separate:
- ScenarioRunner: caricamento YAML, solo/mute, esecuzione operazioni
- SegmentWriter: scrittura report testuale
- SegmentVisualizer: grafici a gradini

Formato scenario:

    settings:
      on_error: stop        # stop | skip
      log_operations: true
    stores:
      - store_id: demo
        operations:
          - [add, 10, 30, 1]
          - {op: set, from: 20, to: 40, amount: "(2 * 3)"}
        expect: "[[10,1],[20,6],[40,0]]"
"""
import os
import yaml
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional

from segments.errors import SegmentError
from segments.intensity_segments import IntensitySegments
from rendering.segment_writer import SegmentWriter
from shared.utils import get_nested, eval_math_expressions

SUPPORTED_OPERATIONS = ('add', 'set')
LITERAL_KEYS = ('store_id', 'expect')
ON_ERROR_MODES = ('stop', 'skip')


@dataclass
class Operation:
    """Singola chiamata add/set letta dallo scenario."""
    op: str
    from_point: Any
    to_point: Any
    amount: Any

    def __str__(self):
        return f"{self.op}({self.from_point!r}, {self.to_point!r}, {self.amount!r})"


@dataclass
class OperationResult:
    """Esito di una Operation: stato serializzato o errore."""
    operation: Operation
    state: Optional[str] = None
    error: Optional[SegmentError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class SegmentTrack:
    """
    Store costruito da una voce 'stores' dello scenario.

    Attributes:
        store_id: identificativo dello store
        segments: IntensitySegments risultante
        results: esito di ogni operazione, in ordine
        expect: serializzazione attesa (opzionale)
    """
    store_id: str
    segments: IntensitySegments
    results: List[OperationResult] = field(default_factory=list)
    expect: Optional[str] = None

    @property
    def final_state(self) -> str:
        return self.segments.to_string()

    @property
    def expectation_met(self) -> Optional[bool]:
        """None se lo scenario non dichiara 'expect'."""
        if self.expect is None:
            return None
        return self.final_state == self.expect

    @property
    def rejected(self) -> List[OperationResult]:
        return [r for r in self.results if not r.ok]


class ScenarioRunner:
    """
    Orchestratore degli scenari.

    Public API:
    - load_yaml() -> dict
    - create_stores() -> List[SegmentTrack]
    - write_results(output_path) -> None
    - write_results_per_store(output_dir, base_name) -> List[str]

    Attributes:
        yaml_path: path file scenario YAML
        data: dati YAML preprocessati
        tracks: SegmentTrack creati
        writer: scrittore del report
    """

    def __init__(self, yaml_path: str):
        self.yaml_path = yaml_path
        self.data: Dict[str, Any] = None
        self.tracks: List[SegmentTrack] = []
        self.writer = SegmentWriter()

    # =========================================================================
    # PUBLIC API
    # =========================================================================

    def load_yaml(self) -> dict:
        """
        Carica e preprocessa il file YAML.

        Valuta espressioni matematiche nelle stringhe (e.g., "(pi)", "(10/2)").

        Raises:
            FileNotFoundError: se il file YAML non esiste
            yaml.YAMLError: se il file YAML e' malformato
            ValueError: se manca la sezione 'stores'
        """
        with open(self.yaml_path, 'r') as f:
            raw_data = yaml.safe_load(f)

        if not isinstance(raw_data, dict) or 'stores' not in raw_data:
            raise ValueError(
                f"Scenario non valido: '{self.yaml_path}' deve contenere la chiave 'stores'"
            )

        self.data = eval_math_expressions(raw_data, skip_keys=LITERAL_KEYS)
        return self.data

    def create_stores(self) -> List[SegmentTrack]:
        """
        Crea gli store ed esegue le operazioni di ciascuno.

        Raises:
            ValueError: se load_yaml() non e' stato chiamato
            SegmentError: alla prima operazione rifiutata con on_error=stop
        """
        if self.data is None:
            raise ValueError("Devi prima caricare il YAML con load_yaml()")

        on_error = get_nested(self.data, 'settings.on_error', 'stop')
        if on_error not in ON_ERROR_MODES:
            raise ValueError(
                f"settings.on_error non valido: {on_error!r}. "
                f"Valori ammessi: {', '.join(ON_ERROR_MODES)}"
            )

        store_data_list = self._filter_solo_mute(self.data.get('stores') or [])

        print(f"Creazione di {len(store_data_list)} store...")
        for index, store_data in enumerate(store_data_list):
            track = self._run_store(store_data, index, on_error)
            self.tracks.append(track)
            print(f"  → Store '{track.store_id}': {track.final_state}")

        return self.tracks

    def write_results(self, output_path: str = 'segments.txt'):
        """Scrive il report completo di tutti gli store."""
        self.writer.write_report(
            filepath=output_path,
            tracks=self.tracks,
            yaml_source=self.yaml_path
        )

    def write_results_per_store(
        self,
        output_dir: str = '.',
        base_name: str = None
    ) -> List[str]:
        """
        Scrive un report separato per ogni store.

        Nome file: {base_name}_{store_id}.txt oppure {store_id}.txt

        Returns:
            Lista dei path file generati
        """
        os.makedirs(output_dir, exist_ok=True)
        generated = []

        for track in self.tracks:
            filename = (
                f"{base_name}_{track.store_id}.txt"
                if base_name
                else f"{track.store_id}.txt"
            )
            filepath = os.path.join(output_dir, filename)

            self.writer.write_report(
                filepath=filepath,
                tracks=[track],
                yaml_source=self.yaml_path
            )
            generated.append(filepath)

        return generated

    @property
    def failed_tracks(self) -> List[SegmentTrack]:
        """Store con expect dichiarato e non soddisfatto."""
        return [t for t in self.tracks if t.expectation_met is False]

    # =========================================================================
    # ESECUZIONE STORE
    # =========================================================================

    def _run_store(self, store_data: dict, index: int, on_error: str) -> SegmentTrack:
        store_id = str(store_data.get('store_id', f'store_{index}'))
        track = SegmentTrack(
            store_id=store_id,
            segments=IntensitySegments(store_id=store_id),
            expect=store_data.get('expect')
        )

        for raw_op in store_data.get('operations') or []:
            operation = self.parse_operation(raw_op, store_id)
            try:
                self._apply(track.segments, operation)
            except SegmentError as e:
                track.results.append(OperationResult(operation, error=e))
                if on_error == 'stop':
                    raise
                print(f"  ✗ [{store_id}] {operation}: {e}")
                continue
            track.results.append(
                OperationResult(operation, state=track.segments.to_string())
            )

        return track

    @staticmethod
    def parse_operation(raw_op, store_id: str = 'unknown') -> Operation:
        """
        Converte una voce YAML in Operation.

        Formati accettati:
            [add, 10, 30, 1]
            {op: set, from: 10, to: 30, amount: 1}

        Raises:
            ValueError: formato non riconosciuto o operazione sconosciuta
        """
        if isinstance(raw_op, list) and len(raw_op) == 4:
            op, from_point, to_point, amount = raw_op
        elif isinstance(raw_op, dict):
            missing = [k for k in ('op', 'from', 'to', 'amount') if k not in raw_op]
            if missing:
                raise ValueError(
                    f"[{store_id}] Operazione {raw_op!r}: chiavi mancanti {missing}"
                )
            op = raw_op['op']
            from_point = raw_op['from']
            to_point = raw_op['to']
            amount = raw_op['amount']
        else:
            raise ValueError(
                f"[{store_id}] Formato operazione non valido: {raw_op!r}. "
                "Deve essere [op, from, to, amount] o un dict."
            )

        if op not in SUPPORTED_OPERATIONS:
            raise ValueError(
                f"[{store_id}] Operazione sconosciuta: {op!r}. "
                f"Valori ammessi: {', '.join(SUPPORTED_OPERATIONS)}"
            )

        return Operation(op, from_point, to_point, amount)

    @staticmethod
    def _apply(segments: IntensitySegments, operation: Operation):
        if operation.op == 'add':
            segments.add(operation.from_point, operation.to_point, operation.amount)
        else:
            segments.set(operation.from_point, operation.to_point, operation.amount)

    def _filter_solo_mute(self, store_data_list: list) -> list:
        """
        Applica logica solo/mute agli store.

        Regole:
        - Se almeno uno store ha 'solo' → prendi SOLO quelli con 'solo'
        - Altrimenti → prendi tutti TRANNE quelli con 'mute'
        """
        solo_mode = any('solo' in s for s in store_data_list)

        if solo_mode:
            filtered = [s for s in store_data_list if 'solo' in s]
            print(
                f"⚡ SOLO MODE: esecuzione di {len(filtered)} store "
                f"(su {len(store_data_list)} totali)"
            )
        else:
            filtered = [s for s in store_data_list if 'mute' not in s]
            muted_count = len(store_data_list) - len(filtered)

            if muted_count > 0:
                print(f"🔇 {muted_count} store muted")

        return filtered
