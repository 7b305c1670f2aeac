# src/rendering/segment_writer.py
"""
SegmentWriter: scrittura del report testuale degli scenari.
Separato dalla logica di esecuzione.
"""
from datetime import datetime
from typing import List


class SegmentWriter:
    """
    Scrive su file lo stato degli store dopo ogni operazione.

    Responsabilita:
    - Formattare header e metadati
    - Scrivere operazioni e stati intermedi per ogni store
    - Scrivere stato finale ed esito di 'expect'
    - Stampare il riepilogo
    """

    def write_report(
        self,
        filepath: str,
        tracks: List,
        yaml_source: str = None
    ):
        """
        Scrive il report completo su file.

        Args:
            filepath: percorso file output
            tracks: lista di SegmentTrack
            yaml_source: path file YAML sorgente (per header)
        """
        with open(filepath, 'w', encoding='utf-8') as f:
            self._write_header(f, tracks, yaml_source)
            for track in tracks:
                self._write_track(f, track)
            self._write_footer(f, tracks)

        self._print_summary(filepath, tracks)

    # =========================================================================
    # SEZIONI PRINCIPALI
    # =========================================================================

    def _write_header(self, f, tracks, yaml_source):
        f.write("; " + "=" * 70 + "\n")
        f.write("; INTENSITY SEGMENTS REPORT\n")
        f.write(f"; Generato: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n")
        if yaml_source:
            f.write(f"; Sorgente: {yaml_source}\n")
        f.write(f"; Store: {len(tracks)}\n")
        f.write("; " + "=" * 70 + "\n\n")

    def _write_track(self, f, track):
        f.write(f"; --- {track.store_id} ---\n")
        for result in track.results:
            if result.ok:
                f.write(f"{str(result.operation):<40} {result.state}\n")
            else:
                f.write(
                    f"{str(result.operation):<40} ✗ "
                    f"{type(result.error).__name__}: {result.error}\n"
                )

        f.write(f"final: {track.final_state}\n")

        met = track.expectation_met
        if met is True:
            f.write("expect: OK\n")
        elif met is False:
            f.write(f"expect: FAIL (atteso {track.expect})\n")
        f.write("\n")

    def _write_footer(self, f, tracks):
        operations = sum(len(t.results) for t in tracks)
        rejected = sum(len(t.rejected) for t in tracks)
        failed = sum(1 for t in tracks if t.expectation_met is False)

        f.write("; " + "=" * 70 + "\n")
        f.write(f"; Operazioni: {operations} (rifiutate: {rejected})\n")
        f.write(f"; Expect falliti: {failed}\n")
        f.write("; " + "=" * 70 + "\n")

    def _print_summary(self, filepath, tracks):
        failed = sum(1 for t in tracks if t.expectation_met is False)
        print(f"\n✓ Report scritto: {filepath}")
        print(f"  Store: {len(tracks)}")
        if failed:
            print(f"  ✗ Expect falliti: {failed}")
