# =============================================================================
# SEGMENT VISUALIZER - Grafico a gradini degli IntensitySegments
# =============================================================================

import os
import matplotlib.pyplot as plt
from matplotlib.backends.backend_pdf import PdfPages
import numpy as np


class SegmentVisualizer:
    """
    Visualizzatore delle funzioni a gradini.

    Una pagina per store:
    - Asse X: dominio (point), con margine prima del primo e dopo l'ultimo breakpoint
    - Asse Y: intensita'
    - Linea: drawstyle='steps-post', coerente con la semantica [from, to)
    - Breakpoint annotati con il valore
    """

    def __init__(self, tracks, config=None):
        """
        Args:
            tracks: lista di SegmentTrack (o oggetti con store_id e segments)
            config: dict di configurazione (opzionale)
        """
        self.tracks = tracks

        default_config = {
            'figure_size': (11.69, 8.27),    # A4 landscape in pollici
            'padding_ratio': 0.1,            # margine X rispetto all'estensione
            'empty_domain': (0.0, 1.0),      # asse X per store vuoti
            'line_color': '#377eb8',
            'line_width': 1.5,
            'fill_alpha': 0.15,
            'zero_line_color': '#999999',
            'annotate_breakpoints': True,
            'label_fontsize': 8,
            'title_fontsize': 12,
        }
        self.config = {**default_config, **(config or {})}

    # =========================================================================
    # GEOMETRIA
    # =========================================================================

    def step_coordinates(self, segments):
        """
        Coordinate (x, y) per plot 'steps-post' con margine ai lati.

        La funzione vale 0 prima del primo breakpoint e dopo l'ultimo
        (che dopo il trimming ha intensita' 0).

        Returns:
            tuple: (np.ndarray x, np.ndarray y)
        """
        pairs = segments.render()
        if not pairs:
            x_min, x_max = self.config['empty_domain']
            return np.array([x_min, x_max], dtype=float), np.zeros(2)

        points = np.array([float(p) for p, _ in pairs])
        values = np.array([float(v) for _, v in pairs])

        extent = points[-1] - points[0]
        pad = extent * self.config['padding_ratio'] if extent > 0 else 1.0

        x = np.concatenate(([points[0] - pad], points, [points[-1] + pad]))
        y = np.concatenate(([0.0], values, [values[-1]]))
        return x, y

    # =========================================================================
    # RENDERING
    # =========================================================================

    def render_track(self, track):
        """Crea la figura di un singolo store."""
        fig, ax = plt.subplots(figsize=self.config['figure_size'])
        x, y = self.step_coordinates(track.segments)

        ax.plot(x, y, drawstyle='steps-post',
                color=self.config['line_color'],
                linewidth=self.config['line_width'],
                label=track.store_id)
        ax.fill_between(x, y, step='post',
                        color=self.config['line_color'],
                        alpha=self.config['fill_alpha'])
        ax.axhline(0, color=self.config['zero_line_color'], linewidth=0.8)

        if self.config['annotate_breakpoints']:
            self._annotate_breakpoints(ax, track.segments)

        ax.set_title(f"{track.store_id}: {track.segments.to_string()}",
                     fontsize=self.config['title_fontsize'])
        ax.set_xlabel('point')
        ax.set_ylabel('intensity')
        ax.grid(True, alpha=0.3)
        return fig

    def _annotate_breakpoints(self, ax, segments):
        for point, intensity in segments.render():
            x, y = float(point), float(intensity)
            ax.plot(x, y, 'o', color=self.config['line_color'], markersize=3)
            ax.annotate(f"{intensity}",
                        xy=(x, y),
                        xytext=(3, 4), textcoords='offset points',
                        fontsize=self.config['label_fontsize'])

    def render_all(self):
        """Renderizza tutti gli store."""
        figures = []
        for idx, track in enumerate(self.tracks):
            print(f"  Rendering store {idx + 1}/{len(self.tracks)}...")
            figures.append(self.render_track(track))
        return figures

    # =========================================================================
    # OUTPUT
    # =========================================================================

    def export_pdf(self, output_path):
        """Esporta tutti gli store in un PDF multipagina."""
        print(f"Esportazione PDF: {output_path}")

        figures = self.render_all()

        with PdfPages(output_path) as pdf:
            for fig in figures:
                pdf.savefig(fig, dpi=150)
                plt.close(fig)

        print(f"✓ PDF esportato: {output_path}")

    def export_png(self, output_dir, prefix="store"):
        """Esporta ogni store come PNG separato."""
        os.makedirs(output_dir, exist_ok=True)

        print(f"Esportazione PNG in: {output_dir}")

        paths = []
        for track, fig in zip(self.tracks, self.render_all()):
            path = os.path.join(output_dir, f"{prefix}_{track.store_id}.png")
            fig.savefig(path, dpi=150, bbox_inches='tight')
            plt.close(fig)
            paths.append(path)
            print(f"  ✓ {path}")
        return paths
