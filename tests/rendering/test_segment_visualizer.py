"""
Test suite per SegmentVisualizer (backend Agg impostato in conftest).
"""

import matplotlib.pyplot as plt
import numpy as np
import pytest

from engine.scenario_runner import SegmentTrack
from rendering.segment_visualizer import SegmentVisualizer
from segments.intensity_segments import IntensitySegments


def make_track(store_id, *operations):
    segments = IntensitySegments(store_id)
    for op, start, end, amount in operations:
        getattr(segments, op)(start, end, amount)
    return SegmentTrack(store_id=store_id, segments=segments)


@pytest.fixture
def tracks():
    return [
        make_track('overlap', ('add', 10, 30, 1), ('add', 20, 40, 1)),
        make_track('empty'),
    ]


class TestStepCoordinates:

    def test_padding_and_values(self, tracks):
        viz = SegmentVisualizer(tracks)
        x, y = viz.step_coordinates(tracks[0].segments)

        # Estensione 30, padding 10%
        np.testing.assert_allclose(x, [7, 10, 20, 30, 40, 43])
        np.testing.assert_allclose(y, [0, 1, 2, 1, 0, 0])

    def test_empty_store(self, tracks):
        viz = SegmentVisualizer(tracks, config={'empty_domain': (0, 5)})
        x, y = viz.step_coordinates(tracks[1].segments)
        np.testing.assert_allclose(x, [0, 5])
        np.testing.assert_allclose(y, [0, 0])

    def test_config_override_keeps_defaults(self, tracks):
        viz = SegmentVisualizer(tracks, config={'line_color': 'red'})
        assert viz.config['line_color'] == 'red'
        assert viz.config['padding_ratio'] == 0.1


class TestRendering:

    def test_render_all_one_figure_per_store(self, tracks):
        figures = SegmentVisualizer(tracks).render_all()
        try:
            assert len(figures) == 2
            title = figures[0].axes[0].get_title()
            assert title == 'overlap: [[10,1],[20,2],[30,1],[40,0]]'
        finally:
            for fig in figures:
                plt.close(fig)

    def test_export_pdf(self, tracks, tmp_path):
        path = tmp_path / 'segments.pdf'
        SegmentVisualizer(tracks).export_pdf(str(path))
        assert path.exists()
        assert path.read_bytes().startswith(b'%PDF')

    def test_export_png(self, tracks, tmp_path):
        paths = SegmentVisualizer(tracks).export_png(str(tmp_path / 'png'))
        assert [p.split('/')[-1] for p in paths] == ['store_overlap.png', 'store_empty.png']
        for p in paths:
            with open(p, 'rb') as f:
                assert f.read(8) == b'\x89PNG\r\n\x1a\n'
