"""
Test per le primitive di lookup/inserimento (segments.breakpoints).
"""

import pytest
from segments.breakpoints import (
    index_at_or_before, find_index, intensity_at, materialize
)


@pytest.fixture
def bps():
    return [[10, 1], [20, 2], [30, 1], [40, 0]]


class TestLookup:

    @pytest.mark.parametrize('point, expected', [
        (5, -1), (10, 0), (15, 0), (20, 1), (39, 2), (40, 3), (100, 3),
    ])
    def test_index_at_or_before(self, bps, point, expected):
        assert index_at_or_before(bps, point) == expected

    def test_find_index_exact(self, bps):
        assert find_index(bps, 30) == 2
        assert find_index(bps, 31) == -1
        assert find_index([], 0) == -1

    @pytest.mark.parametrize('point, expected', [
        (-100, 0), (9.99, 0), (10, 1), (25, 2), (30, 1), (40, 0), (1e9, 0),
    ])
    def test_intensity_at(self, bps, point, expected):
        assert intensity_at(bps, point) == expected

    def test_intensity_at_empty(self):
        assert intensity_at([], 42) == 0


class TestMaterialize:

    def test_existing_point_is_not_duplicated(self, bps):
        idx = materialize(bps, 20)
        assert idx == 1
        assert len(bps) == 4

    def test_inserts_inherited_value(self, bps):
        idx = materialize(bps, 25)
        assert idx == 2
        assert bps[2] == [25, 2]
        assert [p for p, _ in bps] == [10, 20, 25, 30, 40]

    def test_inserts_zero_before_first(self, bps):
        idx = materialize(bps, 0)
        assert idx == 0
        assert bps[0] == [0, 0]

    def test_inserts_after_last(self, bps):
        idx = materialize(bps, 50)
        assert idx == 4
        assert bps[-1] == [50, 0]

    def test_does_not_change_function(self, bps):
        probes = [0, 10, 15, 22, 25, 30, 45]
        before = [intensity_at(bps, p) for p in probes]
        materialize(bps, 22)
        materialize(bps, 45)
        assert [intensity_at(bps, p) for p in probes] == before

    def test_on_empty_list(self):
        bps = []
        assert materialize(bps, 7) == 0
        assert bps == [[7, 0]]
