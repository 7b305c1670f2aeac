"""
Test per validate_interval (segments.validation).
"""

import pytest
from fractions import Fraction

from segments.validation import validate_interval, is_real_number
from segments.errors import InvalidType, InvalidRange, InvalidAmount, SegmentError


class TestIsRealNumber:

    @pytest.mark.parametrize('value', [0, -3, 1.5, Fraction(1, 3), float('inf')])
    def test_accepts_reals(self, value):
        assert is_real_number(value)

    @pytest.mark.parametrize('value', [True, False, '1', None, 1j, [1]])
    def test_rejects_non_reals(self, value):
        assert not is_real_number(value)


class TestValidateInterval:

    def test_valid_interval_passes(self):
        validate_interval(10, 30, 1)
        validate_interval(-1.5, 0, -2)
        validate_interval(0, 1, 0)

    def test_type_checked_before_range(self):
        # from > to ma 'amount' non numerico: vince InvalidType
        with pytest.raises(InvalidType):
            validate_interval(30, 10, 'x')

    def test_range_checked_before_amount(self):
        with pytest.raises(InvalidRange):
            validate_interval(30, 10, float('inf'))

    def test_equal_bounds_rejected(self):
        with pytest.raises(InvalidRange):
            validate_interval(5, 5, 1)

    def test_nan_amount_is_amount_error(self):
        with pytest.raises(InvalidAmount):
            validate_interval(0, 1, float('nan'))

    def test_error_message_names_argument(self):
        with pytest.raises(InvalidType, match="'to'"):
            validate_interval(0, None, 1)

    def test_all_errors_share_base_class(self):
        for cls in (InvalidType, InvalidRange, InvalidAmount):
            assert issubclass(cls, SegmentError)
            assert issubclass(cls, ValueError)
