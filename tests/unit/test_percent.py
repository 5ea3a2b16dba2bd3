"""Unit tests for the shared percentage rounding."""
import pytest

from learning.percent import percentage


@pytest.mark.unit
class TestPercentage:
    @pytest.mark.parametrize(
        "part,whole,expected",
        [
            (1, 8, 13),  # 12.5
            (5, 8, 63),  # 62.5
            (1, 3, 33),
            (2, 3, 67),
            (5, 12, 42),
            (1, 200, 1),  # 0.5
            (0, 5, 0),
            (5, 5, 100),
        ],
    )
    def test_half_up(self, part, whole, expected):
        assert percentage(part, whole) == expected

    def test_zero_whole(self):
        assert percentage(0, 0) == 0
        assert percentage(3, 0) == 0

    def test_negative_inputs(self):
        assert percentage(1, -4) == 0
        assert percentage(-2, 4) == 0
