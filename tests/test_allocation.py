from decimal import Decimal

import pytest

from nestegg import NegativeWeight, allocate_proportionally


def test_equal_weights_first_gets_remainder():
    assert allocate_proportionally(1000, [1, 1, 1]) == [334, 333, 333]


def test_negative_total_is_mirrored():
    assert allocate_proportionally(-1000, [1, 1, 1]) == [-334, -333, -333]


def test_exact_split():
    assert allocate_proportionally(-1100, [1000, 100]) == [-1000, -100]


def test_largest_rounding_loss_goes_first():
    # raw shares are 3.5, 2.8 and 0.7
    assert allocate_proportionally(7, [5, 4, 1]) == [3, 3, 1]


@pytest.mark.parametrize(
    "total, weights",
    [(100, [1, 2, 3]), (999, [7, 11, 13, 17]), (-50, [3, 3]), (1, [1, 1, 1, 1])],
)
def test_parts_add_up(total, weights):
    assert sum(allocate_proportionally(total, weights)) == total


def test_cents_unit():
    parts = allocate_proportionally("10.00", [1, 1, 1], unit="0.01")
    assert parts == [Decimal("3.34"), Decimal("3.33"), Decimal("3.33")]


def test_fractional_total_with_whole_unit():
    parts = allocate_proportionally("10.5", [1, 1])
    assert sum(parts) == Decimal("10.5")


def test_zero_weights_split_equally():
    assert allocate_proportionally(10, [0, 0]) == [5, 5]


def test_empty_weights():
    assert allocate_proportionally(10, []) == []


def test_negative_weight_fails():
    with pytest.raises(NegativeWeight):
        allocate_proportionally(10, [1, -1])
