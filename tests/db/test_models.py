from dataclasses import FrozenInstanceError

import pytest

from app.db.models import Category, Donation


def make_donation(initial: int, current: int) -> Donation:
    return Donation(id="d", category_id="c", name="Item", initial_quantity=initial, current_quantity=current)


def test_used_quantity_is_initial_minus_current():
    assert make_donation(150, 45).used_quantity == 105


def test_used_quantity_is_not_clamped_when_current_exceeds_initial():
    donation = make_donation(10, 12)
    assert donation.used_quantity == -2
    assert donation.usage_percentage == -20


def test_usage_percentage_rounds_to_nearest():
    assert make_donation(150, 45).usage_percentage == 70
    assert make_donation(120, 70).usage_percentage == 42


def test_usage_percentage_rounds_halves_away_from_zero():
    # 1/8 -> 12.5%, -1/8 -> -12.5%
    assert make_donation(8, 7).usage_percentage == 13
    assert make_donation(8, 9).usage_percentage == -13


def test_usage_percentage_is_zero_without_initial_quantity():
    assert make_donation(0, 0).usage_percentage == 0
    assert make_donation(0, 5).usage_percentage == 0


@pytest.mark.parametrize(
    "initial, current, expected",
    [
        (25, 5, False),  # exactly 20% left
        (25, 4, True),
        (10, 1, True),
        (0, 0, False),
        (150, 45, False),
    ],
)
def test_is_running_low(initial, current, expected):
    assert make_donation(initial, current).is_running_low is expected


def test_donation_defaults():
    donation = Donation(id="d", category_id="c", name="Item")
    assert donation.initial_quantity == 0
    assert donation.current_quantity == 0
    assert donation.active is True
    assert donation.available is True
    assert donation.created_at.tzinfo is not None
    assert donation.donator_name is None


def test_records_are_immutable():
    category = Category(id="c", name="Roupas", measure_unity="peças")
    with pytest.raises(FrozenInstanceError):
        category.name = "Outra"  # type: ignore[misc]
    with pytest.raises(FrozenInstanceError):
        make_donation(1, 1).current_quantity = 0  # type: ignore[misc]
