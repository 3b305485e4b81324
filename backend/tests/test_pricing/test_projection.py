"""Unit tests for the next-discount-tier projection."""

from datetime import date
from decimal import Decimal

import pytest

from villa_booking.pricing.projection import next_tier_target, project_next_discount

START = date(2026, 7, 1)


class TestNextTierTarget:
    @pytest.mark.parametrize(
        ("count", "expected"),
        [
            (0, None),
            (1, (4, 3)),
            (2, (4, 2)),
            (3, (4, 1)),
            (4, (5, 1)),
            (6, (7, 1)),
            (7, (4, 4)),
            (8, (4, 3)),
            (10, (4, 1)),
            (11, (5, 1)),
            (13, (7, 1)),
            (14, (4, 4)),
        ],
    )
    def test_targets(self, count, expected):
        assert next_tier_target(count) == expected


class TestProjectNextDiscount:
    def test_two_nights(self, make_snapshot, nights):
        result = project_next_discount(nights(START, 2), make_snapshot())

        assert result is not None
        assert result.nights_needed == 2
        assert result.tier_percent == Decimal("10")
        assert result.projected_total_discount == Decimal("40.00")
        assert result.crosses_seven_boundary is False

    def test_five_nights_targets_six(self, make_snapshot, nights):
        result = project_next_discount(nights(START, 5), make_snapshot())

        assert result.nights_needed == 1
        assert result.tier_percent == Decimal("20")
        assert result.projected_total_discount == Decimal("120.00")

    def test_past_seven_projects_whole_stay(self, make_snapshot, nights):
        result = project_next_discount(nights(START, 8), make_snapshot())

        # 11 nights: 7 @ 25% + 4 @ 10%
        assert result.nights_needed == 3
        assert result.tier_percent == Decimal("10")
        assert result.projected_total_discount == Decimal("215.00")
        assert result.crosses_seven_boundary is True

    def test_pads_at_average_cost(self, make_snapshot, nights):
        days = nights(START, 3)
        prices = {days[0]: 100, days[1]: 200, days[2]: 300}
        result = project_next_discount(days, make_snapshot(prices=prices))

        # 100 + 200 + 300 + 200 (average) = 800 @ 10%
        assert result.projected_total_discount == Decimal("80.00")

    def test_empty_selection(self, make_snapshot):
        assert project_next_discount([], make_snapshot()) is None

    def test_target_tier_without_discount(self, make_snapshot, nights):
        snapshot = make_snapshot(discount_tiers={5: 15})

        assert project_next_discount(nights(START, 2), snapshot) is None

    def test_zero_seven_tier_does_not_hang(self, make_snapshot, nights):
        snapshot = make_snapshot(discount_tiers={4: 10, 7: 0})
        result = project_next_discount(nights(START, 9), snapshot)

        # 11 nights: the 7-night chunk earns nothing, the 4-night tail earns 10%.
        assert result.projected_total_discount == Decimal("40.00")
