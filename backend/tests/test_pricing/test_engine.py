"""Unit tests for the pricing and discount engine."""

from datetime import date
from decimal import Decimal

from villa_booking.pricing.engine import (
    apply_discount_chunks,
    compute_cost_breakdown,
    discount_chunks,
)
from villa_booking.pricing.types import CostBreakdown

START = date(2026, 6, 1)


# ---------------------------------------------------------------------------
# discount_chunks
# ---------------------------------------------------------------------------


class TestDiscountChunks:
    """Greedy partitioning of a stay into discount chunks."""

    def test_short_stays_have_no_chunks(self):
        for count in range(0, 4):
            assert discount_chunks(count) == []

    def test_four_to_seven_is_one_chunk(self):
        for count in range(4, 8):
            assert discount_chunks(count) == [(0, count)]

    def test_seven_chunks_then_remainder(self):
        assert discount_chunks(11) == [(0, 7), (7, 4)]
        assert discount_chunks(13) == [(0, 7), (7, 6)]
        assert discount_chunks(14) == [(0, 7), (7, 7)]

    def test_small_remainder_dropped(self):
        assert discount_chunks(9) == [(0, 7)]
        assert discount_chunks(17) == [(0, 7), (7, 7)]

    def test_chunks_are_contiguous_and_never_overlap(self):
        for count in range(0, 40):
            chunks = discount_chunks(count)
            covered = 0
            for start, size in chunks:
                assert start == covered
                assert 4 <= size <= 7
                covered += size
            assert count - covered < 4


# ---------------------------------------------------------------------------
# compute_cost_breakdown: reference examples
# ---------------------------------------------------------------------------


class TestReferenceExamples:
    """Flat 100/night, cleaning 50, tiers 10/15/20/25 %."""

    def test_seven_nights(self, make_snapshot, nights):
        result = compute_cost_breakdown(nights(START, 7), make_snapshot())

        assert result.subtotal == Decimal("700")
        assert len(result.discount_lines) == 1
        line = result.discount_lines[0]
        assert line.tier_size == 7
        assert line.percent == Decimal("25")
        assert line.amount == Decimal("175.00")
        assert result.discounted_total == Decimal("525")
        assert result.final_total == Decimal("575")

    def test_nine_nights_leftover_not_discounted(self, make_snapshot, nights):
        result = compute_cost_breakdown(nights(START, 9), make_snapshot())

        assert result.subtotal == Decimal("900")
        assert result.total_discount == Decimal("175")
        assert [line.tier_size for line in result.discount_lines] == [7]
        assert result.discounted_total == Decimal("725")
        assert result.final_total == Decimal("775")

    def test_eleven_nights_remainder_uses_its_own_tier(self, make_snapshot, nights):
        result = compute_cost_breakdown(nights(START, 11), make_snapshot())

        assert result.subtotal == Decimal("1100")
        assert [(d.tier_size, d.amount) for d in result.discount_lines] == [
            (7, Decimal("175.00")),
            (4, Decimal("40.00")),
        ]
        assert result.total_discount == Decimal("215")
        assert result.discounted_total == Decimal("885")
        assert result.final_total == Decimal("935")

    def test_thirteen_nights_remainder_six(self, make_snapshot, nights):
        result = compute_cost_breakdown(nights(START, 13), make_snapshot())

        # 7 @ 25% + 6 @ 20%
        assert result.total_discount == Decimal("295")
        assert result.discount_lines[1].tier_size == 6
        assert result.discount_lines[1].range_start == date(2026, 6, 8)
        assert result.discount_lines[1].range_end == date(2026, 6, 13)

    def test_three_nights_no_discount(self, make_snapshot, nights):
        result = compute_cost_breakdown(nights(START, 3), make_snapshot())

        assert result.discount_lines == ()
        assert result.total_discount == Decimal("0")
        assert result.final_total == Decimal("350")


# ---------------------------------------------------------------------------
# compute_cost_breakdown: rounding, grouping, invariants
# ---------------------------------------------------------------------------


class TestRounding:
    def test_chunk_amount_rounds_half_up(self, make_snapshot, nights):
        days = nights(START, 5)
        prices = dict(zip(days, ["66.66", "66.66", "66.67", "66.67", "66.67"], strict=True))
        result = compute_cost_breakdown(days, make_snapshot(prices=prices))

        assert result.subtotal == Decimal("333.33")
        # 333.33 * 15% = 49.9995
        assert result.discount_lines[0].amount == Decimal("50.00")
        assert result.discounted_total == Decimal("283.33")


class TestCostLines:
    def test_groups_runs_of_equal_price(self, make_snapshot, nights):
        days = nights(START, 6)
        prices = {days[2]: 150, days[3]: 150}
        result = compute_cost_breakdown(days, make_snapshot(prices=prices))

        summary = [(line.count, line.unit_cost, line.range_start, line.range_end) for line in result.cost_lines]
        assert summary == [
            (2, Decimal("100"), days[0], days[1]),
            (2, Decimal("150"), days[2], days[3]),
            (2, Decimal("100"), days[4], days[5]),
        ]
        assert sum((line.total for line in result.cost_lines), Decimal("0")) == result.subtotal
        assert result.nights == 6

    def test_same_price_with_gap_stays_one_line(self, make_snapshot):
        days = [date(2026, 6, 1), date(2026, 6, 5)]
        result = compute_cost_breakdown(days, make_snapshot())

        assert len(result.cost_lines) == 1
        assert result.cost_lines[0].count == 2
        assert result.date_range == (date(2026, 6, 1), date(2026, 6, 5))

    def test_unparsable_override_falls_back_to_default(self, make_snapshot, nights):
        days = nights(START, 2)
        result = compute_cost_breakdown(days, make_snapshot(prices={days[0]: "n/a"}))

        assert result.subtotal == Decimal("200")


class TestInvariants:
    def test_unsorted_and_duplicated_input(self, make_snapshot, nights):
        days = nights(START, 7)
        shuffled = [days[4], days[0], days[6], days[0], days[2], days[1], days[5], days[3]]

        assert compute_cost_breakdown(shuffled, make_snapshot()) == compute_cost_breakdown(
            days, make_snapshot()
        )

    def test_totals_are_consistent(self, make_snapshot, nights):
        days = nights(START, 19)
        prices = {days[i]: 80 + i * 7 for i in range(0, 19, 3)}
        result = compute_cost_breakdown(days, make_snapshot(prices=prices))

        discount_sum = sum((d.amount for d in result.discount_lines), Decimal("0"))
        assert result.total_discount == discount_sum
        assert result.discounted_total == result.subtotal - result.total_discount
        assert result.final_total == result.discounted_total + Decimal("50")
        assert result.cleaning_cost == Decimal("50")

    def test_empty_selection_is_all_zero(self, make_snapshot):
        result = compute_cost_breakdown([], make_snapshot())

        assert result == CostBreakdown()
        assert result.final_total == Decimal("0")
        assert result.date_range is None
        assert result.nights == 0


class TestZeroPercentTiers:
    def test_missing_tier_consumes_nights(self, make_snapshot, nights):
        snapshot = make_snapshot(discount_tiers={4: 10, 5: 15, 6: 20})
        result = compute_cost_breakdown(nights(START, 11), snapshot)

        # The first 7 nights form an undiscounted chunk; the remaining 4 earn 10%.
        assert [(d.tier_size, d.amount) for d in result.discount_lines] == [(4, Decimal("40.00"))]
        assert result.discount_lines[0].range_start == date(2026, 6, 8)

    def test_negative_or_garbage_percent_is_ignored(self, make_snapshot, nights):
        snapshot = make_snapshot(discount_tiers={4: -5, 5: "abc"})

        assert compute_cost_breakdown(nights(START, 4), snapshot).discount_lines == ()
        assert compute_cost_breakdown(nights(START, 5), snapshot).discount_lines == ()

    def test_apply_discount_chunks_skips_zero_tier(self, make_snapshot):
        snapshot = make_snapshot(discount_tiers={7: 0, 4: 10})
        costs = [Decimal("100")] * 11

        assert apply_discount_chunks(costs, snapshot) == [(7, 4, Decimal("10"), Decimal("40.00"))]

    def test_tier_keys_from_json_strings(self, make_snapshot, nights):
        snapshot = make_snapshot(discount_tiers={"4": "10", "9": 50})

        assert snapshot.discount_tiers == {4: Decimal("10")}
        assert compute_cost_breakdown(nights(START, 4), snapshot).total_discount == Decimal("40.00")
