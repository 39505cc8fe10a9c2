"""Tests for bucketing and derived metrics."""

from datetime import date
from decimal import Decimal

import pytest

from conftest import make_txn
from fintrack.domain.aggregation import (
    aggregate_transactions,
    build_bucket,
    calculate_profit,
    calculate_remaining,
    calculate_roi,
    calendar_entries,
    find_best_and_worst,
    monthly_interest,
    monthly_overview,
    rank_by_roi,
    sum_buckets,
    total_bucket,
)
from fintrack.domain.entities import TimeUnit


def test_profit_and_roi_for_single_transaction():
    """Profit subtracts investment and spending; ROI is profit over investment."""
    txn = make_txn(date(2024, 3, 5), earnings="1000", investment="200", spending="100")

    [bucket] = aggregate_transactions([txn], TimeUnit.MONTH)

    assert bucket.profit == Decimal("700")
    assert bucket.roi == Decimal("350.00")


def test_same_month_transactions_are_summed():
    """Two transactions in one month reduce into one bucket."""
    txns = [
        make_txn(date(2024, 3, 1), investment="100", earnings="500", txn_id=1),
        make_txn(date(2024, 3, 20), investment="50", earnings="300", txn_id=2),
    ]

    [bucket] = aggregate_transactions(txns, TimeUnit.MONTH)

    assert bucket.investment == Decimal("150")
    assert bucket.earnings == Decimal("800")
    assert bucket.profit == Decimal("650")
    assert bucket.roi == Decimal("433.33")
    assert bucket.transaction_count == 2
    assert bucket.label == "Mar"


def test_profit_counts_uncredited_and_salary():
    assert calculate_profit(
        earnings=Decimal("100"),
        investment=Decimal("20"),
        spending=Decimal("30"),
        to_be_credit=Decimal("40"),
        salary=Decimal("500"),
    ) == Decimal("590")


@pytest.mark.parametrize("profit", [Decimal("0"), Decimal("500"), Decimal("-250")])
def test_roi_is_zero_without_investment(profit):
    """ROI is defined as 0 whenever nothing was invested."""
    assert calculate_roi(profit, Decimal("0")) == Decimal("0")


def test_roi_is_zero_for_bucket_without_investment():
    txn = make_txn(date(2024, 1, 1), earnings="900", spending="100")
    [bucket] = aggregate_transactions([txn], TimeUnit.YEAR)
    assert bucket.roi == 0
    assert bucket.profit == Decimal("800")


def test_roi_rounds_half_up():
    assert calculate_roi(Decimal("1"), Decimal("8")) == Decimal("12.50")
    assert calculate_roi(Decimal("2"), Decimal("3")) == Decimal("66.67")


def test_monthly_overview_has_twelve_rows():
    """The overview is zero-filled to twelve months."""
    txns = [make_txn(date(2024, 6, 10), earnings="100")]

    rows = monthly_overview(txns, 2024)

    assert len(rows) == 12
    assert [row.month for row in rows] == list(range(1, 13))
    assert rows[0].label == "Jan"
    assert rows[5].earnings == Decimal("100")
    assert all(row.profit == 0 for i, row in enumerate(rows) if i != 5)


def test_monthly_overview_empty_year_still_has_twelve_rows():
    rows = monthly_overview([], 2023)
    assert len(rows) == 12
    assert all(row.roi == 0 for row in rows)


def test_monthly_overview_excludes_other_years():
    """Transactions outside the viewed year stay out of the month table."""
    txns = [
        make_txn(date(2023, 6, 10), earnings="999", txn_id=1),
        make_txn(date(2024, 6, 10), earnings="100", txn_id=2),
    ]

    rows = monthly_overview(txns, 2024)

    assert rows[5].earnings == Decimal("100")
    assert sum(row.earnings for row in rows) == Decimal("100")


def test_yearly_aggregation_includes_every_year():
    txns = [
        make_txn(date(2024, 1, 10), earnings="100", txn_id=1),
        make_txn(date(2022, 5, 1), earnings="50", txn_id=2),
        make_txn(date(2023, 7, 1), earnings="75", txn_id=3),
    ]

    buckets = aggregate_transactions(txns, TimeUnit.YEAR)

    assert [b.label for b in buckets] == ["2022", "2023", "2024"]
    assert [b.month for b in buckets] == [None, None, None]


def test_month_profits_sum_to_year_profit():
    """Aggregating by month then summing equals aggregating by year."""
    txns = [
        make_txn(date(2024, 1, 3), earnings="1200", investment="300", spending="50", txn_id=1),
        make_txn(date(2024, 1, 28), to_be_credit="400", salary="3000", txn_id=2),
        make_txn(date(2024, 4, 2), investment="800", spending="120.55", txn_id=3),
        make_txn(date(2024, 11, 30), earnings="99.99", salary="1500", txn_id=4),
    ]

    months = aggregate_transactions(txns, TimeUnit.MONTH)
    [year] = aggregate_transactions(txns, TimeUnit.YEAR)

    assert sum(m.profit for m in months) == year.profit
    assert sum(m.investment for m in months) == year.investment
    assert sum_buckets(months).profit == year.profit
    assert sum_buckets(months).roi == year.roi


def test_day_buckets_are_ascending():
    txns = [
        make_txn(date(2024, 3, 15), earnings="1", txn_id=1),
        make_txn(date(2024, 3, 2), earnings="2", txn_id=2),
        make_txn(date(2024, 3, 9), earnings="3", txn_id=3),
        make_txn(date(2024, 3, 2), earnings="4", txn_id=4),
    ]

    buckets = aggregate_transactions(txns, TimeUnit.DAY)

    assert [b.key for b in buckets] == ["2024-03-02", "2024-03-09", "2024-03-15"]
    assert buckets[0].earnings == Decimal("6")


def test_month_buckets_sort_year_first():
    txns = [
        make_txn(date(2024, 2, 1), earnings="1", txn_id=1),
        make_txn(date(2023, 11, 1), earnings="1", txn_id=2),
        make_txn(date(2024, 1, 1), earnings="1", txn_id=3),
    ]

    buckets = aggregate_transactions(txns, TimeUnit.MONTH)

    assert [b.key for b in buckets] == ["2023-11", "2024-01", "2024-02"]


def test_year_filter_drops_other_years():
    txns = [
        make_txn(date(2023, 3, 1), earnings="10", txn_id=1),
        make_txn(date(2024, 3, 1), earnings="20", txn_id=2),
    ]

    buckets = aggregate_transactions(txns, TimeUnit.MONTH, year=2024)

    assert len(buckets) == 1
    assert buckets[0].earnings == Decimal("20")


def test_missing_salary_counts_as_zero():
    txn = make_txn(date(2024, 3, 1), earnings="10")
    txn_without_salary = txn.__class__(**{**txn.__dict__, "salary": None})

    bucket = total_bucket([txn_without_salary])

    assert bucket.salary == 0
    assert bucket.profit == Decimal("10")


def test_rank_by_roi_is_descending_and_stable():
    a = build_bucket("2024-01", "Jan", 2024, 1, investment=Decimal("100"), earnings=Decimal("150"))
    b = build_bucket("2024-02", "Feb", 2024, 2, investment=Decimal("100"), earnings=Decimal("300"))
    c = build_bucket("2024-03", "Mar", 2024, 3, investment=Decimal("100"), earnings=Decimal("150"))

    ranked = rank_by_roi([a, b, c])

    assert [r.label for r in ranked] == ["Feb", "Jan", "Mar"]


def test_best_and_worst_by_profit():
    jan = build_bucket("2024-01", "Jan", 2024, 1, earnings=Decimal("500"))
    feb = build_bucket("2024-02", "Feb", 2024, 2, spending=Decimal("200"))
    mar = build_bucket("2024-03", "Mar", 2024, 3, earnings=Decimal("900"))

    best, worst = find_best_and_worst([jan, feb, mar])

    assert best.label == "Mar"
    assert worst.label == "Feb"


def test_best_and_worst_ties_resolve_to_first():
    jan = build_bucket("2024-01", "Jan", 2024, 1, earnings=Decimal("100"))
    feb = build_bucket("2024-02", "Feb", 2024, 2, earnings=Decimal("100"))

    best, worst = find_best_and_worst([jan, feb])

    assert best is jan
    assert worst is jan


def test_best_and_worst_of_nothing():
    assert find_best_and_worst([]) == (None, None)


def test_monthly_interest():
    assert monthly_interest(Decimal("100000"), Decimal("12")) == Decimal("1000")
    assert monthly_interest(Decimal("0"), Decimal("12")) == 0
    assert monthly_interest(None, None) == 0


def test_remaining_subtracts_interest_but_profit_does_not():
    """Interest reduces the summary figure only."""
    remaining = calculate_remaining(
        earnings=Decimal("5000"),
        investment=Decimal("1000"),
        spending=Decimal("500"),
        to_be_credit=Decimal("200"),
        salary=Decimal("0"),
        interest=Decimal("1000"),
    )
    profit = calculate_profit(
        Decimal("5000"), Decimal("1000"), Decimal("500"), Decimal("200"), Decimal("0")
    )

    assert remaining == Decimal("2700")
    assert profit == Decimal("3700")


def test_remaining_can_leave_uncredited_out():
    remaining = calculate_remaining(
        earnings=Decimal("100"),
        investment=Decimal("0"),
        spending=Decimal("0"),
        to_be_credit=Decimal("50"),
        salary=Decimal("0"),
        include_to_be_credit=False,
    )
    assert remaining == Decimal("100")


def test_calendar_entries_types():
    txn = make_txn(
        date(2024, 3, 1),
        earnings="100",
        investment="30",
        spending="20",
        salary="500",
        to_be_credit="40",
        debt="12000",
        interest_rate="10",
    )

    entries = calendar_entries([txn], show_debt=True)

    by_type = {e.type: e.amount for e in entries}
    assert by_type == {
        "income": Decimal("100"),
        "expense": Decimal("-50"),
        "salary": Decimal("500"),
        "toBeCredit": Decimal("40"),
        "debt": Decimal("12000"),
        "interest": Decimal("-100"),
    }


def test_calendar_entries_hide_debt_when_feature_off():
    txn = make_txn(date(2024, 3, 1), debt="12000", interest_rate="10")

    entries = calendar_entries([txn], show_debt=False)

    assert len(entries) == 1
    assert entries[0].type == "income"
    assert entries[0].amount == 0
