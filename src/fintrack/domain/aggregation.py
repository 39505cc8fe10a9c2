"""Bucketing and derived metrics for transaction summaries.

Every function here is pure: it takes already-loaded transactions and returns
new values, so summaries can be recomputed in full whenever the input changes.

Two profit definitions exist and are kept apart:

* ``calculate_profit`` is the bucket/chart figure and counts ``to_be_credit``
  as income. It never includes debt interest.
* ``calculate_remaining`` is the summary-card figure. It subtracts monthly
  interest on debt and can leave uncredited amounts out.
"""

from collections import defaultdict
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional, Sequence

from fintrack.domain.entities import (
    ZERO,
    CalendarEntry,
    PeriodBucket,
    TimeUnit,
    Transaction,
)

MONTH_LABELS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)

ROI_PRECISION = Decimal("0.01")
MONTHS_PER_YEAR_PERCENT = Decimal("1200")

SUMMED_FIELDS = ("investment", "earnings", "spending", "to_be_credit", "salary")


def calculate_profit(
    earnings: Decimal,
    investment: Decimal,
    spending: Decimal,
    to_be_credit: Decimal,
    salary: Decimal,
) -> Decimal:
    """Return bucket profit: earnings - investment - spending + credit + salary."""
    return earnings - investment - spending + to_be_credit + salary


def calculate_roi(profit: Decimal, investment: Decimal) -> Decimal:
    """Return ROI as a percentage rounded to two places.

    ROI is 0 when nothing was invested, whatever the sign of the profit.
    """
    if investment <= 0:
        return Decimal("0.00")
    roi = profit / investment * 100
    return roi.quantize(ROI_PRECISION, rounding=ROUND_HALF_UP)


def monthly_interest(debt: Optional[Decimal], interest_rate: Optional[Decimal]) -> Decimal:
    """Return one month of interest on a principal at an annual percentage rate."""
    if not debt or not interest_rate:
        return ZERO
    return debt * interest_rate / MONTHS_PER_YEAR_PERCENT


def calculate_remaining(
    earnings: Decimal,
    investment: Decimal,
    spending: Decimal,
    to_be_credit: Decimal,
    salary: Decimal,
    interest: Decimal = ZERO,
    include_to_be_credit: bool = True,
) -> Decimal:
    """Return the summary-card "remaining" figure.

    Args:
        interest: Monthly interest to treat as an expense
        include_to_be_credit: Count amounts not yet credited as available
    """
    credit = to_be_credit if include_to_be_credit else ZERO
    return calculate_profit(earnings, investment, spending, credit, salary) - interest


def bucket_key(on_date: date, unit: TimeUnit) -> tuple[str, str, int, Optional[int]]:
    """Return ``(key, label, year, month)`` for the bucket a date falls into."""
    if unit == TimeUnit.DAY:
        iso = on_date.isoformat()
        return iso, iso, on_date.year, on_date.month
    if unit == TimeUnit.MONTH:
        key = f"{on_date.year:04d}-{on_date.month:02d}"
        return key, MONTH_LABELS[on_date.month - 1], on_date.year, on_date.month
    key = f"{on_date.year:04d}"
    return key, key, on_date.year, None


def build_bucket(
    key: str,
    label: str,
    year: int,
    month: Optional[int],
    investment: Decimal = ZERO,
    earnings: Decimal = ZERO,
    spending: Decimal = ZERO,
    to_be_credit: Decimal = ZERO,
    salary: Decimal = ZERO,
    transaction_count: int = 0,
) -> PeriodBucket:
    """Create a bucket from summed fields, deriving profit and ROI."""
    profit = calculate_profit(earnings, investment, spending, to_be_credit, salary)
    return PeriodBucket(
        key=key,
        label=label,
        year=year,
        month=month,
        investment=investment,
        earnings=earnings,
        spending=spending,
        to_be_credit=to_be_credit,
        salary=salary,
        profit=profit,
        roi=calculate_roi(profit, investment),
        transaction_count=transaction_count,
    )


def _sum_fields(transactions: Iterable[Transaction]) -> tuple[dict[str, Decimal], int]:
    totals = {name: ZERO for name in SUMMED_FIELDS}
    count = 0
    for txn in transactions:
        for name in SUMMED_FIELDS:
            totals[name] += getattr(txn, name) or ZERO
        count += 1
    return totals, count


def reduce_transactions(
    transactions: Iterable[Transaction],
    key: str,
    label: str,
    year: int,
    month: Optional[int] = None,
) -> PeriodBucket:
    """Sum transaction fields into a single bucket."""
    totals, count = _sum_fields(transactions)
    return build_bucket(key, label, year, month, transaction_count=count, **totals)


def filter_by_year(transactions: Iterable[Transaction], year: int) -> list[Transaction]:
    """Keep only transactions dated in the given calendar year."""
    return [txn for txn in transactions if txn.date.year == year]


def filter_by_month(
    transactions: Iterable[Transaction], year: int, month: int
) -> list[Transaction]:
    """Keep only transactions dated in the given calendar month."""
    return [
        txn for txn in transactions if txn.date.year == year and txn.date.month == month
    ]


def group_transactions(
    transactions: Iterable[Transaction],
    unit: TimeUnit,
    year: Optional[int] = None,
) -> dict[tuple[str, str, int, Optional[int]], list[Transaction]]:
    """Group transactions by time bucket.

    Args:
        transactions: Transactions in any order
        unit: Bucket granularity
        year: If given, transactions from other years are dropped

    Returns:
        Mapping of bucket key tuples to the transactions in each bucket
    """
    grouped: dict[tuple[str, str, int, Optional[int]], list[Transaction]] = defaultdict(list)
    for txn in transactions:
        if year is not None and txn.date.year != year:
            continue
        grouped[bucket_key(txn.date, unit)].append(txn)
    return dict(grouped)


def aggregate_transactions(
    transactions: Iterable[Transaction],
    unit: TimeUnit,
    year: Optional[int] = None,
) -> list[PeriodBucket]:
    """Aggregate transactions into non-empty buckets in chronological order."""
    grouped = group_transactions(transactions, unit, year=year)
    buckets = [
        reduce_transactions(txns, key, label, bucket_year, month)
        for (key, label, bucket_year, month), txns in grouped.items()
    ]
    return sort_chronologically(buckets)


def monthly_overview(transactions: Iterable[Transaction], year: int) -> list[PeriodBucket]:
    """Return exactly twelve month buckets for a year, zero-filled."""
    by_month = {
        bucket.month: bucket
        for bucket in aggregate_transactions(transactions, TimeUnit.MONTH, year=year)
    }
    rows = []
    for month in range(1, 13):
        bucket = by_month.get(month)
        if bucket is None:
            bucket = build_bucket(
                f"{year:04d}-{month:02d}", MONTH_LABELS[month - 1], year, month
            )
        rows.append(bucket)
    return rows


def total_bucket(
    transactions: Iterable[Transaction], label: str = "Total", key: str = "total"
) -> PeriodBucket:
    """Reduce all transactions into one bucket regardless of date."""
    txns = list(transactions)
    year = min((txn.date.year for txn in txns), default=0)
    return reduce_transactions(txns, key, label, year)


def sum_buckets(
    buckets: Sequence[PeriodBucket], label: str = "Total", key: str = "total"
) -> PeriodBucket:
    """Combine already-aggregated buckets, re-deriving profit and ROI."""
    totals = {name: ZERO for name in SUMMED_FIELDS}
    count = 0
    for bucket in buckets:
        for name in SUMMED_FIELDS:
            totals[name] += getattr(bucket, name)
        count += bucket.transaction_count
    year = min((bucket.year for bucket in buckets), default=0)
    return build_bucket(key, label, year, None, transaction_count=count, **totals)


def sort_chronologically(buckets: Iterable[PeriodBucket]) -> list[PeriodBucket]:
    """Sort buckets by year, then month, then key."""
    return sorted(buckets, key=lambda b: (b.year, b.month or 0, b.key))


def rank_by_roi(buckets: Iterable[PeriodBucket]) -> list[PeriodBucket]:
    """Sort buckets by descending ROI; equal ROI keeps input order."""
    return sorted(buckets, key=lambda b: b.roi, reverse=True)


def find_best_and_worst(
    buckets: Sequence[PeriodBucket], metric: str = "profit"
) -> tuple[Optional[PeriodBucket], Optional[PeriodBucket]]:
    """Pick the buckets with the highest and lowest metric by linear scan.

    Ties resolve to the first bucket encountered.
    """
    if not buckets:
        return None, None

    best = worst = buckets[0]
    for bucket in buckets[1:]:
        value = getattr(bucket, metric)
        if value > getattr(best, metric):
            best = bucket
        if value < getattr(worst, metric):
            worst = bucket
    return best, worst


def calendar_entries(
    transactions: Iterable[Transaction], show_debt: bool = False
) -> list[CalendarEntry]:
    """Split transactions into the typed amounts shown on calendar days.

    Expenses are negative; interest entries are negative monthly interest.
    A transaction with nothing to show gets a single net entry.
    """
    entries: list[CalendarEntry] = []
    for txn in transactions:
        txn_entries: list[CalendarEntry] = []

        def add(amount: Decimal, entry_type: str) -> None:
            txn_entries.append(
                CalendarEntry(
                    transaction_id=txn.id, date=txn.date, amount=amount, type=entry_type
                )
            )

        if txn.earnings > 0:
            add(txn.earnings, "income")
        if txn.investment > 0 or txn.spending > 0:
            add(-(txn.investment + txn.spending), "expense")
        if txn.salary and txn.salary > 0:
            add(txn.salary, "salary")
        if txn.to_be_credit > 0:
            add(txn.to_be_credit, "toBeCredit")
        if show_debt and txn.debt and txn.debt > 0:
            add(txn.debt, "debt")
            if txn.interest_rate and txn.interest_rate > 0:
                add(-monthly_interest(txn.debt, txn.interest_rate), "interest")

        if not txn_entries:
            net = txn.earnings - txn.investment - txn.spending + (txn.salary or ZERO)
            add(net, "income" if net >= 0 else "expense")

        entries.extend(txn_entries)
    return entries
