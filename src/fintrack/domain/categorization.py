"""Keyword-based income and spending breakdowns.

Classification is a substring heuristic over the free-text ``purpose`` of
salary entries. Income categories are checked in priority order and the
first match wins. Breakdowns list categories in a fixed display order
that is not re-sorted by amount.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

from fintrack.domain.entities import ZERO, CategoryAmount, Transaction

# (category, keywords) in priority order. An empty keyword tuple never matches.
INCOME_CATEGORIES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Freelancing", ("freelance", "contract")),
    ("Investments", ("invest", "dividend")),
    ("Side Business", ("side", "business")),
    ("Rental Income", ("rent", "property")),
    ("Salary", ()),
    ("Other", ()),
)

INCOME_DISPLAY_ORDER: tuple[str, ...] = (
    "Salary",
    "Freelancing",
    "Investments",
    "Side Business",
    "Rental Income",
    "Other",
)

SPENDING_CATEGORIES: tuple[str, ...] = (
    "Food",
    "Travel",
    "Rent",
    "Entertainment",
    "Utilities",
    "Shopping",
    "Healthcare",
    "Education",
    "Others",
)

DEFAULT_INCOME_CATEGORY = "Salary"
DEFAULT_SPENDING_CATEGORY = "Others"
EARNINGS_CATEGORY = "Investments"
UNCREDITED_CATEGORY = "Freelancing"

PERCENT_PRECISION = Decimal("0.01")


def classify_income(purpose: Optional[str]) -> str:
    """Return the income category for a salary entry purpose."""
    text = (purpose or "").strip().lower()
    if not text:
        return DEFAULT_INCOME_CATEGORY
    for name, keywords in INCOME_CATEGORIES:
        if any(keyword in text for keyword in keywords):
            return name
    return DEFAULT_INCOME_CATEGORY


def classify_spending(purpose: Optional[str]) -> str:
    """Return the spending category whose name appears in the purpose."""
    text = (purpose or "").strip().lower()
    if not text:
        return DEFAULT_SPENDING_CATEGORY
    for name in SPENDING_CATEGORIES:
        if name.lower() in text:
            return name
    return DEFAULT_SPENDING_CATEGORY


def unitemized_salary(txn: Transaction) -> Decimal:
    """Return the part of a salary lump sum not covered by its entries."""
    itemized = sum((entry.amount for entry in txn.salary_entries), ZERO)
    return max((txn.salary or ZERO) - itemized, ZERO)


def build_breakdown(
    totals: dict[str, Decimal], order: Iterable[str]
) -> list[CategoryAmount]:
    """Turn category totals into ordered slices with percentages.

    Zero categories are dropped. Percentages are of the breakdown total.
    """
    rows = [(name, totals.get(name, ZERO)) for name in order]
    rows = [(name, amount) for name, amount in rows if amount > 0]
    grand_total = sum((amount for _, amount in rows), ZERO)

    result = []
    for name, amount in rows:
        percentage = (amount / grand_total * 100).quantize(
            PERCENT_PRECISION, rounding=ROUND_HALF_UP
        )
        result.append(CategoryAmount(name=name, amount=amount, percentage=percentage))
    return result


def income_breakdown(transactions: Iterable[Transaction]) -> list[CategoryAmount]:
    """Break income down by source.

    Raw earnings count as Investments, uncredited amounts as Freelancing and
    salary not covered by itemized entries as Salary. Each salary entry is
    classified by its purpose.
    """
    totals = {name: ZERO for name, _ in INCOME_CATEGORIES}
    for txn in transactions:
        if txn.earnings > 0:
            totals[EARNINGS_CATEGORY] += txn.earnings
        if txn.to_be_credit > 0:
            totals[UNCREDITED_CATEGORY] += txn.to_be_credit
        totals[DEFAULT_INCOME_CATEGORY] += unitemized_salary(txn)
        for entry in txn.salary_entries:
            totals[classify_income(entry.purpose)] += entry.amount
    return build_breakdown(totals, INCOME_DISPLAY_ORDER)


def spending_breakdown(transactions: Iterable[Transaction]) -> list[CategoryAmount]:
    """Break spending down by category.

    Raw spending has no purpose and always counts as Others; salary entries
    are matched against the category names.
    """
    totals = {name: ZERO for name in SPENDING_CATEGORIES}
    for txn in transactions:
        if txn.spending > 0:
            totals[DEFAULT_SPENDING_CATEGORY] += txn.spending
        for entry in txn.salary_entries:
            totals[classify_spending(entry.purpose)] += entry.amount
    return build_breakdown(totals, SPENDING_CATEGORIES)
