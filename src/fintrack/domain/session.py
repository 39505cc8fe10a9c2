"""Explicit per-command context for summary computation."""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from fintrack.domain.aggregation import filter_by_month, filter_by_year
from fintrack.domain.entities import Account, Transaction


@dataclass(frozen=True)
class SummaryOptions:
    """Options that change how summary figures are computed.

    Attributes:
        include_to_be_credit: Count amounts not yet credited in "remaining"
    """

    include_to_be_credit: bool = True


@dataclass(frozen=True)
class FinanceSession:
    """One account's transactions loaded for a single command.

    Every summary is recomputed from ``transactions``; nothing here is
    mutated after loading.
    """

    account: Account
    transactions: tuple[Transaction, ...]
    view_date: date
    show_debt: bool = False
    currency: Optional[str] = None
    options: SummaryOptions = field(default_factory=SummaryOptions)

    @property
    def view_year(self) -> int:
        return self.view_date.year

    def month_transactions(self) -> list[Transaction]:
        """Transactions in the viewed calendar month."""
        return filter_by_month(self.transactions, self.view_date.year, self.view_date.month)

    def year_transactions(self) -> list[Transaction]:
        """Transactions in the viewed calendar year."""
        return filter_by_year(self.transactions, self.view_date.year)
