"""Summary and analysis domain service."""

import logging
from datetime import date
from typing import Optional

from fintrack.database.base import Database
from fintrack.domain import aggregation
from fintrack.domain.aggregation import (
    aggregate_transactions,
    calculate_remaining,
    find_best_and_worst,
    monthly_interest,
    rank_by_roi,
    total_bucket,
)
from fintrack.domain.categorization import income_breakdown, spending_breakdown
from fintrack.domain.entities import (
    ZERO,
    AccountSummary,
    AllAccountsAnalysis,
    CalendarEntry,
    CategoryAmount,
    PeriodBucket,
    TimeUnit,
    YearlyAnalysis,
)
from fintrack.domain.errors import NotFoundError, account_not_found
from fintrack.domain.session import FinanceSession, SummaryOptions

logger = logging.getLogger(__name__)


class SummaryService:
    """Service for building summaries from one loaded session."""

    def __init__(self, db: Database):
        """Initialize summary service.

        Args:
            db: Database instance
        """
        self.db = db

    def load_session(
        self,
        account_id: int,
        view_date: Optional[date] = None,
        options: Optional[SummaryOptions] = None,
    ) -> FinanceSession:
        """Load an account's transactions and settings into a session.

        Args:
            account_id: Account to summarize
            view_date: Any date in the month being viewed (defaults to today)
            options: Summary options (defaults to SummaryOptions())

        Raises:
            NotFoundError: If account not found
        """
        account = self.db.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))

        profile = self.db.get_profile()
        transactions = tuple(self.db.list_transactions(account_id=account_id))
        logger.debug(
            "Loaded %d transaction(s) for account '%s'", len(transactions), account.name
        )
        return FinanceSession(
            account=account,
            transactions=transactions,
            view_date=view_date or date.today(),
            show_debt=profile.show_debt_feature,
            currency=profile.currency,
            options=options or SummaryOptions(),
        )

    def account_summary(self, session: FinanceSession) -> AccountSummary:
        """Compute the summary cards for the viewed month.

        Debt and interest are only counted when the debt feature is on;
        interest then reduces "remaining".
        """
        txns = session.month_transactions()
        totals = total_bucket(txns)

        debt = interest = ZERO
        if session.show_debt:
            for txn in txns:
                debt += txn.debt or ZERO
                interest += monthly_interest(txn.debt, txn.interest_rate)

        remaining = calculate_remaining(
            earnings=totals.earnings,
            investment=totals.investment,
            spending=totals.spending,
            to_be_credit=totals.to_be_credit,
            salary=totals.salary,
            interest=interest,
            include_to_be_credit=session.options.include_to_be_credit,
        )
        return AccountSummary(
            remaining=remaining,
            income=totals.earnings,
            expenses=totals.investment + totals.spending,
            to_be_credit=totals.to_be_credit,
            salary=totals.salary,
            debt=debt,
            interest=interest,
            show_debt=session.show_debt,
            salary_entries=tuple(
                entry for txn in txns for entry in txn.salary_entries
            ),
        )

    def monthly_overview(
        self, session: FinanceSession, year: Optional[int] = None
    ) -> list[PeriodBucket]:
        """Return the 12-row month table for a year (defaults to the viewed year)."""
        return aggregation.monthly_overview(session.transactions, year or session.view_year)

    def yearly_analysis(
        self, session: FinanceSession, year: Optional[int] = None
    ) -> YearlyAnalysis:
        """Rank a year's months by ROI.

        The best month is the highest ROI and the worst the lowest; months
        with equal ROI keep chronological order.
        """
        year = year or session.view_year
        months = aggregate_transactions(session.transactions, TimeUnit.MONTH, year=year)
        ranked = rank_by_roi(months)
        year_txns = aggregation.filter_by_year(session.transactions, year)
        return YearlyAnalysis(
            totals=total_bucket(year_txns, label=str(year), key=f"{year:04d}"),
            months_by_roi=tuple(ranked),
            chart=tuple(months),
            best_month=ranked[0] if ranked else None,
            worst_month=ranked[-1] if ranked else None,
        )

    def daily_trend(
        self,
        session: FinanceSession,
        year: Optional[int] = None,
        month: Optional[int] = None,
    ) -> list[PeriodBucket]:
        """Return per-day buckets for a month (defaults to the viewed month)."""
        year = year or session.view_year
        month = month or session.view_date.month
        txns = aggregation.filter_by_month(session.transactions, year, month)
        return aggregate_transactions(txns, TimeUnit.DAY)

    def yearly_trend(self, session: FinanceSession) -> list[PeriodBucket]:
        """Return one bucket per year with activity, ascending."""
        return aggregate_transactions(session.transactions, TimeUnit.YEAR)

    def calendar(self, session: FinanceSession) -> list[CalendarEntry]:
        """Return calendar entries for the viewed month."""
        return aggregation.calendar_entries(
            session.month_transactions(), show_debt=session.show_debt
        )

    def income_breakdown(
        self, session: FinanceSession, year: Optional[int] = None
    ) -> list[CategoryAmount]:
        """Break income down by source, over all time or one year."""
        txns = session.transactions
        if year is not None:
            txns = aggregation.filter_by_year(txns, year)
        return income_breakdown(txns)

    def spending_breakdown(
        self, session: FinanceSession, year: Optional[int] = None
    ) -> list[CategoryAmount]:
        """Break spending down by category, over all time or one year."""
        txns = session.transactions
        if year is not None:
            txns = aggregation.filter_by_year(txns, year)
        return spending_breakdown(txns)

    def all_accounts_analysis(self, year: Optional[int] = None) -> AllAccountsAnalysis:
        """Aggregate every account together.

        Yearly buckets cover all time; month buckets cover one year (defaults
        to the current year). Best and worst months are picked by profit.
        """
        year = year or date.today().year
        per_account: dict[str, PeriodBucket] = {}
        everything = []
        for account in self.db.list_accounts():
            txns = self.db.list_transactions(account_id=account.id)
            everything.extend(txns)
            per_account[account.name] = total_bucket(
                txns, label=account.name, key=str(account.id)
            )

        monthly = aggregate_transactions(everything, TimeUnit.MONTH, year=year)
        best, worst = find_best_and_worst(monthly, metric="profit")
        return AllAccountsAnalysis(
            totals=total_bucket(everything),
            yearly=tuple(aggregate_transactions(everything, TimeUnit.YEAR)),
            monthly=tuple(monthly),
            best_month=best,
            worst_month=worst,
            per_account=per_account,
        )
