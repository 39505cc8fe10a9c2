"""CSV and spreadsheet export of transactions and aggregated buckets."""

import csv
import logging
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import IO, Iterable, Optional, Sequence

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font
from openpyxl.utils import get_column_letter

from fintrack.domain.aggregation import calculate_profit, monthly_interest
from fintrack.domain.entities import ZERO, AccountSummary, PeriodBucket, SalaryEntry, Transaction
from fintrack.utils.amount_parser import parse_amount
from fintrack.utils.money import CURRENCIES, quantize_money, resolve_currency

logger = logging.getLogger(__name__)

BUCKET_HEADERS = (
    "Period",
    "Investment",
    "Earnings",
    "Spending",
    "To Be Credit",
    "Salary",
    "Profit",
    "ROI",
)
BUCKET_FIELDS = ("investment", "earnings", "spending", "to_be_credit", "salary", "profit")

TRANSACTION_HEADERS = (
    "Date",
    "Investment",
    "Earnings",
    "Spending",
    "To Be Credit",
    "Salary",
    "Debt",
    "Interest Rate",
    "Net",
    "ID",
)

SALARY_HEADERS = ("Name", "Date", "Purpose", "Amount")


def _money(value: Decimal) -> str:
    return str(quantize_money(value))


def transaction_net(txn: Transaction) -> Decimal:
    """Return a transaction's profit less one month of interest on its debt."""
    profit = calculate_profit(
        txn.earnings, txn.investment, txn.spending, txn.to_be_credit, txn.salary or ZERO
    )
    return profit - monthly_interest(txn.debt, txn.interest_rate)


def write_buckets_csv(buckets: Iterable[PeriodBucket], out: IO[str]) -> int:
    """Write one row per bucket. ROI is written with two decimals.

    Returns:
        Number of data rows written
    """
    writer = csv.writer(out)
    writer.writerow(BUCKET_HEADERS)
    count = 0
    for bucket in buckets:
        writer.writerow(
            [bucket.label]
            + [_money(getattr(bucket, name)) for name in BUCKET_FIELDS]
            + [f"{bucket.roi:.2f}"]
        )
        count += 1
    return count


def read_buckets_csv(source: IO[str]) -> list[dict]:
    """Parse a bucket CSV back into labels and Decimal amounts.

    Raises:
        ValueError: If a header is missing or an amount cannot be parsed
    """
    reader = csv.DictReader(source)
    missing = [h for h in BUCKET_HEADERS if h not in (reader.fieldnames or [])]
    if missing:
        raise ValueError(f"Missing column(s): {', '.join(missing)}")

    rows = []
    for row in reader:
        parsed = {"label": row["Period"]}
        for header, name in zip(BUCKET_HEADERS[1:-1], BUCKET_FIELDS):
            parsed[name] = parse_amount(row[header])
        parsed["roi"] = parse_amount(row["ROI"])
        rows.append(parsed)
    return rows


def write_transactions_csv(transactions: Iterable[Transaction], out: IO[str]) -> int:
    """Write raw transactions with their net (profit less monthly interest)."""
    writer = csv.writer(out)
    writer.writerow(TRANSACTION_HEADERS)
    count = 0
    for txn in transactions:
        writer.writerow(
            [
                txn.date.isoformat(),
                _money(txn.investment),
                _money(txn.earnings),
                _money(txn.spending),
                _money(txn.to_be_credit),
                _money(txn.salary),
                _money(txn.debt),
                f"{txn.interest_rate:.2f}",
                _money(transaction_net(txn)),
                txn.id,
            ]
        )
        count += 1
    return count


def write_salary_csv(entries: Iterable[SalaryEntry], out: IO[str]) -> int:
    """Write salary entries as name, date, purpose and amount."""
    writer = csv.writer(out)
    writer.writerow(SALARY_HEADERS)
    count = 0
    for entry in entries:
        writer.writerow([entry.name, entry.date.isoformat(), entry.purpose, _money(entry.amount)])
        count += 1
    return count


def currency_number_format(currency: Optional[str] = None) -> str:
    """Return an Excel number format showing the currency symbol."""
    code = resolve_currency(currency)
    symbol = CURRENCIES[code]
    if code == "EUR":
        return f'#,##0.00 "{symbol}";-#,##0.00 "{symbol}"'
    return f'"{symbol}"#,##0.00;-"{symbol}"#,##0.00'


def build_report_workbook(
    title: str,
    summary: AccountSummary,
    buckets: Sequence[PeriodBucket],
    currency: Optional[str] = None,
    subtitle: Optional[str] = None,
) -> Workbook:
    """Build a spreadsheet with summary figures and a bucket table."""
    wb = Workbook()
    ws = wb.active
    ws.title = "Report"

    bold = Font(bold=True)
    money_fmt = currency_number_format(currency)

    def write_amount(r: int, c: int, val: Decimal, is_bold: bool = False):
        cell = ws.cell(r, c)
        cell.value = float(quantize_money(val))
        cell.number_format = money_fmt
        if is_bold:
            cell.font = bold

    ws["A1"] = title
    ws["A1"].font = Font(bold=True, size=14)
    if subtitle:
        ws["A2"] = subtitle

    r = 4
    ws.cell(r, 1).value = "Summary"
    ws.cell(r, 1).font = bold
    r += 1
    summary_rows = [
        ("Remaining", summary.remaining),
        ("Income", summary.income),
        ("Expenses", summary.expenses),
        ("To Be Credited", summary.to_be_credit),
        ("Salary", summary.salary),
    ]
    if summary.show_debt:
        summary_rows += [("Debt", summary.debt), ("Monthly Interest", summary.interest)]
    for label, value in summary_rows:
        ws.cell(r, 1).value = label
        write_amount(r, 2, value)
        r += 1

    r += 1
    for c, header in enumerate(BUCKET_HEADERS, start=1):
        cell = ws.cell(r, c)
        cell.value = header
        cell.font = bold
        cell.alignment = Alignment(horizontal="center")
    r += 1

    for bucket in buckets:
        ws.cell(r, 1).value = bucket.label
        for c, name in enumerate(BUCKET_FIELDS, start=2):
            write_amount(r, c, getattr(bucket, name))
        roi_cell = ws.cell(r, len(BUCKET_HEADERS))
        roi_cell.value = float(bucket.roi) / 100
        roi_cell.number_format = "0.00%"
        r += 1

    r += 1
    ws.cell(r, 1).value = "Generated " + datetime.now().strftime("%b %d, %Y %I:%M %p")

    ws.column_dimensions["A"].width = 20
    for c in range(2, len(BUCKET_HEADERS) + 1):
        ws.column_dimensions[get_column_letter(c)].width = 16

    return wb


class ExportService:
    """Service writing export files to disk."""

    def write_csv(self, path: str | Path, writer_fn, rows) -> int:
        """Write rows to a CSV file with the given row writer.

        Returns:
            Number of data rows written
        """
        path = Path(path)
        with open(path, "w", newline="", encoding="utf-8") as f:
            count = writer_fn(rows, f)
        logger.info("Exported %d row(s) to %s", count, path)
        return count

    def export_buckets(self, buckets: Iterable[PeriodBucket], path: str | Path) -> int:
        """Export aggregated buckets to CSV."""
        return self.write_csv(path, write_buckets_csv, buckets)

    def export_transactions(self, transactions: Iterable[Transaction], path: str | Path) -> int:
        """Export raw transactions to CSV."""
        return self.write_csv(path, write_transactions_csv, transactions)

    def export_salary_entries(self, entries: Iterable[SalaryEntry], path: str | Path) -> int:
        """Export salary entries to CSV."""
        return self.write_csv(path, write_salary_csv, entries)

    def export_report(
        self,
        path: str | Path,
        title: str,
        summary: AccountSummary,
        buckets: Sequence[PeriodBucket],
        currency: Optional[str] = None,
        subtitle: Optional[str] = None,
    ) -> None:
        """Write the spreadsheet report."""
        wb = build_report_workbook(title, summary, buckets, currency=currency, subtitle=subtitle)
        wb.save(str(path))
        logger.info("Exported report to %s", path)
