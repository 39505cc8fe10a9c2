"""Shared pytest fixtures for fintrack tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal
import pytest

from fintrack.database.factories import create_sqlite_database
from fintrack.database.local_store import LocalStore
from fintrack.domain.account import AccountService
from fintrack.domain.entities import Transaction
from fintrack.domain.invoice import InvoiceService
from fintrack.domain.profile import ProfileService
from fintrack.domain.summary import SummaryService
from fintrack.domain.transaction import TransactionService


def make_txn(
    on_date: date,
    investment="0",
    earnings="0",
    spending="0",
    to_be_credit="0",
    salary="0",
    debt="0",
    interest_rate="0",
    salary_entries=(),
    txn_id: int = 1,
    account_id: int = 1,
) -> Transaction:
    """Build an in-memory transaction for engine tests."""
    return Transaction(
        id=txn_id,
        account_id=account_id,
        date=on_date,
        investment=Decimal(investment),
        earnings=Decimal(earnings),
        spending=Decimal(spending),
        to_be_credit=Decimal(to_be_credit),
        salary=Decimal(salary),
        debt=Decimal(debt),
        interest_rate=Decimal(interest_rate),
        salary_entries=tuple(salary_entries),
    )


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def local_store(tmp_path):
    """Create a local store in a temporary directory."""
    return LocalStore(tmp_path / "local")


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def summary_service(temp_db):
    """Create a SummaryService with a temporary database."""
    return SummaryService(temp_db)


@pytest.fixture
def invoice_service(temp_db):
    """Create an InvoiceService with a temporary database."""
    return InvoiceService(temp_db)


@pytest.fixture
def profile_service(temp_db):
    """Create a ProfileService with a temporary database."""
    return ProfileService(temp_db)


@pytest.fixture
def sample_account(account_service):
    """Create a sample account for testing."""
    account_id = account_service.create_account(name="Test Account")
    return account_service.get_account(account_id)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def run_cli(cli_runner, temp_db, local_store):
    """Invoke the CLI against the temporary database and local store."""
    from fintrack.cli.main import cli

    def invoke(*args, input=None):
        result = cli_runner.invoke(
            cli,
            ["--db-path", temp_db.database_path, "--data-dir", str(local_store.root), *args],
            input=input,
        )
        # Drop cached ORM state so reads see what the command wrote
        temp_db.disconnect()
        return result

    return invoke
