"""Tests for Database interface returning domain models."""

import pytest
from datetime import date, datetime
from decimal import Decimal

from fintrack.database.factories import create_sqlite_database
from fintrack.domain import entities
from fintrack.domain.errors import NotFoundError, PersistenceError


class TestDatabaseInterface:
    """Tests to verify Database interface returns domain models."""

    def test_get_account_returns_domain_model(self, temp_db):
        """Test that get_account returns a domain Account entity."""
        account_id = temp_db.create_account(name="Test Account", is_active=True)

        account = temp_db.get_account(account_id)

        assert isinstance(account, entities.Account)
        assert account.id == account_id
        assert account.name == "Test Account"
        assert account.is_active
        assert account.account_number == 1
        assert isinstance(account.created_at, datetime)

    def test_get_missing_account_returns_none(self, temp_db):
        assert temp_db.get_account(42) is None

    def test_account_numbers_close_gaps(self, temp_db):
        """Display numbers stay 1..n after a deletion."""
        first = temp_db.create_account(name="A")
        temp_db.create_account(name="B")
        temp_db.create_account(name="C")

        temp_db.delete_account(first)

        assert [a.account_number for a in temp_db.list_accounts()] == [1, 2]

    def test_duplicate_account_name_raises_persistence_error(self, temp_db):
        temp_db.create_account(name="Same")
        with pytest.raises(PersistenceError):
            temp_db.create_account(name="Same")
        # The session is usable after the rollback
        assert [a.name for a in temp_db.list_accounts()] == ["Same"]

    def test_set_active_account_is_exclusive(self, temp_db):
        first = temp_db.create_account(name="A", is_active=True)
        second = temp_db.create_account(name="B")

        temp_db.set_active_account(second)

        assert not temp_db.get_account(first).is_active
        assert temp_db.get_account(second).is_active

    def test_transaction_returns_domain_model(self, temp_db):
        account_id = temp_db.create_account(name="A")
        txn_id = temp_db.create_transaction(
            account_id=account_id, date=date(2024, 3, 1), earnings=Decimal("10.50")
        )

        txn = temp_db.get_transaction(txn_id)

        assert isinstance(txn, entities.Transaction)
        assert isinstance(txn.earnings, Decimal)
        assert txn.earnings == Decimal("10.50")
        assert txn.date == date(2024, 3, 1)

    def test_update_transaction_rejects_unknown_fields(self, temp_db):
        account_id = temp_db.create_account(name="A")
        txn_id = temp_db.create_transaction(account_id=account_id, date=date(2024, 3, 1))

        with pytest.raises(ValueError, match="Unknown transaction field"):
            temp_db.update_transaction(txn_id, category="Food")
        with pytest.raises(NotFoundError):
            temp_db.update_transaction(999, earnings=Decimal("1"))

    def test_salary_entries_are_deleted_with_transaction(self, temp_db):
        account_id = temp_db.create_account(name="A")
        txn_id = temp_db.create_transaction(account_id=account_id, date=date(2024, 3, 1))
        temp_db.add_salary_entry(
            transaction_id=txn_id,
            name="Acme",
            purpose="",
            amount=Decimal("100"),
            date=date(2024, 3, 1),
        )

        [entry] = temp_db.list_salary_entries(account_id=account_id)
        assert isinstance(entry, entities.SalaryEntry)
        assert entry.transaction_id == txn_id

        temp_db.delete_transaction(txn_id)
        assert temp_db.list_salary_entries() == []

    def test_invoice_returns_domain_model(self, temp_db):
        invoice_id = temp_db.create_invoice(
            invoice_number="INV-2024-03-001",
            account_name="Main",
            client_name="Acme",
            date=date(2024, 3, 1),
            due_date=date(2024, 3, 31),
            items=[
                {
                    "description": "Work",
                    "quantity": Decimal("2"),
                    "rate": Decimal("50"),
                    "amount": Decimal("100"),
                }
            ],
            total_amount=Decimal("100"),
        )

        invoice = temp_db.get_invoice(invoice_id)

        assert isinstance(invoice, entities.Invoice)
        assert [item.description for item in invoice.items] == ["Work"]
        assert invoice.total_amount == Decimal("100")

    def test_profile_update_rejects_unknown_fields(self, temp_db):
        with pytest.raises(ValueError, match="Unknown profile field"):
            temp_db.update_profile(email="me@example.com")

    def test_data_persists_across_connections(self, temp_db):
        temp_db.create_account(name="Persisted")
        temp_db.disconnect()

        reopened = create_sqlite_database(database_path=temp_db.database_path)
        try:
            assert [a.name for a in reopened.list_accounts()] == ["Persisted"]
        finally:
            reopened.disconnect()


def test_factory_uses_environment(monkeypatch, tmp_path):
    path = tmp_path / "env.db"
    monkeypatch.setenv("FINTRACK_DB_PATH", str(path))

    db = create_sqlite_database()

    assert db.database_url == f"sqlite:///{path}"
