"""Tests for account management."""

import pytest
from fintrack.domain.account import DEFAULT_ACCOUNT_NAME
from fintrack.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    ValidationError,
)


def test_create_account(account_service):
    """Test creating an account."""
    account_id = account_service.create_account(name="Business")

    account = account_service.get_account(account_id)
    assert account is not None
    assert account.name == "Business"
    assert account.account_number == 1
    assert account.is_active


def test_only_first_account_starts_active(account_service):
    first = account_service.create_account(name="First")
    second = account_service.create_account(name="Second")

    assert account_service.get_account(first).is_active
    assert not account_service.get_account(second).is_active


def test_account_numbers_follow_creation_order(account_service):
    for name in ("A", "B", "C"):
        account_service.create_account(name=name)

    accounts = account_service.list_accounts()

    assert [a.name for a in accounts] == ["A", "B", "C"]
    assert [a.account_number for a in accounts] == [1, 2, 3]


def test_create_duplicate_account(account_service):
    """Test that duplicate account names are rejected."""
    account_service.create_account(name="Business")

    with pytest.raises(ConflictError, match="already exists"):
        account_service.create_account(name=" Business ")


def test_create_blank_account(account_service):
    with pytest.raises(ValidationError):
        account_service.create_account(name="   ")


def test_ensure_default_account(account_service):
    """A fresh database gets one active default account."""
    account = account_service.ensure_default_account()

    assert account.name == DEFAULT_ACCOUNT_NAME
    assert account.is_active
    assert account_service.ensure_default_account().id == account.id
    assert len(account_service.list_accounts()) == 1


def test_get_active_account_without_accounts(account_service):
    with pytest.raises(NotFoundError):
        account_service.get_active_account()


def test_switch_account_keeps_one_active(account_service):
    first = account_service.create_account(name="First")
    second = account_service.create_account(name="Second")

    switched = account_service.switch_account(second)

    assert switched.is_active
    assert not account_service.get_account(first).is_active
    active = [a for a in account_service.list_accounts() if a.is_active]
    assert [a.id for a in active] == [second]


def test_switch_missing_account(account_service):
    with pytest.raises(NotFoundError):
        account_service.switch_account(999)


def test_rename_account(account_service, sample_account):
    account_service.rename_account(sample_account.id, "Renamed")
    assert account_service.get_account(sample_account.id).name == "Renamed"

    # Renaming to its own name is not a conflict
    account_service.rename_account(sample_account.id, "Renamed")


def test_rename_to_existing_name(account_service, sample_account):
    account_service.create_account(name="Other")
    with pytest.raises(ConflictError):
        account_service.rename_account(sample_account.id, "Other")


def test_cannot_delete_last_account(account_service, sample_account):
    with pytest.raises(DependencyError, match="at least one account"):
        account_service.delete_account(sample_account.id)


def test_delete_account_removes_transactions(
    account_service, transaction_service, sample_account
):
    from datetime import date

    other_id = account_service.create_account(name="Other")
    transaction_service.create_entry(sample_account.id, date(2024, 3, 1), earnings=100)
    transaction_service.create_entry(sample_account.id, date(2024, 3, 2), spending=50)
    transaction_service.create_entry(other_id, date(2024, 3, 1), earnings=10)

    deleted = account_service.delete_account(sample_account.id)

    assert deleted == 2
    assert account_service.get_account(sample_account.id) is None
    assert transaction_service.list_entries(account_id=sample_account.id) == []
    assert len(transaction_service.list_entries()) == 1


def test_deleting_active_account_activates_first_remaining(account_service):
    first = account_service.create_account(name="First")
    second = account_service.create_account(name="Second")
    third = account_service.create_account(name="Third")
    account_service.switch_account(third)

    account_service.delete_account(third)

    assert account_service.get_active_account().id == first
    assert not account_service.get_account(second).is_active


def test_account_cli_flow(run_cli):
    result = run_cli("account", "create", "Business")
    assert result.exit_code == 0, result.output
    assert "Created account 'Business'" in result.output

    result = run_cli("account", "list")
    assert result.exit_code == 0, result.output
    assert "Main Account" in result.output
    assert "Business" in result.output

    result = run_cli("account", "switch", "business")
    assert result.exit_code == 0, result.output
    assert "Switched to 'Business'" in result.output

    result = run_cli("account", "delete", "Business", "--yes")
    assert result.exit_code == 0, result.output
    assert "Deleted account 'Business'" in result.output


def test_account_cli_errors(run_cli):
    run_cli("account", "create", "Business")

    result = run_cli("account", "create", "Business")
    assert result.exit_code == 1
    assert "Error: Account with name 'Business' already exists" in result.output

    result = run_cli("account", "switch", "Nope")
    assert result.exit_code == 1
    assert "Error:" in result.output
