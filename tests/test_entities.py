"""Tests for domain entities."""

import dataclasses
from datetime import date
from decimal import Decimal

import pytest

from fintrack.domain.entities import SavingsGoal, Transaction


def test_transaction_defaults():
    txn = Transaction(id=1, account_id=1, date=date(2024, 3, 1))

    assert txn.investment == Decimal("0")
    assert txn.salary == Decimal("0")
    assert txn.salary_entries == ()


def test_entities_are_immutable():
    txn = Transaction(id=1, account_id=1, date=date(2024, 3, 1))
    with pytest.raises(dataclasses.FrozenInstanceError):
        txn.earnings = Decimal("1")


@pytest.mark.parametrize(
    "target,current,expected",
    [("1000", "250", "750"), ("1000", "1000", "0"), ("1000", "1200", "0")],
)
def test_savings_goal_remaining(target, current, expected):
    goal = SavingsGoal(
        id="g", name="Trip", target_amount=Decimal(target), current_amount=Decimal(current)
    )
    assert goal.remaining == Decimal(expected)
