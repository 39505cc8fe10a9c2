"""Savings goals and allocation of available savings."""

import logging
import uuid
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from fintrack.database.local_store import LocalStore
from fintrack.domain.entities import ZERO, SavingsGoal, Transaction
from fintrack.domain.errors import NotFoundError, ValidationError, goal_not_found
from fintrack.utils.amount_parser import coerce_amount

logger = logging.getLogger(__name__)

SAVINGS_GOALS_KEY = "savings_goals"

GOAL_CATEGORIES = (
    "Emergency Fund",
    "Vacation",
    "Home",
    "Car",
    "Education",
    "Retirement",
    "Other",
)


def available_savings(transactions: Iterable[Transaction]) -> Decimal:
    """Return income minus outgoings across transactions, floored at zero."""
    total = ZERO
    for txn in transactions:
        income = txn.earnings + (txn.salary or ZERO) + txn.to_be_credit
        expenses = txn.spending + txn.investment
        total += income - expenses
    return max(total, ZERO)


def allocate_savings(goals: Sequence[SavingsGoal], available: Decimal) -> list[SavingsGoal]:
    """Distribute available savings over goals.

    When savings cover every goal's remaining need, each unfinished goal is
    completed. Otherwise each unfinished goal receives a share proportional to
    its remaining need, capped at that need. This is a single pass: shares
    trimmed by the cap are not redistributed. Finished goals are untouched.
    """
    if available <= 0:
        return list(goals)

    total_needed = sum((goal.remaining for goal in goals), ZERO)
    if total_needed == 0:
        return list(goals)

    if available >= total_needed:
        return [
            replace(goal, current_amount=goal.target_amount) if goal.remaining > 0 else goal
            for goal in goals
        ]

    allocated = []
    for goal in goals:
        remaining = goal.remaining
        if remaining <= 0:
            allocated.append(goal)
            continue
        share = min(remaining, remaining / total_needed * available)
        allocated.append(replace(goal, current_amount=goal.current_amount + share))
    return allocated


@dataclass(frozen=True)
class AllocationResult:
    """Outcome of an allocation run."""

    goals: tuple[SavingsGoal, ...]
    available: Decimal
    fully_funded: bool


def goal_to_dict(goal: SavingsGoal) -> dict:
    """Serialize a goal for the local store (amounts as strings)."""
    return {
        "id": goal.id,
        "name": goal.name,
        "target_amount": str(goal.target_amount),
        "current_amount": str(goal.current_amount),
        "deadline": goal.deadline,
        "category": goal.category,
    }


def goal_from_dict(data: dict) -> SavingsGoal:
    """Deserialize a goal, tolerating missing or non-numeric fields."""
    return SavingsGoal(
        id=str(data.get("id") or uuid.uuid4()),
        name=str(data.get("name") or ""),
        target_amount=coerce_amount(data.get("target_amount")),
        current_amount=coerce_amount(data.get("current_amount")),
        deadline=data.get("deadline") or None,
        category=data.get("category") or "Other",
    )


class GoalService:
    """Service for managing savings goals in the local store."""

    def __init__(self, store: LocalStore):
        """Initialize goal service.

        Args:
            store: Local key-value store
        """
        self.store = store

    def list_goals(self) -> list[SavingsGoal]:
        """Load all savings goals."""
        goals = []
        for item in self.store.load(SAVINGS_GOALS_KEY):
            if not isinstance(item, dict):
                logger.warning("Skipping malformed savings goal: %r", item)
                continue
            goals.append(goal_from_dict(item))
        return goals

    def _save(self, goals: Iterable[SavingsGoal]) -> None:
        self.store.save(SAVINGS_GOALS_KEY, [goal_to_dict(goal) for goal in goals])

    def _validate(self, name: str, target_amount: Decimal, category: str) -> None:
        if not name or not name.strip():
            raise ValidationError("Savings goal name cannot be empty")
        if target_amount <= 0:
            raise ValidationError("Savings goal target must be greater than zero")
        if category not in GOAL_CATEGORIES:
            raise ValidationError(
                f"Unknown goal category '{category}'. Choose one of: {', '.join(GOAL_CATEGORIES)}"
            )

    def add_goal(
        self,
        name: str,
        target_amount: Decimal,
        current_amount: Decimal = ZERO,
        deadline: Optional[str] = None,
        category: str = "Emergency Fund",
    ) -> SavingsGoal:
        """Create a savings goal.

        Raises:
            ValidationError: If name is empty, target is not positive or the
                category is unknown
        """
        self._validate(name, target_amount, category)
        goal = SavingsGoal(
            id=str(uuid.uuid4()),
            name=name.strip(),
            target_amount=target_amount,
            current_amount=current_amount,
            deadline=deadline,
            category=category,
        )
        self._save(self.list_goals() + [goal])
        return goal

    def get_goal(self, goal_id: str) -> SavingsGoal:
        """Get a goal by ID (a unique ID prefix is accepted).

        Raises:
            NotFoundError: If no single goal matches
        """
        matches = [goal for goal in self.list_goals() if goal.id.startswith(goal_id)]
        if len(matches) != 1:
            raise NotFoundError(goal_not_found(goal_id))
        return matches[0]

    def update_goal(
        self,
        goal_id: str,
        name: Optional[str] = None,
        target_amount: Optional[Decimal] = None,
        current_amount: Optional[Decimal] = None,
        deadline: Optional[str] = None,
        category: Optional[str] = None,
    ) -> SavingsGoal:
        """Update fields of an existing goal."""
        goal = self.get_goal(goal_id)
        updated = replace(
            goal,
            name=name.strip() if name is not None else goal.name,
            target_amount=target_amount if target_amount is not None else goal.target_amount,
            current_amount=current_amount if current_amount is not None else goal.current_amount,
            deadline=deadline if deadline is not None else goal.deadline,
            category=category if category is not None else goal.category,
        )
        self._validate(updated.name, updated.target_amount, updated.category)
        self._save(updated if g.id == goal.id else g for g in self.list_goals())
        return updated

    def delete_goal(self, goal_id: str) -> SavingsGoal:
        """Delete a goal and return it."""
        goal = self.get_goal(goal_id)
        self._save(g for g in self.list_goals() if g.id != goal.id)
        return goal

    def allocate(self, transactions: Iterable[Transaction]) -> AllocationResult:
        """Allocate available savings from transactions across stored goals."""
        goals = self.list_goals()
        available = available_savings(transactions)
        total_needed = sum((goal.remaining for goal in goals), ZERO)
        allocated = allocate_savings(goals, available)
        if allocated != goals:
            self._save(allocated)
        return AllocationResult(
            goals=tuple(allocated),
            available=available,
            fully_funded=bool(goals) and available >= total_needed and available > 0,
        )
