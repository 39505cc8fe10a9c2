"""Profile and feature settings domain service."""

from decimal import Decimal
from typing import Optional

from fintrack.database.base import Database
from fintrack.domain.entities import Profile
from fintrack.domain.errors import ValidationError
from fintrack.utils.money import CURRENCIES


class ProfileService:
    """Service for the single user profile."""

    def __init__(self, db: Database):
        """Initialize profile service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_profile(self) -> Profile:
        """Get the profile, creating the default one on first use."""
        return self.db.get_profile()

    def update_profile(
        self,
        name: Optional[str] = None,
        phone: Optional[str] = None,
        currency: Optional[str] = None,
    ) -> Profile:
        """Update personal details.

        Raises:
            ValidationError: If the name is blank or the currency unsupported
        """
        fields = {}
        if name is not None:
            if not name.strip():
                raise ValidationError("Name cannot be empty")
            fields["name"] = name.strip()
        if phone is not None:
            fields["phone"] = phone.strip() or None
        if currency is not None:
            code = currency.strip().upper()
            if code not in CURRENCIES:
                raise ValidationError(
                    f"Unsupported currency '{currency}'. Choose one of: {', '.join(CURRENCIES)}"
                )
            fields["currency"] = code

        if fields:
            self.db.update_profile(**fields)
        return self.db.get_profile()

    def set_features(
        self,
        show_debt_feature: Optional[bool] = None,
        show_all_accounts_analysis: Optional[bool] = None,
        debt_principal: Optional[Decimal] = None,
        debt_interest_rate: Optional[Decimal] = None,
        clear_debt: bool = False,
    ) -> Profile:
        """Toggle features and set the profile-level debt figures.

        Args:
            clear_debt: Remove the stored debt principal and rate

        Raises:
            ValidationError: If a debt figure is negative
        """
        fields = {}
        if show_debt_feature is not None:
            fields["show_debt_feature"] = show_debt_feature
        if show_all_accounts_analysis is not None:
            fields["show_all_accounts_analysis"] = show_all_accounts_analysis

        if clear_debt:
            fields["debt_principal"] = None
            fields["debt_interest_rate"] = None
        else:
            if debt_principal is not None:
                if debt_principal < 0:
                    raise ValidationError("Debt principal cannot be negative")
                fields["debt_principal"] = debt_principal
            if debt_interest_rate is not None:
                if debt_interest_rate < 0:
                    raise ValidationError("Interest rate cannot be negative")
                fields["debt_interest_rate"] = debt_interest_rate

        if fields:
            self.db.update_profile(**fields)
        return self.db.get_profile()
