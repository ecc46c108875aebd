"""Category and chart-of-account domain services.

Both only classify transactions; neither has any effect on balances.
"""

from typing import Optional

from bankledger.database.base import Database
from bankledger.domain.entities import Category, ChartOfAccount
from bankledger.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    ValidationError,
    category_not_found,
    chart_of_account_not_found,
    duplicate_chart_of_account,
)


def _require_text(value: Optional[str], field: str, label: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(f"{label} is required", field=field)
    return value.strip()


class CategoryService:
    """Service for managing categories."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_category(self, owner_user_id: int, description: str, dre_range: str) -> int:
        """Create a category.

        Args:
            owner_user_id: Acting user
            description: Category description
            dre_range: Income statement line the category rolls up to

        Returns:
            Category ID
        """
        description = _require_text(description, "description", "Description")
        dre_range = _require_text(dre_range, "dre_range", "DRE range")
        return self.db.create_category(owner_user_id, description, dre_range)

    def get_category(self, owner_user_id: int, category_id: int) -> Optional[Category]:
        return self.db.get_category(owner_user_id, category_id)

    def list_categories(self, owner_user_id: int) -> list[Category]:
        return self.db.list_categories(owner_user_id)

    def update_category(
        self,
        owner_user_id: int,
        category_id: int,
        description: Optional[str] = None,
        dre_range: Optional[str] = None,
    ) -> None:
        """Update a category's description and/or DRE range."""
        if description is not None:
            description = _require_text(description, "description", "Description")
        if dre_range is not None:
            dre_range = _require_text(dre_range, "dre_range", "DRE range")
        self.db.update_category(owner_user_id, category_id, description=description, dre_range=dre_range)

    def delete_category(self, owner_user_id: int, category_id: int) -> None:
        """Delete a category that no chart of account uses.

        Raises:
            NotFoundError: If category not found
            DependencyError: If charts of accounts are filed under it
        """
        with self.db.unit_of_work():
            if self.db.get_category(owner_user_id, category_id) is None:
                raise NotFoundError(category_not_found(category_id))
            count = self.db.get_category_chart_count(owner_user_id, category_id)
            if count > 0:
                raise DependencyError(
                    f"Cannot delete category {category_id}: "
                    f"{count} chart{'s' if count != 1 else ''} of accounts use it"
                )
            self.db.delete_category(owner_user_id, category_id)


class ChartOfAccountService:
    """Service for managing charts of accounts (plans)."""

    def __init__(self, db: Database):
        """Initialize chart of account service.

        Args:
            db: Database instance
        """
        self.db = db

    def _check_category(self, owner_user_id: int, category_id: Optional[int]) -> None:
        if category_id is not None and self.db.get_category(owner_user_id, category_id) is None:
            raise NotFoundError(category_not_found(category_id))

    def _check_description_free(
        self, owner_user_id: int, description: str, chart_of_account_id: Optional[int] = None
    ) -> None:
        existing = self.db.get_chart_of_account_by_description(owner_user_id, description)
        if existing is not None and existing.id != chart_of_account_id:
            raise ConflictError(duplicate_chart_of_account(description))

    def create_chart_of_account(
        self, owner_user_id: int, description: str, category_id: Optional[int] = None
    ) -> int:
        """Create a chart of account.

        Args:
            owner_user_id: Acting user
            description: Description, unique per user (imports look plans up by it)
            category_id: Optional category the plan belongs to

        Returns:
            Chart of account ID
        """
        description = _require_text(description, "description", "Description")
        self._check_category(owner_user_id, category_id)
        self._check_description_free(owner_user_id, description)
        return self.db.create_chart_of_account(owner_user_id, description, category_id)

    def get_chart_of_account(self, owner_user_id: int, chart_of_account_id: int) -> Optional[ChartOfAccount]:
        return self.db.get_chart_of_account(owner_user_id, chart_of_account_id)

    def get_chart_of_account_by_description(
        self, owner_user_id: int, description: str
    ) -> Optional[ChartOfAccount]:
        return self.db.get_chart_of_account_by_description(owner_user_id, description)

    def list_charts_of_accounts(self, owner_user_id: int) -> list[ChartOfAccount]:
        return self.db.list_charts_of_accounts(owner_user_id)

    def update_chart_of_account(
        self,
        owner_user_id: int,
        chart_of_account_id: int,
        description: Optional[str] = None,
        category_id: Optional[int] = None,
    ) -> None:
        """Update a chart of account's description and/or category."""
        if description is not None:
            description = _require_text(description, "description", "Description")
            self._check_description_free(owner_user_id, description, chart_of_account_id)
        self._check_category(owner_user_id, category_id)
        self.db.update_chart_of_account(
            owner_user_id, chart_of_account_id, description=description, category_id=category_id
        )

    def delete_chart_of_account(self, owner_user_id: int, chart_of_account_id: int) -> None:
        """Delete a chart of account that no transaction uses.

        Raises:
            NotFoundError: If chart of account not found
            DependencyError: If transactions are classified under it
        """
        with self.db.unit_of_work():
            if self.db.get_chart_of_account(owner_user_id, chart_of_account_id) is None:
                raise NotFoundError(chart_of_account_not_found(chart_of_account_id))
            count = self.db.get_chart_transaction_count(owner_user_id, chart_of_account_id)
            if count > 0:
                raise DependencyError(
                    f"Cannot delete chart of account {chart_of_account_id}: "
                    f"{count} transaction{'s' if count != 1 else ''} use it"
                )
            self.db.delete_chart_of_account(owner_user_id, chart_of_account_id)
