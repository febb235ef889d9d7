"""
Category service: owned income/expense categories.
"""

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from finance_tracker.errors import Conflict, NotFound
from finance_tracker.models.category import Category
from finance_tracker.models.enums import TransactionType
from finance_tracker.models.transaction import Transaction
from finance_tracker.schemas.category import CategoryCreate
from finance_tracker.services.api_key_gate import OwnerScope


class CategoryService:

    def __init__(self, db: Session):
        self.db = db

    def create_category(
        self, scope: OwnerScope, request: CategoryCreate
    ) -> Category:
        category = Category(
            owner_id=scope.owner_id,
            name=request.name,
            type=request.type,
        )
        self.db.add(category)
        self.db.flush()
        return category

    def list_categories(
        self, scope: OwnerScope, type: TransactionType | None = None
    ) -> list[Category]:
        """Owner's categories ordered by name, optionally one type only."""
        query = select(Category).where(Category.owner_id == scope.owner_id)
        if type is not None:
            query = query.where(Category.type == type)
        categories = self.db.execute(query.order_by(Category.name)).scalars().all()
        return list(categories)

    def delete_category(self, scope: OwnerScope, category_id: int) -> None:
        """
        Delete a category.

        Refused while any transaction is filed under it, the
        same way a foreign key constraint would refuse it.
        """
        category = self.db.get(Category, category_id)
        if not category or category.owner_id != scope.owner_id:
            raise NotFound(f"Category {category_id} not found")

        in_use = self.db.execute(
            select(func.count(Transaction.id)).where(
                Transaction.category_id == category_id
            )
        ).scalar()
        if in_use:
            raise Conflict(
                f"Category {category_id} is used by {in_use} transaction(s)"
            )

        self.db.delete(category)
        self.db.flush()
