"""
Paged queries over the entity tables.

Each listable entity gets one PagedRepository.  The repository knows the
model, the cache tag of the entity and, where rows belong to a customer, the
column holding the owning customer's id.
"""

from typing import Generic, List, Optional, TypeVar

from sqlalchemy import func
from sqlalchemy.orm import Session

from bilemo.persistence.models import Customer, CustomerUser, Employee, Image, Product

ModelT = TypeVar("ModelT")


class PagedRepository(Generic[ModelT]):
    """
    Typed page/count queries for one model.

    Pages are 1-based: page N with limit L covers rows
    [(N - 1) * L, N * L) in primary key order.
    """

    def __init__(self, model, tag: str, customer_column=None):
        self.model = model
        self.tag = tag
        self.customer_column = customer_column

    @staticmethod
    def _offset(page: int, limit: int) -> int:
        if page < 1:
            raise ValueError(f"page must be >= 1, got {page}")
        if limit < 1:
            raise ValueError(f"limit must be >= 1, got {limit}")
        return (page - 1) * limit

    def _customer_filter(self, customer_id: int):
        if self.customer_column is None:
            raise ValueError(f"{self.tag} rows are not owned by a customer")
        return self.customer_column == customer_id

    def find(self, db: Session, entity_id: int) -> Optional[ModelT]:
        """Return the row with the given id, or None."""
        return db.get(self.model, entity_id)

    def find_page(self, db: Session, page: int, limit: int) -> List[ModelT]:
        """Return the rows of one page."""
        offset = self._offset(page, limit)
        return (
            db.query(self.model)
            .order_by(self.model.id)
            .offset(offset)
            .limit(limit)
            .all()
        )

    def count(self, db: Session) -> int:
        """Return the total number of rows."""
        return db.query(func.count(self.model.id)).scalar() or 0

    def find_page_by_customer(
        self, db: Session, customer_id: int, page: int, limit: int
    ) -> List[ModelT]:
        """Return one page of the rows owned by a customer."""
        offset = self._offset(page, limit)
        return (
            db.query(self.model)
            .filter(self._customer_filter(customer_id))
            .order_by(self.model.id)
            .offset(offset)
            .limit(limit)
            .all()
        )

    def count_by_customer(self, db: Session, customer_id: int) -> int:
        """Return the number of rows owned by a customer."""
        return (
            db.query(func.count(self.model.id))
            .filter(self._customer_filter(customer_id))
            .scalar()
            or 0
        )


product_repository: PagedRepository[Product] = PagedRepository(Product, "Product")
image_repository: PagedRepository[Image] = PagedRepository(Image, "Image")
customer_repository: PagedRepository[Customer] = PagedRepository(Customer, "Customer")
customer_user_repository: PagedRepository[CustomerUser] = PagedRepository(
    CustomerUser, "CustomerUser", customer_column=CustomerUser.customer_id
)
employee_repository: PagedRepository[Employee] = PagedRepository(Employee, "Employee")
