"""
Customer record store: insert, search, update and delete over the customers table.

Every statement is built from SQLAlchemy expressions so caller-supplied values
are always bound parameters, never spliced into SQL text.
"""

import logging

from sqlalchemy import String, cast, delete, insert, or_, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from customer_admin.core.errors import (
    ConflictError,
    InsertError,
    NotFoundError,
    StoreError,
)
from customer_admin.models import Customer

logger = logging.getLogger(__name__)


class CustomerStore:
    """
    Record store bound to one Session (one request).

    Each mutating call commits its single statement; on failure the session is
    rolled back so the table is left as it was.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def insert(self, customer_id: int, name: str, job: str) -> int:
        """Insert a new record; raises ConflictError if customer_id is taken."""
        stmt = insert(Customer).values(id=customer_id, name=name, job=job)
        try:
            self.session.execute(stmt)
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            logger.info("Customer insert rejected: duplicate id", extra={"customer_id": customer_id})
            raise ConflictError(f"A customer with id {customer_id} already exists.")
        except SQLAlchemyError:
            self.session.rollback()
            logger.exception("Customer insert failed", extra={"customer_id": customer_id})
            raise InsertError()
        logger.info("Customer created", extra={"customer_id": customer_id})
        return customer_id

    def search(self, keyword: str | None = None) -> list[Customer]:
        """
        Return records ordered by id. With a keyword, keep only records whose
        id (as text), name or job contains it (case-sensitive, LIKE wildcards
        in keyword match literally).
        """
        if keyword and "\x00" in keyword:
            # Stored values never contain NUL, and the driver refuses to send it.
            return []
        stmt = select(Customer)
        if keyword:
            stmt = stmt.where(
                or_(
                    cast(Customer.id, String).contains(keyword, autoescape=True),
                    Customer.name.contains(keyword, autoescape=True),
                    Customer.job.contains(keyword, autoescape=True),
                )
            )
        stmt = stmt.order_by(Customer.id.asc())
        try:
            return list(self.session.scalars(stmt))
        except SQLAlchemyError:
            self.session.rollback()
            logger.exception("Customer search failed")
            raise StoreError()

    def update(self, customer_id: int, name: str, job: str) -> None:
        """Set name and job on an existing record; raises NotFoundError if none matched."""
        stmt = (
            update(Customer)
            .where(Customer.id == customer_id)
            .values(name=name, job=job)
            .execution_options(synchronize_session=False)
        )
        rowcount = self._execute_write(stmt, customer_id, "update")
        if rowcount == 0:
            raise NotFoundError(f"Customer {customer_id} not found.")
        logger.info("Customer updated", extra={"customer_id": customer_id})

    def delete(self, customer_id: int) -> None:
        """Remove a record; raises NotFoundError if none matched."""
        stmt = (
            delete(Customer)
            .where(Customer.id == customer_id)
            .execution_options(synchronize_session=False)
        )
        rowcount = self._execute_write(stmt, customer_id, "delete")
        if rowcount == 0:
            raise NotFoundError(f"Customer {customer_id} not found.")
        logger.info("Customer deleted", extra={"customer_id": customer_id})

    def _execute_write(self, stmt, customer_id: int, operation: str) -> int:
        try:
            result = self.session.execute(stmt)
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            logger.exception(
                "Customer %s failed", operation, extra={"customer_id": customer_id}
            )
            raise StoreError(f"Failed to {operation} customer.")
        return result.rowcount
