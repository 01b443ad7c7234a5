"""ORM model for customer records managed through the /customers API."""

from sqlalchemy import Column, Integer, String

from customer_admin.models.base import Base


class Customer(Base):
    """
    One customer record. id is supplied by the caller and never changes
    after creation; only name and job are updated in place.
    """

    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(255), nullable=False)
    job = Column(String(255), nullable=False)
