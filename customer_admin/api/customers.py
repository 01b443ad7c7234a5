"""Customer record routes. Every route is gated on the admin role."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from customer_admin.api.auth import require_role
from customer_admin.core.database import get_db
from customer_admin.schemas.auth import Identity, Role
from customer_admin.schemas.customer import (
    CustomerCreate,
    CustomerCreated,
    CustomerOut,
    CustomerUpdate,
    MessageResponse,
)
from customer_admin.services.customers import CustomerStore

router = APIRouter()

# Record data must never be cached by the browser or an intermediary.
NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}


def get_customer_store(db: Annotated[Session, Depends(get_db)]) -> CustomerStore:
    return CustomerStore(db)


# The gate parameter is declared before the store in every route so it is
# resolved first; a rejected token never reaches the store.


@router.get("", response_model=list[CustomerOut])
def list_customers(
    _admin: Annotated[Identity, Depends(require_role(Role.ADMIN, "view customers"))],
    store: Annotated[CustomerStore, Depends(get_customer_store)],
    response: Response,
    search: Annotated[str | None, Query()] = None,
) -> list[CustomerOut]:
    """
    List customers ordered by id. With ?search=kw, only records whose id,
    name or job contains kw (case-sensitive substring).
    """
    customers = store.search(search)
    response.headers.update(NO_CACHE_HEADERS)
    return [CustomerOut.model_validate(c) for c in customers]


@router.post("", response_model=CustomerCreated, status_code=status.HTTP_201_CREATED)
def create_customer(
    _admin: Annotated[Identity, Depends(require_role(Role.ADMIN, "add customers"))],
    store: Annotated[CustomerStore, Depends(get_customer_store)],
    body: CustomerCreate,
) -> CustomerCreated:
    """Create a customer with a caller-chosen id. Duplicate ids are rejected with 400."""
    customer_id = store.insert(body.id, body.name, body.job)
    return CustomerCreated(message="Customer created.", id=customer_id)


@router.put("/{customer_id}", response_model=MessageResponse)
def update_customer(
    _admin: Annotated[Identity, Depends(require_role(Role.ADMIN, "update customers"))],
    store: Annotated[CustomerStore, Depends(get_customer_store)],
    customer_id: int,
    body: CustomerUpdate,
) -> MessageResponse:
    """Replace name and job of an existing customer; id cannot change."""
    store.update(customer_id, body.name, body.job)
    return MessageResponse(message=f"Customer {customer_id} updated.")


@router.delete("/{customer_id}", response_model=MessageResponse)
def delete_customer(
    _admin: Annotated[Identity, Depends(require_role(Role.ADMIN, "delete customers"))],
    store: Annotated[CustomerStore, Depends(get_customer_store)],
    customer_id: int,
) -> MessageResponse:
    store.delete(customer_id)
    return MessageResponse(message=f"Customer {customer_id} deleted.")
