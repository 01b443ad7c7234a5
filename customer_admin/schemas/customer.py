"""Request/response schemas for customer records."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

NAME_MAX_LEN = 255
JOB_MAX_LEN = 255


def reject_nul(value: str) -> str:
    """PostgreSQL text cannot store NUL bytes; refuse them before they reach the driver."""
    if "\x00" in value:
        raise ValueError("must not contain NUL characters")
    return value


class CustomerCreate(BaseModel):
    """Body of POST /customers. id is chosen by the caller."""

    id: int = Field(..., description="Customer id (primary key, immutable after creation)")
    name: str = Field(..., min_length=1, max_length=NAME_MAX_LEN)
    job: str = Field(..., min_length=1, max_length=JOB_MAX_LEN)

    check_no_nul = field_validator("name", "job")(reject_nul)


class CustomerUpdate(BaseModel):
    """Body of PUT /customers/{id}. Only name and job can change."""

    name: str = Field(..., min_length=1, max_length=NAME_MAX_LEN)
    job: str = Field(..., min_length=1, max_length=JOB_MAX_LEN)

    check_no_nul = field_validator("name", "job")(reject_nul)


class CustomerOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    job: str


class CustomerCreated(BaseModel):
    message: str
    id: int


class MessageResponse(BaseModel):
    message: str
