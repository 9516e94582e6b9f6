"""Person Pydantic schemas (request DTOs and response models)."""


from datetime import date, datetime

from pydantic import Field

from app.schemas.common import CamelModel

class PersonCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    company: str | None = Field(default=None, max_length=255)
    email: str | None = None
    age: int | None = Field(default=None, ge=0)
    active: bool = True
    birth_date: date | None = None

class PersonUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    company: str | None = Field(default=None, max_length=255)
    email: str | None = None
    age: int | None = Field(default=None, ge=0)
    active: bool | None = None
    birth_date: date | None = None

class PersonOut(CamelModel):
    id: int
    name: str
    company: str | None = None
    email: str | None = None
    age: int | None = None
    active: bool
    birth_date: date | None = None
    created_at: datetime
    updated_at: datetime
