"""Product catalogue entity."""

from datetime import date, datetime

from pydantic import BaseModel, Field


class Product(BaseModel):
    """A catalogue entry that production batches are made of."""

    id: int | None = None
    name: str
    category: str | None = None
    description: str | None = None
    idea_creation_date: date | None = None
    production_start_date: date | None = None
    is_active: bool = True
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
