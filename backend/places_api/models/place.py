from datetime import datetime, timezone
from typing import Dict
from uuid import uuid4

from sqlalchemy import JSON
from sqlmodel import Column, Field, SQLModel

DEFAULT_PLACE_IMAGE = "https://www.funfunnyfacts.com/images/large/empire-state-building-1.jpg"


class Place(SQLModel, table=True):
    id: str = Field(default_factory=lambda: uuid4().hex, primary_key=True)
    title: str
    description: str
    address: str
    location: Dict[str, float] = Field(sa_column=Column(JSON, nullable=False))  # {"lat": ..., "lng": ...}
    image: str = Field(default=DEFAULT_PLACE_IMAGE)
    creator: str = Field(index=True)  # User.id; not a FK so user deletes leave places behind
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column_kwargs={"onupdate": lambda: datetime.now(timezone.utc)},
    )
