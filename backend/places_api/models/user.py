from datetime import datetime, timezone
from typing import List
from uuid import uuid4

from sqlalchemy import JSON
from sqlmodel import Column, Field, SQLModel

DEFAULT_USER_IMAGE = "https://acecollegecanada.com/wp-content/uploads/2019/12/user-icon-placeholder.png"


class User(SQLModel, table=True):
    id: str = Field(default_factory=lambda: uuid4().hex, primary_key=True)
    username: str = Field(index=True)
    email: str = Field(index=True)
    password: str  # Stored as submitted, see DESIGN.md
    image: str = Field(default=DEFAULT_USER_IMAGE)
    # Ordered ids of the places this user created; mirrors Place.creator
    places: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
