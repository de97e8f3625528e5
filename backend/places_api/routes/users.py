"""
User API Routes
Listing, lookup, deletion, signup and login. Responses never carry passwords.
"""

import re
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, field_validator
from sqlmodel import Session

from places_api.database import get_session
from places_api.services import user_service

router = APIRouter()

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def normalize_email(value: str) -> str:
    value = (value or "").strip().lower()
    if not _EMAIL_RE.match(value):
        raise ValueError("a valid email address is required")
    return value


# ============================================================================
# Request/Response Models
# ============================================================================


class SignupRequest(BaseModel):
    username: str
    email: str
    password: str
    image: Optional[str] = None

    @field_validator("username")
    @classmethod
    def validate_username(cls, v):
        if not v or not v.strip():
            raise ValueError("username is required")
        return v.strip()

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        return normalize_email(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v):
        if len(v) < 6:
            raise ValueError("password must be at least 6 characters")
        return v


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        return (v or "").strip().lower()


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    email: str
    image: str
    places: List[str]
    created_at: datetime


class UserEnvelope(BaseModel):
    user: UserResponse


class UserListEnvelope(BaseModel):
    users: List[UserResponse]


class LoginResponse(BaseModel):
    message: str
    user: UserResponse


class MessageResponse(BaseModel):
    message: str


# ============================================================================
# User Endpoints
# ============================================================================


@router.get("/users", response_model=UserListEnvelope)
def get_users(session: Session = Depends(get_session)):
    """List all users (without passwords)"""
    users = user_service.list_users(session)
    return {"users": [UserResponse.model_validate(u) for u in users]}


@router.post("/users/signup", response_model=UserEnvelope, status_code=201)
def signup(request: SignupRequest, session: Session = Depends(get_session)):
    """Register a user; 422 if the email/username pair is taken"""
    user = user_service.signup(
        session,
        username=request.username,
        email=request.email,
        password=request.password,
        image=request.image,
    )
    return {"user": UserResponse.model_validate(user)}


@router.post("/users/login", response_model=LoginResponse)
def login(request: LoginRequest, session: Session = Depends(get_session)):
    """Check email/password and return the matching user"""
    user = user_service.login(session, email=request.email, password=request.password)
    return {"message": "Logged In Successfully", "user": UserResponse.model_validate(user)}


@router.get("/users/{user_id}", response_model=UserEnvelope)
def get_user_by_id(user_id: str, session: Session = Depends(get_session)):
    """Get a user by ID"""
    user = user_service.get_user(session, user_id)
    return {"user": UserResponse.model_validate(user)}


@router.delete("/users/{user_id}", response_model=MessageResponse)
def delete_user(user_id: str, session: Session = Depends(get_session)):
    """Delete a user. Their places are not removed."""
    user_service.delete_user(session, user_id)
    return {"message": "Successfully Deleted user."}
