"""
User CRUD, signup and login.

Passwords are stored and compared as submitted; callers must never return the
``password`` field (routes serialize through ``UserResponse``).
"""

import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from places_api.errors import ConflictError, NotFoundError, StoreError, UnauthorizedError
from places_api.models.user import DEFAULT_USER_IMAGE, User
from places_api.services import require_text

logger = logging.getLogger(__name__)


def list_users(session: Session) -> List[User]:
    try:
        return list(session.exec(select(User)).all())
    except SQLAlchemyError as e:
        logger.error(f"Failed to list users: {e}")
        raise StoreError("Fetching users failed, please try again later.") from e


def get_user(session: Session, user_id: str) -> User:
    try:
        user = session.get(User, user_id)
    except SQLAlchemyError as e:
        logger.error(f"Failed to load user {user_id}: {e}")
        raise StoreError("Fetching user failed, please try again later.") from e

    if not user:
        raise NotFoundError("Could not find a user for the provided user id.")
    return user


def delete_user(session: Session, user_id: str) -> None:
    """
    Delete a user. The user's places are kept.

    A missing user raises UnauthorizedError (401), matching the status the
    API has always returned for this case.
    """
    try:
        user = session.get(User, user_id)
    except SQLAlchemyError as e:
        logger.error(f"Failed to load user {user_id} for delete: {e}")
        raise StoreError("Deleting user failed, please try again later.") from e

    if not user:
        raise UnauthorizedError("Could not identify user, email seems to be wrong.")

    owned = len(user.places)
    try:
        session.delete(user)
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Failed to delete user {user_id}: {e}")
        raise StoreError("Something went wrong. Could not delete user.") from e

    if owned:
        logger.warning(f"Deleted user {user_id} still owns {owned} place(s)")
    logger.info(f"Deleted user {user_id}")


def signup(
    session: Session,
    *,
    username: str,
    email: str,
    password: str,
    image: Optional[str] = None,
) -> User:
    """
    Register a new user with an empty place list.

    The duplicate check and the insert are separate statements; two
    concurrent signups with the same (email, username) can both succeed.
    """
    require_text(username=username, email=email, password=password)

    try:
        existing = session.exec(select(User).where(User.email == email, User.username == username)).first()
    except SQLAlchemyError as e:
        logger.error(f"Signup lookup failed for {email}: {e}")
        raise StoreError("Something went wrong, please try again later.") from e

    if existing:
        raise ConflictError("User exists already, please login instead.")

    user = User(
        username=username,
        email=email,
        password=password,
        image=image or DEFAULT_USER_IMAGE,
        places=[],
    )

    try:
        session.add(user)
        session.commit()
        session.refresh(user)
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Signup insert failed for {email}: {e}")
        raise StoreError("Signing up failed, please try again later.") from e

    logger.info(f"Registered user {user.id} ({email})")
    return user


def login(session: Session, *, email: str, password: str) -> User:
    try:
        user = session.exec(select(User).where(User.email == email)).first()
    except SQLAlchemyError as e:
        logger.error(f"Login lookup failed for {email}: {e}")
        raise StoreError("Logging in failed, please try again later.") from e

    if not user or user.password != password:
        logger.info(f"Rejected login for {email}")
        raise UnauthorizedError("Could not identify user, credentials seem to be wrong.")
    return user
