"""
Place CRUD.

Create and delete touch two rows (the place and its creator's ``places``
list) and run inside a single session transaction: both writes commit or
neither does.
"""

import logging
from typing import Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from places_api.errors import NotFoundError, StoreError
from places_api.models.place import DEFAULT_PLACE_IMAGE, Place
from places_api.models.user import User
from places_api.services import require_text

logger = logging.getLogger(__name__)


def list_places(session: Session) -> List[Place]:
    try:
        return list(session.exec(select(Place)).all())
    except SQLAlchemyError as e:
        logger.error(f"Failed to list places: {e}")
        raise StoreError("Something went wrong. Could not get places.") from e


def get_place(session: Session, place_id: str) -> Place:
    try:
        place = session.get(Place, place_id)
    except SQLAlchemyError as e:
        logger.error(f"Failed to load place {place_id}: {e}")
        raise StoreError("Something went wrong. Could not get place.") from e

    if not place:
        raise NotFoundError("Could not find a place for the provided place id.")
    return place


def list_places_by_user(session: Session, user_id: str) -> List[Place]:
    """
    Places whose creator is ``user_id``.

    An unknown user and a user without places both raise NotFoundError.
    """
    try:
        places = list(session.exec(select(Place).where(Place.creator == user_id)).all())
    except SQLAlchemyError as e:
        logger.error(f"Failed to list places for user {user_id}: {e}")
        raise StoreError("Something went wrong. Could not get place.") from e

    if not places:
        raise NotFoundError("Could not find a place for the provided user id.")
    return places


def create_place(
    session: Session,
    *,
    title: str,
    description: str,
    coordinates: Dict[str, float],
    address: str,
    creator: str,
    image: Optional[str] = None,
) -> Place:
    """
    Create a place and append its id to the creator's place list.

    Raises:
        NotFoundError: creator does not exist (nothing is written)
        InvalidInputError: a text field is blank (checked before any store access)
        StoreError: creator lookup failed, or the transaction was rolled back
    """
    require_text(title=title, description=description, address=address, creator=creator)

    try:
        user = session.get(User, creator)
    except SQLAlchemyError as e:
        logger.error(f"Creator lookup failed for {creator}: {e}")
        raise StoreError("Failed to create place, please try again later.") from e

    if not user:
        logger.info(f"Rejected place '{title}': creator {creator} not found")
        raise NotFoundError("Could not find user for the provided id.")

    place = Place(
        title=title,
        description=description,
        location=dict(coordinates),
        address=address,
        creator=user.id,
        image=image or DEFAULT_PLACE_IMAGE,
    )

    try:
        session.add(place)
        session.flush()
        # Reassign so the JSON column is marked dirty
        user.places = [*user.places, place.id]
        session.add(user)
        session.commit()
        session.refresh(place)
    except SQLAlchemyError as e:
        session.rollback()
        logger.exception(f"Create place transaction rolled back for creator {creator}")
        raise StoreError("Failed to create place, please try again later.") from e

    logger.info(f"Created place {place.id} for user {user.id}")
    return place


def update_place(session: Session, place_id: str, *, title: str, description: str) -> Place:
    """Change title and description. Every other field is left as stored."""
    require_text(title=title, description=description)

    try:
        place = session.get(Place, place_id)
    except SQLAlchemyError as e:
        logger.error(f"Failed to load place {place_id} for update: {e}")
        raise StoreError("Something went wrong. Could not update place.") from e

    if not place:
        raise NotFoundError("Could not find a place for the provided place id.")

    place.title = title
    place.description = description

    try:
        session.add(place)
        session.commit()
        session.refresh(place)
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Failed to update place {place_id}: {e}")
        raise StoreError("Something went wrong. Could not update place.") from e

    return place


def delete_place(session: Session, place_id: str) -> None:
    """
    Delete a place and remove its id from the creator's place list.

    A creator that no longer exists (deleted user) is skipped; the place row
    is still removed.
    """
    try:
        place = session.get(Place, place_id)
        creator = session.get(User, place.creator) if place else None
    except SQLAlchemyError as e:
        logger.error(f"Failed to load place {place_id} for delete: {e}")
        raise StoreError("Something went wrong. Could not delete place.") from e

    if not place:
        raise NotFoundError("Could not find a place for the provided place id.")

    try:
        session.delete(place)
        if creator:
            creator.places = [pid for pid in creator.places if pid != place.id]
            session.add(creator)
        else:
            logger.warning(f"Place {place_id} references missing creator {place.creator}")
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.exception(f"Delete place transaction rolled back for place {place_id}")
        raise StoreError("Something went wrong. Could not delete place.") from e

    logger.info(f"Deleted place {place_id}")
