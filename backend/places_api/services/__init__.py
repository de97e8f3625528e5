"""
Services Layer

Business logic for places and users that:
- Accept a Session plus plain inputs (ids, field values)
- Return SQLModel rows
- Raise places_api.errors.ServiceError subclasses, never HTTPException
"""

from places_api.errors import InvalidInputError


def require_text(**fields):
    """Raise InvalidInputError naming every blank or missing field."""
    blank = sorted(name for name, value in fields.items() if not value or not str(value).strip())
    if blank:
        raise InvalidInputError(f"Invalid inputs passed, please check your data: {', '.join(blank)}.")
