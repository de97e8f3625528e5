"""
Place API Routes
Thin HTTP layer over places_api.services.place_service.
"""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field, field_validator
from sqlmodel import Session

from places_api.database import get_session
from places_api.services import place_service

router = APIRouter()


# ============================================================================
# Request/Response Models
# ============================================================================


class Coordinates(BaseModel):
    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)


class PlaceCreateRequest(BaseModel):
    title: str
    description: str
    coordinates: Coordinates
    address: str
    creator: str
    image: Optional[str] = None

    @field_validator("title", "address", "creator")
    @classmethod
    def validate_not_blank(cls, v):
        if not v or not v.strip():
            raise ValueError("must not be empty")
        return v.strip()

    @field_validator("description")
    @classmethod
    def validate_description(cls, v):
        if len(v.strip()) < 5:
            raise ValueError("description must be at least 5 characters")
        return v.strip()


class PlaceUpdateRequest(BaseModel):
    title: str
    description: str

    @field_validator("title")
    @classmethod
    def validate_title(cls, v):
        if not v or not v.strip():
            raise ValueError("must not be empty")
        return v.strip()

    @field_validator("description")
    @classmethod
    def validate_description(cls, v):
        if len(v.strip()) < 5:
            raise ValueError("description must be at least 5 characters")
        return v.strip()


class PlaceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str
    address: str
    location: Coordinates
    image: str
    creator: str
    created_at: datetime
    updated_at: datetime


class PlaceEnvelope(BaseModel):
    place: PlaceResponse


class PlaceListEnvelope(BaseModel):
    places: List[PlaceResponse]


class MessageResponse(BaseModel):
    message: str


# ============================================================================
# Place Endpoints
# ============================================================================


@router.get("/places", response_model=PlaceListEnvelope)
def get_all_places(session: Session = Depends(get_session)):
    """List every place"""
    places = place_service.list_places(session)
    return {"places": [PlaceResponse.model_validate(p) for p in places]}


@router.get("/places/user/{user_id}", response_model=PlaceListEnvelope)
def get_places_by_user_id(user_id: str, session: Session = Depends(get_session)):
    """List the places created by a user (404 when there are none)"""
    places = place_service.list_places_by_user(session, user_id)
    return {"places": [PlaceResponse.model_validate(p) for p in places]}


@router.get("/places/{place_id}", response_model=PlaceEnvelope)
def get_place_by_id(place_id: str, session: Session = Depends(get_session)):
    """Get a place by ID"""
    place = place_service.get_place(session, place_id)
    return {"place": PlaceResponse.model_validate(place)}


@router.post("/places", response_model=PlaceEnvelope, status_code=201)
def create_place(request: PlaceCreateRequest, session: Session = Depends(get_session)):
    """
    Create a place owned by ``creator``.

    The place insert and the creator's place-list update commit together.
    """
    place = place_service.create_place(
        session,
        title=request.title,
        description=request.description,
        coordinates=request.coordinates.model_dump(),
        address=request.address,
        creator=request.creator,
        image=request.image,
    )
    return {"place": PlaceResponse.model_validate(place)}


@router.patch("/places/{place_id}", response_model=PlaceEnvelope)
@router.put("/places/{place_id}", response_model=PlaceEnvelope)
def update_place(place_id: str, request: PlaceUpdateRequest, session: Session = Depends(get_session)):
    """Update a place's title and description"""
    place = place_service.update_place(
        session,
        place_id,
        title=request.title,
        description=request.description,
    )
    return {"place": PlaceResponse.model_validate(place)}


@router.delete("/places/{place_id}", response_model=MessageResponse)
def delete_place(place_id: str, session: Session = Depends(get_session)):
    """Delete a place and unlink it from its creator"""
    place_service.delete_place(session, place_id)
    return {"message": "Successfully Deleted place."}
