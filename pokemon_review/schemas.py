# pokemon_review/schemas.py
from datetime import date
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


# ---- Shared error model (for docs / consistency) ----
class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    PERSISTENCE = "persistence"


class ErrorResponse(BaseModel):
    error: str
    kind: ErrorKind


# ---- Wire representations ----
# `id` is optional on input: it is ignored on create and must match the
# path id on update.
class PokemonDto(BaseModel):
    id: Optional[int] = None
    name: str
    birth_date: Optional[date] = None


class CategoryDto(BaseModel):
    id: Optional[int] = None
    name: str


class CountryDto(BaseModel):
    id: Optional[int] = None
    name: str


class OwnerDto(BaseModel):
    id: Optional[int] = None
    first_name: str
    last_name: str


class ReviewDto(BaseModel):
    id: Optional[int] = None
    title: str
    text: str
    # int4 column
    rating: int = Field(ge=-(2**31), le=2**31 - 1)


class ReviewerDto(BaseModel):
    id: Optional[int] = None
    first_name: str
    last_name: str


# ---- /api/reviewer/{reviewer_id} ----
class ReviewerDetailDto(ReviewerDto):
    reviews: List[ReviewDto] = []


# ---- /health ----
class HealthResponse(BaseModel):
    status: str
    db: str
