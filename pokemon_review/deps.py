"""
FastAPI dependencies that hand each route the repositories it needs.

All of them are built on the same `get_db` session, which FastAPI resolves
once per request, so a request works against a single unit of work.
"""
from typing import Annotated

from fastapi import Depends, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from pokemon_review.db import get_db
from pokemon_review.repositories import (
    CategoryRepository,
    CountryRepository,
    OwnerRepository,
    PokemonRepository,
    ReviewRepository,
    ReviewerRepository,
)

# Ids are int4 columns on Postgres
MAX_ID = 2**31 - 1

# Out-of-range ids fail request validation (400) before reaching the driver
PathId = Annotated[int, Path(ge=1, le=MAX_ID)]
QueryId = Annotated[int, Query(ge=1, le=MAX_ID)]


def get_pokemon_repository(db: AsyncSession = Depends(get_db)) -> PokemonRepository:
    return PokemonRepository(db)


def get_category_repository(db: AsyncSession = Depends(get_db)) -> CategoryRepository:
    return CategoryRepository(db)


def get_country_repository(db: AsyncSession = Depends(get_db)) -> CountryRepository:
    return CountryRepository(db)


def get_owner_repository(db: AsyncSession = Depends(get_db)) -> OwnerRepository:
    return OwnerRepository(db)


def get_review_repository(db: AsyncSession = Depends(get_db)) -> ReviewRepository:
    return ReviewRepository(db)


def get_reviewer_repository(db: AsyncSession = Depends(get_db)) -> ReviewerRepository:
    return ReviewerRepository(db)
