from typing import List

from fastapi import APIRouter, Depends, Request, Response, status

from pokemon_review.deps import PathId, get_country_repository, get_owner_repository
from pokemon_review.errors import (
    ERROR_RESPONSES,
    not_found,
    persistence_error,
    validation_error,
)
from pokemon_review.mapper import country_to_entity, country_to_wire, owner_to_wire
from pokemon_review.repositories import CountryRepository, OwnerRepository
from pokemon_review.schemas import CountryDto, OwnerDto

router = APIRouter(prefix="/api/country", tags=["country"], responses=ERROR_RESPONSES)


@router.get("", response_model=List[CountryDto])
async def get_countries(
    country_repo: CountryRepository = Depends(get_country_repository),
):
    return [country_to_wire(c) for c in await country_repo.get_all()]


@router.get("/{country_id}", response_model=CountryDto)
async def get_country(
    country_id: PathId,
    country_repo: CountryRepository = Depends(get_country_repository),
):
    country = await country_repo.get_by_id(country_id)
    if country is None:
        raise not_found(f"Country with id: {country_id} not found")
    return country_to_wire(country)


@router.get("/owners/{owner_id}", response_model=CountryDto)
async def get_country_of_owner(
    owner_id: PathId,
    country_repo: CountryRepository = Depends(get_country_repository),
    owner_repo: OwnerRepository = Depends(get_owner_repository),
):
    """Country the given owner lives in."""
    if not await owner_repo.exists(owner_id):
        raise not_found(f"Owner with id: {owner_id} not found")

    country = await country_repo.get_country_by_owner(owner_id)
    if country is None:
        raise not_found(f"Owner with id: {owner_id} has no country")
    return country_to_wire(country)


@router.get("/{country_id}/owners", response_model=List[OwnerDto])
async def get_owners_from_country(
    country_id: PathId,
    country_repo: CountryRepository = Depends(get_country_repository),
):
    if not await country_repo.exists(country_id):
        raise not_found(f"Country with id: {country_id} not found")
    return [owner_to_wire(o) for o in await country_repo.get_owners_from_country(country_id)]


@router.post("", response_model=CountryDto, status_code=status.HTTP_201_CREATED)
async def create_country(
    request: Request,
    response: Response,
    country_create: CountryDto,
    country_repo: CountryRepository = Depends(get_country_repository),
):
    if await country_repo.get_by_name(country_create.name) is not None:
        raise validation_error(f"Country {country_create.name.strip()} already exists")

    country = country_to_entity(country_create.model_copy(update={"id": None}))

    if not await country_repo.create(country):
        raise persistence_error("Something went wrong saving country")

    response.headers["Location"] = str(request.url_for("get_country", country_id=country.id))
    return country_to_wire(country)


@router.put("/{country_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def update_country(
    country_id: PathId,
    updated_country: CountryDto,
    country_repo: CountryRepository = Depends(get_country_repository),
):
    if updated_country.id != country_id:
        raise validation_error(
            f"Country id passed in: {country_id} does not match body id: {updated_country.id}"
        )

    if not await country_repo.exists(country_id):
        raise not_found(f"Country with id: {country_id} not found")

    if not await country_repo.update(country_to_entity(updated_country)):
        raise persistence_error("Something went wrong updating country")

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{country_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_country(
    country_id: PathId,
    country_repo: CountryRepository = Depends(get_country_repository),
):
    """A country that still has owners cannot be deleted (the commit fails)."""
    country = await country_repo.get_by_id(country_id)
    if country is None:
        raise not_found(f"Country with id: {country_id} not found")

    if not await country_repo.delete(country):
        raise persistence_error("Something went wrong deleting country")

    return Response(status_code=status.HTTP_204_NO_CONTENT)
