from typing import List

from fastapi import APIRouter, Depends, Request, Response, status

from pokemon_review.deps import (
    PathId,
    QueryId,
    get_country_repository,
    get_owner_repository,
    get_pokemon_repository,
)
from pokemon_review.errors import (
    ERROR_RESPONSES,
    not_found,
    persistence_error,
    validation_error,
)
from pokemon_review.mapper import owner_to_entity, owner_to_wire, pokemon_to_wire
from pokemon_review.repositories import (
    CountryRepository,
    OwnerRepository,
    PokemonRepository,
)
from pokemon_review.schemas import OwnerDto, PokemonDto

router = APIRouter(prefix="/api/owner", tags=["owner"], responses=ERROR_RESPONSES)


@router.get("", response_model=List[OwnerDto])
async def get_owners(
    owner_repo: OwnerRepository = Depends(get_owner_repository),
):
    return [owner_to_wire(o) for o in await owner_repo.get_all()]


@router.get("/pokemon/{pokemon_id}", response_model=List[OwnerDto])
async def get_owners_of_pokemon(
    pokemon_id: PathId,
    owner_repo: OwnerRepository = Depends(get_owner_repository),
    pokemon_repo: PokemonRepository = Depends(get_pokemon_repository),
):
    if not await pokemon_repo.exists(pokemon_id):
        raise not_found(f"No pokemon with id: {pokemon_id}")
    return [owner_to_wire(o) for o in await owner_repo.get_owners_of_pokemon(pokemon_id)]


@router.get("/{owner_id}", response_model=OwnerDto)
async def get_owner(
    owner_id: PathId,
    owner_repo: OwnerRepository = Depends(get_owner_repository),
):
    owner = await owner_repo.get_by_id(owner_id)
    if owner is None:
        raise not_found(f"Owner with id: {owner_id} not found")
    return owner_to_wire(owner)


@router.get("/{owner_id}/pokemon", response_model=List[PokemonDto])
async def get_pokemon_by_owner(
    owner_id: PathId,
    owner_repo: OwnerRepository = Depends(get_owner_repository),
):
    if not await owner_repo.exists(owner_id):
        raise not_found(f"Owner with id: {owner_id} not found")
    return [pokemon_to_wire(p) for p in await owner_repo.get_pokemon_by_owner(owner_id)]


@router.post("", response_model=OwnerDto, status_code=status.HTTP_201_CREATED)
async def create_owner(
    request: Request,
    response: Response,
    owner_create: OwnerDto,
    country_id: QueryId,
    owner_repo: OwnerRepository = Depends(get_owner_repository),
    country_repo: CountryRepository = Depends(get_country_repository),
):
    # Owners are told apart by last name
    if await owner_repo.get_by_last_name(owner_create.last_name) is not None:
        raise validation_error(f"Owner with last name: {owner_create.last_name} already exists")

    if not await country_repo.exists(country_id):
        raise validation_error(f"Country with id: {country_id} does not exist")

    owner = owner_to_entity(owner_create.model_copy(update={"id": None}))
    owner.country_id = country_id

    if not await owner_repo.create(owner):
        raise persistence_error("Something went wrong saving owner")

    response.headers["Location"] = str(request.url_for("get_owner", owner_id=owner.id))
    return owner_to_wire(owner)


@router.put("/{owner_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def update_owner(
    owner_id: PathId,
    updated_owner: OwnerDto,
    owner_repo: OwnerRepository = Depends(get_owner_repository),
):
    if updated_owner.id != owner_id:
        raise validation_error(
            f"Owner id passed in: {owner_id} does not match body id: {updated_owner.id}"
        )

    if not await owner_repo.exists(owner_id):
        raise not_found(f"Owner with id: {owner_id} not found")

    if not await owner_repo.update(owner_to_entity(updated_owner)):
        raise persistence_error("Something went wrong updating owner")

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{owner_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_owner(
    owner_id: PathId,
    owner_repo: OwnerRepository = Depends(get_owner_repository),
):
    owner = await owner_repo.get_by_id(owner_id)
    if owner is None:
        raise not_found(f"Owner with id: {owner_id} not found")

    if not await owner_repo.delete(owner):
        raise persistence_error("Something went wrong deleting owner")

    return Response(status_code=status.HTTP_204_NO_CONTENT)
