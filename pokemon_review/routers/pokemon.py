"""
Pokemon endpoints.

Creating or updating a Pokemon also links it to an owner and a category,
given as query params. Deleting a Pokemon removes its reviews first.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, Request, Response, status

from pokemon_review.deps import (
    PathId,
    QueryId,
    get_category_repository,
    get_owner_repository,
    get_pokemon_repository,
    get_review_repository,
)
from pokemon_review.errors import (
    ERROR_RESPONSES,
    not_found,
    persistence_error,
    validation_error,
)
from pokemon_review.mapper import pokemon_to_entity, pokemon_to_wire
from pokemon_review.repositories import (
    CategoryRepository,
    OwnerRepository,
    PokemonRepository,
    ReviewRepository,
)
from pokemon_review.schemas import PokemonDto

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/pokemon", tags=["pokemon"], responses=ERROR_RESPONSES)


@router.get("", response_model=List[PokemonDto])
async def get_pokemons(
    pokemon_repo: PokemonRepository = Depends(get_pokemon_repository),
):
    return [pokemon_to_wire(p) for p in await pokemon_repo.get_all()]


@router.get("/{pokemon_id}", response_model=PokemonDto)
async def get_pokemon(
    pokemon_id: PathId,
    pokemon_repo: PokemonRepository = Depends(get_pokemon_repository),
):
    pokemon = await pokemon_repo.get_by_id(pokemon_id)
    if pokemon is None:
        raise not_found(f"No pokemon with id: {pokemon_id}")
    return pokemon_to_wire(pokemon)


@router.get("/{pokemon_id}/rating", response_model=float)
async def get_pokemon_rating(
    pokemon_id: PathId,
    pokemon_repo: PokemonRepository = Depends(get_pokemon_repository),
):
    """Average review rating of a Pokemon; 0 when nobody reviewed it yet."""
    if not await pokemon_repo.exists(pokemon_id):
        raise not_found(f"No pokemon with id: {pokemon_id}")
    return await pokemon_repo.get_rating(pokemon_id)


@router.post("", response_model=PokemonDto, status_code=status.HTTP_201_CREATED)
async def create_pokemon(
    request: Request,
    response: Response,
    pokemon_create: PokemonDto,
    owner_id: QueryId,
    category_id: QueryId,
    pokemon_repo: PokemonRepository = Depends(get_pokemon_repository),
    owner_repo: OwnerRepository = Depends(get_owner_repository),
    category_repo: CategoryRepository = Depends(get_category_repository),
):
    """
    Create a Pokemon owned by `owner_id` and filed under `category_id`.

    Every check runs before anything is written, and the Pokemon row and
    both join rows are committed together.
    """
    if not await owner_repo.exists(owner_id):
        raise validation_error(f"Owner with id: {owner_id} does not exist")

    if not await category_repo.exists(category_id):
        raise validation_error(f"Category with id: {category_id} does not exist")

    if await pokemon_repo.get_by_name(pokemon_create.name) is not None:
        raise validation_error(f"Pokemon with name: {pokemon_create.name} already exists")

    new_pokemon = pokemon_to_entity(pokemon_create.model_copy(update={"id": None}))

    if not await pokemon_repo.create(owner_id, category_id, new_pokemon):
        raise persistence_error("Something went wrong saving pokemon")

    logger.info("Created pokemon %s (owner %s, category %s)", new_pokemon.id, owner_id, category_id)
    response.headers["Location"] = str(request.url_for("get_pokemon", pokemon_id=new_pokemon.id))
    return pokemon_to_wire(new_pokemon)


@router.put("/{pokemon_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def update_pokemon(
    pokemon_id: PathId,
    updated_pokemon: PokemonDto,
    owner_id: QueryId,
    category_id: QueryId,
    pokemon_repo: PokemonRepository = Depends(get_pokemon_repository),
    owner_repo: OwnerRepository = Depends(get_owner_repository),
    category_repo: CategoryRepository = Depends(get_category_repository),
):
    if updated_pokemon.id != pokemon_id:
        raise validation_error(
            f"Id specified: {pokemon_id} does not match body id: {updated_pokemon.id}"
        )

    if not await pokemon_repo.exists(pokemon_id):
        raise not_found(f"No pokemon with id: {pokemon_id}")

    if not await owner_repo.exists(owner_id):
        raise validation_error(f"Owner with id: {owner_id} does not exist")

    if not await category_repo.exists(category_id):
        raise validation_error(f"Category with id: {category_id} does not exist")

    if not await pokemon_repo.update(owner_id, category_id, pokemon_to_entity(updated_pokemon)):
        raise persistence_error("Something went wrong updating pokemon")

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{pokemon_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_pokemon(
    pokemon_id: PathId,
    pokemon_repo: PokemonRepository = Depends(get_pokemon_repository),
    review_repo: ReviewRepository = Depends(get_review_repository),
):
    pokemon = await pokemon_repo.get_by_id(pokemon_id)
    if pokemon is None:
        raise not_found(f"No pokemon with id: {pokemon_id}")

    # Reviews reference the Pokemon, so they have to go first
    reviews = await review_repo.get_reviews_for_pokemon(pokemon_id)
    if not await review_repo.delete_many(reviews):
        raise persistence_error("Something went wrong deleting reviews for a pokemon")

    if not await pokemon_repo.delete(pokemon):
        raise persistence_error("Something went wrong deleting pokemon")

    logger.info("Deleted pokemon %s and %d review(s)", pokemon_id, len(reviews))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
