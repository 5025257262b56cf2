from typing import List

from fastapi import APIRouter, Depends, Request, Response, status

from pokemon_review.deps import PathId, get_category_repository
from pokemon_review.errors import (
    ERROR_RESPONSES,
    not_found,
    persistence_error,
    validation_error,
)
from pokemon_review.mapper import category_to_entity, category_to_wire, pokemon_to_wire
from pokemon_review.repositories import CategoryRepository
from pokemon_review.schemas import CategoryDto, PokemonDto

router = APIRouter(prefix="/api/category", tags=["category"], responses=ERROR_RESPONSES)


@router.get("", response_model=List[CategoryDto])
async def get_categories(
    category_repo: CategoryRepository = Depends(get_category_repository),
):
    return [category_to_wire(c) for c in await category_repo.get_all()]


@router.get("/{category_id}", response_model=CategoryDto)
async def get_category(
    category_id: PathId,
    category_repo: CategoryRepository = Depends(get_category_repository),
):
    category = await category_repo.get_by_id(category_id)
    if category is None:
        raise not_found(f"No category with id: {category_id}")
    return category_to_wire(category)


@router.get("/pokemon/{category_id}", response_model=List[PokemonDto])
async def get_pokemon_by_category(
    category_id: PathId,
    category_repo: CategoryRepository = Depends(get_category_repository),
):
    if not await category_repo.exists(category_id):
        raise not_found(f"No category with id: {category_id}")
    return [pokemon_to_wire(p) for p in await category_repo.get_pokemon_by_category(category_id)]


@router.post("", response_model=CategoryDto, status_code=status.HTTP_201_CREATED)
async def create_category(
    request: Request,
    response: Response,
    category_create: CategoryDto,
    category_repo: CategoryRepository = Depends(get_category_repository),
):
    if await category_repo.get_by_name(category_create.name) is not None:
        raise validation_error(f"Category {category_create.name.strip()} already exists")

    category = category_to_entity(category_create.model_copy(update={"id": None}))

    if not await category_repo.create(category):
        raise persistence_error("Something went wrong saving category")

    response.headers["Location"] = str(request.url_for("get_category", category_id=category.id))
    return category_to_wire(category)


@router.put("/{category_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def update_category(
    category_id: PathId,
    updated_category: CategoryDto,
    category_repo: CategoryRepository = Depends(get_category_repository),
):
    if updated_category.id != category_id:
        raise validation_error(
            f"Category id: {category_id} passed in does not match body id: {updated_category.id}"
        )

    if not await category_repo.exists(category_id):
        raise not_found(f"No category with id: {category_id}")

    if not await category_repo.update(category_to_entity(updated_category)):
        raise persistence_error("Something went wrong updating category")

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_category(
    category_id: PathId,
    category_repo: CategoryRepository = Depends(get_category_repository),
):
    category = await category_repo.get_by_id(category_id)
    if category is None:
        raise not_found(f"No category with id: {category_id}")

    if not await category_repo.delete(category):
        raise persistence_error("Something went wrong deleting category")

    return Response(status_code=status.HTTP_204_NO_CONTENT)
