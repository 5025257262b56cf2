from typing import List

from fastapi import APIRouter, Depends, Request, Response, status

from pokemon_review.deps import (
    PathId,
    QueryId,
    get_pokemon_repository,
    get_review_repository,
    get_reviewer_repository,
)
from pokemon_review.errors import (
    ERROR_RESPONSES,
    not_found,
    persistence_error,
    validation_error,
)
from pokemon_review.mapper import review_to_entity, review_to_wire
from pokemon_review.repositories import (
    PokemonRepository,
    ReviewRepository,
    ReviewerRepository,
)
from pokemon_review.schemas import ReviewDto

router = APIRouter(prefix="/api/review", tags=["review"], responses=ERROR_RESPONSES)


@router.get("", response_model=List[ReviewDto])
async def get_reviews(
    review_repo: ReviewRepository = Depends(get_review_repository),
):
    return [review_to_wire(r) for r in await review_repo.get_all()]


@router.get("/{review_id}", response_model=ReviewDto)
async def get_review(
    review_id: PathId,
    review_repo: ReviewRepository = Depends(get_review_repository),
):
    review = await review_repo.get_by_id(review_id)
    if review is None:
        raise not_found(f"Review with id: {review_id} was not found")
    return review_to_wire(review)


@router.get("/pokemon/{pokemon_id}", response_model=List[ReviewDto])
async def get_reviews_for_pokemon(
    pokemon_id: PathId,
    review_repo: ReviewRepository = Depends(get_review_repository),
    pokemon_repo: PokemonRepository = Depends(get_pokemon_repository),
):
    if not await pokemon_repo.exists(pokemon_id):
        raise not_found(f"No pokemon with id: {pokemon_id}")
    return [review_to_wire(r) for r in await review_repo.get_reviews_for_pokemon(pokemon_id)]


@router.get("/reviewer/{reviewer_id}", response_model=List[ReviewDto])
async def get_reviews_from_reviewer(
    reviewer_id: PathId,
    review_repo: ReviewRepository = Depends(get_review_repository),
    reviewer_repo: ReviewerRepository = Depends(get_reviewer_repository),
):
    if not await reviewer_repo.exists(reviewer_id):
        raise not_found(f"Reviewer with id: {reviewer_id} not found")
    return [review_to_wire(r) for r in await review_repo.get_reviews_from_reviewer(reviewer_id)]


@router.post("", response_model=ReviewDto, status_code=status.HTTP_201_CREATED)
async def create_review(
    request: Request,
    response: Response,
    review_create: ReviewDto,
    reviewer_id: QueryId,
    pokemon_id: QueryId,
    review_repo: ReviewRepository = Depends(get_review_repository),
    pokemon_repo: PokemonRepository = Depends(get_pokemon_repository),
    reviewer_repo: ReviewerRepository = Depends(get_reviewer_repository),
):
    if not await pokemon_repo.exists(pokemon_id):
        raise validation_error(f"Pokemon with id: {pokemon_id} does not exist")

    if not await reviewer_repo.exists(reviewer_id):
        raise validation_error(f"Reviewer with id: {reviewer_id} does not exist")

    review = review_to_entity(review_create.model_copy(update={"id": None}))
    review.pokemon_id = pokemon_id
    review.reviewer_id = reviewer_id

    if not await review_repo.create(review):
        raise persistence_error("Something went wrong saving review")

    response.headers["Location"] = str(request.url_for("get_review", review_id=review.id))
    return review_to_wire(review)


@router.put("/{review_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def update_review(
    review_id: PathId,
    updated_review: ReviewDto,
    review_repo: ReviewRepository = Depends(get_review_repository),
):
    """Rewrite title, text and rating. The reviewed Pokemon and the author stay put."""
    if updated_review.id != review_id:
        raise validation_error(
            f"Passed in id: {review_id} does not match body id: {updated_review.id}"
        )

    if not await review_repo.exists(review_id):
        raise not_found(f"Review with id: {review_id} was not found")

    if not await review_repo.update(review_to_entity(updated_review)):
        raise persistence_error("Something went wrong updating review")

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{review_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_review(
    review_id: PathId,
    review_repo: ReviewRepository = Depends(get_review_repository),
):
    review = await review_repo.get_by_id(review_id)
    if review is None:
        raise not_found(f"Review with id: {review_id} was not found")

    if not await review_repo.delete(review):
        raise persistence_error("Something went wrong deleting review")

    return Response(status_code=status.HTTP_204_NO_CONTENT)
