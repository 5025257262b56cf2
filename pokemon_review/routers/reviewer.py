from typing import List

from fastapi import APIRouter, Depends, Request, Response, status

from pokemon_review.deps import PathId, get_reviewer_repository
from pokemon_review.errors import (
    ERROR_RESPONSES,
    not_found,
    persistence_error,
    validation_error,
)
from pokemon_review.mapper import (
    review_to_wire,
    reviewer_to_detail,
    reviewer_to_entity,
    reviewer_to_wire,
)
from pokemon_review.repositories import ReviewerRepository
from pokemon_review.schemas import ReviewDto, ReviewerDetailDto, ReviewerDto

router = APIRouter(prefix="/api/reviewer", tags=["reviewer"], responses=ERROR_RESPONSES)


@router.get("", response_model=List[ReviewerDto])
async def get_reviewers(
    reviewer_repo: ReviewerRepository = Depends(get_reviewer_repository),
):
    return [reviewer_to_wire(r) for r in await reviewer_repo.get_all()]


@router.get("/{reviewer_id}", response_model=ReviewerDetailDto)
async def get_reviewer(
    reviewer_id: PathId,
    reviewer_repo: ReviewerRepository = Depends(get_reviewer_repository),
):
    """A reviewer together with every review they wrote."""
    reviewer = await reviewer_repo.get_by_id(reviewer_id)
    if reviewer is None:
        raise not_found(f"Reviewer with id: {reviewer_id} was not found")
    return reviewer_to_detail(reviewer)


@router.get("/{reviewer_id}/reviews", response_model=List[ReviewDto])
async def get_reviews_by_reviewer(
    reviewer_id: PathId,
    reviewer_repo: ReviewerRepository = Depends(get_reviewer_repository),
):
    if not await reviewer_repo.exists(reviewer_id):
        raise not_found(f"Reviewer with id: {reviewer_id} was not found")
    return [review_to_wire(r) for r in await reviewer_repo.get_reviews_by_reviewer(reviewer_id)]


@router.post("", response_model=ReviewerDto, status_code=status.HTTP_201_CREATED)
async def create_reviewer(
    request: Request,
    response: Response,
    reviewer_create: ReviewerDto,
    reviewer_repo: ReviewerRepository = Depends(get_reviewer_repository),
):
    # Two reviewers may share a name
    reviewer = reviewer_to_entity(reviewer_create.model_copy(update={"id": None}))

    if not await reviewer_repo.create(reviewer):
        raise persistence_error("Something went wrong saving reviewer")

    response.headers["Location"] = str(request.url_for("get_reviewer", reviewer_id=reviewer.id))
    return reviewer_to_wire(reviewer)


@router.put("/{reviewer_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def update_reviewer(
    reviewer_id: PathId,
    updated_reviewer: ReviewerDto,
    reviewer_repo: ReviewerRepository = Depends(get_reviewer_repository),
):
    if updated_reviewer.id != reviewer_id:
        raise validation_error(
            f"Passed in id: {reviewer_id} does not match body id: {updated_reviewer.id}"
        )

    if not await reviewer_repo.exists(reviewer_id):
        raise not_found(f"Reviewer with id: {reviewer_id} was not found")

    if not await reviewer_repo.update(reviewer_to_entity(updated_reviewer)):
        raise persistence_error("Something went wrong updating reviewer")

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{reviewer_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_reviewer(
    reviewer_id: PathId,
    reviewer_repo: ReviewerRepository = Depends(get_reviewer_repository),
):
    """Deleting a reviewer also deletes their reviews."""
    reviewer = await reviewer_repo.get_by_id(reviewer_id)
    if reviewer is None:
        raise not_found(f"Reviewer with id: {reviewer_id} was not found")

    if not await reviewer_repo.delete(reviewer):
        raise persistence_error("Something went wrong deleting reviewer")

    return Response(status_code=status.HTTP_204_NO_CONTENT)
