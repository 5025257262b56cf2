"""
Field-for-field conversion between ORM entities and wire DTOs.

One pair of pure functions per entity. Foreign keys and relationships are
never part of the wire shape; route handlers attach them explicitly.
"""
from pokemon_review.models import Category, Country, Owner, Pokemon, Review, Reviewer
from pokemon_review.schemas import (
    CategoryDto,
    CountryDto,
    OwnerDto,
    PokemonDto,
    ReviewDto,
    ReviewerDetailDto,
    ReviewerDto,
)


def pokemon_to_wire(entity: Pokemon) -> PokemonDto:
    return PokemonDto(id=entity.id, name=entity.name, birth_date=entity.birth_date)


def pokemon_to_entity(dto: PokemonDto) -> Pokemon:
    return Pokemon(id=dto.id, name=dto.name, birth_date=dto.birth_date)


def category_to_wire(entity: Category) -> CategoryDto:
    return CategoryDto(id=entity.id, name=entity.name)


def category_to_entity(dto: CategoryDto) -> Category:
    return Category(id=dto.id, name=dto.name)


def country_to_wire(entity: Country) -> CountryDto:
    return CountryDto(id=entity.id, name=entity.name)


def country_to_entity(dto: CountryDto) -> Country:
    return Country(id=dto.id, name=dto.name)


def owner_to_wire(entity: Owner) -> OwnerDto:
    return OwnerDto(id=entity.id, first_name=entity.first_name, last_name=entity.last_name)


def owner_to_entity(dto: OwnerDto) -> Owner:
    return Owner(id=dto.id, first_name=dto.first_name, last_name=dto.last_name)


def review_to_wire(entity: Review) -> ReviewDto:
    return ReviewDto(
        id=entity.id,
        title=entity.title,
        text=entity.text,
        rating=entity.rating,
    )


def review_to_entity(dto: ReviewDto) -> Review:
    return Review(id=dto.id, title=dto.title, text=dto.text, rating=dto.rating)


def reviewer_to_wire(entity: Reviewer) -> ReviewerDto:
    return ReviewerDto(id=entity.id, first_name=entity.first_name, last_name=entity.last_name)


def reviewer_to_entity(dto: ReviewerDto) -> Reviewer:
    return Reviewer(id=dto.id, first_name=dto.first_name, last_name=dto.last_name)


def reviewer_to_detail(entity: Reviewer) -> ReviewerDetailDto:
    """Reviewer plus its reviews; `entity.reviews` must already be loaded."""
    return ReviewerDetailDto(
        id=entity.id,
        first_name=entity.first_name,
        last_name=entity.last_name,
        reviews=[review_to_wire(r) for r in entity.reviews],
    )
