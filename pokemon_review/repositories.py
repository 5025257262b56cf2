"""
Data access layer.

`Repository` holds the operations every entity shares; the subclasses add
the relationship queries specific to one entity. Each repository is bound to
the AsyncSession of the current request, and every write commits that
session. Writes report success as a bool and never raise for store errors.
"""
import logging
from typing import Generic, Optional, Sequence, Type, TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from pokemon_review.models import (
    Base,
    Category,
    Country,
    Owner,
    Pokemon,
    PokemonCategory,
    PokemonOwner,
    Review,
    Reviewer,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


def _normalize(name: str) -> str:
    return name.strip().casefold()


class Repository(Generic[ModelT]):
    model: Type[ModelT]
    # Columns copied from the incoming entity on update
    fields: tuple[str, ...] = ()

    def __init__(self, session: AsyncSession):
        self.session = session

    async def exists(self, entity_id: int) -> bool:
        result = await self.session.execute(
            select(self.model.id).where(self.model.id == entity_id)
        )
        return result.first() is not None

    async def get_all(self) -> list[ModelT]:
        result = await self.session.execute(select(self.model).order_by(self.model.id))
        return list(result.scalars().all())

    async def get_by_id(self, entity_id: int) -> Optional[ModelT]:
        return await self.session.get(self.model, entity_id)

    async def create(self, entity: ModelT) -> bool:
        self.session.add(entity)
        return await self.save()

    async def update(self, entity: ModelT) -> bool:
        """Overwrite the stored row that has `entity.id` (last write wins)."""
        stored = await self.get_by_id(entity.id)
        if stored is None:
            return False
        self._copy_fields(entity, stored)
        return await self.save()

    async def delete(self, entity: ModelT) -> bool:
        await self.session.delete(entity)
        return await self.save()

    async def save(self) -> bool:
        try:
            await self.session.commit()
        except SQLAlchemyError:
            logger.exception("Failed to save %s changes", self.model.__name__)
            await self.session.rollback()
            return False
        return True

    def _copy_fields(self, source: ModelT, target: ModelT) -> None:
        for field in self.fields:
            setattr(target, field, getattr(source, field))

    async def _first_by_normalized(self, column, value: str) -> Optional[ModelT]:
        # Both sides go through the same str methods. SQL trim/lower differ
        # per engine on tabs and non-ASCII letters.
        wanted = _normalize(value)
        result = await self.session.execute(
            select(self.model, column).order_by(self.model.id)
        )
        for entity, stored in result.all():
            if stored is not None and _normalize(stored) == wanted:
                return entity
        return None


class PokemonRepository(Repository[Pokemon]):
    model = Pokemon
    fields = ("name", "birth_date")

    async def get_by_name(self, name: str) -> Optional[Pokemon]:
        return await self._first_by_normalized(Pokemon.name, name)

    async def create(self, owner_id: int, category_id: int, pokemon: Pokemon) -> bool:
        """Insert the Pokemon and both of its join rows in a single commit."""
        pokemon.pokemon_owners.append(PokemonOwner(owner_id=owner_id))
        pokemon.pokemon_categories.append(PokemonCategory(category_id=category_id))
        self.session.add(pokemon)
        return await self.save()

    async def update(self, owner_id: int, category_id: int, pokemon: Pokemon) -> bool:
        """
        Overwrite name and birth date, and make sure the Pokemon is linked
        to the given owner and category. Existing links are kept.
        """
        stored = await self.get_by_id(pokemon.id)
        if stored is None:
            return False
        self._copy_fields(pokemon, stored)

        if await self.session.get(PokemonOwner, (stored.id, owner_id)) is None:
            self.session.add(PokemonOwner(pokemon_id=stored.id, owner_id=owner_id))
        if await self.session.get(PokemonCategory, (stored.id, category_id)) is None:
            self.session.add(PokemonCategory(pokemon_id=stored.id, category_id=category_id))

        return await self.save()

    async def get_rating(self, pokemon_id: int) -> float:
        """Mean rating over the Pokemon's reviews, 0 when it has none."""
        result = await self.session.execute(
            select(func.avg(Review.rating)).where(Review.pokemon_id == pokemon_id)
        )
        average = result.scalar_one()
        if average is None:
            return 0.0
        return float(average)


class CategoryRepository(Repository[Category]):
    model = Category
    fields = ("name",)

    async def get_by_name(self, name: str) -> Optional[Category]:
        return await self._first_by_normalized(Category.name, name)

    async def get_pokemon_by_category(self, category_id: int) -> list[Pokemon]:
        result = await self.session.execute(
            select(Pokemon)
            .join(PokemonCategory, PokemonCategory.pokemon_id == Pokemon.id)
            .where(PokemonCategory.category_id == category_id)
            .order_by(Pokemon.id)
        )
        return list(result.scalars().all())


class CountryRepository(Repository[Country]):
    model = Country
    fields = ("name",)

    async def get_by_name(self, name: str) -> Optional[Country]:
        return await self._first_by_normalized(Country.name, name)

    async def get_country_by_owner(self, owner_id: int) -> Optional[Country]:
        result = await self.session.execute(
            select(Country)
            .join(Owner, Owner.country_id == Country.id)
            .where(Owner.id == owner_id)
        )
        return result.scalars().first()

    async def get_owners_from_country(self, country_id: int) -> list[Owner]:
        result = await self.session.execute(
            select(Owner).where(Owner.country_id == country_id).order_by(Owner.id)
        )
        return list(result.scalars().all())


class OwnerRepository(Repository[Owner]):
    model = Owner
    fields = ("first_name", "last_name")

    async def get_by_last_name(self, last_name: str) -> Optional[Owner]:
        return await self._first_by_normalized(Owner.last_name, last_name)

    async def get_pokemon_by_owner(self, owner_id: int) -> list[Pokemon]:
        result = await self.session.execute(
            select(Pokemon)
            .join(PokemonOwner, PokemonOwner.pokemon_id == Pokemon.id)
            .where(PokemonOwner.owner_id == owner_id)
            .order_by(Pokemon.id)
        )
        return list(result.scalars().all())

    async def get_owners_of_pokemon(self, pokemon_id: int) -> list[Owner]:
        result = await self.session.execute(
            select(Owner)
            .join(PokemonOwner, PokemonOwner.owner_id == Owner.id)
            .where(PokemonOwner.pokemon_id == pokemon_id)
            .order_by(Owner.id)
        )
        return list(result.scalars().all())


class ReviewRepository(Repository[Review]):
    model = Review
    fields = ("title", "text", "rating")

    async def get_reviews_for_pokemon(self, pokemon_id: int) -> list[Review]:
        result = await self.session.execute(
            select(Review).where(Review.pokemon_id == pokemon_id).order_by(Review.id)
        )
        return list(result.scalars().all())

    async def get_reviews_from_reviewer(self, reviewer_id: int) -> list[Review]:
        result = await self.session.execute(
            select(Review).where(Review.reviewer_id == reviewer_id).order_by(Review.id)
        )
        return list(result.scalars().all())

    async def delete_many(self, reviews: Sequence[Review]) -> bool:
        if not reviews:
            return True
        for review in reviews:
            await self.session.delete(review)
        return await self.save()


class ReviewerRepository(Repository[Reviewer]):
    model = Reviewer
    fields = ("first_name", "last_name")

    async def get_by_id(self, reviewer_id: int) -> Optional[Reviewer]:
        # The only single-get that eagerly loads its children
        result = await self.session.execute(
            select(Reviewer)
            .options(selectinload(Reviewer.reviews))
            .where(Reviewer.id == reviewer_id)
            .execution_options(populate_existing=True)
        )
        return result.scalars().first()

    async def get_reviews_by_reviewer(self, reviewer_id: int) -> list[Review]:
        reviewer = await self.get_by_id(reviewer_id)
        if reviewer is None:
            return []
        return sorted(reviewer.reviews, key=lambda r: r.id)
