from datetime import date

from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
from sqlalchemy import Integer, String, Text, Date, ForeignKey


class Base(DeclarativeBase):
    """
    Base class for all ORM models.

    SQLAlchemy uses this to keep track of tables and mappings.
    """
    pass


class Pokemon(Base):
    """
    ORM model for the 'pokemon' table.

    Reviews point at a Pokemon without a cascading foreign key, so the
    store refuses to delete a Pokemon that still has reviews.
    """
    __tablename__ = "pokemon"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    birth_date: Mapped[date | None] = mapped_column(Date)

    pokemon_categories: Mapped[list["PokemonCategory"]] = relationship(
        back_populates="pokemon",
        cascade="all",
        passive_deletes=True,
    )
    pokemon_owners: Mapped[list["PokemonOwner"]] = relationship(
        back_populates="pokemon",
        cascade="all",
        passive_deletes=True,
    )
    # Never nulled out by the ORM; dependent reviews are removed explicitly
    reviews: Mapped[list["Review"]] = relationship(
        back_populates="pokemon",
        passive_deletes="all",
    )


class Category(Base):
    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)

    pokemon_categories: Mapped[list["PokemonCategory"]] = relationship(
        back_populates="category",
        cascade="all",
        passive_deletes=True,
    )


class Country(Base):
    __tablename__ = "countries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)

    owners: Mapped[list["Owner"]] = relationship(
        back_populates="country",
        passive_deletes="all",
    )


class Owner(Base):
    __tablename__ = "owners"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    first_name: Mapped[str] = mapped_column(String, nullable=False)
    last_name: Mapped[str] = mapped_column(String, nullable=False)
    country_id: Mapped[int | None] = mapped_column(ForeignKey("countries.id"))

    country: Mapped[Country | None] = relationship(back_populates="owners")
    pokemon_owners: Mapped[list["PokemonOwner"]] = relationship(
        back_populates="owner",
        cascade="all",
        passive_deletes=True,
    )


class Reviewer(Base):
    __tablename__ = "reviewers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    first_name: Mapped[str] = mapped_column(String, nullable=False)
    last_name: Mapped[str] = mapped_column(String, nullable=False)

    reviews: Mapped[list["Review"]] = relationship(
        back_populates="reviewer",
        cascade="all",
        passive_deletes=True,
    )


class Review(Base):
    __tablename__ = "reviews"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String, nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    pokemon_id: Mapped[int] = mapped_column(
        ForeignKey("pokemon.id"),
        nullable=False,
    )
    reviewer_id: Mapped[int] = mapped_column(
        ForeignKey("reviewers.id", ondelete="CASCADE"),
        nullable=False,
    )

    pokemon: Mapped[Pokemon] = relationship(back_populates="reviews")
    reviewer: Mapped[Reviewer] = relationship(back_populates="reviews")


class PokemonCategory(Base):
    """
    Join row between a Pokemon and a Category.

    Composite Primary Key ensures we don't store duplicate links.
    """
    __tablename__ = "pokemon_categories"

    pokemon_id: Mapped[int] = mapped_column(
        ForeignKey("pokemon.id", ondelete="CASCADE"),
        primary_key=True,
    )
    category_id: Mapped[int] = mapped_column(
        ForeignKey("categories.id", ondelete="CASCADE"),
        primary_key=True,
    )

    pokemon: Mapped[Pokemon] = relationship(back_populates="pokemon_categories")
    category: Mapped[Category] = relationship(back_populates="pokemon_categories")


class PokemonOwner(Base):
    """
    Join row between a Pokemon and an Owner.

    Composite Primary Key ensures we don't store duplicate links.
    """
    __tablename__ = "pokemon_owners"

    pokemon_id: Mapped[int] = mapped_column(
        ForeignKey("pokemon.id", ondelete="CASCADE"),
        primary_key=True,
    )
    owner_id: Mapped[int] = mapped_column(
        ForeignKey("owners.id", ondelete="CASCADE"),
        primary_key=True,
    )

    pokemon: Mapped[Pokemon] = relationship(back_populates="pokemon_owners")
    owner: Mapped[Owner] = relationship(back_populates="pokemon_owners")
