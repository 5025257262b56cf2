from pokemon_review.routers import category, country, owner, pokemon, review, reviewer

all_routers = [
    pokemon.router,
    category.router,
    country.router,
    owner.router,
    review.router,
    reviewer.router,
]
