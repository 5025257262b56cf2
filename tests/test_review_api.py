import pytest


@pytest.fixture
async def pokemon_and_reviewer(make_owner, make_category, make_pokemon, make_reviewer):
    owner = await make_owner()
    category = await make_category()
    pokemon = await make_pokemon(owner["id"], category["id"])
    reviewer = await make_reviewer()
    return pokemon, reviewer


async def test_create_and_get_round_trip(client, pokemon_and_reviewer):
    pokemon, reviewer = pokemon_and_reviewer

    resp = await client.post(
        "/api/review",
        params={"pokemon_id": pokemon["id"], "reviewer_id": reviewer["id"]},
        json={"title": "Shocking", "text": "Electrifying performance", "rating": 5},
    )
    assert resp.status_code == 201
    review = resp.json()
    assert resp.headers["location"].endswith(f"/api/review/{review['id']}")

    assert (await client.get(f"/api/review/{review['id']}")).json() == {
        "id": review["id"],
        "title": "Shocking",
        "text": "Electrifying performance",
        "rating": 5,
    }
    assert (await client.get("/api/review")).json() == [review]


async def test_create_with_unknown_pokemon_or_reviewer(client, pokemon_and_reviewer):
    pokemon, reviewer = pokemon_and_reviewer
    body = {"title": "t", "text": "x", "rating": 3}

    resp = await client.post("/api/review", params={"pokemon_id": 999, "reviewer_id": reviewer["id"]}, json=body)
    assert resp.status_code == 400

    resp = await client.post("/api/review", params={"pokemon_id": pokemon["id"], "reviewer_id": 999}, json=body)
    assert resp.status_code == 400

    assert (await client.get("/api/review")).json() == []


async def test_reviews_for_pokemon_and_reviewer(client, pokemon_and_reviewer, make_reviewer, make_review):
    pokemon, reviewer = pokemon_and_reviewer
    other_reviewer = await make_reviewer(first_name="Tracey", last_name="Sketchit")
    first = await make_review(pokemon["id"], reviewer["id"], rating=4)
    second = await make_review(pokemon["id"], other_reviewer["id"], rating=2)

    resp = await client.get(f"/api/review/pokemon/{pokemon['id']}")
    assert [r["id"] for r in resp.json()] == [first["id"], second["id"]]

    resp = await client.get(f"/api/review/reviewer/{other_reviewer['id']}")
    assert resp.json() == [second]

    assert (await client.get("/api/review/pokemon/999")).status_code == 404
    assert (await client.get("/api/review/reviewer/999")).status_code == 404


async def test_update(client, pokemon_and_reviewer, make_review):
    pokemon, reviewer = pokemon_and_reviewer
    review = await make_review(pokemon["id"], reviewer["id"], rating=1)

    resp = await client.put(
        f"/api/review/{review['id']}",
        json={"id": review["id"], "title": "Changed my mind", "text": "Actually great", "rating": 5},
    )
    assert resp.status_code == 204
    assert (await client.get(f"/api/review/{review['id']}")).json()["rating"] == 5
    # Still attached to the same Pokemon
    assert len((await client.get(f"/api/review/pokemon/{pokemon['id']}")).json()) == 1


async def test_update_id_mismatch_and_missing(client, pokemon_and_reviewer, make_review):
    pokemon, reviewer = pokemon_and_reviewer
    review = await make_review(pokemon["id"], reviewer["id"], rating=1)

    resp = await client.put(
        f"/api/review/{review['id']}",
        json={"id": review["id"] + 1, "title": "x", "text": "y", "rating": 5},
    )
    assert resp.status_code == 400
    assert (await client.get(f"/api/review/{review['id']}")).json()["rating"] == 1

    resp = await client.put("/api/review/50", json={"id": 50, "title": "x", "text": "y", "rating": 5})
    assert resp.status_code == 404


async def test_non_integer_rating_is_bad_request(client, pokemon_and_reviewer):
    pokemon, reviewer = pokemon_and_reviewer

    resp = await client.post(
        "/api/review",
        params={"pokemon_id": pokemon["id"], "reviewer_id": reviewer["id"]},
        json={"title": "t", "text": "x", "rating": "lots"},
    )
    assert resp.status_code == 400
    assert resp.json()["kind"] == "validation"


async def test_oversized_ids_and_rating_are_bad_requests(client, pokemon_and_reviewer):
    pokemon, reviewer = pokemon_and_reviewer

    resp = await client.post(
        "/api/review",
        params={"pokemon_id": pokemon["id"], "reviewer_id": reviewer["id"]},
        json={"title": "t", "text": "x", "rating": 2**63},
    )
    assert resp.status_code == 400

    resp = await client.post(
        "/api/review",
        params={"pokemon_id": 2**63, "reviewer_id": reviewer["id"]},
        json={"title": "t", "text": "x", "rating": 1},
    )
    assert resp.status_code == 400
    assert resp.json()["kind"] == "validation"

    assert (await client.get(f"/api/review/reviewer/{2**63}")).status_code == 400
    assert (await client.get(f"/api/review/{2**31}")).status_code == 400
    assert (await client.get("/api/review")).json() == []


async def test_delete(client, pokemon_and_reviewer, make_review):
    pokemon, reviewer = pokemon_and_reviewer
    review = await make_review(pokemon["id"], reviewer["id"])

    assert (await client.delete(f"/api/review/{review['id']}")).status_code == 204
    assert (await client.get(f"/api/review/{review['id']}")).status_code == 404
    assert (await client.delete(f"/api/review/{review['id']}")).status_code == 404
