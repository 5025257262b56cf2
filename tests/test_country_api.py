async def test_crud_cycle(client):
    resp = await client.post("/api/country", json={"name": "Kanto"})
    assert resp.status_code == 201
    country = resp.json()

    assert (await client.get(f"/api/country/{country['id']}")).json() == country
    assert (await client.get("/api/country")).json() == [country]

    resp = await client.put(f"/api/country/{country['id']}", json={"id": country["id"], "name": "Johto"})
    assert resp.status_code == 204
    assert (await client.get(f"/api/country/{country['id']}")).json()["name"] == "Johto"

    assert (await client.delete(f"/api/country/{country['id']}")).status_code == 204
    assert (await client.get(f"/api/country/{country['id']}")).status_code == 404


async def test_duplicate_name_is_rejected(client, make_country):
    await make_country("Hoenn")

    resp = await client.post("/api/country", json={"name": "hoenn "})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Country hoenn already exists", "kind": "validation"}


async def test_duplicate_name_with_trailing_tab_is_rejected(client):
    assert (await client.post("/api/country", json={"name": "Kanto\t"})).status_code == 201

    resp = await client.post("/api/country", json={"name": "Kanto\t"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Country Kanto already exists", "kind": "validation"}


async def test_duplicate_non_ascii_name_is_rejected(client):
    assert (await client.post("/api/country", json={"name": "Éire"})).status_code == 201

    assert (await client.post("/api/country", json={"name": "Éire"})).status_code == 400
    assert (await client.post("/api/country", json={"name": "éIRE\n"})).status_code == 400
    assert len((await client.get("/api/country")).json()) == 1


async def test_update_id_mismatch(client, make_country):
    country = await make_country("Sinnoh")

    resp = await client.put(f"/api/country/{country['id']}", json={"name": "Unova"})
    assert resp.status_code == 400
    assert (await client.get(f"/api/country/{country['id']}")).json()["name"] == "Sinnoh"


async def test_country_of_owner(client, make_country, make_owner):
    country = await make_country("Kalos")
    owner = await make_owner(country_id=country["id"])

    resp = await client.get(f"/api/country/owners/{owner['id']}")
    assert resp.status_code == 200
    assert resp.json() == country

    assert (await client.get("/api/country/owners/999")).status_code == 404


async def test_owners_from_country(client, make_country, make_owner):
    country = await make_country("Alola")
    ash = await make_owner(last_name="Ketchum", country_id=country["id"])
    brock = await make_owner(first_name="Brock", last_name="Harrison", country_id=country["id"])
    await make_owner(first_name="Misty", last_name="Waterflower")

    resp = await client.get(f"/api/country/{country['id']}/owners")
    assert [o["id"] for o in resp.json()] == [ash["id"], brock["id"]]

    assert (await client.get("/api/country/999/owners")).status_code == 404


async def test_country_with_owners_cannot_be_deleted(client, make_country, make_owner):
    country = await make_country("Galar")
    await make_owner(country_id=country["id"])

    resp = await client.delete(f"/api/country/{country['id']}")
    assert resp.status_code == 500
    assert resp.json()["kind"] == "persistence"
    assert (await client.get(f"/api/country/{country['id']}")).status_code == 200
