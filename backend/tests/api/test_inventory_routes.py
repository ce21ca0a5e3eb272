"""Inventory Routes - verifies plant types and material endpoints.

Tests:
    - Plant type listing
    - Material create by category path segment; list and get
    - Invalid secondary code -> 400 INVALID_OPTION(plant_type)
    - PUT updates fields and switches category
    - PUT with a secondary code of another category -> 400 INVALID_OPTION
    - available_seed lists only stocked seeds
"""

from uuid import uuid4

SEED_FORM = {
    "name": "Tomato seed", "price_per_unit": "2.5", "currency_code": "USD",
    "quantity": "100", "quantity_unit": "seeds", "plant_type": "vegetable",
}


async def _create(client, category="seed", **overrides) -> dict:
    res = await client.post(
        f"/api/v1/farms/inventories/materials/{category}", data={**SEED_FORM, **overrides},
    )
    assert res.status_code == 201, res.text
    return res.json()["data"]


async def test_plant_types(client):
    res = await client.get("/api/v1/farms/inventories/plant_types")
    assert res.status_code == 200
    assert {"code": "vegetable", "name": "Vegetable"} in res.json()["data"]


async def test_create_list_and_get_material(client):
    created = await _create(client)
    assert created["type"] == "seed"
    assert created["type_detail"] == "vegetable"
    assert created["quantity"]["unit"]["code"] == "seeds"
    assert created["price_per_unit"]["code"] == "USD"

    listed = (await client.get("/api/v1/farms/inventories/materials")).json()["data"]
    assert [m["uid"] for m in listed] == [created["uid"]]

    res = await client.get(f"/api/v1/farms/inventories/materials/{created['uid']}")
    assert res.status_code == 200
    assert res.json()["data"]["name"] == "Tomato seed"


async def test_create_with_unknown_plant_type_is_400(client):
    res = await client.post(
        "/api/v1/farms/inventories/materials/seed", data={**SEED_FORM, "plant_type": "rock"},
    )
    assert res.status_code == 400
    error = res.json()["error"]
    assert (error["code"], error["field"]) == ("INVALID_OPTION", "plant_type")
    listed = (await client.get("/api/v1/farms/inventories/materials")).json()["data"]
    assert listed == []


async def test_create_with_unknown_category_is_400(client):
    res = await client.post("/api/v1/farms/inventories/materials/gadget", data=SEED_FORM)
    assert res.status_code == 400
    assert res.json()["error"]["field"] == "type"


async def test_get_unknown_material_is_404(client):
    res = await client.get(f"/api/v1/farms/inventories/materials/{uuid4()}")
    assert res.status_code == 404


async def test_update_material(client):
    created = await _create(client)
    res = await client.put(
        f"/api/v1/farms/inventories/materials/{created['uid']}",
        data={"quantity": "40", "is_expense": "true", "expiration_date": "2027-02-01"},
    )
    assert res.status_code == 200
    updated = res.json()["data"]
    assert updated["quantity"]["value"] == 40.0
    assert updated["is_expense"] is True
    assert updated["expiration_date"] == "2027-02-01"


async def test_update_switches_category(client):
    created = await _create(client)
    res = await client.put(
        f"/api/v1/farms/inventories/materials/{created['uid']}",
        data={"type": "agrochemical", "chemical_type": "fertilizer", "quantity_unit": "bags"},
    )
    assert res.status_code == 200
    updated = res.json()["data"]
    assert (updated["type"], updated["type_detail"]) == ("agrochemical", "fertilizer")
    assert updated["quantity"]["unit"]["code"] == "bags"


async def test_update_with_secondary_code_of_other_category_is_400(client):
    created = await _create(
        client, "agrochemical", plant_type="", chemical_type="fertilizer", quantity_unit="bags",
    )
    res = await client.put(
        f"/api/v1/farms/inventories/materials/{created['uid']}", data={"plant_type": "bogus_code"},
    )
    assert res.status_code == 400
    error = res.json()["error"]
    assert (error["code"], error["field"]) == ("INVALID_OPTION", "plant_type")
    res = await client.get(f"/api/v1/farms/inventories/materials/{created['uid']}")
    assert res.json()["data"]["type_detail"] == "fertilizer"


async def test_available_seed(client):
    stocked = await _create(client)
    await _create(client, name="Sold out", quantity="0")
    await _create(
        client, "seeding_container",
        name="Trays", quantity="30", quantity_unit="pieces",
        plant_type="", container_type="tray",
    )

    res = await client.get("/api/v1/farms/inventories/materials/available_seed")
    assert res.status_code == 200
    seeds = res.json()["data"]
    assert [s["uid"] for s in seeds] == [stocked["uid"]]
    assert seeds[0]["plant_type"] == "vegetable"
