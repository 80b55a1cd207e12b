import uuid

import pytest


def asset_body(name="Warehouse A", lat=14.5995, lng=120.9842, **extra):
    body = {"name": name, "description": f"{name} description", "location": {"lat": lat, "lng": lng}}
    body.update(extra)
    return body


@pytest.mark.anyio
async def test_create_and_get_asset(async_client):
    payload = asset_body("  Lot 42  ", tax_dec_no="TD-001", barangay="San Roque")
    resp = await async_client.post("/api/v1/assets", json=payload)
    assert resp.status_code == 201, resp.text
    data = resp.json()
    assert data["name"] == "Lot 42"
    assert data["status"] == "active"
    assert data["location"] == {"lat": 14.5995, "lng": 120.9842}
    assert data["tax_dec_no"] == "TD-001"
    assert data["projects"] == []

    resp = await async_client.get(f"/api/v1/assets/{data['id']}")
    assert resp.status_code == 200
    assert resp.json()["barangay"] == "San Roque"


@pytest.mark.anyio
async def test_create_asset_reports_every_field_error(async_client):
    resp = await async_client.post(
        "/api/v1/assets",
        json={"name": "   ", "location": {"lat": 91, "lng": 0}, "status": "lost"},
    )
    assert resp.status_code == 400
    body = resp.json()
    assert body["detail"] == "Validation failed"
    paths = {e["path"] for e in body["errors"]}
    assert {"name", "description", "location.lat", "status"} <= paths

    resp = await async_client.get("/api/v1/assets")
    assert resp.json()["total"] == 0


@pytest.mark.anyio
@pytest.mark.parametrize("lat", [90, -90])
async def test_latitude_bounds_are_inclusive(async_client, lat):
    resp = await async_client.post("/api/v1/assets", json=asset_body(lat=lat))
    assert resp.status_code == 201, resp.text


@pytest.mark.anyio
@pytest.mark.parametrize("lat", [90.0001, -90.0001])
async def test_latitude_out_of_range_rejected(async_client, lat):
    resp = await async_client.post("/api/v1/assets", json=asset_body(lat=lat))
    assert resp.status_code == 400
    errors = resp.json()["errors"]
    assert errors == [{"path": "location.lat", "message": "Latitude must be between -90 and 90"}]


@pytest.mark.anyio
async def test_longitude_out_of_range_rejected(async_client):
    resp = await async_client.post("/api/v1/assets", json=asset_body(lng=-180.5))
    assert resp.status_code == 400
    assert resp.json()["errors"][0]["path"] == "location.lng"


@pytest.mark.anyio
async def test_list_assets_pagination(async_client):
    resp = await async_client.post(
        "/api/v1/assets/bulk",
        json={"assets": [asset_body(f"Asset {i:02d}") for i in range(15)]},
    )
    assert resp.status_code == 201, resp.text

    resp = await async_client.get("/api/v1/assets?limit=10&page=2")
    assert resp.status_code == 200
    body = resp.json()
    assert len(body["items"]) == 5
    assert body["total"] == 15
    assert body["pages"] == 2
    assert body["page"] == 2
    assert body["limit"] == 10


@pytest.mark.anyio
async def test_list_assets_empty_has_zero_pages(async_client):
    resp = await async_client.get("/api/v1/assets")
    body = resp.json()
    assert body == {"items": [], "page": 1, "limit": 10, "total": 0, "pages": 0}


@pytest.mark.anyio
async def test_list_assets_rejects_bad_page(async_client):
    resp = await async_client.get("/api/v1/assets?page=0")
    assert resp.status_code == 400
    assert resp.json()["errors"][0]["path"] == "page"


@pytest.mark.anyio
@pytest.mark.parametrize(
    "query, path",
    [("page=10000000000000000000", "page"), ("page=2147483648", "page"), ("limit=1001", "limit")],
)
async def test_list_assets_rejects_oversized_paging(async_client, query, path):
    resp = await async_client.get(f"/api/v1/assets?{query}")
    assert resp.status_code == 400
    assert resp.json()["errors"][0]["path"] == path


@pytest.mark.anyio
async def test_search_wildcards_match_literally(async_client, create_asset):
    await create_asset("Alpha")
    await create_asset("Lot_7 100%")

    resp = await async_client.get("/api/v1/assets", params={"search": "_"})
    assert [item["name"] for item in resp.json()["items"]] == ["Lot_7 100%"]

    resp = await async_client.get("/api/v1/assets", params={"search": "%"})
    assert [item["name"] for item in resp.json()["items"]] == ["Lot_7 100%"]


@pytest.mark.anyio
async def test_search_and_status_filter(async_client, create_asset):
    await create_asset("Dell Laptop")
    await create_asset("Office Chair", description="Ergonomic LAPTOP stand", status="maintenance")
    await create_asset("Projector", status="retired")

    resp = await async_client.get("/api/v1/assets?search=laptop")
    names = {item["name"] for item in resp.json()["items"]}
    assert names == {"Dell Laptop", "Office Chair"}

    resp = await async_client.get("/api/v1/assets?search=laptop&status=maintenance")
    items = resp.json()["items"]
    assert [item["name"] for item in items] == ["Office Chair"]


@pytest.mark.anyio
async def test_list_assets_newest_first(async_client, create_asset):
    first = await create_asset("First")
    second = await create_asset("Second")

    resp = await async_client.get("/api/v1/assets")
    ids = [item["id"] for item in resp.json()["items"]]
    assert ids.index(second["id"]) < ids.index(first["id"])


@pytest.mark.anyio
async def test_update_asset_partial(async_client, create_asset):
    asset = await create_asset("Warehouse", tct_no="T-1")

    resp = await async_client.patch(
        f"/api/v1/assets/{asset['id']}",
        json={"status": "inactive", "location": {"lat": 10, "lng": 20}, "tct_no": None},
    )
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["status"] == "inactive"
    assert data["location"] == {"lat": 10, "lng": 20}
    assert data["tct_no"] is None
    assert data["name"] == "Warehouse"


@pytest.mark.anyio
async def test_update_asset_rejects_null_required_field(async_client, create_asset):
    asset = await create_asset()
    resp = await async_client.put(f"/api/v1/assets/{asset['id']}", json={"name": None})
    assert resp.status_code == 400
    assert {"path": "name", "message": "may not be null"} in resp.json()["errors"]


@pytest.mark.anyio
async def test_malformed_and_missing_ids(async_client):
    resp = await async_client.get("/api/v1/assets/not-a-uuid")
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Invalid asset_id format"

    resp = await async_client.get(f"/api/v1/assets/{uuid.uuid4()}")
    assert resp.status_code == 404

    resp = await async_client.delete(f"/api/v1/assets/{uuid.uuid4()}")
    assert resp.status_code == 404

    resp = await async_client.patch(f"/api/v1/assets/{uuid.uuid4()}", json={"name": "x"})
    assert resp.status_code == 404


@pytest.mark.anyio
async def test_delete_asset_cascades_to_null(async_client, create_asset, create_project, create_case):
    asset = await create_asset()
    p1 = await create_project("P1", asset_id=asset["id"])
    p2 = await create_project("P2", asset_id=asset["id"])
    case = await create_case(asset_id=asset["id"])
    resp = await async_client.post(
        "/api/v1/notes", json={"content": "only linked to the asset", "asset_id": asset["id"]}
    )
    note = resp.json()

    resp = await async_client.get(f"/api/v1/assets/{asset['id']}")
    assert {p["id"] for p in resp.json()["projects"]} == {p1["id"], p2["id"]}

    resp = await async_client.delete(f"/api/v1/assets/{asset['id']}")
    assert resp.status_code == 200
    assert resp.json() == {"id": asset["id"], "message": "Asset deleted successfully"}

    for project in (p1, p2):
        resp = await async_client.get(f"/api/v1/projects/{project['id']}")
        assert resp.status_code == 200
        data = resp.json()
        assert data["asset_id"] is None
        assert data["assigned_at"] is None
        assert data["asset"] is None

    resp = await async_client.get(f"/api/v1/cases/{case['id']}")
    assert resp.status_code == 200
    assert resp.json()["asset_id"] is None

    # The note survives with every link cleared
    resp = await async_client.get(f"/api/v1/notes/{note['id']}")
    assert resp.status_code == 200
    data = resp.json()
    assert (data["asset_id"], data["project_id"], data["case_id"]) == (None, None, None)

    resp = await async_client.get(f"/api/v1/assets/{asset['id']}")
    assert resp.status_code == 404


@pytest.mark.anyio
async def test_bulk_create_is_all_or_nothing(async_client):
    resp = await async_client.post(
        "/api/v1/assets/bulk",
        json={"assets": [asset_body("Good"), asset_body("Bad", lat=120)]},
    )
    assert resp.status_code == 400
    assert resp.json()["errors"][0]["path"] == "assets.1.location.lat"

    resp = await async_client.get("/api/v1/assets")
    assert resp.json()["total"] == 0

    resp = await async_client.post("/api/v1/assets/bulk", json={"assets": "nope"})
    assert resp.status_code == 400


@pytest.mark.anyio
async def test_bulk_assign_projects(async_client, create_asset, create_project):
    a1 = await create_asset("A1")
    a2 = await create_asset("A2")
    p1 = await create_project("P1")
    p2 = await create_project("P2", asset_id=a1["id"])

    resp = await async_client.put(
        "/api/v1/assets/bulk",
        json={"assignments": [
            {"project_id": p1["id"], "asset_id": a2["id"]},
            {"project_id": p2["id"], "asset_id": None},
        ]},
    )
    assert resp.status_code == 200, resp.text
    items = {item["id"]: item for item in resp.json()["items"]}
    assert items[p1["id"]]["asset_id"] == a2["id"]
    assert items[p1["id"]]["assigned_at"] is not None
    assert items[p1["id"]]["asset"]["name"] == "A2"
    assert items[p2["id"]]["asset_id"] is None
    assert items[p2["id"]]["assigned_at"] is None


@pytest.mark.anyio
async def test_bulk_assign_missing_asset_changes_nothing(async_client, create_project):
    p1 = await create_project("P1")

    resp = await async_client.put(
        "/api/v1/assets/bulk",
        json={"assignments": [{"project_id": p1["id"], "asset_id": str(uuid.uuid4())}]},
    )
    assert resp.status_code == 404

    resp = await async_client.get(f"/api/v1/projects/{p1['id']}")
    assert resp.json()["asset_id"] is None


@pytest.mark.anyio
async def test_bulk_delete(async_client, create_asset, create_project):
    a1 = await create_asset("A1")
    a2 = await create_asset("A2")
    keep = await create_asset("Keep")
    project = await create_project("P", asset_id=a1["id"])

    resp = await async_client.delete(f"/api/v1/assets/bulk?ids={a1['id']},{a2['id']}")
    assert resp.status_code == 200, resp.text
    assert set(resp.json()["ids"]) == {a1["id"], a2["id"]}

    resp = await async_client.get("/api/v1/assets")
    assert [item["id"] for item in resp.json()["items"]] == [keep["id"]]

    resp = await async_client.get(f"/api/v1/projects/{project['id']}")
    assert resp.json()["asset_id"] is None
    assert resp.json()["assigned_at"] is None


@pytest.mark.anyio
async def test_bulk_delete_rejects_malformed_ids(async_client, create_asset):
    asset = await create_asset()

    resp = await async_client.delete(f"/api/v1/assets/bulk?ids={asset['id']},bogus")
    assert resp.status_code == 400

    resp = await async_client.delete("/api/v1/assets/bulk")
    assert resp.status_code == 400

    resp = await async_client.get(f"/api/v1/assets/{asset['id']}")
    assert resp.status_code == 200


@pytest.mark.anyio
async def test_stats(async_client, create_asset, create_project):
    a1 = await create_asset("A1")
    await create_asset("A2", status="retired")
    await create_project("P1", asset_id=a1["id"])
    await create_project("P2", asset_id=a1["id"], status="active")
    await create_project("P3")

    resp = await async_client.get("/api/v1/assets/stats")
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["summary"] == {
        "total_assets": 2,
        "total_projects": 3,
        "assigned_projects": 2,
        "unassigned_projects": 1,
        "assignment_rate": 67,
    }
    assert body["assets_by_status"] == {"active": 1, "retired": 1}
    assert body["projects_by_status"] == {"planning": 2, "active": 1}
    counts = {row["asset"]["name"]: row["project_count"] for row in body["assets_with_project_counts"]}
    assert counts == {"A1": 2, "A2": 0}
