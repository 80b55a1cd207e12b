import uuid
from datetime import datetime, timedelta, timezone

import pytest

from core.assignment import Transition, assignment_is_consistent, classify, set_project_asset
from db_models.project import Project


# ---------- Rules ----------

def test_classify_transitions():
    a, b = uuid.uuid4(), uuid.uuid4()
    assert classify(None, None) is Transition.NONE
    assert classify(None, a) is Transition.ASSIGNED
    assert classify(a, None) is Transition.UNASSIGNED
    assert classify(a, b) is Transition.REASSIGNED
    assert classify(a, a) is Transition.NONE


def test_set_project_asset_keeps_assigned_at_in_step():
    asset_a, asset_b = uuid.uuid4(), uuid.uuid4()
    t0 = datetime(2024, 1, 1, tzinfo=timezone.utc)
    project = Project(name="P")

    assert set_project_asset(project, asset_a, now=t0) is Transition.ASSIGNED
    assert project.assigned_at == t0
    assert assignment_is_consistent(project)

    assert set_project_asset(project, asset_a, now=t0 + timedelta(days=1)) is Transition.NONE
    assert project.assigned_at == t0

    t2 = t0 + timedelta(days=2)
    assert set_project_asset(project, asset_b, now=t2) is Transition.REASSIGNED
    assert project.asset_id == asset_b
    assert project.assigned_at == t2

    assert set_project_asset(project, None) is Transition.UNASSIGNED
    assert project.asset_id is None
    assert project.assigned_at is None
    assert assignment_is_consistent(project)


# ---------- Endpoints ----------

@pytest.mark.anyio
async def test_assign_and_unassign(async_client, create_asset, create_project):
    asset = await create_asset("Depot")
    project = await create_project("Alpha")
    url = f"/api/v1/assets/{asset['id']}/projects/{project['id']}"

    resp = await async_client.put(url)
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["asset_id"] == asset["id"]
    assert data["assigned_at"] is not None
    assert data["asset"]["name"] == "Depot"

    resp = await async_client.get(url)
    assert resp.status_code == 200

    resp = await async_client.delete(url)
    assert resp.status_code == 200
    data = resp.json()
    assert data["asset_id"] is None
    assert data["assigned_at"] is None


@pytest.mark.anyio
async def test_unassign_twice_is_409_and_state_unchanged(async_client, create_asset, create_project):
    asset = await create_asset()
    project = await create_project("Alpha", asset_id=asset["id"])
    url = f"/api/v1/assets/{asset['id']}/projects/{project['id']}"

    resp = await async_client.delete(url)
    assert resp.status_code == 200

    resp = await async_client.delete(url)
    assert resp.status_code == 409

    resp = await async_client.get(f"/api/v1/projects/{project['id']}")
    data = resp.json()
    assert data["asset_id"] is None
    assert data["assigned_at"] is None


@pytest.mark.anyio
async def test_unassign_from_wrong_asset_is_409(async_client, create_asset, create_project):
    a1 = await create_asset("A1")
    a2 = await create_asset("A2")
    project = await create_project("Alpha", asset_id=a1["id"])

    resp = await async_client.delete(f"/api/v1/assets/{a2['id']}/projects/{project['id']}")
    assert resp.status_code == 409

    resp = await async_client.get(f"/api/v1/projects/{project['id']}")
    assert resp.json()["asset_id"] == a1["id"]


@pytest.mark.anyio
async def test_assign_missing_entities(async_client, create_asset, create_project):
    asset = await create_asset()
    project = await create_project()

    resp = await async_client.put(f"/api/v1/assets/{uuid.uuid4()}/projects/{project['id']}")
    assert resp.status_code == 404

    resp = await async_client.put(f"/api/v1/assets/{asset['id']}/projects/{uuid.uuid4()}")
    assert resp.status_code == 404

    resp = await async_client.delete(f"/api/v1/assets/{asset['id']}/projects/{uuid.uuid4()}")
    assert resp.status_code == 404

    resp = await async_client.put(f"/api/v1/assets/{asset['id']}/projects/nope")
    assert resp.status_code == 400


@pytest.mark.anyio
async def test_reassign_moves_project(async_client, create_asset, create_project):
    a1 = await create_asset("A1")
    a2 = await create_asset("A2")
    project = await create_project("Alpha", asset_id=a1["id"])

    resp = await async_client.put(f"/api/v1/assets/{a2['id']}/projects/{project['id']}")
    assert resp.json()["asset_id"] == a2["id"]

    resp = await async_client.get(f"/api/v1/assets/{a1['id']}/projects")
    assert resp.json()["total_projects"] == 0

    resp = await async_client.get(f"/api/v1/assets/{a1['id']}/projects/{project['id']}")
    assert resp.status_code == 404


@pytest.mark.anyio
async def test_asset_project_subroutes(async_client, create_asset):
    asset = await create_asset("Depot")

    resp = await async_client.post(
        f"/api/v1/assets/{asset['id']}/projects",
        json={"name": "Fit-out", "status": "active"},
    )
    assert resp.status_code == 201, resp.text
    project = resp.json()
    assert project["asset_id"] == asset["id"]
    assert project["assigned_at"] is not None

    resp = await async_client.get(f"/api/v1/assets/{asset['id']}/projects")
    assert resp.status_code == 200
    body = resp.json()
    assert body["asset_name"] == "Depot"
    assert body["total_projects"] == 1
    assert body["items"][0]["id"] == project["id"]

    resp = await async_client.post(f"/api/v1/assets/{uuid.uuid4()}/projects", json={"name": "X"})
    assert resp.status_code == 404


@pytest.mark.anyio
async def test_delete_asset_scenario(async_client, create_asset, create_project):
    asset = await create_asset("A")
    project = await create_project("P", description="keep me", status="active")

    resp = await async_client.put(f"/api/v1/assets/{asset['id']}/projects/{project['id']}")
    assert resp.status_code == 200

    resp = await async_client.delete(f"/api/v1/assets/{asset['id']}")
    assert resp.status_code == 200

    resp = await async_client.get(f"/api/v1/projects/{project['id']}")
    assert resp.status_code == 200
    data = resp.json()
    assert data["asset_id"] is None
    assert data["assigned_at"] is None
    assert (data["name"], data["description"], data["status"]) == ("P", "keep me", "active")
    assert data["created_at"] == project["created_at"]
