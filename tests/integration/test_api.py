"""HTTP tests for the status, users, collections and records endpoints."""

import pytest


@pytest.mark.asyncio
async def test_status(client):
    response = await client.get("/_status")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_correlation_id_is_echoed(client):
    response = await client.get("/_status", headers={"X-Correlation-ID": "cid_test"})

    assert response.headers["X-Correlation-ID"] == "cid_test"


# users


@pytest.mark.asyncio
async def test_users_endpoints(client):
    response = await client.post("/api/users", json={"name": "ada"})
    assert response.status_code == 201
    user = response.json()
    assert user == {"id": 1, "name": "ada"}

    response = await client.get(f"/api/users/{user['id']}")
    assert response.status_code == 200
    assert response.json() == user

    response = await client.get("/api/users")
    assert response.status_code == 200
    assert response.json() == [user]


@pytest.mark.asyncio
async def test_get_missing_user(client):
    response = await client.get("/api/users/99")

    assert response.status_code == 404
    assert "error" in response.json()


@pytest.mark.asyncio
async def test_create_user_without_name(client):
    response = await client.post("/api/users", json={})

    assert response.status_code == 400
    assert "error" in response.json()


# collections


@pytest.mark.asyncio
async def test_collection_lifecycle(client):
    response = await client.post(
        "/api/collections", json={"name": "notes", "schema": {"text": "string"}}
    )
    assert response.status_code == 201
    assert response.json() == {"id": 1, "name": "notes", "schema": {"text": "string"}}

    response = await client.get("/api/collections")
    assert response.status_code == 200
    assert response.json() == [{"id": 1, "name": "notes", "schema": {"text": "string"}}]

    response = await client.get("/api/collections/notes")
    assert response.status_code == 200
    assert response.json()["schema"] == {"text": "string"}

    response = await client.patch(
        "/api/collections/notes", json={"name": "memos", "schema": {"text": "str"}}
    )
    assert response.status_code == 200
    assert response.json() == {"id": 1, "name": "memos", "schema": {"text": "str"}}

    response = await client.get("/api/collections/notes")
    assert response.status_code == 404

    response = await client.delete("/api/collections/memos")
    assert response.status_code == 200

    response = await client.get("/api/collections/memos")
    assert response.status_code == 404
    assert response.json() == {"error": "Collection 'memos' not found"}


@pytest.mark.asyncio
async def test_create_collection_defaults_schema(client):
    response = await client.post("/api/collections", json={"name": "notes"})

    assert response.status_code == 201
    assert response.json()["schema"] == {}


@pytest.mark.asyncio
async def test_patch_collection_keeps_omitted_fields(client):
    await client.post("/api/collections", json={"name": "notes", "schema": {"v": 1}})

    response = await client.patch("/api/collections/notes", json={"schema": {"v": 2}})
    assert response.json() == {"id": 1, "name": "notes", "schema": {"v": 2}}

    response = await client.patch("/api/collections/notes", json={"name": "memos"})
    assert response.json() == {"id": 1, "name": "memos", "schema": {"v": 2}}


@pytest.mark.asyncio
async def test_duplicate_collection_conflict(client):
    await client.post("/api/collections", json={"name": "notes", "schema": {}})

    response = await client.post("/api/collections", json={"name": "notes", "schema": {}})

    assert response.status_code == 409
    assert "error" in response.json()


@pytest.mark.asyncio
@pytest.mark.parametrize("name", ["has-dash", "1notes", "x" * 65])
async def test_invalid_collection_name(client, name):
    response = await client.post("/api/collections", json={"name": name, "schema": {}})
    assert response.status_code == 400
    assert "error" in response.json()

    response = await client.get(f"/api/collections/{name}/records")
    assert response.status_code == 400

    response = await client.post(f"/api/collections/{name}/records", json={"entry": {}})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_missing_collection(client):
    assert (await client.get("/api/collections/missing")).status_code == 404
    assert (await client.patch("/api/collections/missing", json={"name": "x"})).status_code == 404
    assert (await client.delete("/api/collections/missing")).status_code == 404


# records


@pytest.mark.asyncio
async def test_records_lifecycle(client):
    await client.post("/api/collections", json={"name": "notes", "schema": {}})

    response = await client.get("/api/collections/notes/records")
    assert response.status_code == 200
    assert response.json() == []

    response = await client.post("/api/collections/notes/records", json={"entry": {"text": "hi"}})
    assert response.status_code == 201
    assert response.json() == {"id": 1, "entry": {"text": "hi"}}

    response = await client.patch(
        "/api/collections/notes/records/1", json={"entry": {"text": "bye"}}
    )
    assert response.status_code == 200
    assert response.json() == {"id": 1, "entry": {"text": "bye"}}

    response = await client.get("/api/collections/notes/records/1")
    assert response.status_code == 200
    assert response.json() == {"id": 1, "entry": {"text": "bye"}}

    response = await client.get("/api/collections/notes/records")
    assert response.json() == [{"id": 1, "entry": {"text": "bye"}}]

    response = await client.delete("/api/collections/notes/records/1")
    assert response.status_code == 200

    response = await client.get("/api/collections/notes/records/1")
    assert response.status_code == 404
    assert "error" in response.json()


@pytest.mark.asyncio
async def test_missing_record_is_404(client):
    await client.post("/api/collections", json={"name": "notes", "schema": {}})
    await client.post("/api/collections/notes/records", json={"entry": 1})

    assert (await client.get("/api/collections/notes/records/7")).status_code == 404
    assert (
        await client.patch("/api/collections/notes/records/7", json={"entry": 2})
    ).status_code == 404
    assert (await client.delete("/api/collections/notes/records/7")).status_code == 404


@pytest.mark.asyncio
async def test_records_of_undeclared_collection_is_404(client):
    response = await client.get("/api/collections/ghost/records")

    assert response.status_code == 404
    assert response.json() == {"error": "Collection 'ghost' not found"}


@pytest.mark.asyncio
async def test_create_record_requires_entry(client):
    await client.post("/api/collections", json={"name": "notes", "schema": {}})

    response = await client.post("/api/collections/notes/records", json={"text": "hi"})

    assert response.status_code == 400
    assert "error" in response.json()


@pytest.mark.asyncio
async def test_non_integer_record_id_is_400(client):
    await client.post("/api/collections", json={"name": "notes", "schema": {}})

    response = await client.get("/api/collections/notes/records/abc")

    assert response.status_code == 400


@pytest.mark.asyncio
@pytest.mark.parametrize("record_id", ["0", "-1", "99999999999999999999"])
async def test_out_of_range_record_id_is_400(client, record_id):
    await client.post("/api/collections", json={"name": "notes", "schema": {}})
    await client.post("/api/collections/notes/records", json={"entry": 1})
    path = f"/api/collections/notes/records/{record_id}"

    assert (await client.get(path)).status_code == 400
    assert (await client.patch(path, json={"entry": 2})).status_code == 400
    assert (await client.delete(path)).status_code == 400


@pytest.mark.asyncio
async def test_out_of_range_user_id_is_400(client):
    response = await client.get("/api/users/99999999999999999999")

    assert response.status_code == 400
    assert "error" in response.json()


@pytest.mark.asyncio
async def test_non_finite_entry_is_400(client):
    await client.post("/api/collections", json={"name": "notes", "schema": {}})

    response = await client.post(
        "/api/collections/notes/records",
        content='{"entry": NaN}',
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert "error" in response.json()
    assert (await client.get("/api/collections/notes/records")).json() == []
