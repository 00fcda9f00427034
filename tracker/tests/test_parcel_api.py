"""
Integration tests for the parcel HTTP endpoints.
"""

import pytest


@pytest.fixture
async def registered_parcel(client, client_id):
    """Register a parcel over the API and return its body."""
    response = await client.post("/v1/parcels", json={"client": client_id, "address": "test"})
    assert response.status_code == 201
    return response.json()


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert "X-Correlation-ID" in response.headers


@pytest.mark.asyncio
async def test_register_and_get(client, client_id, registered_parcel):
    assert registered_parcel["client"] == client_id
    assert registered_parcel["status"] == "registered"
    assert registered_parcel["address"] == "test"

    response = await client.get(f"/v1/parcels/{registered_parcel['number']}")
    assert response.status_code == 200
    assert response.json() == registered_parcel


@pytest.mark.asyncio
async def test_get_missing_parcel(client):
    response = await client.get("/v1/parcels/424242")

    assert response.status_code == 404
    assert response.json()["error_code"] == "ERR_NOT_FOUND_001"


@pytest.mark.asyncio
async def test_list_client_parcels(client, client_id, registered_parcel):
    second = await client.post("/v1/parcels", json={"client": client_id, "address": "second"})

    response = await client.get(f"/v1/clients/{client_id}/parcels")

    assert response.status_code == 200
    numbers = {p["number"] for p in response.json()}
    assert numbers == {registered_parcel["number"], second.json()["number"]}


@pytest.mark.asyncio
async def test_list_unknown_client(client, client_id):
    response = await client.get(f"/v1/clients/{client_id}/parcels")

    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.asyncio
async def test_address_change_gated_by_status(client, registered_parcel):
    number = registered_parcel["number"]

    response = await client.patch(f"/v1/parcels/{number}/address", json={"address": "new address"})
    assert response.status_code == 200
    assert response.json()["address"] == "new address"

    response = await client.post(f"/v1/parcels/{number}/next-status")
    assert response.status_code == 200
    assert response.json()["status"] == "sent"

    response = await client.patch(f"/v1/parcels/{number}/address", json={"address": "other"})
    assert response.status_code == 409
    assert response.json()["error_code"] == "ERR_PRECONDITION_001"
    assert response.json()["message"] == "can't change address"


@pytest.mark.asyncio
async def test_set_status_then_delete_refused(client, registered_parcel):
    number = registered_parcel["number"]

    response = await client.patch(f"/v1/parcels/{number}/status", json={"status": "delivered"})
    assert response.status_code == 204

    response = await client.delete(f"/v1/parcels/{number}")
    assert response.status_code == 409

    response = await client.get(f"/v1/parcels/{number}")
    assert response.status_code == 200
    assert response.json()["status"] == "delivered"


@pytest.mark.asyncio
async def test_set_status_missing_parcel(client):
    response = await client.patch("/v1/parcels/424242/status", json={"status": "sent"})

    assert response.status_code == 204


@pytest.mark.asyncio
async def test_delete_registered(client, registered_parcel):
    number = registered_parcel["number"]

    response = await client.delete(f"/v1/parcels/{number}")
    assert response.status_code == 204

    response = await client.get(f"/v1/parcels/{number}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_register_validation_error(client):
    response = await client.post("/v1/parcels", json={"address": "test"})

    assert response.status_code == 422
    assert response.json()["error_code"] == "ERR_VALIDATION"


def test_run_serves_app_with_uvicorn(mocker):
    from tracker.app import main
    from tracker.app.core.config import settings

    uvicorn_run = mocker.patch("tracker.app.main.uvicorn.run")

    main.run()

    uvicorn_run.assert_called_once_with(
        "tracker.app.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
