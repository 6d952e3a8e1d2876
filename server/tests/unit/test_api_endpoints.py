"""Integration tests for API endpoints."""

import pytest


async def _create_booking(test_client, payload):
    response = await test_client.post("/v1/booking/create", json=payload)
    assert response.status_code == 201
    return response.json()


@pytest.mark.asyncio
async def test_create_booking_endpoint(test_client, sample_booking_data):
    """Test the booking creation endpoint."""
    response = await test_client.post("/v1/booking/create", json=sample_booking_data)

    assert response.status_code == 201
    data = response.json()
    assert data["ref_id"].startswith("REF-")
    assert data["origin"] == "DEL"
    assert data["destination"] == "BOM"
    assert data["pieces"] == 3
    assert data["weight_kg"] == 42.5
    assert data["status"] == "BOOKED"
    assert data["flight_ids"] == []
    assert data["timeline"] == []
    assert data["created_at"] == data["updated_at"]


@pytest.mark.asyncio
async def test_create_booking_invalid_data(test_client, sample_booking_data):
    """Test booking creation with invalid data."""
    invalid_data = dict(sample_booking_data, pieces=0)

    response = await test_client.post("/v1/booking/create", json=invalid_data)

    assert response.status_code == 422
    assert response.headers["content-type"].startswith("application/problem+json")
    data = response.json()
    assert data["status"] == 422
    assert data["code"] == "VALIDATION"
    assert [v["path"] for v in data["violations"]] == ["pieces"]


@pytest.mark.asyncio
async def test_create_booking_non_finite_weight(test_client):
    """An overflowing weight is a 422 and leaves the booking list readable."""
    response = await test_client.post(
        "/v1/booking/create",
        content='{"origin": "DEL", "destination": "BOM", "pieces": 1, "weight_kg": 1e999}',
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 422
    assert [v["path"] for v in response.json()["violations"]] == ["weight_kg"]

    response = await test_client.post("/v1/booking/list", json={})
    assert response.status_code == 200
    assert response.json()["items"] == []


@pytest.mark.asyncio
async def test_create_booking_repeated_flight(test_client, catalog, sample_booking_data):
    payload = dict(sample_booking_data, flight_ids=["AI101-0501", "AI101-0501"])

    response = await test_client.post("/v1/booking/create", json=payload)

    assert response.status_code == 400
    data = response.json()
    assert data["code"] == "VALIDATION"
    assert [v["path"] for v in data["violations"]] == ["flight_ids"]


@pytest.mark.asyncio
async def test_create_booking_missing_fields(test_client):
    response = await test_client.post("/v1/booking/create", json={"origin": "DEL"})

    assert response.status_code == 422
    paths = {v["path"] for v in response.json()["violations"]}
    assert {"destination", "pieces", "weight_kg"} <= paths


@pytest.mark.asyncio
async def test_create_booking_unknown_flight(test_client, catalog, sample_booking_data):
    payload = dict(sample_booking_data, flight_ids=["AI101-0501", "ZZ000"])

    response = await test_client.post("/v1/booking/create", json=payload)

    assert response.status_code == 400
    data = response.json()
    assert data["code"] == "INVALID_REFERENCE"
    assert data["missing_flight_ids"] == ["ZZ000"]
    assert data["instance"] == "/v1/booking/create"


@pytest.mark.asyncio
async def test_booking_lifecycle_endpoints(test_client, catalog, sample_booking_data):
    """Book, depart, arrive and deliver a shipment over HTTP."""
    payload = dict(sample_booking_data, flight_ids=["AI101-0501"])
    ref_id = (await _create_booking(test_client, payload))["ref_id"]

    response = await test_client.post(
        "/v1/booking/depart",
        json={"ref_id": ref_id, "flight_info": "AI101"},
    )
    assert response.status_code == 200
    assert response.json()["status"] == "DEPARTED"

    response = await test_client.post("/v1/booking/arrive", json={"ref_id": ref_id})
    assert response.status_code == 200
    assert response.json()["status"] == "ARRIVED"

    response = await test_client.post(
        "/v1/booking/deliver",
        json={"ref_id": ref_id, "location": "BOM Warehouse"},
    )
    assert response.status_code == 200

    response = await test_client.post("/v1/booking/get", json={"ref_id": ref_id})
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "DELIVERED"
    assert data["flight_ids"] == ["AI101-0501"]
    assert [
        (e["event_type"], e["location"], e["flight_info"]) for e in data["timeline"]
    ] == [
        ("DEPARTED", "DEL", "AI101"),
        ("ARRIVED", "BOM", None),
        ("DELIVERED", "BOM Warehouse", None),
    ]


@pytest.mark.asyncio
async def test_cancel_endpoint(test_client, sample_booking_data):
    ref_id = (await _create_booking(test_client, sample_booking_data))["ref_id"]

    response = await test_client.post("/v1/booking/cancel", json={"ref_id": ref_id})

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "CANCELLED"
    assert data["timeline"][-1]["location"] == "DEL"
    assert data["timeline"][-1]["notes"] == "Booking cancelled"


@pytest.mark.asyncio
async def test_invalid_transition_is_conflict(test_client, sample_booking_data):
    """Delivering a booked shipment is refused and not retryable."""
    ref_id = (await _create_booking(test_client, sample_booking_data))["ref_id"]

    response = await test_client.post("/v1/booking/deliver", json={"ref_id": ref_id})

    assert response.status_code == 409
    assert response.headers["content-type"].startswith("application/problem+json")
    data = response.json()
    assert data["code"] == "INVALID_STATE"
    assert data["retryable"] is False
    assert data["current_status"] == "BOOKED"
    assert data["allowed_from"] == ["ARRIVED"]


@pytest.mark.asyncio
async def test_get_unknown_booking(test_client):
    response = await test_client.post("/v1/booking/get", json={"ref_id": "REF-0-MISSING"})

    assert response.status_code == 404
    data = response.json()
    assert data["title"] == "Resource Not Found"
    assert data["code"] == "NOT_FOUND"
    assert data["resource_id"] == "REF-0-MISSING"


@pytest.mark.asyncio
async def test_list_bookings_endpoint(test_client, clock, sample_booking_data):
    """Test the booking listing endpoint."""
    first = await _create_booking(test_client, sample_booking_data)
    second = await _create_booking(test_client, dict(sample_booking_data, origin="HYD"))

    response = await test_client.post("/v1/booking/list", json={})

    assert response.status_code == 200
    data = response.json()
    assert [b["ref_id"] for b in data["items"]] == [second["ref_id"], first["ref_id"]]


@pytest.mark.asyncio
async def test_search_routes_endpoint(test_client, catalog):
    """Test the itinerary search endpoint."""
    response = await test_client.post(
        "/v1/flight/routes",
        json={"origin": "DEL", "destination": "BOM", "departure_date": "2024-05-01"},
    )

    assert response.status_code == 200
    data = response.json()
    assert [f["flight_id"] for f in data["direct_flights"]] == ["AI101-0501"]
    assert len(data["transit_routes"]) == 1

    route = data["transit_routes"][0]
    assert route["via"] == "HYD"
    assert route["first_flight"]["flight_id"] == "6E201-0501"
    assert route["second_flight"]["flight_id"] == "6E301-0501"
    assert route["total_duration_minutes"] == 300
    assert route["total_duration_ms"] == 300 * 60 * 1000


@pytest.mark.asyncio
async def test_search_routes_missing_destination(test_client):
    response = await test_client.post(
        "/v1/flight/routes",
        json={"origin": "DEL", "departure_date": "2024-05-01"},
    )

    assert response.status_code == 422
    assert [v["path"] for v in response.json()["violations"]] == ["destination"]


@pytest.mark.asyncio
async def test_create_and_list_flights(test_client):
    """Flights can be loaded into and read back from the catalog."""
    flight = {
        "flight_id": "UK811-0502",
        "flight_number": "UK811",
        "airline_name": "Vistara",
        "origin": "BLR",
        "destination": "DEL",
        "departure_date_time": "2024-05-02T10:00:00+05:30",
        "arrival_date_time": "2024-05-02T12:45:00+05:30",
    }

    response = await test_client.post("/v1/flight/create", json=flight)
    assert response.status_code == 201
    data = response.json()
    assert data["flight_id"] == "UK811-0502"
    assert data["departure_date_time"] == "2024-05-02T04:30:00"

    response = await test_client.post("/v1/flight/create", json=flight)
    assert response.status_code == 409
    assert response.json()["code"] == "DUPLICATE_FLIGHT"

    response = await test_client.post("/v1/flight/list", json={})
    assert response.status_code == 200
    assert [f["flight_id"] for f in response.json()["items"]] == ["UK811-0502"]


@pytest.mark.asyncio
async def test_create_flight_arriving_before_departure(test_client):
    response = await test_client.post(
        "/v1/flight/create",
        json={
            "flight_id": "BAD-1",
            "flight_number": "BAD1",
            "airline_name": "Test Air",
            "origin": "DEL",
            "destination": "BOM",
            "departure_date_time": "2024-05-02T10:00:00Z",
            "arrival_date_time": "2024-05-02T09:00:00Z",
        },
    )

    assert response.status_code == 400
    data = response.json()
    assert data["code"] == "VALIDATION"
    assert data["violations"][0]["path"] == "arrival_date_time"


@pytest.mark.asyncio
async def test_metrics_endpoint(test_client, sample_booking_data):
    """Test the Prometheus metrics endpoint."""
    await _create_booking(test_client, sample_booking_data)

    response = await test_client.get("/metrics")

    assert response.status_code == 200
    assert "cargo_bookings_created_total" in response.text
