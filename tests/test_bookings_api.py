"""Tests for the bookings API."""

from __future__ import annotations

from typing import Any

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


def _payload(context: dict[str, Any], **overrides: Any) -> dict[str, Any]:
    payload = {
        "guest_id": str(context["guest_id"]),
        "vehicle_id": str(context["vehicle_id"]),
        "tour_option_id": str(context["tour_option_id"]),
        "tour_date": "2024-06-01",
        "rate_type": "shared",
        "seats": 2,
        "status": "confirmed",
        "pickup_location": "Harbour",
        "pickup_time": "08:30",
        "market_source_id": str(context["market_source_id"]),
    }
    payload.update(overrides)
    return payload


async def test_create_and_fetch_booking(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]

    created = await client.post("/api/v1/bookings", json=_payload(app_context))
    assert created.status_code == 201
    body = created.json()
    assert body["booking_ref"].startswith("TD-")
    assert body["tour_run_id"] == f"2024-06-01-{app_context['vehicle_id']}"

    assert body["total_price"] == "110.00"
    assert body["market_source_id"] == str(app_context["market_source_id"])

    fetched = await client.get(f"/api/v1/bookings/{body['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["seats"] == 2

    listed = await client.get("/api/v1/bookings", params={"status": "confirmed"})
    assert [item["id"] for item in listed.json()] == [body["id"]]


async def test_private_run_conflict(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]

    first = await client.post(
        "/api/v1/bookings", json=_payload(app_context, rate_type="private")
    )
    assert first.status_code == 201

    second = await client.post("/api/v1/bookings", json=_payload(app_context, seats=1))
    assert second.status_code == 409
    assert second.json()["detail"] == {
        "reason": "This jeep is booked for a Private tour.",
        "code": "run_private",
    }


async def test_edit_and_cancel(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]

    created = await client.post(
        "/api/v1/bookings", json=_payload(app_context, seats=6)
    )
    booking_id = created.json()["id"]

    edited = await client.patch(
        f"/api/v1/bookings/{booking_id}", json={"rate_type": "private"}
    )
    assert edited.status_code == 200
    assert edited.json()["rate_type"] == "private"

    cancelled = await client.post(f"/api/v1/bookings/{booking_id}/cancel")
    assert cancelled.status_code == 200
    assert cancelled.json()["status"] == "cancelled"

    again = await client.post("/api/v1/bookings", json=_payload(app_context, seats=6))
    assert again.status_code == 201


async def test_validation_errors_are_mapped(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]

    resp = await client.post(
        "/api/v1/bookings", json=_payload(app_context, seats=7, market_source_id=None)
    )
    assert resp.status_code == 422
    assert resp.json()["detail"] == {
        "seats": "Max capacity is 6",
        "market_source_id": "Market source is required",
    }


async def test_unknown_booking_returns_404(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]

    resp = await client.patch(
        "/api/v1/bookings/00000000-0000-0000-0000-000000000000", json={"seats": 1}
    )
    assert resp.status_code == 404


async def test_blank_required_fields_on_edit_are_rejected(
    app_context: dict[str, Any],
) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]

    created = await client.post("/api/v1/bookings", json=_payload(app_context))
    booking_id = created.json()["id"]

    resp = await client.patch(
        f"/api/v1/bookings/{booking_id}", json={"pickup_location": "  "}
    )
    assert resp.status_code == 422
    assert resp.json()["detail"] == {
        "pickup_location": "Pickup location is required"
    }

    unchanged = await client.get(f"/api/v1/bookings/{booking_id}")
    assert unchanged.json()["pickup_location"] == "Harbour"


async def test_delete_booking_frees_the_run(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]

    created = await client.post(
        "/api/v1/bookings", json=_payload(app_context, rate_type="private")
    )
    booking_id = created.json()["id"]

    deleted = await client.delete(f"/api/v1/bookings/{booking_id}")
    assert deleted.status_code == 204

    missing = await client.get(f"/api/v1/bookings/{booking_id}")
    assert missing.status_code == 404
    again = await client.delete(f"/api/v1/bookings/{booking_id}")
    assert again.status_code == 404

    replacement = await client.post(
        "/api/v1/bookings", json=_payload(app_context, seats=6)
    )
    assert replacement.status_code == 201


async def test_booking_attributed_to_agent(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]

    created = await client.post(
        "/api/v1/bookings",
        json=_payload(
            app_context,
            agent_id=str(app_context["agent_id"]),
            market_source_detail="Voucher 1182",
        ),
    )
    assert created.status_code == 201
    body = created.json()
    assert body["agent_id"] == str(app_context["agent_id"])
    assert body["market_source_detail"] == "Voucher 1182"

    unknown = await client.post(
        "/api/v1/bookings",
        json=_payload(
            app_context, market_source_id="00000000-0000-0000-0000-000000000000"
        ),
    )
    assert unknown.status_code == 404
