"""Tests for the pricing API."""

from __future__ import annotations

from typing import Any

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


async def test_quote_for_private_booking(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]

    created = await client.post(
        "/api/v1/bookings",
        json={
            "guest_id": str(app_context["guest_id"]),
            "vehicle_id": str(app_context["vehicle_id"]),
            "tour_option_id": str(app_context["other_tour_option_id"]),
            "tour_date": "2024-06-01",
            "rate_type": "private",
            "seats": 4,
            "status": "tentative",
            "pickup_location": "Harbour",
            "pickup_time": "08:30",
            "market_source_id": str(app_context["market_source_id"]),
        },
    )
    assert created.status_code == 201
    assert created.json()["total_price"] == "400.00"

    resp = await client.get(f"/api/v1/pricing/bookings/{created.json()['id']}")
    assert resp.status_code == 200
    assert resp.json() == {
        "booking_id": created.json()["id"],
        "total": "400.00",
        "source": "stored_total",
        "currency": "EUR",
        "commission": "0.00",
        "net": "400.00",
    }


async def test_quote_unknown_booking(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]  # type: ignore[assignment]

    resp = await client.get(
        "/api/v1/pricing/bookings/00000000-0000-0000-0000-000000000000"
    )
    assert resp.status_code == 404
