"""Integration tests for bookings endpoints.

This module contains integration tests for the booking workflow endpoints,
including validation of the rental period, approval, visibility rules and
the state filtered listings.
"""

from datetime import datetime, timedelta

from fastapi.testclient import TestClient

from src.shareit.models import BookingStatus, Item, User


def period(start_days: float, end_days: float) -> dict[str, str]:
    now = datetime.now()
    return {
        "start": (now + timedelta(days=start_days)).isoformat(),
        "end": (now + timedelta(days=end_days)).isoformat(),
    }


class TestBookingsEndpoints:
    """Integration tests for bookings endpoints."""

    def test_create_booking(
        self,
        client: TestClient,
        booker_headers: dict[str, str],
        booker: User,
        test_item: Item,
    ):
        """Test booking an item."""
        response = client.post(
            "/bookings",
            json={"itemId": test_item.id, **period(1, 2)},
            headers=booker_headers,
        )

        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "WAITING"
        assert data["booker"]["id"] == booker.id
        assert data["item"] == {"id": test_item.id, "name": test_item.name}

    def test_create_booking_start_in_past(
        self, client: TestClient, booker_headers: dict[str, str], test_item: Item
    ):
        """Test that a booking cannot start in the past."""
        response = client.post(
            "/bookings",
            json={"itemId": test_item.id, **period(-1, 2)},
            headers=booker_headers,
        )

        assert response.status_code == 422

    def test_create_booking_end_before_start(
        self, client: TestClient, booker_headers: dict[str, str], test_item: Item
    ):
        """Test that a booking must end after it starts."""
        response = client.post(
            "/bookings",
            json={"itemId": test_item.id, **period(2, 1)},
            headers=booker_headers,
        )

        assert response.status_code == 422

    def test_create_booking_missing_item_id(
        self, client: TestClient, booker_headers: dict[str, str]
    ):
        """Test that the item ID is required."""
        response = client.post("/bookings", json=period(1, 2), headers=booker_headers)

        assert response.status_code == 422

    def test_owner_cannot_book(
        self, client: TestClient, owner_headers: dict[str, str], test_item: Item
    ):
        """Test the owner booking their own item."""
        response = client.post(
            "/bookings",
            json={"itemId": test_item.id, **period(1, 2)},
            headers=owner_headers,
        )

        assert response.status_code == 404

    def test_unavailable_item(
        self, client: TestClient, booker_headers: dict[str, str], unavailable_item: Item
    ):
        """Test booking an unavailable item."""
        response = client.post(
            "/bookings",
            json={"itemId": unavailable_item.id, **period(1, 2)},
            headers=booker_headers,
        )

        assert response.status_code == 400

    def test_approve_booking(
        self,
        client: TestClient,
        owner_headers: dict[str, str],
        booker: User,
        test_item: Item,
        booking_factory,
    ):
        """Test the owner approving a booking, then failing to decide again."""
        booking = booking_factory.future(test_item, booker)

        response = client.patch(
            f"/bookings/{booking.id}?approved=true", headers=owner_headers
        )
        assert response.status_code == 200
        assert response.json()["status"] == "APPROVED"

        response = client.patch(
            f"/bookings/{booking.id}?approved=false", headers=owner_headers
        )
        assert response.status_code == 400

    def test_reject_booking(
        self,
        client: TestClient,
        owner_headers: dict[str, str],
        booker: User,
        test_item: Item,
        booking_factory,
    ):
        """Test the owner rejecting a booking."""
        booking = booking_factory.future(test_item, booker)

        response = client.patch(
            f"/bookings/{booking.id}?approved=false", headers=owner_headers
        )

        assert response.status_code == 200
        assert response.json()["status"] == "REJECTED"

    def test_approve_by_booker(
        self,
        client: TestClient,
        booker_headers: dict[str, str],
        booker: User,
        test_item: Item,
        booking_factory,
    ):
        """Test that the booker cannot approve their own booking."""
        booking = booking_factory.future(test_item, booker)

        response = client.patch(
            f"/bookings/{booking.id}?approved=true", headers=booker_headers
        )

        assert response.status_code == 404

    def test_approve_missing_flag(
        self,
        client: TestClient,
        owner_headers: dict[str, str],
        booker: User,
        test_item: Item,
        booking_factory,
    ):
        """Test that the approved flag is required."""
        booking = booking_factory.future(test_item, booker)

        assert client.patch(f"/bookings/{booking.id}", headers=owner_headers).status_code == 422

    def test_get_booking(
        self,
        client: TestClient,
        booker_headers: dict[str, str],
        owner_headers: dict[str, str],
        booker: User,
        test_item: Item,
        booking_factory,
    ):
        """Test booker and owner can both read a booking."""
        booking = booking_factory.future(test_item, booker)

        for headers in (booker_headers, owner_headers):
            response = client.get(f"/bookings/{booking.id}", headers=headers)
            assert response.status_code == 200
            assert response.json()["id"] == booking.id

    def test_get_booking_stranger(
        self,
        client: TestClient,
        booker: User,
        test_item: Item,
        booking_factory,
    ):
        """Test that other users cannot read a booking."""
        booking = booking_factory.future(test_item, booker)
        stranger = client.post(
            "/users", json={"name": "Stranger", "email": "stranger@example.com"}
        ).json()

        response = client.get(
            f"/bookings/{booking.id}", headers={"X-Sharer-User-Id": str(stranger["id"])}
        )

        assert response.status_code == 404

    def test_list_bookings_by_state(
        self,
        client: TestClient,
        booker_headers: dict[str, str],
        owner_headers: dict[str, str],
        booker: User,
        test_item: Item,
        booking_factory,
    ):
        """Test state filters on booker and owner listings."""
        past = booking_factory.past(test_item, booker, status=BookingStatus.APPROVED)
        future = booking_factory.future(test_item, booker)

        response = client.get("/bookings", headers=booker_headers)
        assert [b["id"] for b in response.json()] == [future.id, past.id]

        response = client.get("/bookings?state=PAST", headers=booker_headers)
        assert [b["id"] for b in response.json()] == [past.id]

        response = client.get("/bookings/owner?state=WAITING", headers=owner_headers)
        assert [b["id"] for b in response.json()] == [future.id]

        response = client.get("/bookings/owner?state=ALL&from=1&size=1", headers=owner_headers)
        assert [b["id"] for b in response.json()] == [past.id]

    def test_list_bookings_unknown_state(
        self, client: TestClient, booker_headers: dict[str, str]
    ):
        """Test that an unknown state is a bad request naming the state."""
        response = client.get("/bookings?state=UNSUPPORTED_STATUS", headers=booker_headers)

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Unknown state: UNSUPPORTED_STATUS"

    def test_list_bookings_unknown_user(self, client: TestClient):
        """Test listing bookings as an unknown user."""
        response = client.get("/bookings/owner", headers={"X-Sharer-User-Id": "999"})

        assert response.status_code == 404
