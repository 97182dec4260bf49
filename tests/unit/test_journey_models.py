"""Tests for journey request validation and wire payload."""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from portal.models.common import Extras, JourneyType, Location, Waypoint
from portal.models.journey import JourneyRequest

PICKUP_TIME = datetime(2026, 3, 4, 9, 0, tzinfo=timezone.utc)
HEATHROW = Location(address="Heathrow Terminal 5", place_id="place-lhr-t5")
BOURNEMOUTH = Location(address="Bournemouth", place_id="place-bournemouth")


def test_one_way_requires_dropoff() -> None:
    """One-way journeys without a dropoff are rejected."""
    with pytest.raises(ValidationError, match="dropoff address is required"):
        JourneyRequest(pickup_location=HEATHROW, pickup_time=PICKUP_TIME, passengers=2)


def test_blank_pickup_rejected() -> None:
    with pytest.raises(ValidationError, match="pickup address is required"):
        JourneyRequest(
            pickup_location=Location(address="   "),
            dropoff_location=BOURNEMOUTH,
            pickup_time=PICKUP_TIME,
            passengers=2,
        )


def test_hourly_return_to_pickup_needs_no_dropoff() -> None:
    request = JourneyRequest(
        pickup_location=HEATHROW,
        pickup_time=PICKUP_TIME,
        passengers=2,
        journey_type=JourneyType.hourly,
        duration_hours=4,
        return_to_pickup=True,
    )

    body = request.to_api()

    assert body["journeyType"] == "by-the-hour"
    assert body["durationHours"] == 4
    assert "dropoffLocation" not in body


def test_hourly_without_return_needs_dropoff() -> None:
    with pytest.raises(ValidationError):
        JourneyRequest(
            pickup_location=HEATHROW,
            pickup_time=PICKUP_TIME,
            passengers=2,
            journey_type=JourneyType.hourly,
            duration_hours=6,
            return_to_pickup=False,
        )


def test_return_before_outbound_rejected() -> None:
    with pytest.raises(ValidationError, match="return pickup must be after"):
        JourneyRequest(
            pickup_location=HEATHROW,
            dropoff_location=BOURNEMOUTH,
            pickup_time=PICKUP_TIME,
            return_pickup_time=PICKUP_TIME - timedelta(hours=1),
            passengers=2,
            journey_type=JourneyType.round_trip,
        )


def test_passengers_must_be_positive() -> None:
    with pytest.raises(ValidationError):
        JourneyRequest(
            pickup_location=HEATHROW,
            dropoff_location=BOURNEMOUTH,
            pickup_time=PICKUP_TIME,
            passengers=0,
        )


def test_to_api_drops_incomplete_waypoints_and_empty_extras() -> None:
    request = JourneyRequest(
        pickup_location=HEATHROW,
        dropoff_location=BOURNEMOUTH,
        waypoints=[
            Waypoint(address="Winchester", place_id="place-winchester", wait_time=15),
            Waypoint(address="Typed but never picked"),
            Waypoint(address="", place_id="place-orphan"),
        ],
        pickup_time=PICKUP_TIME,
        passengers=2,
        extras=Extras(),
    )

    body = request.to_api(compare_mode=True)

    assert body["waypoints"] == [
        {"address": "Winchester", "placeId": "place-winchester", "waitTime": 15}
    ]
    assert "extras" not in body
    assert body["compareMode"] is True
    assert body["pickupLocation"] == {"address": "Heathrow Terminal 5", "placeId": "place-lhr-t5"}


def test_round_trip_payload_carries_return() -> None:
    request = JourneyRequest(
        pickup_location=HEATHROW,
        dropoff_location=BOURNEMOUTH,
        pickup_time=PICKUP_TIME,
        return_pickup_time=PICKUP_TIME + timedelta(days=3),
        passengers=2,
        journey_type=JourneyType.round_trip,
        extras=Extras(baby_seats=1),
        corp_account_id="corp-42",
    )

    body = request.to_api()

    assert body["journeyType"] == "round-trip"
    assert body["returnJourney"] is True
    assert body["returnPickupTime"] == (PICKUP_TIME + timedelta(days=3)).isoformat()
    assert body["extras"] == {"babySeats": 1, "childSeats": 0}
    assert body["corpAccountId"] == "corp-42"
    assert "compareMode" not in body


def test_journey_type_parses_api_spelling() -> None:
    assert JourneyType("by-the-hour") is JourneyType.hourly
    assert JourneyType.hourly.api_value == "by-the-hour"
    assert JourneyType.one_way.api_value == "one-way"
