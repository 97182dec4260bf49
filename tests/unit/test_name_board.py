"""Tests for the driver name-board preview."""

import pytest

from portal.models.corporate import NameBoardFormat, Passenger
from portal.views.name_board import CUSTOM_PLACEHOLDER, name_board_lines, name_board_preview

JONES = Passenger(passenger_id="pax-7", title="Mr", first_name="John", last_name="Jones", alias="Jonesy")


@pytest.mark.parametrize(
    "fmt, expected",
    [
        (NameBoardFormat.title_initial_surname, ["Mr J Jones"]),
        (NameBoardFormat.firstname_lastname, ["John Jones"]),
        (NameBoardFormat.company_only, ["ACME Corp"]),
        (NameBoardFormat.passenger_alias, ["Jonesy"]),
        (NameBoardFormat.title_initial_surname_company, ["Mr J Jones", "ACME Corp"]),
    ],
)
def test_formats_with_passenger(fmt: NameBoardFormat, expected: list[str]) -> None:
    assert name_board_lines(fmt, JONES, company_name="ACME Corp") == expected


def test_alias_falls_back_to_name() -> None:
    passenger = JONES.model_copy(update={"alias": None})

    assert name_board_lines(NameBoardFormat.passenger_alias, passenger) == ["John Jones"]


def test_examples_without_passenger() -> None:
    assert name_board_lines(NameBoardFormat.title_initial_surname_company, None) == [
        "Mr J Jones",
        "ACME Corp",
    ]
    assert name_board_preview(NameBoardFormat.firstname_lastname) == "John Jones"


def test_custom_text() -> None:
    assert name_board_lines(NameBoardFormat.custom, None, custom_text=" VIP Guest ") == ["VIP Guest"]
    assert name_board_lines(NameBoardFormat.custom, JONES) == [CUSTOM_PLACEHOLDER]


def test_company_only_ignores_passenger() -> None:
    assert name_board_preview(NameBoardFormat.company_only, JONES, company_name="Globex") == "Globex"
