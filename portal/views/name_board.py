"""Driver name-board preview."""

from portal.models.corporate import NameBoardFormat, Passenger

CUSTOM_PLACEHOLDER = "Custom text will appear here"

# Shown in settings before a real passenger is known
FORMAT_EXAMPLES = {
    NameBoardFormat.title_initial_surname: "Mr J Jones",
    NameBoardFormat.firstname_lastname: "John Jones",
    NameBoardFormat.company_only: "ACME Corp",
    NameBoardFormat.passenger_alias: "Bruce (if set)",
    NameBoardFormat.title_initial_surname_company: "Mr J Jones / ACME Corp",
    NameBoardFormat.custom: "Enter your own text",
}

FORMAT_LABELS = {
    NameBoardFormat.title_initial_surname: "Title + Initial + Surname",
    NameBoardFormat.firstname_lastname: "First Name + Last Name",
    NameBoardFormat.company_only: "Company Name Only",
    NameBoardFormat.passenger_alias: "Passenger Alias",
    NameBoardFormat.title_initial_surname_company: "Name + Company (2 lines)",
    NameBoardFormat.custom: "Custom Text",
}


def _title_initial_surname(passenger: Passenger) -> str:
    parts = [passenger.title or "", passenger.first_name[:1], passenger.last_name]
    return " ".join(p for p in parts if p)


def name_board_lines(
    fmt: NameBoardFormat,
    passenger: Passenger | None,
    company_name: str = "",
    custom_text: str = "",
) -> list[str]:
    """Lines printed on the driver's board.

    Without a passenger the format's example text is returned, except for
    company-only and custom boards which never need one.
    """
    if fmt == NameBoardFormat.custom:
        return [custom_text.strip() or CUSTOM_PLACEHOLDER]
    if fmt == NameBoardFormat.company_only:
        return [company_name or FORMAT_EXAMPLES[fmt]]
    if passenger is None:
        return FORMAT_EXAMPLES[fmt].split(" / ")

    if fmt == NameBoardFormat.firstname_lastname:
        return [f"{passenger.first_name} {passenger.last_name}".strip() or passenger.name]
    if fmt == NameBoardFormat.passenger_alias:
        # No alias: fall back to the full name
        return [passenger.alias or passenger.name]

    short = _title_initial_surname(passenger) or passenger.name
    if fmt == NameBoardFormat.title_initial_surname_company and company_name:
        return [short, company_name]
    return [short]


def name_board_preview(
    fmt: NameBoardFormat,
    passenger: Passenger | None = None,
    company_name: str = "",
    custom_text: str = "",
) -> str:
    return " / ".join(name_board_lines(fmt, passenger, company_name, custom_text))
