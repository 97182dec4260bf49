"""Location autocomplete post-processing."""

import re

from portal.models.common import ApiModel, LocationType

_AIRPORT_NAME = re.compile(r"([a-z ]*airport)")


class Prediction(ApiModel):
    """Autocomplete prediction from the places service."""

    description: str
    place_id: str
    location_type: LocationType | None = None
    airport_code: str | None = None


def _airport_group_key(prediction: Prediction) -> str:
    if prediction.airport_code:
        return prediction.airport_code
    desc = prediction.description.lower()
    match = _AIRPORT_NAME.search(desc)
    return f"unknown:{match.group(1).strip()}" if match else f"unknown:{desc}"


def consolidate_airport_results(predictions: list[Prediction], is_dropoff: bool) -> list[Prediction]:
    """Collapse airport terminals under their main airport entry.

    Args:
        predictions: Raw predictions in service order
        is_dropoff: Dropoff lists only main airports; pickup lists main
            airports first, then their terminals

    Returns:
        Reordered predictions with non-airport results last
    """
    groups: dict[str, list[Prediction]] = {}
    non_airport: list[Prediction] = []

    for p in predictions:
        if p.location_type == LocationType.airport:
            groups.setdefault(_airport_group_key(p), []).append(p)
        else:
            non_airport.append(p)

    # Prefer the entry that names the airport itself over a terminal
    mains = [
        next((p for p in group if "airport" in p.description.lower()), group[0])
        for group in groups.values()
    ]

    if is_dropoff:
        return [*mains, *non_airport]

    result = list(mains)
    seen = {p.place_id for p in mains}
    for group in groups.values():
        for terminal in group:
            if terminal.place_id not in seen:
                result.append(terminal)
                seen.add(terminal.place_id)

    result.extend(non_airport)
    return result
