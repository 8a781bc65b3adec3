"""Interested-by aggregation for travel dates."""

from typing import Any, Iterable, Mapping, Optional


def count_interested(
    booked_dates: Iterable[Mapping[str, Any]],
    custom_display: bool = False,
    displayed_booked_seat: Optional[int] = None,
) -> int:
    """
    Count the people interested in one travel date.

    A booking with zero places that is not deleted is an interest signal and
    counts as one person. Any other booking counts its places, including a
    soft-deleted one with places booked. When ``custom_display`` is set the
    editorial ``displayed_booked_seat`` is added on top.

    Args:
        booked_dates: Booking rows of the travel date, in order
        custom_display: Whether the editorial override applies
        displayed_booked_seat: Override added when ``custom_display`` is set

    Returns:
        int: The interested-by count
    """
    total = 0
    for booked_date in booked_dates:
        places = booked_date.get("booked_places")
        if places == 0 and not booked_date.get("deleted"):
            total += 1
        else:
            total += places or 0

    if custom_display:
        total += displayed_booked_seat or 0

    return total


def aggregate_travel_dates(rows: Iterable[Mapping[str, Any]]) -> list[dict[str, Any]]:
    """
    Replace each row's booked dates with its ``nbInterestedBy`` count.

    Rows keep their order and every other column; the input is not mutated.
    """
    aggregated = []
    for row in rows:
        result = {key: value for key, value in row.items() if key != "booked_dates"}
        result["nbInterestedBy"] = count_interested(
            row.get("booked_dates") or [],
            custom_display=bool(row.get("custom_display")),
            displayed_booked_seat=row.get("displayed_booked_seat"),
        )
        aggregated.append(result)
    return aggregated
