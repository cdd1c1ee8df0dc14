"""
Portfolio editing state for the dashboard.

Pure functions over lists of PortfolioEntry: add, update, remove, show and hide
legs, replay in-table edits, plus conversion to and from DataTable records. Every
function returns a new list and leaves its input untouched. No UI imports.
"""

import math
from dataclasses import dataclass, replace

from payoff_analyzer.models import OptionKind, Direction, OptionPosition


@dataclass(frozen=True)
class PortfolioEntry:
    """A leg as the user sees it: position plus display identity."""
    id: int
    position: OptionPosition
    color: str
    visible: bool = True
    hue: float | None = None


# Explicit per-field updates, keyed by the table column id
FIELD_UPDATERS = {
    'kind': OptionPosition.with_kind,
    'direction': OptionPosition.with_direction,
    'strike': OptionPosition.with_strike,
    'premium': OptionPosition.with_premium,
    'quantity': OptionPosition.with_quantity,
}


def _to_float(value) -> float:
    """Parse a table cell; anything unparseable becomes NaN (an invalid leg)."""
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def _to_int(value) -> int:
    number = _to_float(value)
    return int(number) if math.isfinite(number) else 0


def _to_kind(value) -> OptionKind:
    try:
        return OptionKind(str(value).strip().lower())
    except ValueError:
        return OptionKind.CALL


def _to_direction(value) -> Direction:
    try:
        return Direction(str(value).strip().lower())
    except ValueError:
        return Direction.LONG


def _to_hue(value):
    number = _to_float(value)
    return number if math.isfinite(number) else None


# Raw table cell -> typed value, per editable column
FIELD_PARSERS = {
    'kind': _to_kind,
    'direction': _to_direction,
    'strike': _to_float,
    'premium': _to_float,
    'quantity': _to_int,
}


def position_from_values(kind, direction, strike, premium, quantity) -> OptionPosition:
    """Build a position from raw form/table values without ever raising."""
    return OptionPosition(
        kind=_to_kind(kind),
        direction=_to_direction(direction),
        strike=_to_float(strike),
        premium=_to_float(premium),
        quantity=_to_int(quantity),
    )


def entry_from_record(record: dict, visible: bool = True) -> PortfolioEntry:
    position = position_from_values(
        record.get('kind'), record.get('direction'),
        record.get('strike'), record.get('premium'), record.get('quantity'),
    )
    return PortfolioEntry(
        id=_to_int(record.get('id')),
        position=position,
        color=record.get('color') or '#000000',
        visible=visible,
        hue=_to_hue(record.get('hue')),
    )


def entry_to_record(entry: PortfolioEntry) -> dict:
    p = entry.position
    return {
        'id': entry.id,
        'kind': p.kind.value,
        'direction': p.direction.value,
        'strike': p.strike,
        'premium': p.premium,
        'quantity': p.quantity,
        'color': entry.color,
        'hue': entry.hue,
    }


def entries_from_table(records, selected_rows=None) -> list[PortfolioEntry]:
    """
    Rebuild entries from DataTable data.

    Args:
        records: DataTable 'data' (list of dicts)
        selected_rows: Row indices that are shown on the chart; None shows all
    """
    records = records or []
    if selected_rows is None:
        shown = set(range(len(records)))
    else:
        shown = set(selected_rows)
    return [entry_from_record(r, visible=i in shown) for i, r in enumerate(records)]


def entries_to_table(entries) -> tuple[list[dict], list[int]]:
    """Inverse of entries_from_table: (records, selected_rows)."""
    records = [entry_to_record(e) for e in entries]
    selected = [i for i, e in enumerate(entries) if e.visible]
    return records, selected


def next_entry_id(entries) -> int:
    return max((e.id for e in entries), default=0) + 1


def add_entry(entries, position: OptionPosition, color: str, hue=None) -> list[PortfolioEntry]:
    """Append a new visible leg with a fresh id."""
    entry = PortfolioEntry(id=next_entry_id(entries), position=position, color=color, hue=hue)
    return list(entries) + [entry]


def update_entry(entries, entry_id: int, field_name: str, value) -> list[PortfolioEntry]:
    """
    Replace one field of one leg's position.

    Raises:
        KeyError: If field_name is not an editable position field
    """
    updater = FIELD_UPDATERS[field_name]
    return [
        replace(e, position=updater(e.position, value)) if e.id == entry_id else e
        for e in entries
    ]


def remove_entry(entries, entry_id: int) -> list[PortfolioEntry]:
    return [e for e in entries if e.id != entry_id]


def set_all_visible(entries, visible: bool) -> list[PortfolioEntry]:
    return [replace(e, visible=visible) for e in entries]


def set_visible_rows(entries, selected_rows) -> list[PortfolioEntry]:
    """Show exactly the legs at the given row indices."""
    shown = set(selected_rows or [])
    return [replace(e, visible=i in shown) for i, e in enumerate(entries)]


def apply_table_edit(previous_records, records, selected_rows=None) -> list[PortfolioEntry]:
    """
    Replay an in-table edit onto the previous table state.

    Rows missing from ``records`` are removed and every changed cell goes
    through update_entry. When the previous state is unknown, or rows appear
    that it does not contain, the table is parsed from scratch instead.

    Args:
        previous_records: DataTable 'data_previous'
        records: DataTable 'data' after the edit
        selected_rows: Row indices into ``records`` that are shown on the chart
    """
    records = records or []
    if previous_records is None:
        return entries_from_table(records, selected_rows)

    current = {_to_int(r.get('id')): r for r in records}
    previous = {_to_int(r.get('id')): r for r in previous_records}
    if len(current) != len(records) or not set(current) <= set(previous):
        return entries_from_table(records, selected_rows)

    entries = entries_from_table(previous_records)
    for entry_id in set(previous) - set(current):
        entries = remove_entry(entries, entry_id)
    for entry_id, record in current.items():
        before = previous[entry_id]
        for field_name, parse in FIELD_PARSERS.items():
            if record.get(field_name) != before.get(field_name):
                entries = update_entry(entries, entry_id, field_name, parse(record.get(field_name)))

    row_of = {entry_id: i for i, entry_id in enumerate(current)}
    entries.sort(key=lambda e: row_of[e.id])
    return set_visible_rows(entries, selected_rows)


def issued_hues(entries) -> list[float]:
    """Hues of the legs currently in the portfolio."""
    return [e.hue for e in entries if e.hue is not None]


def positions(entries) -> list[OptionPosition]:
    """All positions, for analytics (visibility only affects drawing)."""
    return [e.position for e in entries]
