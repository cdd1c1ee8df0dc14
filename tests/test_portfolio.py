"""Tests for payoff_analyzer/portfolio.py - editing state and table conversion."""

import math

import pytest
from payoff_analyzer.models import OptionKind, Direction, OptionPosition
from payoff_analyzer.portfolio import (
    PortfolioEntry,
    position_from_values,
    entry_from_record,
    entry_to_record,
    entries_from_table,
    entries_to_table,
    next_entry_id,
    add_entry,
    update_entry,
    remove_entry,
    set_all_visible,
    set_visible_rows,
    apply_table_edit,
    issued_hues,
    positions,
)


def _entries():
    return [
        PortfolioEntry(1, OptionPosition('call', 'long', 100, 8), '#ff0000'),
        PortfolioEntry(2, OptionPosition('call', 'short', 110, 3), '#00ff00', visible=False),
    ]


class TestPositionFromValues:
    def test_numeric_strings(self):
        pos = position_from_values('put', 'short', '95', '2.5', '3')
        assert pos == OptionPosition(OptionKind.PUT, Direction.SHORT, 95.0, 2.5, 3)

    def test_case_insensitive_enums(self):
        pos = position_from_values('CALL', ' Short ', 100, 1, 1)
        assert pos.kind is OptionKind.CALL
        assert pos.direction is Direction.SHORT

    def test_unknown_enums_fall_back(self):
        pos = position_from_values('straddle', None, 100, 1, 1)
        assert pos.kind is OptionKind.CALL
        assert pos.direction is Direction.LONG

    def test_garbage_numbers_make_invalid_leg(self):
        """Half-typed cells never raise; they just switch the leg off."""
        pos = position_from_values('call', 'long', '', None, 'abc')
        assert math.isnan(pos.strike)
        assert math.isnan(pos.premium)
        assert pos.quantity == 0
        assert not pos.is_valid

    def test_fractional_quantity_truncated(self):
        assert position_from_values('call', 'long', 100, 1, 2.7).quantity == 2


class TestRecords:
    def test_entry_to_record(self):
        record = entry_to_record(_entries()[0])
        assert record == {
            'id': 1, 'kind': 'call', 'direction': 'long',
            'strike': 100, 'premium': 8, 'quantity': 1, 'color': '#ff0000', 'hue': None,
        }

    def test_entry_from_record(self):
        entry = entry_from_record({
            'id': 4, 'kind': 'put', 'direction': 'long',
            'strike': 90, 'premium': 2, 'quantity': 1, 'color': '#123456',
        }, visible=False)
        assert entry.id == 4
        assert entry.position.kind is OptionKind.PUT
        assert entry.color == '#123456'
        assert entry.visible is False

    def test_missing_fields(self):
        entry = entry_from_record({})
        assert entry.id == 0
        assert entry.color == '#000000'
        assert not entry.position.is_valid

    def test_entries_from_table_selection(self):
        records, selected = entries_to_table(_entries())
        assert selected == [0]
        entries = entries_from_table(records, selected)
        assert [e.visible for e in entries] == [True, False]
        assert entries == _entries()

    def test_no_selection_info_shows_all(self):
        records, _ = entries_to_table(_entries())
        assert all(e.visible for e in entries_from_table(records))

    def test_empty_table(self):
        assert entries_from_table(None, None) == []


class TestEditing:
    def test_next_id(self):
        assert next_entry_id([]) == 1
        assert next_entry_id(_entries()) == 3

    def test_add_entry(self):
        original = _entries()
        result = add_entry(original, OptionPosition('put', 'long', 90, 1), '#0000ff')
        assert len(result) == 3
        assert result[-1].id == 3
        assert result[-1].visible
        assert len(original) == 2

    def test_update_entry(self):
        original = _entries()
        result = update_entry(original, 2, 'strike', 120)
        assert result[1].position.strike == 120
        assert result[0] == original[0]
        assert original[1].position.strike == 110

    def test_update_kind(self):
        result = update_entry(_entries(), 1, 'kind', 'put')
        assert result[0].position.kind is OptionKind.PUT

    def test_update_unknown_field(self):
        with pytest.raises(KeyError):
            update_entry(_entries(), 1, 'color', '#ffffff')

    def test_remove_entry(self):
        result = remove_entry(_entries(), 1)
        assert [e.id for e in result] == [2]

    def test_remove_missing_id_is_noop(self):
        assert remove_entry(_entries(), 99) == _entries()

    def test_set_all_visible(self):
        assert not any(e.visible for e in set_all_visible(_entries(), False))

    def test_positions_include_hidden_legs(self):
        assert len(positions(_entries())) == 2

    def test_set_visible_rows(self):
        result = set_visible_rows(_entries(), [1])
        assert [e.visible for e in result] == [False, True]

    def test_add_entry_keeps_hue(self):
        result = add_entry([], OptionPosition('put', 'long', 90, 1), '#0000ff', hue=240)
        assert result[0].hue == 240
        assert entry_to_record(result[0])['hue'] == 240


class TestHues:
    def test_hue_round_trips_through_records(self):
        entry = entry_from_record({'id': 1, 'kind': 'call', 'direction': 'long',
                                   'strike': 100, 'premium': 1, 'quantity': 1, 'hue': '200'})
        assert entry.hue == 200.0

    def test_missing_hue(self):
        assert entry_from_record({'id': 1}).hue is None

    def test_issued_hues_skip_unknown(self):
        entries = [
            PortfolioEntry(1, OptionPosition('call', 'long', 100, 8), '#ff0000', hue=0),
            PortfolioEntry(2, OptionPosition('call', 'short', 110, 3), '#00ff00'),
            PortfolioEntry(3, OptionPosition('put', 'long', 90, 2), '#0000ff', hue=240),
        ]
        assert issued_hues(entries) == [0, 240]

    def test_removed_leg_releases_its_hue(self):
        entries = [
            PortfolioEntry(1, OptionPosition('call', 'long', 100, 8), '#ff0000', hue=0),
            PortfolioEntry(2, OptionPosition('call', 'short', 110, 3), '#00ff00', hue=120),
        ]
        assert issued_hues(remove_entry(entries, 2)) == [0]


def _records():
    return [
        {'id': 1, 'kind': 'call', 'direction': 'long', 'strike': 100,
         'premium': 8, 'quantity': 1, 'color': '#ff0000', 'hue': 0},
        {'id': 2, 'kind': 'call', 'direction': 'short', 'strike': 110,
         'premium': 3, 'quantity': 1, 'color': '#00ff00', 'hue': 120},
    ]


class TestApplyTableEdit:
    def test_cell_edit_goes_through_field_update(self):
        edited = _records()
        edited[1]['strike'] = 115
        entries = apply_table_edit(_records(), edited, [0, 1])
        assert entries[1].position.strike == 115
        assert entries[0].position == OptionPosition('call', 'long', 100, 8)

    def test_dropdown_edit(self):
        edited = _records()
        edited[0]['kind'] = 'put'
        entries = apply_table_edit(_records(), edited, [0, 1])
        assert entries[0].position.kind is OptionKind.PUT

    def test_cleared_cell_makes_leg_invalid(self):
        edited = _records()
        edited[0]['premium'] = ''
        entries = apply_table_edit(_records(), edited, [0, 1])
        assert math.isnan(entries[0].position.premium)
        assert not entries[0].position.is_valid

    def test_deleted_row_removed(self):
        edited = _records()[1:]
        entries = apply_table_edit(_records(), edited, [0])
        assert [e.id for e in entries] == [2]
        assert entries[0].visible
        assert issued_hues(entries) == [120]

    def test_selection_follows_current_rows(self):
        entries = apply_table_edit(_records(), _records(), [1])
        assert [e.visible for e in entries] == [False, True]

    def test_colors_and_hues_kept(self):
        edited = _records()
        edited[0]['quantity'] = 3
        entries = apply_table_edit(_records(), edited, [0, 1])
        assert entries[0].color == '#ff0000'
        assert entries[0].hue == 0
        assert entries[0].position.quantity == 3

    def test_reordered_rows_follow_table(self):
        entries = apply_table_edit(_records(), list(reversed(_records())), [0, 1])
        assert [e.id for e in entries] == [2, 1]

    def test_unknown_previous_state_parses_table(self):
        edited = _records()
        edited[0]['strike'] = 105
        entries = apply_table_edit(None, edited, [0])
        assert entries == entries_from_table(edited, [0])

    def test_new_row_parses_table(self):
        edited = _records() + [{'id': 9, 'kind': 'put', 'direction': 'long', 'strike': 90,
                                'premium': 1, 'quantity': 1, 'color': '#0000ff'}]
        entries = apply_table_edit(_records(), edited, [0, 1, 2])
        assert [e.id for e in entries] == [1, 2, 9]

    def test_does_not_mutate_records(self):
        previous, edited = _records(), _records()
        edited[0]['strike'] = 99
        apply_table_edit(previous, edited, [0, 1])
        assert previous == _records()
