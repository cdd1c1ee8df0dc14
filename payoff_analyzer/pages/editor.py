"""
Position editor: add-position form and the editable positions table.

The positions table is the single source of truth for the portfolio. Cells can
be edited in place, rows deleted, and the row checkboxes choose which legs get
their own line on the chart. Each row carries the hue of its color, so the
hue-separating allocator is rebuilt from the legs that still exist.
"""

import logging

from dash import html, dcc, callback, Input, Output, State, ctx, dash_table, no_update

from payoff_analyzer.colors import ColorAllocator
from payoff_analyzer.models import OptionKind, Direction
from payoff_analyzer.portfolio import (
    entries_from_table,
    entries_to_table,
    position_from_values,
    add_entry,
    apply_table_edit,
    issued_hues,
    set_all_visible,
)
from payoff_analyzer.pages.components import SECTION_LABEL_STYLE, WARNING_STYLE

logger = logging.getLogger(__name__)


KIND_OPTIONS = [{'label': k.value.title(), 'value': k.value} for k in OptionKind]
DIRECTION_OPTIONS = [{'label': d.value.title(), 'value': d.value} for d in Direction]

POSITION_COLUMNS = [
    {'name': 'Type', 'id': 'kind', 'presentation': 'dropdown', 'editable': True},
    {'name': 'Direction', 'id': 'direction', 'presentation': 'dropdown', 'editable': True},
    {'name': 'Strike', 'id': 'strike', 'type': 'numeric', 'editable': True},
    {'name': 'Premium', 'id': 'premium', 'type': 'numeric', 'editable': True},
    {'name': 'Quantity', 'id': 'quantity', 'type': 'numeric', 'editable': True},
    {'name': 'Color', 'id': 'color', 'editable': False},
]

ACTION_ADD = 'add-position-btn'
ACTION_TOGGLE_ALL = 'toggle-all-legs-btn'
POSITIONS_TABLE = 'positions-table'


def _field(label, component):
    return html.Div([
        html.Label(label, style={'fontSize': '12px', 'fontWeight': 'bold'}),
        component,
    ], style={'flex': '1', 'marginRight': '8px'})


def layout():
    """Return the editor layout."""
    return html.Div([
        html.Div("Add Position", style=SECTION_LABEL_STYLE),
        html.Div([
            _field("Type", dcc.Dropdown(
                id='kind-select', options=KIND_OPTIONS, value=OptionKind.CALL.value, clearable=False,
            )),
            _field("Direction", dcc.Dropdown(
                id='direction-select', options=DIRECTION_OPTIONS, value=Direction.LONG.value,
                clearable=False,
            )),
            _field("Strike", dcc.Input(
                id='strike-input', type='number', min=0, value=100, style={'width': '100%'},
            )),
            _field("Premium", dcc.Input(
                id='premium-input', type='number', min=0, value=5, style={'width': '100%'},
            )),
            _field("Quantity", dcc.Input(
                id='quantity-input', type='number', min=1, step=1, value=1, style={'width': '100%'},
            )),
            html.Button("Add", id=ACTION_ADD, n_clicks=0, style={'alignSelf': 'flex-end'}),
        ], style={'display': 'flex', 'alignItems': 'flex-end'}),
        html.Div(id='form-status'),

        html.Hr(style={'margin': '14px 0'}),

        html.Div([
            html.Div("Positions", style=SECTION_LABEL_STYLE),
            html.Button("Show / hide all legs", id=ACTION_TOGGLE_ALL, n_clicks=0,
                        style={'fontSize': '12px'}),
        ], style={'display': 'flex', 'justifyContent': 'space-between'}),
        dash_table.DataTable(
            id=POSITIONS_TABLE,
            columns=POSITION_COLUMNS,
            data=[],
            editable=True,
            row_deletable=True,
            row_selectable='multi',
            selected_rows=[],
            dropdown={
                'kind': {'options': KIND_OPTIONS, 'clearable': False},
                'direction': {'options': DIRECTION_OPTIONS, 'clearable': False},
            },
            style_cell={'textAlign': 'center', 'padding': '8px', 'fontSize': '13px'},
            style_header={'backgroundColor': '#f8f9fa', 'fontWeight': 'bold'},
        ),
    ])


def apply_portfolio_action(action, kind, direction, strike, premium, quantity,
                           table_data, selected_rows, previous_data=None, rng=None):
    """
    Apply an editor action to the table state.

    The action is the id of whatever triggered the callback: one of the
    buttons, or the positions table itself after an in-place edit or delete.

    Returns:
        (table_data, selected_rows, status) where status is None or a warning
        component.
    """
    if action == POSITIONS_TABLE:
        entries = apply_table_edit(previous_data, table_data, selected_rows)
        records, selected = entries_to_table(entries)
        return records, selected, None

    entries = entries_from_table(table_data, selected_rows or [])

    if action == ACTION_ADD:
        position = position_from_values(kind, direction, strike, premium, quantity)
        if not position.is_valid:
            status = html.Div(
                "Strike must be positive, premium non-negative and quantity at least 1.",
                style=WARNING_STYLE,
            )
            return table_data or [], selected_rows or [], status
        allocator = ColorAllocator(issued_hues(entries), rng=rng)
        color = allocator.next()
        entries = add_entry(entries, position, color, hue=allocator.issued_hues[-1])
        logger.info(f"Added {position.label()} ({len(entries)} legs)")
    elif action == ACTION_TOGGLE_ALL:
        show = not all(e.visible for e in entries)
        entries = set_all_visible(entries, show)

    records, selected = entries_to_table(entries)
    return records, selected, None


@callback(
    Output(POSITIONS_TABLE, 'data'),
    Output(POSITIONS_TABLE, 'selected_rows'),
    Output('form-status', 'children'),
    Input(ACTION_ADD, 'n_clicks'),
    Input(ACTION_TOGGLE_ALL, 'n_clicks'),
    Input(POSITIONS_TABLE, 'data_timestamp'),
    State('kind-select', 'value'),
    State('direction-select', 'value'),
    State('strike-input', 'value'),
    State('premium-input', 'value'),
    State('quantity-input', 'value'),
    State(POSITIONS_TABLE, 'data'),
    State(POSITIONS_TABLE, 'data_previous'),
    State(POSITIONS_TABLE, 'selected_rows'),
    prevent_initial_call=True,
)
def update_portfolio(add_clicks, toggle_clicks, data_timestamp, kind, direction, strike,
                     premium, quantity, table_data, previous_data, selected_rows):
    """Handle the Add and Show/hide-all buttons and in-table edits."""
    records, selected, status = apply_portfolio_action(
        ctx.triggered_id, kind, direction, strike, premium, quantity,
        table_data, selected_rows, previous_data,
    )
    if ctx.triggered_id == POSITIONS_TABLE:
        # Keep any warning from the last Add attempt on screen
        return records, selected, no_update
    return records, selected, status


def color_cell_styles(table_data):
    """Paint each row's Color cell with the leg's color."""
    return [
        {
            'if': {'filter_query': f"{{id}} = {row.get('id')}", 'column_id': 'color'},
            'backgroundColor': row.get('color'),
            'color': '#ffffff',
        }
        for row in (table_data or [])
        if row.get('color')
    ]


@callback(
    Output(POSITIONS_TABLE, 'style_data_conditional'),
    Input(POSITIONS_TABLE, 'data'),
)
def update_color_cells(table_data):
    return color_cell_styles(table_data)
