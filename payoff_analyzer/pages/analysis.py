"""
Analysis page: payoff chart, portfolio risk/reward and per-leg breakdown.

Everything is recomputed from the positions table on each change.
"""

import logging

import plotly.graph_objects as go
from dash import html, dcc, callback, Input, Output

from payoff_analyzer.portfolio import entries_from_table, positions
from payoff_analyzer.risk import analyze, analyze_legs
from payoff_analyzer.pages.chart import build_payoff_figure
from payoff_analyzer.pages.components import (
    metric_card, bound_span, break_even_chips, chip, format_bound, format_price,
    section, COLOR_NEUTRAL,
)

logger = logging.getLogger(__name__)

SHOW_COMBINED = 'combined'


def layout():
    return html.Div([
        dcc.Checklist(
            id='chart-options',
            options=[{'label': ' Show portfolio P&L curve', 'value': SHOW_COMBINED}],
            value=[SHOW_COMBINED],
            style={'marginBottom': '8px'},
        ),
        dcc.Graph(id='payoff-chart', figure=go.Figure()),
        html.Div(id='risk-metrics'),
        html.Div(id='leg-metrics'),
    ])


def portfolio_metrics(rr) -> html.Div:
    return section(
        "Risk / Reward",
        html.Div([
            metric_card("Max Gain", bound_span(rr.max_gain)),
            metric_card("Max Loss", bound_span(rr.max_loss)),
        ], style={'display': 'flex', 'flexWrap': 'wrap'}),
        html.Div("Break-even prices", style={'fontSize': '12px', 'color': COLOR_NEUTRAL}),
        break_even_chips(rr),
    )


def leg_metrics(entries) -> html.Div:
    rows = []
    for entry, rr in zip(entries, analyze_legs(positions(entries))):
        p = entry.position
        if not p.is_valid:
            rows.append(html.Div([
                chip(p.label(), entry.color),
                html.Em("incomplete, ignored", style={'color': COLOR_NEUTRAL}),
            ]))
            continue
        be = rr.first_break_even
        rows.append(html.Div([
            chip(p.label(), entry.color),
            chip(f"Break-even: {format_price(be) if be is not None else 'n/a'}"),
            chip(f"Max gain: {format_bound(rr.max_gain)}"),
            chip(f"Max loss: {format_bound(rr.max_loss)}"),
        ]))
    return section("Legs", *rows)


@callback(
    Output('payoff-chart', 'figure'),
    Output('risk-metrics', 'children'),
    Output('leg-metrics', 'children'),
    Input('positions-table', 'data'),
    Input('positions-table', 'selected_rows'),
    Input('chart-options', 'value'),
)
def update_analysis(table_data, selected_rows, chart_options):
    """Recompute chart and metrics for the current table snapshot."""
    if not table_data:
        return go.Figure(), html.P("Add a position to see its payoff."), None

    try:
        entries = entries_from_table(table_data, selected_rows or [])
        rr = analyze(positions(entries))
        fig = build_payoff_figure(
            entries,
            show_combined=SHOW_COMBINED in (chart_options or []),
            break_evens=rr.break_evens,
        )
        return fig, portfolio_metrics(rr), leg_metrics(entries)
    except Exception as e:
        logger.exception(f"Error updating analysis: {e}")
        return go.Figure(), html.P(f"Error: {e}", style={'color': 'red'}), None
