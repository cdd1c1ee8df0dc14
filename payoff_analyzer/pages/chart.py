"""
Payoff chart: combined P&L curve plus one curve per visible leg.
"""

import plotly.graph_objects as go

from payoff_analyzer.config import CHART_HEIGHT
from payoff_analyzer.pnl import payoff_curve
from payoff_analyzer.portfolio import positions
from payoff_analyzer.sampling import chart_prices, price_domain
from payoff_analyzer.pages.components import COLOR_PRIMARY, COLOR_NEUTRAL

COMBINED_TRACE_NAME = 'Portfolio'


def build_payoff_figure(entries, show_combined: bool = True, break_evens=()) -> go.Figure:
    """
    Build the payoff-at-expiration figure.

    Args:
        entries: PortfolioEntry list; every leg feeds the combined curve,
            only visible legs get their own line
        show_combined: Draw the portfolio total
        break_evens: Prices to mark with vertical dotted lines

    Returns:
        Plotly figure with a unified hover read-out across all lines.
    """
    legs = positions(entries)
    prices = chart_prices(legs)
    curve = payoff_curve(legs, prices)

    fig = go.Figure()

    if show_combined:
        fig.add_trace(go.Scatter(
            x=curve['price'], y=curve['total'],
            name=COMBINED_TRACE_NAME, mode='lines',
            line=dict(color=COLOR_PRIMARY, width=2.5),
        ))

    for i, entry in enumerate(entries):
        if not entry.visible or not entry.position.is_valid:
            continue
        fig.add_trace(go.Scatter(
            x=curve['price'], y=curve[f'leg_{i}'],
            name=entry.position.label(), mode='lines',
            line=dict(color=entry.color, width=1.5),
        ))

    fig.add_hline(y=0, line_dash='dash', line_color=COLOR_NEUTRAL, line_width=1)
    for be in break_evens:
        fig.add_vline(x=be, line_dash='dot', line_color=COLOR_NEUTRAL, line_width=1)

    low, high = price_domain(legs)
    fig.update_layout(
        height=CHART_HEIGHT,
        hovermode='x unified',
        xaxis_title='Underlying Price at Expiration',
        yaxis_title='Profit / Loss',
        xaxis=dict(range=[low, high]),
        margin=dict(l=60, r=20, t=20, b=40),
        legend=dict(orientation='h', yanchor='bottom', y=1.02, xanchor='left', x=0),
    )
    return fig
