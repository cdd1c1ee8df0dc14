"""
Shared UI components and style constants for all dashboard pages.

Centralizes colors, section styles, and value formatting so every page has a
consistent look without duplicating style dicts.
"""

from dash import html

from payoff_analyzer.models import RiskBound, RiskReward


# ---------------------------------------------------------------------------
# Colors
# ---------------------------------------------------------------------------

COLOR_POSITIVE = '#28a745'
COLOR_NEGATIVE = '#dc3545'
COLOR_NEUTRAL = '#6c757d'
COLOR_PRIMARY = '#1f77b4'
COLOR_WARNING_TEXT = '#856404'
COLOR_WARNING_BG = '#fff3cd'


# ---------------------------------------------------------------------------
# Section Styles
# ---------------------------------------------------------------------------

SECTION_STYLE = {
    'border': '1px solid #dee2e6',
    'borderRadius': '6px',
    'padding': '16px',
    'marginBottom': '20px',
    'backgroundColor': '#ffffff',
}

SECTION_LABEL_STYLE = {
    'fontSize': '11px',
    'fontWeight': '600',
    'textTransform': 'uppercase',
    'letterSpacing': '0.5px',
    'color': COLOR_NEUTRAL,
    'marginBottom': '6px',
}

CHIP_STYLE = {
    'display': 'inline-block',
    'border': '1px solid #dee2e6',
    'borderRadius': '12px',
    'padding': '2px 10px',
    'marginRight': '6px',
    'marginBottom': '6px',
    'fontSize': '13px',
    'fontFamily': 'monospace',
}

WARNING_STYLE = {
    'color': COLOR_WARNING_TEXT,
    'backgroundColor': COLOR_WARNING_BG,
    'padding': '8px',
    'borderRadius': '4px',
    'marginTop': '6px',
    'fontSize': '13px',
}

UNLIMITED_TEXT = 'Unlimited'


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

def format_pnl(value: float) -> str:
    """'+$1,234.50', '-$12.00' or '$0.00'."""
    if value > 0:
        return f"+${value:,.2f}"
    elif value < 0:
        return f"-${abs(value):,.2f}"
    return "$0.00"


def format_bound(bound: RiskBound) -> str:
    if not bound.is_bounded:
        return UNLIMITED_TEXT
    return format_pnl(bound.value)


def format_price(value: float) -> str:
    return f"${value:,.2f}"


def _value_color(value: float) -> str:
    if value > 0:
        return COLOR_POSITIVE
    elif value < 0:
        return COLOR_NEGATIVE
    return COLOR_NEUTRAL


# ---------------------------------------------------------------------------
# Reusable components
# ---------------------------------------------------------------------------

def pnl_span(value: float) -> html.Span:
    """Colored P&L display: green for positive, red for negative, gray for zero."""
    style = {'color': _value_color(value), 'fontFamily': 'monospace'}
    if value != 0:
        style['fontWeight'] = 'bold'
    return html.Span(format_pnl(value), style=style)


def bound_span(bound: RiskBound) -> html.Span:
    """Like pnl_span, but shows 'Unlimited' for unbounded gain or loss."""
    if bound.is_bounded:
        return pnl_span(bound.value)
    color = COLOR_POSITIVE if bound.to_float() > 0 else COLOR_NEGATIVE
    return html.Span(UNLIMITED_TEXT, style={'color': color, 'fontWeight': 'bold'})


def metric_card(label: str, value, size: str = 'normal') -> html.Div:
    """Metric card with label above, value below.

    Args:
        label: Short description (e.g. "Max Gain").
        value: Formatted string or component to display.
        size: 'normal' (18px) or 'large' (24px) value font.
    """
    value_size = '24px' if size == 'large' else '18px'
    return html.Div([
        html.Div(label, style={
            'fontSize': '12px',
            'color': COLOR_NEUTRAL,
            'marginBottom': '2px',
        }),
        html.Div(value, style={
            'fontSize': value_size,
            'fontWeight': 'bold',
            'fontFamily': 'monospace',
        }),
    ], style={
        'minWidth': '130px',
        'padding': '10px',
    })


def chip(text: str, color: str = None) -> html.Span:
    style = dict(CHIP_STYLE)
    if color:
        style['borderColor'] = color
        style['color'] = color
    return html.Span(text, style=style)


def break_even_chips(rr: RiskReward) -> html.Div:
    if not rr.break_evens:
        return html.Div(chip("None"))
    return html.Div([chip(format_price(be)) for be in rr.break_evens])


def section(title: str, *children, subtitle: str = None) -> html.Div:
    """Consistent section wrapper with title and optional subtitle."""
    header = [html.H4(title)]
    if subtitle:
        header.append(html.Div(
            subtitle,
            style={'fontSize': '13px', 'color': COLOR_NEUTRAL, 'marginBottom': '12px'},
        ))
    return html.Div(header + list(children), style=SECTION_STYLE)
