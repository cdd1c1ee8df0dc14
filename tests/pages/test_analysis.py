"""Tests for payoff_analyzer/pages/analysis.py — chart and metrics callback."""

import logging

import pytest
import plotly.graph_objects as go
from dash import html

from payoff_analyzer.models import OptionPosition
from payoff_analyzer.portfolio import PortfolioEntry
from payoff_analyzer.risk import analyze
from payoff_analyzer.pages.analysis import (
    update_analysis, portfolio_metrics, leg_metrics, SHOW_COMBINED,
)


def _table():
    return [
        {'id': 1, 'kind': 'call', 'direction': 'long', 'strike': 100,
         'premium': 8, 'quantity': 1, 'color': '#ff0000'},
        {'id': 2, 'kind': 'call', 'direction': 'short', 'strike': 110,
         'premium': 3, 'quantity': 1, 'color': '#00ff00'},
    ]


def _texts(component):
    """Collect every string inside a component tree."""
    out = []

    def walk(c):
        if isinstance(c, str):
            out.append(c)
            return
        children = getattr(c, 'children', None)
        if isinstance(children, list):
            for child in children:
                walk(child)
        elif children is not None:
            walk(children)

    walk(component)
    return out


class TestUpdateAnalysis:
    def test_empty_table(self):
        fig, metrics, legs = update_analysis([], [], [SHOW_COMBINED])
        assert isinstance(fig, go.Figure)
        assert isinstance(metrics, html.P)
        assert legs is None

    def test_bull_call_spread(self):
        fig, metrics, legs = update_analysis(_table(), [0, 1], [SHOW_COMBINED])
        assert len(fig.data) == 3
        texts = _texts(metrics)
        assert '+$5.00' in texts
        assert '-$5.00' in texts
        assert '$105.00' in texts

    def test_hidden_combined_curve(self):
        fig, _, _ = update_analysis(_table(), [0], [])
        assert len(fig.data) == 1

    def test_error_logged_with_traceback(self, monkeypatch, caplog):
        def broken(_):
            raise ValueError("bad portfolio")

        monkeypatch.setattr('payoff_analyzer.pages.analysis.analyze', broken)
        with caplog.at_level(logging.ERROR, logger='payoff_analyzer.pages.analysis'):
            fig, metrics, legs = update_analysis(_table(), [0, 1], [SHOW_COMBINED])
        assert 'Error: bad portfolio' in _texts(metrics)
        assert legs is None
        [record] = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert record.exc_info is not None
        assert record.exc_info[0] is ValueError

    def test_half_edited_row_is_ignored(self):
        table = _table() + [{'id': 3, 'kind': 'put', 'direction': 'long',
                             'strike': '', 'premium': 2, 'quantity': 1, 'color': '#0000ff'}]
        fig, metrics, legs = update_analysis(table, [0, 1, 2], [SHOW_COMBINED])
        assert '$105.00' in _texts(metrics)
        assert 'incomplete, ignored' in _texts(legs)


class TestMetrics:
    def test_unlimited_gain_shown(self):
        rr = analyze([OptionPosition('call', 'long', 100, 5)])
        assert 'Unlimited' in _texts(portfolio_metrics(rr))

    def test_leg_metrics_per_leg(self):
        entries = [
            PortfolioEntry(1, OptionPosition('call', 'long', 100, 5), '#ff0000'),
            PortfolioEntry(2, OptionPosition('put', 'short', 90, 2, 2), '#00ff00'),
        ]
        texts = _texts(leg_metrics(entries))
        assert 'Long Call 100' in texts
        assert 'Short Put 90 x2' in texts
        assert 'Break-even: $105.00' in texts
        assert 'Max gain: Unlimited' in texts
        assert 'Max loss: -$176.00' in texts
