#!/usr/bin/env python3
"""
Option Payoff Analyzer — Dash Application

Run with: python app.py
Then open http://127.0.0.1:8050 in your browser.
"""

import logging
import os

from dash import Dash, html
from dotenv import load_dotenv

from payoff_analyzer.config import APP_HOST, APP_PORT
from payoff_analyzer.pages import editor, analysis

# Load environment
load_dotenv()

logging.basicConfig(
    level=os.getenv('LOG_LEVEL', 'INFO'),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
)
logger = logging.getLogger(__name__)

app = Dash(
    __name__,
    title="Option Payoff Analyzer",
)

app.layout = html.Div([
    html.H1("Option Payoff Analyzer", style={'fontSize': '22px', 'marginBottom': '12px'}),
    html.Div(
        editor.layout(),
        style={
            'padding': '16px',
            'backgroundColor': '#f8f9fa',
            'border': '1px solid #dee2e6',
            'borderRadius': '6px',
            'marginBottom': '20px',
        }
    ),
    analysis.layout(),
], style={'maxWidth': '1100px', 'margin': '0 auto', 'padding': '20px'})


if __name__ == '__main__':
    host = os.getenv('APP_HOST', APP_HOST)
    port = int(os.getenv('APP_PORT', APP_PORT))
    debug = os.getenv('APP_DEBUG', 'false').lower() in ('1', 'true', 'yes')
    logger.info(f"Starting dashboard on http://{host}:{port}")
    app.run(debug=debug, host=host, port=port)
