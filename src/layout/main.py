"""
src/layout/main.py
───────────────────
Main application layout composition.

Contains:
  - dcc.Store holding the last analysis (JSON)
  - Navbar + analysis page
"""
from dash import html, dcc

from src.layout.navbar import create_navbar
from src.pages import analysis


def create_layout() -> html.Div:
    """Assemble the root application layout."""
    return html.Div(
        [
            # ── Client-side state ─────────────────────────────────────────────
            dcc.Store(id="store-analysis", data=None),

            # ── Navigation bar ────────────────────────────────────────────────
            create_navbar(),

            # ── Page content ──────────────────────────────────────────────────
            html.Div(
                analysis.layout(),
                id="page-content",
                style={"minHeight": "calc(100vh - 60px)"},
            ),

            # ── Footer ────────────────────────────────────────────────────────
            html.Footer(
                [
                    html.Span("Shipment Analytics Engine"),
                    html.Span(" · "),
                    html.Span("Excursions · ETA · Risk"),
                ],
                style={
                    "textAlign": "center",
                    "padding": ".7rem",
                    "fontSize": ".72rem",
                    "color": "#8b949e",
                    "borderTop": "1px solid #30363d",
                    "marginTop": "2rem",
                },
            ),
        ],
        style={"backgroundColor": "#0d1117", "minHeight": "100vh", "color": "#c9d1d9"},
    )
