"""
src/layout/navbar.py
─────────────────────
Top navigation bar.
"""

import dash_bootstrap_components as dbc
from dash import html

NAV_BG = "#0d1117"
BORDER = "#30363d"
ACCENT = "#58a6ff"
MUTED = "#8b949e"


def create_navbar() -> dbc.Navbar:
    return dbc.Navbar(
        dbc.Container(
            [
                dbc.NavbarBrand(
                    [
                        html.Span("❄", style={"marginRight": "8px", "fontSize": "1.1rem"}),
                        html.Span(
                            "Shipment Analytics", style={"fontWeight": "700", "letterSpacing": ".04em"}
                        ),
                    ],
                    href="/",
                    style={"color": ACCENT, "textDecoration": "none"},
                ),
                html.Span(
                    "POST /api/trip-analysis",
                    style={"color": MUTED, "fontSize": ".72rem", "fontFamily": "monospace"},
                ),
            ],
            fluid=True,
        ),
        color=NAV_BG,
        dark=True,
        sticky="top",
        style={"borderBottom": f"1px solid {BORDER}", "padding": ".5rem 1rem"},
    )
