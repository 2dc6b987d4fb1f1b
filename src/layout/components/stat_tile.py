"""
src/layout/components/stat_tile.py
───────────────────────────────────
Headline stat tiles and label/value detail grids for the analysis page.
"""
from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import html

NEUTRAL = "#c9d1d9"
MUTED = "#8b949e"
EDGE = "#30363d"


def stat_tile(label: str, value: str, tone: str | None = None, note: str = "") -> dbc.Card:
    """
    Single headline figure for the banner.

    `tone` colours both the value and the card edge; None keeps the
    tile neutral. `note` is a muted line under the value.
    """
    body = [
        html.Small(label.upper(), style={"color": MUTED, "letterSpacing": ".06em"}),
        html.H4(value, className="mb-0", style={"color": tone or NEUTRAL, "fontWeight": "700"}),
    ]
    if note:
        body.append(html.Small(note, style={"color": MUTED}))
    return dbc.Card(
        dbc.CardBody(body, className="py-2 px-3"),
        className="h-100",
        style={"backgroundColor": "#161b22", "borderColor": tone or EDGE},
    )


def detail_grid(rows: list[tuple[str, str]], columns: int = 2) -> html.Div:
    """Label/value pairs laid out in a fixed number of columns."""
    cells = [
        html.Div([
            html.Div(label, style={"fontSize": ".62rem", "color": MUTED, "textTransform": "uppercase"}),
            html.Div(value, style={"fontSize": ".85rem", "fontWeight": "700", "color": NEUTRAL}),
        ])
        for label, value in rows
    ]
    return html.Div(
        cells,
        style={"display": "grid", "gridTemplateColumns": f"repeat({columns}, 1fr)", "gap": "8px"},
    )
