"""
src/pages/analysis.py
──────────────────────
Shipment analysis page.

Static structure; results injected via callbacks.
"""
import json

import dash_bootstrap_components as dbc
from dash import dcc, html

from src.data.samples import build_sample_payload

CARD_BG = "#161b22"
BORDER = "#30363d"
MUTED = "#8b949e"


def sample_payload_text() -> str:
    return json.dumps(build_sample_payload(), indent=2, ensure_ascii=False)


def layout() -> html.Div:
    return html.Div(
        [
            # ── Page header ───────────────────────────────────────────────────
            html.Div(
                [
                    html.H2("Shipment Analysis", className="page-title"),
                    html.P(
                        "Sensor excursions, arrival prediction and risk for one trip payload",
                        className="page-subtitle",
                        style={"color": MUTED},
                    ),
                ],
                className="page-header mb-3",
            ),
            dbc.Row(
                [
                    # ── Payload editor ────────────────────────────────────────
                    dbc.Col(
                        html.Div(
                            [
                                html.Div("Trip payload (JSON)", className="chart-title"),
                                dcc.Textarea(
                                    id="payload-input",
                                    value=sample_payload_text(),
                                    spellCheck=False,
                                    style={
                                        "width": "100%",
                                        "height": "520px",
                                        "fontFamily": "monospace",
                                        "fontSize": ".72rem",
                                        "backgroundColor": "#0d1117",
                                        "color": "#c9d1d9",
                                        "border": f"1px solid {BORDER}",
                                    },
                                ),
                                html.Div(
                                    [
                                        dbc.Button("Analyze", id="analyze-btn", color="primary", size="sm", n_clicks=0),
                                        dbc.Button(
                                            "Load sample", id="sample-btn", color="secondary",
                                            size="sm", outline=True, n_clicks=0, className="ms-2",
                                        ),
                                    ],
                                    className="mt-2",
                                ),
                                html.Div(id="analysis-error", className="mt-2"),
                            ],
                            className="chart-card",
                            style={"backgroundColor": CARD_BG, "padding": "12px", "borderRadius": "8px"},
                        ),
                        md=5,
                    ),
                    # ── Results ───────────────────────────────────────────────
                    dbc.Col(
                        [
                            html.Div(id="analysis-kpi-banner", className="mb-3"),
                            dbc.Row(
                                [
                                    dbc.Col(html.Div(id="analysis-risk-gauge"), md=6),
                                    dbc.Col(html.Div(id="analysis-eta-card"), md=6),
                                ],
                                className="g-3 mb-3",
                            ),
                            html.Div(id="analysis-sensor-cards", className="mb-3"),
                            html.Div(id="analysis-excursions"),
                        ],
                        md=7,
                    ),
                ],
                className="g-3",
            ),
        ],
        style={"padding": "1.5rem"},
    )
