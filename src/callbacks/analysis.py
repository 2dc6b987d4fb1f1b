"""
src/callbacks/analysis.py
──────────────────────────
Analysis page callbacks.

The payload textarea is run through the same handler as the JSON API;
the resulting analysis is kept in `store-analysis` and rendered from there.
"""
from __future__ import annotations

import json

import dash_bootstrap_components as dbc
from dash import Input, Output, State, html

from config.scoring import CONFIDENCE_COLORS, RISK_COLORS, ExcursionSeverity
from src.data.models import AnalysisResult, SensorSummary
from src.layout.components.stat_tile import detail_grid, stat_tile
from src.layout.components.risk_gauge import risk_gauge
from src.layout.components.severity_badge import severity_badge
from src.pages.analysis import sample_payload_text
from src.services.handler import handle_request

CARD_BG = "#161b22"
BORDER = "#30363d"
MUTED = "#8b949e"

_TIME_FMT = "%d/%m %H:%M UTC"


def _fmt_time(moment) -> str:
    return moment.strftime(_TIME_FMT) if moment else "N/A"


# ── Render helpers ────────────────────────────────────────────────────────────

def render_kpi_banner(result: AnalysisResult) -> dbc.Row:
    counts = result.rollup.counts
    risk_color = RISK_COLORS[result.risk.level]
    tiles = [
        stat_tile("Trip", result.trip.id or "N/A", note=result.trip.product_label or ""),
        stat_tile("Location", result.trip.current_location or "Unknown"),
        stat_tile(
            "Excursions",
            str(counts.total),
            tone=risk_color if counts.total else "#2ea44f",
            note=f"{result.rollup.excursion_minutes} min",
        ),
        stat_tile("Risk", result.risk.level.value, tone=risk_color),
    ]
    return dbc.Row([dbc.Col(t, md=3) for t in tiles], className="g-2")


def render_eta_card(result: AnalysisResult) -> html.Div:
    eta = result.eta
    return html.Div(
        [
            stat_tile(
                "Predicted arrival",
                _fmt_time(eta.predicted_timestamp),
                tone=CONFIDENCE_COLORS[eta.confidence],
                note=f"{eta.confidence.value} confidence",
            ),
            html.Div(
                detail_grid([
                    ("Declared ETA", _fmt_time(result.trip.declared_eta)),
                    ("Start", f"{_fmt_time(eta.start_time)} ({eta.start_time_source})"),
                    ("Remaining", f"{eta.remaining_segments} seg × {eta.average_segment_minutes:.0f} min"),
                    ("Stop delay", f"{eta.stop_delay_minutes:.0f} min"),
                    ("Excursion buffer", f"{eta.excursion_buffer_minutes} min"),
                ]),
                style={"marginTop": "10px"},
            ),
        ]
    )


def _sensor_card(summary: SensorSummary) -> html.Div:
    if not summary.data_available:
        body = [html.Div("Data unavailable", style={"color": MUTED, "fontSize": ".8rem"})]
    else:
        body = [
            detail_grid(
                [
                    ("Average", summary.average_display_value),
                    ("Ideal", summary.ideal_display_value or "Not defined"),
                ],
                columns=1,
            ),
            html.Div(
                [
                    severity_badge(ExcursionSeverity.CRITICAL, summary.counts.critical),
                    severity_badge(ExcursionSeverity.WARNING, summary.counts.warning),
                ],
                style={"marginTop": "6px"},
            ),
        ]
        if not summary.thresholds_ordered:
            body.append(
                html.Div("Inconsistent thresholds", style={"color": "#f0883e", "fontSize": ".65rem", "marginTop": "4px"})
            )
    return html.Div(
        [html.Div(summary.sensor_type.value, style={"fontWeight": "700", "marginBottom": "6px"}), *body],
        title=summary.status_text,
        style={
            "backgroundColor": CARD_BG,
            "border": f"1px solid {BORDER}",
            "borderRadius": "8px",
            "padding": "12px",
            "height": "100%",
        },
    )


def render_sensor_cards(result: AnalysisResult) -> dbc.Row:
    return dbc.Row([dbc.Col(_sensor_card(s), md=3) for s in result.sensors], className="g-2")


def render_excursions(result: AnalysisResult) -> html.Div:
    return html.Div(
        [
            html.Div("Excursions", className="chart-title", style={"fontWeight": "700"}),
            html.P(result.rollup.rollup_text, style={"fontSize": ".82rem"}),
            html.Pre(
                result.rollup.excursion_list_text,
                style={"fontSize": ".72rem", "color": MUTED, "whiteSpace": "pre-wrap"},
            ),
        ],
        style={"backgroundColor": CARD_BG, "border": f"1px solid {BORDER}", "borderRadius": "8px", "padding": "12px"},
    )


# ── Callbacks ─────────────────────────────────────────────────────────────────

def run_payload(text: str) -> tuple[dict | None, str | None]:
    """Run the textarea content through the handler: (analysis, error)."""
    try:
        payload = json.loads(text or "")
    except json.JSONDecodeError as e:
        return None, f"Invalid JSON: {e.msg} (line {e.lineno})"

    status, body = handle_request(payload)
    if status != 200:
        return None, body["error"]
    return body["analysis"], None


def register(app) -> None:

    @app.callback(
        Output("payload-input", "value"),
        Input("sample-btn", "n_clicks"),
        prevent_initial_call=True,
    )
    def load_sample(n_clicks: int) -> str:
        return sample_payload_text()

    @app.callback(
        [Output("store-analysis", "data"), Output("analysis-error", "children")],
        Input("analyze-btn", "n_clicks"),
        State("payload-input", "value"),
    )
    def analyze(n_clicks: int, text: str):
        analysis, error = run_payload(text)
        if error:
            return None, dbc.Alert(error, color="danger", className="py-2", style={"fontSize": ".8rem"})
        return analysis, None

    @app.callback(
        [
            Output("analysis-kpi-banner", "children"),
            Output("analysis-risk-gauge", "children"),
            Output("analysis-eta-card", "children"),
            Output("analysis-sensor-cards", "children"),
            Output("analysis-excursions", "children"),
        ],
        Input("store-analysis", "data"),
    )
    def render_analysis(data: dict | None):
        if not data:
            empty = html.Div("Run an analysis to see results.", style={"color": MUTED})
            return empty, None, None, None, None

        result = AnalysisResult.model_validate(data)
        return (
            render_kpi_banner(result),
            risk_gauge(result.risk.score, result.risk.level),
            render_eta_card(result),
            render_sensor_cards(result),
            render_excursions(result),
        )
