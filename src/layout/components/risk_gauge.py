"""
src/layout/components/risk_gauge.py
────────────────────────────────────
Risk score gauge using Plotly indicator chart.
"""
from __future__ import annotations

import plotly.graph_objects as go
from dash import dcc

from config.scoring import HIGH_RISK_SCORE, MAX_RISK_SCORE, MODERATE_RISK_SCORE, RISK_COLORS, RiskLevel

CARD_BG = "#161b22"


def risk_figure(score: int, level: RiskLevel, height: int = 220) -> go.Figure:
    color = RISK_COLORS[level]

    fig = go.Figure(go.Indicator(
        mode="gauge+number",
        value=score,
        number={"font": {"color": color, "size": 30}},
        title={"text": f"{level.value} risk", "font": {"color": "#8b949e", "size": 12}},
        gauge={
            "axis": {
                "range": [0, MAX_RISK_SCORE],
                "tickwidth": 1,
                "tickcolor": "#30363d",
                "tickfont": {"color": "#8b949e", "size": 9},
            },
            "bar": {"color": color, "thickness": 0.25},
            "bgcolor": "rgba(0,0,0,0)",
            "borderwidth": 0,
            "steps": [
                {"range": [0, MODERATE_RISK_SCORE], "color": "rgba(46,164,79,0.10)"},
                {"range": [MODERATE_RISK_SCORE, HIGH_RISK_SCORE], "color": "rgba(232,160,32,0.10)"},
                {"range": [HIGH_RISK_SCORE, MAX_RISK_SCORE], "color": "rgba(218,54,51,0.15)"},
            ],
            "threshold": {
                "line": {"color": "#da3633", "width": 2},
                "thickness": 0.75,
                "value": HIGH_RISK_SCORE,
            },
        },
    ))

    fig.update_layout(
        paper_bgcolor=CARD_BG,
        plot_bgcolor=CARD_BG,
        margin=dict(l=20, r=20, t=40, b=20),
        height=height,
        font=dict(color="#c9d1d9"),
    )
    return fig


def risk_gauge(score: int, level: RiskLevel, height: int = 220) -> dcc.Graph:
    return dcc.Graph(
        figure=risk_figure(score, level, height),
        config={"displayModeBar": False},
        style={"height": f"{height}px"},
    )
