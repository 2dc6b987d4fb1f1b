"""
src/layout/components/severity_badge.py
────────────────────────────────────────
Excursion severity badge component.
"""

from dash import html

from config.scoring import SEVERITY_COLORS, ExcursionSeverity


def severity_badge(severity: ExcursionSeverity, count: int) -> html.Span:
    """Inline count badge with color-coded border; muted when zero."""
    color = SEVERITY_COLORS[severity] if count else "#8b949e"
    return html.Span(
        f"{count} {severity.value}",
        style={
            "fontSize": ".65rem",
            "fontWeight": "700",
            "color": color,
            "border": f"1px solid {color}",
            "borderRadius": "4px",
            "padding": "1px 7px",
            "whiteSpace": "nowrap",
            "marginRight": "6px",
        },
    )
