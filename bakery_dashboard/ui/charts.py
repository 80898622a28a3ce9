"""차트 렌더링 모듈.

Forecast trend line chart (one line per SKU) built with Plotly.
"""

from __future__ import annotations

from typing import Dict, Iterable, Optional, Sequence

import pandas as pd
import plotly.graph_objects as go

from bakery_dashboard.domain.models import CanonicalRecord

from .tables import build_trend_frame

# 기본 팔레트 (20 색상)
PALETTE = [
    "#4E79A7", "#F28E2B", "#E15759", "#76B7B2", "#59A14F",
    "#EDC948", "#B07AA1", "#FF9DA7", "#9C755F", "#BAB0AC",
    "#1F77B4", "#FF7F0E", "#2CA02C", "#D62728", "#9467BD",
    "#8C564B", "#E377C2", "#7F7F7F", "#BCBD22", "#17BECF",
]


def series_color_map(labels: Sequence[str]) -> Dict[str, str]:
    """Stable label → color mapping in first-seen order."""
    colors: Dict[str, str] = {}
    for label in labels:
        if label not in colors:
            colors[label] = PALETTE[len(colors) % len(PALETTE)]
    return colors


def build_forecast_trend_figure(
    records: Iterable[CanonicalRecord],
    *,
    title: str = "Forecast by SKU",
    height: int = 400,
) -> Optional[go.Figure]:
    """
    Line chart of forecast value per period, one trace per SKU.

    Returns:
        Plotly figure, or ``None`` when there is nothing to plot
    """
    frame = build_trend_frame(records)
    if frame.empty:
        return None

    labels = list(pd.unique(frame["series"]))
    colors = series_color_map(labels)

    fig = go.Figure()
    for label in labels:
        part = frame[frame["series"] == label]
        fig.add_trace(
            go.Scatter(
                x=part["date"],
                y=part["value"],
                mode="lines+markers",
                name=str(label),
                line=dict(color=colors[label], width=2),
                hovertemplate="%{x|%b %d}<br>%{y:,.0f}<extra>" + str(label) + "</extra>",
            )
        )

    fig.update_layout(
        title=title,
        height=height,
        hovermode="x unified",
        xaxis_title="Date",
        yaxis_title="Forecast (units)",
        legend_title_text="SKU",
        legend=dict(
            orientation="h",
            x=0,
            xanchor="left",
            y=-0.25,
            yanchor="top",
            bgcolor="rgba(255,255,255,0.6)",
        ),
        margin=dict(l=20, r=20, t=60, b=20),
    )
    return fig
