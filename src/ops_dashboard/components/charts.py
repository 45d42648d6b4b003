"""
Chart Components Module

Plotly figures and card styling for the dashboard pages.
"""

from typing import List, Sequence

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

EMPTY_MESSAGE = "No data for this period."


def _layout(fig: go.Figure, title: str, height: int) -> go.Figure:
    fig.update_layout(
        margin=dict(l=15, r=15, t=50, b=15),
        title={
            "text": title,
            "font": {"size": 12, "color": "#666", "family": "inherit"},
            "x": 0.5,
            "xanchor": "center",
        },
        paper_bgcolor="white",
        plot_bgcolor="white",
        height=height,
        xaxis=dict(showgrid=False, zeroline=False, showticklabels=True),
        yaxis=dict(showgrid=True, zeroline=False, showticklabels=True),
    )
    return fig


def _empty(fig: go.Figure) -> None:
    fig.add_annotation(
        text=EMPTY_MESSAGE,
        xref="paper",
        yref="paper",
        showarrow=False,
        font=dict(size=14, color="#999"),
        x=0.5,
        y=0.5,
    )
    # Plotly needs a trace to draw an empty figure
    fig.add_trace(go.Scatter(x=[], y=[]))


def trend_frame(monthly: Sequence) -> pd.DataFrame:
    """Monthly trend dataclasses as a frame with a real ``month`` date column."""
    df = pd.DataFrame(
        [{"month": trend.month, "deals": trend.deals, "cars": trend.cars, "revenue": trend.revenue} for trend in monthly],
        columns=["month", "deals", "cars", "revenue"],
    )
    df["month"] = pd.to_datetime(df["month"], format="%Y-%m")
    return df


def make_trend_fig(df: pd.DataFrame, title: str, color_sequence: List[str], height: int = 350) -> go.Figure:
    """Deals and cars as bars, revenue as a line on a second axis."""
    fig = go.Figure()
    if df.empty:
        _empty(fig)
        return _layout(fig, title, height)

    fig.add_trace(go.Bar(x=df["month"], y=df["deals"], name="Deals", marker_color=color_sequence[0]))
    fig.add_trace(go.Bar(x=df["month"], y=df["cars"], name="Cars", marker_color=color_sequence[1]))
    fig.add_trace(
        go.Scatter(
            x=df["month"],
            y=df["revenue"],
            name="Revenue",
            mode="lines+markers",
            yaxis="y2",
            line=dict(color=color_sequence[2], width=2),
            hovertemplate="<b>%{x|%b %Y}</b><br>Revenue: ₪%{y:,.0f}<extra></extra>",
        )
    )
    _layout(fig, title, height)
    fig.update_layout(
        barmode="group",
        yaxis2=dict(overlaying="y", side="right", showgrid=False),
        legend=dict(orientation="h", y=-0.2),
    )
    return fig


def make_bar_fig(df: pd.DataFrame, x: str, y: str, title: str, color_sequence: List[str], height: int = 350) -> go.Figure:
    fig = go.Figure()
    if df.empty:
        _empty(fig)
    else:
        fig.add_trace(
            go.Bar(
                x=df[x],
                y=df[y],
                marker_color=color_sequence[: len(df)],
                text=df[y],
                textposition="auto",
            )
        )
    return _layout(fig, title, height)


def make_pie_fig(df: pd.DataFrame, names: str, values: str, title: str, colors: List[str], height: int = 350) -> go.Figure:
    fig = go.Figure()
    if df.empty:
        _empty(fig)
    else:
        fig.add_trace(
            go.Pie(
                labels=df[names],
                values=df[values],
                marker=dict(colors=colors),
                textinfo="percent+label",
                hovertemplate="%{label}: %{value}<extra></extra>",
            )
        )
    return _layout(fig, title, height)


def metric_card(label: str, value: str, growth: float | None = None) -> str:
    """HTML for one KPI card; growth is shown with an arrow when given."""
    delta = ""
    if growth is not None:
        color = "#10b981" if growth >= 0 else "#ef4444"
        arrow = "▲" if growth >= 0 else "▼"
        delta = f'<div class="custom-delta" style="color:{color}">{arrow} {abs(growth):.1f}%</div>'
    return (
        '<div class="custom-card">'
        f'<div class="custom-metric">{value}</div>'
        f'<div class="custom-label">{label}</div>'
        f"{delta}</div>"
    )


def style() -> None:
    """Card and chart styling shared by the dashboard pages."""
    st.markdown(
        """
        <style>
        .custom-card {
            background: white;
            border-radius: 18px;
            box-shadow: 0 2px 12px rgba(0,0,0,0.10);
            padding: 18px;
            display: flex;
            flex-direction: column;
            align-items: center;
            width: 100%;
            min-height: 150px;
            justify-content: center;
        }
        .custom-metric {
            font-size: 2.2rem;
            font-weight: 700;
            color: #1e3a8a;
            margin-bottom: 0.3rem;
        }
        .custom-label {
            font-size: 0.95rem;
            color: #666;
            letter-spacing: 1px;
            text-transform: uppercase;
        }
        .custom-delta {
            font-size: 0.9rem;
            font-weight: 600;
            margin-top: 0.4rem;
        }
        .stPlotlyChart {
            background: white;
            border-radius: 18px;
            box-shadow: 0 2px 12px rgba(0,0,0,0.10);
            overflow: hidden;
        }
        </style>
        """,
        unsafe_allow_html=True,
    )
