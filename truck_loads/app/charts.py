import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from .config import PLOTLY_CONFIG


def apply_layout(fig: go.Figure, height: int = 320, showlegend: bool = False) -> go.Figure:
    """Centralize layout tweaks so list-view charts share one look."""
    fig.update_layout(
        height=height,
        margin=dict(l=24, r=24, t=24, b=24),
        showlegend=showlegend,
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
    )
    return fig


def weight_by_category_chart(breakdown: pd.DataFrame) -> go.Figure:
    """Horizontal bar of total weight per category from ``category_breakdown``."""
    fig = px.bar(
        breakdown.sort_values("Weight (kg)"),
        x="Weight (kg)",
        y="Category",
        orientation="h",
        text="Weight (kg)",
        color_discrete_sequence=["#1e90ff"],
    )
    fig.update_traces(texttemplate="%{text:,.0f} kg", textposition="outside", cliponaxis=False)
    return apply_layout(fig, height=max(200, 48 * len(breakdown) + 60))


def chart_config() -> dict:
    return dict(PLOTLY_CONFIG)
