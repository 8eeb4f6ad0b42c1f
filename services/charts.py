from typing import List

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from services.config import CATEGORY_CHART_LIMIT
from services.models import CategoryStat

BAR_COLOR = "#8884d8"


def _build_empty_figure(message: str, title: str, height: int = 300) -> go.Figure:
    fig = go.Figure()
    fig.add_annotation(
        text=message,
        x=0.5,
        y=0.5,
        xref="paper",
        yref="paper",
        showarrow=False,
        font=dict(size=14, color="gray"),
    )
    fig.update_layout(title=title, template="plotly_white", height=height)
    return fig


def build_category_chart(categories: List[CategoryStat], limit: int = CATEGORY_CHART_LIMIT) -> go.Figure:
    if not categories:
        return _build_empty_figure("No category data available.", "Products by Category")

    df = pd.DataFrame(
        {
            "category": [c.label for c in categories[:limit]],
            "count": [c.count for c in categories[:limit]],
            "avg_price": [c.avg_price for c in categories[:limit]],
        }
    )

    fig = go.Figure()
    fig.add_trace(
        go.Bar(
            x=df["category"],
            y=df["count"],
            name="Product Count",
            marker_color=BAR_COLOR,
            customdata=df["avg_price"],
            hovertemplate="%{x}<br>Products: %{y:,}<br>Avg price: $%{customdata}<extra></extra>",
        )
    )
    fig.update_layout(
        title="Products by Category",
        template="plotly_white",
        height=300,
        margin=dict(t=60, b=60, l=50, r=30),
        xaxis=dict(title="Category"),
        yaxis=dict(title="Product Count", gridcolor="lightgray"),
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1),
        showlegend=True,
    )
    return fig


def build_inventory_chart(series: pd.DataFrame, title: str) -> go.Figure:
    if series is None or series.empty:
        return _build_empty_figure("No inventory history for this lookup.", title)

    if series["store_id"].nunique() > 1:
        fig = px.line(
            series,
            x="date",
            y="quantity",
            color="store_id",
            markers=True,
            labels={"date": "Date", "quantity": "Quantity", "store_id": "Store"},
        )
    else:
        fig = go.Figure()
        fig.add_trace(
            go.Scatter(
                x=series["date"],
                y=series["quantity"],
                mode="lines+markers",
                name="Quantity",
                line=dict(color=BAR_COLOR, width=2),
                hovertemplate="Date: %{x}<br>Quantity: %{y:,}<extra></extra>",
            )
        )

    fig.update_layout(
        title=title,
        template="plotly_white",
        height=300,
        margin=dict(t=60, b=60, l=50, r=30),
        xaxis=dict(title="Date", showgrid=True, gridcolor="lightgray"),
        yaxis=dict(title="Quantity", showgrid=True, gridcolor="lightgray"),
    )
    return fig
