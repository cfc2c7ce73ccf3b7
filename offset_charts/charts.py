"""
Chart building: long table -> ChartSpec -> plotly figure -> HTML.

Everything interactive (zoom, pan, box select, PNG download) comes from plotly
itself; this module only describes the bars and their hover text.
"""
import logging
from pathlib import Path
from typing import Optional

import pandas as pd
import plotly.graph_objects as go

from . import settings
from .schemas import ChartSpec, HoverLabelStyle, LongRow
from .utils import format_credits

logger = logging.getLogger(__name__)


def build_hover_text(
    summary: pd.DataFrame,
    long_df: pd.DataFrame,
    metric_names: Optional[dict[str, str]] = None,
    key: str = "region",
) -> dict[str, list[str]]:
    """
    One hover string per bar, grouped by metric in the same order as `long_df`.
    The top-country string comes from the enriched summary's `top_<field>` column.
    """
    metric_names = settings.METRIC_LABELS if metric_names is None else metric_names
    reverse = {label: field for field, label in metric_names.items()}
    lookup = summary.set_index(key) if not summary.empty else pd.DataFrame()

    hover_text: dict[str, list[str]] = {}
    for row in long_df.to_dict("records"):
        region, metric = row[key], row["metric"]
        column = f"top_{reverse.get(metric, metric)}"
        top = ""
        if column in lookup.columns and region in lookup.index:
            top = lookup.at[region, column] or ""
        text = (
            f"<b>{region}</b><br>"
            f"{metric}: {format_credits(row['value'])}<br>"
            f"Top countries: {top}"
        )
        hover_text.setdefault(metric, []).append(text)
    return hover_text


def build_chart_spec(
    long_df: pd.DataFrame,
    color_map: Optional[dict[str, str]] = None,
    title: str = settings.CHART_TITLE,
    x_title: str = settings.X_AXIS_TITLE,
    y_title: str = settings.Y_AXIS_TITLE,
    barmode: str = "group",
    hover_text: Optional[dict[str, list[str]]] = None,
    hover_label: Optional[HoverLabelStyle] = None,
    key: str = "region",
    x: str = "region",
) -> ChartSpec:
    """
    Describes the long table as grouped bars. `key` is the long table's category
    column; `x="metric"` puts metrics on the axis and draws one trace per region.
    """
    color_map = settings.METRIC_COLORS if color_map is None else color_map
    rows = [
        LongRow(region=str(rec[key]), metric=str(rec["metric"]), value=float(rec["value"]))
        for rec in long_df.to_dict("records")
    ]
    spec = ChartSpec(
        title=title,
        x_title=x_title,
        y_title=y_title,
        x=x,
        color="metric" if x == "region" else "region",
        color_map=color_map,
        barmode=barmode,
        hovermode="closest" if hover_text else "x",
        hover_text=hover_text,
        hover_label=hover_label,
        data=rows,
    )

    unmapped = [name for name in spec.series() if name not in spec.color_map]
    if unmapped:
        logger.debug(f"No colour configured for {unmapped}; using plotly defaults.")
    return spec


def _hover_by_bar(spec: ChartSpec) -> dict[tuple[str, str], str]:
    """Flattens the per-metric hover lists into a (region, metric) lookup."""
    if not spec.hover_text:
        return {}
    lookup = {}
    for metric, texts in spec.hover_text.items():
        for row, text in zip(spec.rows_for(metric), texts):
            lookup[(row.region, row.metric)] = text
    return lookup


def render(spec: ChartSpec) -> go.Figure:
    """Turns a ChartSpec into a plotly figure, one Bar trace per `color` value."""
    hover = _hover_by_bar(spec)
    fig = go.Figure()
    for name in spec.series():
        rows = spec.rows_in(name)
        trace = dict(
            x=[getattr(row, spec.x) for row in rows],
            y=[getattr(row, spec.y) for row in rows],
            name=name,
        )
        if name in spec.color_map:
            trace["marker_color"] = spec.color_map[name]
        if any((row.region, row.metric) in hover for row in rows):
            # Custom text replaces plotly's default "x, y, name" summary
            trace["hovertext"] = [hover.get((row.region, row.metric), "") for row in rows]
            trace["hoverinfo"] = "text"
        fig.add_trace(go.Bar(**trace))

    fig.update_layout(
        title_text=spec.title,
        xaxis_title=spec.x_title,
        yaxis_title=spec.y_title,
        barmode=spec.barmode,
        hovermode=spec.hovermode,
        legend_title_text=spec.color.capitalize(),
    )
    if spec.hover_label:
        fig.update_layout(
            hoverlabel=dict(
                bgcolor=spec.hover_label.bgcolor,
                font=dict(size=spec.hover_label.font_size, color=spec.hover_label.font_color),
            )
        )
    return fig


def save_figure(fig: go.Figure, path: Path, include_plotlyjs: str = "cdn") -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.write_html(str(path), include_plotlyjs=include_plotlyjs, full_html=True)
    return path
