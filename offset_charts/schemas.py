from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator


class OffsetRecord(BaseModel):
    """
    One project row from the PROJECTS sheet, reduced to the fields the charts use.
    Either credit total may be blank in the source workbook.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, coerce_numbers_to_str=True)

    project_id: Optional[str] = Field(default=None, alias="Project ID")
    region: str = Field(..., alias="Region")
    country: Optional[str] = Field(default=None, alias="Country")
    issued: Optional[float] = Field(default=None, ge=0, alias="Total Credits Issued")
    remaining: Optional[float] = Field(default=None, alias="Total Credits Remaining")


class RegionSummary(BaseModel):
    """Credit totals for a single region, optionally with its top countries."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, coerce_numbers_to_str=True)

    region: str = Field(..., alias="Region")
    issued: float = Field(default=0, alias="Credits Issued")
    remaining: float = Field(default=0, alias="Credits Remaining")
    top_issued: Optional[str] = Field(default=None, alias="Top Issuing Countries")
    top_remaining: Optional[str] = Field(default=None, alias="Top Remaining Countries")


class LongRow(BaseModel):
    region: str
    metric: str
    value: float


class HoverLabelStyle(BaseModel):
    bgcolor: str = "white"
    font_size: int = Field(default=13, gt=0)
    font_color: str = "black"


class ChartSpec(BaseModel):
    """
    Declarative description of a bar chart. `charts.render` is the only place
    that turns it into a plotly figure.
    """

    title: str
    x_title: str
    y_title: str
    # LongRow fields feeding the category axis, the bar height and the trace split.
    # Swapping x and color groups bars by metric with one trace per region.
    x: Literal["region", "metric"] = "region"
    y: Literal["value"] = "value"
    color: Literal["region", "metric"] = "metric"
    color_map: dict[str, str] = Field(default_factory=dict)
    barmode: Literal["group", "stack", "relative", "overlay"] = "group"
    hovermode: str = "closest"
    # metric -> one string per bar, aligned with that metric's rows in `data`
    hover_text: Optional[dict[str, list[str]]] = None
    hover_label: Optional[HoverLabelStyle] = None
    data: list[LongRow] = Field(default_factory=list)

    @model_validator(mode="after")
    def _distinct_axes(self) -> "ChartSpec":
        if self.x == self.color:
            raise ValueError(f"x and color must name different fields, both are '{self.x}'")
        return self

    def metrics(self) -> list[str]:
        """Metric names in first-appearance order."""
        return list(dict.fromkeys(row.metric for row in self.data))

    def rows_for(self, metric: str) -> list[LongRow]:
        return [row for row in self.data if row.metric == metric]

    def series(self) -> list[str]:
        """Trace names (values of the `color` field) in first-appearance order."""
        return list(dict.fromkeys(getattr(row, self.color) for row in self.data))

    def rows_in(self, name: str) -> list[LongRow]:
        return [row for row in self.data if getattr(row, self.color) == name]
