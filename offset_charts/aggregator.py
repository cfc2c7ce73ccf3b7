import pandas as pd
from typing import Optional, Sequence

from . import settings
from .schemas import RegionSummary


def drop_incomplete(
    df: pd.DataFrame, fields: Sequence[str] = tuple(settings.NUMERIC_FIELDS)
) -> pd.DataFrame:
    """Keeps only rows where every one of `fields` is present (joint null filter)."""
    return df.dropna(subset=list(fields)).reset_index(drop=True)


def summarize_by_region(
    df: pd.DataFrame,
    key: str = "region",
    fields: Sequence[str] = tuple(settings.NUMERIC_FIELDS),
) -> pd.DataFrame:
    """
    Sums the credit fields per region.
    Both fields are filtered together before summing, so a project with only one
    total reported is left out of both sums. Regions keep their first-appearance order.
    """
    fields = list(fields)
    complete = drop_incomplete(df, fields)
    if complete.empty:
        return pd.DataFrame(columns=[key, *fields])

    return complete.groupby(key, sort=False, observed=True)[fields].sum().reset_index()


def to_long(
    summary: pd.DataFrame,
    metric_names: Optional[dict[str, str]] = None,
    key: str = "region",
    fields: Sequence[str] = tuple(settings.NUMERIC_FIELDS),
) -> pd.DataFrame:
    """
    Unpivots the summed fields into (region, metric, value) rows, ordered by metric
    then region. Fields missing from `metric_names` keep their column name.
    """
    metric_names = settings.METRIC_LABELS if metric_names is None else metric_names
    long_df = summary.melt(
        id_vars=[key], value_vars=list(fields), var_name="metric", value_name="value"
    )
    long_df["metric"] = long_df["metric"].map(lambda f: metric_names.get(f, f))
    return long_df


def from_long(
    long_df: pd.DataFrame,
    metric_names: Optional[dict[str, str]] = None,
    key: str = "region",
) -> pd.DataFrame:
    """Re-pivots long rows back into one row per region (inverse of `to_long`)."""
    metric_names = settings.METRIC_LABELS if metric_names is None else metric_names
    reverse = {label: field for field, label in metric_names.items()}

    if long_df.empty:
        return pd.DataFrame(columns=[key, *metric_names])

    wide = long_df.pivot(index=key, columns="metric", values="value")
    wide = wide.reindex(pd.unique(long_df[key]))
    wide = wide[list(pd.unique(long_df["metric"]))]
    wide = wide.rename(columns=reverse)
    wide.index.name = key
    wide.columns.name = None
    return wide.reset_index()


def to_summaries(summary: pd.DataFrame) -> list[RegionSummary]:
    """Validates summary rows (plain or enriched) against the RegionSummary schema."""
    rows = summary.astype(object)
    rows = rows.where(rows.notna(), None)
    return [RegionSummary(**row) for row in rows.to_dict("records")]
