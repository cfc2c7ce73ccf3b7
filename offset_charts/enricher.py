import pandas as pd
from typing import Sequence

from . import settings


def top_contributor_sums(
    df: pd.DataFrame,
    field: str,
    n: int = settings.TOP_N,
    key: str = "region",
    item: str = "country",
) -> pd.DataFrame:
    """
    Ranks countries inside each region by their summed `field`.
    Returns up to `n` rows per region as (key, item, field), highest first.
    Ties keep the order in which the countries first appear in `df`.
    """
    present = df.dropna(subset=[field])
    if present.empty:
        return pd.DataFrame(columns=[key, item, field])

    totals = present.groupby([key, item], sort=False, observed=True)[field].sum().reset_index()
    ranked = totals.sort_values(field, ascending=False, kind="stable")
    return ranked.groupby(key, sort=False, observed=True).head(n).reset_index(drop=True)


def top_contributors(
    df: pd.DataFrame,
    field: str,
    n: int = settings.TOP_N,
    key: str = "region",
    item: str = "country",
    sep: str = ", ",
) -> pd.DataFrame:
    """Joins each region's top-`n` country names into one display string, in rank order."""
    column = f"top_{field}"
    ranked = top_contributor_sums(df, field, n=n, key=key, item=item)
    if ranked.empty:
        return pd.DataFrame(columns=[key, column])

    joined = ranked.groupby(key, sort=False, observed=True)[item].agg(
        lambda names: sep.join(str(name) for name in names)
    )
    # Present regions in input order rather than by their best country's rank
    region_order = pd.unique(df.dropna(subset=[field])[key].dropna())
    joined = joined.reindex([r for r in region_order if r in joined.index])
    return joined.rename(column).rename_axis(key).reset_index()


def enrich(
    summary: pd.DataFrame,
    df: pd.DataFrame,
    fields: Sequence[str] = tuple(settings.NUMERIC_FIELDS),
    n: int = settings.TOP_N,
    key: str = "region",
    item: str = "country",
) -> pd.DataFrame:
    """
    Left-joins a `top_<field>` string column per field onto the region summary.
    Regions with no ranked countries for a field get an empty string.
    """
    enriched = summary.copy()
    for field in fields:
        column = f"top_{field}"
        top = top_contributors(df, field, n=n, key=key, item=item)
        enriched = enriched.merge(top, on=key, how="left")
        enriched[column] = enriched[column].fillna("")
    return enriched
