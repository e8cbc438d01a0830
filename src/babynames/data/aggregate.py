from __future__ import annotations

from typing import Any, Iterable

import pandas as pd


def filter_rows(df: pd.DataFrame, **criteria: Any) -> pd.DataFrame:
    """
    Keep rows matching every criterion.

    Scalars match by equality, lists/tuples/sets by membership:
    ``filter_rows(df, name=["Jack", "Emily"], sex="M")``.
    """
    mask = pd.Series(True, index=df.index)
    for col, value in criteria.items():
        if col not in df.columns:
            raise KeyError(f"Unknown column: {col!r}")
        if isinstance(value, (list, tuple, set, frozenset)):
            mask &= df[col].isin(list(value))
        else:
            mask &= df[col] == value
    return df[mask.astype(bool)].copy()


def births_by_name_year(
    df: pd.DataFrame,
    *,
    names: Iterable[str] | None = None,
    by_sex: bool = False,
) -> pd.DataFrame:
    """Sum births per (name, year), or per (name, sex, year) with ``by_sex``."""
    out = df if names is None else df[df["name"].isin(list(names))]
    keys = ["name", "sex", "year"] if by_sex else ["name", "year"]
    agg = (
        out.groupby(keys, as_index=False, observed=True)
        .agg(births=("births", "sum"))
        .sort_values(keys)
        .reset_index(drop=True)
    )
    return agg


def top_names(
    df: pd.DataFrame,
    *,
    year: int,
    sex: str | None = None,
    n: int = 10,
) -> pd.DataFrame:
    """Most given names in ``year`` as (name, births), ties broken by name."""
    out = df[df["year"] == year]
    if sex is not None:
        out = out[out["sex"] == sex]
    agg = out.groupby("name", as_index=False, observed=True).agg(births=("births", "sum"))
    agg = agg.sort_values(["births", "name"], ascending=[False, True]).head(n)
    return agg.reset_index(drop=True)
