"""
Tablas agregadas por vista (una por gráfica)

Todas las funciones reciben la tabla enriquecida (países + métricas derivadas)
y devuelven una tabla nueva; ninguna modifica la entrada.
"""
from __future__ import annotations

import pandas as pd

from continents import CONTINENT_ORDER, UNKNOWN, add_continent
from derived_metrics import change_pct, numeric_column

ISO3_PATTERN = r"^[A-Z]{3}$"

# Etiquetas para las columnas de participación (formato largo)
SHARE_LABELS = {
    "solar_share_elec": "Solar",
    "wind_share_elec": "Eólica",
    "hydro_share_elec": "Hidro",
    "other_renewables_share_elec": "Otras renovables",
}


def with_metrics(df: pd.DataFrame, metrics: list[str]) -> pd.DataFrame:
    # Columnas ausentes -> toda NaN
    out = df.copy()
    for m in metrics:
        out[m] = numeric_column(out, m)
    return out


def top_n(df: pd.DataFrame, metric: str, year: int, n: int) -> pd.DataFrame:
    """
    Top-N países por metric en un año.
    Orden estable: empates conservan el orden original.
    """
    d = with_metrics(df[df["year"] == year], [metric])
    cols = [c for c in ["country", "iso_code", "year", "continent"] if c in d.columns] + [metric]
    top = (
        d.loc[:, list(dict.fromkeys(cols))]
         .dropna(subset=[metric])
         .sort_values(metric, ascending=False, kind="mergesort")
         .head(n)
         .reset_index(drop=True)
    )
    return top


def windowed_delta(
    df: pd.DataFrame,
    metric: str,
    window: int,
    end_year: int | None = None,
) -> pd.DataFrame:
    """
    % de cambio por país entre la primera y la última observación disponible
    dentro de [end_year - window, end_year].
    Países con menos de 2 observaciones en la ventana quedan fuera.
    """
    cols_out = ["country", "iso_code", "start_year", "end_year", "start_value", "end_value", "change_pct"]
    d = with_metrics(df, [metric])
    if end_year is None:
        if d["year"].dropna().empty:
            return pd.DataFrame(columns=cols_out)
        end_year = int(d["year"].max())
    start_year = end_year - window
    d = d[(d["year"] >= start_year) & (d["year"] <= end_year)].dropna(subset=[metric])
    if d.empty:
        return pd.DataFrame(columns=cols_out)
    if "iso_code" not in d.columns:
        d["iso_code"] = pd.NA
    d = d.sort_values(["country", "year"], kind="mergesort")
    g = d.groupby("country", sort=False)
    res = pd.DataFrame({
        "iso_code": g["iso_code"].last(),
        "n_obs": g[metric].size(),
        "start_year": g["year"].first(),
        "end_year": g["year"].last(),
        "start_value": g[metric].first(),
        "end_value": g[metric].last(),
    })
    res = res[res["n_obs"] >= 2].drop(columns="n_obs")
    res["change_pct"] = change_pct(res["start_value"], res["end_value"])
    return res.reset_index().loc[:, cols_out]


def continent_means(df: pd.DataFrame, metrics: list[str], year: int) -> pd.DataFrame:
    """
    Media por continente (ignora NaN). Unknown se excluye.
    Continente sin valores para una métrica -> NaN.
    """
    d = df[df["year"] == year]
    if "continent" not in d.columns:
        d = add_continent(d)
    d = with_metrics(d, metrics)
    d = d[d["continent"] != UNKNOWN]
    means = d.groupby("continent")[metrics].mean()
    order = [c for c in CONTINENT_ORDER if c in means.index]
    counts = d.groupby("continent").size().rename("n_countries")
    return means.loc[order].join(counts).reset_index()


def long_shares(
    df: pd.DataFrame,
    share_columns: list[str],
    id_columns: list[str],
    labels: dict[str, str] | None = None,
) -> pd.DataFrame:
    """Formato largo: una fila por (entidad, fuente, valor)."""
    labels = labels or SHARE_LABELS
    d = with_metrics(df, share_columns)
    long = (
        d.loc[:, id_columns + share_columns]
         .melt(id_vars=id_columns, var_name="source", value_name="value")
         .dropna(subset=["value"])
    )
    long["source"] = long["source"].map(lambda s: labels.get(s, s))
    return long.reset_index(drop=True)


def choropleth_table(
    df: pd.DataFrame,
    metric: str,
    year: int,
    iso_overrides: dict[str, str] | None = None,
) -> pd.DataFrame:
    """
    (country, iso_code, value) para el mapa.
    iso_overrides (country -> ISO3) tiene prioridad sobre el iso_code del dataset.
    Se descartan códigos que no sean ISO-3 (vacíos, OWID_*).
    """
    iso_overrides = iso_overrides or {}
    d = with_metrics(df[df["year"] == year], [metric])
    if "iso_code" not in d.columns:
        d["iso_code"] = pd.NA
    iso = d["country"].astype(object).map(iso_overrides)
    iso = iso.where(iso.notna(), d["iso_code"].astype(object))
    out = pd.DataFrame({
        "country": d["country"],
        "iso_code": iso.astype("string").str.strip(),
        "value": d[metric],
    })
    out = out[out["iso_code"].str.match(ISO3_PATTERN, na=False)]
    return out.dropna(subset=["value"]).reset_index(drop=True)
