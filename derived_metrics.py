"""
Métricas derivadas (per cápita, ratios, % de cambio)

Regla común: si falta algún insumo o el denominador es 0, el resultado es NaN.
Nunca 0, nunca inf.
"""
from __future__ import annotations

import numpy as np
import pandas as pd

# nombre -> (numerador, denominador, escala)
DERIVED_METRICS = {
    "gdp_per_capita": ("gdp", "population", 1.0),
    # electricity_demand viene en TWh -> kWh por persona
    "electricity_demand_per_capita": ("electricity_demand", "population", 1e9),
    "generation_demand_ratio": ("electricity_generation", "electricity_demand", 1.0),
}


def numeric_column(df: pd.DataFrame, col: str) -> pd.Series:
    """Columna como float; si no existe, toda NaN."""
    if col not in df.columns:
        return pd.Series(np.nan, index=df.index, dtype=float)
    return pd.to_numeric(df[col], errors="coerce").astype(float)


def safe_divide(num, den):
    num = pd.Series(num, dtype=float) if not isinstance(num, pd.Series) else num.astype(float)
    den = pd.Series(den, dtype=float, index=num.index) if not isinstance(den, pd.Series) else den.astype(float)
    with np.errstate(divide="ignore", invalid="ignore"):
        out = np.where(den != 0, num / den, np.nan)
    out = pd.Series(out, index=num.index, dtype=float)
    return out.replace([np.inf, -np.inf], np.nan)


def change_pct(start, end):
    """(end - start) / start * 100; NaN si falta un valor o start == 0."""
    start = start if isinstance(start, pd.Series) else pd.Series(start, dtype=float)
    end = end if isinstance(end, pd.Series) else pd.Series(end, dtype=float, index=start.index)
    return safe_divide(end.astype(float) - start.astype(float), start) * 100.0


def add_derived_metrics(df: pd.DataFrame) -> pd.DataFrame:
    print("\nCalculando métricas derivadas...")
    out = df.copy()
    for name, (num_col, den_col, scale) in DERIVED_METRICS.items():
        faltan = [c for c in (num_col, den_col) if c not in out.columns]
        if faltan:
            print(f"   ⚠ '{name}': faltan {faltan}, queda vacía.")
        out[name] = safe_divide(numeric_column(out, num_col) * scale, numeric_column(out, den_col))
        print(f"   ➜ '{name}' ({out[name].notna().sum()} valores)")
    return out
