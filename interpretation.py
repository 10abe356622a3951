"""
Texto descriptivo de cada gráfica, calculado a partir de su tabla
"""
from __future__ import annotations

import pandas as pd

SIN_DATOS = "No hay datos suficientes para esta vista."


def describe_top(top: pd.DataFrame, metric: str, year: int) -> str:
    if top.empty:
        return SIN_DATOS
    first = top.iloc[0]
    last = top.iloc[-1]
    txt = f"En {year}, {first['country']} lidera {metric} con {first[metric]:,.1f}."
    if len(top) > 1 and last[metric] > 0:
        txt += (
            f" El puesto {len(top)} es {last['country']} ({last[metric]:,.1f}), "
            f"{first[metric] / last[metric]:.1f} veces menos que el primero."
        )
    return txt


def describe_scatter(d: pd.DataFrame, x: str, y: str, year: int) -> str:
    if len(d) < 2:
        return SIN_DATOS
    # Spearman = Pearson sobre rangos
    corr = d[x].rank().corr(d[y].rank())
    return (
        f"En {year} se comparan {len(d)} países. "
        f"La correlación de rangos (Spearman) entre {x} y {y} es {corr:.2f}: "
        + ("a mayor ingreso por persona, mayor consumo de energía por persona."
           if corr > 0 else "no se observa una relación positiva.")
    )


def describe_density(d: pd.DataFrame, metric: str, year: int) -> str:
    if d.empty:
        return SIN_DATOS
    med = d.groupby("continent")[metric].median().sort_values(ascending=False)
    partes = ", ".join(f"{c} {v:.1f}%" for c, v in med.items())
    return (
        f"Mediana de {metric} por continente en {year}: {partes}. "
        f"{med.index[0]} tiene la distribución más desplazada hacia las renovables."
    )


def describe_map(values: pd.DataFrame, metric: str, year: int) -> str:
    if values.empty:
        return SIN_DATOS
    d = values.sort_values("value", ascending=False, kind="mergesort")
    hi = d.iloc[0]
    lo = d.iloc[-1]
    return (
        f"{len(d)} países con {metric} en {year}. "
        f"Máximo: {hi['country']} ({hi['value']:,.0f}); "
        f"mínimo: {lo['country']} ({lo['value']:,.0f}); "
        f"mediana: {d['value'].median():,.0f}."
    )


def describe_delta(delta: pd.DataFrame, metric: str, window: int) -> str:
    if delta.empty:
        return SIN_DATOS
    valid = delta.dropna(subset=["change_pct"])
    if valid.empty:
        return SIN_DATOS
    top = valid.iloc[0]
    crecen = int((valid["change_pct"] > 0).sum())
    return (
        f"Cambio de {metric} en los últimos {window} años: "
        f"{top['country']} encabeza con {top['change_pct']:+.1f}% "
        f"({int(top['start_year'])}–{int(top['end_year'])}). "
        f"{crecen} de {len(valid)} países crecen."
    )


def describe_mix(means: pd.DataFrame, share_columns: list[str], year: int) -> str:
    if means.empty:
        return SIN_DATOS
    frases = []
    for _, row in means.iterrows():
        vals = row[share_columns].dropna()
        if vals.empty:
            continue
        frases.append(f"{row['continent']}: {vals.idxmax()} ({vals.max():.1f}%)")
    if not frases:
        return SIN_DATOS
    return f"Fuente renovable dominante por continente en {year}: " + "; ".join(frases) + "."
