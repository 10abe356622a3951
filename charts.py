"""
Gráficas estáticas (PNG) a partir de las tablas de views.py
"""
from __future__ import annotations

from pathlib import Path

import geopandas as gpd
import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns

from continents import CONTINENT_ORDER

DPI = 200

CONTINENT_PALETTE = dict(zip(CONTINENT_ORDER, sns.color_palette("Set2", len(CONTINENT_ORDER))))


def plot_top_bar(top: pd.DataFrame, metric: str, title: str, out_png: Path):
    plt.figure(figsize=(10, 6))
    # Barras horizontales: el mayor arriba
    d = top.iloc[::-1]
    plt.barh(d["country"], d[metric], color="#2979ff")
    plt.xlabel(metric)
    plt.title(title)
    plt.tight_layout()
    plt.savefig(out_png, dpi=DPI)
    plt.close()


def plot_scatter_by_continent(d: pd.DataFrame, x: str, y: str, title: str, out_png: Path):
    plt.figure(figsize=(10, 6))
    for continent in CONTINENT_ORDER:
        sub = d[d["continent"] == continent]
        if sub.empty:
            continue
        plt.scatter(sub[x], sub[y], alpha=0.75, label=continent, color=CONTINENT_PALETTE[continent])
    plt.xscale("log")
    plt.xlabel(x)
    plt.ylabel(y)
    plt.title(title)
    plt.legend()
    plt.tight_layout()
    plt.savefig(out_png, dpi=DPI)
    plt.close()


def plot_density_by_continent(d: pd.DataFrame, metric: str, title: str, out_png: Path):
    fig, ax = plt.subplots(figsize=(10, 6))
    hue_order = [c for c in CONTINENT_ORDER if c in set(d["continent"])]
    sns.kdeplot(
        data=d,
        x=metric,
        hue="continent",
        hue_order=hue_order,
        palette=CONTINENT_PALETTE,
        common_norm=False,
        fill=True,
        alpha=0.3,
        warn_singular=False,
        ax=ax,
    )
    ax.set_xlim(0, 100)
    ax.set_xlabel(metric)
    ax.set_title(title)
    fig.tight_layout()
    fig.savefig(out_png, dpi=DPI)
    plt.close(fig)


def plot_choropleth(
    values: pd.DataFrame,
    world: gpd.GeoDataFrame,
    iso_col: str,
    title: str,
    out_png: Path,
) -> pd.DataFrame:
    """
    Une values (iso_code, value) con la geometría por iso_col.
    Devuelve las filas de values sin geometría.
    """
    merged = world.merge(values, left_on=iso_col, right_on="iso_code", how="left")
    sin_geo = values[~values["iso_code"].isin(world[iso_col])]

    fig, ax = plt.subplots(figsize=(14, 7))
    merged.plot(
        column="value",
        ax=ax,
        cmap="YlOrRd",
        legend=True,
        missing_kwds={"color": "lightgrey", "label": "Sin datos"},
    )
    ax.set_axis_off()
    ax.set_title(title)
    fig.tight_layout()
    fig.savefig(out_png, dpi=DPI)
    plt.close(fig)
    return sin_geo.reset_index(drop=True)


def plot_lollipop(delta: pd.DataFrame, title: str, out_png: Path):
    plt.figure(figsize=(10, 6))
    d = delta.iloc[::-1]
    pos = list(range(len(d)))
    plt.hlines(y=pos, xmin=0, xmax=d["change_pct"], color="grey", alpha=0.6)
    plt.plot(d["change_pct"], pos, "o", color="#26a69a")
    plt.yticks(pos, d["country"])
    plt.axvline(0, color="black", linewidth=0.8)
    plt.xlabel("% de cambio")
    plt.title(title)
    plt.tight_layout()
    plt.savefig(out_png, dpi=DPI)
    plt.close()


def plot_grouped_bar(long: pd.DataFrame, title: str, out_png: Path):
    pivot = long.pivot_table(index="continent", columns="source", values="value", aggfunc="mean", sort=False)
    pivot = pivot.reindex([c for c in CONTINENT_ORDER if c in pivot.index])
    fig, ax = plt.subplots(figsize=(11, 6))
    pivot.plot(kind="bar", ax=ax, width=0.8)
    ax.set_xlabel("")
    ax.set_ylabel("% de la electricidad")
    ax.set_title(title)
    ax.legend(title="Fuente")
    plt.setp(ax.get_xticklabels(), rotation=0)
    fig.tight_layout()
    fig.savefig(out_png, dpi=DPI)
    plt.close(fig)
