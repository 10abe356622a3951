"""
Informe de energía global (OWID 1965–2022): limpieza + 6 gráficas

Dataset esperado:
  - owid-energy-data.csv

Qué hace:
  1) Carga el dataset
  2) Deja solo países soberanos (sin continentes, World, bloques, grupos de ingreso)
  3) Asigna continente
  4) Calcula métricas derivadas (gdp_per_capita, demanda eléctrica per cápita, ...)
  5) Construye una tabla por vista y la exporta a CSV
  6) Genera las gráficas (PNG) y el texto interpretativo (interpretacion.md)
  7) Reportes de calidad: entidades excluidas y países sin continente

Ejecutar:
  python informe_energia.py --csv Data/owid-energy-data.csv
  python informe_energia.py --csv Data/owid-energy-data.csv --year 2021 --top_n 15 --window 10 \
      --shapefile Data/ne_110m_admin_0_countries.shp --iso_col ISO_A3_EH
"""

from __future__ import annotations

import argparse
from pathlib import Path

import geopandas as gpd
import pandas as pd

import charts
import interpretation
from continents import UNKNOWN, add_continent, unclassified_countries
from derived_metrics import add_derived_metrics
from energy_data import exclusion_report, filter_sovereign, load_energy_data
from views import (
    SHARE_LABELS,
    choropleth_table,
    continent_means,
    long_shares,
    top_n,
    windowed_delta,
    with_metrics,
)


# -----------------------------
# Defaults
# -----------------------------
DEFAULT_YEAR = 2022
DEFAULT_TOP_N = 15
DEFAULT_WINDOW = 10
DEFAULT_ISO_COL = "ISO_A3"

# OWID usa códigos propios para algunos territorios (ej. OWID_KOS)
DEFAULT_ISO_OVERRIDES = {
    "Kosovo": "XKX",
}

SHARE_COLS = list(SHARE_LABELS)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser()
    p.add_argument("--csv", required=True, help="Ruta a owid-energy-data.csv")
    p.add_argument("--year", type=int, default=DEFAULT_YEAR, help="Año de análisis")
    p.add_argument("--top_n", type=int, default=DEFAULT_TOP_N)
    p.add_argument("--window", type=int, default=DEFAULT_WINDOW, help="Ventana (años) para el % de cambio")
    p.add_argument("--outdir", default="outputs")
    p.add_argument("--shapefile", default=None, help="Fronteras de países (cualquier formato de geopandas)")
    p.add_argument("--iso_col", default=DEFAULT_ISO_COL, help="Columna ISO-3 en el shapefile")
    p.add_argument("--iso_overrides", default=None, help="CSV country,iso_code que corrige códigos del mapa")
    return p.parse_args(argv)


def load_iso_overrides(csv_path: Path | None) -> dict[str, str]:
    overrides = dict(DEFAULT_ISO_OVERRIDES)
    if csv_path is None:
        return overrides
    d = pd.read_csv(csv_path, dtype=str)
    faltan = {"country", "iso_code"} - set(d.columns)
    if faltan:
        raise ValueError(f"El CSV de overrides ISO no tiene las columnas: {faltan}")
    d = d.dropna(subset=["country", "iso_code"])
    overrides.update(zip(d["country"].str.strip(), d["iso_code"].str.strip()))
    return overrides


def prepare_dataset(raw: pd.DataFrame) -> pd.DataFrame:
    """Filtro de países -> continente -> métricas derivadas."""
    df = filter_sovereign(raw)
    df = add_continent(df)
    df = add_derived_metrics(df)
    return df


# ---------------------------------------------------------------------
# VISTAS (tabla + texto)
# ---------------------------------------------------------------------
def build_views(
    df: pd.DataFrame,
    year: int,
    n: int,
    window: int,
    iso_overrides: dict[str, str],
) -> dict[str, tuple[pd.DataFrame, str]]:
    views: dict[str, tuple[pd.DataFrame, str]] = {}

    top = top_n(df, "energy_per_capita", year, n)
    views["top_energy_per_capita"] = (top, interpretation.describe_top(top, "energy_per_capita", year))

    sc_cols = ["gdp_per_capita", "energy_per_capita"]
    anio = df[(df["year"] == year) & (df["continent"] != UNKNOWN)]

    sc = with_metrics(anio, sc_cols).dropna(subset=sc_cols)
    sc = sc.loc[:, ["country", "iso_code", "continent"] + sc_cols].reset_index(drop=True)
    views["gdp_vs_energy"] = (sc, interpretation.describe_scatter(sc, *sc_cols, year))

    dens_metric = "renewables_share_elec"
    dens = with_metrics(anio, [dens_metric]).dropna(subset=[dens_metric])
    dens = dens.loc[:, ["country", "continent", dens_metric]].reset_index(drop=True)
    views["renewables_density"] = (dens, interpretation.describe_density(dens, dens_metric, year))

    mapa = choropleth_table(df, "carbon_intensity_elec", year, iso_overrides)
    views["carbon_intensity_map"] = (mapa, interpretation.describe_map(mapa, "carbon_intensity_elec", year))

    delta = windowed_delta(df, "electricity_demand", window, end_year=year)
    delta = (
        delta.dropna(subset=["change_pct"])
             .sort_values("change_pct", ascending=False, kind="mergesort")
             .head(n)
             .reset_index(drop=True)
    )
    views["electricity_demand_change"] = (delta, interpretation.describe_delta(delta, "electricity_demand", window))

    means = continent_means(df, SHARE_COLS, year)
    mix = long_shares(means, SHARE_COLS, ["continent"])
    views["renewable_mix_by_continent"] = (mix, interpretation.describe_mix(means.rename(columns=SHARE_LABELS), list(SHARE_LABELS.values()), year))

    return views


def render_view(
    name: str,
    table: pd.DataFrame,
    outdir: Path,
    year: int,
    window: int,
    world: gpd.GeoDataFrame | None,
    iso_col: str,
) -> Path | None:
    out_png = outdir / f"{name}.png"
    if table.empty:
        print(f"   ⚠ {name}: tabla vacía, se omite la gráfica.")
        return None
    if name == "top_energy_per_capita":
        charts.plot_top_bar(table, "energy_per_capita", f"Energía per cápita (kWh) - top {len(table)} ({year})", out_png)
    elif name == "gdp_vs_energy":
        charts.plot_scatter_by_continent(table, "gdp_per_capita", "energy_per_capita", f"PIB per cápita vs energía per cápita ({year})", out_png)
    elif name == "renewables_density":
        charts.plot_density_by_continent(table, "renewables_share_elec", f"Participación renovable en electricidad ({year})", out_png)
    elif name == "carbon_intensity_map":
        if world is None:
            print("   ⚠ carbon_intensity_map: sin --shapefile, se omite el mapa (CSV exportado).")
            return None
        sin_geo = charts.plot_choropleth(table, world, iso_col, f"Intensidad de carbono de la electricidad (gCO2/kWh, {year})", out_png)
        if not sin_geo.empty:
            print(f"   ⚠ {len(sin_geo)} países sin geometría: {sin_geo['country'].tolist()[:10]} ...")
    elif name == "electricity_demand_change":
        charts.plot_lollipop(table, f"Cambio en la demanda eléctrica ({year - window}–{year})", out_png)
    elif name == "renewable_mix_by_continent":
        charts.plot_grouped_bar(table, f"Mix renovable medio por continente ({year})", out_png)
    else:
        raise ValueError(f"Vista desconocida: {name}")
    print(f"   ➜ {out_png.name}")
    return out_png


def export_quality_reports(raw: pd.DataFrame, df: pd.DataFrame, outdir: Path):
    print("\nReportes de calidad...")
    excl = exclusion_report(raw)
    excl.to_csv(outdir / "qa_excluded_entities.csv", index=False, encoding="utf-8")
    print(f"   Entidades excluidas: {len(excl)} ({int(excl['n_rows'].sum())} filas)")
    print(f"   ➜ qa_excluded_entities.csv")
    unk = unclassified_countries(df)
    unk.to_csv(outdir / "qa_unclassified_countries.csv", index=False, encoding="utf-8")
    print(f"   Países sin continente (Unknown): {len(unk)} ({int(unk['n_rows'].sum())} filas)")
    if not unk.empty:
        print(f"   ⚠ {unk['country'].tolist()[:15]}")
    print(f"   ➜ qa_unclassified_countries.csv")


def write_interpretation(views: dict[str, tuple[pd.DataFrame, str]], out_md: Path):
    lines = ["# Interpretación de las gráficas", ""]
    for name, (_, text) in views.items():
        lines += [f"## {name}", "", text, ""]
    out_md.write_text("\n".join(lines), encoding="utf-8")


def main(argv: list[str] | None = None):
    args = parse_args(argv)
    outdir = Path(args.outdir)
    outdir.mkdir(parents=True, exist_ok=True)

    raw = load_energy_data(Path(args.csv))
    df = prepare_dataset(raw)
    export_quality_reports(raw, df, outdir)

    overrides = load_iso_overrides(Path(args.iso_overrides) if args.iso_overrides else None)
    world = gpd.read_file(args.shapefile) if args.shapefile else None
    if world is not None and args.iso_col not in world.columns:
        raise ValueError(f"El shapefile no tiene la columna '{args.iso_col}'. Columnas: {list(world.columns)}")

    print("\nConstruyendo vistas...")
    views = build_views(df, args.year, args.top_n, args.window, overrides)

    print("\nGráficas...")
    for name, (table, _) in views.items():
        table.to_csv(outdir / f"{name}.csv", index=False, encoding="utf-8")
        render_view(name, table, outdir, args.year, args.window, world, args.iso_col)

    out_md = outdir / "interpretacion.md"
    write_interpretation(views, out_md)

    print("\n===============================")
    print(" INTERPRETACIÓN")
    print("===============================")
    for name, (_, text) in views.items():
        print(f"\n[{name}]\n{text}")

    print("\nSalidas generadas en:", outdir.resolve())


if __name__ == "__main__":
    main()
