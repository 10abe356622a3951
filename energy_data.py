"""
Carga y limpieza del dataset de energía OWID (owid-energy-data.csv)

Qué hace:
    1. Lee el CSV país-año
    2. Valida llaves (country, year) -> sin llaves no hay análisis
    3. Deja solo estados soberanos: quita agregados (continentes, World,
       grupos de ingreso, bloques económicos, variantes por fuente)
    4. Reporta qué entidades se excluyeron y por qué regla
"""
from __future__ import annotations

from pathlib import Path

import pandas as pd

# ---------------------------------------------------------------------
# CONFIGURACIÓN
# ---------------------------------------------------------------------
KEY_COLS = ["country", "year"]

AGGREGATE_NAMES = [
    "Africa",
    "Asia",
    "Europe",
    "North America",
    "South America",
    "Oceania",
    "World",
]

# Subcadenas (sensibles a mayúsculas) que delatan agregados/bloques
AGGREGATE_KEYWORDS = [
    "G7",
    "G20",
    "OECD",
    "OPEC",
    "income",
    "region",
    "Union",
    "BP",
    "EIA",
    "Ember",
]

RULE_PARENTHESIS = "parentesis"
RULE_HYPHEN = "guion"
RULE_AGGREGATE = "agregado"
RULE_KEYWORD = "palabra_clave"
RULE_MISSING = "sin_nombre"


# ---------------------------------------------------------------------
# CARGA
# ---------------------------------------------------------------------
def load_energy_data(csv_path: Path) -> pd.DataFrame:
    """
    Lee el CSV y asegura tipos en las llaves.
    - Falla (ValueError) si faltan country o year
    - year numérico; filas sin year válido se descartan
    - iso_code se crea vacío si no existe
    """
    print("Cargando dataset de energía...")
    df = pd.read_csv(csv_path)
    faltan = [c for c in KEY_COLS if c not in df.columns]
    if faltan:
        raise ValueError(
            f"El dataset no tiene las columnas requeridas: {faltan}. "
            f"Columnas disponibles: {list(df.columns)[:20]} ..."
        )
    df["country"] = df["country"].astype("string").str.strip()
    df["year"] = pd.to_numeric(df["year"], errors="coerce")
    df = df.dropna(subset=["year"]).copy()
    df["year"] = df["year"].astype(int)
    if "iso_code" not in df.columns:
        df["iso_code"] = pd.NA
    print(f"   Shape: {df.shape}")
    print(f"   Años: {df['year'].min()}–{df['year'].max()}")
    return df.reset_index(drop=True)


# ---------------------------------------------------------------------
# FILTRO DE ESTADOS SOBERANOS
# ---------------------------------------------------------------------
def exclusion_rule(name) -> str | None:
    """Devuelve la primera regla que rechaza el nombre, o None si es país."""
    if not isinstance(name, str):
        return RULE_MISSING
    if "(" in name:
        return RULE_PARENTHESIS
    if "-" in name:
        return RULE_HYPHEN
    if name in AGGREGATE_NAMES:
        return RULE_AGGREGATE
    if any(k in name for k in AGGREGATE_KEYWORDS):
        return RULE_KEYWORD
    return None


def sovereign_mask(df: pd.DataFrame) -> pd.Series:
    if "country" not in df.columns:
        return pd.Series(False, index=df.index)
    names = df["country"].astype(object)
    # Evaluar una vez por nombre distinto
    rules = {n: exclusion_rule(n) for n in names.dropna().unique()}
    return names.map(lambda n: isinstance(n, str) and rules.get(n) is None).astype(bool)


def filter_sovereign(df: pd.DataFrame) -> pd.DataFrame:
    """
    Mantiene solo filas de países soberanos, en el orden original.
    Un resultado vacío es válido (ej. si cambia el formato del CSV).
    """
    print("\nFiltrando agregados (continentes, bloques, grupos de ingreso)...")
    mask = sovereign_mask(df)
    out = df.loc[mask].copy()
    before = len(df)
    after = len(out)
    print(f"   Filas antes:      {before}")
    print(f"   Filas después:    {after}")
    print(f"   Filas eliminadas: {before - after}")
    if after == 0:
        print("   ⚠ No quedó ninguna fila de país. Revisa la columna 'country'.")
    return out


def exclusion_report(df: pd.DataFrame) -> pd.DataFrame:
    """
    Una fila por entidad excluida: country, regla, filas eliminadas.
    """
    if "country" not in df.columns:
        return pd.DataFrame({"country": [], "rule": [], "n_rows": []})
    names = df["country"].astype(object)
    rep = pd.DataFrame({"country": names, "rule": names.map(exclusion_rule)})
    rep = rep.dropna(subset=["rule"])
    rep["country"] = rep["country"].fillna("<NA>")
    rep = (
        rep.groupby(["country", "rule"], sort=True)
           .size()
           .rename("n_rows")
           .reset_index()
    )
    return rep
