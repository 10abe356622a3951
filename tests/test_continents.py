import numpy as np
import pandas as pd
import pytest

from continents import (
    CONTINENT_LISTS,
    CONTINENT_ORDER,
    COUNTRY_TO_CONTINENT,
    UNKNOWN,
    add_continent,
    build_lookup,
    classify_continent,
    unclassified_countries,
)

LABELS = set(CONTINENT_ORDER) | {UNKNOWN}


@pytest.mark.parametrize("country,continent", [
    ("Spain", "Europe"),
    ("Thailand", "Asia"),
    ("Kenya", "Africa"),
    ("Mexico", "North America"),
    ("Brazil", "South America"),
    ("Australia", "Oceania"),
    ("Bosnia and Herzegovina", "Europe"),
])
def test_known_countries(country, continent):
    assert classify_continent(country) == continent


@pytest.mark.parametrize("value", ["Atlantis", "", "spain", None, np.nan, 42, pd.NA])
def test_classifier_is_total(value):
    assert classify_continent(value) == UNKNOWN


def test_lists_are_disjoint():
    seen = {}
    for continent, countries in CONTINENT_LISTS.items():
        for c in countries:
            assert c not in seen, f"{c} en {seen.get(c)} y {continent}"
            seen[c] = continent


def test_every_listed_country_resolves_to_its_list():
    for continent, countries in CONTINENT_LISTS.items():
        for c in countries:
            assert classify_continent(c) == continent
    assert set(COUNTRY_TO_CONTINENT.values()) <= LABELS


def test_overlap_resolved_by_fixed_order():
    lookup = build_lookup({"Oceania": ["Nowhere"], "Asia": ["Nowhere"], "Europe": ["Elsewhere"]})
    assert lookup == {"Elsewhere": "Europe", "Nowhere": "Asia"}


def test_add_continent_returns_copy():
    df = pd.DataFrame({"country": ["Chile", "USSR"], "year": [2000, 1980]})
    out = add_continent(df)
    assert out["continent"].tolist() == ["South America", UNKNOWN]
    assert "continent" not in df.columns


def test_unclassified_countries_report():
    df = pd.DataFrame({"country": ["USSR", "Chile", "USSR", "Yugoslavia"]})
    rep = unclassified_countries(df)
    assert rep["country"].tolist() == ["USSR", "Yugoslavia"]
    assert rep["n_rows"].tolist() == [2, 1]


def test_fixture_countries_are_all_classified(raw_energy):
    from energy_data import filter_sovereign

    rep = unclassified_countries(filter_sovereign(raw_energy))
    assert rep.empty
