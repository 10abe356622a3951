import matplotlib

matplotlib.use("Agg")

import numpy as np
import pandas as pd
import pytest


@pytest.fixture
def raw_energy() -> pd.DataFrame:
    """Mini dataset tipo OWID: países + agregados, 2012–2022."""
    rows = []
    paises = [
        # country, iso, gdp, population, energy_per_capita, electricity_demand
        ("Norway", "NOR", 3.5e11, 5.4e6, 100000.0, 130.0),
        ("Spain", "ESP", 1.8e12, 4.7e7, 30000.0, 250.0),
        ("Kenya", "KEN", 2.0e11, 5.3e7, 1500.0, 11.0),
        ("Brazil", "BRA", 3.0e12, 2.1e8, 16000.0, 600.0),
        ("Australia", "AUS", 1.3e12, 2.6e7, 65000.0, 260.0),
        ("Japan", "JPN", 5.0e12, 1.25e8, 40000.0, 950.0),
        ("United States", "USA", 2.0e13, 3.3e8, 75000.0, 4200.0),
        ("Kosovo", "OWID_KOS", 8.0e9, 1.8e6, 14000.0, 6.0),
    ]
    agregados = [
        ("World", "OWID_WRL"),
        ("Europe", None),
        ("European Union (27)", None),
        ("High-income countries", None),
        ("OECD (EI)", None),
        ("Non-OECD (EI)", None),
        ("G20 (Ember)", None),
    ]
    for year in range(2012, 2023):
        k = year - 2012
        for i, (country, iso, gdp, pop, epc, dem) in enumerate(paises):
            rows.append({
                "country": country,
                "iso_code": iso,
                "year": year,
                "gdp": gdp if year <= 2018 else np.nan,
                "population": pop,
                "energy_per_capita": epc,
                "electricity_demand": dem * (1 + 0.02 * k),
                "electricity_generation": dem * (1 + 0.02 * k) * 1.05,
                "renewables_share_elec": 20.0 + k + 7.0 * i,
                "carbon_intensity_elec": 300.0 - k,
                "solar_share_elec": 2.0 + k * 0.5,
                "wind_share_elec": 5.0,
                "hydro_share_elec": 10.0,
                "other_renewables_share_elec": np.nan,
            })
        for country, iso in agregados:
            rows.append({
                "country": country,
                "iso_code": iso,
                "year": year,
                "population": 1e9,
                "energy_per_capita": 1e9,
            })
    return pd.DataFrame(rows)


@pytest.fixture
def energy_csv(tmp_path, raw_energy):
    path = tmp_path / "owid-energy-data.csv"
    raw_energy.to_csv(path, index=False)
    return path
