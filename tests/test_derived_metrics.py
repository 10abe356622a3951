import numpy as np
import pandas as pd

from derived_metrics import add_derived_metrics, change_pct, numeric_column, safe_divide


def test_safe_divide_absent_and_zero():
    num = pd.Series([10.0, np.nan, 5.0, 0.0, 8.0])
    den = pd.Series([2.0, 4.0, 0.0, 0.0, np.nan])
    out = safe_divide(num, den)
    assert out.iloc[0] == 5.0
    assert out.iloc[1:].isna().all()
    assert not np.isinf(out).any()


def test_safe_divide_keeps_index():
    num = pd.Series([1.0, 2.0], index=[7, 9])
    den = pd.Series([1.0, 4.0], index=[7, 9])
    assert safe_divide(num, den).index.tolist() == [7, 9]


def test_change_pct():
    out = change_pct(pd.Series([100.0, 0.0, np.nan, 50.0]), pd.Series([150.0, 10.0, 3.0, 25.0]))
    assert out.iloc[0] == 50.0
    assert np.isnan(out.iloc[1])
    assert np.isnan(out.iloc[2])
    assert out.iloc[3] == -50.0


def test_gdp_per_capita_scenario():
    df = pd.DataFrame({
        "country": ["A", "B", "C"],
        "year": [2018, 2018, 2018],
        "gdp": [1000.0, 2000.0, 500.0],
        "population": [100.0, np.nan, 0.0],
    })
    out = add_derived_metrics(df)
    assert out.loc[0, "gdp_per_capita"] == 10.0
    assert np.isnan(out.loc[1, "gdp_per_capita"])
    assert np.isnan(out.loc[2, "gdp_per_capita"])
    assert "gdp_per_capita" not in df.columns


def test_missing_columns_give_absent_metrics():
    df = pd.DataFrame({"country": ["A"], "year": [2020], "population": [10.0]})
    out = add_derived_metrics(df)
    assert out[["gdp_per_capita", "electricity_demand_per_capita", "generation_demand_ratio"]].isna().all().all()


def test_demand_per_capita_in_kwh():
    df = pd.DataFrame({"electricity_demand": [2.0], "population": [1e6], "electricity_generation": [3.0]})
    out = add_derived_metrics(df)
    assert out.loc[0, "electricity_demand_per_capita"] == 2000.0
    assert out.loc[0, "generation_demand_ratio"] == 1.5


def test_numeric_column_coerces_text():
    df = pd.DataFrame({"x": ["1.5", "abc", None]})
    s = numeric_column(df, "x")
    assert s.iloc[0] == 1.5
    assert s.iloc[1:].isna().all()
