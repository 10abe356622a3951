"""
Clasificación país -> continente (nombres de país tal como vienen en OWID)

Las listas se mantienen a mano y no son exhaustivas: lo que no aparece
resuelve a "Unknown" y se reporta con unclassified_countries().
"""
from __future__ import annotations

import pandas as pd

UNKNOWN = "Unknown"

# Orden fijo: si un nombre aparece en dos listas gana la primera
CONTINENT_ORDER = [
    "Europe",
    "Asia",
    "Africa",
    "North America",
    "South America",
    "Oceania",
]

# -----------------------------
# Listas de países por continente
# -----------------------------
europe = [
    "Albania", "Andorra", "Austria", "Belarus", "Belgium",
    "Bosnia and Herzegovina", "Bulgaria", "Croatia", "Cyprus", "Czechia",
    "Denmark", "Estonia", "Faroe Islands", "Finland", "France", "Germany",
    "Gibraltar", "Greece", "Hungary", "Iceland", "Ireland", "Italy", "Kosovo",
    "Latvia", "Liechtenstein", "Lithuania", "Luxembourg", "Malta", "Moldova",
    "Monaco", "Montenegro", "Netherlands", "North Macedonia", "Norway",
    "Poland", "Portugal", "Romania", "Russia", "San Marino", "Serbia",
    "Slovakia", "Slovenia", "Spain", "Sweden", "Switzerland", "Ukraine",
    "United Kingdom",
]

asia = [
    "Afghanistan", "Armenia", "Azerbaijan", "Bahrain", "Bangladesh", "Bhutan",
    "Brunei", "Cambodia", "China", "Georgia", "Hong Kong", "India",
    "Indonesia", "Iran", "Iraq", "Israel", "Japan", "Jordan", "Kazakhstan",
    "Kuwait", "Kyrgyzstan", "Laos", "Lebanon", "Macao", "Malaysia",
    "Maldives", "Mongolia", "Myanmar", "Nepal", "North Korea", "Oman",
    "Pakistan", "Palestine", "Philippines", "Qatar", "Saudi Arabia",
    "Singapore", "South Korea", "Sri Lanka", "Syria", "Taiwan", "Tajikistan",
    "Thailand", "East Timor", "Turkey", "Turkmenistan",
    "United Arab Emirates", "Uzbekistan", "Vietnam", "Yemen",
]

africa = [
    "Algeria", "Angola", "Benin", "Botswana", "Burkina Faso", "Burundi",
    "Cameroon", "Cape Verde", "Central African Republic", "Chad", "Comoros",
    "Congo", "Cote d'Ivoire", "Democratic Republic of Congo", "Djibouti",
    "Egypt", "Equatorial Guinea", "Eritrea", "Eswatini", "Ethiopia", "Gabon",
    "Gambia", "Ghana", "Guinea", "Kenya", "Lesotho", "Liberia", "Libya",
    "Madagascar", "Malawi", "Mali", "Mauritania", "Mauritius", "Morocco",
    "Mozambique", "Namibia", "Niger", "Nigeria", "Reunion", "Rwanda",
    "Saint Helena", "Sao Tome and Principe", "Senegal", "Seychelles",
    "Sierra Leone", "Somalia", "South Africa", "South Sudan", "Sudan",
    "Tanzania", "Togo", "Tunisia", "Uganda", "Western Sahara", "Zambia",
    "Zimbabwe",
]

north_america = [
    "Antigua and Barbuda", "Aruba", "Bahamas", "Barbados", "Belize",
    "Bermuda", "British Virgin Islands", "Canada", "Cayman Islands",
    "Costa Rica", "Cuba", "Dominica", "Dominican Republic", "El Salvador",
    "Greenland", "Grenada", "Guadeloupe", "Guatemala", "Haiti", "Honduras",
    "Jamaica", "Martinique", "Mexico", "Montserrat", "Nicaragua", "Panama",
    "Puerto Rico", "Saint Kitts and Nevis", "Saint Lucia",
    "Saint Pierre and Miquelon", "Saint Vincent and the Grenadines",
    "Trinidad and Tobago", "Turks and Caicos Islands", "United States",
    "United States Virgin Islands",
]

south_america = [
    "Argentina", "Bolivia", "Brazil", "Chile", "Colombia", "Ecuador",
    "Falkland Islands", "French Guiana", "Guyana", "Paraguay", "Peru",
    "Suriname", "Uruguay", "Venezuela",
]

oceania = [
    "American Samoa", "Australia", "Cook Islands", "Fiji", "French Polynesia",
    "Guam", "Kiribati", "Nauru", "New Caledonia", "New Zealand", "Niue",
    "Palau", "Papua New Guinea", "Samoa", "Solomon Islands", "Tonga",
    "Tuvalu", "Vanuatu",
]

CONTINENT_LISTS = {
    "Europe": europe,
    "Asia": asia,
    "Africa": africa,
    "North America": north_america,
    "South America": south_america,
    "Oceania": oceania,
}


def build_lookup(lists: dict[str, list[str]]) -> dict[str, str]:
    """Aplana las listas en un solo dict país -> continente (gana la primera)."""
    lookup: dict[str, str] = {}
    for continent in CONTINENT_ORDER:
        for country in lists.get(continent, []):
            lookup.setdefault(country, continent)
    return lookup


COUNTRY_TO_CONTINENT = build_lookup(CONTINENT_LISTS)


def classify_continent(country) -> str:
    if not isinstance(country, str):
        return UNKNOWN
    return COUNTRY_TO_CONTINENT.get(country, UNKNOWN)


def add_continent(df: pd.DataFrame) -> pd.DataFrame:
    out = df.copy()
    out["continent"] = out["country"].astype(object).map(classify_continent)
    return out


def unclassified_countries(df: pd.DataFrame) -> pd.DataFrame:
    """
    Países que resuelven a Unknown y cuántas filas tienen.
    Sirve para detectar países nuevos en el dataset que faltan en las listas.
    """
    names = df["country"].astype(object)
    unknown = names[names.map(classify_continent) == UNKNOWN]
    rep = (
        unknown.fillna("<NA>")
               .value_counts()
               .rename_axis("country")
               .rename("n_rows")
               .reset_index()
               .sort_values("country", kind="mergesort")
               .reset_index(drop=True)
    )
    return rep
