from types import MappingProxyType

import pytest

from popmap.join_index import build_index
from popmap.models import Dataset, PopulationRow
from popmap.schema import build_population_rows, discover_regions, discover_years


COORDINATE_ROWS = [
    {"name": "China", "latitude": "35.86", "longitude": "104.19"},
    {"name": "India", "latitude": "20.59", "longitude": "78.96"},
    {"name": "France", "latitude": "46.22", "longitude": "2.21"},
    {"name": "Atlantis", "latitude": "n/a", "longitude": "-30.0"},
]

POPULATION_RECORDS = [
    {
        "Country/Territory": "China",
        "Continent": "Asia",
        "2022 Population": "1425887337",
        "2020 Population": "1424929781",
        "Area (km²)": "9706961",
    },
    {
        "Country/Territory": "India",
        "Continent": "Asia",
        "2022 Population": "1417173173",
        "2020 Population": "1396387127",
        "Area (km²)": "3287590",
    },
    {
        "Country/Territory": "France",
        "Continent": "Europe",
        "2022 Population": "64626628",
        "2020 Population": "",
        "Area (km²)": "551695",
    },
    {
        "Country/Territory": "Atlantis",
        "Continent": "Europe",
        "2022 Population": "1000",
        "2020 Population": "900",
        "Area (km²)": "1",
    },
    {
        "Country/Territory": "Kosovo",
        "Continent": "Europe",
        "2022 Population": "1659714",
        "2020 Population": "1670983",
        "Area (km²)": "10887",
    },
]


def make_row(country, continent, **values):
    """Build a PopulationRow from ``y2020=...`` style keyword arguments."""
    year_values = {key.lstrip("y"): value for key, value in values.items()}
    return PopulationRow(
        country=country,
        continent=continent,
        year_values=MappingProxyType(year_values),
    )


@pytest.fixture
def index():
    return build_index(COORDINATE_ROWS)


@pytest.fixture
def dataset(index):
    years = discover_years(POPULATION_RECORDS)
    return Dataset(
        rows=tuple(build_population_rows(POPULATION_RECORDS, years)),
        index=index,
        years=tuple(years),
        regions=tuple(discover_regions(POPULATION_RECORDS)),
    )


@pytest.fixture
def scenario_row():
    # "2022 Population" is present but empty
    return make_row("France", "Europe", y2020=1000, y2022=None, y2021=2000)


@pytest.fixture
def coordinates_csv(tmp_path):
    path = tmp_path / "coordinates.csv"
    path.write_text(
        "country,latitude,longitude,name\n"
        "CN,35.86,104.19,China\n"
        "FR,46.22,2.21,France\n"
        "XX,abc,1.0,Nowhere\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def population_csv(tmp_path):
    path = tmp_path / "world_population.csv"
    path.write_text(
        "Rank,Country/Territory,Continent,2022 Population,2020 Population,Growth Rate\n"
        "1,China,Asia,1425887337,1424929781,1.0\n"
        "2,France,Europe,64626628,,1.0015\n"
        "3,Nowhere,Oceania,10,abc,1.0\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def row_factory():
    return make_row


@pytest.fixture
def population_records():
    return POPULATION_RECORDS
