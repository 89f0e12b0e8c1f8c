"""Shared fixtures: an isolated data directory and observation builders."""

import pytest

from transforms.big_mac.records import Observation


@pytest.fixture(autouse=True)
def data_dir(tmp_path, monkeypatch):
    """Point every test at its own DATA_DIR."""
    monkeypatch.setenv("DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("RUN_ID", "test-run")
    return tmp_path / "data"


@pytest.fixture
def make_obs():
    def _make(iso_a3, currency_code, local_price, gdp=None, date="2020-01-14", dollar_ex=1.0, name=None):
        return Observation(
            date=date,
            iso_a3=iso_a3,
            currency_code=currency_code,
            name=name or iso_a3,
            local_price=local_price,
            dollar_ex=dollar_ex,
            GDP_dollar=gdp,
        )
    return _make


SOURCE_CSV = """name,iso_a3,currency_code,local_price,dollar_ex,GDP_dollar,date
United States,USA,USD,5.67,1,65118,2020-01-14
Euro area,EUZ,EUR,4.21,0.9,38605,2020-01-14
Britain,GBR,GBP,3.39,0.77,42300,2020-01-14
Japan,JPN,JPY,390,109.9,40247,2020-01-14
China,CHN,CNY,21.5,6.89,10262,2020-01-14
Mexico,MEX,MXN,50,18.8,9863,2020-01-14
Hong Kong,HKG,HKD,20.5,7.77,48756,2020-01-14
Germany,DEU,EUR,4.13,0.9,46258,2020-01-14
Argentina,ARG,ARS,#N/A,60.0,10006,2020-01-14
United States,USA,USD,5.71,1,,2020-07-15
Euro area,EUZ,EUR,4.25,0.87,#N/A,2020-07-15
Britain,GBR,GBP,3.39,0.79,#N/A,2020-07-15
Japan,JPN,JPY,390,107.1,,2020-07-15
China,CHN,CNY,21.7,7.0,,2020-07-15
"""


@pytest.fixture
def source_file(tmp_path):
    path = tmp_path / "big-mac-source-data.csv"
    path.write_text(SOURCE_CSV, encoding="utf-8")
    return path
