from __future__ import annotations

from pathlib import Path

import pytest

STATES_CSV = """date,state,fips,cases,deaths
2020-03-01,California,06,10,0
2020-03-02,California,06,15,1
2020-12-31,California,06,100,5
2021-06-30,California,06,300,20
2020-03-01,Texas,48,4,0
2020-12-31,Texas,48,50,2
2021-06-30,Texas,48,"n/a",3
not-a-date,Texas,48,1,1
"""

NATIONAL_CSV = """date,cases,deaths
2020-03-01,14,0
2020-12-31,150,7
2021-06-30,350,23
"""


@pytest.fixture()
def states_csv(tmp_path: Path) -> Path:
    p = tmp_path / "us-states.csv"
    p.write_text(STATES_CSV)
    return p


@pytest.fixture()
def national_csv(tmp_path: Path) -> Path:
    p = tmp_path / "us.csv"
    p.write_text(NATIONAL_CSV)
    return p
