import pytest
from datetime import date, datetime

from backend.validation import date_only


@pytest.mark.parametrize("value, expected", [
    ("1990-05-17T00:00:00.000Z", date(1990, 5, 17)),
    ("1990-05-17T10:30:00+02:00", date(1990, 5, 17)),
    (datetime(1990, 5, 17, 8, 0), date(1990, 5, 17)),
    ("1990-05-17", "1990-05-17"),
])
def test_date_only_keeps_date_part(value, expected):
    assert date_only(value) == expected


def test_date_only_leaves_unparseable_timestamps_alone():
    assert date_only("1990-05-17Tnonsense") == "1990-05-17Tnonsense"
