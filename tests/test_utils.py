import pytest

from hospital_api.exceptions import InvalidIdentifier
from hospital_api.utils import as_positive_id, clamp_page, parse_id


@pytest.mark.parametrize("raw,expected", [
    (5, 5), ("12", 12), (" 7 ", 7), (0, None), (-2, None),
    ("-2", None), ("1.5", None), ("abc", None), ("", None), (None, None), (True, None),
])
def test_as_positive_id(raw, expected):
    assert as_positive_id(raw) == expected


def test_parse_id_raises_for_bad_values():
    assert parse_id("3") == 3
    with pytest.raises(InvalidIdentifier):
        parse_id("x", "doctor")


def test_clamp_page():
    assert clamp_page(None, None) == (50, 0)
    assert clamp_page(500, 3) == (100, 3)
    assert clamp_page(-5, -5) == (1, 0)
