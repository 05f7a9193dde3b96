import pytest

from ptudex.hatching import HATCH_RATE_TABLE, HatchRateMapper


@pytest.mark.parametrize(
    "hatch_counter, average_hatch_rate",
    [
        (120, 75),
        (100, 50),
        (80, 40),
        (50, 30),
        (40, 25),
        (35, 20),
        (30, 16),
        (15, 7),
        (10, 4),
        (5, 2),
    ],
)
def test_table_values(hatch_counter, average_hatch_rate):
    assert HatchRateMapper().map_hatch_counter(hatch_counter) == average_hatch_rate


@pytest.mark.parametrize("hatch_counter, expected", [(20, 10), (25, 13), (60, 30), (1, 1)])
def test_untabulated_counters_halve_and_round_half_up(hatch_counter, expected):
    assert hatch_counter not in HATCH_RATE_TABLE
    assert HatchRateMapper().map_hatch_counter(hatch_counter) == expected


def test_missing_counter():
    assert HatchRateMapper().map_hatch_counter(None) is None


def test_custom_table():
    mapper = HatchRateMapper(table={20: 9})
    assert mapper.map_hatch_counter(20) == 9
    assert mapper.map_hatch_counter(10) == 5


def test_format_rate():
    assert HatchRateMapper.format_rate(4) == "4 Days"
    assert HatchRateMapper.format_rate(None) is None
