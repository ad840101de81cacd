from datetime import datetime, timedelta, timezone

import pytest

from protohub.utils.dates import add_months, advance, as_utc, nights_between


def test_as_utc_treats_naive_as_utc():
    naive = datetime(2030, 1, 5, 12, 0)
    assert as_utc(naive) == datetime(2030, 1, 5, 12, 0, tzinfo=timezone.utc)

    plus_three = datetime(2030, 1, 5, 15, 0, tzinfo=timezone(timedelta(hours=3)))
    assert as_utc(plus_three) == datetime(2030, 1, 5, 12, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "start, expected",
    [
        (datetime(2030, 1, 31), datetime(2030, 2, 28)),
        (datetime(2032, 1, 31), datetime(2032, 2, 29)),
        (datetime(2030, 12, 15), datetime(2031, 1, 15)),
    ],
)
def test_add_months_clamps_to_month_end(start, expected):
    assert add_months(start, 1) == expected


def test_advance_patterns():
    start = datetime(2030, 1, 31, 9, 0)
    assert advance(start, "daily") == datetime(2030, 2, 1, 9, 0)
    assert advance(start, "weekly") == datetime(2030, 2, 7, 9, 0)
    assert advance(start, "monthly") == datetime(2030, 2, 28, 9, 0)
    with pytest.raises(ValueError):
        advance(start, "yearly")


def test_nights_between_counts_calendar_days():
    check_in = datetime(2030, 1, 5, 14, 0, tzinfo=timezone.utc)
    check_out = datetime(2030, 1, 8, 10, 0, tzinfo=timezone.utc)
    assert nights_between(check_in, check_out) == 3
