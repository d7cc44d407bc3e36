"""
Unit tests for the US/Eastern timestamp helpers.
"""

from datetime import datetime

import pytest
import pytz

from tradesim.core.timezone import EASTERN_TZ, parse_datetime_eastern, to_eastern


class TestParseDatetimeEastern:
    def test_naive_value_is_taken_as_eastern(self):
        """
        GIVEN a timestamp string without an offset
        WHEN parsed
        THEN it keeps its wall-clock time in US/Eastern
        """
        result = parse_datetime_eastern("2024-06-03 09:30")

        assert result == EASTERN_TZ.localize(datetime(2024, 6, 3, 9, 30))
        assert result.tzinfo.zone == "US/Eastern"

    def test_offset_value_is_converted(self):
        """
        GIVEN a UTC timestamp during daylight saving time
        WHEN parsed
        THEN it is converted to the Eastern wall clock (UTC-4)
        """
        result = parse_datetime_eastern("2024-06-03T13:30:00Z")

        assert (result.hour, result.minute) == (9, 30)

    def test_date_only(self):
        result = parse_datetime_eastern("2024-01-15")

        assert result == EASTERN_TZ.localize(datetime(2024, 1, 15))

    def test_garbage_raises_value_error(self):
        with pytest.raises(ValueError):
            parse_datetime_eastern("not-a-date")


class TestToEastern:
    def test_aware_value_is_converted(self):
        utc_value = pytz.utc.localize(datetime(2024, 1, 15, 17, 0))

        assert to_eastern(utc_value).hour == 12
