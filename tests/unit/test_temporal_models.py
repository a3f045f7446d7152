from datetime import datetime

from timexnorm.parsing.models import Granularity, Temporal


class TestTemporalSpanning:
    def test_day_span(self) -> None:
        t = Temporal.spanning(datetime(2024, 1, 2, 15, 30), Granularity.DAY)
        assert t.start == datetime(2024, 1, 2)
        assert t.end == datetime(2024, 1, 3)
        assert t.timeml_value == "2024-01-02"

    def test_week_span_starts_monday(self) -> None:
        t = Temporal.spanning(datetime(2024, 1, 31), Granularity.WEEK)
        assert t.start == datetime(2024, 1, 29)
        assert t.end == datetime(2024, 2, 5)
        assert t.timeml_value == "2024-W05"

    def test_week_uses_iso_year(self) -> None:
        t = Temporal.spanning(datetime(2024, 12, 31), Granularity.WEEK)
        assert t.timeml_value == "2025-W01"

    def test_month_span(self) -> None:
        t = Temporal.spanning(datetime(2000, 3, 17), Granularity.MONTH)
        assert t.start == datetime(2000, 3, 1)
        assert t.end == datetime(2000, 4, 1)
        assert t.timeml_value == "2000-03"

    def test_year_span(self) -> None:
        t = Temporal.spanning(datetime(1999, 6, 1), Granularity.YEAR)
        assert t.end == datetime(2000, 1, 1)
        assert t.timeml_value == "1999"

    def test_time_span_to_the_minute(self) -> None:
        t = Temporal.spanning(datetime(2024, 1, 1, 12, 0, 0, 500), Granularity.TIME)
        assert t.end == datetime(2024, 1, 1, 12, 1)
        assert t.timeml_value == "2024-01-01T12:00"

    def test_time_span_keeps_seconds(self) -> None:
        t = Temporal.spanning(datetime(2024, 1, 1, 12, 0, 5), Granularity.TIME)
        assert t.timeml_value == "2024-01-01T12:00:05"
        assert "period=1 second" in t.structured


class TestTemporalStructured:
    def test_structured_form(self) -> None:
        t = Temporal.spanning(datetime(2024, 1, 2), Granularity.DAY)
        assert t.structured == (
            "TimeSpan(start=2024-01-02T00:00:00, end=2024-01-03T00:00:00, period=1 day)"
        )

    def test_str_is_structured(self) -> None:
        t = Temporal.spanning(datetime(2024, 1, 2), Granularity.MONTH)
        assert str(t) == t.structured
