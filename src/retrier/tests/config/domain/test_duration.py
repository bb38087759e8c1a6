"""Tests for duration parsing, formatting and rounding."""

import pytest

from retrier.config.domain.duration import (
    InvalidDurationError,
    format_duration,
    parse_duration,
    round_duration,
)


class TestParseDuration:
    """Go-style duration strings are converted to seconds."""

    @pytest.mark.parametrize(
        ("text", "seconds"),
        [
            ("0", 0.0),
            ("1s", 1.0),
            ("1.5s", 1.5),
            ("300ms", 0.3),
            ("2m", 120.0),
            ("1h30m", 5400.0),
            ("24h", 86400.0),
            ("1m30.5s", 90.5),
            ("+5s", 5.0),
            (".5s", 0.5),
        ],
    )
    def test_parses_valid_durations(self, text: str, seconds: float) -> None:
        assert parse_duration(text) == pytest.approx(seconds)

    def test_parses_sub_millisecond_units(self) -> None:
        assert parse_duration("1500us") == pytest.approx(0.0015)
        assert parse_duration("1500µs") == pytest.approx(0.0015)
        assert parse_duration("250ns") == pytest.approx(2.5e-7)

    @pytest.mark.parametrize("text", ["", "5", "abc", "-1s", "1x", "1s5", "1 s", "."])
    def test_rejects_invalid_durations(self, text: str) -> None:
        with pytest.raises(InvalidDurationError) as exc_info:
            parse_duration(text)

        assert exc_info.value.value == text

    def test_error_message_quotes_input(self) -> None:
        with pytest.raises(InvalidDurationError, match='invalid duration "soon"'):
            parse_duration("soon")


class TestFormatDuration:
    """Seconds are rendered the way Go prints a time.Duration."""

    @pytest.mark.parametrize(
        ("seconds", "text"),
        [
            (0, "0s"),
            (0.0000005, "500ns"),
            (0.0000015, "1.5µs"),
            (0.0015, "1.5ms"),
            (0.25, "250ms"),
            (1, "1s"),
            (1.5, "1.5s"),
            (90, "1m30s"),
            (3600, "1h0m0s"),
            (3723.5, "1h2m3.5s"),
        ],
    )
    def test_formats_like_go(self, seconds: float, text: str) -> None:
        assert format_duration(seconds) == text

    def test_negative_durations_keep_sign(self) -> None:
        assert format_duration(-1.5) == "-1.5s"


class TestRoundDuration:
    """Rounding goes to the nearest multiple, halfway values away from zero."""

    def test_rounds_down_below_half(self) -> None:
        assert round_duration(1.234, 0.01) == pytest.approx(1.23)

    def test_rounds_half_up(self) -> None:
        assert round_duration(0.0125, 0.001) == pytest.approx(0.013)

    def test_rounds_to_whole_seconds(self) -> None:
        assert round_duration(12.5, 1.0) == 13.0

    def test_non_positive_multiple_returns_input(self) -> None:
        assert round_duration(1.23456, 0) == 1.23456
