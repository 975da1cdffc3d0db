from datetime import date

from vartarvipavag.formatting import format_date, format_timestamp
from vartarvipavag.position import parse_timestamp


def test_format_date():
    assert format_date(date(2024, 7, 3)) == "ons 3 juli"
    assert format_date(date(2024, 12, 15)) == "sön 15 dec"


def test_format_timestamp_in_home_timezone():
    timestamp = parse_timestamp("2024-12-15T00:00:00Z")
    assert format_timestamp(timestamp, "Europe/Stockholm") == "sön 15 dec, kl 01:00"
    assert format_timestamp(timestamp, "UTC") == "sön 15 dec, kl 00:00"


def test_format_timestamp_crosses_date_line():
    timestamp = parse_timestamp("2024-03-31T23:30:00Z")
    assert format_timestamp(timestamp, "Asia/Tokyo") == "mån 1 apr, kl 08:30"
