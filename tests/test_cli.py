#!/usr/bin/env python3
"""
Tests for the command-line entry point.
"""

import json
from unittest.mock import patch

import pytest
import requests

from vartarvipavag import cli
from vartarvipavag.demo_data import demo_positions


@pytest.fixture
def positions_file(tmp_path):
    path = tmp_path / "trip.json"
    path.write_text(
        json.dumps({"success": True, "data": [p.to_dict() for p in demo_positions()]}),
        encoding="utf-8",
    )
    return path


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in ("VARTARVIPAVAG_API_URL", "VARTARVIPAVAG_API_KEY", "VARTARVIPAVAG_TIMEZONE"):
        monkeypatch.delenv(name, raising=False)


def test_no_source_prints_help(capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main([])
    assert excinfo.value.code == 1
    assert "usage:" in capsys.readouterr().out


def test_file_to_map(positions_file, tmp_path, capsys):
    output = tmp_path / "out.html"
    gpx_output = tmp_path / "out.gpx"

    cli.main(
        [
            str(positions_file),
            "--output",
            str(output),
            "--gpx-output",
            str(gpx_output),
            "--no-open",
        ]
    )

    out = capsys.readouterr().out
    assert "Night stops (4 nights, 41 positions):" in out
    assert "(id 41)" in out
    assert output.exists()
    assert "Nattstopp (4)" in output.read_text(encoding="utf-8")
    assert "<wpt" in gpx_output.read_text(encoding="utf-8")


def test_auto_generated_output_name(positions_file, capsys):
    cli.main([str(positions_file), "--no-open"])
    assert (positions_file.parent / "trip map.html").exists()


def test_obfuscated_map_keeps_night_stops(positions_file, tmp_path, capsys):
    output = tmp_path / "public.html"
    cli.main([str(positions_file), "--output", str(output), "--obfuscate", "--no-open"])

    out = capsys.readouterr().out
    assert "Night stops (4 nights, 41 positions):" in out
    # 59.3293, 18.0686 is the exact Stockholm hotel position
    assert " 59.32930,    18.0686" not in out


def test_demo_mode(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    cli.main(["--demo", "--no-open"])
    assert (tmp_path / "vartarvipavag map.html").exists()


def test_file_and_demo_conflict(positions_file):
    with pytest.raises(SystemExit) as excinfo:
        cli.main([str(positions_file), "--demo", "--no-open"])
    assert excinfo.value.code == 1


def test_missing_file(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        cli.main([str(tmp_path / "missing.json"), "--output", str(tmp_path / "x.html"), "--no-open"])
    assert excinfo.value.code == 1


def test_invalid_timestamp_exits(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(
        json.dumps([{"id": "a", "timestamp": "igår", "latitude": 1, "longitude": 2}]),
        encoding="utf-8",
    )
    with pytest.raises(SystemExit) as excinfo:
        cli.main([str(path), "--output", str(tmp_path / "x.html"), "--no-open"])
    assert excinfo.value.code == 1


@pytest.mark.parametrize(
    "payload",
    [
        ["oops"],
        {"success": True, "data": [None]},
        [
            {
                "id": "a",
                "timestamp": "2024-07-02T22:00:00Z",
                "latitude": 48.85,
                "longitude": 2.35,
                "notes": [{"text": "Framme!"}],
            }
        ],
    ],
    ids=["string-entry", "null-entry", "note-without-id"],
)
def test_malformed_export_exits(tmp_path, payload):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    with pytest.raises(SystemExit) as excinfo:
        cli.main([str(path), "--output", str(tmp_path / "x.html"), "--no-open"])
    assert excinfo.value.code == 1


def test_invalid_timezone_exits(positions_file, tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(
            [
                str(positions_file),
                "--home-timezone",
                "Nowhere/Special",
                "--output",
                str(tmp_path / "x.html"),
                "--no-open",
            ]
        )
    assert excinfo.value.code == 1


def test_night_stop_hour_is_validated(positions_file):
    with pytest.raises(SystemExit) as excinfo:
        cli.main([str(positions_file), "--night-stop-hour", "24"])
    assert excinfo.value.code == 2


@patch("vartarvipavag.cli.PositionsClient")
def test_api_source_with_password(mock_client_class, tmp_path, capsys):
    mock_client = mock_client_class.return_value
    mock_client.health_check.return_value = True
    mock_client.get_positions.return_value = demo_positions()

    cli.main(
        [
            "--api-url",
            "http://tracker.local",
            "--password",
            "password",
            "--output",
            str(tmp_path / "api.html"),
            "--no-open",
        ]
    )

    mock_client_class.assert_called_once_with(
        "http://tracker.local",
        "5e884898da28047151d0e56f8dc6292773603d0d6aabbdd62a11ef721d1542d8",
        10,
    )
    assert (tmp_path / "api.html").exists()


@patch("vartarvipavag.cli.PositionsClient")
def test_api_source_from_environment(mock_client_class, tmp_path, monkeypatch):
    monkeypatch.setenv("VARTARVIPAVAG_API_URL", "http://env.local")
    monkeypatch.setenv("VARTARVIPAVAG_API_KEY", "env-key")
    mock_client_class.return_value.get_positions.return_value = demo_positions()

    cli.main(["--output", str(tmp_path / "env.html"), "--no-open"])

    mock_client_class.assert_called_once_with("http://env.local", "env-key", 10)


@patch("vartarvipavag.cli.PositionsClient")
def test_api_failure_exits(mock_client_class, tmp_path):
    mock_client_class.return_value.get_positions.side_effect = (
        requests.exceptions.ConnectionError("refused")
    )
    with pytest.raises(SystemExit) as excinfo:
        cli.main(
            ["--api-url", "http://tracker.local", "--output", str(tmp_path / "x.html"), "--no-open"]
        )
    assert excinfo.value.code == 1


@patch("vartarvipavag.cli.webbrowser.open")
def test_opens_browser(mock_open, positions_file, tmp_path):
    output = tmp_path / "open.html"
    cli.main([str(positions_file), "--output", str(output)])
    mock_open.assert_called_once_with(f"file://{output}")
