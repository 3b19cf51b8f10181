"""Shared pytest fixtures for the access-log-loader test suite."""

import json
import sqlite3

import pytest


@pytest.fixture()
def write_log(tmp_path):
    """Return a helper that writes *lines* to a log file and returns its path."""

    def _write(lines, name="access.log", newline="\n"):
        path = tmp_path / name
        if isinstance(lines, (bytes, str)):
            data = lines
        else:
            data = newline.join(
                line if isinstance(line, str) else json.dumps(line) for line in lines
            ) + newline
        if isinstance(data, str):
            data = data.encode("utf-8")
        path.write_bytes(data)
        return str(path)

    return _write


@pytest.fixture()
def db_path(tmp_path):
    return str(tmp_path / "access.db")


@pytest.fixture()
def fetch_rows():
    """Return a helper that reads every access_logs row as a dict, ordered by id."""

    def _fetch(path):
        conn = sqlite3.connect(path)
        conn.row_factory = sqlite3.Row
        try:
            return [dict(r) for r in conn.execute("SELECT * FROM access_logs ORDER BY id")]
        finally:
            conn.close()

    return _fetch


@pytest.fixture()
def traefik_line() -> dict:
    """A realistic Traefik access log record."""
    return {
        "BackendAddr": "10.0.0.12:8080",
        "BackendName": "backend-web",
        "BackendURL": {"Scheme": "http", "Host": "10.0.0.12:8080", "Path": "", "User": None},
        "ClientAddr": "203.0.113.7:51522",
        "ClientHost": "203.0.113.7",
        "ClientPort": "51522",
        "ClientUsername": "-",
        "DownstreamContentSize": 612,
        "DownstreamStatus": 200,
        "DownstreamStatusLine": "200 OK",
        "Duration": 1834210,
        "FrontendName": "frontend-web",
        "OriginContentSize": 612,
        "OriginDuration": 1701337,
        "OriginStatus": 200,
        "OriginStatusLine": "200 OK",
        "Overhead": 132873,
        "RequestAddr": "example.com",
        "RequestContentSize": 0,
        "RequestCount": 42,
        "RequestHost": "example.com",
        "RequestLine": "GET /index.html HTTP/1.1",
        "RequestMethod": "GET",
        "RequestPath": "/index.html",
        "RequestPort": "-",
        "RequestProtocol": "HTTP/1.1",
        "RetryAttempts": 0,
        "StartLocal": "2018-06-01T10:15:30.123456789+02:00",
        "StartUTC": "2018-06-01T08:15:30.123456789Z",
        "downstream_Content-Type": "text/html",
        "level": "info",
        "msg": "",
        "origin_Content-Type": "text/html",
        "request_Accept": "text/html",
        "request_Referer": "https://example.com/",
        "request_User-Agent": "curl/7.58.0",
        "time": "2018-06-01T10:15:30+02:00",
    }
