"""Access log records decoded from Traefik's JSON log format."""

import re
from dataclasses import dataclass, field, fields

INT64_MIN = -2 ** 63
INT64_MAX = 2 ** 63 - 1
_SURROGATE = re.compile("[\ud800-\udfff]")


def _json(key: str, default=""):
    """Declare a dataclass field bound to a JSON key."""
    return field(default=default, metadata={"json": key})


def _coerce(value, kind):
    """Return *value* if it matches *kind*, else the zero value of *kind*."""
    if kind is int:
        # bool is a subclass of int but never a valid JSON integer here
        if isinstance(value, int) and not isinstance(value, bool) and INT64_MIN <= value <= INT64_MAX:
            return value
        return 0
    if kind is str:
        if not isinstance(value, str):
            return ""
        # lone surrogates from \uD800-style escapes become U+FFFD
        return _SURROGATE.sub("\ufffd", value)
    return kind.from_dict(value)


class _Decodable:
    """Permissive JSON-object decoding shared by the record types.

    Unknown keys are ignored, missing keys keep their zero value and
    values of the wrong JSON type are replaced by the zero value.
    """

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, dict):
            return cls()
        kwargs = {}
        for f in fields(cls):
            key = f.metadata["json"]
            if key in data:
                kwargs[f.name] = _coerce(data[key], f.type)
        return cls(**kwargs)


@dataclass(frozen=True)
class BackendURL(_Decodable):
    scheme: str = _json("Scheme")
    opaque: str = _json("Opaque")
    user: str = _json("User")
    host: str = _json("Host")
    path: str = _json("Path")
    raw_path: str = _json("RawPath")
    force_query: str = _json("ForceQuery")
    raw_query: str = _json("RawQuery")
    fragment: str = _json("Fragment")


@dataclass(frozen=True)
class LogEntry(_Decodable):
    # identity / routing
    backend_addr: str = _json("BackendAddr")  # kept as text, Traefik writes "host:port"
    backend_name: str = _json("BackendName")
    backend_url: BackendURL = field(default_factory=BackendURL, metadata={"json": "BackendURL"})
    frontend_name: str = _json("FrontendName")
    client_addr: str = _json("ClientAddr")
    client_host: str = _json("ClientHost")
    client_port: str = _json("ClientPort")
    client_username: str = _json("ClientUsername")
    request_addr: str = _json("RequestAddr")
    request_host: str = _json("RequestHost")
    request_line: str = _json("RequestLine")
    request_method: str = _json("RequestMethod")
    request_path: str = _json("RequestPath")
    request_port: str = _json("RequestPort")
    request_protocol: str = _json("RequestProtocol")

    # sizing / timing
    downstream_content_size: int = _json("DownstreamContentSize", 0)
    origin_content_size: int = _json("OriginContentSize", 0)
    request_content_size: int = _json("RequestContentSize", 0)
    request_count: int = _json("RequestCount", 0)
    duration: int = _json("Duration", 0)          # nanoseconds
    origin_duration: int = _json("OriginDuration", 0)
    overhead: int = _json("Overhead", 0)
    retry_attempts: int = _json("RetryAttempts", 0)

    # status
    downstream_status: int = _json("DownstreamStatus", 0)
    downstream_status_line: str = _json("DownstreamStatusLine")
    origin_status: int = _json("OriginStatus", 0)
    origin_status_line: str = _json("OriginStatusLine")

    # metadata
    start_local: str = _json("StartLocal")
    start_utc: str = _json("StartUTC")
    time: str = _json("time")
    level: str = _json("level")
    msg: str = _json("msg")

    # captured headers
    downstream_content_type: str = _json("downstream_Content-Type")
    downstream_date: str = _json("downstream_Date")
    origin_content_type: str = _json("origin_Content-Type")
    origin_date: str = _json("origin_Date")
    request_accept: str = _json("request_Accept")
    request_accept_encoding: str = _json("request_Accept-Encoding")
    request_accept_language: str = _json("request_Accept-Language")
    request_access_control_allow_origin: str = _json("request_Access-Control-Allow-Origin")
    request_authorization: str = _json("request_Authorization")
    request_dnt: str = _json("request_Dnt")
    request_referer: str = _json("request_Referer")
    request_user_agent: str = _json("request_User-Agent")
