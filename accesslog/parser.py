"""Log Parser: line-delimited JSON access log -> list of LogEntry."""

import json
import logging

from accesslog.errors import LogFileError, LogParseError
from accesslog.models import LogEntry
from accesslog.reader import read_lines, truncate as truncate_file

logger = logging.getLogger(__name__)


def _reject_constant(name: str):
    raise ValueError(f"{name} is not valid JSON")


def decode_line(raw: bytes):
    """Decode one line as strict JSON.

    Raises ValueError if invalid, RecursionError if nested too deeply.
    """
    text = raw.decode("utf-8", errors="replace")
    return json.loads(text, parse_constant=_reject_constant)


def parse_access_log(path: str, truncate: bool = False) -> list[LogEntry]:
    """Parse every line of *path* into a LogEntry, in file order.

    All-or-nothing: the first line that is not valid JSON raises
    LogParseError and nothing is returned. Valid JSON that does not match
    the record shape decodes permissively (see LogEntry.from_dict).

    With *truncate* set the file is emptied after a successful scan. This
    is irreversible: the content is gone even if a later stage fails.
    """
    mode = "r+b" if truncate else "rb"
    try:
        handle = open(path, mode)
    except OSError as err:
        raise LogFileError(path, err) from err

    logs = []
    with handle:
        try:
            for line_number, raw in read_lines(handle):
                try:
                    data = decode_line(raw)
                except (ValueError, RecursionError) as err:
                    raise LogParseError(line_number, raw) from err
                logs.append(LogEntry.from_dict(data))

            if truncate:
                truncate_file(handle)
                logger.warning("Truncated %s after reading %d entries", path, len(logs))
        except OSError as err:
            raise LogFileError(path, err) from err

    logger.info("Parsed %d entries from %s", len(logs), path)
    return logs
