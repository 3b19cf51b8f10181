"""Error taxonomy for the access log loader."""


class AccessLogError(Exception):
    """Base class for every failure raised by the loader."""


class LogFileError(AccessLogError):
    """The access log could not be opened, read, or truncated."""

    def __init__(self, path: str, cause: Exception):
        self.path = path
        self.cause = cause
        super().__init__(f"unable to open access log file {path}: {cause}")


class LogParseError(AccessLogError):
    """A line of the access log is not valid JSON."""

    def __init__(self, line_number: int, raw: bytes):
        self.line_number = line_number
        self.raw = raw
        super().__init__(f"line {line_number} contains invalid json: {raw!r}")


class StorageError(AccessLogError):
    """The SQLite database could not be opened, initialised, or written."""

    def __init__(self, message: str, position: int | None = None):
        self.position = position
        super().__init__(message)
