"""Log record data model: level/type/distinction tags and the record variants."""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum


class LogLevel(Enum):
    INFO = "INFO"
    ERROR = "ERROR"

    def render(self) -> str:
        return self.value

    @classmethod
    def parse(cls, text: str) -> "LogLevel":
        """Case-insensitive lookup, e.g. 'info' -> LogLevel.INFO."""
        try:
            return cls(text.strip().upper())
        except ValueError:
            raise ValueError(f"Unknown log level: {text!r}") from None


class LogType(Enum):
    REQUEST = "REQUEST"
    RESPONSE = "RESPONSE"

    def render(self) -> str:
        return self.value

    @classmethod
    def parse(cls, text: str) -> "LogType":
        try:
            return cls(text.strip().upper())
        except ValueError:
            raise ValueError(f"Unknown log type: {text!r}") from None


class LogDistinction(Enum):
    """Routing key; the value doubles as the log file stem."""

    SERVER = "server"
    DB = "db"

    def render(self) -> str:
        return self.value


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(timestamp: datetime) -> datetime:
    if not isinstance(timestamp, datetime):
        raise TypeError(f"timestamp must be a datetime, got {type(timestamp).__name__}")
    if timestamp.tzinfo is None or timestamp.utcoffset() is None:
        raise ValueError("timestamp must be timezone-aware")
    return timestamp.astimezone(timezone.utc)


def _check_payload_size(size: int | None) -> None:
    if size is None:
        return
    # bool is an int subclass but never a byte count
    if isinstance(size, bool) or not isinstance(size, int):
        raise TypeError(f"payload_size must be an int, got {type(size).__name__}")
    if size < 0:
        raise ValueError(f"payload_size must be non-negative, got {size}")


def _check_enum(name: str, value, enum_type: type) -> None:
    if not isinstance(value, enum_type):
        raise TypeError(f"{name} must be a {enum_type.__name__}, got {type(value).__name__}")


def _check_code(name: str, value, optional: bool = False) -> None:
    if value is None and optional:
        return
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")


def _check_text(name: str, value, optional: bool = False) -> None:
    if value is None and optional:
        return
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a str, got {type(value).__name__}")
    # one record is one physical line
    if "\n" in value or "\r" in value:
        raise ValueError(f"{name} must not contain line breaks")


class _RecordBase:
    """Shared behaviour for the record dataclasses below.

    Subclasses list their required and optional text fields and their integer
    codes; anything the formatter could not render on one line is rejected here.
    """

    distinction: LogDistinction
    _text_fields: tuple = ()
    _optional_text_fields: tuple = ()
    _code_fields: tuple = ()
    _optional_code_fields: tuple = ()

    def __post_init__(self):
        # frozen dataclass: bypass __setattr__ to store the normalised value
        object.__setattr__(self, "timestamp", _as_utc(self.timestamp))
        _check_enum("level", self.level, LogLevel)
        _check_payload_size(getattr(self, "payload_size", None))
        for name in self._text_fields:
            _check_text(name, getattr(self, name))
        for name in self._optional_text_fields:
            _check_text(name, getattr(self, name), optional=True)
        for name in self._code_fields:
            _check_code(name, getattr(self, name))
        for name in self._optional_code_fields:
            _check_code(name, getattr(self, name), optional=True)

    def as_log_str(self) -> str:
        from bracketlog.formatter import format_record
        return format_record(self)


@dataclass(frozen=True)
class HttpRequestLog(_RecordBase):
    timestamp: datetime
    level: LogLevel
    origin_addr: str
    api_path: str
    method: str
    payload_size: int | None = None
    body: str | None = None

    distinction = LogDistinction.SERVER
    log_type = LogType.REQUEST
    _text_fields = ("origin_addr", "api_path", "method")
    _optional_text_fields = ("body",)


@dataclass(frozen=True)
class HttpResponseLog(_RecordBase):
    timestamp: datetime
    level: LogLevel
    origin_addr: str
    status_code: int
    body: str | None = None

    distinction = LogDistinction.SERVER
    log_type = LogType.RESPONSE
    _text_fields = ("origin_addr",)
    _optional_text_fields = ("body",)
    _code_fields = ("status_code",)


@dataclass(frozen=True)
class HttpLog(_RecordBase):
    """Single HTTP record for both phases.

    ``status_code`` is None for the request phase and set for the response.
    """

    timestamp: datetime
    level: LogLevel
    log_type: LogType
    origin_addr: str
    api_path: str
    method: str
    status_code: int | None = None
    body: str | None = None

    distinction = LogDistinction.SERVER
    _text_fields = ("origin_addr", "api_path", "method")
    _optional_text_fields = ("body",)
    _optional_code_fields = ("status_code",)

    def __post_init__(self):
        super().__post_init__()
        _check_enum("log_type", self.log_type, LogType)


@dataclass(frozen=True)
class DbRequestLog(_RecordBase):
    timestamp: datetime
    level: LogLevel
    socket_addr: str
    command: str
    pile: str | None = None
    payload_size: int | None = None

    distinction = LogDistinction.DB
    log_type = LogType.REQUEST
    _text_fields = ("socket_addr", "command")
    _optional_text_fields = ("pile",)


@dataclass(frozen=True)
class DbResponseLog(_RecordBase):
    timestamp: datetime
    level: LogLevel
    exit_code: int
    message: str | None = None

    distinction = LogDistinction.DB
    log_type = LogType.RESPONSE
    _optional_text_fields = ("message",)
    _code_fields = ("exit_code",)


LogRecord = HttpRequestLog | HttpResponseLog | HttpLog | DbRequestLog | DbResponseLog


def http_request(
    origin_addr: str,
    api_path: str,
    method: str,
    payload_size: int | None = None,
    body: str | None = None,
    level: LogLevel = LogLevel.INFO,
    timestamp: datetime | None = None,
) -> HttpRequestLog:
    """Factory that stamps the record with the current UTC time."""
    return HttpRequestLog(
        timestamp=timestamp or now_utc(),
        level=level,
        origin_addr=origin_addr,
        api_path=api_path,
        method=method,
        payload_size=payload_size,
        body=body,
    )


def http_response(
    origin_addr: str,
    status_code: int,
    body: str | None = None,
    level: LogLevel = LogLevel.INFO,
    timestamp: datetime | None = None,
) -> HttpResponseLog:
    return HttpResponseLog(
        timestamp=timestamp or now_utc(),
        level=level,
        origin_addr=origin_addr,
        status_code=status_code,
        body=body,
    )


def db_request(
    socket_addr: str,
    command: str,
    pile: str | None = None,
    payload_size: int | None = None,
    level: LogLevel = LogLevel.INFO,
    timestamp: datetime | None = None,
) -> DbRequestLog:
    return DbRequestLog(
        timestamp=timestamp or now_utc(),
        level=level,
        socket_addr=socket_addr,
        command=command,
        pile=pile,
        payload_size=payload_size,
    )


def db_response(
    exit_code: int,
    message: str | None = None,
    level: LogLevel = LogLevel.INFO,
    timestamp: datetime | None = None,
) -> DbResponseLog:
    return DbResponseLog(
        timestamp=timestamp or now_utc(),
        level=level,
        exit_code=exit_code,
        message=message,
    )
