"""Canonical bracketed text line for each log record variant.

Every field is rendered as ``[value]`` and the fields are joined by a single
space. Values are inserted verbatim; embedded brackets are not escaped.
"""

from datetime import datetime, timezone

from bracketlog.models import (
    DbRequestLog,
    DbResponseLog,
    HttpLog,
    HttpRequestLog,
    HttpResponseLog,
    LogType,
)


def bracket(*fields: str) -> str:
    return " ".join(f"[{value}]" for value in fields)


def format_timestamp(timestamp: datetime) -> str:
    """RFC 3339 at second precision, e.g. 2014-07-08T09:10:11+00:00."""
    return timestamp.astimezone(timezone.utc).isoformat(timespec="seconds")


def format_payload_size(size: int | None) -> str:
    return f"{size if size is not None else 0}B"


def _text(value) -> str:
    return "" if value is None else str(value)


def format_http_request(record: HttpRequestLog) -> str:
    return bracket(
        format_timestamp(record.timestamp),
        record.level.render(),
        LogType.REQUEST.render(),
        record.origin_addr,
        record.api_path,
        record.method,
        format_payload_size(record.payload_size),
        _text(record.body),
    )


def format_http_response(record: HttpResponseLog) -> str:
    return bracket(
        format_timestamp(record.timestamp),
        record.level.render(),
        LogType.RESPONSE.render(),
        record.origin_addr,
        str(record.status_code),
        _text(record.body),
    )


def format_http(record: HttpLog) -> str:
    return bracket(
        format_timestamp(record.timestamp),
        record.level.render(),
        record.log_type.render(),
        record.origin_addr,
        record.api_path,
        record.method,
        _text(record.status_code),
        _text(record.body),
    )


def format_db_request(record: DbRequestLog) -> str:
    return bracket(
        format_timestamp(record.timestamp),
        record.level.render(),
        LogType.REQUEST.render(),
        record.socket_addr,
        record.command,
        _text(record.pile),
        format_payload_size(record.payload_size),
    )


def format_db_response(record: DbResponseLog) -> str:
    return bracket(
        format_timestamp(record.timestamp),
        record.level.render(),
        LogType.RESPONSE.render(),
        str(record.exit_code),
        _text(record.message),
    )


_FORMATTERS = {
    HttpRequestLog: format_http_request,
    HttpResponseLog: format_http_response,
    HttpLog: format_http,
    DbRequestLog: format_db_request,
    DbResponseLog: format_db_response,
}


def get_formatter(record_type: type):
    """Return the formatter function for a record class."""
    try:
        return _FORMATTERS[record_type]
    except KeyError:
        raise TypeError(f"Not a log record type: {record_type.__name__}") from None


def format_record(record) -> str:
    """Render any record variant as its canonical line."""
    return get_formatter(type(record))(record)
