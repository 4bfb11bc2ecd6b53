"""Exceptions raised while converting roster exports."""


class Tracs2CalError(Exception):
    """Base class for all converter errors."""

    pass


class InputFormatError(Tracs2CalError):
    """Raised when the uploaded file is not a CSV or has no Date/On/Off header row."""

    pass


class RowParseError(Tracs2CalError):
    """Raised when a single roster row has an unreadable date or time cell."""

    pass


class EmptyResultError(Tracs2CalError):
    """Raised when there are no events left to export."""

    pass


class CsvParseError(InputFormatError):
    """Raised when the CSV reader itself rejects the file."""

    pass
