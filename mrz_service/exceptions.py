class MRZParseError(Exception):
    """Raised when the input is structurally not an MRZ."""

    code = "mrz_parse_error"


class NotEnoughLines(MRZParseError):
    """Raised when fewer than two non-empty lines remain after normalization."""

    code = "not_enough_lines"


class WrongLength(MRZParseError):
    """Raised when line count and lengths match no TD1, TD2 or TD3 layout."""

    code = "wrong_length"


class InvalidCharset(MRZParseError):
    """Raised when a line contains a character outside A-Z, 0-9 and '<'."""

    code = "invalid_charset"


class SessionNotFound(KeyError):
    """Raised when a scan session id is unknown or already closed."""
