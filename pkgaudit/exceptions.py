"""Custom exceptions for pkgaudit."""


class AuditError(Exception):
    """Base exception for all audit errors."""


class InputReadError(AuditError):
    """Raised when an input file is missing or cannot be read."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"cannot read {path}: {reason}")


class InputParseError(AuditError):
    """Raised when an input file is not valid JSON of the expected shape."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"cannot parse {path}: {reason}")
