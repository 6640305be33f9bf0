class LedgerError(Exception):
    """Base class for errors raised by the bolus ledger core."""


class ValidationError(LedgerError, ValueError):
    """Raised when input is malformed or out of range. State is left untouched."""


class NotFoundError(LedgerError, LookupError):
    """Raised when an operation references a product or meal line that does not exist."""


__all__ = ["LedgerError", "ValidationError", "NotFoundError"]
