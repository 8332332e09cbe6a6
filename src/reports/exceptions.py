"""Errors raised by the daily report pipeline."""


class ReportError(Exception):
    """Base class for daily report failures."""


class NotFoundError(ReportError):
    """No source data exists for the requested shift date."""


class ValidationError(ReportError):
    """Malformed request parameters."""


class DeliveryError(ReportError):
    """The notification channel rejected or never accepted the report."""


class PersistenceError(ReportError):
    """A ledger read or report write failed."""


class ReportInProgressError(ReportError):
    """Another run currently holds the lock for this shift date."""


class RenderError(ReportError):
    """The PDF backend failed to produce a document."""
