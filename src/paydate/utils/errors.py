"""Error types raised by the due-date calculator."""


class PaydateError(RuntimeError):
    """Base class for every failure surfaced by paydate."""


class InvalidInstantError(PaydateError, ValueError):
    """Raised when a date input is malformed or out of range."""


class UnknownPaySpanError(PaydateError, ValueError):
    """Raised for an unrecognised pay span when strict parsing is on."""


class UnboundedAdjustmentError(PaydateError):
    """Raised when weekend/holiday adjustment does not settle on a date."""


class RecordValidationError(PaydateError, ValueError):
    """Raised when a funding-record file is missing required columns."""


class ConfigError(PaydateError, ValueError):
    """Raised for unparseable config files or out-of-range settings."""
