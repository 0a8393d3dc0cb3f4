"""Custom exceptions for Equity Compass."""

from decimal import Decimal


class EquityEngineError(Exception):
    """Base exception for equity engine errors."""


class DataValidationError(EquityEngineError):
    """Raised when input data fails validation."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"Validation error on '{field}': {message}")


class InsufficientSharesError(EquityEngineError):
    """Raised when an exercise requests more shares than are available on a grant."""

    def __init__(self, grant_id: str, requested: Decimal, available: Decimal):
        self.grant_id = grant_id
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient shares in grant {grant_id}: "
            f"requested={requested}, available={available}"
        )


class UnsupportedTaxYearError(EquityEngineError):
    """Raised when no rule set is registered for a tax year."""

    def __init__(self, tax_year: int, supported: list[int]):
        self.tax_year = tax_year
        self.supported = supported
        years = ", ".join(str(y) for y in supported)
        super().__init__(f"Unsupported tax year {tax_year} (supported: {years})")


class ClientFileError(EquityEngineError):
    """Raised when a client profile file cannot be read or written."""

    def __init__(self, file_path: str, message: str):
        self.file_path = file_path
        super().__init__(f"Client file error for {file_path}: {message}")
