"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class LedgerUnavailableError(DomainException):
    """Ledger source could not be read"""

    pass


class InvalidLedgerDataError(DomainException):
    """Ledger source returned malformed entries"""

    pass
