"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class ValidationError(DomainException):
    """Snapshot record is malformed (bad date, non-numeric amount, unknown type)"""

    def __init__(self, message: str, record: str | None = None, field: str | None = None):
        super().__init__(message)
        self.record = record
        self.field = field
