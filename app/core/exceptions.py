"""Domain exceptions shared by services and the API layer."""


class DataSourceUnavailable(RuntimeError):
    """Raised when a read against the relational store fails."""

    def __init__(self, message: str, *, operation: str) -> None:
        super().__init__(message)
        self.operation = operation


class MalformedRecord(ValueError):
    """Raised for a row missing a field the aggregation depends on."""

    pass
