"""Domain-specific exceptions."""


class ServiceError(Exception):
    pass


class TransportFailure(ServiceError):
    """Any fault raised by a remote call: network, status or payload."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
