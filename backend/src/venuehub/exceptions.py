"""Domain exceptions raised by services.

Only conditions the caller cannot branch on travel as exceptions: a missing
entity and a failed geolocation lookup. Business-rule violations are
returned as ``OperationResult`` values instead (see services/results.py).
Exception handlers in main.py map these to the error envelope
{"error": {"code": "...", "message": "..."}}.
"""


class DomainError(Exception):
    """Base class for all domain exceptions."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NotFoundError(DomainError):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity: str, identifier: object) -> None:
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{entity} with id {identifier} not found")


class GeolocationError(DomainError):
    """Raised when coordinates cannot be resolved to cities.

    Covers transport failures, non-2xx responses and error payloads from the
    geolocation provider. Never retried by the service layer.
    """
