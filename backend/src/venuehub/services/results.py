from dataclasses import dataclass


@dataclass(frozen=True)
class OperationResult:
    """Outcome of a write that the caller is expected to branch on.

    Failures carry a message meant for the end user; they are not errors in
    the HTTP sense.
    """

    success: bool
    message: str

    @classmethod
    def ok(cls, message: str) -> "OperationResult":
        return cls(success=True, message=message)

    @classmethod
    def fail(cls, message: str) -> "OperationResult":
        return cls(success=False, message=message)
