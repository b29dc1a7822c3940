"""Domain level exceptions raised by the application use cases."""


class DomainError(ValueError):
    """A business rule rejected the requested operation."""

    status_code = 400


class NotFoundError(DomainError):
    """The requested resource does not exist or is not visible to the caller."""

    status_code = 404


class ConflictError(DomainError):
    """The operation would duplicate an existing resource."""


class FileTooLargeError(DomainError):
    """An upload exceeded the size accepted for its kind."""

    def __init__(self, limit: int) -> None:
        super().__init__(f"File too large. Maximum size is {limit // (1024 * 1024)}MB")
        self.limit = limit


class PaymentTransitionError(DomainError):
    """The payment cannot move from its persisted status to the requested one."""

    def __init__(self, current: str, target: str) -> None:
        super().__init__(f"Cannot change payment status from '{current}' to '{target}'")
        self.current = current
        self.target = target


class EmailDeliveryError(RuntimeError):
    """The mail provider did not accept a message."""


__all__ = [
    "ConflictError",
    "DomainError",
    "EmailDeliveryError",
    "FileTooLargeError",
    "NotFoundError",
    "PaymentTransitionError",
]
