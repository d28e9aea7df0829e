"""Custom exceptions for trade and position operations."""


class WheelError(Exception):
    """Base exception for wheel tracker operations."""

    pass


class NotFoundError(WheelError):
    """Referenced trade, position or price snapshot does not exist."""

    pass


class InvalidArgumentError(WheelError):
    """Required companion field missing or value out of range."""

    pass


class InvalidStateError(WheelError):
    """Operation not allowed in current status."""

    pass
