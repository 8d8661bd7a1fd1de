"""Error types raised while building task launch requests.

Every failure of the core transform is a LaunchRequestError. Both concrete
errors describe a static configuration defect, so callers should reject the
inbound message instead of retrying it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tasklaunch.core.messages import Message


class LaunchRequestError(ValueError):
    """Base class for errors raised while building a launch request."""


class MissingUriError(LaunchRequestError):
    """Raised when no launch target URI is configured."""

    def __init__(self, message: str = "A uri is required to build a task launch request."):
        super().__init__(message)


class MalformedPropertyStringError(LaunchRequestError):
    """Raised when a property string does not follow the key=value grammar."""

    def __init__(self, raw: str, segment: str, reason: str):
        self.raw = raw
        self.segment = segment
        self.reason = reason
        super().__init__(f"Invalid property '{segment}': {reason}")


class MessageTransformationError(RuntimeError):
    """
    Raised at the messaging boundary when an inbound message is rejected.

    Attributes:
        inbound: The message that could not be transformed.
        cause: The LaunchRequestError that caused the rejection.
    """

    def __init__(self, inbound: Message, cause: LaunchRequestError):
        self.inbound = inbound
        self.cause = cause
        super().__init__(f"Failed to transform message: {cause}")
