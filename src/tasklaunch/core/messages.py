"""Inbound/outbound messages and the per-message transform.

transform_message is the function a messaging adapter calls for every
inbound message. It returns the outbound message carrying the serialized
launch request, or raises MessageTransformationError so the adapter can
reject the inbound message instead of dropping it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from tasklaunch.core.builder import build_launch_request
from tasklaunch.core.config import LaunchConfig
from tasklaunch.core.errors import LaunchRequestError, MessageTransformationError

CONTENT_TYPE_HEADER = "contentType"
JSON_CONTENT_TYPE = "application/json"


@dataclass(frozen=True)
class Message:
    """
    A message travelling over a channel.

    Attributes:
        payload: Message body as text. May be empty.
        headers: Message headers, such as the content type.
    """

    payload: str = ""
    headers: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    def __hash__(self) -> int:
        return hash((self.payload, frozenset(self.headers.items())))


def transform_message(config: LaunchConfig, message: Message) -> Message:
    """
    Transform one inbound message into a launch request message.

    Raises:
        MessageTransformationError: If no launch request can be built from
            config. The original error is available as ``cause``.
    """
    try:
        request = build_launch_request(config, message)
    except LaunchRequestError as exc:
        raise MessageTransformationError(message, exc) from exc

    return Message(
        payload=request.to_json(),
        headers={CONTENT_TYPE_HEADER: JSON_CONTENT_TYPE},
    )
