"""Driving the transform over message channels.

This module connects a message source and a message sink through
transform_message: every accepted inbound message produces exactly one
outbound message. Rejected messages are reported as results and logged,
never dropped silently. Channel delivery itself (acknowledgement, retry,
back-pressure) stays with the source and sink implementations.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterable, Iterator, Protocol

from tasklaunch.core.config import LaunchConfig
from tasklaunch.core.errors import MessageTransformationError
from tasklaunch.core.messages import Message, transform_message

logger = logging.getLogger(__name__)


class MessageSource(Protocol):
    """Interface for reading inbound messages."""

    def __iter__(self) -> Iterator[Message]:
        """Yield inbound messages until the channel is exhausted."""
        ...


class MessageSink(Protocol):
    """Interface for emitting outbound messages."""

    def send(self, message: Message) -> None:
        """Deliver one outbound message."""
        ...


@dataclass(frozen=True)
class TransformResult:
    """
    Outcome of transforming one inbound message.

    Attributes:
        inbound: The message that was received.
        outbound: The emitted message, or None when the inbound was rejected.
        error: Why the inbound message was rejected, if it was.
    """

    inbound: Message
    outbound: Message | None = None
    error: MessageTransformationError | None = None

    @property
    def rejected(self) -> bool:
        return self.error is not None


def _transform_one(config: LaunchConfig, message: Message) -> TransformResult:
    try:
        return TransformResult(inbound=message, outbound=transform_message(config, message))
    except MessageTransformationError as exc:
        logger.error("Rejected inbound message: %s", exc.cause)
        return TransformResult(inbound=message, error=exc)


def process_messages(
    config: LaunchConfig,
    source: MessageSource,
    sink: MessageSink,
    *,
    fail_fast: bool = False,
    max_parallel: int = 1,
) -> list[TransformResult]:
    """
    Transform every message of source and send the results to sink.

    With max_parallel above 1 the source is read to the end first and the
    messages are transformed on a thread pool; outbound messages are still
    sent in arrival order.

    Args:
        config: Resolved processor configuration.
        source: Channel the inbound messages are read from.
        sink: Channel the outbound messages are sent to.
        fail_fast: Raise on the first rejected message instead of
            collecting it and moving on.
        max_parallel: Maximum number of concurrent transforms.

    Returns:
        One TransformResult per inbound message, in arrival order.

    Raises:
        MessageTransformationError: On the first rejection if fail_fast.
    """
    if max_parallel < 1:
        raise ValueError("max_parallel must be >= 1")

    if max_parallel == 1:
        outcomes: Iterable[TransformResult] = (_transform_one(config, m) for m in source)
    else:
        outcomes = transform_parallel(config, source, max_parallel)

    results: list[TransformResult] = []

    for result in outcomes:
        if result.error is not None and fail_fast:
            raise result.error
        if result.outbound is not None:
            sink.send(result.outbound)
        results.append(result)

    rejected = sum(1 for r in results if r.rejected)
    logger.info("Processed %d message(s), %d rejected", len(results), rejected)
    return results


def transform_parallel(
    config: LaunchConfig,
    messages: Iterable[Message],
    max_parallel: int,
) -> list[TransformResult]:
    """
    Transform messages on a thread pool.

    The transform is stateless, so messages are independent of each other.
    Results are returned in the order of the input messages.

    Args:
        config: Resolved processor configuration.
        messages: Inbound messages to transform.
        max_parallel: Maximum number of concurrent transforms.

    Returns:
        One TransformResult per inbound message, in input order.
    """
    if max_parallel < 1:
        raise ValueError("max_parallel must be >= 1")

    batch = list(messages)
    if not batch:
        return []

    with ThreadPoolExecutor(max_workers=max_parallel) as pool:
        return list(pool.map(lambda m: _transform_one(config, m), batch))
