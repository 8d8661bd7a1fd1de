"""Line-oriented message channels over text streams.

LineMessageSource reads one inbound message per line and LineMessageSink
writes one outbound message per line, so the processor can be wired to
stdin and stdout.
"""

from __future__ import annotations

import json
from typing import Iterator, TextIO

from tasklaunch.core.messages import Message


class LineMessageSource:
    """
    Reads one inbound message per line of a text stream.

    By default each line is the message payload. In envelope mode each line
    is a JSON object ``{"payload": "...", "headers": {...}}``.
    """

    def __init__(self, stream: TextIO, *, envelope: bool = False):
        self.stream = stream
        self.envelope = envelope

    def _parse_envelope(self, line: str, lineno: int) -> Message:
        """Decode a JSON envelope line into a Message."""
        try:
            data = json.loads(line)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid message envelope on line {lineno}: {exc}") from exc
        if not isinstance(data, dict):
            raise ValueError(f"Invalid message envelope on line {lineno}: expected an object")

        payload = data.get("payload", "")
        headers = data.get("headers", {})
        if not isinstance(payload, str):
            # Structured payloads are kept as their JSON text.
            payload = json.dumps(payload)
        if not isinstance(headers, dict):
            raise ValueError(f"Invalid message envelope on line {lineno}: headers must be an object")
        return Message(payload=payload, headers={str(k): str(v) for k, v in headers.items()})

    def __iter__(self) -> Iterator[Message]:
        for lineno, raw in enumerate(self.stream, start=1):
            line = raw.rstrip("\r\n")
            if self.envelope:
                if not line.strip():
                    continue
                yield self._parse_envelope(line, lineno)
            else:
                yield Message(payload=line)


class LineMessageSink:
    """
    Writes one outbound message per line of a text stream.

    By default only the payload is written. In envelope mode the payload and
    headers are written as a JSON object.
    """

    def __init__(self, stream: TextIO, *, envelope: bool = False):
        self.stream = stream
        self.envelope = envelope

    def send(self, message: Message) -> None:
        """Write the message as one line and flush the stream."""
        if self.envelope:
            line = json.dumps({"payload": message.payload, "headers": dict(message.headers)})
        else:
            line = message.payload
        self.stream.write(line + "\n")
        self.stream.flush()
