import json

import pytest

from tasklaunch.core.config import LaunchConfig
from tasklaunch.core.errors import MessageTransformationError, MissingUriError
from tasklaunch.core.messages import (
    CONTENT_TYPE_HEADER,
    JSON_CONTENT_TYPE,
    Message,
    transform_message,
)
from tasklaunch.core.requests import LaunchRequest


def test_transform_message_emits_json_launch_request():
    config = LaunchConfig(uri="MY_URI", application_name="test")

    outbound = transform_message(config, Message(payload="hello"))

    assert outbound.headers == {CONTENT_TYPE_HEADER: JSON_CONTENT_TYPE}
    assert json.loads(outbound.payload) == {
        "uri": "MY_URI",
        "applicationName": "test",
        "commandlineArguments": [],
        "environmentProperties": {},
        "deploymentProperties": {},
    }
    assert LaunchRequest.from_json(outbound.payload).uri == "MY_URI"


def test_transform_message_ignores_inbound_headers():
    config = LaunchConfig(uri="MY_URI", application_name="test")

    plain = transform_message(config, Message(payload=""))
    with_headers = transform_message(
        config, Message(payload="x", headers={"contentType": "text/plain"})
    )

    assert plain == with_headers


def test_transform_message_rejects_when_uri_missing():
    inbound = Message(payload="hello")

    with pytest.raises(MessageTransformationError) as exc_info:
        transform_message(LaunchConfig(), inbound)

    assert exc_info.value.inbound is inbound
    assert isinstance(exc_info.value.cause, MissingUriError)
    assert isinstance(exc_info.value.__cause__, MissingUriError)


def test_message_headers_are_read_only():
    headers = {"contentType": "text/plain"}
    message = Message(payload="x", headers=headers)

    headers["contentType"] = "changed"

    assert message.headers == {"contentType": "text/plain"}
    with pytest.raises(TypeError):
        message.headers["contentType"] = "application/json"
    assert hash(message) == hash(Message(payload="x", headers={"contentType": "text/plain"}))
