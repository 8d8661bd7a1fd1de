"""The task launch request model and its JSON form.

A LaunchRequest describes which artifact to launch and how: its URI, the
application name, command-line arguments, environment properties and
deployment properties. It is built fresh for every inbound message and
serialized as JSON for the output channel.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from tasklaunch.core.errors import LaunchRequestError, MissingUriError

# Wire field names of the serialized request.
URI_FIELD = "uri"
APPLICATION_NAME_FIELD = "applicationName"
COMMAND_LINE_ARGUMENTS_FIELD = "commandlineArguments"
ENVIRONMENT_PROPERTIES_FIELD = "environmentProperties"
DEPLOYMENT_PROPERTIES_FIELD = "deploymentProperties"


@dataclass(frozen=True)
class LaunchRequest:
    """
    Represents a request to launch a task.

    Attributes:
        uri: URI of the artifact to launch. Never empty.
        application_name: Name the task is launched under.
        command_line_arguments: Arguments passed to the task, in order.
        environment_properties: Environment variables for the task process.
        deployment_properties: Platform-specific deployment settings.
    """

    uri: str
    application_name: str
    command_line_arguments: tuple[str, ...] = ()
    environment_properties: Mapping[str, str] = field(default_factory=dict)
    deployment_properties: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.uri:
            raise MissingUriError()
        # Read-only copies of the collections.
        object.__setattr__(self, "command_line_arguments", tuple(self.command_line_arguments))
        object.__setattr__(
            self, "environment_properties", MappingProxyType(dict(self.environment_properties))
        )
        object.__setattr__(
            self, "deployment_properties", MappingProxyType(dict(self.deployment_properties))
        )

    def __hash__(self) -> int:
        return hash(
            (
                self.uri,
                self.application_name,
                self.command_line_arguments,
                frozenset(self.environment_properties.items()),
                frozenset(self.deployment_properties.items()),
            )
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the request as a JSON-compatible dict using wire field names."""
        return {
            URI_FIELD: self.uri,
            APPLICATION_NAME_FIELD: self.application_name,
            COMMAND_LINE_ARGUMENTS_FIELD: list(self.command_line_arguments),
            ENVIRONMENT_PROPERTIES_FIELD: dict(self.environment_properties),
            DEPLOYMENT_PROPERTIES_FIELD: dict(self.deployment_properties),
        }

    def to_json(self) -> str:
        """Serialize the request to a JSON string."""
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> LaunchRequest:
        """
        Build a request from its dict form.

        Missing collections default to empty. A missing or empty uri raises
        MissingUriError; wrongly typed fields raise LaunchRequestError.
        """
        uri = payload.get(URI_FIELD)
        if not uri:
            raise MissingUriError()
        if not isinstance(uri, str):
            raise LaunchRequestError(f"'{URI_FIELD}' must be a string")

        application_name = payload.get(APPLICATION_NAME_FIELD)
        if not isinstance(application_name, str):
            raise LaunchRequestError(f"'{APPLICATION_NAME_FIELD}' must be a string")

        args = payload.get(COMMAND_LINE_ARGUMENTS_FIELD)
        if args is None:
            args = []
        if not isinstance(args, list) or not all(isinstance(a, str) for a in args):
            raise LaunchRequestError(
                f"'{COMMAND_LINE_ARGUMENTS_FIELD}' must be a list of strings"
            )

        return cls(
            uri=uri,
            application_name=application_name,
            command_line_arguments=tuple(args),
            environment_properties=_string_map(payload, ENVIRONMENT_PROPERTIES_FIELD),
            deployment_properties=_string_map(payload, DEPLOYMENT_PROPERTIES_FIELD),
        )

    @classmethod
    def from_json(cls, text: str) -> LaunchRequest:
        """Parse a request from its JSON string form."""
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise LaunchRequestError(f"Invalid launch request JSON: {exc}") from exc
        if not isinstance(payload, dict):
            raise LaunchRequestError("A launch request must be a JSON object")
        return cls.from_dict(payload)


def _string_map(payload: Mapping[str, Any], name: str) -> dict[str, str]:
    """Return payload[name] as a str -> str dict (None counts as empty)."""
    value = payload.get(name)
    if value is None:
        return {}
    if not isinstance(value, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in value.items()
    ):
        raise LaunchRequestError(f"'{name}' must be an object of strings")
    return dict(value)
