"""Construction of task launch requests from configuration.

build_launch_request is the core transform of the processor: it maps a
LaunchConfig and an inbound message to a LaunchRequest. It holds no state
between calls and is safe to call from several threads at once.

Two grammars are used on purpose. Deployment and environment properties
are parsed quote-aware by parse_properties; command-line arguments are a
plain split on spaces without quoting.
"""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING, Callable

from tasklaunch.core.config import LaunchConfig
from tasklaunch.core.errors import MissingUriError
from tasklaunch.core.properties import parse_properties
from tasklaunch.core.requests import LaunchRequest

if TYPE_CHECKING:
    from tasklaunch.core.messages import Message

logger = logging.getLogger(__name__)

DEFAULT_APPLICATION_NAME_PREFIX = "Task-"

DATASOURCE_URL_KEY = "spring.datasource.url"
DATASOURCE_USERNAME_KEY = "spring.datasource.username"
DATASOURCE_PASSWORD_KEY = "spring.datasource.password"
DATASOURCE_DRIVER_CLASS_NAME_KEY = "spring.datasource.driver-class-name"


def default_application_name() -> str:
    """Return a generated application name such as ``Task-3f2a...``."""
    return f"{DEFAULT_APPLICATION_NAME_PREFIX}{uuid.uuid4().hex}"


def split_command_line_arguments(raw: str | None) -> list[str]:
    """
    Split a command-line argument string on spaces.

    Quotes have no meaning here. Order is kept, duplicates are kept and
    empty tokens (from repeated spaces) are dropped.
    """
    if not raw:
        return []
    return [token for token in raw.split(" ") if token]


def datasource_overrides(config: LaunchConfig) -> dict[str, str]:
    """Return the ``spring.datasource.*`` environment entries set in config."""
    candidates = {
        DATASOURCE_URL_KEY: config.data_source_url,
        DATASOURCE_USERNAME_KEY: config.data_source_user_name,
        DATASOURCE_PASSWORD_KEY: config.data_source_password,
        DATASOURCE_DRIVER_CLASS_NAME_KEY: config.data_source_driver_class_name,
    }
    return {key: value for key, value in candidates.items() if value is not None}


def build_launch_request(
    config: LaunchConfig,
    message: Message | None = None,
    *,
    name_factory: Callable[[], str] = default_application_name,
) -> LaunchRequest:
    """
    Build the launch request for one inbound message.

    The message payload and headers do not influence the result; an empty
    payload is an ordinary input. Nothing is built partially: either a full
    request is returned or an error is raised.

    Args:
        config: Resolved processor configuration.
        message: The inbound message that triggered the build.
        name_factory: Produces the application name when none is configured.

    Returns:
        The LaunchRequest described by config.

    Raises:
        MissingUriError: If config has no uri.
        MalformedPropertyStringError: If a property string is invalid.
    """
    if not config.uri:
        raise MissingUriError()

    if message is not None:
        logger.debug("Received payload: %r", message.payload)

    deployment_properties = parse_properties(config.deployment_properties)
    environment_properties = parse_properties(config.environment_properties)
    environment_properties.update(datasource_overrides(config))

    request = LaunchRequest(
        uri=config.uri,
        application_name=config.application_name or name_factory(),
        command_line_arguments=tuple(
            split_command_line_arguments(config.command_line_arguments)
        ),
        environment_properties=environment_properties,
        deployment_properties=deployment_properties,
    )
    logger.info(
        "Built launch request for %s (application=%s, %d argument(s))",
        request.uri,
        request.application_name,
        len(request.command_line_arguments),
    )
    return request
