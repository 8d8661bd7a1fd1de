"""Configuration of the launch request transform.

The configuration is resolved once per process, from environment variables
and CLI options, and is immutable afterwards. All values are raw strings;
parsing happens when a launch request is built.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from typing import Mapping

ENV_PREFIX = "TASKLAUNCH_"

# Field name -> environment variable (without prefix).
_ENV_NAMES = {
    "uri": "URI",
    "application_name": "APPLICATION_NAME",
    "command_line_arguments": "COMMAND_LINE_ARGUMENTS",
    "deployment_properties": "DEPLOYMENT_PROPERTIES",
    "environment_properties": "ENVIRONMENT_PROPERTIES",
    "data_source_url": "DATASOURCE_URL",
    "data_source_user_name": "DATASOURCE_USERNAME",
    "data_source_password": "DATASOURCE_PASSWORD",
    "data_source_driver_class_name": "DATASOURCE_DRIVER_CLASS_NAME",
}


@dataclass(frozen=True)
class LaunchConfig:
    """
    Static settings a launch request is assembled from.

    Attributes:
        uri: URI of the artifact to launch. Required to build a request.
        application_name: Name of the launched application. A name is
            generated per request when unset.
        command_line_arguments: Space-separated arguments for the task.
        deployment_properties: Deployment properties as ``k=v,k2=v2``.
        environment_properties: Environment properties as ``k=v,k2=v2``.
        data_source_url: Overrides ``spring.datasource.url``.
        data_source_user_name: Overrides ``spring.datasource.username``.
        data_source_password: Overrides ``spring.datasource.password``.
        data_source_driver_class_name: Overrides
            ``spring.datasource.driver-class-name``.
    """

    uri: str | None = None
    application_name: str | None = None
    command_line_arguments: str | None = None
    deployment_properties: str | None = None
    environment_properties: str | None = None
    data_source_url: str | None = None
    data_source_user_name: str | None = None
    data_source_password: str | None = None
    data_source_driver_class_name: str | None = None

    def merged(self, **overrides: str | None) -> LaunchConfig:
        """Return a copy with every non-None override applied."""
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise TypeError(f"Unknown configuration field(s): {', '.join(sorted(unknown))}")
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def env_var_name(field_name: str) -> str:
    """Return the environment variable that configures a LaunchConfig field."""
    return f"{ENV_PREFIX}{_ENV_NAMES[field_name]}"


def config_from_env(environ: Mapping[str, str] | None = None) -> LaunchConfig:
    """
    Build a LaunchConfig from ``TASKLAUNCH_*`` environment variables.

    Empty values are treated as unset.

    Args:
        environ: Mapping to read from. Defaults to ``os.environ``.
    """
    env = os.environ if environ is None else environ
    values = {
        field_name: env.get(env_var_name(field_name)) or None
        for field_name in _ENV_NAMES
    }
    return LaunchConfig(**values)
