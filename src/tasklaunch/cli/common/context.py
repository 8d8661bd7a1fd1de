"""Application context management for the CLI."""

from dataclasses import dataclass

from tasklaunch.core.config import LaunchConfig, config_from_env


@dataclass
class TransformAppContext:
    """Application context holding the resolved transform configuration."""

    config: LaunchConfig


def build_transform_context(**overrides: str | None) -> TransformAppContext:
    """Build the application context from the environment and CLI overrides.

    Args:
        overrides: LaunchConfig field values given on the command line.
            None values leave the environment value in place.

    Returns:
        TransformAppContext: Context with the resolved configuration.
    """
    config = config_from_env().merged(**overrides)
    return TransformAppContext(config=config)
