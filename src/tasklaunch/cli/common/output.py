"""Output formatting utilities for the CLI.

Human-facing output goes to stderr so that stdout only carries emitted
launch requests and can be piped into the next stage.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Mapping

import questionary
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

from tasklaunch.cli.common.tui_style import QUESTIONARY_STYLE_CONFIRM

_THEME = Theme(
    {
        "ok": "bold green",
        "warn": "yellow",
        "err": "bold red",
        "title": "bold cyan",
        "meta": "dim",
    }
)

_MAX_PAYLOAD_WIDTH = 60


class OutputFormat(str, Enum):
    """How an emitted launch request is rendered."""

    JSON = "json"
    TABLE = "table"


console = Console(theme=_THEME, stderr=True)


def _truncate(text: str, max_len: int) -> str:
    """Return text capped at max_len characters using an ASCII ellipsis."""
    if max_len <= 3 or len(text) <= max_len:
        return text[:max_len]
    return f"{text[: max_len - 3]}..."


def _format_properties(properties: Mapping[str, str]) -> str:
    """Render a property mapping as `k=v` lines, or a dash when empty."""
    if not properties:
        return "-"
    return escape("\n".join(f"{k}={v}" for k, v in properties.items()))


@dataclass(frozen=True)
class Out:
    """Output formatter for CLI messages and tables."""

    def _q_try(self, fn, *args, **kwargs):
        """Call questionary prompts and drop unsupported kwargs on older versions."""
        try:
            return fn(*args, **kwargs)
        except TypeError:
            for k in ("pointer", "auto_enter"):
                kwargs.pop(k, None)
            return fn(*args, **kwargs)

    def _q(self, message: str) -> str:
        """Prefix Questionary prompts to be TASKLAUNCH consistent."""
        return f"[TASKLAUNCH] {message}"

    def info(self, msg: str) -> None:
        """Print an info message."""
        console.print(f"[title]›[/] {msg}")

    def success(self, msg: str) -> None:
        """Print a success message."""
        console.print(f"[ok]✓[/] {msg}")

    def warn(self, msg: str) -> None:
        """Print a warning message."""
        console.print(f"[warn]⚠[/] {msg}")

    def error(self, msg: str) -> None:
        """Print an error message."""
        console.print(f"[err]✗[/] {msg}")

    def header(self, title: str) -> None:
        """Print a header message."""
        console.print(f"[title]{title}[/]")

    def kv(self, items: Mapping[str, Any]) -> None:
        """Print key-value pairs."""
        for k, v in items.items():
            console.print(f"[meta]{k}[/]: {escape(str(v))}")

    def confirm(self, message: str, *, default: bool = False) -> bool:
        """
        Ask the user for confirmation using a standardized Questionary prompt.

        Args:
            message: Confirmation question shown to the user.
            default: Default answer if the user just presses enter.

        Returns:
            True if the user confirms, False otherwise.
        """
        # Questionary renders `instruction=...` inline next to the echoed answer.
        console.print("[meta]Use y/n then Enter[/]")

        prompt = self._q_try(
            questionary.confirm,
            self._q(message),
            default=default,
            style=QUESTIONARY_STYLE_CONFIRM,
            qmark="✦",
            auto_enter=False,
            pointer="❯",
        )
        return bool(prompt.ask())

    def request_table(self, request: Any, title: str = "Launch request") -> None:
        """
        Expects an object with .uri .application_name .command_line_arguments
        .environment_properties .deployment_properties
        (like tasklaunch.core.requests.LaunchRequest)
        """
        t = Table(title=title, show_lines=True, show_header=False)
        t.add_column("Field", style="meta", no_wrap=True)
        t.add_column("Value")

        t.add_row("uri", f"[ok]{escape(request.uri)}[/]")
        t.add_row("applicationName", escape(request.application_name))
        t.add_row(
            "commandlineArguments",
            escape(" ".join(request.command_line_arguments)) or "-",
        )
        t.add_row(
            "environmentProperties",
            _format_properties(request.environment_properties),
        )
        t.add_row(
            "deploymentProperties",
            _format_properties(request.deployment_properties),
        )

        console.print(t)

    def rejections_table(
        self, results: Iterable[Any], title: str = "Rejected messages"
    ) -> None:
        """
        Expects objects with .inbound (a Message) and .error
        (e.g. tasklaunch.core.processor.TransformResult).
        Only results with an error are shown; # is the message position.
        """
        t = Table(title=title, show_lines=False)
        t.add_column("#", style="meta", no_wrap=True)
        t.add_column("Payload")
        t.add_column("Error", style="err")

        for index, r in enumerate(results, start=1):
            if getattr(r, "error", None) is None:
                continue
            payload = _truncate(str(getattr(r.inbound, "payload", "")), _MAX_PAYLOAD_WIDTH)
            cause = getattr(r.error, "cause", None) or r.error
            t.add_row(str(index), escape(payload) or "[meta]<empty>[/]", escape(str(cause)))

        console.print(t)


out = Out()
