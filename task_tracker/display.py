"""Display formatting for task output."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from rich.console import Console
from rich.text import Text

from task_tracker.models import Task
from task_tracker.themes import accent_for, palette_for

ID_STYLE = "bright_black"
DESCRIPTION_STYLE = "white"


@dataclass(frozen=True)
class OutputStyle:
    """Colors used for one run, resolved from the stored theme."""

    accent: str
    success: str
    error: str
    warning: str
    info: str

    @classmethod
    def local(cls, theme: str) -> OutputStyle:
        """Single accent for listings; fixed colors for status messages."""
        accent = accent_for(theme)
        return cls(accent=accent, success="green", error="red", warning="yellow", info=accent)

    @classmethod
    def remote(cls, theme: str) -> OutputStyle:
        palette = palette_for(theme)
        return cls(
            accent=palette.info,
            success=palette.success,
            error=palette.error,
            warning=palette.warning,
            info=palette.info,
        )

    @classmethod
    def for_mode(cls, mode: str, theme: str) -> OutputStyle:
        return cls.remote(theme) if mode == "remote" else cls.local(theme)


def format_task(task: Task, style: OutputStyle) -> list[Text]:
    """Format one task as three indented lines."""
    return [
        Text.assemble(
            "    ",
            (task.name, style.accent),
            " ",
            (f"[ID{task.id}]", ID_STYLE),
        ),
        Text.assemble("        - ", (task.description, DESCRIPTION_STYLE)),
        Text.assemble("        - ", (task.eta, style.accent)),
    ]


def format_task_groups(
    groups: Mapping[str, Sequence[Task]],
    style: OutputStyle,
) -> list[Text]:
    """Format grouped tasks: a header line per category, then its tasks."""
    lines: list[Text] = []
    for category, tasks in groups.items():
        lines.append(Text(category, style=style.accent))
        for task in tasks:
            lines.extend(format_task(task, style))
    return lines


class Presenter:
    """Writes command results to the terminal in the run's colors."""

    def __init__(self, style: OutputStyle, console: Console | None = None) -> None:
        self._style = style
        self._console = console or Console(highlight=False)

    @property
    def style(self) -> OutputStyle:
        return self._style

    def _print(self, message: str, color: str) -> None:
        self._console.print(Text(message, style=color))

    def success(self, message: str) -> None:
        self._print(message, self._style.success)

    def error(self, message: str) -> None:
        self._print(message, self._style.error)

    def warning(self, message: str) -> None:
        self._print(message, self._style.warning)

    def info(self, message: str) -> None:
        self._print(message, self._style.info)

    def task_groups(self, groups: Mapping[str, Sequence[Task]]) -> None:
        if not any(groups.values()):
            self.warning("No tasks found.")
            return
        for line in format_task_groups(groups, self._style):
            self._console.print(line)

    def theme_changed(self, style: OutputStyle) -> None:
        """Confirm a theme change using the newly selected colors."""
        self._style = style
        self._print("Theme changed successfully!", style.accent)
