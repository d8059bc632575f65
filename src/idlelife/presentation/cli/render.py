"""Shared CLI rendering helpers."""
from __future__ import annotations

import os
import textwrap
from typing import Iterable, List, Sequence

from idlelife.domain.entities import Character
from idlelife.domain.game_log import LogEntry
from idlelife.domain.progression import DAYS_PER_YEAR


def debug_enabled() -> bool:
    """Return True only when IDLELIFE_DEBUG is explicitly set to '1'."""
    return os.getenv("IDLELIFE_DEBUG") == "1"


def wrap_text_for_box(text: str, width: int, *, indent_continuation: bool = True) -> list[str]:
    """
    Wrap text to fit within a fixed width, breaking on word boundaries.

    Args:
        text: The text to wrap
        width: Maximum width per line
        indent_continuation: If True, indent continuation lines with 2 spaces

    Returns:
        List of wrapped lines, each <= width characters
    """
    if not text or width <= 0:
        return [text] if text else [""]

    prefix = "- " if text.startswith("- ") else ""
    content = text[len(prefix):]
    continuation = "  " if indent_continuation else ""
    lines = textwrap.wrap(
        content,
        width=width - len(prefix),
        subsequent_indent=continuation if not prefix else "",
        break_long_words=False,
        break_on_hyphens=False,
    )
    if not lines:
        return [text]
    if prefix:
        lines = [prefix + lines[0]] + [continuation + line for line in lines[1:]]
    return lines


def format_age(days: float) -> str:
    """Render a day count as whole years plus leftover days."""
    years, remainder = divmod(int(days), DAYS_PER_YEAR)
    if remainder == 0:
        return f"{years} years"
    return f"{years} years, {remainder} days"


def format_status_lines(character: Character) -> List[str]:
    return [
        f"{pool.description}: {pool.value:g}/{pool.max:g}"
        for pool in character.status.values()
    ]


def format_attribute_lines(character: Character, *, show_debug: bool = False) -> List[str]:
    lines = []
    for name, state in character.attributes.items():
        line = f"{state.icon} {name.replace('_', ' ').title()}: {state.value:.2f} (aptitude {state.aptitude:.2f})"
        if show_debug:
            line += f" - {state.description}"
        lines.append(line)
    return lines


def format_lifespan_lines(character: Character) -> List[str]:
    lines = [
        f"Age: {format_age(character.age)}",
        f"Lifespan: {format_age(character.lifespan)}",
        f"Money: {character.money:g}",
    ]
    if debug_enabled():
        lines.append(
            f"[DEBUG] base {character.base_lifespan:g}, food {character.food_lifespan:g}, "
            f"stat {character.stat_lifespan:.2f}, spirituality "
            f"{character.attributes['spirituality'].value:.2f}"
        )
    return lines


def format_log_entry(entry: LogEntry) -> str:
    if entry.style == "INJURY":
        return f"! {entry.message}"
    return entry.message


def render_heading(title: str) -> None:
    """Print a consistent section heading."""
    print(f"\n=== {title} ===")


def render_menu(title: str, options: Sequence[str]) -> None:
    """Display a menu section with numbered options."""
    render_heading(title)
    for idx, label in enumerate(options, start=1):
        print(f"{idx}. {label}")


def render_bullet_lines(lines: Iterable[str]) -> None:
    """Print bullet-prefixed lines."""
    for line in lines:
        for wrapped in wrap_text_for_box(f"- {line}", 78):
            print(wrapped)
