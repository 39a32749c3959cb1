"""Human-readable text for ``IRCLogger.log_event`` events.

``event_templates.json`` maps ``domain -> action -> template``; a template is
a ``str.format`` string filled from the event's keyword arguments. The file
ships inside the package next to this module.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path

CATALOG_PATH = Path(__file__).with_name("event_templates.json")
LOAD_ERROR_KEY = ("app", "load_error")

EVENT_TEMPLATES: dict[tuple[str, str], str] = {}


def _flatten(tree: object) -> dict[tuple[str, str], str]:
    """Turn the nested JSON object into ``(domain, action)`` keys.

    Entries that are not string-to-string pairs are skipped.
    """
    if not isinstance(tree, Mapping):
        return {}
    return {
        (domain, action): text
        for domain, actions in tree.items()
        if isinstance(domain, str) and isinstance(actions, Mapping)
        for action, text in actions.items()
        if isinstance(action, str) and isinstance(text, str)
    }


def _load_event_templates(path: Path | None = None) -> dict[tuple[str, str], str]:
    source = path or CATALOG_PATH
    try:
        tree = json.loads(source.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {LOAD_ERROR_KEY: f"Event catalog {source.name} not found"}
    except (OSError, ValueError) as e:
        return {LOAD_ERROR_KEY: f"Event catalog {source.name} unreadable: {e}"[:200]}
    return _flatten(tree)


def reload_event_templates(path: Path | None = None) -> None:
    """Replace the active catalog, e.g. with a customised copy of the JSON file."""
    global EVENT_TEMPLATES  # noqa: PLW0603
    EVENT_TEMPLATES = _load_event_templates(path)


reload_event_templates()

__all__ = ["CATALOG_PATH", "EVENT_TEMPLATES", "reload_event_templates"]
