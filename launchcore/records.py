"""Launch request file parsing.

Reads the JSON form of a game record and its additional applications, using the
camelCase keys produced by the metadata loader.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping

from .models.datatypes import AdditionalApplication, GameRecord, LaunchRequest
from .parsing import parse_optional_boolean


def load_launch_request(path: Path) -> LaunchRequest:
    """Load a launch request from a JSON file.

    Raises:
        ValueError: If the document is not a valid launch request.
    """

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Launch request `{path}` is not valid JSON: {exc}") from exc
    return parse_launch_request(payload)


def parse_launch_request(payload: object) -> LaunchRequest:
    """Build a `LaunchRequest` from a decoded `{"game": ..., "addApps": [...]}` payload."""

    if not isinstance(payload, Mapping):
        raise ValueError("Launch request must be a JSON object.")

    game = parse_game_record(payload.get("game"))
    raw_add_apps = payload.get("addApps")
    if raw_add_apps is None:
        raw_add_apps = []
    if not isinstance(raw_add_apps, list):
        raise ValueError("Launch request field `addApps` must be a list.")

    add_apps = tuple(
        parse_additional_application(raw, f"addApps[{index}]")
        for index, raw in enumerate(raw_add_apps)
    )
    return LaunchRequest(game=game, add_apps=add_apps)


def parse_game_record(raw: Any) -> GameRecord:
    if not isinstance(raw, Mapping):
        raise ValueError("Launch request field `game` must be an object.")

    return GameRecord(
        title=_string(raw, "title", "game"),
        application_path=_string(raw, "applicationPath", "game"),
        launch_command=_string(raw, "launchCommand", "game"),
        platform=_string(raw, "platform", "game"),
        placeholder=parse_optional_boolean(raw.get("placeholder"), "game.placeholder", False),
    )


def parse_additional_application(raw: Any, label: str) -> AdditionalApplication:
    if not isinstance(raw, Mapping):
        raise ValueError(f"`{label}` must be an object.")

    return AdditionalApplication(
        application_path=_string(raw, "applicationPath", label),
        launch_command=_string(raw, "launchCommand", label),
        auto_run_before=parse_optional_boolean(
            raw.get("autoRunBefore"), f"{label}.autoRunBefore", False
        ),
        wait_for_exit=parse_optional_boolean(
            raw.get("waitForExit"), f"{label}.waitForExit", False
        ),
        name=_string(raw, "name", label),
    )


def _string(raw: Mapping[str, Any], key: str, label: str) -> str:
    """Read a string field verbatim; missing or null values become empty strings."""

    value = raw.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"`{label}.{key}` must be a string.")
    return value
