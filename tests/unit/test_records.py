"""Unit tests for launch request file parsing."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from launchcore.models.datatypes import AdditionalApplication, GameRecord
from launchcore.records import load_launch_request, parse_launch_request


def test_load_launch_request_reads_game_and_add_apps_in_order(tmp_path: Path) -> None:
    """Records should map camelCase keys and keep add-app order."""

    path = tmp_path / "doom.json"
    path.write_text(
        json.dumps(
            {
                "game": {
                    "title": "Doom",
                    "applicationPath": "eXo\\eXoDOS\\!dos\\doom\\DOOM.bat",
                    "launchCommand": "",
                    "platform": "MS-DOS",
                },
                "addApps": [
                    {
                        "name": "Setup",
                        "applicationPath": "eXo/setup.bat",
                        "autoRunBefore": "yes",
                        "waitForExit": True,
                    },
                    {"applicationPath": ":message:", "launchCommand": "Hi"},
                ],
            }
        ),
        encoding="utf-8",
    )

    request = load_launch_request(path)

    assert request.game == GameRecord(
        title="Doom",
        application_path="eXo\\eXoDOS\\!dos\\doom\\DOOM.bat",
        launch_command="",
        platform="MS-DOS",
        placeholder=False,
    )
    assert request.add_apps == (
        AdditionalApplication(
            application_path="eXo/setup.bat",
            launch_command="",
            auto_run_before=True,
            wait_for_exit=True,
            name="Setup",
        ),
        AdditionalApplication(application_path=":message:", launch_command="Hi"),
    )


def test_parse_launch_request_rejects_invalid_shapes() -> None:
    """Malformed documents should fail with actionable messages."""

    with pytest.raises(ValueError, match="`game` must be an object"):
        parse_launch_request({"addApps": []})
    with pytest.raises(ValueError, match="`addApps` must be a list"):
        parse_launch_request({"game": {"title": "x"}, "addApps": {}})
    for falsy in ("", 0, False):
        with pytest.raises(ValueError, match="`addApps` must be a list"):
            parse_launch_request({"game": {"title": "x"}, "addApps": falsy})
    with pytest.raises(ValueError, match="autoRunBefore"):
        parse_launch_request(
            {"game": {"title": "x"}, "addApps": [{"autoRunBefore": "sometimes"}]}
        )
    with pytest.raises(ValueError, match="applicationPath"):
        parse_launch_request({"game": {"applicationPath": 5}})


def test_load_launch_request_reports_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{", encoding="utf-8")

    with pytest.raises(ValueError, match="not valid JSON"):
        load_launch_request(path)
