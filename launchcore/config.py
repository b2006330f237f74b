"""Configuration model and loaders for launchcore.

Responsibilities:
- Define launcher configuration as a typed dataclass.
- Provide loader entry points for YAML- and environment-based configuration.
- Locate the platform mapping file and the collection's exec mapping file.

Key types:
- `LauncherConfig`: normalized launcher settings.
- `ConfigLoader`: static construction helpers for `LauncherConfig`.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from .mappings.loader import EXEC_MAPPINGS_FILENAME, mappings_filename
from .parsing import normalize_optional_string, split_csv_tokens
from .platforms import HostPlatform

_DEFAULT_JSON_FOLDER = "Data"


@dataclass(slots=True)
class LauncherConfig:
    """Launcher configuration.

    Attributes:
        collection_root: Root directory of the game collection.
        native_platforms: Platform names whose games prefer native executables.
        mappings_dir: Directory holding `mappings.<platform>.json` files.
        json_folder: Collection-relative folder holding `execs.json`.
        working_dir: Ambient working directory for rules that do not pin one.
    """

    collection_root: Path
    native_platforms: tuple[str, ...] = ()
    mappings_dir: Path = Path(".")
    json_folder: str = _DEFAULT_JSON_FOLDER
    working_dir: Path | None = None

    def validate(self) -> None:
        """Validate configuration values before launching."""

        if not str(self.collection_root).strip():
            raise ValueError("`collection_root` must be a non-empty path.")
        if not self.json_folder.strip():
            raise ValueError("`json_folder` must be a non-empty string.")

    def is_native(self, platform_name: str | None) -> bool:
        """Return whether games of `platform_name` prefer native executables."""

        if not platform_name:
            return False
        return platform_name in self.native_platforms

    @property
    def exec_mappings_path(self) -> Path:
        return self.collection_root / self.json_folder / EXEC_MAPPINGS_FILENAME

    def mappings_path(self, platform: HostPlatform) -> Path:
        return self.mappings_dir / mappings_filename(platform)


class ConfigLoader:
    """Factory methods for building `LauncherConfig` objects."""

    _SUPPORTED_YAML_KEYS = frozenset(
        {
            "collection_root",
            "native_platforms",
            "mappings_dir",
            "json_folder",
            "working_dir",
        }
    )
    _REQUIRED_YAML_KEYS = frozenset({"collection_root"})

    @staticmethod
    def from_yaml(path: Path) -> LauncherConfig:
        """Load config from a YAML file.

        Relative paths are resolved against the config file's directory.
        """

        payload = yaml.safe_load(path.read_text(encoding="utf-8"))
        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise ValueError(f"YAML config `{path}` must contain a top-level mapping/object.")
        return ConfigLoader._build_config_from_mapping(
            payload,
            source_label=f"YAML config `{path}`",
            base_dir=path.resolve().parent,
        )

    @staticmethod
    def from_env(env: Mapping[str, str] | None = None) -> LauncherConfig:
        """Load config from environment variables.

        Relative paths are resolved against the current directory.
        """

        source = env if env is not None else os.environ
        root = normalize_optional_string(source.get("LAUNCHCORE_COLLECTION_ROOT"))
        if root is None:
            raise ValueError("Environment variable `LAUNCHCORE_COLLECTION_ROOT` is required.")

        payload: dict[str, Any] = {"collection_root": root}
        optional_keys = {
            "native_platforms": "LAUNCHCORE_NATIVE_PLATFORMS",
            "mappings_dir": "LAUNCHCORE_MAPPINGS_DIR",
            "json_folder": "LAUNCHCORE_JSON_FOLDER",
            "working_dir": "LAUNCHCORE_WORKING_DIR",
        }
        for key, env_key in optional_keys.items():
            value = normalize_optional_string(source.get(env_key))
            if value is not None:
                payload[key] = value

        return ConfigLoader._build_config_from_mapping(
            payload, source_label="Environment", base_dir=Path.cwd()
        )

    @staticmethod
    def _build_config_from_mapping(
        payload: Mapping[str, Any], source_label: str, base_dir: Path
    ) -> LauncherConfig:
        """Build and validate config from a normalized mapping payload."""

        ConfigLoader._validate_keys(payload, source_label)

        collection_root = ConfigLoader._required_path(payload, "collection_root", source_label)
        mappings_dir = ConfigLoader._optional_path(payload, "mappings_dir")
        working_dir = ConfigLoader._optional_path(payload, "working_dir")
        json_folder = normalize_optional_string(payload.get("json_folder"))

        config = LauncherConfig(
            collection_root=_anchor(collection_root, base_dir),
            native_platforms=ConfigLoader._platform_list(
                payload.get("native_platforms"), source_label
            ),
            mappings_dir=_anchor(mappings_dir, base_dir) if mappings_dir else base_dir,
            json_folder=json_folder or _DEFAULT_JSON_FOLDER,
            working_dir=_anchor(working_dir, base_dir) if working_dir else None,
        )
        config.validate()
        return config

    @staticmethod
    def _validate_keys(payload: Mapping[str, Any], source_label: str) -> None:
        """Validate supported and required keys."""

        unknown = sorted(set(payload).difference(ConfigLoader._SUPPORTED_YAML_KEYS))
        if unknown:
            key_list = ", ".join(unknown)
            raise ValueError(f"{source_label} includes unsupported key(s): {key_list}.")

        missing = sorted(
            key for key in ConfigLoader._REQUIRED_YAML_KEYS if key not in payload
        )
        if missing:
            key_list = ", ".join(missing)
            raise ValueError(f"{source_label} is missing required key(s): {key_list}.")

    @staticmethod
    def _required_path(payload: Mapping[str, Any], key: str, source_label: str) -> Path:
        """Read a required non-empty path-like field from a payload."""

        value = ConfigLoader._optional_path(payload, key)
        if value is None:
            raise ValueError(f"{source_label} requires non-empty `{key}`.")
        return value

    @staticmethod
    def _optional_path(payload: Mapping[str, Any], key: str) -> Path | None:
        value = normalize_optional_string(payload.get(key))
        if value is None:
            return None
        return Path(value).expanduser()

    @staticmethod
    def _platform_list(raw: object, source_label: str) -> tuple[str, ...]:
        """Accept a YAML list or a comma-separated string of platform names."""

        if raw is None:
            return ()
        if isinstance(raw, str):
            return split_csv_tokens(raw)
        if isinstance(raw, list):
            names = (normalize_optional_string(item) for item in raw)
            return tuple(name for name in names if name is not None)
        raise ValueError(
            f"{source_label} field `native_platforms` must be a list or comma-separated string."
        )

def _anchor(path: Path, base_dir: Path) -> Path:
    if path.is_absolute():
        return path
    return base_dir / path
