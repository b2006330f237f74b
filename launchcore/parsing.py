"""Shared parsing helpers for config, mapping and record value normalization."""

from __future__ import annotations


_FLAG_TOKENS = {
    **dict.fromkeys(("1", "true", "yes", "on"), True),
    **dict.fromkeys(("0", "false", "no", "off"), False),
}


def normalize_optional_string(value: object) -> str | None:
    """Return a trimmed field value, or `None` for missing or blank fields.

    Used for exec mapping paths, config paths and environment variables, where an
    empty string means the field is absent.
    """

    if value is None:
        return None
    return str(value).strip() or None


def parse_permissive_boolean(value: object) -> bool | None:
    """Read a mapping flag such as `includeArgs` from JSON, YAML or env text.

    Returns `None` when the value is not a recognized flag token.
    """

    if isinstance(value, bool):
        return value

    token = normalize_optional_string(value)
    if token is None:
        return None
    return _FLAG_TOKENS.get(token.lower())


def parse_optional_boolean(value: object, field_name: str, default: bool) -> bool:
    """Parse an optional boolean field, using `default` for missing/blank values.

    Raises:
        ValueError: If a non-blank value is not one of the accepted boolean tokens.
    """

    if value is None or (isinstance(value, str) and not value.strip()):
        return default

    parsed = parse_permissive_boolean(value)
    if parsed is not None:
        return parsed

    raise ValueError(
        f"`{field_name}` must be a boolean value (`true`/`false`, `1`/`0`, `yes`/`no`)."
    )


def split_csv_tokens(value: object) -> tuple[str, ...]:
    """Split a comma-separated value into stripped non-empty tokens."""

    normalized = normalize_optional_string(value)
    if normalized is None:
        return ()
    return tuple(token.strip() for token in normalized.split(",") if token.strip())
