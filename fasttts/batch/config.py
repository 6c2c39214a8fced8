"""Bulk synthesis configuration model and loader.

Responsibilities:
- Define the typed shape of a bulk configuration (`defaults` + `items`).
- Load JSON or YAML bulk files, chosen by file extension.
- Validate keys and field types with source-labelled errors.

Key types:
- `BulkDefaults`: optional values shared by every item.
- `BulkItem`: one synthesis job with optional per-item overrides.
- `BulkConfig`: defaults plus the ordered item list.
- `BulkConfigLoader`: static construction helpers for `BulkConfig`.

Notes:
- Encoding and gender stay raw strings here; they are parsed per item when
  effective parameters are resolved, so a bad value fails only its own item.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import json
from pathlib import Path
from typing import Any, Mapping

import yaml

from ..errors import ConfigError
from ..io.storage import read_text
from ..parsing import normalize_optional_string, parse_permissive_boolean


@dataclass(frozen=True, slots=True)
class BulkDefaults:
    """Values applied to every item that does not set its own."""

    language: str | None = None
    voice: str | None = None
    gender: str | None = None
    rate: float | None = None
    pitch: float | None = None
    sample_rate: int | None = None
    encoding: str | None = None
    volume_gain_db: float | None = None
    effects_profile_ids: tuple[str, ...] | None = None
    ssml: bool | None = None
    output_dir: str | None = None


@dataclass(frozen=True, slots=True)
class BulkItem:
    """One bulk synthesis job.

    `None` means "not set on this item"; the defaults and then the built-in
    fallbacks apply.
    """

    text: str
    output: str | None = None
    language: str | None = None
    voice: str | None = None
    gender: str | None = None
    rate: float | None = None
    pitch: float | None = None
    sample_rate: int | None = None
    encoding: str | None = None
    volume_gain_db: float | None = None
    effects_profile_ids: tuple[str, ...] | None = None
    ssml: bool | None = None


@dataclass(frozen=True, slots=True)
class BulkConfig:
    """Parsed bulk configuration."""

    items: tuple[BulkItem, ...]
    defaults: BulkDefaults = field(default_factory=BulkDefaults)


class BulkConfigLoader:
    """Factory methods for creating `BulkConfig` from files and mappings."""

    _YAML_SUFFIXES = frozenset({".yml", ".yaml"})
    _SUPPORTED_ROOT_KEYS = frozenset({"defaults", "items"})
    _SHARED_KEYS = frozenset(
        {
            "language",
            "voice",
            "gender",
            "rate",
            "pitch",
            "sampleRate",
            "encoding",
            "volumeGainDb",
            "effectsProfileId",
            "ssml",
        }
    )
    _SUPPORTED_DEFAULT_KEYS = _SHARED_KEYS | {"outputDir"}
    _SUPPORTED_ITEM_KEYS = _SHARED_KEYS | {"text", "output"}

    @staticmethod
    def from_file(path: Path) -> BulkConfig:
        """Load a bulk config; `.yml`/`.yaml` parse as YAML, anything else as JSON."""

        raw_text = read_text(path, "config")
        if path.suffix.lower() in BulkConfigLoader._YAML_SUFFIXES:
            source_label = f"YAML config `{path}`"
            payload = BulkConfigLoader._parse_yaml_payload(raw_text, source_label)
        else:
            source_label = f"JSON config `{path}`"
            payload = BulkConfigLoader._parse_json_payload(raw_text, source_label)
        return BulkConfigLoader.from_mapping(payload, source_label=source_label)

    @staticmethod
    def from_mapping(payload: object, source_label: str = "config") -> BulkConfig:
        """Build a validated `BulkConfig` from an already-decoded payload."""

        if not isinstance(payload, Mapping):
            raise ConfigError(f"{source_label} must contain a top-level mapping/object.")
        BulkConfigLoader._validate_keys(
            payload, BulkConfigLoader._SUPPORTED_ROOT_KEYS, source_label
        )

        if "items" not in payload:
            raise ConfigError(f"{source_label} is missing required key(s): items.")
        raw_items = payload["items"]
        if not isinstance(raw_items, list):
            raise ConfigError(f"{source_label} field `items` must be a list.")

        raw_defaults = payload.get("defaults")
        if raw_defaults is None:
            defaults = BulkDefaults()
        else:
            defaults = BulkConfigLoader._build_defaults(raw_defaults, f"{source_label} defaults")

        items = tuple(
            BulkConfigLoader._build_item(raw_item, f"{source_label} item {index}")
            for index, raw_item in enumerate(raw_items, start=1)
        )
        return BulkConfig(items=items, defaults=defaults)

    @staticmethod
    def _parse_yaml_payload(raw_text: str, source_label: str) -> object:
        try:
            return yaml.safe_load(raw_text)
        except yaml.YAMLError as exc:
            raise ConfigError(f"{source_label} is not valid YAML: {exc}") from exc

    @staticmethod
    def _parse_json_payload(raw_text: str, source_label: str) -> object:
        try:
            return json.loads(raw_text)
        except json.JSONDecodeError as exc:
            raise ConfigError(
                f"{source_label} is not valid JSON: {exc.msg} "
                f"(line {exc.lineno}, column {exc.colno})"
            ) from exc

    @staticmethod
    def _build_defaults(raw: object, source_label: str) -> BulkDefaults:
        if not isinstance(raw, Mapping):
            raise ConfigError(f"{source_label} must be a mapping/object.")
        BulkConfigLoader._validate_keys(
            raw, BulkConfigLoader._SUPPORTED_DEFAULT_KEYS, source_label
        )
        return BulkDefaults(
            output_dir=BulkConfigLoader._optional_string(raw, "outputDir", source_label),
            **BulkConfigLoader._shared_fields(raw, source_label),
        )

    @staticmethod
    def _build_item(raw: object, source_label: str) -> BulkItem:
        if not isinstance(raw, Mapping):
            raise ConfigError(f"{source_label} must be a mapping/object.")
        BulkConfigLoader._validate_keys(raw, BulkConfigLoader._SUPPORTED_ITEM_KEYS, source_label)

        text = raw.get("text")
        if not isinstance(text, str):
            raise ConfigError(f"{source_label} requires string field `text`.")
        return BulkItem(
            text=text,
            output=BulkConfigLoader._optional_string(raw, "output", source_label),
            **BulkConfigLoader._shared_fields(raw, source_label),
        )

    @staticmethod
    def _shared_fields(raw: Mapping[str, Any], source_label: str) -> dict[str, Any]:
        """Read the fields common to defaults and items."""

        return {
            "language": BulkConfigLoader._optional_string(raw, "language", source_label),
            "voice": BulkConfigLoader._optional_string(raw, "voice", source_label),
            "gender": BulkConfigLoader._optional_string(raw, "gender", source_label),
            "rate": BulkConfigLoader._optional_float(raw, "rate", source_label),
            "pitch": BulkConfigLoader._optional_float(raw, "pitch", source_label),
            "sample_rate": BulkConfigLoader._optional_int(raw, "sampleRate", source_label),
            "encoding": BulkConfigLoader._optional_string(raw, "encoding", source_label),
            "volume_gain_db": BulkConfigLoader._optional_float(raw, "volumeGainDb", source_label),
            "effects_profile_ids": BulkConfigLoader._optional_string_list(
                raw, "effectsProfileId", source_label
            ),
            "ssml": BulkConfigLoader._optional_boolean(raw, "ssml", source_label),
        }

    @staticmethod
    def _validate_keys(
        payload: Mapping[str, Any], supported: frozenset[str], source_label: str
    ) -> None:
        unknown = sorted(str(key) for key in set(payload).difference(supported))
        if unknown:
            key_list = ", ".join(unknown)
            raise ConfigError(f"{source_label} includes unsupported key(s): {key_list}.")

    @staticmethod
    def _optional_string(raw: Mapping[str, Any], key: str, source_label: str) -> str | None:
        """Read an optional string field and normalize blank values to `None`."""

        if raw.get(key) is None:
            return None
        value = raw[key]
        if not isinstance(value, str):
            raise ConfigError(f"{source_label} field `{key}` must be a string.")
        return normalize_optional_string(value)

    @staticmethod
    def _optional_float(raw: Mapping[str, Any], key: str, source_label: str) -> float | None:
        if raw.get(key) is None:
            return None
        value = raw[key]
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigError(f"{source_label} field `{key}` must be a number.")
        return float(value)

    @staticmethod
    def _optional_int(raw: Mapping[str, Any], key: str, source_label: str) -> int | None:
        if raw.get(key) is None:
            return None
        value = raw[key]
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"{source_label} field `{key}` must be an integer.")
        return value

    @staticmethod
    def _optional_boolean(raw: Mapping[str, Any], key: str, source_label: str) -> bool | None:
        if raw.get(key) is None:
            return None
        parsed = parse_permissive_boolean(raw[key])
        if parsed is None:
            raise ConfigError(
                f"{source_label} field `{key}` must be a boolean value "
                "(`true`/`false`, `1`/`0`, `yes`/`no`)."
            )
        return parsed

    @staticmethod
    def _optional_string_list(
        raw: Mapping[str, Any], key: str, source_label: str
    ) -> tuple[str, ...] | None:
        """Read an optional list of strings; an explicit empty list is kept."""

        if raw.get(key) is None:
            return None
        value = raw[key]
        if not isinstance(value, list) or not all(isinstance(entry, str) for entry in value):
            raise ConfigError(f"{source_label} field `{key}` must be a list of strings.")
        return tuple(value)
