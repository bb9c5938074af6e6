import json
import tomllib
from pathlib import Path
from typing import Any, Mapping

import yaml

from .types import (
    OUTCOMES,
    RUNNER_KINDS,
    CatalogConfig,
    ConfigError,
    SubjectConfig,
    UnsupportedConfigFormatError,
)


def load_catalog(path: str | Path) -> CatalogConfig:
    pure_path = Path(path).expanduser().resolve()

    if not pure_path.exists():
        raise ConfigError(f"Config file not found: {pure_path}")

    if not pure_path.is_file():
        raise ConfigError(f"Config path is not a file: {pure_path}")

    fmt = _detect_format(pure_path)
    raw_file = _parse_file(pure_path, fmt)
    catalog = _build_catalog_config(raw_file)
    return catalog


def _detect_format(path: Path) -> str:
    fmt = path.suffix
    match fmt:
        case ".yaml" | ".yml":
            return "yaml"
        case ".toml":
            return "toml"
        case ".json":
            return "json"
        case _:
            raise UnsupportedConfigFormatError(
                f"Non supported file extension: {fmt}\n Expected format: .yml/.yaml, .toml, .json"
            )


def _parse_file(path: Path, fmt: str) -> Mapping[str, Any]:
    match fmt:
        case "yaml":
            return _parse_yaml(path)
        case "toml":
            return _parse_toml(path)
        case "json":
            return _parse_json(path)
        case _:
            raise AssertionError("Unreachable")


def _parse_yaml(path: Path) -> Mapping[str, Any]:
    try:
        raw_file = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"{path}: invalid YAML") from exc

    return _require_mapping(path, "YAML", raw_file)


def _parse_toml(path: Path) -> Mapping[str, Any]:
    try:
        raw_file = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"{path}: invalid TOML") from exc

    return _require_mapping(path, "TOML", raw_file)


def _parse_json(path: Path) -> Mapping[str, Any]:
    try:
        raw_file = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"{path}: invalid JSON") from exc

    return _require_mapping(path, "JSON", raw_file)


def _require_mapping(path: Path, fmt: str, raw_file: Any) -> Mapping[str, Any]:
    if not isinstance(raw_file, Mapping):
        raise ConfigError(
            f"{path}: {fmt} parsed succesfully but top-level value is not an object: {type(raw_file)}"
        )

    return raw_file


def _build_catalog_config(raw: Mapping[str, Any]) -> CatalogConfig:
    groups: dict[str, list[SubjectConfig]] = {}

    for field in raw.keys():
        if field not in {"groups", "runner", "time_scale"}:
            raise ConfigError(f"Can't process top-level field: {field}")

    if "groups" not in raw:
        raise ConfigError("Missing 'groups' field")

    if not isinstance(raw["groups"], Mapping):
        raise ConfigError(f"'groups' must be a mapping, got {type(raw['groups'])}")

    if len(raw["groups"]) < 1:
        raise ConfigError("There must be at least one group in the config file")

    for group, subjects in raw["groups"].items():
        if not isinstance(group, str):
            raise ConfigError(f"Group name must be a string, got {type(group)}")

        group_norm = group.strip()

        if len(group_norm) < 1:
            raise ConfigError("A group name can't be empty")

        if group_norm in groups:
            raise ConfigError(f"Duplicate group after normalization: {group_norm}")

        groups[group_norm] = _build_group(group_norm, subjects)

    runner = raw.get("runner", "simulate")
    if runner not in RUNNER_KINDS:
        raise ConfigError(
            f"Unknown runner: {runner!r}, expected one of {', '.join(RUNNER_KINDS)}"
        )

    time_scale = raw.get("time_scale", 1.0)
    if isinstance(time_scale, bool) or not isinstance(time_scale, (int, float)):
        raise ConfigError(f"'time_scale' must be a number, got {type(time_scale)}")

    if time_scale < 0:
        raise ConfigError("'time_scale' can't be negative")

    return CatalogConfig(groups=groups, runner=runner, time_scale=float(time_scale))


def _build_group(group: str, subjects: Any) -> list[SubjectConfig]:
    built: list[SubjectConfig] = []
    seen: set[str] = set()

    # A plain list only names subjects; a mapping can carry per-subject fields.
    if isinstance(subjects, list):
        entries = [(name, None) for name in subjects]
    elif isinstance(subjects, Mapping):
        entries = list(subjects.items())
    else:
        raise ConfigError(f"{group}: subjects should be a list or a mapping")

    if len(entries) < 1:
        raise ConfigError(f"{group}: A group needs at least one subject")

    for name, fields in entries:
        if not isinstance(name, str):
            raise ConfigError(f"{group}: {name} should be a string")

        name_norm = name.strip()

        if len(name_norm) < 1:
            raise ConfigError(f"{group}: A subject name can't be empty")

        if name_norm in seen:
            raise ConfigError(f"{group}: Duplicate subject {name_norm}")

        seen.add(name_norm)
        built.append(_build_subject(group, name_norm, fields))

    return built


def _build_subject(group: str, name: str, fields: Any) -> SubjectConfig:
    keys = {"message", "duration_ms", "outcome", "command", "env", "working_dir"}
    subject_id = f"{group}.{name}"
    values: dict[str, Any] = {}
    env = {}

    if fields is None:
        return SubjectConfig(group, name)

    if not isinstance(fields, Mapping):
        raise ConfigError(f"{subject_id} must be a mapping")

    for field in fields.keys():
        if field not in keys:
            raise ConfigError(f"{subject_id}: Can't process: {field}")

    if "message" in fields:
        if not isinstance(fields["message"], str):
            raise ConfigError(f"{subject_id}: The message should be a string")

        values["message"] = fields["message"]

    if "duration_ms" in fields:
        duration = fields["duration_ms"]
        if isinstance(duration, bool) or not isinstance(duration, int):
            raise ConfigError(f"{subject_id}: duration_ms should be an integer")

        if duration < 0:
            raise ConfigError(f"{subject_id}: duration_ms can't be negative")

        values["duration_ms"] = duration

    if "outcome" in fields:
        if not isinstance(fields["outcome"], str):
            raise ConfigError(f"{subject_id}: The outcome should be a string")

        outcome = fields["outcome"].strip().upper()

        if outcome not in OUTCOMES:
            raise ConfigError(
                f"{subject_id}: Unknown outcome {fields['outcome']!r}, expected one of {', '.join(OUTCOMES)}"
            )

        values["outcome"] = outcome

    if "command" in fields:
        if not isinstance(fields["command"], str):
            raise ConfigError(f"{subject_id}: The command should be a string")

        if len(fields["command"].strip()) < 1:
            raise ConfigError(f"{subject_id}: Command missing")

        values["command"] = fields["command"].strip()

    if "env" in fields:
        if not isinstance(fields["env"], Mapping):
            raise ConfigError(f"{subject_id}: Env should be a mapping")

        for key, item in fields["env"].items():
            if not isinstance(key, str):
                raise ConfigError(f"{subject_id}: {key} should be a string")

            if len(key.strip()) < 1:
                raise ConfigError(f"{subject_id}: A key can't be empty")

            if not isinstance(item, str):
                raise ConfigError(f"{subject_id}: {item} should be a string")

            env[key.strip()] = item

    if "working_dir" in fields:
        if not isinstance(fields["working_dir"], str):
            raise ConfigError(f"{subject_id}: The working_dir should be a string")

        if len(fields["working_dir"].strip()) < 1:
            raise ConfigError(
                f"{subject_id}: Please provide a string or remove this field"
            )

        values["working_dir"] = fields["working_dir"].strip()

    return SubjectConfig(group, name, env=env, **values)
