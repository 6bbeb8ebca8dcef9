# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Layered configuration from YAML/TOML files, env vars and explicit overrides."""

from __future__ import annotations

import importlib.resources
import os
import re
import tomllib
import typing
from collections.abc import Callable, Collection, Mapping
from pathlib import Path
from typing import Any, TypeVar, cast

import yaml  # type: ignore[import-untyped]
from pydantic import BaseModel, ValidationError

from swaggerfly.kernel.exceptions import MalformedValueError

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)

_PLACEHOLDER_RE = re.compile(r"\$\{([^}]+)\}")

_CONFIG_PROPERTIES_ATTR = "__swaggerfly_config_prefix__"

_ROOT_NAMESPACE = "swaggerfly."
_ENV_PREFIX = "SWAGGERFLY_"
_PROFILES_KEY = "swaggerfly.profiles.active"


def config_properties(prefix: str) -> Callable[[type[T]], type[T]]:
    """Mark a Pydantic model as bindable to a configuration prefix.

    Config.bind() resolves every declared field under *prefix* and runs
    model_validate() on the result, so malformed input fails at startup.

    Usage:
        @config_properties(prefix="swaggerfly.swagger-ui")
        class SwaggerUiProperties(BaseModel):
            path: str = "swagger-ui"
    """

    def decorator(cls: type[T]) -> type[T]:
        setattr(cls, _CONFIG_PROPERTIES_ATTR, prefix)
        return cls

    return decorator


def config_prefix(cls: type) -> str | None:
    """The prefix a class was bound to with @config_properties, if any."""
    return getattr(cls, _CONFIG_PROPERTIES_ATTR, None)


def env_var_name(key: str) -> str:
    """Map a dotted config key to its environment variable.

    ``swaggerfly.swagger-ui.always-include`` -> ``SWAGGERFLY_SWAGGER_UI_ALWAYS_INCLUDE``
    """
    base = key.removeprefix(_ROOT_NAMESPACE)
    return _ENV_PREFIX + base.upper().replace(".", "_").replace("-", "_")


class Config:
    """Hierarchical configuration with dot-notation access.

    Priority (highest wins):
    1. Explicit overrides (e.g. ``--set key=value`` on the command line)
    2. Environment variables (SWAGGERFLY_SECTION_KEY format)
    3. Configuration dict / YAML / TOML file values
    4. Model defaults
    """

    def __init__(
        self,
        data: dict[str, Any] | None = None,
        overrides: Mapping[str, Any] | None = None,
    ) -> None:
        self._data: dict[str, Any] = data or {}
        self._overrides: dict[str, Any] = dict(overrides or {})
        self._loaded_sources: list[str] = []
        # Unmerged file sources, lowest priority first
        self._layers: list[dict[str, Any]] = [self._data]

    @property
    def loaded_sources(self) -> list[str]:
        """List of config file paths that were loaded, in merge order."""
        return list(self._loaded_sources)

    @property
    def overrides(self) -> dict[str, Any]:
        """Explicit overrides, keyed by dotted config key."""
        return dict(self._overrides)

    def to_dict(self) -> dict[str, Any]:
        """Return a shallow copy of the raw configuration data."""
        return dict(self._data)

    @classmethod
    def from_sources(
        cls,
        base_dir: str | Path,
        active_profiles: list[str] | None = None,
        load_defaults: bool = True,
        overrides: Mapping[str, Any] | None = None,
    ) -> Config:
        """Load and merge config from multiple sources.

        Merge order (later wins):
        1. Packaged defaults (swaggerfly-defaults.yaml)
        2. config/swaggerfly.yaml or config/swaggerfly.toml
        3. swaggerfly.yaml or swaggerfly.toml (project root)
        4. Profile overlays: config/swaggerfly-{profile}.yaml, swaggerfly-{profile}.yaml
        5. Environment variables and overrides (applied at read time in get())

        *active_profiles* are recorded as ``swaggerfly.profiles.active`` so the
        run mode matches the overlays that were loaded.
        """
        base_dir = Path(base_dir)
        layers: list[dict[str, Any]] = []
        sources: list[str] = []

        if load_defaults:
            layers.append(cls._load_packaged_defaults())
            sources.append("swaggerfly-defaults.yaml (packaged defaults)")

        for search_dir in (base_dir / "config", base_dir):
            for ext in (".yaml", ".toml"):
                candidate = search_dir / f"swaggerfly{ext}"
                if candidate.is_file():
                    layers.append(cls._load_config_data(candidate))
                    sources.append(str(candidate))

        for profile in active_profiles or []:
            for search_dir in (base_dir / "config", base_dir):
                for ext in (".yaml", ".toml"):
                    candidate = search_dir / f"swaggerfly-{profile}{ext}"
                    if candidate.is_file():
                        layers.append(cls._load_config_data(candidate))
                        sources.append(f"{candidate} (profile: {profile})")

        return cls._from_layers(layers, sources, active_profiles, overrides)

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        active_profiles: list[str] | None = None,
        load_defaults: bool = True,
        overrides: Mapping[str, Any] | None = None,
    ) -> Config:
        """Load configuration from a YAML or TOML file.

        A conventionally named file (swaggerfly.yaml / swaggerfly.toml) delegates
        to :meth:`from_sources` for full multi-source loading. Any other file
        is loaded on its own, plus ``<stem>-<profile><suffix>`` overlays.
        """
        path = Path(path)

        if path.stem == "swaggerfly" or path.stem.startswith("swaggerfly-"):
            return cls.from_sources(
                base_dir=path.parent,
                active_profiles=active_profiles,
                load_defaults=load_defaults,
                overrides=overrides,
            )

        layers: list[dict[str, Any]] = []
        sources: list[str] = []

        if load_defaults:
            layers.append(cls._load_packaged_defaults())
            sources.append("swaggerfly-defaults.yaml (packaged defaults)")

        if path.exists():
            layers.append(cls._load_config_data(path))
            sources.append(str(path))

            for profile in active_profiles or []:
                profile_path = path.parent / f"{path.stem}-{profile}{path.suffix}"
                if profile_path.exists():
                    layers.append(cls._load_config_data(profile_path))
                    sources.append(f"{profile_path} (profile: {profile})")

        return cls._from_layers(layers, sources, active_profiles, overrides)

    @classmethod
    def _from_layers(
        cls,
        layers: list[dict[str, Any]],
        sources: list[str],
        active_profiles: list[str] | None,
        overrides: Mapping[str, Any] | None,
    ) -> Config:
        if active_profiles:
            layers.append({"swaggerfly": {"profiles": {"active": ",".join(active_profiles)}}})

        data: dict[str, Any] = {}
        for layer in layers:
            data = cls._deep_merge(data, layer)

        instance = cls(data, overrides=overrides)
        instance._loaded_sources = sources
        instance._layers = layers
        return instance

    @staticmethod
    def _load_config_data(path: Path) -> dict[str, Any]:
        """Load config data from a YAML or TOML file."""
        if path.suffix == ".toml":
            with open(path, "rb") as f:
                return tomllib.load(f) or {}
        with open(path) as f:
            return yaml.safe_load(f) or {}

    @staticmethod
    def _load_packaged_defaults() -> dict[str, Any]:
        """Load built-in defaults from swaggerfly.resources."""
        defaults_file = importlib.resources.files("swaggerfly.resources").joinpath("swaggerfly-defaults.yaml")
        with importlib.resources.as_file(defaults_file) as p, open(p) as f:
            return yaml.safe_load(f) or {}

    @staticmethod
    def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Recursively merge override into base, with override values winning."""
        merged = dict(base)
        for key, value in override.items():
            if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
                merged[key] = Config._deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged

    @staticmethod
    def _walk_in(data: dict[str, Any], key: str) -> Any:
        current: Any = data
        for part in key.split("."):
            if not isinstance(current, dict):
                return None
            current = current.get(part)
            if current is None:
                return None
        return current

    def _walk(self, key: str) -> Any:
        """Return the raw file value at a dotted key, or None."""
        return self._walk_in(self._data, key)

    def _resolve(self, value: Any) -> Any:
        if isinstance(value, str) and "${" in value:
            return self._resolve_placeholders(value)
        return value

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value by dot-notation key.

        Overrides are consulted first, then environment variables, then file
        data. String values containing ``${...}`` placeholders are resolved:
        - ``${ENV_VAR}``: resolved from environment variables
        - ``${config.key}``: resolved from other config values
        - ``${key:default}``: uses default if key/env not found
        """
        if key in self._overrides:
            return self._resolve(self._overrides[key])

        env_val = os.environ.get(env_var_name(key))
        if env_val is not None:
            return env_val

        current = self._walk(key)
        if current is None:
            return default
        return self._resolve(current)

    def _lookup(self, keys: list[str]) -> tuple[str, Any, bool] | None:
        """Find the raw value of a key that has more than one accepted spelling.

        Returns ``(key, raw_value, from_env)`` for the spelling found in the
        highest-priority source. Every spelling is tried in a source before
        the next source is consulted, so a packaged default never shadows a
        user's file entry or override.
        """
        for key in keys:
            if key in self._overrides:
                return key, self._overrides[key], False
        for key in keys:
            env_val = os.environ.get(env_var_name(key))
            if env_val is not None:
                return key, env_val, True
        for layer in reversed(self._layers):
            for key in keys:
                value = self._walk_in(layer, key)
                if value is not None:
                    return key, value, False
        return None

    def get_map(self, key: str, reserved_env: Collection[str] = ()) -> dict[str, Any]:
        """Get a map-typed option, one sub-key per entry.

        File entries come first, in file order. Environment variables named
        ``<ENV_KEY>_<NAME>`` add or replace the entry ``<name>`` (lower-cased),
        and overrides ``<key>.<name>`` win over both. Variables listed in
        *reserved_env* belong to sibling options and are skipped.

        Raises:
            MalformedValueError: the file holds a scalar or a list at *key*.
        """
        result: dict[str, Any] = {}

        section = self._walk(key)
        if section is not None and not isinstance(section, dict):
            raise MalformedValueError(key, section, "Input should be a mapping of names to values")
        for name, value in (section or {}).items():
            result[str(name)] = self._resolve(value)

        env_prefix = env_var_name(key) + "_"
        for env_name in sorted(os.environ):
            if env_name in reserved_env:
                continue
            if env_name.startswith(env_prefix) and len(env_name) > len(env_prefix):
                result[env_name[len(env_prefix):].lower()] = os.environ[env_name]

        override_prefix = key + "."
        for override_key, value in self._overrides.items():
            if override_key.startswith(override_prefix):
                result[override_key[len(override_prefix):]] = self._resolve(value)

        return result

    def _resolve_placeholders(self, value: str, _depth: int = 0) -> str:
        """Resolve ``${...}`` placeholders in a string value.

        Supports environment variables, config references, and defaults.
        Guards against circular references with a max recursion depth.
        """
        if _depth > 10:
            raise ValueError(
                f"Max recursion depth exceeded resolving placeholders in '{value}'. Check for circular references."
            )

        def _replace(match: re.Match[str]) -> str:
            inner = match.group(1)

            if ":" in inner:
                ref_key, default_val = inner.split(":", 1)
            else:
                ref_key, default_val = inner, None

            env_val = os.environ.get(ref_key)
            if env_val is not None:
                return env_val

            current = self._walk(ref_key)
            if current is not None:
                resolved = str(current)
                if "${" in resolved:
                    resolved = self._resolve_placeholders(resolved, _depth + 1)
                return resolved

            if default_val is not None:
                return cast(str, default_val)

            raise ValueError(f"Cannot resolve placeholder '${{{inner}}}': not found in environment or config")

        return _PLACEHOLDER_RE.sub(_replace, value)

    def get_section(self, prefix: str) -> dict[str, Any]:
        """Get the raw file values under a prefix as a nested dict."""
        current = self._walk(prefix)
        return current if isinstance(current, dict) else {}

    def bind(self, config_cls: type[M]) -> M:
        """Resolve a @config_properties Pydantic model.

        Each field is looked up under its kebab-case alias and its snake_case
        name, source by source; absent fields keep their model default. An
        unresolvable placeholder or the first validation failure is raised as
        :class:`MalformedValueError` naming the configuration key and the raw
        value.
        """
        prefix = config_prefix(config_cls)
        if prefix is None:
            raise ValueError(f"{config_cls.__name__} is not decorated with @config_properties")

        raw: dict[str, Any] = {}
        keys: dict[str, str] = {}
        names: dict[str, str] = {}
        field_env = {
            env_var_name(f"{prefix}.{field.alias or name}") for name, field in config_cls.model_fields.items()
        }

        for name, field in config_cls.model_fields.items():
            alias = field.alias or name
            keys[name] = f"{prefix}.{alias}"
            names[name] = name
            names[alias] = name

            candidates = [keys[name]] if alias == name else [keys[name], f"{prefix}.{name}"]
            if _is_mapping(field.annotation):
                value: Any = {}
                for candidate in reversed(candidates):
                    try:
                        value.update(self.get_map(candidate, reserved_env=field_env))
                    except ValueError as exc:
                        raise MalformedValueError(candidate, self._walk(candidate), str(exc)) from exc
                if not value:
                    continue
            else:
                found = self._lookup(candidates)
                if found is None:
                    continue
                keys[name], raw_value, from_env = found
                try:
                    value = raw_value if from_env else self._resolve(raw_value)
                except ValueError as exc:
                    raise MalformedValueError(keys[name], raw_value, str(exc)) from exc
            raw[name] = value

        try:
            return config_cls.model_validate(raw)
        except ValidationError as exc:
            error = exc.errors()[0]
            loc = error.get("loc") or ()
            field_name = names.get(str(loc[0])) if loc else None
            if field_name is None:
                raise MalformedValueError(prefix, raw, error["msg"]) from exc
            raise MalformedValueError(keys[field_name], raw.get(field_name), error["msg"]) from exc


def _is_mapping(annotation: Any) -> bool:
    """True when a field annotation is a mapping type (possibly optional)."""
    origin = typing.get_origin(annotation)
    if origin in (dict, Mapping):
        return True
    return any(typing.get_origin(arg) in (dict, Mapping) for arg in typing.get_args(annotation))
