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
"""Options shared by the CLI commands: project directory, profiles, overrides."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

import click

from swaggerfly.config.properties.swagger_ui import SwaggerUiProperties
from swaggerfly.core.config import Config, config_prefix
from swaggerfly.logging.structlog_adapter import StructlogAdapter

F = TypeVar("F", bound=Callable[..., Any])


def config_options(func: F) -> F:
    """Attach --dir, --profile and --set to a command."""
    func = click.option(
        "--set",
        "overrides",
        multiple=True,
        metavar="KEY=VALUE",
        help="Override an option, e.g. --set title=Petstore or --set urls.v2=/v2/openapi.",
    )(func)
    func = click.option("--profile", "profiles", multiple=True, help="Activate a configuration profile.")(func)
    func = click.option(
        "--dir",
        "directory",
        default=".",
        type=click.Path(file_okay=False, path_type=Path),
        help="Directory holding swaggerfly.yaml / swaggerfly.toml.",
    )(func)
    return func


def parse_overrides(values: tuple[str, ...]) -> dict[str, str]:
    """Turn ``KEY=VALUE`` strings into fully qualified config keys.

    Keys not starting with ``swaggerfly.`` are taken relative to the Swagger
    UI namespace.
    """
    prefix = config_prefix(SwaggerUiProperties)
    overrides: dict[str, str] = {}
    for item in values:
        key, sep, value = item.partition("=")
        key = key.strip()
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got {item!r}", param_hint="--set")
        if not key.startswith("swaggerfly."):
            key = f"{prefix}.{key}"
        overrides[key] = value
    return overrides


def load_config(directory: Path, profiles: tuple[str, ...], overrides: tuple[str, ...]) -> Config:
    """Load the project configuration and set up logging from it."""
    config = Config.from_sources(
        directory,
        active_profiles=list(profiles) or None,
        overrides=parse_overrides(overrides),
    )
    StructlogAdapter().configure(config)
    return config
