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
"""'swaggerfly config': Show every Swagger UI option and its resolved value."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Any

import click
from rich.markup import escape
from rich.table import Table

from swaggerfly.cli.console import console
from swaggerfly.cli.options import config_options, load_config
from swaggerfly.config.properties.swagger_ui import SwaggerUiProperties
from swaggerfly.kernel.exceptions import ConfigurationError


def format_value(value: Any) -> str:
    """Render a resolved option the way it would be written in a config file."""
    if value is None:
        return "<unset>"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, Mapping):
        return ", ".join(f"{name}={url}" for name, url in value.items()) or "{}"
    if isinstance(value, tuple):
        return ", ".join(format_value(item) for item in value) or "[]"
    return str(value)


@click.command()
@config_options
def config_command(directory: Path, profiles: tuple[str, ...], overrides: tuple[str, ...]) -> None:
    """Show the resolved Swagger UI configuration."""
    try:
        config = load_config(directory, profiles, overrides)
        properties = config.bind(SwaggerUiProperties)
    except ConfigurationError as exc:
        console.print(f"[error]Configuration error:[/error] {escape(str(exc))}")
        raise SystemExit(1) from None

    table = Table(title="swaggerfly.swagger-ui", border_style="dim")
    table.add_column("Option", style="info", no_wrap=True)
    table.add_column("Value", overflow="fold")

    for name, field in SwaggerUiProperties.model_fields.items():
        value = getattr(properties, name)
        text = escape(format_value(value))
        table.add_row(field.alias or name, f"[dim]{text}[/dim]" if value is None else text)

    console.print(table)
    for source in config.loaded_sources:
        console.print(f"  [dim]loaded {escape(source)}[/dim]")
