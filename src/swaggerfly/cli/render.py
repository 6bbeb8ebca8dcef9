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
"""'swaggerfly render': Write the Swagger UI page for the current configuration."""

from __future__ import annotations

from pathlib import Path

import click
from rich.markup import escape

from swaggerfly.cli.console import console
from swaggerfly.cli.options import config_options, load_config
from swaggerfly.config.properties.swagger_ui import SwaggerUiProperties
from swaggerfly.kernel.exceptions import ConfigurationError
from swaggerfly.web.docs import render_swagger_ui_html
from swaggerfly.web.registration import DEFAULT_OPENAPI_PATH


@click.command()
@config_options
@click.option("--openapi-url", default=DEFAULT_OPENAPI_PATH, show_default=True, help="URL of the OpenAPI document.")
@click.option(
    "--output",
    "-o",
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the page to a file instead of stdout.",
)
def render_command(
    directory: Path,
    profiles: tuple[str, ...],
    overrides: tuple[str, ...],
    openapi_url: str,
    output: Path | None,
) -> None:
    """Render the Swagger UI HTML page."""
    try:
        config = load_config(directory, profiles, overrides)
        properties = config.bind(SwaggerUiProperties)
    except ConfigurationError as exc:
        console.print(f"[error]Configuration error:[/error] {escape(str(exc))}")
        raise SystemExit(1) from None

    page = render_swagger_ui_html(properties, openapi_url)
    if output is None:
        click.echo(page)
        return

    output.write_text(page, encoding="utf-8")
    console.print(f"[success]Wrote[/success] {escape(str(output))}")
