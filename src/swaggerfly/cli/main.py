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
"""swaggerfly CLI: inspect and render the Swagger UI configuration."""

from __future__ import annotations

import click

from swaggerfly.cli.console import print_banner


class SwaggerflyCLI(click.Group):
    """Click group that shows the banner on help."""

    def format_help(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        print_banner()
        super().format_help(ctx, formatter)


@click.group(cls=SwaggerflyCLI)
@click.version_option(package_name="swaggerfly")
def cli() -> None:
    """swaggerfly: Swagger UI configuration CLI."""


from swaggerfly.cli.render import render_command  # noqa: E402
from swaggerfly.cli.show_config import config_command  # noqa: E402

cli.add_command(config_command, name="config")
cli.add_command(render_command, name="render")
