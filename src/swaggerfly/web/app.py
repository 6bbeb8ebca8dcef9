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
"""Starlette application factory serving an OpenAPI document and Swagger UI."""

from __future__ import annotations

from typing import Any

from starlette.applications import Starlette
from starlette.routing import Route

from swaggerfly.config.properties.swagger_ui import SwaggerUiProperties
from swaggerfly.context.environment import Environment
from swaggerfly.core.config import Config
from swaggerfly.web.docs import make_openapi_endpoint
from swaggerfly.web.registration import DEFAULT_ROOT_PATH, SwaggerUiRegistrar, resolve_under


def create_app(
    config: Config,
    openapi_spec: dict[str, Any] | None = None,
    root_path: str = DEFAULT_ROOT_PATH,
    environment: Environment | None = None,
    debug: bool = False,
    extra_routes: list[Route] | None = None,
) -> Starlette:
    """Create a Starlette application exposing API documentation.

    Includes:
    - The OpenAPI document at ``<root_path>/openapi``
    - Swagger UI at the configured path (when included for the run mode)
    - Caller-supplied routes

    Configuration errors (malformed values, a disallowed UI path) propagate,
    so a misconfigured application never starts.
    """
    environment = environment or Environment(config)
    properties = config.bind(SwaggerUiProperties)

    openapi_path = resolve_under(root_path, "openapi")
    registrar = SwaggerUiRegistrar(properties, environment, root_path=root_path, openapi_path=openapi_path)

    routes: list[Route] = list(extra_routes or [])
    routes.append(Route(openapi_path, make_openapi_endpoint(openapi_spec or _empty_spec()), methods=["GET"]))
    routes.extend(registrar.routes())

    app = Starlette(debug=debug, routes=routes)
    app.state.swagger_ui = properties
    return app


def _empty_spec() -> dict[str, Any]:
    return {"openapi": "3.1.0", "info": {"title": "API", "version": "0.0.0"}, "paths": {}}
