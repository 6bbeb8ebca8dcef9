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
"""Swagger UI route registration."""

from __future__ import annotations

import structlog
from starlette.routing import Route

from swaggerfly.config.properties.swagger_ui import SwaggerUiProperties
from swaggerfly.context.environment import Environment
from swaggerfly.core.config import config_prefix
from swaggerfly.kernel.exceptions import InvalidPathError
from swaggerfly.web.docs import make_swagger_ui_endpoint

logger = structlog.get_logger("swaggerfly.web")

DEFAULT_ROOT_PATH = "/q"
DEFAULT_OPENAPI_PATH = "/q/openapi"


def resolve_under(root_path: str, path: str) -> str:
    """Resolve *path* under *root_path*; an absolute *path* is kept as is."""
    if path.startswith("/"):
        return "/" + path.strip("/")
    segments = [segment for segment in (root_path.strip("/"), path.strip("/")) if segment]
    return "/" + "/".join(segments)


class SwaggerUiRegistrar:
    """Validates the UI mount path and produces the Starlette routes serving the page.

    The UI is registered when ``always_include`` is set, or when the
    environment runs in dev or test mode.
    """

    def __init__(
        self,
        properties: SwaggerUiProperties,
        environment: Environment | None = None,
        root_path: str = DEFAULT_ROOT_PATH,
        openapi_path: str = DEFAULT_OPENAPI_PATH,
    ) -> None:
        self._properties = properties
        self._environment = environment
        self._root_path = root_path
        self._openapi_path = resolve_under("/", openapi_path)
        self._path_key = f"{config_prefix(SwaggerUiProperties)}.path"

    @property
    def openapi_path(self) -> str:
        return self._openapi_path

    def resolve_path(self) -> str:
        """Return the absolute path of the UI.

        Raises:
            InvalidPathError: the path is ``/`` or collides with the OpenAPI document.
        """
        path = self._properties.path
        if path.strip() == "/":
            raise InvalidPathError(
                self._path_key,
                path,
                "'/' is not allowed as it blocks the application from serving anything else",
            )

        resolved = resolve_under(self._root_path, path.strip())
        if resolved == "/":
            raise InvalidPathError(self._path_key, path, "resolves to '/', which would shadow the application")
        if resolved == self._openapi_path:
            raise InvalidPathError(
                self._path_key,
                path,
                f"resolves to '{resolved}', the same path as the OpenAPI document",
            )
        return resolved

    def is_included(self) -> bool:
        if self._properties.always_include:
            return True
        return self._environment is not None and self._environment.is_dev_or_test()

    def routes(self) -> list[Route]:
        """Routes serving the UI, or an empty list when it is not included.

        The path is validated even when the UI is left out, so a bad value
        fails in every run mode.
        """
        path = self.resolve_path()
        if not self.is_included():
            logger.info("swagger_ui_not_included", path=path, hint="set always-include or run in dev/test mode")
            return []

        urls = self._properties.urls
        primary = self._properties.urls_primary_name
        if primary is not None and primary not in urls:
            logger.warning("swagger_ui_unknown_primary_url", primary_name=primary, urls=list(urls))

        endpoint = make_swagger_ui_endpoint(self._properties, self._openapi_path)
        logger.info("swagger_ui_registered", path=path, openapi_path=self._openapi_path)
        return [
            Route(path, endpoint, methods=["GET"], name="swagger_ui"),
            Route(f"{path}/index.html", endpoint, methods=["GET"], name="swagger_ui_index"),
        ]
