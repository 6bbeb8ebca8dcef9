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
"""Swagger UI page rendering and the OpenAPI document endpoint."""

from __future__ import annotations

import html
import json
from collections.abc import Awaitable, Callable
from typing import Any

from starlette.requests import Request
from starlette.responses import HTMLResponse, JSONResponse

from swaggerfly.config.properties.swagger_ui import SwaggerUiProperties

SWAGGER_UI_DIST = "https://cdn.jsdelivr.net/npm/swagger-ui-dist@5"
SWAGGER_UI_THEMES = "https://cdn.jsdelivr.net/npm/swagger-ui-themes@3.0.1/themes/3.x"

DEFAULT_TITLE = "Swagger UI"
DEFAULT_LAYOUT = "StandaloneLayout"

SWAGGER_UI_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <title>{title}</title>
    <link rel="stylesheet" type="text/css" href="{dist}/swagger-ui.css">
{theme}</head>
<body>
    <div id="swagger-ui"></div>
{footer}    <script src="{dist}/swagger-ui-bundle.js"></script>
    <script src="{dist}/swagger-ui-standalone-preset.js"></script>
{scripts}    <script>
        window.onload = function() {{
            const ui = SwaggerUIBundle({options});
{oauth}            window.ui = ui;
        }};
    </script>
</body>
</html>"""


class RawJs(str):
    """A value emitted into the page as JavaScript source rather than a JSON literal."""


# (viewer option, property attribute) pairs forwarded verbatim when set
_PASS_THROUGH: tuple[tuple[str, str], ...] = (
    ("deepLinking", "deep_linking"),
    ("displayOperationId", "display_operation_id"),
    ("defaultModelsExpandDepth", "default_models_expand_depth"),
    ("defaultModelExpandDepth", "default_model_expand_depth"),
    ("defaultModelRendering", "default_model_rendering"),
    ("displayRequestDuration", "display_request_duration"),
    ("maxDisplayedTags", "max_displayed_tags"),
    ("showExtensions", "show_extensions"),
    ("showCommonExtensions", "show_common_extensions"),
    ("oauth2RedirectUrl", "oauth2_redirect_url"),
    ("requestCurlOptions", "request_curl_options"),
    ("showMutatedRequest", "show_mutated_request"),
    ("validatorUrl", "validator_url"),
    ("withCredentials", "with_credentials"),
    ("persistAuthorization", "persist_authorization"),
)

# Options holding JavaScript functions
_CALLBACKS: tuple[tuple[str, str], ...] = (
    ("requestInterceptor", "request_interceptor"),
    ("responseInterceptor", "response_interceptor"),
    ("modelPropertyMacro", "model_property_macro"),
    ("parameterMacro", "parameter_macro"),
)

# 'alpha' / 'method' are names understood by the viewer, anything else is a function
_SORTERS: tuple[tuple[str, str], ...] = (
    ("operationsSorter", "operations_sorter"),
    ("tagsSorter", "tags_sorter"),
)
_SORTER_NAMES = frozenset({"alpha", "method"})

_OAUTH: tuple[tuple[str, str], ...] = (
    ("clientId", "oauth_client_id"),
    ("clientSecret", "oauth_client_secret"),
    ("realm", "oauth_realm"),
    ("appName", "oauth_app_name"),
    ("scopeSeparator", "oauth_scope_separator"),
    ("scopes", "oauth_scopes"),
    ("useBasicAuthenticationWithAccessCodeGrant", "oauth_use_basic_authentication_with_access_code_grant"),
    ("usePkceWithAuthorizationCodeGrant", "oauth_use_pkce_with_authorization_code_grant"),
)


def _literal_or_raw(value: str) -> Any:
    """'true'/'false' become booleans; anything else is JavaScript source."""
    lowered = value.strip().lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    return RawJs(value)


def build_ui_options(properties: SwaggerUiProperties, openapi_url: str) -> dict[str, Any]:
    """Build the ``SwaggerUIBundle`` initialization object.

    Unset options are left out so the viewer applies its own defaults. With
    no ``urls`` configured the single document URL is *openapi_url*.
    """
    options: dict[str, Any] = {}

    if properties.urls:
        options["urls"] = [{"name": name, "url": url} for name, url in properties.urls.items()]
        if properties.urls_primary_name is not None:
            options["urls.primaryName"] = properties.urls_primary_name
    else:
        options["url"] = openapi_url

    options["dom_id"] = "#swagger-ui"

    for option, attr in _PASS_THROUGH:
        value = getattr(properties, attr)
        if value is not None:
            options[option] = list(value) if isinstance(value, tuple) else value

    if properties.doc_expansion is not None:
        options["docExpansion"] = properties.doc_expansion.value
    if properties.filter is not None:
        lowered = properties.filter.strip().lower()
        options["filter"] = lowered == "true" if lowered in ("true", "false") else properties.filter
    if properties.syntax_highlight is not None:
        options["syntaxHighlight"] = _literal_or_raw(properties.syntax_highlight)
    if properties.supported_submit_methods is not None:
        options["supportedSubmitMethods"] = [method.value for method in properties.supported_submit_methods]

    for option, attr in _SORTERS:
        value = getattr(properties, attr)
        if value is not None:
            options[option] = value if value in _SORTER_NAMES else RawJs(value)

    for option, attr in _CALLBACKS:
        value = getattr(properties, attr)
        if value is not None:
            options[option] = RawJs(value)

    on_complete = _build_on_complete(properties)
    if on_complete is not None:
        options["onComplete"] = on_complete

    options["presets"] = [
        RawJs(preset)
        for preset in (properties.presets or ("SwaggerUIBundle.presets.apis", "SwaggerUIStandalonePreset"))
    ]
    options["plugins"] = [RawJs(plugin) for plugin in (properties.plugins or ("SwaggerUIBundle.plugins.DownloadUrl",))]
    options["layout"] = properties.layout or DEFAULT_LAYOUT

    options["queryConfigEnabled"] = properties.query_config_enabled
    options["tryItOutEnabled"] = properties.try_it_out_enabled
    return options


def build_oauth_options(properties: SwaggerUiProperties) -> dict[str, Any]:
    """Arguments for ``ui.initOAuth``; empty when no OAuth option is set."""
    options: dict[str, Any] = {}
    for option, attr in _OAUTH:
        value = getattr(properties, attr)
        if value is not None:
            options[option] = value
    if properties.oauth_additional_query_string_params is not None:
        options["additionalQueryStringParams"] = RawJs(properties.oauth_additional_query_string_params)
    return options


def build_preauthorize_calls(properties: SwaggerUiProperties) -> list[str]:
    """JavaScript statements pre-filling credentials once the UI has loaded."""
    calls: list[str] = []
    if properties.preauthorize_basic_auth_definition_key is not None:
        calls.append(
            "ui.preauthorizeBasic({}, {}, {});".format(
                to_js(properties.preauthorize_basic_auth_definition_key),
                to_js(properties.preauthorize_basic_username or ""),
                to_js(properties.preauthorize_basic_password or ""),
            )
        )
    if properties.preauthorize_api_key_auth_definition_key is not None:
        calls.append(
            "ui.preauthorizeApiKey({}, {});".format(
                to_js(properties.preauthorize_api_key_auth_definition_key),
                to_js(properties.preauthorize_api_key_api_key_value or ""),
            )
        )
    return calls


def _build_on_complete(properties: SwaggerUiProperties) -> RawJs | None:
    # The viewer only accepts preauthorize calls after it finished loading
    calls = build_preauthorize_calls(properties)
    if not calls:
        return RawJs(properties.on_complete) if properties.on_complete is not None else None
    body = " ".join(calls)
    if properties.on_complete is not None:
        body += f" ({properties.on_complete})();"
    return RawJs(f"function() {{ {body} }}")


def to_js(value: Any) -> str:
    """Serialize a value to a JavaScript expression."""
    if isinstance(value, RawJs):
        return str(value)
    if isinstance(value, dict):
        return "{" + ", ".join(f"{_json(str(k))}: {to_js(v)}" for k, v in value.items()) + "}"
    if isinstance(value, list | tuple):
        return "[" + ", ".join(to_js(item) for item in value) + "]"
    return _json(value)


def _json(value: Any) -> str:
    # "</script>" inside a string literal would end the inline script early
    return json.dumps(value).replace("</", "<\\/")


def render_swagger_ui_html(properties: SwaggerUiProperties, openapi_url: str) -> str:
    """Render the complete Swagger UI page for the resolved properties."""
    theme = ""
    if properties.theme is not None and properties.theme.stylesheet is not None:
        href = html.escape(f"{SWAGGER_UI_THEMES}/{properties.theme.stylesheet}", quote=True)
        theme = f'    <link rel="stylesheet" type="text/css" href="{href}">\n'

    footer = ""
    if properties.footer is not None:
        footer = f'    <div class="swagger-ui-footer">{properties.footer}</div>\n'

    scripts = "".join(
        f'    <script src="{html.escape(src, quote=True)}"></script>\n' for src in properties.scripts or ()
    )

    oauth = ""
    oauth_options = build_oauth_options(properties)
    if oauth_options:
        oauth = f"            ui.initOAuth({to_js(oauth_options)});\n"

    return SWAGGER_UI_HTML.format(
        title=html.escape(properties.title or DEFAULT_TITLE),
        dist=SWAGGER_UI_DIST,
        theme=theme,
        footer=footer,
        scripts=scripts,
        options=to_js(build_ui_options(properties, openapi_url)),
        oauth=oauth,
    )


def make_openapi_endpoint(spec_dict: dict[str, Any]) -> Callable[[Request], Awaitable[JSONResponse]]:
    """Create the OpenAPI document endpoint handler."""

    async def openapi_json(request: Request) -> JSONResponse:
        return JSONResponse(spec_dict)

    return openapi_json


def make_swagger_ui_endpoint(
    properties: SwaggerUiProperties,
    openapi_url: str,
) -> Callable[[Request], Awaitable[HTMLResponse]]:
    """Create the Swagger UI endpoint handler.

    The page is rendered once; the properties are immutable.
    """
    page = render_swagger_ui_html(properties, openapi_url)

    async def swagger_ui(request: Request) -> HTMLResponse:
        return HTMLResponse(page)

    return swagger_ui
