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
"""Swagger UI configuration properties (swaggerfly.swagger-ui.*).

Every option is either a scalar with a fixed default or optional, where
``None`` means the option was not supplied and the viewer keeps its own
default. Resolved once at startup and frozen afterwards.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field

from swaggerfly.core.config import config_properties


class Theme(str, Enum):
    """Bundled Swagger UI stylesheets."""

    ORIGINAL = "original"
    FEELING_BLUE = "feeling-blue"
    FLATTOP = "flattop"
    MATERIAL = "material"
    MONOKAI = "monokai"
    MUTED = "muted"
    NEWSPAPER = "newspaper"
    OUTLINE = "outline"

    @property
    def stylesheet(self) -> str | None:
        """File name of the theme's CSS, e.g. ``theme-feeling-blue.css``.

        ``original`` is the viewer's own look and needs no extra stylesheet.
        """
        if self is Theme.ORIGINAL:
            return None
        return f"theme-{self.value}.css"


class DocExpansion(str, Enum):
    """Default expansion of operations and tags."""

    LIST = "list"
    FULL = "full"
    NONE = "none"


class HttpMethod(str, Enum):
    """HTTP methods that can have "Try it out" enabled."""

    GET = "get"
    PUT = "put"
    POST = "post"
    DELETE = "delete"
    OPTIONS = "options"
    HEAD = "head"
    PATCH = "patch"
    TRACE = "trace"


def _token(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip().lower().replace("_", "-")
    return value


def _scalar_to_str(value: Any) -> Any:
    # YAML hands us native scalars; keep the literal a user would have typed
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int | float):
        return str(value)
    return value


def _split_list(value: Any) -> Any:
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    return value


def _reject_bool(value: Any) -> Any:
    if isinstance(value, bool):
        raise ValueError("Input should be a valid integer, not a boolean")
    return value


OptionStr = Annotated[str, BeforeValidator(_scalar_to_str)]
OptionInt = Annotated[int, BeforeValidator(_reject_bool)]
StrList = Annotated[tuple[OptionStr, ...], BeforeValidator(_split_list)]
MethodList = Annotated[tuple[Annotated[HttpMethod, BeforeValidator(_token)], ...], BeforeValidator(_split_list)]
ReadOnlyMap = Annotated[Mapping[str, OptionStr], AfterValidator(MappingProxyType)]


def _kebab(name: str) -> str:
    return name.replace("_", "-")


@config_properties(prefix="swaggerfly.swagger-ui")
class SwaggerUiProperties(BaseModel):
    """Options controlling where Swagger UI is mounted and how it is initialized."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=_kebab,
        populate_by_name=True,
        extra="ignore",
    )

    # -- Route ---------------------------------------------------------------

    path: OptionStr = Field(
        default="swagger-ui",
        description=(
            "The path where Swagger UI is available. The value '/' is not allowed as it blocks the "
            "application from serving anything else. A relative value is resolved under the "
            "non-application root path."
        ),
    )
    always_include: bool = Field(
        default=False,
        description="Include the UI in every run mode. By default it is only included in dev and test mode.",
    )

    # -- Document sources ----------------------------------------------------

    urls: ReadOnlyMap = Field(
        default_factory=lambda: MappingProxyType({}),
        description=(
            "Named OpenAPI document URLs offered in the top bar selector. "
            "By default the application's own OpenAPI path is used."
        ),
    )
    urls_primary_name: OptionStr | None = Field(
        default=None,
        description="If urls is used, the name of the default selection.",
    )

    # -- Page ----------------------------------------------------------------

    title: OptionStr | None = Field(default=None, description="The HTML title for the page.")
    theme: Annotated[Theme, BeforeValidator(_token)] | None = Field(
        default=None, description="Swagger UI theme to be used."
    )
    footer: OptionStr | None = Field(default=None, description="A footer for the HTML page. Nothing by default.")

    # -- Display -------------------------------------------------------------

    deep_linking: bool | None = Field(
        default=None, description="If set to true, enables deep linking for tags and operations."
    )
    display_operation_id: bool | None = Field(
        default=None, description="Controls the display of operationId in the operations list."
    )
    default_models_expand_depth: OptionInt | None = Field(
        default=None, description="The default expansion depth for models (-1 hides the models completely)."
    )
    default_model_expand_depth: OptionInt | None = Field(
        default=None, description="The default expansion depth for the model on the model-example section."
    )
    default_model_rendering: OptionStr | None = Field(
        default=None, description="Controls how the model is shown when the API is first rendered."
    )
    display_request_duration: bool | None = Field(
        default=None,
        description='Controls the display of the request duration (in milliseconds) for "Try it out" requests.',
    )
    doc_expansion: Annotated[DocExpansion, BeforeValidator(_token)] | None = Field(
        default=None, description="Controls the default expansion setting for the operations and tags."
    )
    filter: OptionStr | None = Field(
        default=None,
        description=(
            "Enables filtering. 'true' or 'false' toggles the filter box; any other string enables "
            "filtering with that string as the case-sensitive filter expression."
        ),
    )
    max_displayed_tags: OptionInt | None = Field(
        default=None, description="Limits the number of tagged operations displayed to at most this many."
    )
    operations_sorter: OptionStr | None = Field(
        default=None,
        description="Sort of the operation list of each API: 'alpha', 'method' or a sort function.",
    )
    show_extensions: bool | None = Field(
        default=None,
        description="Controls the display of vendor extension (x-) fields for operations, parameters and schema.",
    )
    show_common_extensions: bool | None = Field(
        default=None,
        description=(
            "Controls the display of extensions (pattern, maxLength, minLength, maximum, minimum) "
            "for parameters."
        ),
    )
    tags_sorter: OptionStr | None = Field(
        default=None, description="Sort of the tag list of each API: 'alpha' or a sort function."
    )

    # -- Hooks ---------------------------------------------------------------

    on_complete: OptionStr | None = Field(
        default=None, description="Function called when Swagger UI has finished rendering a newly provided definition."
    )
    syntax_highlight: OptionStr | None = Field(
        default=None,
        description="'false' deactivates syntax highlighting of payloads and cURL commands; otherwise an object.",
    )
    oauth2_redirect_url: OptionStr | None = Field(default=None, description="OAuth redirect URL.")
    request_interceptor: OptionStr | None = Field(
        default=None,
        description='Function intercepting remote definition, "Try it out" and OAuth 2.0 requests.',
    )
    request_curl_options: StrList | None = Field(
        default=None, description="Command line options available to the curl command."
    )
    response_interceptor: OptionStr | None = Field(
        default=None,
        description='Function intercepting remote definition, "Try it out" and OAuth 2.0 responses.',
    )
    show_mutated_request: bool | None = Field(
        default=None,
        description="Use the request returned from requestInterceptor to produce the curl command in the UI.",
    )
    supported_submit_methods: MethodList | None = Field(
        default=None,
        description='HTTP methods that have "Try it out" enabled. An empty list disables it for all operations.',
    )
    validator_url: OptionStr | None = Field(
        default=None,
        description="Validator URL. 'none', '127.0.0.1' or 'localhost' disables validation.",
    )
    with_credentials: bool | None = Field(
        default=None, description="Send credentials with CORS requests issued by the browser."
    )
    model_property_macro: OptionStr | None = Field(
        default=None, description="Function setting default values for each property in a model."
    )
    parameter_macro: OptionStr | None = Field(
        default=None, description="Function setting default values for parameters."
    )
    persist_authorization: bool | None = Field(
        default=None, description="Persist authorization data across browser close and refresh."
    )
    layout: OptionStr | None = Field(
        default=None, description="Name of a plugin component used as the top-level layout."
    )
    plugins: StrList | None = Field(default=None, description="Plugin functions to use in Swagger UI.")
    scripts: StrList | None = Field(
        default=None, description="External scripts (usually plugins) to load in the page."
    )
    presets: StrList | None = Field(default=None, description="Presets to use in Swagger UI.")

    # -- OAuth (initOAuth) -----------------------------------------------------

    oauth_client_id: OptionStr | None = Field(default=None, description="OAuth default clientId.")
    oauth_client_secret: OptionStr | None = Field(default=None, description="OAuth default clientSecret.")
    oauth_realm: OptionStr | None = Field(
        default=None, description="OAuth1 realm query parameter added to authorizationUrl and tokenUrl."
    )
    oauth_app_name: OptionStr | None = Field(
        default=None, description="OAuth application name, displayed in the authorization popup."
    )
    oauth_scope_separator: OptionStr | None = Field(
        default=None, description="OAuth scope separator for passing scopes."
    )
    oauth_scopes: OptionStr | None = Field(
        default=None, description="OAuth scopes, separated using oauth-scope-separator."
    )
    oauth_additional_query_string_params: OptionStr | None = Field(
        default=None, description="OAuth additional query parameters added to authorizationUrl and tokenUrl."
    )
    oauth_use_basic_authentication_with_access_code_grant: bool | None = Field(
        default=None,
        description="Pass the client password with HTTP Basic authentication during the access code flow.",
    )
    oauth_use_pkce_with_authorization_code_grant: bool | None = Field(
        default=None, description="Use Proof Key for Code Exchange with authorization code flows."
    )

    # -- Pre-authorization -----------------------------------------------------

    preauthorize_basic_auth_definition_key: OptionStr | None = Field(
        default=None, description="Definition key of a Basic authorization scheme to pre-authorize."
    )
    preauthorize_basic_username: OptionStr | None = Field(
        default=None, description="Username for the pre-authorized Basic scheme."
    )
    preauthorize_basic_password: OptionStr | None = Field(
        default=None, description="Password for the pre-authorized Basic scheme."
    )
    preauthorize_api_key_auth_definition_key: OptionStr | None = Field(
        default=None, description="Definition key of an API key or Bearer scheme to pre-authorize."
    )
    preauthorize_api_key_api_key_value: OptionStr | None = Field(
        default=None, description="API key value for the pre-authorized scheme."
    )

    # -- Interactive requests --------------------------------------------------

    query_config_enabled: bool = Field(
        default=False, description="Allow the user to modify and test different query parameters in the API request."
    )
    try_it_out_enabled: bool = Field(default=False, description='Enable "Try it out" by default.')

    @classmethod
    def option_keys(cls) -> list[str]:
        """External (kebab-case) key of every option, in declaration order."""
        return [field.alias or name for name, field in cls.model_fields.items()]
