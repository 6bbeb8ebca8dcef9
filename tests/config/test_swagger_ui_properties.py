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
"""Tests for SwaggerUiProperties resolution through Config.bind."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from swaggerfly.config.properties import DocExpansion, HttpMethod, SwaggerUiProperties, Theme
from swaggerfly.core.config import Config
from swaggerfly.kernel.exceptions import ConfigurationError, MalformedValueError


def _bind(options: dict) -> SwaggerUiProperties:
    return Config({"swaggerfly": {"swagger-ui": options}}).bind(SwaggerUiProperties)


class TestDefaults:
    def test_no_input_yields_fixed_defaults(self):
        props = Config({}).bind(SwaggerUiProperties)
        assert props.path == "swagger-ui"
        assert props.always_include is False
        assert props.query_config_enabled is False
        assert props.try_it_out_enabled is False
        assert props.urls == {}

    def test_optional_options_are_absent(self):
        props = Config({}).bind(SwaggerUiProperties)
        assert props.title is None
        assert props.theme is None
        assert props.urls_primary_name is None
        assert props.supported_submit_methods is None
        assert props.oauth_client_id is None

    def test_omitted_optional_booleans_are_absent_not_false(self):
        props = _bind({"title": "Petstore"})
        for name in (
            "deep_linking",
            "display_operation_id",
            "display_request_duration",
            "show_extensions",
            "show_common_extensions",
            "show_mutated_request",
            "with_credentials",
            "persist_authorization",
            "oauth_use_basic_authentication_with_access_code_grant",
            "oauth_use_pkce_with_authorization_code_grant",
        ):
            value = getattr(props, name)
            assert value is None
            assert value is not False


class TestRoundTrip:
    @pytest.mark.parametrize(
        ("key", "raw", "attr", "expected"),
        [
            ("path", "docs", "path", "docs"),
            ("always-include", True, "always_include", True),
            ("urls-primary-name", "v2", "urls_primary_name", "v2"),
            ("title", "Petstore", "title", "Petstore"),
            ("footer", "&#169; Petstore", "footer", "&#169; Petstore"),
            ("theme", "monokai", "theme", Theme.MONOKAI),
            ("deep-linking", True, "deep_linking", True),
            ("display-operation-id", False, "display_operation_id", False),
            ("default-models-expand-depth", -1, "default_models_expand_depth", -1),
            ("default-model-expand-depth", 3, "default_model_expand_depth", 3),
            ("default-model-rendering", "model", "default_model_rendering", "model"),
            ("display-request-duration", True, "display_request_duration", True),
            ("doc-expansion", "full", "doc_expansion", DocExpansion.FULL),
            ("filter", "pets", "filter", "pets"),
            ("max-displayed-tags", 10, "max_displayed_tags", 10),
            ("operations-sorter", "method", "operations_sorter", "method"),
            ("show-extensions", True, "show_extensions", True),
            ("show-common-extensions", True, "show_common_extensions", True),
            ("tags-sorter", "alpha", "tags_sorter", "alpha"),
            ("on-complete", "onDone", "on_complete", "onDone"),
            ("syntax-highlight", "false", "syntax_highlight", "false"),
            ("oauth2-redirect-url", "/oauth2-redirect.html", "oauth2_redirect_url", "/oauth2-redirect.html"),
            ("request-interceptor", "(req) => req", "request_interceptor", "(req) => req"),
            ("request-curl-options", ["-k", "-v"], "request_curl_options", ("-k", "-v")),
            ("response-interceptor", "(res) => res", "response_interceptor", "(res) => res"),
            ("show-mutated-request", True, "show_mutated_request", True),
            ("supported-submit-methods", ["get", "post"], "supported_submit_methods",
             (HttpMethod.GET, HttpMethod.POST)),
            ("validator-url", "none", "validator_url", "none"),
            ("with-credentials", True, "with_credentials", True),
            ("model-property-macro", "macro", "model_property_macro", "macro"),
            ("parameter-macro", "pmacro", "parameter_macro", "pmacro"),
            ("persist-authorization", True, "persist_authorization", True),
            ("layout", "BaseLayout", "layout", "BaseLayout"),
            ("plugins", ["MyPlugin"], "plugins", ("MyPlugin",)),
            ("scripts", ["/js/plugin.js"], "scripts", ("/js/plugin.js",)),
            ("presets", ["SwaggerUIBundle.presets.apis"], "presets", ("SwaggerUIBundle.presets.apis",)),
            ("oauth-client-id", "client", "oauth_client_id", "client"),
            ("oauth-client-secret", "secret", "oauth_client_secret", "secret"),
            ("oauth-realm", "realm", "oauth_realm", "realm"),
            ("oauth-app-name", "Petstore", "oauth_app_name", "Petstore"),
            ("oauth-scope-separator", " ", "oauth_scope_separator", " "),
            ("oauth-scopes", "read write", "oauth_scopes", "read write"),
            ("oauth-additional-query-string-params", '{"a": "b"}', "oauth_additional_query_string_params",
             '{"a": "b"}'),
            ("oauth-use-basic-authentication-with-access-code-grant", True,
             "oauth_use_basic_authentication_with_access_code_grant", True),
            ("oauth-use-pkce-with-authorization-code-grant", True,
             "oauth_use_pkce_with_authorization_code_grant", True),
            ("preauthorize-basic-auth-definition-key", "basic", "preauthorize_basic_auth_definition_key", "basic"),
            ("preauthorize-basic-username", "alice", "preauthorize_basic_username", "alice"),
            ("preauthorize-basic-password", "pw", "preauthorize_basic_password", "pw"),
            ("preauthorize-api-key-auth-definition-key", "api_key", "preauthorize_api_key_auth_definition_key",
             "api_key"),
            ("preauthorize-api-key-api-key-value", "k-123", "preauthorize_api_key_api_key_value", "k-123"),
            ("query-config-enabled", True, "query_config_enabled", True),
            ("try-it-out-enabled", True, "try_it_out_enabled", True),
        ],
    )
    def test_valid_literal_resolves_to_same_value(self, key, raw, attr, expected):
        props = _bind({key: raw})
        assert getattr(props, attr) == expected

    def test_every_option_key_is_covered(self):
        assert len(SwaggerUiProperties.option_keys()) == 53
        assert SwaggerUiProperties.option_keys()[:3] == ["path", "always-include", "urls"]

    def test_snake_case_keys_are_accepted(self):
        props = _bind({"always_include": True, "try_it_out_enabled": "true"})
        assert props.always_include is True
        assert props.try_it_out_enabled is True


class TestUrls:
    def test_urls_with_primary_name(self):
        props = _bind({"urls": {"a": "u1", "b": "u2"}, "urls-primary-name": "b"})
        assert props.urls == {"a": "u1", "b": "u2"}
        assert props.urls_primary_name == "b"

    def test_urls_keep_declaration_order(self):
        props = _bind({"urls": {"zeta": "/z", "alpha": "/a", "mid": "/m"}})
        assert list(props.urls) == ["zeta", "alpha", "mid"]


class TestParsing:
    def test_string_booleans_parse(self):
        props = _bind({"deep-linking": "true", "query-config-enabled": "false"})
        assert props.deep_linking is True
        assert props.query_config_enabled is False

    def test_integer_strings_parse(self):
        props = _bind({"max-displayed-tags": "5", "default-models-expand-depth": "-1"})
        assert props.max_displayed_tags == 5
        assert props.default_models_expand_depth == -1

    def test_comma_separated_lists_split(self):
        props = _bind({"supported-submit-methods": "GET, post,,delete", "plugins": "A,B"})
        assert props.supported_submit_methods == (HttpMethod.GET, HttpMethod.POST, HttpMethod.DELETE)
        assert props.plugins == ("A", "B")

    def test_empty_method_list_is_present_and_empty(self):
        props = _bind({"supported-submit-methods": []})
        assert props.supported_submit_methods == ()

    def test_enum_tokens_are_case_insensitive(self):
        props = _bind({"theme": "FEELING_BLUE", "doc-expansion": "None"})
        assert props.theme is Theme.FEELING_BLUE
        assert props.doc_expansion is DocExpansion.NONE

    def test_yaml_scalars_become_string_literals(self):
        props = _bind({"filter": True, "title": 42})
        assert props.filter == "true"
        assert props.title == "42"


class TestMalformedValues:
    def test_unparseable_boolean_names_the_field(self):
        with pytest.raises(MalformedValueError) as exc_info:
            _bind({"query-config-enabled": "maybe"})
        assert exc_info.value.key == "swaggerfly.swagger-ui.query-config-enabled"
        assert exc_info.value.raw_value == "maybe"
        assert "query-config-enabled" in str(exc_info.value)
        assert "maybe" in str(exc_info.value)

    def test_is_a_configuration_error(self):
        with pytest.raises(ConfigurationError):
            _bind({"always-include": "sometimes"})

    def test_optional_boolean_rejects_garbage(self):
        with pytest.raises(MalformedValueError, match="deep-linking"):
            _bind({"deep-linking": "perhaps"})

    def test_non_integer_depth(self):
        with pytest.raises(MalformedValueError, match="max-displayed-tags"):
            _bind({"max-displayed-tags": "1.5"})

    def test_boolean_is_not_an_integer(self):
        with pytest.raises(MalformedValueError, match="default-model-expand-depth"):
            _bind({"default-model-expand-depth": True})

    def test_unknown_enum_token(self):
        with pytest.raises(MalformedValueError) as exc_info:
            _bind({"doc-expansion": "sideways"})
        assert exc_info.value.key == "swaggerfly.swagger-ui.doc-expansion"
        assert exc_info.value.raw_value == "sideways"

    def test_unknown_http_method(self):
        with pytest.raises(MalformedValueError, match="supported-submit-methods"):
            _bind({"supported-submit-methods": "get,fetch"})

    def test_unknown_theme(self):
        with pytest.raises(MalformedValueError, match="theme"):
            _bind({"theme": "solarized"})


class TestImmutability:
    def test_assignment_is_rejected(self):
        props = Config({}).bind(SwaggerUiProperties)
        with pytest.raises(ValidationError):
            props.path = "other"  # type: ignore[misc]

    def test_urls_cannot_be_mutated(self):
        props = _bind({"urls": {"a": "u1"}})
        with pytest.raises(TypeError):
            props.urls["evil"] = "x"  # type: ignore[index]
        assert props.urls == {"a": "u1"}

    def test_default_urls_cannot_be_mutated(self):
        props = Config({}).bind(SwaggerUiProperties)
        with pytest.raises(TypeError):
            props.urls["evil"] = "x"  # type: ignore[index]

    def test_equal_inputs_give_equal_values(self):
        assert _bind({"title": "A"}) == _bind({"title": "A"})


class TestTheme:
    def test_stylesheet_name(self):
        assert Theme.FEELING_BLUE.stylesheet == "theme-feeling-blue.css"

    def test_original_has_no_stylesheet(self):
        assert Theme.ORIGINAL.stylesheet is None
