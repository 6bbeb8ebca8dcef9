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
"""Tests for the swaggerfly exception hierarchy."""

from swaggerfly.kernel.exceptions import (
    ConfigurationError,
    InvalidPathError,
    MalformedValueError,
    SwaggerflyException,
)


class TestSwaggerflyException:
    def test_basic_creation(self):
        exc = SwaggerflyException("something went wrong")
        assert str(exc) == "something went wrong"
        assert exc.code is None
        assert exc.context == {}

    def test_with_code_and_context(self):
        exc = SwaggerflyException("bad", code="X_001", context={"k": "v"})
        assert exc.code == "X_001"
        assert exc.context["k"] == "v"

    def test_context_defaults_to_empty_dict(self):
        exc = SwaggerflyException("test")
        exc.context["key"] = "value"
        assert SwaggerflyException("test2").context == {}


class TestConfigurationError:
    def test_message_names_key_and_value(self):
        exc = MalformedValueError("swaggerfly.swagger-ui.deep-linking", "maybe", "not a boolean")
        assert str(exc) == "Invalid value 'maybe' for 'swaggerfly.swagger-ui.deep-linking': not a boolean"
        assert exc.key == "swaggerfly.swagger-ui.deep-linking"
        assert exc.raw_value == "maybe"
        assert exc.reason == "not a boolean"
        assert exc.context == {"key": "swaggerfly.swagger-ui.deep-linking", "raw_value": "maybe"}

    def test_default_codes(self):
        assert ConfigurationError("k", 1, "r").code == "CONFIG_ERROR"
        assert MalformedValueError("k", 1, "r").code == "CONFIG_MALFORMED"
        assert InvalidPathError("k", "/", "r").code == "CONFIG_INVALID_PATH"

    def test_explicit_code_wins(self):
        assert InvalidPathError("k", "/", "r", code="CUSTOM").code == "CUSTOM"


class TestExceptionHierarchy:
    def test_configuration_is_swaggerfly(self):
        assert issubclass(ConfigurationError, SwaggerflyException)

    def test_malformed_is_configuration(self):
        assert issubclass(MalformedValueError, ConfigurationError)

    def test_invalid_path_is_configuration(self):
        assert issubclass(InvalidPathError, ConfigurationError)
