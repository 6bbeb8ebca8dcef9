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
"""Exception hierarchy for swaggerfly.

All errors raised by the package inherit from SwaggerflyException so a host
can catch one type at startup.

Categories:
- ConfigurationError: an option could not be resolved into a usable value
  - MalformedValueError: raw input does not parse as the declared type
  - InvalidPathError: the UI mount path is not allowed
"""

from __future__ import annotations

from typing import Any

# =============================================================================
# Base Exception
# =============================================================================


class SwaggerflyException(Exception):
    """Base exception for all swaggerfly errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "CONFIG_MALFORMED").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationError(SwaggerflyException):
    """An option failed to resolve.

    Args:
        key: Fully qualified configuration key of the offending option.
        raw_value: The value as it was supplied, before any conversion.
        reason: Short description of what is wrong with the value.
    """

    default_code = "CONFIG_ERROR"

    def __init__(
        self,
        key: str,
        raw_value: Any,
        reason: str,
        code: str | None = None,
    ) -> None:
        super().__init__(
            f"Invalid value {raw_value!r} for '{key}': {reason}",
            code=code or self.default_code,
            context={"key": key, "raw_value": raw_value},
        )
        self.key = key
        self.raw_value = raw_value
        self.reason = reason


class MalformedValueError(ConfigurationError):
    """Raw input cannot be converted to the declared field type."""

    default_code = "CONFIG_MALFORMED"


class InvalidPathError(ConfigurationError):
    """The Swagger UI path would shadow the application or the OpenAPI document."""

    default_code = "CONFIG_INVALID_PATH"
