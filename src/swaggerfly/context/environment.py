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
"""Environment: property access with run-mode profile support."""

from __future__ import annotations

import os
from typing import Any

from swaggerfly.core.config import Config

DEV_PROFILES = ("dev", "test")


class Environment:
    """Provides access to configuration properties and active profiles.

    Profiles are loaded from (in priority order):
    1. ``SWAGGERFLY_PROFILES_ACTIVE`` environment variable
    2. ``swaggerfly.profiles.active`` config property
    """

    def __init__(self, config: Config) -> None:
        self._config = config
        self._active_profiles = self._load_profiles()

    @property
    def config(self) -> Config:
        return self._config

    @property
    def active_profiles(self) -> list[str]:
        """Currently active profiles."""
        return list(self._active_profiles)

    def accepts_profiles(self, *profiles: str) -> bool:
        """Return True if any of the given profile expressions match.

        Supports:
        - Simple profiles: "dev" matches if "dev" is active
        - Negation: "!prod" matches if "prod" is NOT active
        - Comma-separated: "dev,test" matches if "dev" OR "test" is active
        """
        return any(self._matches_profile_expression(expr) for expr in profiles)

    def is_dev_or_test(self) -> bool:
        """True when running in development or test mode."""
        return self.accepts_profiles(*DEV_PROFILES)

    def _matches_profile_expression(self, expr: str) -> bool:
        if "," in expr:
            sub_profiles = [p.strip() for p in expr.split(",") if p.strip()]
            return any(self._matches_single(p) for p in sub_profiles)
        return self._matches_single(expr)

    def _matches_single(self, profile: str) -> bool:
        if profile.startswith("!"):
            return profile[1:] not in self._active_profiles
        return profile in self._active_profiles

    def get_property(self, key: str, default: Any = None) -> Any:
        """Get a configuration property by dotted key."""
        return self._config.get(key, default)

    def _load_profiles(self) -> list[str]:
        env_profiles = os.environ.get("SWAGGERFLY_PROFILES_ACTIVE", "")
        if env_profiles:
            return [p.strip() for p in env_profiles.split(",") if p.strip()]

        config_profiles = self._config.get("swaggerfly.profiles.active", "")
        if config_profiles:
            return [p.strip() for p in str(config_profiles).split(",") if p.strip()]

        return []
