# Copyright 2025 Vijaykumar Singh <singhvjd@gmail.com>
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

"""Shared pytest fixtures and configuration."""

import os

import pytest


@pytest.fixture(autouse=True)
def isolate_environment_variables(monkeypatch):
    """Isolate tests from CONDUIT_* environment variables and .env files.

    This ensures container settings are deterministic regardless of the
    shell the tests run in.
    """
    monkeypatch.setenv("CONDUIT_SKIP_ENV_FILE", "1")

    for var in list(os.environ):
        if var.upper().startswith("CONDUIT_") and var.upper() != "CONDUIT_SKIP_ENV_FILE":
            monkeypatch.delenv(var, raising=False)
