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

"""Tests for container error types."""

from conduit import (
    CircularDependencyError,
    ConduitError,
    ContainerError,
    ErrorCategory,
    NotFoundError,
)


class TestConduitError:
    """Tests for the base error."""

    def test_defaults(self):
        error = ConduitError("something failed")

        assert error.message == "something failed"
        assert error.category is ErrorCategory.UNKNOWN
        assert error.details == {}
        assert len(error.correlation_id) == 8

    def test_str_includes_correlation_and_hint(self):
        """Test the user-facing string form."""
        error = ConduitError("bad", recovery_hint="try again", correlation_id="abc12345")

        assert str(error) == "[abc12345] bad\nRecovery hint: try again"

    def test_to_dict(self):
        """Test structured serialization."""
        cause = ValueError("root")
        error = ConduitError(
            "bad",
            category=ErrorCategory.CONFIG_INVALID,
            details={"path": "x.yaml"},
            cause=cause,
        )

        data = error.to_dict()

        assert data["error"] == "bad"
        assert data["category"] == "config_invalid"
        assert data["details"] == {"path": "x.yaml"}
        assert data["cause"] == repr(cause)
        assert "timestamp" in data


class TestErrorKinds:
    """Tests for NotFoundError, ContainerError and CircularDependencyError."""

    def test_not_found(self):
        error = NotFoundError("mailer")

        assert error.message == 'Service "mailer" not found in container.'
        assert error.service_id == "mailer"
        assert error.details["service_id"] == "mailer"
        assert error.category is ErrorCategory.SERVICE_NOT_FOUND
        assert error.recovery_hint

    def test_kinds_are_siblings(self):
        """Test that catching one kind never catches the other."""
        assert not issubclass(NotFoundError, ContainerError)
        assert not issubclass(ContainerError, NotFoundError)
        assert issubclass(NotFoundError, ConduitError)
        assert issubclass(ContainerError, ConduitError)

    def test_container_error_details(self):
        error = ContainerError("cannot build", service_id="svc", parameter="db")

        assert error.details == {"service_id": "svc", "parameter": "db"}

    def test_circular_dependency(self):
        error = CircularDependencyError(["a", "b", "a"])

        assert isinstance(error, ContainerError)
        assert error.message == "Circular dependency detected: a -> b -> a"
        assert error.chain == ["a", "b", "a"]
        assert error.service_id == "a"
        assert error.category is ErrorCategory.CIRCULAR_DEPENDENCY
        assert error.details["chain"] == ["a", "b", "a"]
