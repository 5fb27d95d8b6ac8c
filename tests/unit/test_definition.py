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

"""Tests for definitions, service keys and the type registry."""

from collections import OrderedDict

import pytest

from conduit import Definition, TypeRegistry, locate_class, service_key


class Outer:
    class Inner:
        pass


class TestDefinition:
    """Tests for Definition."""

    def test_producer_defaults_to_id(self):
        """Test that a definition without producer auto-wires its id."""
        definition = Definition("app.mail.Mailer")

        assert definition.producer == "app.mail.Mailer"
        assert not definition.is_factory

    def test_id_is_read_only(self):
        """Test that the id cannot be reassigned."""
        definition = Definition("svc")

        with pytest.raises(AttributeError):
            definition.id = "other"

    def test_is_factory(self):
        """Test which producers are called rather than auto-wired."""
        assert Definition("a", lambda c: 1).is_factory
        assert not Definition("b", Outer).is_factory
        assert not Definition("c", "pkg.Thing").is_factory

    def test_share_chains(self):
        """Test that share() marks the definition and returns it."""
        definition = Definition("svc")

        assert definition.share() is definition
        assert definition.shared

    def test_set_resolved_only_once(self):
        """Test that the cached instance is never overwritten."""
        definition = Definition("svc").share()
        first, second = object(), object()

        assert not definition.has_resolved
        definition.set_resolved(first)
        definition.set_resolved(second)

        assert definition.has_resolved
        assert definition.resolved is first

    def test_resolved_none_is_cached(self):
        """Test that None counts as a resolved value."""
        definition = Definition("svc").share()

        definition.set_resolved(None)

        assert definition.has_resolved
        assert definition.resolved is None

    def test_tags_keep_order_and_collapse_duplicates(self):
        """Test tag bookkeeping."""
        definition = Definition("svc")

        definition.add_tag("b").add_tag("a").add_tag("b")

        assert definition.tags == ["b", "a"]
        assert definition.has_tag("a")
        assert not definition.has_tag("c")

    def test_tags_property_is_a_copy(self):
        """Test that mutating the returned list does not change the definition."""
        definition = Definition("svc").add_tag("x")

        definition.tags.append("y")

        assert definition.tags == ["x"]

    def test_repr(self):
        """Test the debug representation."""
        definition = Definition("svc").share().add_tag("t")

        assert repr(definition) == "Definition(id='svc', shared, tags=['t'])"


class TestServiceKey:
    """Tests for service_key()."""

    def test_string_is_unchanged(self):
        assert service_key("mailer") == "mailer"

    def test_class_uses_dotted_path(self):
        assert service_key(Outer) == f"{__name__}.Outer"
        assert service_key(Outer.Inner) == f"{__name__}.Outer.Inner"

    def test_other_types_rejected(self):
        with pytest.raises(TypeError):
            service_key(42)


class TestLocateClass:
    """Tests for locate_class()."""

    def test_stdlib_class(self):
        """Test importing a class from a dotted path."""
        assert locate_class("collections.OrderedDict") is OrderedDict

    def test_nested_class(self):
        """Test walking nested class attributes."""
        assert locate_class(service_key(Outer.Inner)) is Outer.Inner

    def test_missing_module(self):
        assert locate_class("no_such_module_for_tests.Thing") is None

    def test_missing_attribute(self):
        assert locate_class("collections.NoSuchThing") is None

    def test_non_class_attribute(self):
        """Test that functions and modules are not classes."""
        assert locate_class("collections.namedtuple") is None
        assert locate_class("os.path") is None

    def test_undotted_names_never_import(self):
        assert locate_class("collections") is None
        assert locate_class("") is None
        assert locate_class("collections..OrderedDict") is None


class TestTypeRegistry:
    """Tests for TypeRegistry."""

    def test_register_and_lookup(self):
        registry = TypeRegistry(resolve_dotted_names=False)

        key = registry.register(Outer)

        assert key == service_key(Outer)
        assert key in registry
        assert len(registry) == 1
        assert registry.lookup(key) is Outer

    def test_lookup_imports_when_enabled(self):
        """Test that dotted names are imported and remembered."""
        registry = TypeRegistry()

        assert registry.lookup("collections.OrderedDict") is OrderedDict
        assert "collections.OrderedDict" in registry

    def test_lookup_without_imports(self):
        registry = TypeRegistry(resolve_dotted_names=False)

        assert registry.lookup("collections.OrderedDict") is None

    def test_require_raises_lookup_error(self):
        registry = TypeRegistry()

        with pytest.raises(LookupError) as exc_info:
            registry.require("no_such_module_for_tests.Thing")

        assert "importable" in str(exc_info.value)
