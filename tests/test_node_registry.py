import sys
import threading

import pytest

from graphene.errors import (
    AccessorNotFoundError,
    DuplicateKeyError,
    KeyTypeError,
    NoHashCapabilityError,
    NodeNotFoundError,
    NullValueError,
    SecurityViolationError,
)
from graphene.node_registry import KeyDerivation, NodeRegistry
from graphene.security import AccessorPolicy


class User:
    def __init__(self, username, age=30):
        self.username = username
        self.age = age

    def display_name(self):
        return self.username.title()


class Dangerous:
    """Exposes forbidden names that would happily return valid keys."""

    def __init__(self):
        self.calls = []

    def exit(self):
        self.calls.append("exit")
        return "exit-key"

    @property
    def read(self):
        self.calls.append("read")
        return "read-key"


class Product:
    """Implements KeyedNode: only 'sku' is exposed."""

    def __init__(self, sku):
        self._fields = {"sku": sku}

    def node_key_field(self, name):
        return self._fields.get(name)


@pytest.fixture
def registry():
    return NodeRegistry()


def test_new_registry_is_empty(registry):
    assert registry.count() == 0
    assert len(registry) == 0
    assert registry.keys() == []


def test_none_value_is_rejected(registry):
    with pytest.raises(NullValueError):
        registry.register(None)
    assert registry.count() == 0


def test_hashed_keys_for_distinct_values(registry):
    registry.register(5)
    registry.register("five")

    assert registry.count() == 2
    assert "5" in registry
    assert registry.get(str(hash("five"))) == "five"
    assert registry.entry("5").derivation == KeyDerivation.HASHED
    assert registry.entry("5").custom_key == ""


def test_unhashable_value_needs_custom_key(registry):
    with pytest.raises(NoHashCapabilityError):
        registry.register([1, 2, 3])

    # Same value is fine with a literal key
    registry.register([1, 2, 3], "numbers")
    assert registry.get("numbers") == [1, 2, 3]


def test_duplicate_hashed_key_keeps_first_value(registry):
    registry.register(5)
    with pytest.raises(DuplicateKeyError) as exc_info:
        registry.register(5)
    assert exc_info.value.key == "5"
    assert registry.count() == 1


def test_literal_key_used_verbatim(registry):
    registry.register({"name": "root"}, " root node ")

    assert " root node " in registry
    entry = registry.entry(" root node ")
    assert entry.derivation == KeyDerivation.LITERAL
    assert entry.accessor is None
    assert registry.accessor_for(" root node ") is None


def test_duplicate_literal_key_keeps_first_value(registry):
    registry.register("first", "k")
    with pytest.raises(DuplicateKeyError):
        registry.register("second", "k")
    assert registry.get("k") == "first"
    assert registry.count() == 1


def test_non_string_custom_key(registry):
    with pytest.raises(KeyTypeError):
        registry.register("value", 42)
    # KeyTypeError is also a TypeError
    with pytest.raises(TypeError):
        registry.register("value", 4.2)
    assert registry.count() == 0


def test_none_custom_key_falls_back_to_hash(registry):
    registry.register(7, None)
    assert registry.entry("7").derivation == KeyDerivation.HASHED


def test_delegated_field(registry):
    alice = User("alice")
    registry.register(alice, ".username")

    assert registry.get("alice") is alice
    entry = registry.entry("alice")
    assert entry.derivation == KeyDerivation.DELEGATED
    assert entry.accessor == "username"
    assert entry.custom_key == ".username"
    assert registry.accessor_for("alice") == "username"


def test_delegated_method_is_called(registry):
    registry.register(User("bob"), ".display_name")
    assert "Bob" in registry
    assert registry.accessor_for("Bob") == "display_name"


def test_duplicate_delegated_key_keeps_first_value(registry):
    first = User("carol")
    registry.register(first, ".username")
    with pytest.raises(DuplicateKeyError):
        registry.register(User("carol"), ".username")
    assert registry.get("carol") is first


def test_delegated_key_collides_with_literal(registry):
    registry.register("literal", "dave")
    with pytest.raises(DuplicateKeyError):
        registry.register(User("dave"), ".username")
    assert registry.get("dave") == "literal"
    assert registry.accessor_for("dave") is None


def test_missing_accessor(registry):
    with pytest.raises(AccessorNotFoundError):
        registry.register(User("erin"), ".email")


def test_missing_accessor_reported_before_security_check(registry):
    # 'exit' is forbidden, but User has no such attribute
    with pytest.raises(AccessorNotFoundError):
        registry.register(User("erin"), ".exit")


def test_missing_accessor_reported_before_uniqueness_check(registry):
    registry.register("taken", "frank")
    with pytest.raises(AccessorNotFoundError):
        registry.register(User("frank"), ".nickname")


def test_empty_accessor_name(registry):
    with pytest.raises(AccessorNotFoundError):
        registry.register(User("gina"), ".")


def test_forbidden_method_is_never_called(registry):
    value = Dangerous()
    with pytest.raises(SecurityViolationError):
        registry.register(value, ".exit")
    assert value.calls == []
    assert registry.count() == 0


def test_forbidden_property_is_never_evaluated(registry):
    value = Dangerous()
    with pytest.raises(SecurityViolationError):
        registry.register(value, ".read")
    assert value.calls == []


def test_dunder_accessors_are_forbidden(registry):
    with pytest.raises(SecurityViolationError):
        registry.register(User("hank"), ".__class__")
    with pytest.raises(SecurityViolationError):
        registry.register(User("hank"), ".__repr__")


def test_accessor_must_return_string(registry):
    with pytest.raises(KeyTypeError):
        registry.register(User("ivy", age=41), ".age")
    assert registry.count() == 0


def test_allowlist_limits_accessors():
    registry = NodeRegistry(AccessorPolicy(allowlist=["username"]))
    registry.register(User("jack"), ".username")

    with pytest.raises(SecurityViolationError):
        registry.register(User("jack"), ".display_name")
    assert registry.count() == 1


def test_empty_allowlist_permits_nothing():
    registry = NodeRegistry(AccessorPolicy(allowlist=[]))
    with pytest.raises(SecurityViolationError):
        registry.register(User("kim"), ".username")


def test_keyed_node_exposes_only_its_fields(registry):
    product = Product("SKU-1")
    registry.register(product, ".sku")
    assert registry.get("SKU-1") is product
    assert registry.accessor_for("SKU-1") == "sku"

    # _fields is a real attribute, but not an exposed key field
    with pytest.raises(AccessorNotFoundError):
        registry.register(Product("SKU-2"), "._fields")


def test_keyed_node_must_return_string(registry):
    class Counter:
        def node_key_field(self, name):
            return 12

    with pytest.raises(KeyTypeError):
        registry.register(Counter(), ".count")


def test_lookup_of_unknown_key(registry):
    with pytest.raises(NodeNotFoundError):
        registry.get("nope")
    # NodeNotFoundError is a KeyError
    with pytest.raises(KeyError):
        registry.entry("nope")


def test_iteration_and_entries_follow_registration_order(registry):
    registry.register("a", "one")
    registry.register("b", "two")
    registry.register(User("three"), ".username")

    assert list(registry) == ["one", "two", "three"]
    assert [e.value for e in registry.entries()][:2] == ["a", "b"]


def test_thread_start_is_forbidden(registry):
    ran = []
    worker = threading.Thread(target=lambda: ran.append(1))

    with pytest.raises(SecurityViolationError):
        registry.register(worker, ".start")
    assert not worker.is_alive()
    assert ran == []


@pytest.mark.parametrize("name", [
    "_getframe", "set_trace", "help", "forkpty", "start", "accept", "sync",
])
def test_no_argument_side_effects_are_forbidden(registry, name):
    class Tripwire:
        pass

    calls = []
    setattr(Tripwire, name, lambda self: calls.append(name) or "key")

    with pytest.raises(SecurityViolationError):
        registry.register(Tripwire(), "." + name)
    assert calls == []


def test_sys_getframe_is_forbidden(registry):
    with pytest.raises(SecurityViolationError):
        registry.register(sys, "._getframe")


def test_unset_slot_is_not_an_accessor(registry):
    class Slotted:
        __slots__ = ("name",)

    with pytest.raises(AccessorNotFoundError):
        registry.register(Slotted(), ".name")
    assert registry.count() == 0

    filled = Slotted()
    filled.name = "slotted"
    registry.register(filled, ".name")
    assert registry.get("slotted") is filled
