"""
Exception hierarchy for Graphene.

Every error raised by the library derives from GrapheneError so callers can
catch the whole family at once, or branch on the specific kind:

- ValidationError: missing or malformed arguments
- IdentityError: a node key could not be derived from the value
- IntegrityError: a key clashes with an existing entry or reserved name
- SecurityViolationError: a delegated accessor is not allowed
- PolicyError: an update was refused on request of the caller
- NotFoundError: the requested key does not exist
- UnknownAttributeError / UnsupportedOperationError: facade level errors
"""

from typing import Optional


class GrapheneError(Exception):
    """Base class for all Graphene errors."""

    def __init__(self, message: str, key: Optional[str] = None):
        self.key = key
        super().__init__(message)


# --- Validation ---

class ValidationError(GrapheneError):
    pass


class NullValueError(ValidationError):
    """A None value was passed where a real object is required."""


class NullKeyError(ValidationError):
    """A None key was passed to a metadata operation."""


class KeyNotStringError(ValidationError):
    """A metadata key is not a str."""


class KeyHasInternalSpacesError(ValidationError):
    """A metadata key contains more than one whitespace separated word."""


class EmptyKeyError(ValidationError):
    """A metadata key is empty after trimming."""


class KeyTypeError(ValidationError, TypeError):
    """
    A node key is not a str. Raised both for a non-string custom key and for
    a delegated accessor that returned something other than a string.
    """


# --- Identity ---

class IdentityError(GrapheneError):
    pass


class NoHashCapabilityError(IdentityError):
    """The value cannot be hashed, so no default key can be derived."""


class AccessorNotFoundError(IdentityError):
    """The value exposes no field or method with the delegated name."""


# --- Integrity ---

class IntegrityError(GrapheneError):
    pass


class DuplicateKeyError(IntegrityError):
    """A node with the same key is already registered."""


class KeyCollidesWithOperationNameError(IntegrityError):
    """A metadata key matches the name of a graph operation."""


# --- Security ---

class SecurityViolationError(GrapheneError):
    """The delegated accessor is forbidden, or outside the configured allowlist."""


# --- Policy ---

class PolicyError(GrapheneError):
    pass


class ValueNonUpdatableError(PolicyError):
    """The key already exists and the caller asked for no update."""


# --- Not found ---

class NotFoundError(GrapheneError, KeyError):
    # KeyError.__str__ quotes the message; keep the plain text.
    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class KeyNotFoundError(NotFoundError):
    """No metadata is stored under the key."""


class NodeNotFoundError(NotFoundError):
    """No node is registered under the key."""


# --- Facade ---

class UnknownAttributeError(GrapheneError, AttributeError):
    """Attribute-style lookup found neither an attribute nor graph metadata."""


class UnsupportedOperationError(GrapheneError, NotImplementedError):
    """The operation is a placeholder on this graph variant."""


class ConfigError(GrapheneError):
    """The configuration file could not be read or has invalid content."""
