"""Errors raised by the storefront core.

`InvalidRequest` and `AddressNotFound` extend Protean's exceptions so the
FastAPI integration maps them to 400 and 404 responses.
"""

from protean.exceptions import ObjectNotFoundError, ValidationError


class InvalidRequest(ValidationError):
    """Missing identity, missing address reference, or an empty item list."""


class AddressNotFound(ObjectNotFoundError):
    """The address does not exist or belongs to another user."""


class PersistenceFailure(Exception):
    """A store-level error aborted the unit of work. Nothing was persisted."""


class PrimaryInvariantViolation(Exception):
    """More than one primary address was observed for a single user."""
