"""Error types raised by the inspiration capsule.

An empty collection or a search without hits is not an error: those
return ``None`` or an empty list.
"""


class CapsuleError(Exception):
    """Base error for the capsule."""


class ValidationError(CapsuleError):
    """Caller-supplied input violates a precondition (e.g. empty content)."""


class StoreError(CapsuleError):
    """The persistence layer failed (connection, query, constraint)."""
