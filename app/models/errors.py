"""
Error types raised by the circuit core.

All errors derive from CircuitError so collaborators can catch the whole
family, and also from the matching builtin so plain ``except ValueError``
handlers keep working.
"""


class CircuitError(Exception):
    """Base class for circuit core errors."""


class ValidationError(CircuitError, ValueError):
    """Raised when an element, property, label or id fails validation."""


class ElementLookupError(CircuitError, LookupError):
    """Raised when an element type or element id cannot be found."""


class ReentrantNotificationError(CircuitError):
    """Raised when an observer emits a change while a dispatch is running."""
