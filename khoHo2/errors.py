"""
Error types for khoHo2.

All fatal conditions derive from KhovanovError so callers can catch the
whole family at once:

- InvalidReferenceError: uninitialized or out-of-range slot, unknown
  homology type, primary grading outside the complex
- CapacityExceededError: the diagram is too large for the configured
  static ceilings (not a bug)
- InternalConsistencyError: a required algebraic identity failed
  (always a logic defect, never retried)

Conjecture failures are not exceptions; see conjecture.ConjectureViolation.
"""


class KhovanovError(Exception):
    """Base class for all khoHo2 errors."""


class InvalidReferenceError(KhovanovError, LookupError):
    """Operation on an unknown slot, homology type or grading."""


class CapacityExceededError(KhovanovError):
    """A generator, grading or entry count exceeds its configured ceiling."""

    def __init__(self, message: str, limit: int = None, requested: int = None):
        super().__init__(message)
        self.limit = limit
        self.requested = requested


class InternalConsistencyError(KhovanovError):
    """Computed data failed an identity that must always hold."""
