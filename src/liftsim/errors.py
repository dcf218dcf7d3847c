from __future__ import annotations


class LiftSimError(Exception):
    """Base class for all simulation errors."""


class InvalidConfiguration(LiftSimError, ValueError):
    """Raised before a run starts when its inputs cannot be simulated."""


class InvariantViolation(LiftSimError):
    """Raised when passengers were lost or duplicated during a run."""
