from __future__ import annotations


class ACSError(Exception):
    """Base class for every error raised by the ACS engine."""


class InvalidConfig(ACSError, ValueError):
    pass


class InvalidDistance(ACSError, ValueError):
    """Distance matrix cannot produce a finite visibility matrix."""


class InvalidTour(ACSError, ValueError):
    pass


class InvalidCost(ACSError, ValueError):
    """A score, weight or cost came out as NaN."""


class InvariantViolation(ACSError, AssertionError):
    """Internal state the engine should never reach. Not recoverable."""


class NoCandidateCities(InvariantViolation):
    pass


class EmptyBestTour(InvariantViolation):
    pass


class DegenerateDistribution(InvariantViolation):
    pass
