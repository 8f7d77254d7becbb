"""Error kinds surfaced by a matching run.

All of them abort the run; none is downgraded to a default fill decision.
"""


class MatchingError(Exception):
    """Base class for every failure of a matching run."""


class InputError(MatchingError, ValueError):
    """Order input rejected before any encryption took place."""


class OracleAnomaly(MatchingError, RuntimeError):
    """A revealed comparison outcome was not 0 or 1.

    Signals scheme-level corruption (modulus wraparound, exhausted noise
    budget, misconfigured parameters) rather than a data problem.
    """

    def __init__(self, value: int, context: str = ""):
        self.value = value
        self.context = context
        where = f" during {context}" if context else ""
        super().__init__(f"Comparison oracle revealed {value}{where}, expected 0 or 1")


class CapabilityError(MatchingError, RuntimeError):
    """Missing or mismatched key material in the encryption context."""
