"""
Exceptions raised by the chord engine.

Only configuration preconditions are errors. A wrong answer is never an
exception - the matchers return False for it.
"""


class ChordEngineError(ValueError):
    """Base class for chord engine precondition violations."""


class InvalidInversion(ChordEngineError):
    """An inversion index outside the tone range of a chord quality."""


class ConfigurationError(ChordEngineError):
    """A level configuration that cannot produce a valid chord."""
