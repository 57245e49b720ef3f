"""
Domain Exceptions

Errors raised while building or navigating a decision tree.
"""


class ConfigurationError(Exception):
    """The tree definition cannot be used. Fatal at construction."""
    pass


class EmptyStepGraphError(ConfigurationError):
    """Raised when a tree declares no steps at all."""
    pass


class DuplicateStepError(ConfigurationError):
    """Raised when two steps share an identifier."""
    pass


class InvalidTransitionError(Exception):
    """
    A navigation event that has no transition from the current state
    (answer to an unknown step, back on the first step).
    Reported to the caller; the session state is left untouched.
    """
    pass
