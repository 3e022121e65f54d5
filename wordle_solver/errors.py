"""Exceptions raised by the solver."""


class ConfigurationError(ValueError):
    """Malformed vocabulary or an unknown word."""


class InvalidHintError(ValueError):
    """Hint value or feedback that does not describe a valid hint."""


class EmptyCandidatesError(ValueError):
    """No secret is consistent with the feedback, or nothing to score."""
