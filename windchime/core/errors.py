"""Errors raised by the chime core."""


class ConfigurationError(ValueError):
    """
    A physical parameter is invalid (non-positive mass, length or moment of
    inertia, damping outside (0, 1), ...). Raised at construction only.
    """
