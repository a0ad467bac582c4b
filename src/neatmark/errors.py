"""
neatmark Errors Module

Exception hierarchy raised by the innovation registry and its collaborators.

Classes:
    NeatmarkError:           Base class for all errors raised by this package
    ConfigurationError:      A precondition on the setup was violated
    InvalidArgumentError:    A caller passed a malformed identifier or key
    IdentifierOverflowError: An identifier counter ran out of values
    ArchiveError:            A persisted innovation set is corrupt or inconsistent
"""

class NeatmarkError(Exception):
    """Base class for all neatmark errors."""

class ConfigurationError(NeatmarkError):
    """
    Raised when the registry is used before it was properly set up
    (e.g. no population attached), or when a configuration value is invalid.
    Not retriable: the caller has to fix the setup first.
    """

class InvalidArgumentError(NeatmarkError, ValueError):
    """Raised for malformed neuron identifiers, keys or neuron types."""

class IdentifierOverflowError(NeatmarkError, OverflowError):
    """Raised when a neuron or innovation counter is exhausted."""

class ArchiveError(NeatmarkError):
    """Raised when an innovation archive cannot be loaded consistently."""
