"""Typed failures raised by the offline engine and its collaborators."""

from __future__ import annotations


class LithoscopeError(Exception):
    """Base class for every error this package raises on purpose."""


class ImageDecodeError(LithoscopeError):
    """The input could not be decoded into a non-empty pixel grid."""


class ConfigurationError(LithoscopeError):
    """Static configuration (archetype table, engine geometry) is unusable."""


class CloudAnalysisError(LithoscopeError):
    """The cloud model was unreachable, unconfigured, or returned nothing."""
