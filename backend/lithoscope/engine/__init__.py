"""Lithoscope offline heuristic engine."""

from lithoscope.engine.context import PipelineContext
from lithoscope.engine.errors import (
    CloudAnalysisError,
    ConfigurationError,
    ImageDecodeError,
    LithoscopeError,
)
from lithoscope.engine.pipeline import Pipeline, create_pipeline
from lithoscope.engine.registry import Layer, get_registry, load_stages, stage

__all__ = [
    "stage",
    "Layer",
    "get_registry",
    "load_stages",
    "PipelineContext",
    "Pipeline",
    "create_pipeline",
    "LithoscopeError",
    "ImageDecodeError",
    "ConfigurationError",
    "CloudAnalysisError",
]
