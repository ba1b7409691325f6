"""Transformation registry."""

from __future__ import annotations

from .catalog import BUILTIN_TRANSFORMATIONS
from .registry import TransformationDescriptor, TransformationRegistry

_DEFAULT_REGISTRY = TransformationRegistry(BUILTIN_TRANSFORMATIONS)


def default_registry() -> TransformationRegistry:
    return _DEFAULT_REGISTRY
