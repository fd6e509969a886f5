"""Detect which props, events and slots of Vue components are used by their parents."""

from .parser.channels import get_dependency_with_used_channels_analysis

__version__ = "0.1.0"

__all__ = ["__version__", "get_dependency_with_used_channels_analysis"]
