"""Typed parameter objects used at the factory boundary."""

from .adapter_params import AdapterParams

__all__ = ["AdapterParams"]
