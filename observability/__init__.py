"""Observability utilities for the TechWell engines."""
from .logger import log_event

__all__ = ["log_event"]
