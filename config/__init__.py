"""Configuration package for the TechWell engine services."""
from .registry import EVAL_KEY, bind_model, find_model, get_model, unbind_model
from .settings import Settings, settings

__all__ = [
    "EVAL_KEY",
    "bind_model",
    "find_model",
    "get_model",
    "unbind_model",
    "Settings",
    "settings",
]
