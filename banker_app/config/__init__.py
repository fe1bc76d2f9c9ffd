"""
Configuration loading and validation for the auto banker.
"""
from .loader import ConfigLoader
from .settings import BankerConfig

__all__ = ["BankerConfig", "ConfigLoader"]
