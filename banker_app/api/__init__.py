"""
HTTP surface of the auto banker: the confirmation link endpoint.
"""
from .app import create_app

__all__ = ["create_app"]
