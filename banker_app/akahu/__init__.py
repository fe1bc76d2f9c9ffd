"""
Akahu open banking client used as balance source and transfer executor.
"""
from .client import AkahuClient

__all__ = ["AkahuClient"]
