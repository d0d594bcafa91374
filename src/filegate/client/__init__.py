"""Blocking and asynchronous client facades."""

from .reactive import AsyncClient
from .sync import SyncClient

__all__ = [
    "AsyncClient",
    "SyncClient",
]
