"""Error types raised by filegate.

Protocol library errors (paramiko, ftplib) never cross the transfer
boundary directly; they are re-raised as one of these with the original
exception chained as ``__cause__``.
"""

from typing import Optional


class FileTransferError(Exception):
    """Base class for all filegate errors."""


class ConnectionFailedError(FileTransferError, ConnectionError):
    """Session establishment, authentication or teardown failed."""


class ChannelNotConnectedError(FileTransferError, ConnectionError):
    """A session handle was requested while no live session exists."""


class UnsupportedProtocolError(FileTransferError, ValueError):
    """The factory was given a protocol tag it does not know."""


class DirectoryCreationError(FileTransferError):
    """Recursive directory creation stopped at ``path``."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class DirectoryDeletionError(FileTransferError):
    """Recursive directory deletion stopped at ``path``."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path
