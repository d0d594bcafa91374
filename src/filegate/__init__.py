"""filegate - one client interface for SFTP and FTP servers."""

from .client import AsyncClient, SyncClient
from .config import ConfigLoader, ServerConfig, get_config
from .connection import BaseConnection, FTPConnection, SFTPConnection
from .exceptions import (
    ChannelNotConnectedError,
    ConnectionFailedError,
    DirectoryCreationError,
    DirectoryDeletionError,
    FileTransferError,
    UnsupportedProtocolError,
)
from .transfer import (
    BaseTransfer,
    FTPTransfer,
    RemoteEntry,
    SFTPTransfer,
    TransferFactory,
    create_transfer,
    open_transfer,
)

__version__ = "0.1.0"

__all__ = [
    "AsyncClient",
    "BaseConnection",
    "BaseTransfer",
    "ChannelNotConnectedError",
    "ConfigLoader",
    "ConnectionFailedError",
    "DirectoryCreationError",
    "DirectoryDeletionError",
    "FTPConnection",
    "FTPTransfer",
    "FileTransferError",
    "RemoteEntry",
    "SFTPConnection",
    "SFTPTransfer",
    "ServerConfig",
    "SyncClient",
    "TransferFactory",
    "UnsupportedProtocolError",
    "create_transfer",
    "get_config",
    "open_transfer",
]
