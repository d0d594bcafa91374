"""File transfer implementations."""

from typing import TYPE_CHECKING, Optional

from .base import BaseTransfer, RemoteEntry, TransferFactory
from .ftp import FTPTransfer
from .sftp import SFTPTransfer

if TYPE_CHECKING:
    from filegate.config import ConfigLoader
    from filegate.connection import BaseConnection

__all__ = [
    "BaseTransfer",
    "FTPTransfer",
    "RemoteEntry",
    "SFTPTransfer",
    "TransferFactory",
    "create_transfer",
    "open_transfer",
]


def create_transfer(protocol: str, connection: "BaseConnection") -> BaseTransfer:
    """Create the transfer handler for a protocol tag and connection."""
    return TransferFactory.create(protocol, connection)


def open_transfer(
    hostname: str, config: Optional["ConfigLoader"] = None
) -> BaseTransfer:
    """Connect to a configured server and return its transfer handler.

    Args:
        hostname: Server identifier in the environment (e.g., "REPORTS_SFTP")
        config: Configuration loader (uses global if not provided)

    Raises:
        ValueError: If the server configuration is missing or invalid
        FileTransferError: If the connection cannot be established
    """
    from filegate.config import get_config
    from filegate.connection import connection_from_config

    loader = config or get_config()
    server = loader.get_server_config(hostname)
    return TransferFactory.create(server.type, connection_from_config(server, loader))
