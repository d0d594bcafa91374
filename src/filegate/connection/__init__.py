"""Remote server connections."""

from typing import TYPE_CHECKING, Optional

from .base import BaseConnection
from .ftp import FTPConnection
from .sftp import SFTPConnection

if TYPE_CHECKING:
    from filegate.config import ConfigLoader, ServerConfig

__all__ = [
    "BaseConnection",
    "FTPConnection",
    "SFTPConnection",
    "connection_from_config",
]


def connection_from_config(
    config: "ServerConfig", loader: Optional["ConfigLoader"] = None
) -> BaseConnection:
    """Build an unconnected connection for a server config entry.

    Args:
        config: Server configuration
        loader: Source of protocol settings (uses global if not provided)

    Returns:
        FTPConnection or SFTPConnection matching ``config.type``

    Raises:
        ValueError: If the server type is not ftp or sftp
    """
    if loader is None:
        from filegate.config import get_config

        loader = get_config()

    server_type = config.type.lower()
    if server_type == "ftp":
        return FTPConnection(
            config.host,
            config.port,
            config.username,
            config.password,
            passive_mode=loader.ftp_passive_mode,
            timeout=loader.ftp_connect_timeout,
        )
    if server_type == "sftp":
        return SFTPConnection(
            config.host,
            config.port,
            config.username,
            config.password,
            timeout=loader.sftp_connect_timeout,
        )
    raise ValueError(f"Unsupported server type: {config.type}")
