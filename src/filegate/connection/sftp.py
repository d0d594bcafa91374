"""SFTP connection backed by paramiko."""

import logging
import socket

import paramiko

from ..exceptions import ChannelNotConnectedError, ConnectionFailedError
from .base import BaseConnection

logger = logging.getLogger(__name__)


class SFTPConnection(BaseConnection):
    """SSH session with a single SFTP channel."""

    protocol = "sftp"

    def __init__(
        self,
        host: str,
        port: int,
        username: str,
        password: str,
        timeout: int = 10,
    ):
        """Initialize SFTP connection.

        Args:
            host: SSH server host
            port: SSH server port
            username: Login user name
            password: Login password
            timeout: Connection timeout in seconds (default: 10)
        """
        super().__init__(host, port, username, password)
        self.timeout = timeout
        self._ssh: paramiko.SSHClient | None = None
        self._sftp: paramiko.SFTPClient | None = None

    @property
    def is_connected(self) -> bool:
        if self._sftp is None or self._ssh is None:
            return False
        channel = self._sftp.get_channel()
        transport = self._ssh.get_transport()
        return (
            channel is not None
            and not channel.closed
            and transport is not None
            and transport.is_active()
        )

    def connect(self) -> None:
        """Open the SSH session and its SFTP channel.

        Raises:
            ConnectionFailedError: If the handshake, authentication or
                channel open fails
        """
        if self.is_connected:
            return

        logger.info(f"Connecting to SFTP server: {self.host}:{self.port}")
        ssh = paramiko.SSHClient()
        # Host key verification is left to the caller's environment
        ssh.set_missing_host_key_policy(paramiko.AutoAddPolicy())
        try:
            ssh.connect(
                hostname=self.host,
                port=self.port,
                username=self.username,
                password=self.password,
                timeout=self.timeout,
                look_for_keys=False,
                allow_agent=False,
            )
            sftp = ssh.open_sftp()
        except (paramiko.SSHException, socket.error) as e:
            ssh.close()
            raise ConnectionFailedError(
                f"Failed to connect to SFTP server {self.host}:{self.port}: {e}"
            ) from e

        self._ssh = ssh
        self._sftp = sftp
        logger.info("SFTP connection established")

    def disconnect(self) -> None:
        """Close the SFTP channel and SSH session if they are alive.

        Safe to call when never connected or already disconnected.
        """
        sftp, self._sftp = self._sftp, None
        ssh, self._ssh = self._ssh, None

        if sftp is not None:
            try:
                channel = sftp.get_channel()
                if channel is not None and not channel.closed:
                    sftp.close()
            except (OSError, paramiko.SSHException, EOFError) as e:
                logger.debug(f"Error closing SFTP channel: {e}")
        if ssh is not None:
            try:
                transport = ssh.get_transport()
                if transport is not None and transport.is_active():
                    ssh.close()
                    logger.info("SFTP connection closed")
            except (OSError, paramiko.SSHException, EOFError) as e:
                logger.debug(f"Error closing SSH session: {e}")

    def get_channel(self) -> paramiko.SFTPClient:
        """Return the live SFTP handle.

        Raises:
            ChannelNotConnectedError: If the session is absent or has dropped
        """
        if not self.is_connected:
            raise ChannelNotConnectedError(
                f"SFTP channel to {self.host}:{self.port} is not connected"
            )
        return self._sftp
