"""FTP connection backed by ftplib."""

import ftplib
import logging

from ..exceptions import ChannelNotConnectedError, ConnectionFailedError
from .base import BaseConnection

logger = logging.getLogger(__name__)


class FTPConnection(BaseConnection):
    """FTP session handler."""

    protocol = "ftp"

    def __init__(
        self,
        host: str,
        port: int,
        username: str,
        password: str,
        passive_mode: bool = True,
        timeout: int = 30,
    ):
        """Initialize FTP connection.

        Args:
            host: FTP server host
            port: FTP server port
            username: Login user name
            password: Login password
            passive_mode: Use passive mode (default: True)
            timeout: Connection timeout in seconds (default: 30)
        """
        super().__init__(host, port, username, password)
        self.passive_mode = passive_mode
        self.timeout = timeout
        self._ftp: ftplib.FTP | None = None

    @property
    def is_connected(self) -> bool:
        return self._ftp is not None and self._ftp.sock is not None

    @property
    def client(self) -> ftplib.FTP:
        """Return the live ftplib handle.

        Raises:
            ChannelNotConnectedError: If connect() has not been called or
                the connection was closed
        """
        if not self.is_connected:
            raise ChannelNotConnectedError(
                f"FTP session to {self.host}:{self.port} is not connected"
            )
        return self._ftp

    def connect(self) -> None:
        """Establish FTP connection, log in and switch to binary mode.

        Raises:
            ConnectionFailedError: If connection or login fails
        """
        if self.is_connected:
            return

        logger.info(f"Connecting to FTP server: {self.host}:{self.port}")
        ftp = ftplib.FTP()
        try:
            ftp.connect(self.host, self.port, timeout=self.timeout)
            ftp.login(self.username, self.password)

            # Set passive/active mode
            ftp.set_pasv(self.passive_mode)
            ftp.voidcmd("TYPE I")
        except ftplib.all_errors as e:
            ftp.close()
            raise ConnectionFailedError(
                f"Failed to connect to FTP server {self.host}:{self.port}: {e}"
            ) from e

        self._ftp = ftp
        mode = "passive" if self.passive_mode else "active"
        logger.info(f"FTP connection established ({mode} mode)")

    def disconnect(self) -> None:
        """Send QUIT and close the socket.

        Raises:
            ConnectionFailedError: If QUIT fails; the socket is closed anyway
        """
        if self._ftp is None:
            return

        ftp, self._ftp = self._ftp, None
        try:
            ftp.quit()
        except ftplib.all_errors as e:
            ftp.close()
            raise ConnectionFailedError(
                f"Failed to close FTP session {self.host}:{self.port}: {e}"
            ) from e
        logger.info("FTP connection closed")
