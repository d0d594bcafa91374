"""SFTP file transfer implementation."""

import errno
import stat
from typing import BinaryIO

import paramiko

from filegate.connection import SFTPConnection

from .base import BaseTransfer, RemoteEntry, TransferFactory


class SFTPTransfer(BaseTransfer):
    """SFTP file transfer handler.

    The SFTP handle is fetched from the connection on every call, so a
    dropped session surfaces as ChannelNotConnectedError at point of use.
    paramiko reports SSH_FX_NO_SUCH_FILE as an IOError with errno ENOENT;
    that is the only status treated as "does not exist".
    """

    protocol = "sftp"
    connection_class = SFTPConnection
    protocol_errors = (OSError, paramiko.SFTPError, paramiko.SSHException)

    connection: SFTPConnection

    @property
    def _sftp(self) -> paramiko.SFTPClient:
        return self.connection.get_channel()

    def _list(self, remote_dir: str) -> list[RemoteEntry]:
        return [
            RemoteEntry(attr.filename, stat.S_ISDIR(attr.st_mode or 0))
            for attr in self._sftp.listdir_attr(remote_dir)
        ]

    def _put(self, source: BinaryIO, remote_path: str) -> None:
        self._sftp.putfo(source, remote_path)

    def _get(self, remote_path: str, target: BinaryIO) -> None:
        self._sftp.getfo(remote_path, target)

    def _remove(self, remote_path: str) -> None:
        self._sftp.remove(remote_path)

    def _mkdir(self, remote_path: str) -> None:
        self._sftp.mkdir(remote_path)

    def _rmdir(self, remote_path: str) -> None:
        self._sftp.rmdir(remote_path)

    def _chdir(self, remote_path: str) -> bool:
        try:
            self._sftp.chdir(remote_path)
        except IOError as e:
            if e.errno == errno.ENOENT:
                return False
            raise
        return True

    def _exists(self, remote_path: str) -> bool:
        try:
            self._sftp.lstat(remote_path)
        except IOError as e:
            if e.errno == errno.ENOENT:
                return False
            raise
        return True


# Register SFTP handler with factory
TransferFactory.register("sftp", SFTPTransfer)
