"""FTP file transfer implementation."""

import ftplib
import logging
import posixpath
from typing import BinaryIO

from filegate.connection import FTPConnection

from .base import BaseTransfer, RemoteEntry, TransferFactory

logger = logging.getLogger(__name__)

# Replies meaning the server does not implement MLSD
_UNSUPPORTED_REPLIES = ("500", "502", "504")


class FTPTransfer(BaseTransfer):
    """FTP file transfer handler.

    ftplib raises on every negative reply, so the variant never ignores a
    failed STOR/RETR/DELE. A failed CWD is the only reply read as a plain
    "no": it means the directory is not there.

    ``exists`` relies on NLST and reports an empty directory as missing on
    servers that answer an empty listing with 550 or 450.
    """

    protocol = "ftp"
    connection_class = FTPConnection
    protocol_errors = ftplib.all_errors

    connection: FTPConnection

    @property
    def _ftp(self) -> ftplib.FTP:
        return self.connection.client

    def _list(self, remote_dir: str) -> list[RemoteEntry]:
        try:
            facts = list(self._ftp.mlsd(remote_dir))
        except ftplib.error_perm as e:
            if not str(e).startswith(_UNSUPPORTED_REPLIES):
                raise
            logger.debug(f"MLSD not supported, listing {remote_dir} with NLST")
            return self._list_by_probe(remote_dir)

        return [
            RemoteEntry(name, fact.get("type", "").lower() == "dir")
            for name, fact in facts
            if fact.get("type", "").lower() not in ("cdir", "pdir")
        ]

    def _list_by_probe(self, remote_dir: str) -> list[RemoteEntry]:
        """List with NLST and classify each name with a CWD probe."""
        origin = self._ftp.pwd()
        entries = []
        for path in self._nlst(remote_dir):
            name = posixpath.basename(path.rstrip("/"))
            if not name:
                continue
            is_dir = self._chdir(f"{remote_dir}/{name}")
            if is_dir:
                # remote_dir may be relative to where we started
                self._ftp.cwd(origin)
            entries.append(RemoteEntry(name, is_dir))
        return entries

    def _nlst(self, remote_path: str) -> list[str]:
        try:
            return self._ftp.nlst(remote_path)
        except (ftplib.error_perm, ftplib.error_temp) as e:
            # Servers answer NLST of an empty or missing path with 550 or 450
            if str(e)[:3] in ("550", "450"):
                return []
            raise

    def _put(self, source: BinaryIO, remote_path: str) -> None:
        self._ftp.storbinary(f"STOR {remote_path}", source)

    def _get(self, remote_path: str, target: BinaryIO) -> None:
        self._ftp.retrbinary(f"RETR {remote_path}", target.write)

    def _remove(self, remote_path: str) -> None:
        self._ftp.delete(remote_path)

    def _mkdir(self, remote_path: str) -> None:
        self._ftp.mkd(remote_path)

    def _rmdir(self, remote_path: str) -> None:
        self._ftp.rmd(remote_path)

    def _chdir(self, remote_path: str) -> bool:
        try:
            self._ftp.cwd(remote_path)
        except ftplib.error_perm:
            return False
        return True

    def _exists(self, remote_path: str) -> bool:
        return len(self._nlst(remote_path)) > 0


# Register FTP handler with factory
TransferFactory.register("ftp", FTPTransfer)
