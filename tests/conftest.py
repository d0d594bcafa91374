"""Pytest configuration and fixtures."""

import errno
import ftplib
import posixpath
import stat
import sys
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import MagicMock

import paramiko
import pytest

# Add src to path for imports
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

# Load test environment
from dotenv import load_dotenv

test_env = Path(__file__).parent.parent / ".env.test"
load_dotenv(test_env)


@pytest.fixture
def test_env_file():
    """Return path to test .env file."""
    return str(test_env)


@pytest.fixture
def temp_file(tmp_path):
    """Create a temporary test file."""
    test_file = tmp_path / "test_file.txt"
    test_file.write_text("Hello, this is a test file for filegate!")
    return str(test_file)


# =============================================================================
# In-memory remote servers
# =============================================================================


class RemoteTree:
    """Remote filesystem shared by the fake SFTP and FTP clients.

    Entries keep insertion order so listings come back in the order the
    entries were created. A value of None marks a directory.
    """

    def __init__(self):
        self.entries: dict[str, bytes | None] = {"/": None}
        self.denied: set[str] = set()

    def is_dir(self, path: str) -> bool:
        return path in self.entries and self.entries[path] is None

    def is_file(self, path: str) -> bool:
        return path in self.entries and self.entries[path] is not None

    def children(self, path: str) -> list[tuple[str, bool]]:
        return [
            (posixpath.basename(p), data is None)
            for p, data in self.entries.items()
            if p != "/" and posixpath.dirname(p) == path
        ]

    def add_dir(self, path: str) -> None:
        parts = [p for p in path.split("/") if p]
        current = ""
        for part in parts:
            current = f"{current}/{part}"
            self.entries.setdefault(current, None)

    def add_file(self, path: str, data: bytes = b"") -> None:
        self.add_dir(posixpath.dirname(path))
        self.entries[path] = data


class FakeSFTPClient:
    """Stand-in for paramiko.SFTPClient raising errors the way paramiko does."""

    def __init__(self, tree: RemoteTree):
        self.tree = tree
        self.cwd: str | None = None
        self.channel = SimpleNamespace(closed=False)
        self.calls: list[tuple[str, str]] = []

    def get_channel(self):
        return self.channel

    def close(self):
        self.channel.closed = True

    def _path(self, path: str, op: str) -> str:
        if not path.startswith("/"):
            path = posixpath.join(self.cwd or "/", path)
        path = posixpath.normpath(path)
        self.calls.append((op, path))
        if path in self.tree.denied:
            raise IOError(errno.EACCES, "Permission denied")
        return path

    def _missing(self, path: str):
        return IOError(errno.ENOENT, f"No such file: {path}")

    def _attrs(self, name: str, is_dir: bool):
        mode = (stat.S_IFDIR | 0o755) if is_dir else (stat.S_IFREG | 0o644)
        return SimpleNamespace(filename=name, st_mode=mode)

    def listdir_attr(self, path="."):
        path = self._path(path, "listdir_attr")
        if not self.tree.is_dir(path):
            raise self._missing(path)
        return [self._attrs(name, is_dir) for name, is_dir in self.tree.children(path)]

    def putfo(self, fl, remotepath):
        path = self._path(remotepath, "putfo")
        if not self.tree.is_dir(posixpath.dirname(path)):
            raise self._missing(path)
        self.tree.entries[path] = fl.read()

    def getfo(self, remotepath, fl):
        path = self._path(remotepath, "getfo")
        if not self.tree.is_file(path):
            raise self._missing(path)
        fl.write(self.tree.entries[path])

    def remove(self, path):
        path = self._path(path, "remove")
        if not self.tree.is_file(path):
            raise self._missing(path)
        del self.tree.entries[path]

    def mkdir(self, path, mode=0o777):
        path = self._path(path, "mkdir")
        if path in self.tree.entries:
            raise IOError("Failure")
        if not self.tree.is_dir(posixpath.dirname(path)):
            raise self._missing(path)
        self.tree.entries[path] = None

    def rmdir(self, path):
        path = self._path(path, "rmdir")
        if not self.tree.is_dir(path):
            raise self._missing(path)
        if self.tree.children(path):
            raise IOError("Failure")
        del self.tree.entries[path]

    def chdir(self, path=None):
        path = self._path(path, "chdir")
        if path not in self.tree.entries:
            raise self._missing(path)
        if not self.tree.is_dir(path):
            raise paramiko.SFTPError(errno.ENOTDIR, f"Not a directory: {path}")
        self.cwd = path

    def lstat(self, path):
        path = self._path(path, "lstat")
        if path not in self.tree.entries:
            raise self._missing(path)
        return self._attrs(posixpath.basename(path), self.tree.is_dir(path))


class FakeFTP:
    """Stand-in for ftplib.FTP raising error_perm the way servers reply."""

    def __init__(self, tree: RemoteTree, mlsd_supported: bool = True):
        self.tree = tree
        self.mlsd_supported = mlsd_supported
        self.cwd_path = "/"
        self.sock = object()
        self.calls: list[tuple[str, str]] = []

    def _path(self, path: str, op: str) -> str:
        if not path.startswith("/"):
            path = posixpath.join(self.cwd_path, path)
        path = posixpath.normpath(path)
        self.calls.append((op, path))
        if path in self.tree.denied:
            raise ftplib.error_perm("550 Permission denied.")
        return path

    def quit(self):
        self.sock = None
        return "221 Goodbye."

    def close(self):
        self.sock = None

    def pwd(self):
        return self.cwd_path

    def cwd(self, dirname):
        path = self._path(dirname, "cwd")
        if not self.tree.is_dir(path):
            raise ftplib.error_perm("550 Failed to change directory.")
        self.cwd_path = path
        return "250 Directory successfully changed."

    def mkd(self, dirname):
        path = self._path(dirname, "mkd")
        if path in self.tree.entries or not self.tree.is_dir(posixpath.dirname(path)):
            raise ftplib.error_perm("550 Create directory operation failed.")
        self.tree.entries[path] = None
        return path

    def rmd(self, dirname):
        path = self._path(dirname, "rmd")
        if not self.tree.is_dir(path) or self.tree.children(path):
            raise ftplib.error_perm("550 Remove directory operation failed.")
        del self.tree.entries[path]
        return "250 Remove directory operation successful."

    def delete(self, filename):
        path = self._path(filename, "delete")
        if not self.tree.is_file(path):
            raise ftplib.error_perm("550 Delete operation failed.")
        del self.tree.entries[path]
        return "250 Delete operation successful."

    def mlsd(self, path="", facts=[]):
        if not self.mlsd_supported:
            raise ftplib.error_perm("500 Unknown command.")
        path = self._path(path, "mlsd")
        if not self.tree.is_dir(path):
            raise ftplib.error_perm("550 No such directory.")
        yield ".", {"type": "cdir"}
        yield "..", {"type": "pdir"}
        for name, is_dir in self.tree.children(path):
            yield name, {"type": "dir" if is_dir else "file"}

    def nlst(self, *args):
        path = self._path(args[0] if args else "", "nlst")
        if self.tree.is_file(path):
            return [path]
        if not self.tree.is_dir(path):
            raise ftplib.error_perm("550 No files found.")
        return [f"{path}/{name}" for name, _ in self.tree.children(path)]

    def storbinary(self, cmd, fp, blocksize=8192, callback=None, rest=None):
        path = self._path(cmd.split(" ", 1)[1], "stor")
        if not self.tree.is_dir(posixpath.dirname(path)):
            raise ftplib.error_perm("553 Could not create file.")
        self.tree.entries[path] = fp.read()
        return "226 Transfer complete."

    def retrbinary(self, cmd, callback, blocksize=8192, rest=None):
        path = self._path(cmd.split(" ", 1)[1], "retr")
        if not self.tree.is_file(path):
            raise ftplib.error_perm("550 Failed to open file.")
        callback(self.tree.entries[path])
        return "226 Transfer complete."


@pytest.fixture
def remote_tree():
    """Empty remote filesystem."""
    return RemoteTree()


@pytest.fixture
def fake_sftp(remote_tree):
    """Fake SFTP client over the shared tree."""
    return FakeSFTPClient(remote_tree)


@pytest.fixture
def fake_ftp(remote_tree):
    """Fake FTP client over the shared tree."""
    return FakeFTP(remote_tree)


@pytest.fixture
def sftp_connection(fake_sftp):
    """SFTPConnection that already holds a live fake session."""
    from filegate.connection import SFTPConnection

    connection = SFTPConnection("sftp.example.com", 22, "user", "pass")
    ssh = MagicMock()
    ssh.get_transport.return_value.is_active.return_value = True
    connection._ssh = ssh
    connection._sftp = fake_sftp
    return connection


@pytest.fixture
def ftp_connection(fake_ftp):
    """FTPConnection that already holds a live fake session."""
    from filegate.connection import FTPConnection

    connection = FTPConnection("ftp.example.com", 21, "user", "pass")
    connection._ftp = fake_ftp
    return connection


@pytest.fixture
def sftp_transfer(sftp_connection):
    """SFTP transfer over the fake session."""
    from filegate.transfer import SFTPTransfer

    return SFTPTransfer(sftp_connection)


@pytest.fixture
def ftp_transfer(ftp_connection):
    """FTP transfer over the fake session."""
    from filegate.transfer import FTPTransfer

    return FTPTransfer(ftp_connection)


@pytest.fixture(params=["sftp", "ftp"])
def any_transfer(request):
    """Each transfer variant in turn, over the same kind of fake tree."""
    return request.getfixturevalue(f"{request.param}_transfer")
