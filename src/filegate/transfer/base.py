"""Abstract base class for file transfer implementations."""

import logging
import os
import posixpath
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass
from typing import BinaryIO, Iterator

from filegate.connection import BaseConnection
from filegate.exceptions import (
    DirectoryCreationError,
    DirectoryDeletionError,
    FileTransferError,
    UnsupportedProtocolError,
)

logger = logging.getLogger(__name__)

SPECIAL_ENTRIES = (".", "..")


@dataclass
class RemoteEntry:
    """A single name returned by a directory listing."""

    name: str
    is_dir: bool


def split_segments(remote_path: str) -> list[str]:
    """Split a remote path on "/" dropping empty segments."""
    return [segment for segment in remote_path.split("/") if segment]


class BaseTransfer(ABC):
    """Abstract base class for file transfer operations.

    Subclasses provide the protocol primitives (the underscore methods)
    and list the library exceptions they may raise in ``protocol_errors``.
    The public operations, including the recursive directory algorithms,
    are shared and re-raise those exceptions as FileTransferError kinds.
    """

    protocol: str = ""
    connection_class: type[BaseConnection] = BaseConnection
    protocol_errors: tuple[type[BaseException], ...] = ()

    def __init__(self, connection: BaseConnection):
        """Initialize transfer handler, connecting the session if needed.

        Args:
            connection: Connection of the matching protocol

        Raises:
            TypeError: If the connection is for another protocol
            ConnectionFailedError: If the session cannot be established
        """
        if not isinstance(connection, self.connection_class):
            raise TypeError(
                f"{type(self).__name__} requires {self.connection_class.__name__}, "
                f"got {type(connection).__name__}"
            )
        if not connection.is_connected:
            connection.connect()
        self.connection = connection

    # Protocol primitives. These raise the library's own exceptions.

    @abstractmethod
    def _list(self, remote_dir: str) -> list[RemoteEntry]:
        pass

    @abstractmethod
    def _put(self, source: BinaryIO, remote_path: str) -> None:
        pass

    @abstractmethod
    def _get(self, remote_path: str, target: BinaryIO) -> None:
        pass

    @abstractmethod
    def _remove(self, remote_path: str) -> None:
        pass

    @abstractmethod
    def _mkdir(self, remote_path: str) -> None:
        pass

    @abstractmethod
    def _rmdir(self, remote_path: str) -> None:
        pass

    @abstractmethod
    def _chdir(self, remote_path: str) -> bool:
        """Enter a directory.

        Returns:
            True if entered, False if the directory does not exist.
            Any other failure raises.
        """

    @abstractmethod
    def _exists(self, remote_path: str) -> bool:
        pass

    @contextmanager
    def _translate_errors(self, message: str) -> Iterator[None]:
        try:
            yield
        except FileTransferError:
            raise
        except self.protocol_errors as e:
            raise FileTransferError(f"{message}: {e}") from e

    # Public operations

    def list_entries(self, remote_dir: str) -> list[RemoteEntry]:
        """List a remote directory with a directory flag per entry.

        Args:
            remote_dir: Remote directory path

        Returns:
            Entries in server order, without "." and ".."

        Raises:
            FileTransferError: If the listing fails
        """
        with self._translate_errors(f"Failed to list {remote_dir}"):
            entries = self._list(remote_dir)
        return [entry for entry in entries if entry.name not in SPECIAL_ENTRIES]

    def list_files(self, remote_dir: str) -> list[str]:
        """List names in a remote directory (non-recursive).

        Args:
            remote_dir: Remote directory path

        Returns:
            Entry names in server order; empty list for an empty directory
        """
        return [entry.name for entry in self.list_entries(remote_dir)]

    def upload(
        self, local_path: str, remote_path: str, create_parents: bool = False
    ) -> None:
        """Upload file to remote server.

        Args:
            local_path: Path to local file
            remote_path: Path to save file on remote server
            create_parents: Create missing remote parent directories first

        Raises:
            FileNotFoundError: If local file doesn't exist
            DirectoryCreationError: If a parent directory cannot be created
            FileTransferError: If upload fails
        """
        if not os.path.exists(local_path):
            raise FileNotFoundError(f"Local file not found: {local_path}")

        target = remote_path
        if create_parents:
            parent = posixpath.dirname(remote_path)
            if split_segments(parent):
                self.create_directories(parent)
                # The session now sits in parent, so a relative parent must
                # not be applied twice
                target = posixpath.basename(remote_path)

        logger.info(f"Uploading: {local_path} -> {remote_path}")
        with open(local_path, "rb") as f:
            with self._translate_errors(f"{self.protocol.upper()} upload failed"):
                self._put(f, target)

        file_size = os.path.getsize(local_path)
        logger.info(f"Upload complete: {file_size} bytes")

    def download(self, remote_path: str, local_path: str) -> None:
        """Download file from remote server, overwriting local_path.

        Args:
            remote_path: Path to file on remote server
            local_path: Path to save file locally

        Raises:
            OSError: If the local file cannot be opened for writing
            FileTransferError: If download fails
        """
        logger.info(f"Downloading: {remote_path} -> {local_path}")
        with open(local_path, "wb") as f:
            with self._translate_errors(f"{self.protocol.upper()} download failed"):
                self._get(remote_path, f)

        file_size = os.path.getsize(local_path)
        logger.info(f"Download complete: {file_size} bytes")

    def delete(self, remote_path: str) -> None:
        """Remove a single remote file.

        Raises:
            FileTransferError: If the file cannot be removed
        """
        with self._translate_errors(f"Failed to delete {remote_path}"):
            self._remove(remote_path)
        logger.info(f"Deleted remote file: {remote_path}")

    def create_directories(self, remote_path: str) -> None:
        """Create every missing directory along remote_path.

        Each segment is entered in turn and created only when it does not
        exist, since protocol mkdir calls are not recursive. On success the
        remote working directory is the full path.

        Args:
            remote_path: "/"-delimited directory path

        Raises:
            DirectoryCreationError: On any failure other than "does not
                exist"; ``path`` is the prefix being processed
        """
        current = ""
        for segment in split_segments(remote_path):
            current = f"{current}/{segment}"
            try:
                if self._chdir(current):
                    continue
                self._mkdir(current)
                logger.debug(f"Created remote directory: {current}")
                if not self._chdir(current):
                    raise DirectoryCreationError(
                        f"Directory vanished after creation: {current}", path=current
                    )
            except FileTransferError:
                raise
            except self.protocol_errors as e:
                raise DirectoryCreationError(
                    f"Failed to create directory {current}: {e}", path=current
                ) from e

    def delete_directory(self, remote_dir: str) -> None:
        """Delete a remote directory and everything below it.

        Stops at the first failure; whatever was removed before it stays
        removed.

        Args:
            remote_dir: Existing remote directory

        Raises:
            DirectoryDeletionError: ``path`` is the entry that failed
            ChannelNotConnectedError: If the session is gone
        """
        current = remote_dir
        try:
            for entry in self._list(remote_dir):
                if entry.name in SPECIAL_ENTRIES:
                    continue
                current = f"{remote_dir}/{entry.name}"
                if entry.is_dir:
                    self.delete_directory(current)
                else:
                    self._remove(current)
                    logger.debug(f"Deleted remote file: {current}")
            current = remote_dir
            self._rmdir(remote_dir)
            logger.debug(f"Removed remote directory: {remote_dir}")
        except FileTransferError:
            raise
        except self.protocol_errors as e:
            raise DirectoryDeletionError(
                f"Failed to delete {current}: {e}", path=current
            ) from e

    def exists(self, remote_path: str) -> bool:
        """Check whether a remote path exists.

        Raises:
            FileTransferError: If the check itself fails
        """
        with self._translate_errors(f"Failed to check {remote_path}"):
            return self._exists(remote_path)

    def disconnect(self) -> None:
        """Close the underlying connection."""
        self.connection.disconnect()

    def __enter__(self) -> "BaseTransfer":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.disconnect()


class TransferFactory:
    """Factory for creating transfer handlers."""

    _handlers: dict[str, type[BaseTransfer]] = {}

    @classmethod
    def register(cls, protocol: str, handler_class: type[BaseTransfer]) -> None:
        """Register a transfer handler.

        Args:
            protocol: Protocol identifier (e.g., "ftp", "sftp")
            handler_class: Handler class to register
        """
        cls._handlers[protocol.lower()] = handler_class

    @classmethod
    def create(cls, protocol: str, connection: BaseConnection) -> BaseTransfer:
        """Create transfer handler for a live or not yet opened connection.

        Args:
            protocol: Protocol tag, matched case-insensitively
            connection: Connection for that protocol

        Returns:
            Transfer handler instance

        Raises:
            UnsupportedProtocolError: If the protocol is not registered
            FileTransferError: If the handler cannot be constructed
        """
        handler_class = cls._handlers.get(protocol.lower())
        if handler_class is None:
            supported = ", ".join(cls._handlers.keys())
            raise UnsupportedProtocolError(
                f"Unsupported protocol: {protocol}. Supported types: {supported}"
            )
        try:
            return handler_class(connection)
        except Exception as e:
            raise FileTransferError(
                f"Failed to create {protocol.lower()} transfer: {e}"
            ) from e
