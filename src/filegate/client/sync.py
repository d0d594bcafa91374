"""Blocking client facade over a transfer handler."""

import posixpath
from pathlib import Path

from filegate.transfer import BaseTransfer


class SyncClient:
    """Synchronous client for remote file operations.

    Every call runs on the caller's thread and returns once the transfer
    call has finished. Errors are raised as-is at the call site.

    Example:
        transfer = TransferFactory.create("sftp", connection)
        with SyncClient(transfer) as client:
            client.create_directories("/reports/2024")
            client.upload_file("summary.csv", "/reports/2024/summary.csv")
            print(client.list_files("/reports/2024"))
    """

    def __init__(self, transfer: BaseTransfer):
        """Initialize client.

        Args:
            transfer: Transfer handler to wrap
        """
        self.transfer = transfer

    def list_files(self, remote_dir: str) -> list[str]:
        """List names in a remote directory."""
        return self.transfer.list_files(remote_dir)

    def upload_file(
        self, local_path: str, remote_path: str, create_parents: bool = False
    ) -> None:
        """Upload a local file to remote_path."""
        self.transfer.upload(str(local_path), remote_path, create_parents=create_parents)

    def download_file(self, remote_path: str, local_path: str) -> None:
        """Download remote_path to local_path."""
        self.transfer.download(remote_path, str(local_path))

    def download_into_directory(self, remote_path: str, local_dir: str) -> Path:
        """Download a remote file into a local directory, keeping its name.

        The local directory is created if it does not exist.

        Args:
            remote_path: Path of the file on the remote server
            local_dir: Local directory to download into

        Returns:
            Path of the downloaded local file

        Raises:
            ValueError: If remote_path has no file name component
        """
        file_name = posixpath.basename(remote_path)
        if not file_name:
            raise ValueError(f"Remote path has no file name: {remote_path}")

        target_dir = Path(local_dir)
        target_dir.mkdir(parents=True, exist_ok=True)
        local_path = target_dir / file_name

        self.transfer.download(remote_path, str(local_path))
        return local_path

    def delete_file(self, remote_path: str) -> None:
        """Delete a remote file."""
        self.transfer.delete(remote_path)

    def create_directories(self, remote_path: str) -> None:
        """Create all missing directories along remote_path."""
        self.transfer.create_directories(remote_path)

    def delete_directory(self, remote_dir: str) -> None:
        """Delete a remote directory and its contents."""
        self.transfer.delete_directory(remote_dir)

    def exists(self, remote_path: str) -> bool:
        """Check whether a remote path exists."""
        return self.transfer.exists(remote_path)

    def disconnect(self) -> None:
        """Disconnect from the remote server."""
        self.transfer.disconnect()

    def __enter__(self) -> "SyncClient":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.disconnect()
