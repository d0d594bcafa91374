"""Abstract base class for remote server connections."""

from abc import ABC, abstractmethod


class BaseConnection(ABC):
    """An authenticated session to a remote server.

    A connection owns exactly one protocol session. Transfers hold a
    reference to it but never copy or share the underlying handle, and
    the session has no internal locking: keep at most one operation in
    flight per connection.
    """

    protocol: str = ""

    def __init__(self, host: str, port: int, username: str, password: str):
        """Initialize connection parameters.

        Args:
            host: Server host name or address
            port: Server port
            username: Login user name
            password: Login password
        """
        self.host = host
        self.port = port
        self.username = username
        self.password = password

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        """Whether a live session is currently held."""

    @abstractmethod
    def connect(self) -> None:
        """Establish the session.

        Raises:
            ConnectionFailedError: If network negotiation or login fails
        """
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Release the session."""
        pass

    def __enter__(self) -> "BaseConnection":
        """Context manager entry."""
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.disconnect()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(host={self.host!r}, port={self.port}, "
            f"username={self.username!r})"
        )
