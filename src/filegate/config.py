"""Server settings read from the environment.

A server entry named ``REPORTS`` is described by ``REPORTS_TYPE``,
``REPORTS_HOST``, ``REPORTS_PORT``, ``REPORTS_USER`` and ``REPORTS_PASS``.
Protocol settings shared by all entries are ``FTP_PASSIVE_MODE``,
``FTP_CONNECT_TIMEOUT`` and ``SFTP_CONNECT_TIMEOUT``.
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

DEFAULT_PORTS = {"ftp": 21, "sftp": 22}

_TRUE_VALUES = ("true", "1", "yes", "on")


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUE_VALUES


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"Invalid integer for {name}: {raw}")


@dataclass
class ServerConfig:
    """One remote endpoint and its credentials."""

    hostname: str
    type: str
    host: str
    port: int
    username: str
    password: str


class ConfigLoader:
    """Protocol settings plus lookup of named server entries.

    Values already present in the process environment win over the
    ``.env`` file.
    """

    def __init__(self, env_file: Optional[str] = None):
        # None makes python-dotenv search upwards for a .env file
        load_dotenv(env_file)

        self.ftp_passive_mode = _env_bool("FTP_PASSIVE_MODE", True)
        self.ftp_connect_timeout = _env_int("FTP_CONNECT_TIMEOUT", 30)
        self.sftp_connect_timeout = _env_int("SFTP_CONNECT_TIMEOUT", 10)

    def get_server_config(self, hostname: str) -> ServerConfig:
        """Resolve a server entry; the name is matched case-insensitively.

        Raises:
            ValueError: If the entry is missing, incomplete or not ftp/sftp
        """
        prefix = hostname.upper()

        server_type = (os.getenv(f"{prefix}_TYPE") or "").lower()
        if not server_type:
            raise ValueError(f"Server type not found for hostname: {hostname}")
        if server_type not in DEFAULT_PORTS:
            raise ValueError(
                f"Unsupported server type for hostname {hostname}: {server_type}"
            )

        host = os.getenv(f"{prefix}_HOST")
        if not host:
            raise ValueError(f"Host not found for hostname: {hostname}")

        raw_port = os.getenv(f"{prefix}_PORT")
        if raw_port is None:
            port = DEFAULT_PORTS[server_type]
        elif raw_port.isdigit():
            port = int(raw_port)
        else:
            raise ValueError(f"Invalid port for hostname {hostname}: {raw_port}")

        return ServerConfig(
            hostname=hostname,
            type=server_type,
            host=host,
            port=port,
            username=os.getenv(f"{prefix}_USER", ""),
            password=os.getenv(f"{prefix}_PASS", ""),
        )


_config: Optional[ConfigLoader] = None


def get_config(env_file: Optional[str] = None) -> ConfigLoader:
    """Return the process-wide loader, creating it on first use."""
    global _config
    if _config is None:
        _config = ConfigLoader(env_file)
    return _config
