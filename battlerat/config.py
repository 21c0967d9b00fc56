# data class for server configuration
from dataclasses import dataclass
import logging
import os

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ=None):
        """Read PORT and LOG_LEVEL, falling back to the defaults when unset."""
        if environ is None:
            environ = os.environ

        port = environ.get("PORT", str(cls.port))
        try:
            port = int(port)
        except ValueError:
            raise ValueError(f"PORT must be an integer, got {port!r}")
        if not 0 < port < 65536:
            raise ValueError(f"PORT out of range: {port}")

        log_level = environ.get("LOG_LEVEL", cls.log_level).upper()
        if log_level not in LOG_LEVELS:
            raise ValueError(
                f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {log_level!r}"
            )

        return cls(host=environ.get("HOST", cls.host), port=port, log_level=log_level)

    def configure_logging(self):
        logging.basicConfig(
            level=self.log_level,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        )
