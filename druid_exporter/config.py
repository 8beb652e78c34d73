from pydantic import BaseModel
import os


def env_flag(key: str, default: bool) -> bool:
    v = os.getenv(key)
    if v is None or v == "":
        return default
    return v.strip().lower() in {"1", "true", "yes", "on"}


class Settings(BaseModel):
    listen_address: str = os.getenv("LISTEN_ADDRESS", ":8080")
    druid_uri: str = os.getenv("DRUID_URI", "http://BROKER:8082/druid/v2/sql/")
    exit_on_error: bool = env_flag("EXIT_ON_ERROR", True)
    strict_records: bool = env_flag("STRICT_RECORDS", False)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    def bind_address(self) -> tuple[str, int]:
        """Split a ``host:port`` listen address; an empty host binds all interfaces."""
        host, sep, port = self.listen_address.rpartition(":")
        if not sep:
            raise ValueError(f"Listen address must contain a port: {self.listen_address!r}")
        if host.startswith("[") and host.endswith("]"):
            host = host[1:-1]
        if not port.isdigit() or not 0 < int(port) < 65536:
            raise ValueError(f"Invalid port in listen address: {self.listen_address!r}")
        return host or "0.0.0.0", int(port)
