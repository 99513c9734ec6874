"""Engine configuration.

EngineConfig is a frozen dataclass: immutable after creation, no
string-key dict lookups, no environment variables.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Engine configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = EngineConfig(port=3000, log_level="debug")
    """

    # Server (used when run() is called without an address)
    host: str = "127.0.0.1"
    port: int = 8000

    # Transport
    workers: int = 1
    reload: bool = False  # Development only; requires an import string
    log_level: str = "info"

    # Limits
    max_form_size: int = 10 * 1024 * 1024  # 10 MB; larger bodies are not parsed as forms

    # TLS (optional, handled by the transport)
    ssl_certfile: str | None = None
    ssl_keyfile: str | None = None
