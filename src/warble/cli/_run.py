"""``warble run``: serve an engine from an import string."""

import argparse
import sys

from warble.cli._resolve import resolve_engine
from warble.errors import ConfigurationError


def run_server(args: argparse.Namespace) -> None:
    """Resolve ``args.engine`` and serve it.

    ``--host`` and ``--port`` override the engine's config. The import
    string is forwarded so the transport can re-import on reload.
    """
    try:
        engine = resolve_engine(args.engine)
    except (ModuleNotFoundError, AttributeError, ConfigurationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    from warble.server.serve import run_server as serve

    serve(
        engine,
        args.host or engine.config.host,
        args.port if args.port is not None else engine.config.port,
        workers=engine.config.workers,
        reload=args.reload or engine.config.reload,
        log_level=engine.config.log_level,
        ssl_certfile=engine.config.ssl_certfile,
        ssl_keyfile=engine.config.ssl_keyfile,
        app_path=args.engine,
    )
