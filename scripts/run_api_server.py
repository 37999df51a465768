#!/usr/bin/env python3
"""Start the draughts API server."""

import argparse
import logging
import sys

from draughts.play.config import ServerConfig, load_config


def main():
    parser = argparse.ArgumentParser(description="Draughts API Server")
    parser.add_argument(
        "--config", default="configs/server.yaml",
        help="Path to server config YAML (default: configs/server.yaml)",
    )
    parser.add_argument("--host", default=None, help="Override host")
    parser.add_argument("--port", type=int, default=None, help="Override port")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    config = load_config(args.config)
    server_cfg = ServerConfig.from_dict(config)
    host = args.host or server_cfg.host
    port = args.port or server_cfg.port

    try:
        import uvicorn
    except ImportError:
        print("uvicorn not installed. Run: pip install -e '.[api]'", file=sys.stderr)
        sys.exit(1)

    from draughts.play.api.server import app
    from draughts.play.api.dependencies import init_app

    init_app(app, config)

    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
