#!/usr/bin/env python3
"""
Run the Tech Digest server.

Usage:
    python run.py
    PORT=8080 python run.py
"""

import uvicorn

from digest.core.config import get_config


def main():
    api_config = get_config().get("api") or {}
    host = api_config.get("host") or "0.0.0.0"
    port = int(api_config.get("port") or 3000)

    print(f"Starting Tech Digest at http://{host}:{port}")

    uvicorn.run(
        "digest.api.main:app",
        host=host,
        port=port,
        log_level="info",
    )


if __name__ == "__main__":
    main()
