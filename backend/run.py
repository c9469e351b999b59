#!/usr/bin/env python3
"""
Emoji Map Places API - Run Script
Checks the local setup, then starts uvicorn with auto-reload.

Usage: python run.py [port]
"""

import socket
import sys
from pathlib import Path
from urllib.parse import urlparse

HOST = "0.0.0.0"
DEFAULT_PORT = 8000

# backend name -> (settings attribute holding its URL, default port)
CACHE_SERVERS = {
    "redis": ("REDIS_URL", 6379),
    "mongodb": ("MONGO_URI", 27017),
}

STYLES = {"error": "\033[91m", "ok": "\033[92m", "warn": "\033[93m", "info": "\033[94m"}


def say(message, style="info"):
    print(f"{STYLES[style]}{message}\033[0m")


def is_listening(host, port):
    try:
        with socket.create_connection((host, port), timeout=2):
            return True
    except OSError:
        return False


def check_environment():
    if not Path("emoji_map/main.py").exists():
        say("emoji_map/main.py not found. Run this script from the backend directory.", "error")
        sys.exit(1)

    if not any(Path(p).exists() for p in (".env", "../.env")):
        say("No .env file found. Set at least GOOGLE_PLACES_API_KEY and CACHE_BACKEND (local, redis or mongodb).", "warn")


def check_cache_server():
    """The API still starts without its cache server, every lookup just misses."""
    from emoji_map.core.config import settings

    if settings.CACHE_BACKEND not in CACHE_SERVERS:
        say(f"Cache: local files in {settings.LOCAL_CACHE_DIR}")
        return

    attr, default_port = CACHE_SERVERS[settings.CACHE_BACKEND]
    url = urlparse(getattr(settings, attr))
    host, port = url.hostname or "localhost", url.port or default_port

    if is_listening(host, port):
        say(f"Cache: {settings.CACHE_BACKEND} reachable at {host}:{port}", "ok")
    else:
        say(f"Cache: {settings.CACHE_BACKEND} not reachable at {host}:{port}, requests will run uncached", "warn")


def main():
    port = int(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_PORT

    check_environment()
    check_cache_server()

    say(f"Emoji Map Places API on http://localhost:{port} (docs at /docs, health at /health)", "ok")

    import uvicorn
    uvicorn.run("emoji_map.main:app", host=HOST, port=port, reload=True)


if __name__ == "__main__":
    main()
