#!/usr/bin/env python3
"""Start script that launches the API under uvicorn, honouring PORT and VTOUR_LOG_LEVEL."""

import os
import subprocess
import sys

port = os.environ.get("PORT", "8000")

try:
    port_int = int(port)
except ValueError:
    print(f"Warning: Invalid PORT value '{port}', using default 8000", file=sys.stderr)
    port_int = 8000

log_level = os.environ.get("VTOUR_LOG_LEVEL", "info").lower()

cmd = [
    sys.executable,
    "-m",
    "uvicorn",
    "src.venue_tour.main:app",
    "--host",
    "0.0.0.0",
    "--port",
    str(port_int),
    "--log-level",
    log_level,
]

print(f"Starting server on port {port_int}...", file=sys.stderr)
print(f"Working directory: {os.getcwd()}", file=sys.stderr)

try:
    import src.venue_tour.main  # noqa: F401
except ImportError as e:
    print(f"Failed to import src.venue_tour.main: {e}", file=sys.stderr)
    import traceback
    traceback.print_exc(file=sys.stderr)
    sys.exit(1)

try:
    result = subprocess.call(cmd)
    if result != 0:
        print(f"Uvicorn exited with code {result}", file=sys.stderr)
    sys.exit(result)
except KeyboardInterrupt:
    print("Server interrupted by user", file=sys.stderr)
    sys.exit(0)
