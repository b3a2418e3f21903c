"""
Runtime configuration, read from the environment (and a local .env file).
"""

import os

from dotenv import load_dotenv

load_dotenv()

GRID_SIZE = int(os.getenv("SNAKE_GRID_SIZE", "24"))
TICK_MS = int(os.getenv("SNAKE_TICK_MS", "100"))
ROUND_END_DELAY_MS = int(os.getenv("SNAKE_ROUND_END_DELAY_MS", "800"))
LOG_LEVEL = os.getenv("SNAKE_LOG_LEVEL", "INFO")

HOST = os.getenv("SNAKE_HOST", "127.0.0.1")
PORT = int(os.getenv("SNAKE_PORT", "5000"))

# Allowed origins can be configured via CORS_ALLOWED_ORIGINS env var (comma-separated)
_allowed_origins_env = os.getenv("CORS_ALLOWED_ORIGINS")
if _allowed_origins_env:
    CORS_ALLOWED_ORIGINS = [o.strip() for o in _allowed_origins_env.split(",") if o.strip()]
else:
    # sensible defaults for local dev
    CORS_ALLOWED_ORIGINS = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

# How long the session loop sleeps between scheduler polls
SCHEDULER_LOOP_SLEEP_SECONDS = 0.005

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
