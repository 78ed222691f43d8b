# config.py
# Edit these values directly or override them through the environment
import os

# Backend serving /connections and /plugins
QUERY_RUNNER_URL = os.getenv("QUERY_RUNNER_URL", "http://localhost:3000")
REQUEST_TIMEOUT = float(os.getenv("QUERY_RUNNER_TIMEOUT", "30"))   # seconds

# Web shell
WEB_HOST = os.getenv("WEB_HOST", "0.0.0.0")
WEB_PORT = int(os.getenv("WEB_PORT", "8000"))
SECRET_KEY = os.getenv("SECRET_KEY", "dev-only-change-me")

# In-memory browser sessions kept at once (oldest evicted first)
MAX_SESSIONS = int(os.getenv("MAX_SESSIONS", "256"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
