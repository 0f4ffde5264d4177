"""
testrail-cli shared configuration, constants, and module-level state.
Standalone module — no imports from other project files.
"""

import os

# ---------------------------------------------------------------------------
# .env path and helpers
# ---------------------------------------------------------------------------

_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))
_PROJECT_ROOT = os.path.dirname(_PACKAGE_DIR)

ENV_PATH = os.path.join(_PROJECT_ROOT, ".env")

# Keys that may also come from the process environment (CI, containers).
KNOWN_ENV_KEYS = (
    "TESTRAIL_URL",
    "TESTRAIL_USER",
    "TESTRAIL_PASSWORD",
    "TESTRAIL_HTTP_TIMEOUT_SECONDS",
    "TESTRAIL_HTTP_MAX_RESPONSE_BYTES",
    "TESTRAIL_HTTP_LOG",
    "TESTRAIL_MCP_RESPONSE_MODE",
)


def load_env():
    env = {}
    if os.path.exists(ENV_PATH):
        with open(ENV_PATH) as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, val = line.split("=", 1)
                    env[key.strip()] = val.strip()
    for key in KNOWN_ENV_KEYS:
        if os.environ.get(key):
            env[key] = os.environ[key]
    return env


def _env_bool(key, default=False):
    """Parse common boolean env formats."""
    raw = env.get(key)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(key, default):
    """Parse integer env values with fallback."""
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

VERSION = "0.1.0"
CONTRACT_SCHEMA_VERSION = "1.0"

API_PREFIX = "?/api/v2/"
INDEX_PATH = "/index.php"

VALID_FORMATS = {"json", "table"}

# ---------------------------------------------------------------------------
# Module-level state (loaded from .env)
# ---------------------------------------------------------------------------

env = load_env()

BASE_URL = env.get("TESTRAIL_URL", "")
USERNAME = env.get("TESTRAIL_USER", "")
PASSWORD = env.get("TESTRAIL_PASSWORD", "")
HTTP_TIMEOUT_SECONDS = _env_int("TESTRAIL_HTTP_TIMEOUT_SECONDS", 30)
HTTP_MAX_RESPONSE_BYTES = _env_int("TESTRAIL_HTTP_MAX_RESPONSE_BYTES", 5_000_000)
HTTP_LOG_ENABLED = _env_bool("TESTRAIL_HTTP_LOG", False)

MCP_RESPONSE_MODE = env.get("TESTRAIL_MCP_RESPONSE_MODE", "legacy").strip().lower()
if MCP_RESPONSE_MODE not in {"legacy", "envelope"}:
    MCP_RESPONSE_MODE = "legacy"

# ---------------------------------------------------------------------------
# Runtime flags (set by the CLI)
# ---------------------------------------------------------------------------

RUNTIME_QUIET = False
RUNTIME_VERBOSE = False
