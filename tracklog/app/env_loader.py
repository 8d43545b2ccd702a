"""Load environment variables early for the FastAPI app.

For local dev, loads a .env file based on ENV ("dev" or "prod").
In staging/prod, env vars are injected by the deployment, so no .env file
is loaded.
"""

import os
import sys
from typing import Literal
from dotenv import load_dotenv

EnvironmentName = Literal["dev", "staging", "prod"]
StoreBackend = Literal["memory", "postgres"]

# Required environment variables per store backend.
# If any are missing, the app will fail to start with a clear error message.
REQUIRED_ENV_VARS: dict[StoreBackend, list[str]] = {
    "memory": [],
    "postgres": ["DATABASE_URL"],
}


def get_store_backend() -> StoreBackend:
    """Get the configured store backend (TRACKLOG_STORE, default "memory")."""
    backend = os.getenv("TRACKLOG_STORE", "memory").lower()
    if backend in ("memory", "postgres"):
        return backend  # type: ignore[return-value]
    raise ValueError(
        f"Invalid TRACKLOG_STORE value: {backend}. Must be 'memory' or 'postgres'."
    )


def validate_required_env_vars() -> None:
    """Validate that all environment variables the backend needs are set.

    Raises:
        SystemExit: If any required environment variables are missing.
    """
    required = REQUIRED_ENV_VARS[get_store_backend()]
    missing = [var for var in required if not os.getenv(var)]
    if missing:
        print(
            f"ERROR: Missing required environment variables: {', '.join(missing)}",
            file=sys.stderr,
        )
        print(
            "Please set these variables in your .env file or environment.",
            file=sys.stderr,
        )
        sys.exit(1)


# Load env vars before any app code runs.
env = os.getenv("ENV", "dev")
if env in ("staging", "prod"):
    print(f"Running in {env} environment (env vars from deployment)")
elif env == "dev":
    load_dotenv(".env.dev")
else:
    raise ValueError(f"Invalid ENV value: {env}. Must be 'dev', 'staging', or 'prod'.")

validate_required_env_vars()


def get_current_environment() -> EnvironmentName:
    """Get the current environment (dev, staging, or prod)."""
    env = os.getenv("ENV", "dev")
    if env in ("dev", "staging", "prod"):
        return env  # type: ignore[return-value]
    raise ValueError(f"Invalid ENV value: {env}. Must be 'dev', 'staging', or 'prod'.")
