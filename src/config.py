import importlib
import os
from pathlib import Path

_ENV_LOADED = False


def _load_env() -> None:
    global _ENV_LOADED
    if _ENV_LOADED:
        return
    try:
        dotenv = importlib.import_module("dotenv")
    except ImportError as exc:
        raise SystemExit(
            "python-dotenv is required (pip install -e .)"
        ) from exc
    env_path = Path(__file__).resolve().parent.parent / ".env"
    dotenv.load_dotenv(dotenv_path=env_path)
    _ENV_LOADED = True


def get_env(
    name: str, default: str | None = None, required: bool = False
) -> str | None:
    _load_env()
    value = os.environ.get(name, default)
    if required and (value is None or value == ""):
        raise SystemExit(f"{name} env var is required")
    return value


def log_level() -> str:
    return (get_env("KEYLESS_LOG_LEVEL", "WARNING") or "WARNING").upper()


def default_gas_limit() -> str | None:
    """Fallback gas limit for the CLI when --gas-limit is omitted."""
    return get_env("KEYLESS_DEFAULT_GAS_LIMIT")


def default_gas_price() -> str | None:
    return get_env("KEYLESS_DEFAULT_GAS_PRICE")
