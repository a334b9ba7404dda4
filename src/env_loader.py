from __future__ import annotations

import os
from pathlib import Path

# Points the report at an env file other than ./.env
ENV_FILE_ENV = "DAIRY_REPORT_ENV_FILE"

DEFAULT_ENV_FILE = Path(".env")


def _strip_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
        return value[1:-1]
    return value


def load_dotenv_if_present(path: str | Path | None = None) -> dict[str, str]:
    """
    Lightweight .env loader used when building the report locally.

    - Reads KEY=VALUE pairs from `path`, else from $DAIRY_REPORT_ENV_FILE,
      else from ".env" in the working directory.
    - Ignores empty lines, comments starting with "#" and a leading "export ".
    - Strips one level of matching single or double quotes around values.
    - Does *not* overwrite variables that are already present in os.environ.

    Returns the pairs that were actually applied to os.environ.
    """
    env_path = Path(path or os.getenv(ENV_FILE_ENV) or DEFAULT_ENV_FILE)
    if not env_path.exists():
        return {}

    try:
        text = env_path.read_text(encoding="utf-8")
    except OSError:
        return {}

    applied: dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("export "):
            line = line[len("export "):]
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = _strip_quotes(value.strip())
        if not key:
            continue
        if key not in os.environ:
            os.environ[key] = value
            applied[key] = value
    return applied


__all__ = ["ENV_FILE_ENV", "DEFAULT_ENV_FILE", "load_dotenv_if_present"]
