import os
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from wiki_action.common.errors import ConfigurationError

API_URL = "https://en.wikipedia.org/w/api.php"
UA = "wiki_action/0.1 (https://github.com/wiki-action/wiki_action)"
TIMEOUT = 30.0

def _getenv_bool(name: str, default: bool) -> bool:
    v = os.getenv(name, str(default)).strip().lower()
    return v in ("1", "true", "yes", "y", "on")

def _getenv_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number of seconds, got {raw!r}") from e

@dataclass(frozen=True)
class Settings:
    api_url: str
    user_agent: str
    username: Optional[str]
    password: Optional[str]
    timeout: float
    verbose: bool

def load_settings() -> Settings:
    """
    Read WIKI_ACTION_* variables, after loading the nearest .env file above the
    working directory.
    Explicit environment variables win over the .env file.
    """
    load_dotenv(find_dotenv(usecwd=True))
    return Settings(
        api_url=os.getenv("WIKI_ACTION_API_URL", API_URL),
        user_agent=os.getenv("WIKI_ACTION_USER_AGENT", UA),
        username=os.getenv("WIKI_ACTION_USERNAME") or None,
        password=os.getenv("WIKI_ACTION_PASSWORD") or None,
        timeout=_getenv_float("WIKI_ACTION_TIMEOUT", TIMEOUT),
        verbose=_getenv_bool("WIKI_ACTION_VERBOSE", False),
    )
