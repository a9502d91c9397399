import os

from dotenv import find_dotenv, load_dotenv

from budget_categorizer.logger import get_logger

logger = get_logger(__name__)


CONFIG_FILENAME = "config.yaml"

DEFAULT_LEARNING_MIN_SAMPLES = 2
DEFAULT_AUTO_APPLY_THRESHOLD = 0.0

_CONFIG_KEYS = (
    "LOG_LEVEL",
    "LOG_DIR",
    "LEARNING_MIN_SAMPLES",
    "AUTO_APPLY_THRESHOLD",
)

_config_file_path: str | None = None


def _resolve_dotenv_path() -> str | None:
    config_dir = os.getenv("CONFIG_DIR")
    if config_dir:
        candidate = os.path.join(config_dir, ".env")
        if os.path.exists(candidate):
            return candidate
    return find_dotenv(usecwd=True) or None


def _resolve_config_path() -> str:
    config_dir = os.getenv("CONFIG_DIR")
    if config_dir:
        return os.path.join(config_dir, CONFIG_FILENAME)
    return os.path.join(os.getcwd(), CONFIG_FILENAME)


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in {'"', "'"}:
        return value[1:-1]
    return value


def read_config_file(path: str | None) -> dict[str, str]:
    """Read flat ``KEY: value`` lines. Comments and blank values are ignored."""
    if not path or not os.path.exists(path):
        return {}

    values: dict[str, str] = {}
    with open(path, encoding="utf-8") as handle:
        for line in handle:
            stripped = line.strip()
            if not stripped or stripped.startswith("#") or ":" not in stripped:
                continue
            key, raw_value = stripped.split(":", 1)
            key = key.strip()
            value = _unquote(raw_value.split(" #", 1)[0].strip())
            if key and value:
                values[key] = value
    return values


def load_environment() -> None:
    """Seed os.environ from .env and config.yaml without overriding real variables."""
    global _config_file_path

    dotenv_path = _resolve_dotenv_path()
    if dotenv_path:
        load_dotenv(dotenv_path=dotenv_path, override=False)

    _config_file_path = _resolve_config_path()
    file_values = read_config_file(_config_file_path)
    for key in _CONFIG_KEYS:
        if key not in os.environ and key in file_values:
            os.environ[key] = file_values[key]


def get_config_path() -> str | None:
    return _config_file_path


def get_env_int(name: str, default: int, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("[ENV] Invalid %s='%s', using default %s.", name, raw, default)
        return default
    if min_value is not None and value < min_value:
        logger.warning(
            "[ENV] %s='%s' below minimum %s, using default %s.",
            name,
            raw,
            min_value,
            default,
        )
        return default
    return value


def get_env_float(
    name: str,
    default: float = 0.0,
    min_value: float | None = None,
    max_value: float | None = None,
) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("[ENV] Invalid %s='%s', using default %s.", name, raw, default)
        return default
    if (min_value is not None and value < min_value) or (
        max_value is not None and value > max_value
    ):
        logger.warning(
            "[ENV] %s='%s' outside [%s, %s], using default %s.",
            name,
            raw,
            min_value,
            max_value,
            default,
        )
        return default
    return value


def learning_min_samples() -> int:
    return get_env_int("LEARNING_MIN_SAMPLES", DEFAULT_LEARNING_MIN_SAMPLES, min_value=1)


def auto_apply_threshold() -> float:
    return get_env_float(
        "AUTO_APPLY_THRESHOLD",
        DEFAULT_AUTO_APPLY_THRESHOLD,
        min_value=0.0,
        max_value=1.0,
    )


load_environment()
