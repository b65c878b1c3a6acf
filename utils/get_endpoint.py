from core.config import get_config  # type: ignore
from core.errors import ConfigurationError

DEFAULT_API_PATHS = {
    "pages": "/wp-json/wp/v2/pages",
    "page": "/wp-json/wp/v2/pages/{page_id}",
}


def get_endpoint(key, **params):
    """Return the API path for `key`, relative to the client's base URL.

    Paths come from `api_paths` in config.yaml, falling back to the stock WordPress routes.
    """
    _cfg = get_config() or {}
    paths = {**DEFAULT_API_PATHS, **(_cfg.get("api_paths") or {})}

    path = paths.get(key)
    if not path:
        raise ConfigurationError(f"Missing API path for key '{key}' in config.yaml under 'api_paths'")

    try:
        return path.format(**params)
    except KeyError as e:
        raise ConfigurationError(f"API path '{key}' needs parameter {e}") from e
