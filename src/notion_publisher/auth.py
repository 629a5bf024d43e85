"""Notion integration token resolution."""

import logging
import os
from collections.abc import Mapping
from pathlib import Path

from .config import ConfigError, load_user_config

logger = logging.getLogger(__name__)

NOTION_TOKEN_ENV_VAR = "NOTION_TOKEN"


class TokenError(Exception):
    """Raised when no Notion token can be found."""

    pass


def resolve_token(
    environ: Mapping[str, str] | None = None,
    config_path: Path | None = None,
) -> str:
    """Find a Notion integration token.

    Prefers a non-empty NOTION_TOKEN environment variable. Otherwise the
    ``token`` field of the user configuration file is used. Nothing is
    cached, so a rotated token is picked up on the next call.

    Args:
        environ: Environment mapping (default: os.environ)
        config_path: User configuration file (default: ~/.config/nexp.yaml)

    Returns:
        The token

    Raises:
        TokenError: If neither source yields a token
    """
    environ = os.environ if environ is None else environ

    token = environ.get(NOTION_TOKEN_ENV_VAR, "")
    if token:
        logger.debug(f"Using token from {NOTION_TOKEN_ENV_VAR}")
        return token

    try:
        config = load_user_config(config_path)
    except ConfigError as e:
        raise TokenError(f"{NOTION_TOKEN_ENV_VAR} is not set and {e}") from e

    if not config.token:
        raise TokenError("Token retrieved from configuration was empty")

    return config.token
