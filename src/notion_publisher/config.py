"""Configuration for notion-publisher.

Two sources feed the daemon:

- The user configuration file (``~/.config/nexp.yaml``), which holds the
  Notion integration token when it is not supplied through the environment.
- :class:`PublisherSettings`, the daemon's own settings. Defaults describe
  the production setup; the CLI overrides a subset.
"""

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "nexp.yaml"

DEFAULT_DATABASE_ID = "864350bdeb5e42358b3e05accccc0e3f"
DEFAULT_OUTPUT_DIR = Path("out")
DEFAULT_POLL_INTERVAL = 5.0
DEFAULT_IMAGE_SAVE_ROOT = Path("/usr/share/server/files/img/posts")
DEFAULT_IMAGE_BASE_URL = "https://files.joshrosso.com/img/posts"
DEFAULT_FILE_MODE = 0o666
MARKDOWN_EXTENSION = ".md"


class ConfigError(Exception):
    """Raised when the user configuration file cannot be loaded."""

    pass


class UserConfig(BaseModel):
    """Contents of the user configuration file."""

    token: str = ""

    model_config = {"extra": "allow"}


class PublisherSettings(BaseModel):
    """Settings for the poll loop and rendering.

    Attributes:
        database_id: Notion database mirrored by the daemon
        status_key: Name of the select property gating publication
        title_key: Name of the title property
        publishable_status: Status value that makes a page eligible for export
        output_dir: Directory receiving rendered Markdown files
        poll_interval: Seconds slept before each poll cycle
        image_save_root: Local directory under which post images are saved
        image_base_url: Public URL mirroring image_save_root
    """

    database_id: str = DEFAULT_DATABASE_ID
    status_key: str = "Status"
    title_key: str = "Name"
    publishable_status: str = "online"
    output_dir: Path = DEFAULT_OUTPUT_DIR
    poll_interval: float = DEFAULT_POLL_INTERVAL
    image_save_root: Path = DEFAULT_IMAGE_SAVE_ROOT
    image_base_url: str = DEFAULT_IMAGE_BASE_URL


def default_config_path() -> Path:
    return Path.home() / ".config" / CONFIG_FILE_NAME


def load_user_config(path: Path | None = None) -> UserConfig:
    """Load and validate the user configuration file.

    Args:
        path: Location of the file (default: ~/.config/nexp.yaml)

    Returns:
        The parsed configuration

    Raises:
        ConfigError: If the file is unreadable, not YAML, or fails validation
    """
    path = path or default_config_path()

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Could not read configuration {path}: {e}") from e

    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Configuration {path} is not valid YAML: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Configuration {path} must be a mapping")

    try:
        config = UserConfig.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigError(f"Configuration {path} failed validation: {e}") from e

    logger.debug(f"Loaded configuration from {path}")
    return config
