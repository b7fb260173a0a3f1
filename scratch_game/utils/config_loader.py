import json
import logging
import os

from marshmallow import ValidationError

from scratch_game.exceptions import ConfigLoadException
from scratch_game.schemas import GameConfigSchema

logger = logging.getLogger(__name__)

game_config_schema = GameConfigSchema()


def parse_game_config(document):
    """
    Builds a GameConfig from an already decoded configuration document.

    Raises:
        ConfigLoadException: If the document does not match the expected shape.
    """
    if not isinstance(document, dict):
        raise ConfigLoadException(
            f"Configuration document must be a JSON object, got {type(document).__name__}"
        )
    try:
        return game_config_schema.load(document)
    except ValidationError as e:
        logger.error(f"Configuration document failed schema validation: {e.messages}")
        raise ConfigLoadException(
            f"Configuration document is invalid: {e.messages}",
            details={'errors': e.messages}
        ) from e


def load_game_config(config_path):
    """
    Loads and parses a game configuration file.

    Args:
        config_path (str): Path to the JSON configuration file.

    Returns:
        GameConfig: The parsed configuration. It is not validated for play yet;
        that happens when a ScratchGame is built from it.

    Raises:
        ConfigLoadException: If the file is missing, unreadable, not valid JSON
            or does not match the configuration schema.
    """
    # NOTE_LOG: Missing or malformed config files are the usual CLI failure.
    if not os.path.exists(config_path):
        logger.error(f"Game configuration file not found at {config_path}")
        raise ConfigLoadException(
            f"Configuration file not found: {config_path}",
            details={'path': config_path}
        )

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            document = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f"Error decoding JSON from {config_path}: {e}")
        raise ConfigLoadException(
            f"Configuration file is not valid JSON: {e}",
            details={'path': config_path}
        ) from e
    except OSError as e:
        logger.error(f"Could not read {config_path}: {e}")
        raise ConfigLoadException(
            f"Configuration file could not be read: {e}",
            details={'path': config_path}
        ) from e

    logger.info(f"Successfully loaded game configuration from {config_path}")
    return parse_game_config(document)
