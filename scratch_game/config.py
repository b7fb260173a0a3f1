"""
Runtime settings read from the environment.

A `.env` file in the working directory is loaded first, so local overrides do not
need to be exported. The game configuration document itself is not a setting;
it is passed to the CLI with `--config`.
"""
import logging
import os

from dotenv import load_dotenv

from scratch_game.exceptions import ConfigValidationException

# Load environment variables from .env file
load_dotenv()

TRUE_VALUES = ('1', 'true', 'yes', 'on')


def _env_bool(name, default):
    value = os.environ.get(name)
    if value is None or value.strip() == '':
        return default
    return value.strip().lower() in TRUE_VALUES


def _env_int(name, default=None, minimum=None):
    value = os.environ.get(name)
    if value is None or value.strip() == '':
        return default
    try:
        parsed = int(value)
    except ValueError:
        raise ConfigValidationException(
            f"{name} must be an integer, got {value!r}",
            details={'variable': name, 'value': value}
        )
    if minimum is not None and parsed < minimum:
        raise ConfigValidationException(
            f"{name} must be at least {minimum}, got {parsed}",
            details={'variable': name, 'value': parsed}
        )
    return parsed


def _env_log_level(name, default):
    value = os.environ.get(name, default).strip().upper()
    if not isinstance(logging.getLevelName(value), int):
        raise ConfigValidationException(
            f"{name} must be a logging level name, got {value!r}",
            details={'variable': name, 'value': value}
        )
    return value


class Config:
    """Settings for normal CLI use."""

    LOG_LEVEL = 'INFO'
    LOG_JSON = True
    # None means rounds draw from secrets.SystemRandom().
    RNG_SEED = None
    MISS_LABEL = 'MISS'
    SIM_ROUNDS = 10000

    @classmethod
    def from_env(cls):
        """
        Returns a Config instance overridden by SCRATCH_* environment variables.

        Raises:
            ConfigValidationException: If a setting cannot be parsed.
        """
        settings = cls()
        settings.LOG_LEVEL = _env_log_level('SCRATCH_LOG_LEVEL', cls.LOG_LEVEL)
        settings.LOG_JSON = _env_bool('SCRATCH_LOG_JSON', cls.LOG_JSON)
        settings.RNG_SEED = _env_int('SCRATCH_RNG_SEED', cls.RNG_SEED)
        settings.MISS_LABEL = os.environ.get('SCRATCH_MISS_LABEL', cls.MISS_LABEL)
        settings.SIM_ROUNDS = _env_int('SCRATCH_SIM_ROUNDS', cls.SIM_ROUNDS, minimum=1)
        return settings


class TestingConfig(Config):
    """Deterministic settings for the test suite."""

    __test__ = False

    LOG_LEVEL = 'DEBUG'
    LOG_JSON = False
    RNG_SEED = 12345
    SIM_ROUNDS = 500
