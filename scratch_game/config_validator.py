"""
Construction-time validation of a GameConfig.

Checks only what makes an engine unusable before any round runs: the grid shape
and the presence of the symbol, win combination and probability tables. Cross
references between those tables are left to the round pipeline,
which re-checks them every time it follows one.
"""

import logging
from typing import List

from scratch_game.exceptions import ConfigValidationException

logger = logging.getLogger(__name__)


class ConfigValidator:
    """Collects every construction-time problem of a GameConfig, then fails once."""

    def __init__(self, config):
        self.config = config
        self.errors: List[str] = []
        self.warnings: List[str] = []

    def validate_dimensions(self):
        rows = self.config.rows
        columns = self.config.columns
        if not isinstance(rows, int) or isinstance(rows, bool) or rows <= 0:
            self.errors.append(f"rows must be a positive integer, got {rows!r}")
        if not isinstance(columns, int) or isinstance(columns, bool) or columns <= 0:
            self.errors.append(f"columns must be a positive integer, got {columns!r}")

    def validate_tables(self):
        if not self.config.symbols:
            self.errors.append("symbols must be a non-empty mapping")
        if not self.config.win_combinations:
            self.errors.append("win_combinations must be a non-empty mapping")
        if not self.config.standard_weights:
            self.errors.append("probabilities.standard_symbols must be a non-empty list")

    def validate_optional_tables(self):
        if not self.config.bonus_weights:
            self.warnings.append("probabilities.bonus_symbols is empty; bonus symbols will never be drawn")

    def validate_all(self):
        """
        Runs every check.

        Raises:
            ConfigValidationException: With all collected errors in `details['errors']`.
        """
        if self.config is None:
            raise ConfigValidationException("Game configuration must not be None")

        self.validate_dimensions()
        self.validate_tables()
        self.validate_optional_tables()

        for warning in self.warnings:
            logger.warning(warning)

        if self.errors:
            logger.error(f"Game configuration rejected: {'; '.join(self.errors)}")
            raise ConfigValidationException(
                f"Invalid game configuration: {'; '.join(self.errors)}",
                details={'errors': list(self.errors)}
            )


def validate_game_config(config):
    ConfigValidator(config).validate_all()
