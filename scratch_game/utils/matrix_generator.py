import logging

from scratch_game.error_codes import ErrorCodes
from scratch_game.exceptions import ConfigInconsistencyException
from scratch_game.utils.weighted_sampler import SamplerCache

logger = logging.getLogger(__name__)


class MatrixGenerator:
    """Draws one symbol grid per round from the per-cell weight tables of a GameConfig."""

    def __init__(self, config, sampler_cache=None):
        self.config = config
        self.sampler_cache = sampler_cache if sampler_cache is not None else SamplerCache()

    def _samplers_for_round(self):
        if not self.config.standard_weights:
            raise ConfigInconsistencyException(
                "Standard symbol probabilities are missing",
                error_code=ErrorCodes.INVALID_PROBABILITY_DISTRIBUTION
            )
        # Cells falling back to the same table look it up once per round.
        samplers = {}
        for r_idx in range(self.config.rows):
            for c_idx in range(self.config.columns):
                weights = self.config.weights_for(r_idx, c_idx)
                if id(weights) not in samplers:
                    samplers[id(weights)] = self.sampler_cache.get(weights)
                yield (r_idx, c_idx), samplers[id(weights)]

    def generate(self, rng):
        """
        Generates a rows x columns grid of symbol labels.

        Args:
            rng: Random source exposing `randrange` and `random`.

        Returns:
            list[list[str]]: The generated grid.

        Raises:
            ConfigInconsistencyException: If a cell's weight table is unusable or a
                drawn label has no symbol definition.
        """
        grid = [[None for _ in range(self.config.columns)] for _ in range(self.config.rows)]
        for (r_idx, c_idx), sampler in self._samplers_for_round():
            symbol = sampler.draw(rng)
            if symbol not in self.config.symbols:
                logger.error(f"Drawn symbol '{symbol}' at [{r_idx},{c_idx}] is not defined in the symbol table")
                raise ConfigInconsistencyException(
                    f"Symbol '{symbol}' not found in configuration",
                    details={'symbol': symbol, 'position': [r_idx, c_idx]},
                    error_code=ErrorCodes.UNDEFINED_SYMBOL
                )
            grid[r_idx][c_idx] = symbol
        return grid
