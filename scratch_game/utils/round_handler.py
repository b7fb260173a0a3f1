import logging
import secrets

from scratch_game.config_validator import validate_game_config
from scratch_game.error_codes import ErrorCodes
from scratch_game.exceptions import ConfigInconsistencyException
from scratch_game.models import MISS_SYMBOL, RoundResult
from scratch_game.utils.bonus_resolver import resolve_bonus
from scratch_game.utils.matrix_generator import MatrixGenerator
from scratch_game.utils.reward_calculator import calculate_reward
from scratch_game.utils.weighted_sampler import SamplerCache
from scratch_game.utils.win_matcher import find_winning_combinations

logger = logging.getLogger(__name__)


class ScratchGame:
    """
    Plays single scratch-card rounds against one GameConfig.

    The engine keeps no per-round state. Randomness comes from the `rng` passed to
    `play`, falling back to the engine's default source, which is
    `secrets.SystemRandom()` unless one was given at construction. Concurrent
    callers should each pass their own `rng`. Weighted samplers are built on
    first use and reused for as long as their weight table is unchanged.

    Raises:
        ConfigValidationException: If the configuration is unusable.
    """

    def __init__(self, config, rng=None, miss_label=MISS_SYMBOL):
        validate_game_config(config)
        self.config = config
        self.miss_label = miss_label
        self.default_rng = rng if rng is not None else secrets.SystemRandom()
        self.sampler_cache = SamplerCache()
        self.matrix_generator = MatrixGenerator(config, self.sampler_cache)
        logger.debug(
            f"Scratch game ready: {config.rows}x{config.columns} grid, {len(config.symbols)} symbols, "
            f"{len(config.win_combinations)} win combinations"
        )

    def play(self, bet_amount, rng=None):
        """
        Plays one round: generate a grid, match, reward, bonus.

        Args:
            bet_amount (float): The stake. A non-positive stake still generates a grid
                but pays nothing and skips matching and bonus.
            rng: Optional random source for this round.

        Returns:
            RoundResult
        """
        rng = rng if rng is not None else self.default_rng
        matrix = self.matrix_generator.generate(rng)
        return self._settle_round(matrix, bet_amount, rng)

    def play_with_matrix(self, matrix, bet_amount, rng=None):
        """
        Plays one round on a pre-built grid instead of sampling one.

        The grid must have the configured shape. Matching, reward and bonus behave
        exactly as in `play`; the bonus draw still uses `rng`.
        """
        if len(matrix) != self.config.rows or any(len(row) != self.config.columns for row in matrix):
            raise ConfigInconsistencyException(
                f"Matrix shape does not match the configured {self.config.rows}x{self.config.columns} grid",
                details={'rows': self.config.rows, 'columns': self.config.columns},
                error_code=ErrorCodes.MATRIX_SHAPE_MISMATCH
            )
        rng = rng if rng is not None else self.default_rng
        return self._settle_round([list(row) for row in matrix], bet_amount, rng)

    def _settle_round(self, matrix, bet_amount, rng):
        if bet_amount <= 0:
            logger.debug(f"Non-positive bet {bet_amount}; round pays nothing")
            return RoundResult(matrix=matrix)

        winning_combinations = find_winning_combinations(matrix, self.config)
        reward = calculate_reward(winning_combinations, bet_amount, self.config)

        bonus_symbol = None
        if reward > 0:
            reward, bonus_symbol = resolve_bonus(reward, self.config, rng, self.miss_label, self.sampler_cache)

        logger.info(
            f"Round settled: bet={bet_amount} reward={reward} "
            f"symbols={sorted(winning_combinations)} bonus={bonus_symbol}"
        )
        return RoundResult(
            matrix=matrix,
            reward=reward,
            applied_winning_combinations=winning_combinations,
            applied_bonus_symbol=bonus_symbol
        )
