import logging
import math

from scratch_game.error_codes import ErrorCodes
from scratch_game.exceptions import ConfigInconsistencyException, RewardOverflowException

logger = logging.getLogger(__name__)


def check_finite(value, symbol, step):
    """Raises RewardOverflowException when `value` is inf or NaN."""
    if not math.isfinite(value):
        logger.error(f"Reward overflow for symbol '{symbol}' at step '{step}': {value}")
        raise RewardOverflowException(
            f"Reward calculation overflow for symbol '{symbol}' ({step})",
            details={'symbol': symbol, 'step': step}
        )
    return value


def calculate_symbol_reward(symbol, combination_names, bet_amount, config):
    """
    Reward contributed by a single symbol.

    Starts from bet x symbol multiplier and compounds every matched combination's
    multiplier onto it, checking for overflow after each step.
    """
    symbol_def = config.symbols.get(symbol)
    if symbol_def is None:
        raise ConfigInconsistencyException(
            f"Symbol configuration not found for '{symbol}'",
            details={'symbol': symbol},
            error_code=ErrorCodes.UNDEFINED_SYMBOL
        )

    if symbol_def.reward_multiplier < 0:
        raise ConfigInconsistencyException(
            f"Symbol '{symbol}' has a negative reward_multiplier: {symbol_def.reward_multiplier}",
            details={'symbol': symbol, 'reward_multiplier': symbol_def.reward_multiplier},
            error_code=ErrorCodes.INVALID_SYMBOL_VALUE
        )

    symbol_reward = check_finite(bet_amount * symbol_def.reward_multiplier, symbol, "symbol multiplier")
    for name in combination_names:
        combination = config.win_combinations.get(name)
        if combination is None:
            raise ConfigInconsistencyException(
                f"Win combination configuration not found for '{name}'",
                details={'symbol': symbol, 'win_combination': name},
                error_code=ErrorCodes.UNDEFINED_WIN_COMBINATION
            )
        if combination.reward_multiplier < 0:
            raise ConfigInconsistencyException(
                f"Win combination '{name}' has a negative reward_multiplier: {combination.reward_multiplier}",
                details={'symbol': symbol, 'win_combination': name,
                         'reward_multiplier': combination.reward_multiplier},
                error_code=ErrorCodes.INVALID_WIN_COMBINATION
            )
        symbol_reward = check_finite(symbol_reward * combination.reward_multiplier, symbol, name)
    return symbol_reward


def calculate_reward(winning_combinations, bet_amount, config):
    """
    Folds a round's matches into a single reward.

    Args:
        winning_combinations (dict[str, list[str]]): Symbol to matched combination names.
        bet_amount (float): The stake. Non-positive stakes always pay 0.
        config (GameConfig): Current configuration; definitions are re-checked here.

    Returns:
        float: Sum of the per-symbol rewards.

    Raises:
        ConfigInconsistencyException: If the win combination table is missing or
            empty, a referenced symbol or combination has no definition, or a
            multiplier is negative.
        RewardOverflowException: If any intermediate value stops being finite.
    """
    if bet_amount <= 0:
        return 0.0

    if not config.win_combinations:
        raise ConfigInconsistencyException(
            "Win combinations configuration is missing",
            error_code=ErrorCodes.MISSING_WIN_COMBINATIONS
        )

    total_reward = 0.0
    for symbol, combination_names in winning_combinations.items():
        if not combination_names:
            continue
        symbol_reward = calculate_symbol_reward(symbol, combination_names, bet_amount, config)
        total_reward = check_finite(total_reward + symbol_reward, symbol, "total")
    return total_reward
