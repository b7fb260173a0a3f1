import logging

from scratch_game.error_codes import ErrorCodes
from scratch_game.exceptions import ConfigInconsistencyException
from scratch_game.models import EXTRA_BONUS, MISS_IMPACT, MISS_SYMBOL, MULTIPLY_REWARD
from scratch_game.utils.reward_calculator import check_finite
from scratch_game.utils.weighted_sampler import WeightedSampler

logger = logging.getLogger(__name__)


def _has_drawable_weights(bonus_weights):
    # An empty or all-zero table means no bonus; anything else goes to the sampler for validation.
    if not bonus_weights:
        return False
    return any(weight != 0 for weight in bonus_weights.values())


def apply_bonus_symbol(reward, label, config):
    """
    Applies the effect of one drawn bonus symbol.

    Args:
        reward (float): Pre-bonus reward.
        label (str): Drawn bonus label (not the miss label).
        config (GameConfig): Current configuration.

    Returns:
        tuple[float, str | None]: New reward and the applied label, or None when
        the symbol's impact is `miss`.

    Raises:
        ConfigInconsistencyException: Undefined symbol, missing or unknown impact,
            non-positive multiplier, negative extra amount.
        RewardOverflowException: If the new reward is not finite.
    """
    symbol_def = config.symbols.get(label)
    if symbol_def is None:
        raise ConfigInconsistencyException(
            f"Bonus symbol configuration not found for '{label}'",
            details={'symbol': label},
            error_code=ErrorCodes.UNDEFINED_SYMBOL
        )

    impact = symbol_def.impact
    if impact == MULTIPLY_REWARD:
        multiplier = symbol_def.reward_multiplier
        if multiplier is None or multiplier <= 0:
            raise ConfigInconsistencyException(
                f"Bonus symbol '{label}' needs a positive reward_multiplier, got {multiplier}",
                details={'symbol': label, 'reward_multiplier': multiplier},
                error_code=ErrorCodes.INVALID_BONUS_VALUE
            )
        return check_finite(reward * multiplier, label, "bonus multiplier"), label

    if impact == EXTRA_BONUS:
        extra = symbol_def.extra if symbol_def.extra is not None else 0.0
        if extra < 0:
            raise ConfigInconsistencyException(
                f"Bonus symbol '{label}' has a negative extra amount: {extra}",
                details={'symbol': label, 'extra': extra},
                error_code=ErrorCodes.INVALID_BONUS_VALUE
            )
        return check_finite(reward + extra, label, "extra bonus"), label

    if impact == MISS_IMPACT:
        return reward, None

    raise ConfigInconsistencyException(
        f"Bonus symbol '{label}' has missing or unknown impact: {impact!r}",
        details={'symbol': label, 'impact': impact},
        error_code=ErrorCodes.INVALID_BONUS_IMPACT
    )


def resolve_bonus(reward, config, rng, miss_label=MISS_SYMBOL, sampler_cache=None):
    """Draws one bonus symbol and applies it. Returns (reward, applied label or None)."""
    if not _has_drawable_weights(config.bonus_weights):
        return reward, None

    if sampler_cache is not None:
        sampler = sampler_cache.get(config.bonus_weights)
    else:
        sampler = WeightedSampler(config.bonus_weights)
    label = sampler.draw(rng)
    if label == miss_label:
        logger.debug("Bonus draw missed")
        return reward, None

    new_reward, applied = apply_bonus_symbol(reward, label, config)
    logger.debug(f"Bonus '{label}' applied: {reward} -> {new_reward}")
    return new_reward, applied
