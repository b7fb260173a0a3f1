import logging

from scratch_game.error_codes import ErrorCodes
from scratch_game.exceptions import ConfigInconsistencyException

logger = logging.getLogger(__name__)


class WeightedSampler:
    """
    Constant-time weighted draws using the alias method (Vose).

    The weight map is preprocessed once into two parallel tables, `probability`
    and `alias`, indexed like `labels`. A draw then costs one uniform index and
    one uniform real, independent of the number of labels. The sampler keeps no
    random state of its own: every draw takes the random source from the caller.

    Args:
        weights (dict): Mapping of label to positive integer weight.

    Raises:
        ConfigInconsistencyException: If the map is empty, holds a non-positive or
            non-numeric weight, or its total weight is not strictly positive.
    """

    def __init__(self, weights):
        if not weights:
            raise ConfigInconsistencyException(
                "Invalid probability distribution: no symbols to draw from",
                error_code=ErrorCodes.INVALID_PROBABILITY_DISTRIBUTION
            )

        labels = []
        raw_weights = []
        for label, weight in weights.items():
            if isinstance(weight, bool) or not isinstance(weight, (int, float)) or weight <= 0:
                raise ConfigInconsistencyException(
                    f"Invalid probability distribution: weight for '{label}' must be a positive number, got {weight!r}",
                    details={'symbol': label, 'weight': weight},
                    error_code=ErrorCodes.INVALID_PROBABILITY_DISTRIBUTION
                )
            labels.append(label)
            raw_weights.append(weight)

        total_weight = sum(raw_weights)
        if total_weight <= 0:
            raise ConfigInconsistencyException(
                "Invalid probability distribution: total weight must be positive",
                details={'total_weight': total_weight},
                error_code=ErrorCodes.INVALID_PROBABILITY_DISTRIBUTION
            )

        n = len(labels)
        self.labels = tuple(labels)
        self.total_weight = total_weight
        probability = [0.0] * n
        alias = [0] * n

        scaled = [w * n / total_weight for w in raw_weights]
        light = [i for i, p in enumerate(scaled) if p < 1.0]
        heavy = [i for i, p in enumerate(scaled) if p >= 1.0]

        while light and heavy:
            less = light.pop()
            more = heavy.pop()
            probability[less] = scaled[less]
            alias[less] = more
            scaled[more] = (scaled[more] + scaled[less]) - 1.0
            if scaled[more] < 1.0:
                light.append(more)
            else:
                heavy.append(more)

        # Leftovers are float rounding fallout; they always keep their own column.
        for idx in light + heavy:
            probability[idx] = 1.0
            alias[idx] = idx

        self.probability = tuple(probability)
        self.alias = tuple(alias)

    def __len__(self):
        return len(self.labels)

    def draw(self, rng):
        column = rng.randrange(len(self.labels))
        if rng.random() < self.probability[column]:
            return self.labels[column]
        return self.labels[self.alias[column]]

    def draws(self, rng):
        """Unbounded generator of independent draws."""
        while True:
            yield self.draw(rng)

    def label_probability(self, label):
        """Exact probability of drawing `label`, recomputed from the alias tables."""
        n = len(self.labels)
        total = 0.0
        for column in range(n):
            if self.labels[column] == label:
                total += self.probability[column]
            if self.labels[self.alias[column]] == label and self.alias[column] != column:
                total += 1.0 - self.probability[column]
        return total / n


class SamplerCache:
    """
    Reuses WeightedSampler instances across rounds.

    Entries are keyed on the weight table's contents, so an edited table gets a
    fresh sampler (and fresh validation) on its next use while unchanged tables
    keep their alias tables. Samplers are never mutated after construction and
    hold no random state, so one cache may serve concurrent rounds.
    """

    def __init__(self):
        self._samplers = {}

    def __len__(self):
        return len(self._samplers)

    def get(self, weights):
        try:
            key = tuple(weights.items())
            sampler = self._samplers.get(key)
        except (TypeError, AttributeError):
            # Unhashable or non-mapping tables are never cached; the sampler rejects them.
            return WeightedSampler(weights)
        if sampler is None:
            sampler = WeightedSampler(weights)
            self._samplers[key] = sampler
            logger.debug(f"Built sampler for {len(sampler)} labels (total weight {sampler.total_weight})")
        return sampler
