import logging

import numpy as np

logger = logging.getLogger(__name__)


class RoundTester:
    """
    Monte Carlo simulator for a ScratchGame.

    Plays `num_rounds` rounds at a fixed stake and reports return to player, hit
    frequency, bonus frequency, per-combination hit counts, a histogram of win
    multipliers and a volatility index. Any round error stops the run and is
    raised to the caller.
    """

    def __init__(self, game, num_rounds, bet_amount, rng=None):
        self.game = game
        self.num_rounds = num_rounds
        self.bet_amount = bet_amount
        self.rng = rng

        # Statistics to be collected
        self.rounds_played = 0
        self.total_bet = 0.0
        self.total_win = 0.0
        self.hit_count = 0
        self.bonus_triggers = 0
        self.bonus_hits = {}
        self.combination_hits = {}
        self.wins_by_multiplier = {}
        self.round_rewards = []

        # Derived statistics
        self.overall_rtp = 0.0
        self.hit_frequency = 0.0
        self.bonus_frequency = 0.0
        self.average_win = 0.0
        self.volatility_index = 0.0

    def run_simulation(self):
        logger.info(f"Starting simulation: {self.num_rounds} rounds at bet {self.bet_amount}")
        for _ in range(self.num_rounds):
            result = self.game.play(self.bet_amount, rng=self.rng)
            self._collect_round_statistics(result)
        self.calculate_derived_statistics()
        logger.info(f"Simulation finished: RTP {self.overall_rtp:.2f}% over {self.rounds_played} rounds")
        return self.summary()

    def _collect_round_statistics(self, result):
        self.rounds_played += 1
        self.total_bet += max(self.bet_amount, 0.0)
        self.total_win += result.reward
        self.round_rewards.append(result.reward)

        if result.reward > 0:
            self.hit_count += 1
            if self.bet_amount > 0:
                # Bucket by whole multiples of the stake
                multiplier = int(round(result.reward / self.bet_amount))
                self.wins_by_multiplier[multiplier] = self.wins_by_multiplier.get(multiplier, 0) + 1

        if result.applied_bonus_symbol is not None:
            self.bonus_triggers += 1
            label = result.applied_bonus_symbol
            self.bonus_hits[label] = self.bonus_hits.get(label, 0) + 1

        for names in result.applied_winning_combinations.values():
            for name in names:
                self.combination_hits[name] = self.combination_hits.get(name, 0) + 1

    def calculate_derived_statistics(self):
        if self.rounds_played == 0:
            logger.warning("No rounds were simulated. Cannot calculate derived statistics.")
            return

        self.overall_rtp = (self.total_win / self.total_bet) * 100 if self.total_bet > 0 else 0.0
        self.hit_frequency = (self.hit_count / self.rounds_played) * 100
        self.bonus_frequency = (self.bonus_triggers / self.rounds_played) * 100
        self.average_win = (self.total_win / self.hit_count) if self.hit_count > 0 else 0.0

        rewards = np.asarray(self.round_rewards, dtype=float)
        std_dev_rewards = float(np.std(rewards))
        self.volatility_index = std_dev_rewards / self.bet_amount if self.bet_amount > 0 else 0.0

    def summary(self):
        """Collected and derived statistics as a JSON-friendly dict."""
        return {
            'rounds': self.rounds_played,
            'bet_amount': self.bet_amount,
            'total_bet': self.total_bet,
            'total_win': self.total_win,
            'rtp_percent': self.overall_rtp,
            'hit_frequency_percent': self.hit_frequency,
            'bonus_frequency_percent': self.bonus_frequency,
            'average_win': self.average_win,
            'volatility_index': self.volatility_index,
            'bonus_hits': dict(sorted(self.bonus_hits.items())),
            'combination_hits': dict(sorted(self.combination_hits.items())),
            'wins_by_multiplier': {str(k): v for k, v in sorted(self.wins_by_multiplier.items())},
        }
