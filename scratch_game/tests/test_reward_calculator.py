import sys
import unittest

from scratch_game.error_codes import ErrorCodes
from scratch_game.exceptions import ConfigInconsistencyException, RewardOverflowException
from scratch_game.models import LINEAR_SYMBOLS, SAME_SYMBOLS, STANDARD, GameConfig, SymbolDef, WinPatternDef
from scratch_game.utils.reward_calculator import calculate_reward, calculate_symbol_reward, check_finite


class TestRewardCalculator(unittest.TestCase):

    def setUp(self):
        self.config = GameConfig(
            rows=3,
            columns=3,
            symbols={
                "A": SymbolDef("A", STANDARD, 5.0),
                "B": SymbolDef("B", STANDARD, 3.0),
            },
            win_combinations={
                "same_symbol_3_times": WinPatternDef("same_symbol_3_times", SAME_SYMBOLS, 1.0, count=3),
                "same_symbol_4_times": WinPatternDef("same_symbol_4_times", SAME_SYMBOLS, 1.5, count=4),
                "same_symbols_horizontally": WinPatternDef(
                    "same_symbols_horizontally", LINEAR_SYMBOLS, 2.0, covered_areas=(("0:0", "0:1", "0:2"),)
                ),
            },
            standard_weights={(0, 0): {"A": 1}},
        )

    def test_single_pattern(self):
        self.assertEqual(calculate_reward({"A": ["same_symbol_3_times"]}, 100, self.config), 500.0)

    def test_patterns_compound_per_symbol(self):
        matches = {"A": ["same_symbol_3_times", "same_symbol_4_times", "same_symbols_horizontally"]}
        # 100 x 5 x 1 x 1.5 x 2
        self.assertEqual(calculate_reward(matches, 100, self.config), 1500.0)

    def test_symbols_are_summed(self):
        matches = {"A": ["same_symbol_3_times"], "B": ["same_symbol_3_times"]}
        self.assertEqual(calculate_reward(matches, 100, self.config), 800.0)

    def test_empty_match_set_pays_nothing(self):
        self.assertEqual(calculate_reward({}, 100, self.config), 0.0)
        self.assertEqual(calculate_reward({"A": []}, 100, self.config), 0.0)

    def test_non_positive_bet_pays_nothing(self):
        matches = {"A": ["same_symbol_3_times"]}
        self.assertEqual(calculate_reward(matches, 0, self.config), 0.0)
        self.assertEqual(calculate_reward(matches, -100, self.config), 0.0)

    def test_missing_pattern_table_raises(self):
        self.config.win_combinations = {}
        with self.assertRaises(ConfigInconsistencyException) as cm:
            calculate_reward({"A": ["same_symbol_3_times"]}, 100, self.config)
        self.assertEqual(cm.exception.error_code, ErrorCodes.MISSING_WIN_COMBINATIONS)
        self.assertEqual(str(cm.exception), "Win combinations configuration is missing")

    def test_undefined_symbol_raises(self):
        with self.assertRaises(ConfigInconsistencyException) as cm:
            calculate_reward({"Z": ["same_symbol_3_times"]}, 100, self.config)
        self.assertEqual(cm.exception.error_code, ErrorCodes.UNDEFINED_SYMBOL)
        self.assertIn("Symbol configuration not found", str(cm.exception))

    def test_undefined_pattern_raises(self):
        with self.assertRaises(ConfigInconsistencyException) as cm:
            calculate_reward({"A": ["same_symbol_9_times"]}, 100, self.config)
        self.assertEqual(cm.exception.error_code, ErrorCodes.UNDEFINED_WIN_COMBINATION)
        self.assertIn("Win combination configuration not found", str(cm.exception))

    def test_symbol_multiplier_overflow(self):
        self.config.symbols["A"] = SymbolDef("A", STANDARD, sys.float_info.max)
        with self.assertRaises(RewardOverflowException) as cm:
            calculate_reward({"A": ["same_symbol_3_times"]}, 100, self.config)
        self.assertEqual(cm.exception.details['symbol'], "A")
        self.assertIsInstance(cm.exception, ArithmeticError)

    def test_pattern_multiplier_overflow(self):
        self.config.win_combinations["huge"] = WinPatternDef("huge", SAME_SYMBOLS, sys.float_info.max, count=3)
        with self.assertRaises(RewardOverflowException) as cm:
            calculate_symbol_reward("A", ["same_symbol_3_times", "huge"], 100, self.config)
        self.assertEqual(cm.exception.details['step'], "huge")

    def test_total_overflow(self):
        self.config.symbols["A"] = SymbolDef("A", STANDARD, 1e308)
        self.config.symbols["B"] = SymbolDef("B", STANDARD, 1e308)
        matches = {"A": ["same_symbol_3_times"], "B": ["same_symbol_3_times"]}
        with self.assertRaises(RewardOverflowException) as cm:
            calculate_reward(matches, 1, self.config)
        self.assertEqual(cm.exception.details['step'], "total")

    def test_negative_symbol_multiplier_raises(self):
        self.config.symbols["A"] = SymbolDef("A", STANDARD, -1.0)
        with self.assertRaises(ConfigInconsistencyException) as cm:
            calculate_reward({"A": ["same_symbol_3_times"]}, 100, self.config)
        self.assertEqual(cm.exception.error_code, ErrorCodes.INVALID_SYMBOL_VALUE)
        self.assertEqual(cm.exception.details["symbol"], "A")

    def test_negative_pattern_multiplier_raises(self):
        self.config.win_combinations["same_symbol_3_times"] = WinPatternDef(
            "same_symbol_3_times", SAME_SYMBOLS, -2.0, count=3
        )
        with self.assertRaises(ConfigInconsistencyException) as cm:
            calculate_reward({"A": ["same_symbol_3_times"]}, 100, self.config)
        self.assertEqual(cm.exception.error_code, ErrorCodes.INVALID_WIN_COMBINATION)

    def test_zero_multiplier_pays_nothing(self):
        self.config.symbols["A"] = SymbolDef("A", STANDARD, 0.0)
        self.assertEqual(calculate_reward({"A": ["same_symbol_3_times"]}, 100, self.config), 0.0)

    def test_repeated_calculation_is_identical(self):
        matches = {"A": ["same_symbol_3_times", "same_symbols_horizontally"], "B": ["same_symbol_3_times"]}
        first = calculate_reward(matches, 100, self.config)
        self.assertEqual(calculate_reward(matches, 100, self.config), first)
        self.assertEqual(first, 1300.0)

    def test_check_finite_passes_through(self):
        self.assertEqual(check_finite(12.5, "A", "total"), 12.5)
        with self.assertRaises(RewardOverflowException):
            check_finite(float('nan'), "A", "total")


if __name__ == '__main__':
    unittest.main()
