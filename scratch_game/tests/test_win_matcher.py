import os
import unittest

from scratch_game.error_codes import ErrorCodes
from scratch_game.exceptions import ConfigInconsistencyException
from scratch_game.models import (
    BONUS, LINEAR_SYMBOLS, MULTIPLY_REWARD, SAME_SYMBOLS, STANDARD,
    GameConfig, SymbolDef, WinPatternDef
)
from scratch_game.utils.config_loader import load_game_config
from scratch_game.utils.win_matcher import find_winning_combinations, parse_position

TEST_CONFIG_PATH = os.path.join(os.path.dirname(__file__), 'test_data', 'config.json')

SAMPLE_MATRIX = [
    ["A", "A", "A", "B"],
    ["B", "C", "D", "E"],
    ["B", "C", "F", "A"],
    ["C", "D", "C", "C"],
]


class TestParsePosition(unittest.TestCase):

    def test_valid_position(self):
        self.assertEqual(parse_position("1:2", 3, 3), (1, 2))
        self.assertEqual(parse_position("0:0", 1, 1), (0, 0))

    def test_malformed_positions(self):
        for position in ("invalid_position", "a:b", "1:2:3", "", "1"):
            with self.subTest(position=position):
                with self.assertRaises(ConfigInconsistencyException) as cm:
                    parse_position(position, 3, 3, "diag")
                self.assertEqual(cm.exception.error_code, ErrorCodes.INVALID_POSITION)

    def test_out_of_bounds_positions(self):
        for position in ("10:10", "3:0", "0:3", "-1:0"):
            with self.subTest(position=position):
                with self.assertRaises(ConfigInconsistencyException) as cm:
                    parse_position(position, 3, 3, "diag")
                self.assertEqual(cm.exception.details['position'], position)


class TestFindWinningCombinations(unittest.TestCase):

    def setUp(self):
        self.config = GameConfig(
            rows=3,
            columns=3,
            symbols={
                "A": SymbolDef("A", STANDARD, 5.0),
                "B": SymbolDef("B", STANDARD, 3.0),
                "10x": SymbolDef("10x", BONUS, 10.0, impact=MULTIPLY_REWARD),
            },
            win_combinations={
                "same_symbol_3_times": WinPatternDef("same_symbol_3_times", SAME_SYMBOLS, 1.0, count=3),
                "same_symbol_5_times": WinPatternDef("same_symbol_5_times", SAME_SYMBOLS, 2.0, count=5),
                "same_symbols_horizontally": WinPatternDef(
                    "same_symbols_horizontally", LINEAR_SYMBOLS, 2.0,
                    covered_areas=(("0:0", "0:1", "0:2"), ("1:0", "1:1", "1:2"), ("2:0", "2:1", "2:2")),
                ),
            },
            standard_weights={(0, 0): {"A": 1}},
        )

    def test_count_is_global_and_thresholds_stack(self):
        grid = [["A", "B", "A"], ["B", "A", "B"], ["A", "B", "A"]]
        matches = find_winning_combinations(grid, self.config)
        self.assertEqual(matches, {
            "A": ["same_symbol_3_times", "same_symbol_5_times"],
            "B": ["same_symbol_3_times"],
        })

    def test_below_threshold_symbols_are_omitted(self):
        grid = [["A", "B", "10x"], ["B", "A", "10x"], ["10x", "10x", "10x"]]
        self.assertEqual(find_winning_combinations(grid, self.config), {})

    def test_linear_pattern_recorded_once_per_symbol(self):
        grid = [["A", "A", "A"], ["B", "B", "B"], ["A", "A", "A"]]
        matches = find_winning_combinations(grid, self.config)
        self.assertEqual(matches["A"].count("same_symbols_horizontally"), 1)
        self.assertEqual(matches["A"], ["same_symbol_3_times", "same_symbol_5_times", "same_symbols_horizontally"])
        self.assertEqual(matches["B"], ["same_symbol_3_times", "same_symbols_horizontally"])

    def test_bonus_symbols_never_match(self):
        grid = [["10x", "10x", "10x"], ["A", "B", "A"], ["B", "A", "B"]]
        matches = find_winning_combinations(grid, self.config)
        self.assertNotIn("10x", matches)

    def test_names_follow_configuration_order(self):
        combinations = self.config.win_combinations
        self.config.win_combinations = {
            "same_symbols_horizontally": combinations["same_symbols_horizontally"],
            "same_symbol_3_times": combinations["same_symbol_3_times"],
        }
        grid = [["A", "A", "A"], ["B", "B", "A"], ["B", "A", "B"]]
        matches = find_winning_combinations(grid, self.config)
        self.assertEqual(matches["A"], ["same_symbols_horizontally", "same_symbol_3_times"])

    def test_undefined_grid_symbol_raises(self):
        grid = [["A", "A", "A"], ["B", "Z", "B"], ["B", "A", "B"]]
        with self.assertRaises(ConfigInconsistencyException) as cm:
            find_winning_combinations(grid, self.config)
        self.assertEqual(cm.exception.error_code, ErrorCodes.UNDEFINED_SYMBOL)
        self.assertIn("Symbol configuration not found", str(cm.exception))

    def test_bad_coordinate_raises_even_when_area_is_not_evaluated(self):
        self.config.win_combinations["diagonal"] = WinPatternDef(
            "diagonal", LINEAR_SYMBOLS, 5.0, covered_areas=(("0:0", "1:1", "10:10"),)
        )
        # No symbol reaches any threshold and B never sits on the diagonal.
        grid = [["A", "B", "A"], ["B", "A", "B"], ["A", "B", "10x"]]
        with self.assertRaises(ConfigInconsistencyException) as cm:
            find_winning_combinations(grid, self.config)
        self.assertEqual(cm.exception.error_code, ErrorCodes.INVALID_POSITION)

    def test_unknown_mode_raises(self):
        self.config.win_combinations["zigzag"] = WinPatternDef("zigzag", "zigzag_symbols", 2.0)
        with self.assertRaises(ConfigInconsistencyException) as cm:
            find_winning_combinations([["A"] * 3] * 3, self.config)
        self.assertEqual(cm.exception.error_code, ErrorCodes.INVALID_WIN_COMBINATION)

    def test_same_symbols_without_count_raises(self):
        self.config.win_combinations["no_count"] = WinPatternDef("no_count", SAME_SYMBOLS, 2.0)
        with self.assertRaises(ConfigInconsistencyException) as cm:
            find_winning_combinations([["A"] * 3] * 3, self.config)
        self.assertEqual(cm.exception.error_code, ErrorCodes.INVALID_WIN_COMBINATION)

    def test_boolean_count_raises(self):
        self.config.win_combinations["flag_count"] = WinPatternDef("flag_count", SAME_SYMBOLS, 2.0, count=True)
        with self.assertRaises(ConfigInconsistencyException) as cm:
            find_winning_combinations([["A"] * 3] * 3, self.config)
        self.assertEqual(cm.exception.error_code, ErrorCodes.INVALID_WIN_COMBINATION)

    def test_repeated_matching_is_identical(self):
        grid = [["A", "A", "A"], ["B", "B", "A"], ["B", "A", "B"]]
        first = find_winning_combinations(grid, self.config)
        self.assertEqual(find_winning_combinations(grid, self.config), first)
        self.assertEqual(grid, [["A", "A", "A"], ["B", "B", "A"], ["B", "A", "B"]])

    def test_linear_without_areas_raises(self):
        self.config.win_combinations["empty_line"] = WinPatternDef("empty_line", LINEAR_SYMBOLS, 2.0)
        with self.assertRaises(ConfigInconsistencyException):
            find_winning_combinations([["A"] * 3] * 3, self.config)


class TestSampleMatrixMatching(unittest.TestCase):

    def test_sample_four_by_four_matrix(self):
        config = load_game_config(TEST_CONFIG_PATH)
        matches = find_winning_combinations(SAMPLE_MATRIX, config)
        self.assertEqual(matches, {
            "A": ["same_symbol_3_times", "same_symbol_4_times", "same_symbols_horizontally"],
            "B": ["same_symbol_3_times"],
            "C": ["same_symbol_3_times", "same_symbol_4_times", "same_symbol_5_times"],
        })


if __name__ == '__main__':
    unittest.main()
