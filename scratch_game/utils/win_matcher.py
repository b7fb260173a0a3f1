import logging

from scratch_game.error_codes import ErrorCodes
from scratch_game.exceptions import ConfigInconsistencyException
from scratch_game.models import LINEAR_SYMBOLS, SAME_SYMBOLS

logger = logging.getLogger(__name__)


def parse_position(position, num_rows, num_cols, combination_name=None):
    """
    Parses a "row:col" coordinate and checks it against the grid bounds.

    Args:
        position (str): Coordinate as serialized in `covered_areas`.
        num_rows (int): Grid rows.
        num_cols (int): Grid columns.
        combination_name (str | None): Owning win combination, for error details.

    Returns:
        tuple[int, int]: The (row, column) pair.

    Raises:
        ConfigInconsistencyException: If the coordinate is malformed or out of bounds.
    """
    details = {'win_combination': combination_name, 'position': position}
    parts = position.split(":") if isinstance(position, str) else []
    if len(parts) != 2:
        raise ConfigInconsistencyException(
            f"Invalid position format '{position}' in win combination '{combination_name}'; expected 'row:col'",
            details=details, error_code=ErrorCodes.INVALID_POSITION
        )
    try:
        r, c = int(parts[0]), int(parts[1])
    except ValueError:
        raise ConfigInconsistencyException(
            f"Invalid position format '{position}' in win combination '{combination_name}'; expected 'row:col'",
            details=details, error_code=ErrorCodes.INVALID_POSITION
        )
    if not (0 <= r < num_rows and 0 <= c < num_cols):
        raise ConfigInconsistencyException(
            f"Position '{position}' in win combination '{combination_name}' is out of bounds "
            f"(rows: {num_rows}, cols: {num_cols})",
            details=details, error_code=ErrorCodes.INVALID_POSITION
        )
    return r, c


def _prepare_combinations(win_combinations, num_rows, num_cols):
    """Splits the win combination table by mode, parsing every linear area up front."""
    count_rules = []
    linear_rules = []
    for name, combination in win_combinations.items():
        if combination.when == SAME_SYMBOLS:
            if (not isinstance(combination.count, int) or isinstance(combination.count, bool)
                    or combination.count <= 0):
                raise ConfigInconsistencyException(
                    f"Win combination '{name}' needs a positive 'count' for same_symbols matching",
                    details={'win_combination': name, 'count': combination.count},
                    error_code=ErrorCodes.INVALID_WIN_COMBINATION
                )
            count_rules.append((name, combination.count))
        elif combination.when == LINEAR_SYMBOLS:
            if not combination.covered_areas:
                raise ConfigInconsistencyException(
                    f"Win combination '{name}' needs 'covered_areas' for linear_symbols matching",
                    details={'win_combination': name},
                    error_code=ErrorCodes.INVALID_WIN_COMBINATION
                )
            areas = [
                [parse_position(pos, num_rows, num_cols, name) for pos in area]
                for area in combination.covered_areas
            ]
            linear_rules.append((name, areas))
        else:
            raise ConfigInconsistencyException(
                f"Win combination '{name}' has unknown matching mode '{combination.when}'",
                details={'win_combination': name, 'when': combination.when},
                error_code=ErrorCodes.INVALID_WIN_COMBINATION
            )
    return count_rules, linear_rules


def _count_symbols(grid):
    counts = {}
    for row in grid:
        for symbol in row:
            counts[symbol] = counts.get(symbol, 0) + 1
    return counts


def find_winning_combinations(grid, config):
    """
    Determines which win combinations each standard symbol satisfies on a grid.

    `same_symbols` rules compare a symbol's count over the whole grid to the
    rule's threshold, so several thresholds can fire together. `linear_symbols`
    rules fire when every cell of at least one covered area holds the symbol; a
    rule is recorded once per symbol however many of its areas match. Bonus
    symbols never take part.

    Args:
        grid (list[list[str]]): The round's symbol grid.
        config (GameConfig): Current configuration; re-read on every call.

    Returns:
        dict[str, list[str]]: Symbol label to matched combination names, in
        configuration order. Symbols without matches are omitted.

    Raises:
        ConfigInconsistencyException: For a grid symbol without definition, a
            malformed rule, or a malformed/out-of-bounds coordinate.
    """
    num_rows = len(grid)
    num_cols = len(grid[0]) if num_rows > 0 else 0
    count_rules, linear_rules = _prepare_combinations(config.win_combinations or {}, num_rows, num_cols)

    winning_combinations = {}
    for symbol, symbol_count in _count_symbols(grid).items():
        symbol_def = config.symbols.get(symbol)
        if symbol_def is None:
            logger.warning(f"Grid symbol '{symbol}' has no definition during win matching")
            raise ConfigInconsistencyException(
                f"Symbol configuration not found for '{symbol}'",
                details={'symbol': symbol},
                error_code=ErrorCodes.UNDEFINED_SYMBOL
            )
        if not symbol_def.is_standard:
            continue

        matched = [name for name, threshold in count_rules if symbol_count >= threshold]
        for name, areas in linear_rules:
            if any(all(grid[r][c] == symbol for r, c in area) for area in areas):
                matched.append(name)

        if matched:
            order = list(config.win_combinations)
            winning_combinations[symbol] = sorted(matched, key=order.index)
            logger.debug(f"Symbol '{symbol}' (count {symbol_count}) matched {winning_combinations[symbol]}")

    return winning_combinations
