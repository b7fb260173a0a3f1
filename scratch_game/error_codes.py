class ErrorCodes:
    GENERIC_ERROR = "SG_GENERIC_ERROR"

    # Configuration document / construction time
    CONFIG_LOAD_ERROR = "SG_CONFIG_LOAD_ERROR"
    CONFIG_INVALID = "SG_CONFIG_INVALID"

    # Configuration inconsistency detected while a round runs
    UNDEFINED_SYMBOL = "SG_UNDEFINED_SYMBOL"
    INVALID_SYMBOL_VALUE = "SG_INVALID_SYMBOL_VALUE"
    UNDEFINED_WIN_COMBINATION = "SG_UNDEFINED_WIN_COMBINATION"
    MISSING_WIN_COMBINATIONS = "SG_MISSING_WIN_COMBINATIONS"
    INVALID_WIN_COMBINATION = "SG_INVALID_WIN_COMBINATION"
    INVALID_POSITION = "SG_INVALID_POSITION"
    INVALID_PROBABILITY_DISTRIBUTION = "SG_INVALID_PROBABILITY_DISTRIBUTION"
    INVALID_BONUS_IMPACT = "SG_INVALID_BONUS_IMPACT"
    INVALID_BONUS_VALUE = "SG_INVALID_BONUS_VALUE"
    MATRIX_SHAPE_MISMATCH = "SG_MATRIX_SHAPE_MISMATCH"

    # Arithmetic
    REWARD_OVERFLOW = "SG_REWARD_OVERFLOW"

    # Input
    INVALID_BET = "SG_INVALID_BET"
