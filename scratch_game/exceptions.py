from scratch_game.error_codes import ErrorCodes


class ScratchGameException(Exception):
    def __init__(self, error_code, status_message, details=None):
        super().__init__(status_message)
        self.error_code = error_code
        self.status_message = status_message
        self.details = details if details is not None else {}


class ConfigLoadException(ScratchGameException):
    def __init__(self, status_message="Could not load configuration", details=None):
        super().__init__(
            error_code=ErrorCodes.CONFIG_LOAD_ERROR,
            status_message=status_message,
            details=details
        )


class ConfigValidationException(ScratchGameException):
    """Configuration is unusable; raised once, when the engine is built."""

    def __init__(self, status_message="Invalid game configuration", details=None):
        super().__init__(
            error_code=ErrorCodes.CONFIG_INVALID,
            status_message=status_message,
            details=details
        )


class ConfigInconsistencyException(ScratchGameException):
    """Configuration references something it does not define; aborts the round in progress."""

    def __init__(self, status_message="Inconsistent game configuration", details=None,
                 error_code=ErrorCodes.GENERIC_ERROR):
        super().__init__(
            error_code=error_code,
            status_message=status_message,
            details=details
        )


class RewardOverflowException(ScratchGameException, ArithmeticError):
    def __init__(self, status_message="Reward calculation overflow", details=None):
        super().__init__(
            error_code=ErrorCodes.REWARD_OVERFLOW,
            status_message=status_message,
            details=details
        )


class InvalidBetException(ScratchGameException):
    def __init__(self, status_message="Invalid betting amount", details=None):
        super().__init__(
            error_code=ErrorCodes.INVALID_BET,
            status_message=status_message,
            details=details
        )
