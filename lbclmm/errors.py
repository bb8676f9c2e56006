"""Error codes reported by the liquidity book pool logic."""

from __future__ import annotations

from enum import Enum

ERROR_CODE_OFFSET = 6000


class ErrorCode(Enum):
    """Every failure the pool logic can report, with its user-facing message."""

    INVALID_START_BIN_INDEX = "Invalid start bin index"
    INVALID_BIN_ID = "Invalid bin id"
    INVALID_INPUT = "Invalid input data"
    EXCEEDED_AMOUNT_SLIPPAGE_TOLERANCE = "Exceeded amount slippage tolerance"
    EXCEEDED_BIN_SLIPPAGE_TOLERANCE = "Exceeded bin slippage tolerance"
    COMPOSITION_FACTOR_FLAWED = "Composition factor flawed"
    NON_PRESET_BIN_STEP = "Non preset bin step"
    ZERO_LIQUIDITY = "Zero liquidity"
    INVALID_POSITION = "Invalid position"
    BIN_ARRAY_NOT_FOUND = "Bin array not found"
    INVALID_TOKEN_MINT = "Invalid token mint"
    INVALID_ACCOUNT_FOR_SINGLE_DEPOSIT = "Invalid account for single deposit"
    PAIR_INSUFFICIENT_LIQUIDITY = "Pair insufficient liquidity"
    INVALID_FEE_OWNER = "Invalid fee owner"
    INVALID_FEE_WITHDRAW_AMOUNT = "Invalid fee withdraw amount"
    INVALID_ADMIN = "Invalid admin"
    IDENTICAL_FEE_OWNER = "Identical fee owner"
    INVALID_BPS = "Invalid basis point"
    MATH_OVERFLOW = "Math operation overflow"
    TYPE_CAST_FAILED = "Type cast error"
    INVALID_REWARD_INDEX = "Invalid reward index"
    INVALID_REWARD_DURATION = "Invalid reward duration"
    REWARD_INITIALIZED = "Reward already initialized"
    REWARD_UNINITIALIZED = "Reward not initialized"
    IDENTICAL_FUNDER = "Identical funder"
    REWARD_CAMPAIGN_IN_PROGRESS = "Reward campaign in progress"
    IDENTICAL_REWARD_DURATION = "Reward duration is the same"
    INVALID_BIN_ARRAY = "Invalid bin array"
    NON_CONTINUOUS_BIN_ARRAYS = "Bin arrays must be continuous"
    INVALID_REWARD_VAULT = "Invalid reward vault"
    NON_EMPTY_POSITION = "Position is not empty"
    UNAUTHORIZED_ACCESS = "Unauthorized access"
    INVALID_FEE_PARAMETER = "Invalid fee parameter"
    MISSING_ORACLE = "Missing oracle account"
    INSUFFICIENT_SAMPLE = "Insufficient observation sample"
    INVALID_LOOKUP_TIMESTAMP = "Invalid lookup timestamp"
    BITMAP_EXTENSION_ACCOUNT_IS_NOT_PROVIDED = "Bitmap extension account is not provided"
    CANNOT_FIND_NON_ZERO_LIQUIDITY_BIN_ARRAY_ID = "Cannot find non-zero liquidity binArrayId"
    BIN_ID_OUT_OF_BOUND = "Bin id out of bound"
    INSUFFICIENT_OUT_AMOUNT = "Insufficient amount in for minimum out"
    INVALID_POSITION_WIDTH = "Invalid position width"
    EXCESSIVE_FEE_UPDATE = "Excessive fee update"
    POOL_DISABLED = "Pool disabled"
    INVALID_POOL_TYPE = "Invalid pool type"
    EXCEED_MAX_WHITELIST = "Whitelist for wallet is full"
    INVALID_INDEX = "Invalid index"
    REWARD_NOT_ENDED = "Reward not ended"
    MUST_WITHDRAWN_INELIGIBLE_REWARD = "Must withdraw ineligible reward"
    INVALID_STRATEGY_PARAMETERS = "Invalid strategy parameters"
    LIQUIDITY_LOCKED = "Liquidity locked"
    INVALID_LOCK_RELEASE_SLOT = "Invalid lock release slot"

    @property
    def message(self) -> str:
        """Human readable description of the error."""
        return self.value

    @property
    def code(self) -> int:
        """Numeric error code, counted from ERROR_CODE_OFFSET in declaration order."""
        return ERROR_CODE_OFFSET + _POSITIONS[self]


_POSITIONS = {member: position for position, member in enumerate(ErrorCode)}


class LbClmmError(Exception):
    """Raised when a pool operation fails with one of the ErrorCode values."""

    def __init__(self, code: ErrorCode) -> None:
        super().__init__(code.message)
        self.code = code