from __future__ import annotations


class DomainError(Exception):
    """Base for domain errors."""


class CampaignValidationError(DomainError):
    """Campaign inputs rejected before any on-chain call is built."""

    code = "invalid_campaign"


class InvalidAmountError(CampaignValidationError):
    code = "invalid_amount"


class InvalidPriceError(CampaignValidationError):
    code = "invalid_price"


class InvalidRangeError(CampaignValidationError):
    code = "invalid_range"


class SpreadTooNarrowError(InvalidRangeError):
    code = "spread_too_narrow"


class SpreadMisalignedError(InvalidRangeError):
    code = "spread_misaligned"


class TickOutOfRangeError(CampaignValidationError):
    code = "tick_out_of_range"


class InvalidSqrtPriceOrderError(CampaignValidationError):
    code = "invalid_sqrt_price_order"


class InvalidKFactorError(CampaignValidationError):
    code = "invalid_k_factor"


class ParameterOverflowError(CampaignValidationError):
    """A computed value does not fit its ABI type."""

    code = "parameter_overflow"


class FeeTierNotFoundError(DomainError):
    """Fee tier is not part of the registry."""


class ApprovalInputError(DomainError):
    """Invalid parameters for approval planning."""


class InvalidTransitionError(DomainError):
    """Event not accepted in the current transaction state."""
