"""Cost calculation utilities."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from transtudio.core.types import ModelEntry

COST_DECIMALS = 6


class CostLevel(str, Enum):
    """Cost level classification."""

    LOW = "low"  # < $1
    MEDIUM = "medium"  # $1-$5
    HIGH = "high"  # $5-$20
    VERY_HIGH = "very_high"  # > $20


def tokens_to_cost(tokens: int, price_per_million: float) -> float:
    """Convert a token count into USD.

    Args:
        tokens: Number of tokens (non-negative)
        price_per_million: Price in USD per million tokens (non-negative)

    Returns:
        Unrounded cost in USD

    Raises:
        ValueError: If either argument is negative
    """
    if tokens < 0 or price_per_million < 0:
        raise ValueError("Token count and price must be non-negative")
    return (tokens / 1_000_000) * price_per_million


def combined_cost(input_tokens: int, output_tokens: int, model: ModelEntry) -> float:
    """Total cost of a request at the model's input and output prices.

    The result is not rounded; call :func:`round_cost` only when reporting.
    """
    return tokens_to_cost(input_tokens, model.input_price_per_million) + tokens_to_cost(
        output_tokens, model.output_price_per_million
    )


def round_cost(cost: float) -> float:
    """Round a cost for external reporting."""
    return round(cost, COST_DECIMALS)


def get_cost_level(cost: float) -> CostLevel:
    """Get the cost level classification.

    Args:
        cost: Estimated cost in USD

    Returns:
        Cost level classification
    """
    if cost < 1.0:
        return CostLevel.LOW
    elif cost < 5.0:
        return CostLevel.MEDIUM
    elif cost < 20.0:
        return CostLevel.HIGH
    else:
        return CostLevel.VERY_HIGH


def format_cost(cost: float) -> str:
    """Format cost for display."""
    if cost >= 1.0:
        return f"${cost:.2f}"
    elif cost >= 0.001:
        return f"${cost:.3f}"
    else:
        return f"${cost:.6f}"


class CostEstimate(BaseModel):
    """Pre-flight cost estimate for translating a document with one model."""

    model_id: str
    estimated_tokens: int = Field(ge=0)
    estimated_cost: float = Field(ge=0.0)
    cost_level: CostLevel
    warnings: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True, protected_namespaces=())


def estimate_cost(estimated_tokens: int, model: ModelEntry) -> CostEstimate:
    """Price a document whose source was counted at ``estimated_tokens``.

    The translation is assumed to be about as long as the source, so the same
    count is charged once at the input price and once at the output price.

    Args:
        estimated_tokens: Token count of the source text (0 means unknown)
        model: Catalog entry supplying the prices

    Returns:
        CostEstimate with the rounded cost and any warnings
    """
    cost = combined_cost(estimated_tokens, estimated_tokens, model)

    warnings = []
    if estimated_tokens == 0:
        warnings.append(
            f"Token estimate unavailable for {model.label}; "
            "the provider could not be reached or is not configured."
        )

    return CostEstimate(
        model_id=model.id,
        estimated_tokens=estimated_tokens,
        estimated_cost=round_cost(cost),
        cost_level=get_cost_level(cost),
        warnings=warnings,
    )
