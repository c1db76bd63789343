"""Application configuration using Pydantic Settings."""

from decimal import Decimal, InvalidOperation
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_COST_OF_LIVING_ADJUSTMENT = Decimal("1.03")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Environment
    environment: str = "development"
    """Current environment (development, staging, production)."""

    debug: bool = False
    """Enable debug mode."""

    log_format: str | None = None
    """Logging format override (json or console). Defaults by environment."""

    # Excess business loss projection
    cost_of_living_adjustment: Decimal = DEFAULT_COST_OF_LIVING_ADJUSTMENT
    """Annual inflation factor applied to the 2025 section 461(l) threshold."""

    standard_deduction: Decimal = Decimal("14600")
    """Flat deduction subtracted from AGI by the simplified federal return."""

    # Planning grid defaults
    projection_years: int = 11
    """Number of years in a default projection."""

    default_wages: Decimal = Decimal("400000")
    """W-2 wages prefilled for each projected year."""

    default_business_capital_gain: Decimal = Decimal("100000")
    """Business capital gain prefilled for each projected year."""

    default_business_net_income: Decimal = Decimal("-300000")
    """Business net income (loss) prefilled for each projected year."""

    @field_validator("cost_of_living_adjustment", mode="before")
    @classmethod
    def parse_cost_of_living_adjustment(cls, value: object) -> Decimal:
        """Parse the inflation factor, falling back to the default when blank."""
        if value is None:
            return DEFAULT_COST_OF_LIVING_ADJUSTMENT
        if isinstance(value, str):
            text = value.strip()
            if not text:
                return DEFAULT_COST_OF_LIVING_ADJUSTMENT
            try:
                parsed = Decimal(text)
            except InvalidOperation as exc:
                raise ValueError(
                    "COST_OF_LIVING_ADJUSTMENT must be a number such as 1.03."
                ) from exc
        elif isinstance(value, float):
            parsed = Decimal(str(value))
        elif isinstance(value, (int, Decimal)):
            parsed = Decimal(value)
        else:
            raise ValueError(
                "COST_OF_LIVING_ADJUSTMENT must be a number such as 1.03."
            )

        if parsed < Decimal("1"):
            raise ValueError(
                f"COST_OF_LIVING_ADJUSTMENT must be at least 1, got {parsed}."
            )
        return parsed

    @field_validator("projection_years")
    @classmethod
    def validate_projection_years(cls, value: int) -> int:
        """Require at least one projected year."""
        if value < 1:
            raise ValueError(f"PROJECTION_YEARS must be >= 1, got {value}.")
        return value


try:
    settings = Settings()
except Exception as exc:
    env_file = Path(".env")
    root_error = str(exc)
    suggestions = [
        "COST_OF_LIVING_ADJUSTMENT must be a number >= 1 (e.g. 1.03).",
        "STANDARD_DEDUCTION and DEFAULT_* amounts must be plain numbers.",
        "PROJECTION_YEARS must be a positive integer.",
    ]

    raise RuntimeError(
        "Failed to initialize application settings. "
        f"Check environment variables in {env_file.resolve() if env_file.exists() else '.env'}.\n"
        + f"Error: {root_error}\n"
        + "\n".join(suggestions)
    ) from exc
