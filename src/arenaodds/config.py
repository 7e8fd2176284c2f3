"""Configuration management for arenaodds."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ArenaOddsConfig(BaseSettings):
    """Configuration settings for arenaodds."""

    # Bet limits
    max_bets: int = Field(
        default=10,
        description="Maximum number of bets a caller should place per round",
        alias="ARENAODDS_MAX_BETS",
    )

    charity_corner: bool = Field(
        default=False,
        description="Raise the bet limit to the charity corner cap",
        alias="ARENAODDS_CHARITY_CORNER",
    )

    charity_corner_max_bets: int = Field(
        default=15,
        description="Bet limit while charity corner is active",
        alias="ARENAODDS_CHARITY_CORNER_MAX_BETS",
    )

    # Staking
    default_bet_amount: int | None = Field(
        default=None,
        description="Stake used by the CLI when no amounts hash is given",
        alias="ARENAODDS_BET_AMOUNT",
    )

    # Logging
    log_level: str = Field(
        default="WARNING",
        description="Log level used by the command line interface",
        alias="ARENAODDS_LOG_LEVEL",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def bet_limit(self) -> int:
        """Bet cap that applies with the current charity corner setting."""
        if self.charity_corner:
            return self.charity_corner_max_bets
        return self.max_bets


# Global configuration instance
config = ArenaOddsConfig()


def get_config() -> ArenaOddsConfig:
    """Get the current configuration."""
    return config


def update_config(**kwargs) -> None:
    """Update configuration settings."""
    global config
    for key, value in kwargs.items():
        if hasattr(config, key):
            setattr(config, key, value)
        else:
            raise ValueError(f"Unknown configuration option: {key}")


def reset_config() -> None:
    """Reset configuration to defaults."""
    global config
    config = ArenaOddsConfig()
