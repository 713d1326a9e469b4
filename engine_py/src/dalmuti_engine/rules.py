"""
Game rule configuration and validation.
"""

from pydantic import BaseModel, Field, field_validator


class RuleConfig(BaseModel):
    """Configuration for table size and match ownership."""

    min_players: int = Field(
        default=4,
        ge=2,
        le=8,
        description="Minimum number of players required to set up a match"
    )
    max_players: int = Field(
        default=8,
        ge=2,
        le=8,
        description="Maximum number of players allowed"
    )
    owner_id: str = Field(
        default="0",
        min_length=1,
        description="Player id allowed to start the game and advance past the round-over screen"
    )
    round_over_delay: int = Field(
        default=15,
        ge=0,
        le=120,
        description="Seconds the presentation layer waits before firing advance_round"
    )

    @field_validator('max_players')
    @classmethod
    def validate_max_players(cls, v, info):
        """Validate maximum players doesn't undercut the minimum."""
        min_players = info.data.get('min_players', 4)
        if v < min_players:
            raise ValueError(f'max_players ({v}) must be >= min_players ({min_players})')
        return v

    def validate_player_count(self, player_count: int) -> bool:
        """Check if a player count is valid for this configuration."""
        return self.min_players <= player_count <= self.max_players


# Default configuration instance
default_rules = RuleConfig()


def create_rules(**overrides) -> RuleConfig:
    """Create a RuleConfig with optional overrides."""
    config_dict = default_rules.model_dump()
    config_dict.update(overrides)
    return RuleConfig(**config_dict)
