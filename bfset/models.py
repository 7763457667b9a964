"""Pydantic models for bfset.

Provides validated configuration models.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, field_validator


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ObservabilityConfig(BaseModel):
    """Observability configuration."""

    log_level: LogLevel = Field(default=LogLevel.WARNING, description="Log level")
    log_file: str | None = Field(None, description="Log file path")
    structured_logging: bool = Field(
        default=False,
        description="Write the log file as JSON lines",
    )
    log_correlation_id: bool = Field(
        default=True,
        description="Include correlation IDs",
    )
    log_format: str = Field(
        default="%(asctime)s %(levelname)s %(name)s.%(funcName)s: %(message)s",
        description="Log format string for the plain file formatter",
    )


class BitfieldConfig(BaseModel):
    """Bitfield handling configuration."""

    enumeration_chunk_bits: int = Field(
        default=1024,
        ge=8,
        le=1 << 20,
        description="Slice width in bits used when enumerating members",
    )
    max_display_members: int = Field(
        default=256,
        ge=0,
        description="Maximum number of members printed by the CLI (0 = all)",
    )

    @field_validator("enumeration_chunk_bits")
    @classmethod
    def validate_chunk_bits(cls, v: int) -> int:
        """Validate the chunk width is whole bytes."""
        if v % 8:
            msg = f"enumeration_chunk_bits must be a multiple of 8, got {v}"
            raise ValueError(msg)
        return v


class Config(BaseModel):
    """Main configuration model."""

    bitfield: BitfieldConfig = Field(
        default_factory=BitfieldConfig,
        description="Bitfield configuration",
    )
    observability: ObservabilityConfig = Field(
        default_factory=ObservabilityConfig,
        description="Observability configuration",
    )
