"""Configuration models for logid."""

from pydantic import BaseModel, Field, model_validator

from logid.lut.allocator import IDMethod


class IDConfig(BaseModel):
    """Interval and search strategy for new IDs."""

    min: int = Field(
        default=10,
        ge=1,
        description="Smallest ID that may be allocated (inclusive, 0 is reserved)"
    )

    max: int = Field(
        default=65535,
        ge=0,
        description="Largest ID that may be allocated (inclusive)"
    )

    method: IDMethod = Field(
        default=IDMethod.RANDOM,
        description="ID search strategy: random, upward or downward"
    )

    @model_validator(mode="after")
    def validate_interval(self) -> "IDConfig":
        """Reject intervals whose upper bound is below the lower bound."""
        if self.max < self.min:
            raise ValueError(
                f"ID interval is empty: max ({self.max}) < min ({self.min})"
            )
        return self

    model_config = {"frozen": True}


class FilesConfig(BaseModel):
    """Locations of the list files."""

    id_list: str = Field(
        default="til.json",
        description="Path to the ID list file (ID -> format descriptor)"
    )

    location_list: str = Field(
        default="li.json",
        description="Path to the location list file (ID -> source location)"
    )

    model_config = {"frozen": True}


class Config(BaseModel):
    """Root configuration for logid."""

    ids: IDConfig = Field(default_factory=IDConfig, description="ID allocation settings")
    files: FilesConfig = Field(default_factory=FilesConfig, description="List file settings")
    verbose: bool = Field(default=False, description="Write extra diagnostics")

    model_config = {"frozen": True}
