"""Runtime settings loaded from `.env` and environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from bookfold.exceptions import SettingsError
from bookfold.typing.models import PatternConfig


class Settings(BaseSettings):
    """Package settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    project_name: str = "bookfold"
    app_env: str = Field(
        default="dev",
        validation_alias="APP_ENV",
        description="Application environment, e.g. 'dev', 'prod'.",
    )

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Logging level, e.g. 'INFO', 'DEBUG'.",
    )
    log_json: bool = Field(
        default=True,
        validation_alias="LOG_JSON",
        description="Enable JSON formatted logs.",
    )
    log_file: str | None = Field(
        default=None,
        validation_alias="LOG_FILE",
        description="File path for log output.",
    )
    results_dir: str = Field(
        default="results",
        validation_alias="RESULTS_DIR",
        description="Directory where exported instructions are written.",
    )

    working_height: int = Field(
        default=1000,
        ge=1,
        validation_alias="WORKING_HEIGHT",
        description="Number of sample rows in the working grid.",
    )
    binarize_threshold: int = Field(
        default=128,
        ge=0,
        le=255,
        validation_alias="BINARIZE_THRESHOLD",
        description="Luma cutpoint for uniform-depth binarization.",
    )
    cut_threshold: int = Field(
        default=180,
        ge=0,
        le=255,
        validation_alias="CUT_THRESHOLD",
        description="Brightness below which a variable-depth sample is cut.",
    )
    min_depth_mm: float = Field(
        default=3.0,
        gt=0,
        validation_alias="MIN_DEPTH_MM",
        description="Cut depth for pure white, in millimeters.",
    )
    max_depth_mm: float = Field(
        default=40.0,
        gt=0,
        validation_alias="MAX_DEPTH_MM",
        description="Cut depth for pure black, in millimeters.",
    )
    depth_gamma: float = Field(
        default=1.8,
        gt=0,
        validation_alias="DEPTH_GAMMA",
        description="Exponent of the brightness-to-depth curve.",
    )
    uniform_depth_mm: float = Field(
        default=20.0,
        gt=0,
        validation_alias="UNIFORM_DEPTH_MM",
        description="Cut depth applied to every sheet in uniform mode.",
    )
    require_payment: bool = Field(
        default=False,
        validation_alias="REQUIRE_PAYMENT",
        description="Gate instruction generation behind an unlock check.",
    )

    @model_validator(mode="after")
    def _validate_depth_range(self) -> Settings:
        """Ensure the depth range is not empty.

        Raises:
            ValueError: If `min_depth_mm` is not below `max_depth_mm`.

        Returns:
            Settings: Validated settings.
        """
        if self.min_depth_mm >= self.max_depth_mm:
            raise ValueError("MIN_DEPTH_MM must be lower than MAX_DEPTH_MM")  # noqa: TRY003
        return self

    def pattern_config(self) -> PatternConfig:
        """Return the immutable pattern constants carried by these settings."""
        return PatternConfig(
            working_height=self.working_height,
            binarize_threshold=self.binarize_threshold,
            cut_threshold=self.cut_threshold,
            min_depth_mm=self.min_depth_mm,
            max_depth_mm=self.max_depth_mm,
            depth_gamma=self.depth_gamma,
            uniform_depth_mm=self.uniform_depth_mm,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance.

    Raises:
        SettingsError: If settings cannot be loaded or validated.

    Returns:
        Settings: The loaded settings instance.
    """
    try:
        return Settings()
    except Exception as exc:
        raise SettingsError(exc=exc) from exc
