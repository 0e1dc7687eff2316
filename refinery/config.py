"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - Every setting can be overridden with a REFINERY_-prefixed environment variable
    - get_settings() is cached (lru_cache): single instance per process
    - Core never reads Settings; the shell converts them with vocabulary()
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from refinery.core.domain_types import Visibility
from refinery.core.vocabulary import Vocabulary


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="REFINERY_", env_file=".env", case_sensitive=False,
    )

    # Generated code
    default_visibility: Visibility = Visibility.PUBLIC_EXPORT
    decide_function: str = "decide"
    refine_name: str = "refine"
    maybe_type: str = "Maybe"
    yes_constructor: str = "Yes"
    no_constructor: str = "No"

    @field_validator(
        "decide_function", "refine_name", "maybe_type",
        "yes_constructor", "no_constructor",
    )
    @classmethod
    def reject_blank_names(cls, v: str) -> str:
        """Generated identifiers must be non-empty and contain no whitespace."""
        if not v or any(ch.isspace() for ch in v):
            raise ValueError(f"invalid identifier: {v!r}")
        return v

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    def vocabulary(self) -> Vocabulary:
        return Vocabulary(
            decide=self.decide_function,
            refine_name=self.refine_name,
            maybe_type=self.maybe_type,
            yes=self.yes_constructor,
            no=self.no_constructor,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
