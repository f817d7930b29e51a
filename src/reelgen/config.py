"""Configuration management."""

import os
from pathlib import Path
from pydantic import BaseModel, Field
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

BUNDLED_RENDER_DOCS = Path(__file__).parent / "docs" / "render_engine.md"


class Config(BaseModel):
    """Application configuration."""

    # API Keys
    anthropic_api_key: str = Field(
        default_factory=lambda: os.getenv("ANTHROPIC_API_KEY", ""),
        description="Anthropic API key"
    )

    # Model settings
    default_model: str = Field(
        default_factory=lambda: os.getenv("REELGEN_MODEL", "claude-sonnet-4-20250514"),
        description="Default Claude model"
    )

    # Duration heuristics
    words_to_seconds_factor: float = Field(
        default_factory=lambda: float(os.getenv("REELGEN_WORDS_TO_SECONDS", "0.7")),
        description="Estimated spoken seconds per script word",
        gt=0,
    )
    duration_safety_margin: float = Field(
        default_factory=lambda: float(os.getenv("REELGEN_SAFETY_MARGIN", "0.95")),
        description="Fraction of the available clip length narration may use",
        gt=0,
        le=1,
    )
    max_repair_attempts: int = Field(
        default_factory=lambda: int(os.getenv("REELGEN_MAX_REPAIR_ATTEMPTS", "3")),
        description="Model calls allowed to fix duration violations",
        ge=1,
    )

    # Voice-over
    default_voice_id: str = Field(
        default_factory=lambda: os.getenv("REELGEN_DEFAULT_VOICE_ID", "NFcw9p0jKu3zbmXieNPE"),
        description="Voice used when a request does not name one"
    )
    voice_provider_template: str = Field(
        default_factory=lambda: os.getenv(
            "REELGEN_VOICE_PROVIDER",
            "elevenlabs model_id=eleven_multilingual_v2 voice_id={voice_id}",
        ),
        description="Audio provider descriptor; {voice_id} is substituted"
    )

    # Paths
    render_docs_path: Path = Field(
        default_factory=lambda: Path(os.getenv("REELGEN_RENDER_DOCS", str(BUNDLED_RENDER_DOCS))),
        description="Render-engine documentation included in template prompts"
    )

    class Config:
        """Pydantic config."""
        frozen = False

    def validate_required(self) -> None:
        """Validate that required credentials are set."""
        if not self.anthropic_api_key:
            raise ValueError("ANTHROPIC_API_KEY not set")


# Global config instance
config = Config()
