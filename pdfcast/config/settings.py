import tempfile
from pathlib import Path

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class MistralConfig(BaseSettings):
    """Mistral OCR configuration"""

    api_key: SecretStr = Field(default=SecretStr(""))
    ocr_model: str = "mistral-ocr-latest"

    model_config = SettingsConfigDict(
        env_prefix="MISTRAL_",
        env_file=".env",
        secrets_dir=".secrets",
        case_sensitive=False,
        extra="ignore",
    )


class OpenAIConfig(BaseSettings):
    """OpenAI script generation configuration."""

    api_key: SecretStr = Field(default=SecretStr(""))
    script_model: str = "gpt-4o-2024-08-06"
    temperature: float = Field(default=1.0, ge=0.0, le=2.0)
    top_p: float = Field(default=1.0, ge=0.0, le=1.0)
    max_output_tokens: int = Field(default=2048, ge=1)

    model_config = SettingsConfigDict(
        env_prefix="OPENAI_",
        env_file=".env",
        secrets_dir=".secrets",
        case_sensitive=False,
        extra="ignore",
    )


class TtsConfig(BaseSettings):
    """Text-to-speech narration defaults."""

    model: str = "gpt-4o-mini-tts"
    voice: str = "fable"
    instructions: str = "excited and informable podcaster"
    output_format: str = "mp3"

    model_config = SettingsConfigDict(
        env_prefix="TTS_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


class GridDBConfig(BaseSettings):
    """GridDB Web API configuration"""

    webapi_url: str = ""
    username: str = ""
    password: SecretStr = Field(default=SecretStr(""))
    container_name: str = "podcasts"

    model_config = SettingsConfigDict(
        env_prefix="GRIDDB_",
        env_file=".env",
        secrets_dir=".secrets",
        case_sensitive=False,
        extra="ignore",
    )


class UploadConfig(BaseSettings):
    """Upload validation and file placement."""

    max_bytes: int = Field(default=10 * 1024 * 1024, ge=1)
    scratch_dir: Path = Field(default_factory=lambda: Path(tempfile.gettempdir()))
    public_dir: Path = Path("public")
    audio_subdir: str = "audio"

    @property
    def audio_root(self) -> Path:
        """Directory under the public root that holds generated clips."""
        return self.public_dir / self.audio_subdir

    model_config = SettingsConfigDict(
        env_prefix="UPLOAD_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


class Settings(BaseSettings):
    """Application settings"""

    app_name: str = "pdfcast"
    app_version: str = "1.0.0"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000
    log_file: str = "logs/app.log"
    pipeline_log_file: str = "logs/podcast_pipeline.log"

    # Mistral OCR
    mistral: MistralConfig = Field(default_factory=MistralConfig)

    # OpenAI script generation
    openai: OpenAIConfig = Field(default_factory=OpenAIConfig)

    # Narration
    tts: TtsConfig = Field(default_factory=TtsConfig)

    # GridDB
    griddb: GridDBConfig = Field(default_factory=GridDBConfig)

    # Uploads
    upload: UploadConfig = Field(default_factory=UploadConfig)

    # CORS
    cors_origins: list[str] = ["*"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


# Global settings instance
settings = Settings()
