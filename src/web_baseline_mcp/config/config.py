from pathlib import Path
from typing import List, Literal, Optional, Union

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ALLOWED_ORIGINS = ["http://localhost", "http://127.0.0.1"]


class DatasetConfig(BaseModel):
    """Where compatibility data comes from and how long it stays fresh."""

    source: Optional[str] = Field(
        default=None,
        description="URL or file path of a web-features data.json document",
    )
    ttl_seconds: int = Field(default=3600, ge=0)
    timeout: int = 30
    verify_ssl: bool = True
    use_disk_cache: bool = True


class McpConfig(BaseModel):
    """Configuration for the MCP server."""

    transports: List[Literal["stdio", "sse", "streamable-http"]] = Field(
        default_factory=lambda: ["stdio"]
    )
    address: Optional[str] = "127.0.0.1"
    port: Optional[Union[int, str]] = 3001
    debug: Optional[bool] = False
    allowed_origins: List[str] = Field(
        default_factory=lambda: list(DEFAULT_ALLOWED_ORIGINS)
    )


class Config(BaseSettings):
    """Configuration for the web baseline server."""

    dataset: DatasetConfig = Field(default_factory=DatasetConfig)
    mcp: McpConfig = Field(default_factory=McpConfig)

    model_config = SettingsConfigDict(
        env_prefix="WBM_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    @classmethod
    def from_file(cls, file_path: str) -> "Config":
        """Load configuration from a YAML file; missing files yield defaults."""
        config_path = Path(file_path)
        config_data = {}
        if config_path.exists():
            with open(config_path) as f:
                config_data = yaml.safe_load(f) or {}

        return cls(**config_data)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        # Environment variables win over values read from the YAML file
        return env_settings, dotenv_settings, init_settings, file_secret_settings
