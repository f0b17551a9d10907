from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List, Dict, Any
from pathlib import Path


DEFAULT_EXCLUDES = [
    ".git",
    ".hg",
    ".svn",
    "node_modules",
    "__pycache__",
    ".venv",
    "venv",
    ".mypy_cache",
    ".pytest_cache",
    ".ruff_cache",
    "*.egg-info",
    "bin",
    "obj",
]


class Settings(BaseSettings):
    # Observability & UI
    LOG_FORMAT: str = "auto"  # json|plain|auto
    LOG_LEVEL: str = "warning"  # debug|info|warning|error
    PROGRESS: bool = True  # Show progress bars on a TTY
    NO_COLOR: bool = False  # Disable colored output

    # Chunking
    TEXT_ENCODING: str = "utf-8"  # Fallback when no BOM is present
    COPY_BLOCK_SIZE: int = Field(
        default=1024 * 1024,
        gt=0,
        description="Read buffer used while streaming byte-oriented chunks",
    )

    # Tree rendering
    TREE_EXCLUDE: List[str] = DEFAULT_EXCLUDES
    TREE_MAX_DEPTH: Optional[int] = None  # None = unlimited

    # Source concatenation
    CONCAT_EXTENSIONS: List[str] = []  # Empty = every text file
    CONCAT_EXCLUDE: List[str] = DEFAULT_EXCLUDES
    CONCAT_HEADER: str = "===== {path} ====="

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    @classmethod
    def load_config(cls, config_file: Optional[str] = None) -> "Settings":
        """Load settings with config file -> env -> CLI precedence."""
        config_data: Dict[str, Any] = {}

        # Find config file
        if config_file:
            config_path = Path(config_file)
            if not config_path.exists():
                raise FileNotFoundError(f"Config file not found: {config_file}")
        else:
            # Auto-discover .shellkit.{yaml,yml,toml}
            for ext in ["yaml", "yml", "toml"]:
                config_path = Path(f".shellkit.{ext}")
                if config_path.exists():
                    break
            else:
                config_path = None

        # Load config file if found
        if config_path and config_path.exists():
            if config_path.suffix in [".yaml", ".yml"]:
                import yaml  # type: ignore[import-untyped]

                with open(config_path) as f:
                    config_data = yaml.safe_load(f) or {}
            elif config_path.suffix == ".toml":
                import tomllib

                with open(config_path, "rb") as f:
                    config_data = tomllib.load(f)

        # Environment variables override file values
        env_overrides = cls().model_dump(exclude_unset=True)
        config_data.update(env_overrides)
        return cls(**config_data)


# Default settings - will be replaced by load_config() during CLI startup
SETTINGS = Settings()
