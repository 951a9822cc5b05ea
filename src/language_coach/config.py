"""Application configuration using pydantic-settings."""

import functools
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from language_coach.models.progress import XPPolicy

_XP_KEYS = tuple(XPPolicy.model_fields)


def _find_project_root() -> Path:
    """Find project root by locating pyproject.toml."""
    current = Path(__file__).resolve()
    for parent in [current] + list(current.parents):
        if (parent / "pyproject.toml").exists():
            return parent
    return Path(__file__).resolve().parent.parent.parent


class YamlSettingsSource(PydanticBaseSettingsSource):
    """Custom settings source that loads from settings.yaml."""

    def get_field_value(self, field_name: str) -> tuple[Any, str, bool]:
        """Not used - we implement __call__ instead."""
        return None, "", False

    def __call__(self) -> dict[str, Any]:
        """Load settings from YAML file."""
        yaml_path = _find_project_root() / "config" / "settings.yaml"
        if not yaml_path.exists():
            return {}

        with open(yaml_path, encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}

        # Flatten nested structure to match Settings field names
        flattened = {}
        if 'server' in data:
            flattened['host'] = data['server'].get('host')
            flattened['port'] = data['server'].get('port')
        if 'paths' in data:
            flattened['data_dir'] = data['paths'].get('data_dir')
            flattened['levels_file'] = data['paths'].get('levels_file')
        if 'xp' in data:
            for key in _XP_KEYS:
                flattened[f'xp_{key}'] = data['xp'].get(key)

        return {k: v for k, v in flattened.items() if v is not None}


class Settings(BaseSettings):
    """Application settings loaded from environment and config files."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)

    # Paths (relative paths resolve against project_root)
    project_root: Path = Field(default_factory=_find_project_root)
    data_dir: Path = Field(default=Path("data"))
    levels_file: Path | None = Field(default=Path("config/levels.yaml"))

    # XP policy
    xp_lesson_complete: int = Field(default=50, ge=0)
    xp_quiz_perfect: int = Field(default=75, ge=0)
    xp_quiz_pass: int = Field(default=30, ge=0)
    xp_pass_threshold: int = Field(default=60, ge=0, le=100)
    xp_award_base_on_fail: bool = Field(default=True)
    xp_speaking_practice: int = Field(default=15, ge=0)
    xp_writing_practice: int = Field(default=20, ge=0)
    xp_chat_session: int = Field(default=10, ge=0)
    xp_pronunciation: int = Field(default=15, ge=0)

    def _resolve(self, path: Path) -> Path:
        return path if path.is_absolute() else self.project_root / path

    @property
    def progress_dir(self) -> Path:
        d = self._resolve(self.data_dir) / "progress"
        d.mkdir(parents=True, exist_ok=True)
        return d

    @property
    def xp_history_dir(self) -> Path:
        d = self._resolve(self.data_dir) / "xp_history"
        d.mkdir(parents=True, exist_ok=True)
        return d

    @property
    def levels_path(self) -> Path | None:
        if self.levels_file is None:
            return None
        return self._resolve(self.levels_file)

    def xp_policy(self) -> XPPolicy:
        """Build the XP award policy from the flattened ``xp_*`` fields."""
        return XPPolicy(**{key: getattr(self, f"xp_{key}") for key in _XP_KEYS})

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customise settings sources to include YAML file.

        Priority order (highest to lowest):
        1. init_settings (arguments passed to Settings())
        2. env_settings (environment variables)
        3. dotenv_settings (.env file)
        4. YamlSettingsSource (settings.yaml)
        5. file_secret_settings
        """
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlSettingsSource(settings_cls),
            file_secret_settings,
        )


@functools.lru_cache
def get_settings() -> Settings:
    """Get application settings singleton."""
    return Settings()
