from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class GeneratorSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="WFGEN_", case_sensitive=False)

    bootstrap_dir: Path = Path("bootstrap")
    workflows_dir: Path = Path(".github/workflows")
    terraform_bin: str = "terraform"
    file_mode: int = 0o644
