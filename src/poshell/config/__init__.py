"""Configuration — Pydantic model for shell session settings."""

from __future__ import annotations

import json
import os
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, Field


class ShellConfig(BaseModel):
    """How to start and talk to the shell process."""

    executable: str = Field(
        default="powershell.exe",
        description="Shell executable, looked up on PATH unless absolute",
    )
    arguments: list[str] = Field(
        default_factory=lambda: ["-NoLogo", "-NoExit", "-Command", "-"],
        description="Arguments that keep the shell reading commands from stdin",
    )
    cwd: str | None = Field(default=None, description="Working directory")
    env: dict[str, str] = Field(
        default_factory=dict, description="Extra environment variables"
    )
    code_page: int | None = Field(
        default=None, description="Fixed code page; skips detection when set"
    )
    chunk_size: int = Field(
        default=64, gt=0, description="Raw read size of the stream readers"
    )
    encodings: dict[int, str] = Field(
        default_factory=dict,
        description="Code page to Python codec name, checked before the registry",
    )

    @classmethod
    def load(cls, config_path: str | None = None) -> ShellConfig:
        """Load config from file, env vars, or defaults.

        Priority: env vars > config file > defaults.

        Env vars:
            POSHELL_EXECUTABLE  - Shell executable name or path
            POSHELL_CODE_PAGE   - Fixed code page (skips detection)
            POSHELL_CHUNK_SIZE  - Raw read size in bytes
        """
        load_dotenv()

        config_data: dict[str, Any] = {}

        if config_path and os.path.exists(config_path):
            with open(config_path) as f:
                config_data = json.load(f)

        env_executable = os.environ.get("POSHELL_EXECUTABLE")
        if env_executable:
            config_data["executable"] = env_executable

        env_code_page = os.environ.get("POSHELL_CODE_PAGE")
        if env_code_page:
            config_data["code_page"] = int(env_code_page)

        env_chunk_size = os.environ.get("POSHELL_CHUNK_SIZE")
        if env_chunk_size:
            config_data["chunk_size"] = int(env_chunk_size)

        return cls.model_validate(config_data)
