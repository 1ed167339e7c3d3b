from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from .codecs import Codec


class LibrarySettings(BaseModel):
    roots: List[Path] = Field(default_factory=list)
    include_extensions: List[str] = Field(
        default_factory=lambda: [".flac", ".mp3", ".m4a", ".ogg", ".opus", ".wav"]
    )
    exclude_patterns: List[str] = Field(default_factory=list)

    @field_validator("roots", mode="before")
    @classmethod
    def _expand_roots(cls, values: List[str]) -> List[Path]:
        return [Path(v).expanduser().resolve() for v in values]

    @field_validator("include_extensions")
    @classmethod
    def _normalize_extensions(cls, values: List[str]) -> List[str]:
        return [v.lower() if v.startswith(".") else f".{v.lower()}" for v in values]


class ReaderSettings(BaseModel):
    id3v1_fallback: bool = True
    disabled_codecs: List[Codec] = Field(default_factory=list)


class Settings(BaseModel):
    library: LibrarySettings = LibrarySettings()
    reader: ReaderSettings = ReaderSettings()

    @classmethod
    def load(cls, path: Path) -> "Settings":
        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
        return cls.model_validate(raw or {})


def find_config(explicit_path: Optional[Path]) -> Optional[Path]:
    if explicit_path:
        if not explicit_path.exists():
            raise FileNotFoundError(f"Config file not found: {explicit_path}")
        return explicit_path
    cwd = Path.cwd()
    for candidate in (cwd / "config.yaml", cwd / "config.yml"):
        if candidate.exists():
            return candidate
    return None
