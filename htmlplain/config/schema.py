"""
Configuration schema for htmlplain.

Settings are loaded from a JSON file (default: ~/.htmlplain/config.json).
Every key is optional; missing keys use their default values.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

DEFAULT_CONFIG_PATH = Path.home() / ".htmlplain" / "config.json"


class ParserConfig(BaseModel):
    """Which BeautifulSoup parser builds the tree."""

    name: Literal["html.parser", "lxml"] = "html.parser"


class Settings(BaseModel):
    """Root configuration object for htmlplain."""

    parser: ParserConfig = Field(default_factory=ParserConfig)

    @classmethod
    def load(cls, path: Path = DEFAULT_CONFIG_PATH) -> Settings:
        """
        Load settings from a JSON file.

        The file is optional: if it doesn't exist, all defaults apply.
        """
        if not path.exists():
            return cls()
        data = json.loads(path.read_text(encoding="utf-8"))
        return cls.model_validate(data)

    def save(self, path: Path = DEFAULT_CONFIG_PATH) -> None:
        """Persist settings to a JSON file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            self.model_dump_json(indent=2, exclude_none=False),
            encoding="utf-8",
        )
