"""
Configuration management for Docu.

Search roots come from the GOROOT and GOPATH environment variables (or a
.env file). Settings are loaded once, explicitly, by the program entry
point and handed to Docu as a SearchRoots value; library code never reads
the environment itself.
"""

import os
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from docu.paths import SearchRoots


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Language install root
    goroot: str = Field(default="", alias="GOROOT")

    # Workspace roots, os.pathsep separated
    gopath: str = Field(default="", alias="GOPATH")

    def gopaths(self) -> List[str]:
        return [p for p in self.gopath.split(os.pathsep) if p]

    def search_roots(self) -> SearchRoots:
        return SearchRoots(goroot=self.goroot, gopaths=tuple(self.gopaths()))


def load_settings(**overrides) -> Settings:
    """Build Settings from the environment, with keyword overrides taking precedence."""
    return Settings(**overrides)
