from __future__ import annotations

from pathlib import Path


class BuildError(Exception):
    pass


class PostDateError(BuildError):
    def __init__(self, path: Path, value: str) -> None:
        super().__init__(f"Invalid date prefix {value!r} in post filename: {path}")
        self.path = path
        self.value = value


class TitleMissingError(BuildError):
    def __init__(self, path: Path) -> None:
        super().__init__(f"Failed to get title for {path}")
        self.path = path


class RenderError(BuildError):
    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f"Failed to render template {name}: {reason}")
        self.name = name
