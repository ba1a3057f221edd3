from dataclasses import dataclass
from pathlib import Path
from typing import Union


@dataclass
class GenerationResult:
    """A file (or .icon folder) written by a generator, for logging and reporting."""

    file_path: Union[str, Path]
    width: int
    height: int
    size: int


@dataclass(frozen=True)
class VariantFlags:
    android: bool = False
    favicon: bool = False
    splash: bool = False
    icon: bool = False

    def any_set(self) -> bool:
        return self.android or self.favicon or self.splash or self.icon
