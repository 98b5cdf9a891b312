"""
Filesystem locations used around AST conversion.

Everything lives below one base directory (the working directory by
default): cloned repositories, intermediate serialized ASTs, the
project-sequence folder and the source mappings file.
"""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class ProjectPaths:
    """Resolves the working locations below base_dir."""
    base_dir: Path = field(default_factory=Path.cwd)

    @property
    def repositories(self) -> Path:
        """Folder holding cloned repositories."""
        return self.base_dir / "repositories"

    @property
    def changed_files(self) -> Path:
        """Folder holding intermediate serialized ASTs of changed files."""
        return self.base_dir / "files"

    @property
    def projects(self) -> Path:
        """Folder holding the persisted project sequence."""
        return self.base_dir / "projects"

    @property
    def source_mappings(self) -> Path:
        return self.base_dir / "source.mappings"
