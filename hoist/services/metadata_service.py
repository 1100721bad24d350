"""
Project Metadata Reader

Finds the app name of the project in a local directory.
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from hoist.constants import PROJECT_METADATA_FILES
from hoist.exceptions import MetadataError


class ProjectMetadataReader:
    """Reads hoist.yml or package.json from a project directory."""

    def __init__(self, filenames=PROJECT_METADATA_FILES):
        self.filenames = tuple(filenames)
        self.last_path: Optional[Path] = None

    def find(self, path: Union[str, Path]) -> Optional[Path]:
        """Return the first metadata file present in ``path``."""
        directory = Path(path)
        for filename in self.filenames:
            candidate = directory / filename
            if candidate.is_file():
                return candidate
        return None

    def read(self, path: Union[str, Path]) -> Dict[str, Any]:
        """
        Read project metadata.

        Args:
            path: Project directory

        Returns:
            Metadata dict with at least ``name``

        Raises:
            MetadataError: If no readable descriptor with a name exists
        """
        metadata_file = self.find(path)
        if metadata_file is None:
            raise MetadataError(
                str(path), f"Expected one of: {', '.join(self.filenames)}"
            )

        try:
            with open(metadata_file) as f:
                if metadata_file.suffix == ".json":
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f)
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise MetadataError(str(path), f"Cannot parse {metadata_file.name}: {e}")

        if not isinstance(data, dict) or not data.get("name"):
            raise MetadataError(str(path), f"{metadata_file.name} has no 'name'")

        self.last_path = metadata_file
        return data
