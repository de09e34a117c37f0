"""Reader settings, with overrides from the environment."""

import os
from importlib.resources import files
from pathlib import Path

from pydantic import BaseModel

from restdocs_examples.reader import ExampleResponseReader
from restdocs_examples.resources.loader import DEFAULT_EXTENSION, SearchPathResolver

PATH_ENV = "RESTDOCS_EXAMPLES_PATH"
EXTENSION_ENV = "RESTDOCS_EXAMPLES_EXTENSION"


class ReaderSettings(BaseModel):
    search_path: list[Path] = [Path(".")]
    extension: str = DEFAULT_EXTENSION
    packages: list[str] = []  # searched after search_path, via importlib.resources

    @classmethod
    def from_env(cls) -> "ReaderSettings":
        """Build settings from ``RESTDOCS_EXAMPLES_PATH`` / ``RESTDOCS_EXAMPLES_EXTENSION``."""
        values = {}
        raw_path = os.getenv(PATH_ENV, "")
        if raw_path:
            values["search_path"] = [Path(p) for p in raw_path.split(os.pathsep) if p]
        extension = os.getenv(EXTENSION_ENV)
        if extension:
            values["extension"] = extension
        return cls(**values)

    def create_reader(self) -> ExampleResponseReader:
        roots = [*self.search_path, *(files(package) for package in self.packages)]
        return ExampleResponseReader(SearchPathResolver(roots), extension=self.extension)
