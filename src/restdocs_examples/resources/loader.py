"""Resource discovery for captured example responses.

Resources are looked up across a search path of directories, the same way a
``classpath*:`` lookup walks every classpath root. Roots may be filesystem
directories or package resource directories from ``importlib.resources``.
"""

import fnmatch
import logging
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import BinaryIO, Iterable

from restdocs_examples.errors import ResourceEnumerationError

logger = logging.getLogger(__name__)

RESPONSE_FILENAME = "http-response"
DEFAULT_EXTENSION = "springfox"


def response_pattern(operation_name: str, extension: str = DEFAULT_EXTENSION) -> str:
    """Pattern matching every captured response for an operation."""
    return f"{operation_name}*/{RESPONSE_FILENAME}.{extension}"


class Resource:
    """A readable file found on the search path."""

    def __init__(self, location: Path | Traversable):
        self.location = location

    @property
    def filename(self) -> str:
        return self.location.name

    @property
    def description(self) -> str:
        return str(self.location)

    def open(self) -> BinaryIO:
        return self.location.open("rb")

    def __repr__(self) -> str:
        return f"Resource({self.description!r})"


class SearchPathResolver:
    """Resolves glob-style patterns against an ordered list of roots."""

    def __init__(self, roots: Iterable[Path | Traversable]):
        self.roots = list(roots)

    def get_resources(self, pattern: str) -> list[Resource]:
        """Return every file matching ``pattern`` under any root.

        Roots are searched in order; matches within a root are sorted by path.
        """
        segments = [s for s in pattern.strip("/").split("/") if s]
        if not segments:
            raise ResourceEnumerationError(f"empty resource pattern: {pattern!r}")

        resources = []
        for root in self.roots:
            try:
                if not root.is_dir():
                    continue
                matches = _match(root, segments)
            except OSError as e:
                raise ResourceEnumerationError(f"cannot list {root}: {e}") from e
            resources.extend(Resource(m) for m in matches)

        logger.debug("Pattern %s matched %d resources", pattern, len(resources))
        return resources


def _match(directory: Path | Traversable, segments: list[str]) -> list[Path | Traversable]:
    head, rest = segments[0], segments[1:]
    children = sorted(directory.iterdir(), key=lambda child: child.name)

    result = []
    for child in children:
        if not fnmatch.fnmatchcase(child.name, head):
            continue
        if rest:
            if child.is_dir():
                result.extend(_match(child, rest))
        elif child.is_file():
            result.append(child)
    return result
