"""Data models for captured example responses.

The raw parser produces ``ParsedHttpResponse``; the reader turns it into an
``ExampleResponse`` and finally into a ``Response`` for the documentation
builder.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict


class ParsedHttpResponse(BaseModel):
    """A raw HTTP response read from a captured file."""

    model_config = ConfigDict(frozen=True)

    status_code: int
    headers: tuple[tuple[str, str], ...] = ()  # (name, value) as written on the wire
    body: bytes | None = None

    def get_all(self, name: str) -> list[str]:
        """Return every value of header ``name``, matched case-insensitively."""
        wanted = name.lower()
        return [value for key, value in self.headers if key.lower() == wanted]

    def first(self, name: str) -> str | None:
        values = self.get_all(name)
        return values[0] if values else None


class ExampleResponse(BaseModel):
    """A parsed example with the body already decoded."""

    model_config = ConfigDict(frozen=True)

    status_code: int
    headers: tuple[tuple[str, str], ...] = ()
    body_text: str | None = None
    content_type: str | None = None


class Header(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""
    type: Literal["string"] = "string"


class Example(BaseModel):
    model_config = ConfigDict(frozen=True)

    media_type: str | None = None
    value: str | None = None


class Response(BaseModel):
    """Examples and headers documented for one status code of an operation."""

    model_config = ConfigDict(frozen=True)

    code: str
    headers: frozenset[Header] = frozenset()
    examples: tuple[Example, ...] = ()
