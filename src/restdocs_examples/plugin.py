"""Operation builder plugin that adds captured example responses."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Protocol

from pydantic import BaseModel, ConfigDict

from restdocs_examples.parser.base import Response
from restdocs_examples.reader import ExampleResponseReader

HIGHEST_PRECEDENCE = -(2**31)


class DocumentationType(str, Enum):
    SWAGGER_12 = "swagger_1.2"
    SWAGGER_2 = "swagger_2.0"
    OAS_30 = "openapi_3.0"


class Operation(BaseModel):
    """A documented operation as assembled by ``OperationBuilder``."""

    model_config = ConfigDict(frozen=True)

    name: str
    responses: tuple[Response, ...] = ()


class OperationBuilder:
    """Collects responses for one operation; a newer response replaces an older one with the same code."""

    def __init__(self, name: str):
        self.name = name
        self._responses: dict[str, Response] = {}

    def responses(self, responses: Iterable[Response]) -> "OperationBuilder":
        for response in responses:
            self._responses[response.code] = response
        return self

    def build(self) -> Operation:
        ordered = sorted(self._responses.values(), key=lambda r: r.code)
        return Operation(name=self.name, responses=tuple(ordered))


@dataclass
class OperationContext:
    name: str
    operation_builder: OperationBuilder = field(init=False)

    def __post_init__(self):
        self.operation_builder = OperationBuilder(self.name)


class OperationBuilderPlugin(Protocol):
    order: int

    def apply(self, context: OperationContext) -> None: ...

    def supports(self, documentation_type: DocumentationType) -> bool: ...


class RestDocsOperationBuilderPlugin:
    """Adds example responses recorded by REST Docs to each operation."""

    order = HIGHEST_PRECEDENCE + 1000

    SUPPORTED = frozenset(
        {DocumentationType.SWAGGER_12, DocumentationType.SWAGGER_2, DocumentationType.OAS_30}
    )

    def __init__(self, reader: ExampleResponseReader):
        self.reader = reader

    def apply(self, context: OperationContext) -> None:
        context.operation_builder.responses(self.reader.read(context.name))

    def supports(self, documentation_type: DocumentationType) -> bool:
        return documentation_type in self.SUPPORTED


def apply_plugins(
    context: OperationContext,
    plugins: Iterable[OperationBuilderPlugin],
    documentation_type: DocumentationType,
) -> Operation:
    """Run every plugin supporting ``documentation_type``, lowest order first."""
    for plugin in sorted(plugins, key=lambda p: p.order):
        if plugin.supports(documentation_type):
            plugin.apply(context)
    return context.operation_builder.build()
