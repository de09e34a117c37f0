"""Writes example responses into Swagger 2.0 / OpenAPI 3.x documents."""

from typing import Iterator

from restdocs_examples.errors import UnsupportedDocumentError
from restdocs_examples.parser.base import Response
from restdocs_examples.plugin import (
    DocumentationType,
    OperationBuilderPlugin,
    OperationContext,
    apply_plugins,
)

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch")

ANY_MEDIA_TYPE = "*/*"


def detect_dialect(doc: dict) -> DocumentationType | None:
    """Detect which documentation type an API document is written in."""
    if not isinstance(doc, dict):
        return None
    if str(doc.get("openapi", "")).startswith("3"):
        return DocumentationType.OAS_30
    if str(doc.get("swagger", "")).startswith("2"):
        return DocumentationType.SWAGGER_2
    if "swaggerVersion" in doc:
        return DocumentationType.SWAGGER_12
    return None


def iter_operations(doc: dict) -> Iterator[tuple[str, str, dict]]:
    """Yield ``(path, method, operation)`` for every operation in the document."""
    for path, methods in (doc.get("paths") or {}).items():
        for method, operation in (methods or {}).items():
            if method.lower() not in HTTP_METHODS or not isinstance(operation, dict):
                continue
            yield path, method.lower(), operation


def apply_examples(doc: dict, plugins: list[OperationBuilderPlugin]) -> int:
    """Add example responses to every operation with an ``operationId``.

    Modifies ``doc`` in place and returns the number of operations that
    received at least one response.
    """
    dialect = detect_dialect(doc)
    if dialect not in (DocumentationType.SWAGGER_2, DocumentationType.OAS_30):
        raise UnsupportedDocumentError(
            f"cannot add examples to document of type {dialect.value if dialect else 'unknown'}"
        )

    enriched = 0
    for _, _, operation in iter_operations(doc):
        operation_id = operation.get("operationId")
        if not operation_id:
            continue

        built = apply_plugins(OperationContext(operation_id), plugins, dialect)
        if not built.responses:
            continue

        responses = operation.get("responses") or {}
        operation["responses"] = responses
        for response in built.responses:
            existing = responses.get(response.code) or responses.get(_as_int(response.code)) or {}
            responses.pop(_as_int(response.code), None)
            responses[response.code] = _render(response, existing, dialect)
        enriched += 1

    return enriched


def _render(response: Response, existing: dict, dialect: DocumentationType) -> dict:
    rendered = dict(existing)
    rendered.setdefault("description", "")

    headers = dict(rendered.get("headers") or {})
    for header in sorted(response.headers, key=lambda h: h.name):
        if dialect is DocumentationType.OAS_30:
            headers[header.name] = {"description": header.description, "schema": {"type": header.type}}
        else:
            headers[header.name] = {"description": header.description, "type": header.type}
    if headers:
        rendered["headers"] = headers

    if dialect is DocumentationType.OAS_30:
        content = dict(rendered.get("content") or {})
        for example in response.examples:
            media_type = example.media_type or ANY_MEDIA_TYPE
            content[media_type] = {**(content.get(media_type) or {}), "example": example.value}
        rendered["content"] = content
    else:
        examples = dict(rendered.get("examples") or {})
        for example in response.examples:
            examples[example.media_type or ANY_MEDIA_TYPE] = example.value
        rendered["examples"] = examples

    return rendered


def _as_int(code: str) -> int | str:
    # YAML loads unquoted response codes as integers
    return int(code) if code.isdigit() else code
