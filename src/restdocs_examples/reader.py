"""Reads captured example responses for an operation.

Every ``<operation>*/http-response.<ext>`` file found on the search path is
parsed as a raw HTTP response. Responses sharing a status code are folded
into one ``Response``; the last one folded wins.
"""

import logging
from functools import reduce

from restdocs_examples.parser.base import (
    Example,
    ExampleResponse,
    Header,
    ParsedHttpResponse,
    Response,
)
from restdocs_examples.parser.raw_http import parse_http_response
from restdocs_examples.resources.loader import (
    DEFAULT_EXTENSION,
    Resource,
    SearchPathResolver,
    response_pattern,
)

logger = logging.getLogger(__name__)


class ExampleResponseReader:
    """Builds documented responses from captured example files."""

    def __init__(self, resolver: SearchPathResolver, extension: str = DEFAULT_EXTENSION):
        self.resolver = resolver
        self.extension = extension

    def read(self, operation_name: str) -> set[Response]:
        """Return one ``Response`` per status code captured for the operation.

        Never raises: a failure to list resources yields an empty set and an
        unreadable resource is skipped.
        """
        try:
            resources = self.resolver.get_resources(
                response_pattern(operation_name, self.extension)
            )
            parsed = [p for p in (self._parse(r) for r in resources) if p is not None]
            return set(group_by_status(parsed).values())
        except Exception as e:
            logger.warning(
                "Failed to read restdocs examples for %s caused by: %r", operation_name, e
            )
            return set()

    def _parse(self, resource: Resource) -> ParsedHttpResponse | None:
        try:
            with resource.open() as stream:
                return parse_http_response(stream)
        except Exception as e:
            logger.warning(
                "Failed to read restdocs example %s caused by: %r", resource.description, e
            )
            return None


def group_by_status(parsed: list[ParsedHttpResponse]) -> dict[str, Response]:
    """Fold parsed responses into one ``Response`` per status code, in order."""
    groups: dict[str, list[Response]] = {}
    for response in parsed:
        built = to_response(to_example_response(response))
        groups.setdefault(built.code, []).append(built)
    return {code: reduce(merge_examples, responses) for code, responses in groups.items()}


def merge_examples(left: Response, right: Response) -> Response:
    """Combine two responses with the same code.

    Not a union: the accumulated examples are replaced by those of ``right``.
    Headers stay those of ``left``.
    """
    return left.model_copy(update={"examples": right.examples})


def to_example_response(parsed: ParsedHttpResponse) -> ExampleResponse:
    return ExampleResponse(
        status_code=parsed.status_code,
        headers=parsed.headers,
        body_text=get_body(parsed),
        content_type=get_content_type(parsed),
    )


def to_response(example: ExampleResponse) -> Response:
    headers = {}
    for name, _ in example.headers:
        headers.setdefault(name.lower(), Header(name=name))
    return Response(
        code=str(example.status_code),
        headers=frozenset(headers.values()),
        examples=(Example(media_type=example.content_type, value=example.body_text),),
    )


def get_content_type(parsed: ParsedHttpResponse) -> str | None:
    return parsed.first("Content-Type")


def get_body(parsed: ParsedHttpResponse) -> str | None:
    if parsed.body is None:
        return None
    try:
        return parsed.body.decode("utf-8")
    except UnicodeDecodeError:
        logger.error("Failed to read response body", exc_info=True)
        return None
