"""Raw HTTP/1.x response parser.

Parses the text of a captured response (status line, headers, blank line,
body) using h11. h11 only accepts a response after a request, so a
synthetic ``GET /`` is sent first.
"""

from typing import BinaryIO

import h11

from restdocs_examples.errors import HttpResponseParseError
from restdocs_examples.parser.base import ParsedHttpResponse

CHUNK_SIZE = 64 * 1024


def parse_http_response(stream: BinaryIO) -> ParsedHttpResponse:
    """Read ``stream`` to EOF and parse it as an HTTP response.

    The body is fully materialized, so the stream can be closed as soon as
    this returns.
    """
    conn = h11.Connection(our_role=h11.CLIENT)
    conn.send(h11.Request(method="GET", target="/", headers=[("Host", "localhost")]))
    conn.send(h11.EndOfMessage())

    while True:
        chunk = stream.read(CHUNK_SIZE)
        if not chunk:
            break
        conn.receive_data(chunk)
    conn.receive_data(b"")

    return _collect(conn)


def _collect(conn: h11.Connection) -> ParsedHttpResponse:
    response: h11.Response | None = None
    body = bytearray()

    while True:
        try:
            event = conn.next_event()
        except h11.ProtocolError as e:
            raise HttpResponseParseError(f"malformed HTTP response: {e}") from e

        if event is h11.NEED_DATA or event is h11.PAUSED:
            # EOF was already signalled, so this only happens on truncated input
            raise HttpResponseParseError("incomplete HTTP response")
        if isinstance(event, h11.InformationalResponse):
            continue
        if isinstance(event, h11.Response):
            response = event
        elif isinstance(event, h11.Data):
            body += event.data
        elif isinstance(event, (h11.EndOfMessage, h11.ConnectionClosed)):
            break

    if response is None:
        raise HttpResponseParseError("no HTTP response found")

    headers = tuple(
        (name.decode("iso-8859-1"), value.decode("iso-8859-1"))
        for name, value in response.headers.raw_items()
    )
    return ParsedHttpResponse(
        status_code=response.status_code,
        headers=headers,
        body=bytes(body) or None,
    )
