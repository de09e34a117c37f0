"""Exceptions raised by restdocs-examples."""


class RestDocsExamplesError(Exception):
    """Base class for all errors raised by this package."""


class ResourceEnumerationError(RestDocsExamplesError):
    """Listing resources for a pattern failed."""


class HttpResponseParseError(RestDocsExamplesError):
    """A captured file is not a valid HTTP/1.x response."""


class UnsupportedDocumentError(RestDocsExamplesError):
    """The API document dialect cannot receive examples."""
