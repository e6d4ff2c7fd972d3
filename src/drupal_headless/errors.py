"""Exception hierarchy for the Drupal headless client.

Structural and security failures (bad configuration, cross-origin links,
unsupported schemes, failed or malformed feed responses, runaway
pagination) are raised as subclasses of ``DrupalHeadlessError`` and always
propagate to the caller. Per-item data-quality problems (a malformed route
entry, an unresolved relationship, an unsupported media bundle) are never
raised -- they are absorbed where they occur.
"""

from __future__ import annotations


class DrupalHeadlessError(Exception):
    """Base class for every error raised by this package."""


class ConfigError(DrupalHeadlessError):
    """The base origin is missing or not an absolute http(s) URL."""


class OriginMismatchError(DrupalHeadlessError):
    """A URL resolved to a different origin than the configured base.

    Args:
        url: The offending resolved URL.
        origin: Origin of the offending URL.
        expected: Origin of the configured base.
    """

    def __init__(self, url: str, origin: str, expected: str) -> None:
        self.url = url
        self.origin = origin
        self.expected = expected
        super().__init__(
            f"Refusing to fetch a URL from a different origin ({origin}) "
            f"than base ({expected})"
        )


class UnsupportedSchemeError(DrupalHeadlessError):
    """A URL resolved to a scheme other than http or https."""

    def __init__(self, scheme: str) -> None:
        self.scheme = scheme
        super().__init__(
            f'Unsupported URL protocol "{scheme}:" (expected http/https)'
        )


class RequestFailedError(DrupalHeadlessError):
    """The CMS answered with a non-success HTTP status.

    Args:
        status: HTTP status code.
        status_text: HTTP reason phrase.
        url: The requested URL (never carries credentials).
    """

    label = "Request"

    def __init__(self, status: int, status_text: str, url: str | None = None) -> None:
        self.status = status
        self.status_text = status_text
        self.url = url
        super().__init__(f"{self.label} failed: {status} {status_text}")


class FeedRequestError(RequestFailedError):
    """The routes feed answered with a non-success HTTP status."""

    label = "Routes feed"


class FeedFormatError(DrupalHeadlessError):
    """A response body is not a well-formed document."""


class PaginationOverrunError(DrupalHeadlessError):
    """More pages were traversed than the configured ceiling allows."""

    def __init__(self, max_pages: int) -> None:
        self.max_pages = max_pages
        super().__init__(
            f"Routes feed exceeded max_pages={max_pages}; aborting pagination"
        )
