"""Failures raised by page-fetching collaborators."""


class CollaboratorError(Exception):
    """A page could not be fetched; the run stops without retrying."""


class UnexpectedLocationError(CollaboratorError):
    def __init__(self, expected: str, actual: str) -> None:
        super().__init__(f"Unexpected URL: expected {expected}, but got {actual}")
        self.expected = expected
        self.actual = actual


class MissingElementError(CollaboratorError):
    def __init__(self, selector: str) -> None:
        super().__init__(f"Expected element not found: {selector}")
        self.selector = selector


class FetchTimeoutError(CollaboratorError):
    def __init__(self, url: str, timeout: float) -> None:
        super().__init__(f"Timed out after {timeout:g}s waiting for {url}")
        self.url = url
        self.timeout = timeout
