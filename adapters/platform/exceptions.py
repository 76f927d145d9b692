"""Structured exceptions for the platform HTTP clients."""


class PlatformClientError(Exception):
    """Base exception for platform client errors."""

    code: str = "PLATFORM_CLIENT_ERROR"

    def __init__(self, message: str = ""):
        self.message = message
        super().__init__(message)


class TransportError(PlatformClientError):
    """Network or connection failure before a response arrived."""

    code: str = "TRANSPORT_ERROR"


class HttpStatusError(PlatformClientError):
    """Non-success HTTP status on a read."""

    code: str = "HTTP_STATUS_ERROR"

    def __init__(self, status_code: int, url: str):
        self.status_code = status_code
        self.url = url
        super().__init__(f"HTTP {status_code}")


class ContractError(PlatformClientError):
    """Response body does not match the endpoint's declared shape."""

    code: str = "CONTRACT_ERROR"
