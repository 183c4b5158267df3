"""Domain-specific exceptions."""


class ServiceError(Exception):
    pass


class FetchError(ServiceError):
    """A feed request did not produce a usable result."""


class Unauthorized(FetchError):
    def __init__(self) -> None:
        super().__init__("Unauthorized: Please check your API permissions.")


class NotFound(FetchError):
    def __init__(self) -> None:
        super().__init__("Not Found: The requested resource could not be found.")


class UnexpectedStatus(FetchError):
    def __init__(self, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(f"Unexpected error: {status_code}")


class TransportError(FetchError):
    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Unexpected error: {detail}")


class MalformedResponse(FetchError):
    pass


class NavigationError(ServiceError):
    pass
