from typing import Optional

# Process exit codes.
EXIT_SUCCESS = 0
EXIT_USAGE = 1
EXIT_AUTH = 10
EXIT_API_CALL = 11


class BssidListerError(Exception):
    exit_code = EXIT_USAGE


class ConfigError(BssidListerError):
    # Bad flag, environment value or settings file.
    exit_code = EXIT_USAGE


class AuthenticationError(BssidListerError):
    exit_code = EXIT_AUTH


class ApiCallError(BssidListerError):
    # Umbrella for everything that goes wrong while fetching the AP list.
    exit_code = EXIT_API_CALL


class RequestConstructionError(ApiCallError):
    pass


class TransportError(ApiCallError):
    pass


class UnexpectedStatusError(ApiCallError):
    def __init__(self, actual: int, expected: int = 200) -> None:
        super().__init__(f"got status code {actual} instead of {expected}")
        self.actual = actual
        self.expected = expected


class UnexpectedContentTypeError(ApiCallError):
    def __init__(self, actual: Optional[str], expected: str = "application/json") -> None:
        super().__init__(f"Content-Type {actual or '<none>'} returned instead of {expected}")
        self.actual = actual
        self.expected = expected


class BodyReadError(ApiCallError):
    pass


class DecodeError(ApiCallError):
    pass
