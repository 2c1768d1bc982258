from .base import AppException, ErrorCode


class MissingTargetException(AppException):
    """Raised when no URL was supplied"""

    def __init__(self):
        super().__init__(
            code=ErrorCode.MISSING_TARGET,
            message="URL parameter is required",
            status_code=400
        )


class InvalidTargetException(AppException):
    """Raised when the URL cannot be parsed even after adding a scheme"""

    def __init__(self, url: str = ""):
        super().__init__(
            code=ErrorCode.INVALID_TARGET,
            message="Invalid URL format. Please include http:// or https://",
            status_code=400,
            details={"url": url} if url else None
        )


class TargetTimeoutException(AppException):
    """Raised when the target page does not respond within the fetch bound"""

    def __init__(self, url: str = ""):
        super().__init__(
            code=ErrorCode.TARGET_TIMEOUT,
            message="Request timeout - URL took too long to respond",
            status_code=408,
            details={"url": url} if url else None
        )


class TargetUnreachableException(AppException):
    """Raised on DNS, connection or TLS failures"""

    def __init__(self, url: str = "", reason: str = ""):
        details = {"url": url} if url else {}
        if reason:
            details["reason"] = reason

        super().__init__(
            code=ErrorCode.TARGET_UNREACHABLE,
            message="Failed to connect to the URL. Please check if the URL is correct and accessible.",
            status_code=503,
            details=details
        )


class UpstreamHTTPException(AppException):
    """Raised when the target answers with a non-2xx status; the status is passed through"""

    def __init__(self, status_code: int, reason: str = "", url: str = ""):
        details = {"upstream_status": status_code, "reason": reason}
        if url:
            details["url"] = url

        super().__init__(
            code=ErrorCode.UPSTREAM_HTTP_ERROR,
            message=f"Failed to fetch URL: {reason}" if reason else f"Failed to fetch URL: HTTP {status_code}",
            status_code=status_code,
            details=details
        )


class UpstreamErrorException(AppException):
    """Raised for any other failure while fetching or reading the target"""

    def __init__(self, url: str = ""):
        super().__init__(
            code=ErrorCode.UPSTREAM_ERROR,
            message="Failed to fetch external metadata",
            status_code=500,
            details={"url": url} if url else None
        )


class ConfigNotFoundException(AppException):
    """Raised when none of the candidate layout files exist"""

    def __init__(self, candidates=()):
        locations = " or ".join(str(candidate) for candidate in candidates)
        super().__init__(
            code=ErrorCode.CONFIG_NOT_FOUND,
            message=f"Layout configuration not found in {locations}" if locations else "Layout configuration not found",
            status_code=404
        )
