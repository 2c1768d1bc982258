from .base import AppException, ErrorCode


class UploadForbiddenException(AppException):
    """Raised when uploads are attempted outside development mode"""

    def __init__(self):
        super().__init__(
            code=ErrorCode.FORBIDDEN,
            message="This API is only available in development mode",
            status_code=403
        )


class MissingUploadException(AppException):
    """Raised when the multipart request carries no file"""

    def __init__(self):
        super().__init__(
            code=ErrorCode.VALIDATION_ERROR,
            message="No file provided",
            status_code=400
        )


class UploadFailedException(AppException):
    """Raised when the uploaded file cannot be written to the asset store"""

    def __init__(self, filename: str = "", reason: str = ""):
        details = {"filename": filename} if filename else {}
        if reason:
            details["reason"] = reason

        super().__init__(
            code=ErrorCode.UPLOAD_FAILED,
            message="Failed to upload image",
            status_code=500,
            details=details
        )
