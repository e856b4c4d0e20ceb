from typing import Optional


class ObjectDetectionError(Exception):
    """Base class for errors shown to the user"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UploadError(ObjectDetectionError):
    pass


class InvalidUploadError(UploadError):
    def __init__(self, message: str = "Please upload a valid image file."):
        super().__init__(message)


class FileReadError(UploadError):
    def __init__(self, message: str = "Error reading the file."):
        super().__init__(message)


class DetectionAPIError(ObjectDetectionError):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
