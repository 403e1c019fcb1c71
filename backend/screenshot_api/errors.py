"""
Errors raised while handling a screenshot request
"""


class ScreenshotError(Exception):
    """Base class for every error the API turns into a 400 response"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ScreenshotError):
    """The request is missing a field or carries a malformed URL"""


class UnsupportedFormatError(ScreenshotError):
    """The requested output format is not one of jpg, png or pdf"""

    def __init__(self, message: str = "Invalid format. Supported formats: jpg, png, pdf"):
        super().__init__(message)


class CaptureError(ScreenshotError):
    """Browser launch, navigation or writing the artifact failed"""
