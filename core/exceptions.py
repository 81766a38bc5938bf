"""
Exception hierarchy for the processing core.

Every failure an operation can report is an ImageProcessingError carrying a
human readable message and a machine readable kind. The service layer turns
these into failed OperationResult values; nothing crosses that boundary as
an exception.
"""


class ImageProcessingError(Exception):
    """Base class for all reportable processing failures."""

    kind = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ImageReadError(ImageProcessingError):
    """Source image could not be decoded or decoded to an empty buffer."""

    kind = "io"

    def __init__(self, message: str = "Failed to read input image"):
        super().__init__(message)


class ImageWriteError(ImageProcessingError):
    """Output image could not be encoded or persisted."""

    kind = "write"

    def __init__(self, message: str = "Failed to write output image"):
        super().__init__(message)


class AllocationError(ImageProcessingError):
    """A pixel buffer could not be allocated."""

    kind = "allocation"

    def __init__(self, message: str = "Memory allocation failed"):
        super().__init__(message)


class InvalidGeometryError(ImageProcessingError):
    """Requested geometry does not fit the buffer; raised before any mutation."""

    kind = "validation"
