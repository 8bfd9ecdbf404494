"""
Custom exception hierarchy for bckt-photo.

Per-photo failures derive from PostCreationError so the batch driver can
abandon one photo and keep going; everything else above it is either
handled where it is raised or aborts the run.
"""


class BcktPhotoError(Exception):
    """Base exception for all bckt-photo errors."""
    pass


class ConfigError(BcktPhotoError):
    """Raised when the config file cannot be parsed."""
    pass


class MetadataExtractionError(BcktPhotoError):
    """Raised when metadata cannot be decoded from a file."""
    pass


class PostCreationError(BcktPhotoError):
    """Raised when a single post cannot be written."""
    pass


class PostDirectoryError(PostCreationError):
    """Raised when the post directory cannot be created."""
    pass


class FileOperationError(PostCreationError):
    """Raised when the source image cannot be copied."""
    pass


class ThumbnailError(PostCreationError):
    """Raised when thumbnail generation fails."""
    pass


class PostWriteError(PostCreationError):
    """Raised when the front-matter document cannot be written."""
    pass


class InputPathError(BcktPhotoError):
    """Raised when the top-level input path cannot be accessed."""
    pass


class WalkError(BcktPhotoError):
    """Raised when the directory walk itself fails."""
    pass
