"""Error types for Folio.

Every error raised by the pipeline is fatal to the build. Per-file errors carry
the offending source path so the author can find and fix the document.

Classes:
    FolioError: Base class for all Folio errors.
    ConfigError: Invalid folio.yaml contents.
    ContentError: Base class for errors tied to one source file.
    MalformedDocumentError: Missing or unparseable front matter block.
    MissingIdentifierError: Filename does not encode a date and slug.
    ValidationError: A front matter field failed validation.
    DuplicateIdentifierError: Two documents resolve to the same identifier.
    DuplicateUrlError: Two pages resolve to the same output URL.
"""

from __future__ import annotations

from pathlib import Path


class FolioError(Exception):
    """Base class for all Folio errors."""


class ConfigError(FolioError):
    """Raised when folio.yaml holds an invalid value."""


class ContentError(FolioError):
    """Error tied to a single source file.

    Attributes:
        source_path: Path to the source file that caused the error.
        message: Human-readable error message.
    """

    def __init__(self, source_path: Path, message: str):
        self.source_path = source_path
        self.message = message
        super().__init__(f"{source_path}: {message}")


class MalformedDocumentError(ContentError):
    """Raised when a source file has no usable front matter block."""


class MissingIdentifierError(ContentError):
    """Raised when a filename does not start with YYYY-MM-DD- and a slug."""


class ValidationError(ContentError):
    """Raised when a front matter field is missing or has the wrong type.

    Attributes:
        field: Name of the offending front matter key.
    """

    def __init__(self, source_path: Path, field: str, message: str):
        self.field = field
        super().__init__(source_path, f"{field}: {message}")


class DuplicateIdentifierError(ContentError):
    """Raised when two source files normalize to the same identifier.

    Attributes:
        identifier: The identifier both files resolve to.
        first_path: Source file that claimed the identifier first.
    """

    def __init__(self, identifier: str, first_path: Path, second_path: Path):
        self.identifier = identifier
        self.first_path = first_path
        super().__init__(
            second_path,
            f"identifier '{identifier}' is already used by {first_path}",
        )


class DuplicateUrlError(ContentError):
    """Raised when two render targets resolve to the same output URL.

    Attributes:
        url: The contested output URL.
        first_path: Source file behind the page that claimed the URL first.
    """

    def __init__(self, url: str, first_path: Path, second_path: Path):
        self.url = url
        self.first_path = first_path
        super().__init__(second_path, f"URL '{url}' is already used by {first_path}")
