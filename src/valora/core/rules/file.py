"""
File Descriptor Rules for the Valora validation engine

File rules check file metadata, never file contents. A file descriptor is any
mapping or object exposing some of:

- ``type``: MIME type, such as ``"image/png"``
- ``size``: size in bytes
- ``name``: file name, used for the extension
- ``width`` and ``height``: pixel dimensions of an image

A rule fails when the attribute it needs is missing from the descriptor.
"""

import re
from typing import Any, Iterable, Optional, Union

from ..exceptions import ConfigurationError
from ..models import MISSING, ValidationContext, read_field
from .base import ValidationRule

MIME_TYPES = {
    "image": re.compile(r"^image/(jpeg|png|gif|webp|svg\+xml)$"),
    "video": re.compile(r"^video/(mp4|webm|ogg|avi|mov)$"),
    "audio": re.compile(r"^audio/(mpeg|wav|ogg|mp3|flac)$"),
    "document": re.compile(
        r"^application/(pdf|msword|vnd\.openxmlformats-officedocument\.wordprocessingml\.document)$"
    ),
    "spreadsheet": re.compile(
        r"^application/(vnd\.ms-excel|vnd\.openxmlformats-officedocument\.spreadsheetml\.sheet)$"
    ),
    "text": re.compile(r"^text/(plain|csv|html|css|javascript)$"),
    "json": re.compile(r"^application/(json|ld\+json)$"),
    "zip": re.compile(r"^application/(zip|x-zip-compressed|x-rar-compressed|x-7z-compressed)$"),
}

DEFAULT_ASPECT_RATIO_TOLERANCE = 0.01


def _size(value: Any) -> Optional[Union[int, float]]:
    size = read_field(value, "size")
    if isinstance(size, bool) or not isinstance(size, (int, float)):
        return None
    return size


def file_extension(filename: str) -> Optional[str]:
    """Return the lower-cased extension of a file name, without the dot."""
    match = re.search(r"\.([^.]+)$", filename)
    return match.group(1).lower() if match else None


class MimeTypeRule(ValidationRule):
    """
    Rule for the MIME type of a file.

    ``allowed`` is either a collection of exact MIME types or a regular
    expression (string or compiled) matched against the whole type.
    """

    name = "mimeType"

    def __init__(self, allowed: Union[Iterable[str], str, re.Pattern], message: Optional[str] = None):
        if isinstance(allowed, re.Pattern):
            super().__init__(message, types=allowed.pattern, regex=allowed)
        elif isinstance(allowed, str):
            super().__init__(message, types=allowed, regex=re.compile(allowed))
        else:
            types = tuple(allowed)
            if not types:
                raise ConfigurationError("mime_type requires at least one allowed type")
            super().__init__(message, types=types, regex=None)

    @staticmethod
    def default_message(params) -> str:
        types = params["types"]
        if isinstance(types, tuple):
            types = ", ".join(types)
        return f"File type must be one of: {types}"

    def check(self, value: Any, context: ValidationContext) -> bool:
        mime = read_field(value, "type")
        if not isinstance(mime, str) or not mime:
            return False
        if self.regex is not None:
            return self.regex.fullmatch(mime) is not None
        return mime in self.types


class FileExtensionRule(ValidationRule):
    name = "fileExtension"
    default_message = "File extension must be one of: {extensions}"

    def __init__(self, extensions: Iterable[str], message: Optional[str] = None):
        normalized = tuple(ext.lstrip(".").lower() for ext in extensions)
        if not normalized:
            raise ConfigurationError("file_extension requires at least one extension")
        super().__init__(message, extensions=normalized)

    def check(self, value: Any, context: ValidationContext) -> bool:
        filename = read_field(value, "name")
        if not isinstance(filename, str) or not filename:
            return False
        return file_extension(filename) in self.extensions


class MinFileSizeRule(ValidationRule):
    name = "minFileSize"
    default_message = "File size must be at least {min} bytes"

    def __init__(self, min_size: int, message: Optional[str] = None):
        if min_size < 0:
            raise ConfigurationError("min_file_size must be non-negative")
        super().__init__(message, min=min_size)

    def check(self, value: Any, context: ValidationContext) -> bool:
        size = _size(value)
        return size is not None and size >= self.min


class MaxFileSizeRule(ValidationRule):
    name = "maxFileSize"
    default_message = "File size must be at most {max} bytes"

    def __init__(self, max_size: int, message: Optional[str] = None):
        if max_size < 0:
            raise ConfigurationError("max_file_size must be non-negative")
        super().__init__(message, max=max_size)

    def check(self, value: Any, context: ValidationContext) -> bool:
        size = _size(value)
        return size is not None and size <= self.max


class ImageDimensionsRule(ValidationRule):
    """
    Rule for image dimensions.

    The descriptor must carry ``width`` and ``height``. Each bound is optional.
    ``aspect_ratio`` is width divided by height; the actual ratio may differ
    from it by ``tolerance`` times the expected ratio.
    """

    name = "imageDimensions"
    default_message = "Image dimensions are not allowed"

    def __init__(
        self,
        min_width: Optional[int] = None,
        max_width: Optional[int] = None,
        min_height: Optional[int] = None,
        max_height: Optional[int] = None,
        aspect_ratio: Optional[float] = None,
        tolerance: float = DEFAULT_ASPECT_RATIO_TOLERANCE,
        message: Optional[str] = None,
    ):
        if aspect_ratio is not None and aspect_ratio <= 0:
            raise ConfigurationError("aspect_ratio must be positive")
        super().__init__(
            message,
            min_width=min_width,
            max_width=max_width,
            min_height=min_height,
            max_height=max_height,
            aspect_ratio=aspect_ratio,
            tolerance=tolerance,
        )

    def check(self, value: Any, context: ValidationContext) -> bool:
        width = read_field(value, "width")
        height = read_field(value, "height")
        for dimension in (width, height):
            if isinstance(dimension, bool) or not isinstance(dimension, (int, float)):
                return False
        if self.min_width is not None and width < self.min_width:
            return False
        if self.max_width is not None and width > self.max_width:
            return False
        if self.min_height is not None and height < self.min_height:
            return False
        if self.max_height is not None and height > self.max_height:
            return False
        if self.aspect_ratio is not None:
            if height == 0:
                return False
            return abs(width / height - self.aspect_ratio) <= self.tolerance * self.aspect_ratio
        return True


def mime_type(allowed: Union[Iterable[str], str, re.Pattern], message: Optional[str] = None) -> MimeTypeRule:
    return MimeTypeRule(allowed, message)


def file_extension_in(extensions: Iterable[str], message: Optional[str] = None) -> FileExtensionRule:
    return FileExtensionRule(extensions, message)


def min_file_size(min_size: int, message: Optional[str] = None) -> MinFileSizeRule:
    return MinFileSizeRule(min_size, message)


def max_file_size(max_size: int, message: Optional[str] = None) -> MaxFileSizeRule:
    return MaxFileSizeRule(max_size, message)


def image_dimensions(
    min_width: Optional[int] = None,
    max_width: Optional[int] = None,
    min_height: Optional[int] = None,
    max_height: Optional[int] = None,
    aspect_ratio: Optional[float] = None,
    tolerance: float = DEFAULT_ASPECT_RATIO_TOLERANCE,
    message: Optional[str] = None,
) -> ImageDimensionsRule:
    return ImageDimensionsRule(min_width, max_width, min_height, max_height, aspect_ratio, tolerance, message)
