"""Exception hierarchy for charrom."""


class CharRomError(Exception):
    """Base exception for all charrom errors."""

    pass


class ShareError(CharRomError):
    """Errors related to share tokens."""

    pass


class ShareDecodeError(ShareError):
    """A share token could not be decoded."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Failed to decode shared character set: {reason}")


class RomFileError(CharRomError):
    """Errors related to reading or writing raw ROM files."""

    pass


class RomLoadError(RomFileError):
    """Error loading a ROM file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load ROM '{path}': {reason}")


class RomSaveError(RomFileError):
    """Error saving a ROM file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save ROM '{path}': {reason}")


class FontError(CharRomError):
    """Errors related to vector font import."""

    pass


class FontLoadError(FontError):
    """Error loading a font file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load font '{path}': {reason}")


class TextImportError(CharRomError):
    """Pasted text held no usable byte values."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Failed to import text: {reason}")


class ImageError(CharRomError):
    """Errors related to bitmap image import."""

    pass


class ImageLoadError(ImageError):
    """Error loading an image file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load image '{path}': {reason}")
