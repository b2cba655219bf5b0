"""Exceptions raised by the certificate pipeline."""

from typing import Any, Dict, Optional


class CertificateError(Exception):
    """
    Base class for every failure of the rendering pipeline.

    The orchestrator sets ``participant`` before re-raising so the caller
    can name who the batch failed on.
    """

    def __init__(self, message: str, participant: Optional[str] = None):
        super().__init__(message)
        self.participant = participant

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_type": type(self).__name__,
            "participant": self.participant,
            "message": str(self),
        }


# ----------- Assets -----------

class AssetMissing(CertificateError):
    """A template, font or badge file does not exist."""

    asset = "Asset"

    def __init__(self, path: str, participant: Optional[str] = None):
        self.path = path
        super().__init__(f"{self.asset} not found: {path}", participant)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["path"] = self.path
        return data


class TemplateNotFound(AssetMissing):
    asset = "Template"


class FontNotFound(AssetMissing):
    asset = "Font"


class BadgeNotFound(AssetMissing):
    asset = "Badge"


class DecodeError(CertificateError):
    """Image or font bytes could not be parsed."""
    pass


class FontLoadError(DecodeError):
    pass


# ----------- Rendering and output -----------

class RenderError(CertificateError):
    """Drawing onto the canvas failed."""
    pass


class NilTargetError(RenderError):
    pass


class EncodeError(CertificateError):
    """The composited canvas could not be re-encoded as JPEG."""
    pass


class AssemblyError(CertificateError):
    """The PDF page or its link annotation could not be built."""
    pass


class WriteError(CertificateError):
    """The finished document could not be written to disk."""
    pass


class ValidationError(CertificateError):
    """The request does not satisfy the rules of its certificate kind."""
    pass
