"""Template lookup and decoding."""

import os

from PIL import Image, UnidentifiedImageError

from .errors import DecodeError, TemplateNotFound
from .models import CertificateKind


def template_path(templates_dir: str, kind: CertificateKind, language: str) -> str:
    return os.path.join(templates_dir, f"{kind.template_prefix}_{language}.jpg")


def load_template(path: str) -> Image.Image:
    """
    Open a JPEG template and return it as a fully opaque RGBA canvas
    of the same pixel size.
    """
    if not os.path.isfile(path):
        raise TemplateNotFound(path)

    try:
        with Image.open(path) as img:
            return img.convert("RGBA")
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as exc:
        raise DecodeError(f"Cannot decode template {path}: {exc}") from exc
