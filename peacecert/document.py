"""Single-page PDF assembly for a composited certificate."""

import io
import os
import tempfile
from typing import Optional, Tuple

from PIL import Image
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.utils import ImageReader
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas as pdf_canvas

from .errors import AssemblyError, EncodeError, WriteError


PAGE_SIZE = landscape(A4)  # 297 x 210 mm in points
LINK_FONT = "Helvetica"
LINK_FONT_SIZE = 12.0
JPEG_QUALITY = 75
PROOF_PATH = "proofs-of-peacemaking"


def proof_url(domain: str, identifier: str) -> str:
    return f"https://{domain}/{PROOF_PATH}/{identifier}"


def output_filename(prefix: str, name: str, wallet: Optional[str] = None) -> str:
    """
    ``{prefix}_{name}_{wallet}.pdf``, or ``{prefix}_{name}.pdf`` without a wallet.
    Path separators in user-supplied parts are replaced so the file stays
    inside the output directory.
    """
    parts = [prefix, name] + ([wallet] if wallet else [])
    safe = [p.replace("/", "_").replace("\\", "_") for p in parts]
    return "_".join(safe) + ".pdf"


def encode_jpeg(img: Image.Image, quality: int = JPEG_QUALITY) -> bytes:
    buf = io.BytesIO()
    try:
        img.convert("RGB").save(buf, format="JPEG", quality=quality)
    except (OSError, ValueError) as exc:
        raise EncodeError(f"Cannot encode canvas as JPEG: {exc}") from exc
    return buf.getvalue()


def link_rect(
    anchor: Tuple[int, int],
    image_size: Tuple[int, int],
    text_width: float,
    page_size: Tuple[float, float] = PAGE_SIZE,
) -> Tuple[float, float, float, float]:
    """
    Convert a pixel anchor (top-left origin) into a PDF rectangle
    (bottom-left origin) one link-font line tall, hanging below the anchor.
    """
    page_w, page_h = page_size
    img_w, img_h = image_size
    x = anchor[0] * page_w / img_w
    top = page_h - anchor[1] * page_h / img_h
    return (x, top - LINK_FONT_SIZE, x + text_width, top)


def assemble_pdf(
    img: Image.Image,
    identifier: str,
    anchor: Tuple[int, int],
    domain: str,
    title: Optional[str] = None,
) -> Tuple[bytes, bytes]:
    """
    Build the certificate document.

    The canvas is re-encoded once as JPEG and that stream is embedded as is,
    stretched over the whole landscape A4 page. A link to the proof page
    covers the identifier text.

    Returns:
        (pdf_bytes, jpeg_bytes)
    """
    jpeg = encode_jpeg(img)
    page_w, page_h = PAGE_SIZE

    out = io.BytesIO()
    try:
        c = pdf_canvas.Canvas(out, pagesize=PAGE_SIZE)
        if title:
            c.setTitle(title)
        c.drawImage(ImageReader(io.BytesIO(jpeg)), 0, 0, width=page_w, height=page_h)

        text_width = stringWidth(identifier, LINK_FONT, LINK_FONT_SIZE)
        rect = link_rect(anchor, img.size, text_width)
        c.linkURL(proof_url(domain, identifier), rect, relative=0, thickness=0)

        c.showPage()
        c.save()
    except (OSError, ValueError, KeyError) as exc:
        raise AssemblyError(f"Cannot assemble certificate document: {exc}") from exc

    return out.getvalue(), jpeg


def write_pdf(file_path: str, data: bytes) -> None:
    """Write ``data`` to ``file_path`` atomically, replacing any existing file."""
    dir_path = os.path.dirname(file_path) or "."
    tmp_path = None
    try:
        os.makedirs(dir_path, exist_ok=True)
        with tempfile.NamedTemporaryFile("wb", dir=dir_path, suffix=".pdf.tmp", delete=False) as f:
            tmp_path = f.name
            f.write(data)
        os.replace(tmp_path, file_path)
    except (OSError, ValueError) as exc:
        raise WriteError(f"Cannot write {file_path}: {exc}") from exc
    finally:
        if tmp_path and os.path.exists(tmp_path):
            os.remove(tmp_path)
