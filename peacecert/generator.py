"""Batch orchestration: one tracking identifier, one certificate per peacemaker."""

import logging
import os
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence

from PIL import Image

from .badges import draw_badge, load_badge
from .config import Settings
from .document import assemble_pdf, output_filename, write_pdf
from .errors import CertificateError
from .glyphs import GlyphRenderer
from .layout import Layout, plan_layout
from .models import CertificateKind, Peacemaker, validate_for_kind
from .templates import load_template, template_path

logger = logging.getLogger(__name__)


class CertificateState(str, Enum):
    INIT = "init"
    TEMPLATE_LOADED = "template_loaded"
    TEXT_DRAWN = "text_drawn"
    BADGES_DRAWN = "badges_drawn"
    ASSEMBLED = "assembled"
    WRITTEN = "written"
    FAILED = "failed"


@dataclass
class CertificateResult:
    participant: str
    path: str
    state: CertificateState = CertificateState.INIT
    jpeg: Optional[bytes] = field(default=None, repr=False)

    def advance(self, state: CertificateState) -> None:
        self.state = state
        logger.debug(
            "Certificate state changed",
            extra={"participant": self.participant, "state": state.value},
        )


@dataclass
class BatchResult:
    identifier: str
    kind: CertificateKind
    certificates: List[CertificateResult] = field(default_factory=list)

    @property
    def files(self) -> List[str]:
        return [c.path for c in self.certificates if c.state == CertificateState.WRITTEN]


class BatchResources:
    """
    Read-only assets shared by every certificate of one batch.

    Everything is loaded on first use so a failure surfaces while
    rendering the participant that needed it.
    """

    def __init__(self, settings: Settings, kind: CertificateKind):
        self.settings = settings
        self.kind = kind
        self._renderer: Optional[GlyphRenderer] = None
        self._templates: Dict[str, Image.Image] = {}
        self._badges: Dict[str, Image.Image] = {}

    @property
    def renderer(self) -> GlyphRenderer:
        if self._renderer is None:
            self._renderer = GlyphRenderer(self.settings.font_path)
        return self._renderer

    def canvas(self, language: str) -> Image.Image:
        """A fresh copy of the template for ``language``."""
        if language not in self._templates:
            path = template_path(self.settings.templates_dir, self.kind, language)
            self._templates[language] = load_template(path)
        return self._templates[language].copy()

    def badge(self, country_code: str) -> Image.Image:
        if country_code not in self._badges:
            self._badges[country_code] = load_badge(self.settings.flags_dir, country_code)
        return self._badges[country_code]


def render_certificate(
    resources: BatchResources,
    batch_members: Sequence[Peacemaker],
    peacemaker: Peacemaker,
    identifier: str,
    result: CertificateResult,
) -> None:
    """Run the pipeline for one peacemaker, advancing ``result`` through its states."""
    canvas = resources.canvas(peacemaker.language)
    result.advance(CertificateState.TEMPLATE_LOADED)

    layout: Layout = plan_layout(batch_members, canvas.size, identifier)

    for placement in layout.names + [layout.identifier]:
        resources.renderer.draw(canvas, placement.value, placement.x, placement.y)
    result.advance(CertificateState.TEXT_DRAWN)

    for placement in layout.badges:
        draw_badge(canvas, resources.badge(placement.value), placement.x, placement.y)
    result.advance(CertificateState.BADGES_DRAWN)

    pdf_bytes, result.jpeg = assemble_pdf(
        canvas,
        identifier,
        (layout.identifier.x, layout.identifier.y),
        resources.settings.link_domain,
        title=f"{resources.kind.template_prefix} {identifier}",
    )
    result.advance(CertificateState.ASSEMBLED)

    write_pdf(result.path, pdf_bytes)
    result.advance(CertificateState.WRITTEN)


def generate_certificates(
    kind: CertificateKind,
    peacemakers: Sequence[Peacemaker],
    settings: Settings,
    identifier: Optional[str] = None,
) -> BatchResult:
    """
    Render one certificate per peacemaker, all sharing one tracking identifier.

    The first failure aborts the batch: its participant is recorded on the
    raised error, later participants are not rendered, and files already
    written for earlier participants are left in place.
    """
    validate_for_kind(kind, list(peacemakers))

    identifier = identifier or str(uuid.uuid4())
    resources = BatchResources(settings, kind)
    batch = BatchResult(identifier=identifier, kind=kind)
    logger.info(
        "Generating certificates",
        extra={"identifier": identifier, "kind": kind.value, "count": len(peacemakers)},
    )

    for peacemaker in peacemakers:
        filename = output_filename(kind.template_prefix, peacemaker.name, peacemaker.wallet)
        result = CertificateResult(
            participant=peacemaker.name,
            path=os.path.join(settings.outcomes_dir, filename),
        )
        batch.certificates.append(result)

        try:
            render_certificate(resources, peacemakers, peacemaker, identifier, result)
        except CertificateError as err:
            result.advance(CertificateState.FAILED)
            err.participant = peacemaker.name
            logger.error(
                "Error generating certificate",
                extra={"identifier": identifier, "participant": peacemaker.name, "error": str(err)},
            )
            raise

        logger.info(
            "Certificate written",
            extra={"identifier": identifier, "participant": peacemaker.name, "path": result.path},
        )

    return batch
