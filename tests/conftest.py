"""
Shared fixtures: a throwaway asset tree (templates, flags, font) and
settings pointing at it.
"""

import os
import pathlib
import sys

import pytest
import reportlab
from PIL import Image

PROJECT_ROOT = pathlib.Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from peacecert.config import Settings
from peacecert.models import Peacemaker

TEMPLATE_SIZE = (1600, 1131)


def make_flag(path, size=(120, 60), color=(200, 0, 0, 255)):
    """Left half opaque ``color``, right half fully transparent."""
    flag = Image.new("RGBA", size, (0, 0, 0, 0))
    flag.paste(color, (0, 0, size[0] // 2, size[1]))
    flag.save(path, format="PNG")


@pytest.fixture
def font_path():
    # reportlab ships Bitstream Vera, a plain TrueType font
    return os.path.join(os.path.dirname(reportlab.__file__), "fonts", "Vera.ttf")


@pytest.fixture
def assets(tmp_path, font_path):
    templates = tmp_path / "templates"
    flags = tmp_path / "flags"
    templates.mkdir()
    flags.mkdir()

    for prefix in ("ProofOfPeacemaking", "ProofOfRecognition"):
        Image.new("RGB", TEMPLATE_SIZE, (255, 255, 255)).save(templates / f"{prefix}_en.jpg", format="JPEG")

    make_flag(flags / "US.png", color=(0, 0, 200, 255))
    make_flag(flags / "FR.png", color=(200, 0, 0, 255))
    return tmp_path


@pytest.fixture
def settings(assets, font_path):
    return Settings(
        templates_dir=str(assets / "templates"),
        flags_dir=str(assets / "flags"),
        font_path=font_path,
        outcomes_dir=str(assets / "outcomes"),
        link_domain="diplomacy.network",
    )


@pytest.fixture
def peacemakers():
    return [
        Peacemaker(name="Ada", wallet="0xA1", citizenship="US", language="en"),
        Peacemaker(name="Blaise", wallet="0xB2", citizenship="FR", language="en"),
    ]
