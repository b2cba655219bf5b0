"""Fixed placement of names, badges and the tracking identifier."""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .badges import BADGE_WIDTH
from .models import Peacemaker


NAME_ANCHORS = [(480, 600), (1120, 600)]
BADGE_MARGIN = 10
BADGE_TOP = 10
IDENTIFIER_OFFSET = 50


@dataclass
class Placement:
    value: str
    x: int
    y: int


@dataclass
class Layout:
    names: List[Placement] = field(default_factory=list)
    badges: List[Placement] = field(default_factory=list)
    identifier: Optional[Placement] = None


def plan_layout(
    peacemakers: Sequence[Peacemaker],
    canvas_size: Tuple[int, int],
    identifier: str,
) -> Layout:
    """
    Map a batch onto the template.

    Only the first two participants have slots. With a single participant
    the first name slot and the identifier are used and badges are skipped.
    """
    width, height = canvas_size
    layout = Layout(identifier=Placement(identifier, IDENTIFIER_OFFSET, height - IDENTIFIER_OFFSET))

    for peacemaker, (x, y) in zip(peacemakers, NAME_ANCHORS):
        layout.names.append(Placement(peacemaker.name, x, y))

    if len(peacemakers) > 1:
        first, second = peacemakers[0], peacemakers[1]
        layout.badges.append(Placement(first.citizenship, BADGE_MARGIN, BADGE_TOP))
        layout.badges.append(
            Placement(second.citizenship, width - BADGE_WIDTH - BADGE_MARGIN, BADGE_TOP)
        )

    return layout
