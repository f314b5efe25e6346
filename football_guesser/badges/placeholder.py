# football_guesser/badges/placeholder.py
import base64
import re
from xml.sax.saxutils import escape

from pydantic import BaseModel, ConfigDict

MAX_INITIALS = 3
SATURATION = 65
LIGHTNESS = 45

_TOKEN_SPLIT = re.compile(r"[\s\-]+")

SVG_TEMPLATE = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="100" height="100" viewBox="0 0 100 100">'
    '<circle cx="50" cy="50" r="46" fill="{color}" stroke="#ffffff" stroke-width="4"/>'
    '<text x="50" y="50" dy=".35em" text-anchor="middle" font-family="Arial, sans-serif" '
    'font-size="{font_size}" font-weight="bold" fill="#ffffff">{initials}</text>'
    "</svg>"
)


class PlaceholderBadge(BaseModel):
    """Synthesized badge for a team without a resolvable crest."""

    model_config = ConfigDict(frozen=True)

    initials: str
    hue: int
    svg: str

    @property
    def color(self) -> str:
        return f"hsl({self.hue}, {SATURATION}%, {LIGHTNESS}%)"

    @property
    def data_uri(self) -> str:
        encoded = base64.b64encode(self.svg.encode("utf-8")).decode("ascii")
        return f"data:image/svg+xml;base64,{encoded}"


def team_initials(name: str) -> str:
    """First letter of each word (hyphenated parts count as words), max three."""
    tokens = [token for token in _TOKEN_SPLIT.split(name.strip()) if token]
    initials = "".join(token[0] for token in tokens).upper()[:MAX_INITIALS]
    return initials or "?"


def name_hash(name: str) -> int:
    """``hash = code + ((hash << 5) - hash)`` over the name, kept in signed 32-bit range."""
    value = 0
    for char in name:
        value = (ord(char) + ((value << 5) - value)) & 0xFFFFFFFF
        if value >= 0x80000000:
            value -= 0x100000000
    return value


def name_hue(name: str) -> int:
    return abs(name_hash(name)) % 360


def synthesize_placeholder(canonical_name: str) -> PlaceholderBadge:
    """Builds the placeholder badge for a team; same name, same badge."""
    initials = team_initials(canonical_name)
    hue = name_hue(canonical_name)
    font_size = 40 if len(initials) < 3 else 32
    svg = SVG_TEMPLATE.format(
        color=f"hsl({hue}, {SATURATION}%, {LIGHTNESS}%)",
        font_size=font_size,
        initials=escape(initials),
    )
    return PlaceholderBadge(initials=initials, hue=hue, svg=svg)
