"""
models.py

Data models and constants for the pedigree chart.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit


# ----------------------------
# Enumerated constants
# ----------------------------

class Sex:
    """Sex codes as delivered by the genealogy data source."""
    MALE = "M"
    FEMALE = "F"
    UNKNOWN = "U"

    ALL = (MALE, FEMALE, UNKNOWN)

    @classmethod
    def normalize(cls, value: Any) -> str:
        """Map a raw sex value onto one of the known codes, ``"U"`` if unrecognized."""
        code = str(value or "").strip().upper()[:1]
        return code if code in cls.ALL else cls.UNKNOWN


class TextDirection:
    """Text direction of the host page."""
    LTR = "ltr"
    RTL = "rtl"

    ALL = (LTR, RTL)


class LayoutOrientation:
    """Orientation the tree layout grows in."""
    LEFT_RIGHT = "left-right"
    RIGHT_LEFT = "right-left"
    TOP_BOTTOM = "top-bottom"
    BOTTOM_TOP = "bottom-top"

    ALL = (LEFT_RIGHT, RIGHT_LEFT, TOP_BOTTOM, BOTTOM_TOP)

    @classmethod
    def is_vertical(cls, layout: str) -> bool:
        return layout in (cls.TOP_BOTTOM, cls.BOTTOM_TOP)


# ----------------------------
# Source-side records
# ----------------------------

@dataclass(frozen=True)
class GenealogyDate:
    """A date as rendered by the data source.

    ``display`` is the (possibly formatted) date text; ``min_year`` is the
    earliest year the date can resolve to, or None if the date is not usable.
    """
    display: str = ""
    min_year: Optional[int] = None

    def is_ok(self) -> bool:
        return self.min_year is not None

    @classmethod
    def from_value(cls, value: Any) -> "GenealogyDate":
        if isinstance(value, GenealogyDate):
            return value
        if isinstance(value, dict):
            year = value.get("min_year", value.get("minYear"))
            return cls(display=value.get("display", ""), min_year=int(year) if year is not None else None)
        return cls()


@dataclass(frozen=True)
class MediaFile:
    """Highlighted media file of an individual."""
    url: str

    def image_url(self, width: int, height: int, fit: str) -> str:
        """URL of the image scaled into a ``width`` x ``height`` box."""
        parts = urlsplit(self.url)
        query = parse_qsl(parts.query, keep_blank_values=True)
        query.extend([("w", str(width)), ("h", str(height)), ("fit", fit)])
        return urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode(query), parts.fragment))


@dataclass(frozen=True)
class TreePreferences:
    """Tree preferences relevant to the chart."""
    show_highlight_images: bool = True


@dataclass
class SourceIndividual:
    """Raw individual as handed over by the genealogy data source.

    ``full_name`` is the formatted name markup, ``full_name_flat`` the same
    name as plain text (which may contain the ``@N.N.``/``@P.N.`` placeholders).
    """
    xref: str
    full_name: str = ""
    full_name_flat: str = ""
    alternate_name: Optional[str] = None
    url: str = ""
    update_url: str = ""
    sex: str = Sex.UNKNOWN
    birth_date: GenealogyDate = field(default_factory=GenealogyDate)
    death_date: GenealogyDate = field(default_factory=GenealogyDate)
    is_dead: bool = False
    can_show: bool = True
    highlight_media: Optional[MediaFile] = None
    tree: TreePreferences = field(default_factory=TreePreferences)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "SourceIndividual":
        """Create a SourceIndividual from a dict with camelCase or snake_case keys."""

        def pick(*keys, default=None):
            for k in keys:
                if k in d:
                    return d[k]
            return default

        media = pick("highlight_media", "highlightMedia")
        if isinstance(media, str):
            media = MediaFile(media)

        return cls(
            xref=str(pick("xref", "identifier", default="")),
            full_name=pick("full_name", "fullName", "full", default="") or "",
            full_name_flat=pick("full_name_flat", "fullNameFlat", "fullNN", default="") or "",
            alternate_name=pick("alternate_name", "alternateName"),
            url=pick("url", "view_url", "viewUrl", default="") or "",
            update_url=pick("update_url", "updateUrl", "edit_url", "editUrl", default="") or "",
            sex=Sex.normalize(pick("sex")),
            birth_date=GenealogyDate.from_value(pick("birth_date", "birthDate")),
            death_date=GenealogyDate.from_value(pick("death_date", "deathDate")),
            is_dead=bool(pick("is_dead", "isDead", default=False)),
            can_show=bool(pick("can_show", "canShow", default=True)),
            highlight_media=media,
            tree=TreePreferences(
                show_highlight_images=bool(pick("show_highlight_images", "showHighlightImages", default=True))
            ),
        )


# ----------------------------
# Render-side record
# ----------------------------

@dataclass(frozen=True)
class DisplayRecord:
    """Render-ready description of one person node in the chart."""
    id: int
    identifier: str
    view_url: str
    edit_url: str
    generation: int
    display_name: str
    first_names: Tuple[str, ...] = ()
    last_names: Tuple[str, ...] = ()
    preferred_name: str = ""
    nickname: str = ""
    alternative_names: Tuple[str, ...] = ()
    is_alternative_rtl: bool = False
    thumbnail_url: str = ""
    sex: str = Sex.UNKNOWN
    birth_label: str = ""
    death_label: str = ""
    timespan_label: str = ""
    color_primary: str = ""
    color_pair: Tuple[Tuple[str, ...], Tuple[str, ...]] = ((), ())

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the keys the chart renderer expects."""
        return {
            "id": self.id,
            "xref": self.identifier,
            "url": self.view_url,
            "updateUrl": self.edit_url,
            "generation": self.generation,
            "name": self.display_name,
            "firstNames": list(self.first_names),
            "lastNames": list(self.last_names),
            "preferredName": self.preferred_name,
            "nickname": self.nickname,
            "alternativeNames": list(self.alternative_names),
            "isAltRtl": self.is_alternative_rtl,
            "thumbnail": self.thumbnail_url,
            "sex": self.sex,
            "birth": self.birth_label,
            "death": self.death_label,
            "timespan": self.timespan_label,
            "color": self.color_primary,
            "colors": [list(self.color_pair[0]), list(self.color_pair[1])],
        }


# ----------------------------
# Chart configuration
# ----------------------------

@dataclass(frozen=True)
class ChartLabels:
    """Hint texts shown by the canvas overlay."""
    zoom: str = "Use Ctrl + scroll to zoom in the view"
    move: str = "Move the view with two fingers"


@dataclass(frozen=True)
class ChartConfiguration:
    """Read-only configuration shared by the chart components."""
    text_direction: str = TextDirection.LTR
    labels: ChartLabels = field(default_factory=ChartLabels)
    layout: str = LayoutOrientation.LEFT_RIGHT
    generations: int = 4

    def __post_init__(self):
        if self.text_direction not in TextDirection.ALL:
            raise ValueError(f"Unknown text direction: {self.text_direction!r}")
        if self.layout not in LayoutOrientation.ALL:
            raise ValueError(f"Unknown layout orientation: {self.layout!r}")
        if self.generations < 1:
            raise ValueError(f"Generation count must be positive, got {self.generations}")

    @property
    def rtl(self) -> bool:
        return self.text_direction == TextDirection.RTL

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ChartConfiguration":
        """Create a configuration from the options dict handed over by the host page.

        Recognized keys: ``textDirection``, ``labels`` (``zoom``/``zoomHint``,
        ``move``/``moveHint``), ``layoutOrientation`` (or ``treeLayout``) and
        ``generationCount`` (or ``generations``).
        """
        if not isinstance(d, dict):
            return cls()
        defaults = ChartLabels()
        raw_labels = d.get("labels") or {}
        labels = ChartLabels(
            zoom=raw_labels.get("zoom", raw_labels.get("zoomHint", defaults.zoom)),
            move=raw_labels.get("move", raw_labels.get("moveHint", defaults.move)),
        )
        if "textDirection" in d:
            direction = d["textDirection"]
        else:
            direction = TextDirection.RTL if d.get("rtl") else TextDirection.LTR
        return cls(
            text_direction=direction,
            labels=labels,
            layout=d.get("layoutOrientation", d.get("treeLayout", LayoutOrientation.LEFT_RIGHT)),
            generations=int(d.get("generationCount", d.get("generations", 4))),
        )
