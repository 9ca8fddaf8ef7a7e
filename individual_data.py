"""
individual_data.py

Build the render-ready DisplayRecord of an individual: name parts,
life span label, highlight image and birth/death labels.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, Iterable, List, Optional, Tuple

from models import DisplayRecord, SourceIndividual, Sex
from names import NameDecomposer
from settings import ThumbnailSettings, get_settings
from utils import asset_url, strip_tags

log = logging.getLogger(__name__)

Translator = Callable[[str], str]

SILHOUETTE_ASSET = "images/silhouette-%s.svg"

_default_decomposer = NameDecomposer()


def _identity(message: str) -> str:
    return message


def lifetime_description(individual: SourceIndividual, translate: Optional[Translator] = None) -> str:
    """
    Create the timespan label.

    Args:
        individual: The individual
        translate: Optional lookup for the message templates

    Returns:
        "1900-1950", "Born: 1900", "Died: 1950", "Deceased" or ""
    """
    tr = translate or _identity
    birth = individual.birth_date
    death = individual.death_date

    if birth.is_ok() and death.is_ok():
        return f"{birth.min_year}-{death.min_year}"

    if birth.is_ok():
        return tr("Born: %s") % birth.min_year

    if death.is_ok():
        return tr("Died: %s") % death.min_year

    if individual.is_dead:
        return tr("Deceased")

    return ""


def individual_image(individual: SourceIndividual, thumbnail: Optional[ThumbnailSettings] = None) -> str:
    """
    Returns the URL of the highlight image of an individual.

    Sex-specific silhouettes are only used when the individual may be shown
    and the tree shows highlight images; everything else gets the generic one.

    Args:
        individual: The individual
        thumbnail: Thumbnail settings, defaults to the global settings

    Returns:
        The image URL or the silhouette asset URL
    """
    if thumbnail is None:
        thumbnail = get_settings().settings.thumbnail

    if individual.can_show and individual.tree.show_highlight_images:
        media = individual.highlight_media

        if media is not None:
            return media.image_url(thumbnail.width, thumbnail.height, thumbnail.fit)

        return asset_url(thumbnail.asset_base_url, SILHOUETTE_ASSET % Sex.normalize(individual.sex))

    return asset_url(thumbnail.asset_base_url, SILHOUETTE_ASSET % Sex.UNKNOWN)


def build_display_record(
    individual: SourceIndividual,
    generation: int,
    color: str = "",
    translate: Optional[Translator] = None,
    decomposer: Optional[NameDecomposer] = None,
    thumbnail: Optional[ThumbnailSettings] = None,
) -> DisplayRecord:
    """
    Get the individual data required to display the chart.

    Args:
        individual: The individual
        generation: The generation the person belongs to
        color: Primary box color decided by the caller
        translate: Optional lookup for the timespan message templates
        decomposer: Name decomposer to use, defaults to a shared instance
        thumbnail: Thumbnail settings, defaults to the global settings

    Returns:
        The DisplayRecord; its id is 0 and must be assigned by the caller

    Raises:
        ValueError: If generation is negative
    """
    if generation < 0:
        raise ValueError(f"Generation must not be negative, got {generation}")

    parts = (decomposer or _default_decomposer).decompose(
        individual.full_name,
        individual.full_name_flat,
        individual.alternate_name,
    )
    log.debug("Decomposed %s: first=%s last=%s", individual.xref, parts.first_names, parts.last_names)

    return DisplayRecord(
        id=0,
        identifier=individual.xref,
        view_url=individual.url,
        edit_url=individual.update_url,
        generation=generation,
        display_name=parts.display_name,
        first_names=parts.first_names,
        last_names=parts.last_names,
        preferred_name=parts.preferred_name,
        nickname=parts.nickname,
        alternative_names=parts.alternative_names,
        is_alternative_rtl=parts.is_alternative_rtl,
        thumbnail_url=individual_image(individual, thumbnail),
        sex=Sex.normalize(individual.sex),
        birth_label=strip_tags(individual.birth_date.display),
        death_label=strip_tags(individual.death_date.display),
        timespan_label=lifetime_description(individual, translate),
        color_primary=color,
        color_pair=((), ()),
    )


def build_display_records(
    entries: Iterable[Tuple[SourceIndividual, int]],
    translate: Optional[Translator] = None,
) -> List[DisplayRecord]:
    """Build records for ``(individual, generation)`` pairs, numbering ids from 1 in order."""
    decomposer = NameDecomposer()
    thumbnail = get_settings().settings.thumbnail
    records = []
    for index, (individual, generation) in enumerate(entries, start=1):
        record = build_display_record(
            individual, generation, translate=translate, decomposer=decomposer, thumbnail=thumbnail
        )
        records.append(replace(record, id=index))
    return records
