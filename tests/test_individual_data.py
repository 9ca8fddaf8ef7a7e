"""
tests/test_individual_data.py

Display record building: timespan labels, highlight images and the
record itself.
"""

from __future__ import annotations

import pytest

from individual_data import build_display_record, build_display_records, individual_image, lifetime_description
from models import (
    ChartConfiguration,
    GenealogyDate,
    LayoutOrientation,
    MediaFile,
    SourceIndividual,
    Sex,
    TextDirection,
    TreePreferences,
)
from settings import ThumbnailSettings


def _person(**kwargs) -> SourceIndividual:
    kwargs.setdefault("xref", "I1")
    return SourceIndividual(**kwargs)


# ─────────────────────────────────────────────────────────
# Timespan label
# ─────────────────────────────────────────────────────────

class TestLifetimeDescription:
    def test_birth_and_death(self):
        p = _person(birth_date=GenealogyDate("1900", 1900), death_date=GenealogyDate("1950", 1950))
        assert lifetime_description(p) == "1900-1950"

    def test_birth_only(self):
        p = _person(birth_date=GenealogyDate("1900", 1900))
        assert lifetime_description(p) == "Born: 1900"

    def test_death_only(self):
        p = _person(death_date=GenealogyDate("about 1950", 1950), is_dead=True)
        assert lifetime_description(p) == "Died: 1950"

    def test_deceased_without_dates(self):
        assert lifetime_description(_person(is_dead=True)) == "Deceased"

    def test_living_without_dates(self):
        assert lifetime_description(_person(is_dead=False)) == ""

    def test_unresolvable_date_is_ignored(self):
        p = _person(birth_date=GenealogyDate("unknown", None), is_dead=True)
        assert lifetime_description(p) == "Deceased"

    def test_translation(self):
        messages = {"Born: %s": "Geboren: %s"}
        p = _person(birth_date=GenealogyDate("1900", 1900))
        assert lifetime_description(p, lambda m: messages.get(m, m)) == "Geboren: 1900"


# ─────────────────────────────────────────────────────────
# Highlight image
# ─────────────────────────────────────────────────────────

class TestIndividualImage:
    def test_media_url_when_visible_and_enabled(self):
        p = _person(highlight_media=MediaFile("https://example.org/media/1.jpg"))
        url = individual_image(p, ThumbnailSettings())
        assert url == "https://example.org/media/1.jpg?w=250&h=250&fit=contain"

    def test_media_url_keeps_existing_query(self):
        p = _person(highlight_media=MediaFile("https://example.org/media?id=7"))
        url = individual_image(p, ThumbnailSettings(width=100, height=80))
        assert url == "https://example.org/media?id=7&w=100&h=80&fit=contain"

    def test_sex_specific_silhouette_without_media(self):
        p = _person(sex=Sex.MALE)
        assert individual_image(p, ThumbnailSettings()) == "images/silhouette-M.svg"

    def test_generic_silhouette_when_not_visible(self):
        p = _person(sex=Sex.FEMALE, can_show=False, highlight_media=MediaFile("https://example.org/1.jpg"))
        assert individual_image(p, ThumbnailSettings()) == "images/silhouette-U.svg"

    def test_generic_silhouette_when_preference_disabled(self):
        p = _person(sex=Sex.FEMALE, tree=TreePreferences(show_highlight_images=False))
        assert individual_image(p, ThumbnailSettings()) == "images/silhouette-U.svg"

    def test_asset_base_url(self):
        p = _person(sex=Sex.FEMALE)
        url = individual_image(p, ThumbnailSettings(asset_base_url="/modules/pedigree/"))
        assert url == "/modules/pedigree/images/silhouette-F.svg"

    def test_uses_global_settings_by_default(self, isolated_settings):
        isolated_settings.settings.thumbnail.asset_base_url = "/assets"
        assert individual_image(_person(can_show=False)) == "/assets/images/silhouette-U.svg"


# ─────────────────────────────────────────────────────────
# Display record
# ─────────────────────────────────────────────────────────

class TestBuildDisplayRecord:
    def _individual(self) -> SourceIndividual:
        return SourceIndividual(
            xref="I42",
            full_name='<span class="NAME">John <span class="starredname">Paul</span> <span class="SURN">Smith</span></span>',
            full_name_flat="John Paul Smith",
            alternate_name='<span class="NAME">יוחנן סמית</span>',
            url="/tree/demo/individual/I42",
            update_url="/tree/demo/edit/I42",
            sex="m",
            birth_date=GenealogyDate('<span class="date">1 January 1900</span>', 1900),
            death_date=GenealogyDate('<span class="date">1950</span>', 1950),
            is_dead=True,
        )

    def test_record_fields(self):
        record = build_display_record(self._individual(), 2, color="#abcdef", thumbnail=ThumbnailSettings())
        assert record.id == 0
        assert record.identifier == "I42"
        assert record.view_url == "/tree/demo/individual/I42"
        assert record.edit_url == "/tree/demo/edit/I42"
        assert record.generation == 2
        assert record.display_name == "John Paul Smith"
        assert record.first_names == ("John", "Paul")
        assert record.last_names == ("Smith",)
        assert record.preferred_name == "Paul"
        assert record.alternative_names == ("יוחנן", "סמית")
        assert record.is_alternative_rtl is True
        assert record.thumbnail_url == "images/silhouette-M.svg"
        assert record.sex == "M"
        assert record.birth_label == "1 January 1900"
        assert record.death_label == "1950"
        assert record.timespan_label == "1900-1950"
        assert record.color_primary == "#abcdef"
        assert record.color_pair == ((), ())

    def test_to_dict(self):
        data = build_display_record(self._individual(), 1, thumbnail=ThumbnailSettings()).to_dict()
        assert data["xref"] == "I42"
        assert data["name"] == "John Paul Smith"
        assert data["firstNames"] == ["John", "Paul"]
        assert data["isAltRtl"] is True
        assert data["colors"] == [[], []]
        assert data["updateUrl"] == "/tree/demo/edit/I42"

    def test_record_is_immutable(self):
        record = build_display_record(self._individual(), 1, thumbnail=ThumbnailSettings())
        with pytest.raises(AttributeError):
            record.generation = 3

    def test_empty_names(self):
        record = build_display_record(_person(), 0, thumbnail=ThumbnailSettings())
        assert record.display_name == ""
        assert record.first_names == ()
        assert record.last_names == ()
        assert record.birth_label == ""

    def test_negative_generation_rejected(self):
        with pytest.raises(ValueError):
            build_display_record(_person(), -1)

    def test_build_many_numbers_ids(self):
        records = build_display_records([(_person(xref="I1"), 1), (_person(xref="I2"), 2)])
        assert [r.id for r in records] == [1, 2]
        assert [r.identifier for r in records] == ["I1", "I2"]


# ─────────────────────────────────────────────────────────
# Source and configuration parsing
# ─────────────────────────────────────────────────────────

class TestFromDict:
    def test_source_individual_camel_case(self):
        p = SourceIndividual.from_dict({
            "xref": "I7",
            "fullName": '<span class="SURN">Doe</span>',
            "fullNN": "Doe",
            "sex": "female",
            "birthDate": {"display": "1901", "minYear": 1901},
            "canShow": False,
            "highlightMedia": "https://example.org/7.jpg",
            "showHighlightImages": False,
        })
        assert p.xref == "I7"
        assert p.sex == Sex.FEMALE
        assert p.birth_date.min_year == 1901
        assert p.death_date.is_ok() is False
        assert p.can_show is False
        assert p.highlight_media == MediaFile("https://example.org/7.jpg")
        assert p.tree.show_highlight_images is False

    def test_unknown_sex_normalized(self):
        assert SourceIndividual.from_dict({"xref": "I1", "sex": "X"}).sex == Sex.UNKNOWN

    def test_chart_configuration(self):
        cfg = ChartConfiguration.from_dict({
            "textDirection": "rtl",
            "labels": {"zoomHint": "Zoom!", "moveHint": "Move!"},
            "layoutOrientation": "top-bottom",
            "generationCount": 6,
        })
        assert cfg.rtl is True
        assert cfg.labels.zoom == "Zoom!"
        assert cfg.labels.move == "Move!"
        assert cfg.layout == LayoutOrientation.TOP_BOTTOM
        assert LayoutOrientation.is_vertical(cfg.layout)
        assert cfg.generations == 6

    def test_chart_configuration_defaults(self):
        cfg = ChartConfiguration.from_dict({})
        assert cfg.text_direction == TextDirection.LTR
        assert cfg.rtl is False

    def test_invalid_direction(self):
        with pytest.raises(ValueError):
            ChartConfiguration(text_direction="up")

    def test_invalid_layout(self):
        with pytest.raises(ValueError):
            ChartConfiguration.from_dict({"layoutOrientation": "diagonal"})
