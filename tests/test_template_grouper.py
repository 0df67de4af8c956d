"""Tests for toolcards.shared.parsing.templates — entity regrouping heuristic."""

import pytest

from toolcards.shared.config import ParserConfig
from toolcards.shared.models.result import Entity
from toolcards.shared.parsing.templates import TemplateGrouper


@pytest.fixture
def grouper():
    return TemplateGrouper()


class TestIsHeading:
    @pytest.mark.parametrize("key", [
        "ROYAL PRINCE ALFRED HOSPITAL",
        "ST VINCENT HOSPITAL",
        "North Shore Clinic",
        "Sydney medical centre",
        "NORTH SHORE",
    ])
    def test_headings(self, grouper, key):
        assert grouper.is_heading(key)

    @pytest.mark.parametrize("key", [
        "surgeon",
        "Anaesthetist",
        "SURGEON",
        "Start Time",
        "",
    ])
    def test_attributes(self, grouper, key):
        assert not grouper.is_heading(key)

    def test_custom_keywords(self):
        config = ParserConfig(entity_keywords=["theatre"])
        grouper = TemplateGrouper(config)
        assert grouper.is_heading("Main Theatre")
        assert not grouper.is_heading("Royal Hospital")

    def test_min_heading_tokens(self):
        grouper = TemplateGrouper(ParserConfig(min_heading_tokens=3))
        assert not grouper.is_heading("NORTH SHORE")
        assert grouper.is_heading("NORTH SHORE PRIVATE")


class TestGroup:
    def test_two_entities(self, grouper):
        raw = (
            "- ROYAL PRINCE ALFRED HOSPITAL: Template A\n"
            "- surgeon: Dr Smith\n"
            "- ST VINCENT HOSPITAL\n"
            "- surgeon: Dr Lee"
        )
        entities = grouper.group(raw)
        assert [e.to_dict() for e in entities] == [
            {
                "title": "ROYAL PRINCE ALFRED HOSPITAL",
                "template": "Template A",
                "attributes": {"surgeon": "Dr Smith"},
            },
            {
                "title": "ST VINCENT HOSPITAL",
                "attributes": {"surgeon": "Dr Lee"},
            },
        ]

    def test_attribute_keys_normalised(self, grouper):
        raw = "- CITY CLINIC\n- Start Time: 08:00\n- Theatre  Room : 4"
        (entity,) = grouper.group(raw)
        assert dict(entity.attributes) == {"starttime": "08:00", "theatreroom": "4"}

    def test_value_keeps_later_separators(self, grouper):
        (entity,) = grouper.group("- CITY CLINIC: Slot: AM\n- time: 09:30")
        assert entity.template == "Slot: AM"
        assert entity.attributes["time"] == "09:30"

    def test_heading_with_empty_template(self, grouper):
        (entity,) = grouper.group("- CITY CLINIC:\n- surgeon: Dr Who")
        assert entity.title == "CITY CLINIC"
        assert entity.template is None

    def test_attributes_before_any_heading(self, grouper):
        entities = grouper.group("- surgeon: Dr Smith\n- CITY CLINIC\n- surgeon: Dr Lee")
        assert entities[0] == Entity(title="", attributes={"surgeon": "Dr Smith"})
        assert entities[1].title == "CITY CLINIC"

    def test_non_bullet_lines_and_bare_attributes_ignored(self, grouper):
        raw = "Templates:\n- CITY CLINIC\n- no separator here\n- surgeon: Dr Lee"
        (entity,) = grouper.group(raw)
        assert dict(entity.attributes) == {"surgeon": "Dr Lee"}

    def test_no_entities(self, grouper):
        assert grouper.group("- : nothing\nplain line") == []

    def test_heading_without_attributes_is_kept(self, grouper):
        entities = grouper.group("- NORTH SHORE PRIVATE\n- CITY CLINIC: B")
        assert [(e.title, e.template) for e in entities] == [
            ("NORTH SHORE PRIVATE", None), ("CITY CLINIC", "B"),
        ]
