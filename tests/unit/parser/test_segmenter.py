"""Tests for deterministic scene segmentation."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from scriptboard.parser import SceneDraft, is_scene_heading, segment

heading_text = st.sampled_from(
    [
        "INT. KITCHEN - DAY",
        "EXT. ROOFTOP - NIGHT",
        "I/E. CAR - DUSK",
        "INT/EXT. PORCH - MORNING",
    ]
)
body_text = st.text(
    alphabet=st.characters(categories=("Ll", "Lu", "Nd"), include_characters=" .,!"),
    max_size=40,
).filter(lambda text: not is_scene_heading(text))


class TestIsSceneHeading:
    """Test scene heading detection."""

    @pytest.mark.parametrize(
        "line",
        [
            "INT. HOUSE - DAY",
            "EXT. FIELD",
            "I/E. TRUCK - NIGHT",
            "INT/EXT. DOORWAY - CONTINUOUS",
            "int. lowercase heading",
            "   EXT. INDENTED - DAY   ",
        ],
    )
    def test_heading_prefixes(self, line):
        """Test every heading prefix is recognised in any case."""
        assert is_scene_heading(line)

    @pytest.mark.parametrize(
        "line",
        [
            "",
            "INTERIOR HOUSE",
            "John walks INT. nowhere",
            "INT HOUSE - DAY",
            "FADE IN:",
            "EXTERIOR",
        ],
    )
    def test_non_headings(self, line):
        """Test that other lines do not open a scene."""
        assert not is_scene_heading(line)


class TestSegment:
    """Test splitting scripts into scene drafts."""

    def test_two_scene_script(self, coffee_shop_script):
        """Test the basic day/night script."""
        scenes = segment(coffee_shop_script)

        assert scenes == [
            SceneDraft(scene_number="1", slugline="INT. COFFEE SHOP - DAY", body="John sits."),
            SceneDraft(scene_number="2", slugline="EXT. STREET - NIGHT", body="John walks."),
        ]

    def test_no_headings(self):
        """Test prose without headings yields no scenes."""
        assert segment("Just some prose.") == []

    def test_empty_input(self):
        """Test empty input yields no scenes."""
        assert segment("") == []

    def test_text_before_first_heading_is_discarded(self):
        """Test title-page text does not leak into the first scene."""
        scenes = segment("MY SCRIPT\nby Someone\n\nINT. ROOM - DAY\nAction.")

        assert len(scenes) == 1
        assert scenes[0].body == "Action."

    def test_consecutive_headings_keep_empty_scene(self):
        """Test a heading followed directly by another still yields a scene."""
        scenes = segment("INT. HALL - DAY\nEXT. YARD - DAY\nBirds.")

        assert [s.slugline for s in scenes] == ["INT. HALL - DAY", "EXT. YARD - DAY"]
        assert scenes[0].body == ""
        assert scenes[1].body == "Birds."

    @pytest.mark.parametrize("newline", ["\n", "\r\n", "\r"])
    def test_line_ending_conventions(self, newline):
        """Test LF, CRLF and bare CR all split lines."""
        text = newline.join(["INT. A - DAY", "One.", "EXT. B - NIGHT", "Two."])

        scenes = segment(text)

        assert [(s.slugline, s.body) for s in scenes] == [
            ("INT. A - DAY", "One."),
            ("EXT. B - NIGHT", "Two."),
        ]

    def test_body_is_trimmed_but_keeps_inner_lines(self):
        """Test leading and trailing blank lines are trimmed."""
        scenes = segment("INT. A - DAY\n\n\nLine one.\n\nLine two.\n\n")

        assert scenes[0].body == "Line one.\n\nLine two."

    def test_slugline_is_trimmed(self):
        """Test surrounding whitespace is removed from the heading."""
        scenes = segment("   INT. A - DAY   \nAction.")

        assert scenes[0].slugline == "INT. A - DAY"

    def test_source_numbering_is_ignored(self):
        """Test numbers come from heading order, not manuscript labels."""
        scenes = segment("INT. A - DAY\nOne.\nINT. B - DAY 2A\nTwo.\nINT. C - DAY\nThree.")

        assert [s.scene_number for s in scenes] == ["1", "2", "3"]

    def test_repeated_scene_is_dropped(self):
        """Test an exact slugline/body repeat keeps only the first one."""
        text = "INT. A - DAY\nSame.\nEXT. B - NIGHT\nOther.\nINT. A - DAY\nSame."

        scenes = segment(text)

        assert [(s.slugline, s.body) for s in scenes] == [
            ("INT. A - DAY", "Same."),
            ("EXT. B - NIGHT", "Other."),
        ]

    def test_numbering_assigned_before_dedup(self):
        """Test dropped repeats leave a gap in the numbering."""
        text = "INT. A - DAY\nSame.\nINT. A - DAY\nSame.\nEXT. B - NIGHT\nOther."

        scenes = segment(text)

        assert [s.scene_number for s in scenes] == ["1", "3"]

    def test_same_slugline_different_body_is_kept(self):
        """Test only exact pairs count as duplicates."""
        scenes = segment("INT. A - DAY\nFirst.\nINT. A - DAY\nSecond.")

        assert len(scenes) == 2

    def test_drafts_start_open_with_no_characters(self, coffee_shop_script):
        """Test draft defaults."""
        for scene in segment(coffee_shop_script):
            assert scene.completed is False
            assert scene.characters == []

    def test_to_fields(self):
        """Test the store field mapping of a draft."""
        draft = SceneDraft(scene_number="1", slugline="INT. A - DAY", body="Action.")

        assert draft.to_fields() == {
            "scene_number": "1",
            "slugline": "INT. A - DAY",
            "body": "Action.",
            "completed": False,
            "characters": [],
        }


class TestSegmentProperties:
    """Property-based tests for segmentation."""

    @given(st.text(max_size=200))
    def test_total_over_any_text(self, text):
        """Test segmentation never fails and numbers increase."""
        scenes = segment(text)

        numbers = [int(scene.scene_number) for scene in scenes]
        assert numbers == sorted(set(numbers))
        assert all(scene.slugline for scene in scenes)

    @given(heading_text, body_text, st.integers(min_value=2, max_value=4))
    def test_repeated_pairs_collapse(self, heading, body, copies):
        """Test identical heading/body blocks produce a single scene."""
        block = f"{heading}\n{body}\n"

        scenes = segment(block * copies)

        assert [(s.slugline, s.body) for s in scenes] == [(heading, body.strip())]

    @given(
        st.lists(st.tuples(heading_text, body_text), min_size=1, max_size=4),
        st.lists(st.tuples(heading_text, body_text), min_size=1, max_size=4),
    )
    def test_concatenation_keeps_scene_content(self, first, second):
        """Test segmenting a concatenation matches segmenting each part."""
        part_a = "".join(f"{h}\n{b}\n" for h, b in first)
        part_b = "".join(f"{h}\n{b}\n" for h, b in second)

        separate = [(s.slugline, s.body) for s in segment(part_a) + segment(part_b)]
        combined = [(s.slugline, s.body) for s in segment(part_a + part_b)]

        deduped = []
        for pair in separate:
            if pair not in deduped:
                deduped.append(pair)
        assert combined == deduped
