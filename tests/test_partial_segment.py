"""Tests for EXT-X-PART parsing and serialization."""

import pytest

from llhls.attributes import read_partial_segment
from llhls.errors import ParseTagError
from llhls.models import PartialSegment


def test_parse_partial_segment_tag():
    part = read_partial_segment('#EXT-X-PART:DURATION=0.33334,URI="filePart272.a.mp4"')

    assert part.part_duration == pytest.approx(0.33334)
    assert part.uri == "filePart272.a.mp4"
    assert part.independent is None


def test_independent_absent_is_not_false():
    part = read_partial_segment('DURATION=1.0,URI="p.mp4"')

    assert part.independent is None
    assert "INDEPENDENT" not in str(part)


def test_independent_no_is_explicit_false():
    part = read_partial_segment('DURATION=1.0,URI="p.mp4",INDEPENDENT=NO')

    assert part.independent is False


def test_serialize_without_independent():
    part = PartialSegment(part_duration=0.33, uri="part.mp4")

    assert str(part) == '#EXT-X-PART:DURATION=0.33,URI="part.mp4"'


def test_serialize_independent_literals():
    yes = PartialSegment(part_duration=0.5, uri="a.mp4", independent=True)
    no = PartialSegment(part_duration=0.5, uri="a.mp4", independent=False)

    assert yes.to_tag().endswith(",INDEPENDENT=YES")
    assert no.to_tag().endswith(",INDEPENDENT=FALSE")


def test_serialize_whole_number_duration():
    assert PartialSegment(part_duration=2.0, uri="a.mp4").to_tag() == '#EXT-X-PART:DURATION=2,URI="a.mp4"'


@pytest.mark.parametrize(
    "text",
    [
        'DURATION=0.33334,URI="filePart272.a.mp4"',
        'DURATION=1,URI="https://cdn.example.com/live/part1.mp4?x=1",INDEPENDENT=YES',
        'DURATION=0.2,URI="p.mp4",INDEPENDENT=NO',
    ],
)
def test_round_trip_preserves_fields(text):
    first = read_partial_segment(text)
    second = read_partial_segment(first.to_tag())

    assert second.part_duration == first.part_duration
    assert second.uri == first.uri
    assert (second.independent is None) == (first.independent is None)
    assert second == first


def test_reads_back_false_literal():
    part = read_partial_segment('DURATION=0.5,URI="p.mp4",INDEPENDENT=FALSE')

    assert part.independent is False


def test_invalid_independent_fails():
    with pytest.raises(ParseTagError):
        read_partial_segment('DURATION=0.5,URI="p.mp4",INDEPENDENT=MAYBE')


def test_missing_uri_fails():
    with pytest.raises(ParseTagError):
        read_partial_segment("DURATION=0.5")


def test_uri_with_space_fails():
    with pytest.raises(ParseTagError):
        read_partial_segment('DURATION=0.5,URI="bad name.mp4"')
