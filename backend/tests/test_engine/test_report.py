"""Tests for field report composition and section parsing."""

import re

from lithoscope.engine.archetypes import DEFAULT_ARCHETYPES
from lithoscope.engine.features import ColorBias, FeatureVector
from lithoscope.engine.labels import FossilLikelihood, Roundness
from lithoscope.engine.matcher import MatchResult
from lithoscope.engine.report import (
    OFFLINE_MARKER,
    SECTION_TITLES,
    compose_report,
    is_offline_report,
    split_sections,
)

_NUMBERED = re.compile(r"^(\d)\. ", re.MULTILINE)


def _features(**overrides):
    values = dict(
        avg_r=181.6, avg_g=92.4, avg_b=70.5,
        avg_luminance=117.4,
        texture_score=52.34,
        normalized_edge_density=0.1234,
        biomorphic_index=1.4,
        color_bias=ColorBias.RED,
    )
    values.update(overrides)
    return FeatureVector(**values)


def _report(fossil=FossilLikelihood.MODERATE, archetype=DEFAULT_ARCHETYPES[6], **overrides):
    match = MatchResult(archetype=archetype, distance=0.21, confidence=45)
    return compose_report(match, Roundness.SUB_ANGULAR, fossil, _features(**overrides))


def test_report_has_seven_ordered_sections():
    report = _report()
    assert _NUMBERED.findall(report) == ["1", "2", "3", "4", "5", "6", "7"]


def test_report_starts_with_offline_marker():
    report = _report()
    assert report.splitlines()[0] == OFFLINE_MARKER
    assert is_offline_report(report)
    assert not is_offline_report("1. Identification Summary: Basalt")


def test_report_interpolates_values():
    report = _report()
    assert "Ferruginous / Gossanous Material" in report
    assert "Roundness index (12.3%) suggests a Sub-angular (Local Colluvial) profile." in report
    assert "Fossil Potential: Moderate. Detected localized edge clusters (BCI: 1.40)" in report
    assert "RGB(182, 92, 71) -> RED BIAS" in report
    assert "Grain Complexity: 52.3 SD" in report
    assert "6. Confidence Level: 45% (Archetype Variance Match)." in report
    assert "Low probability for associated heavy minerals" in report
    assert report.endswith("feature extraction of identified structural anomalies.")


def test_low_fossil_recommends_lithology_and_igneous_heavy_minerals():
    report = _report(fossil=FossilLikelihood.LOW, archetype=DEFAULT_ARCHETYPES[0])
    assert report.endswith("identified lithology.")
    assert "Moderate probability for associated heavy minerals" in report


def test_split_sections_roundtrip():
    sections = split_sections(_report())
    assert [s.number for s in sections] == list(range(1, 8))
    assert tuple(s.title for s in sections) == SECTION_TITLES
    assert sections[0].body.startswith("Visual proxy analysis identifies this specimen as Ferruginous")
    assert sections[3].body.splitlines()[0].strip().startswith("- Fossil Potential: Moderate.")
    assert len(sections[3].body.splitlines()) == 3


def test_split_sections_without_titles():
    text = "Intro line\n1. Basalt cobble\n2. Braided river: mid reach\n  more detail"
    sections = split_sections(text)
    assert sections[0].title == ""
    assert sections[0].body == "Basalt cobble"
    assert sections[1].title == "Braided river"
    assert sections[1].body == "mid reach\n  more detail"
