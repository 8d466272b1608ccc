"""Tests for cloud prompt construction."""

import pytest

from lithoscope.llm.prompts import (
    MODE_INSTRUCTIONS,
    SYSTEM_PROMPT,
    build_analysis_prompt,
    sensitivity_guidance,
    temperature_for,
)
from lithoscope.models.requests import AnalysisMode, FieldLog


@pytest.mark.parametrize(
    "sensitivity, word",
    [(0, "SPECULATIVE"), (29, "SPECULATIVE"), (30, "BALANCED"), (70, "BALANCED"), (71, "CONSERVATIVE")],
)
def test_sensitivity_bands(sensitivity, word):
    assert sensitivity_guidance(sensitivity).startswith(f"Be {word}")


def test_temperature_bands():
    assert temperature_for(39) == 0.7
    assert temperature_for(40) == 0.3


def test_system_prompt_lists_seven_sections():
    for n in range(1, 8):
        assert f"\n{n}. " in SYSTEM_PROMPT


def test_every_mode_has_instructions():
    assert set(MODE_INSTRUCTIONS) == set(AnalysisMode)


def test_build_prompt_with_field_log():
    prompt = build_analysis_prompt(
        AnalysisMode.TEACHING, 25, FieldLog(texture_notes="vesicular", mineral_observations="")
    )
    assert "in Teaching Mode" in prompt
    assert "ANALYSIS THRESHOLD (25%)" in prompt
    assert "- Texture: vesicular" in prompt
    assert "- Mineralogy: N/A" in prompt


def test_build_prompt_without_field_log():
    assert "FIELD OBSERVATIONS" not in build_analysis_prompt(AnalysisMode.PROFESSIONAL, 50)
