"""Prompt text for the cloud analysis model."""

from __future__ import annotations

from lithoscope.models.requests import AnalysisMode, FieldLog

SYSTEM_PROMPT = """You are Lithoscope, a multimodal geological assistant specialised in riverine, fluvial and drainage-controlled geology.
You analyse field photographs, riverbed images, boulders, gravels, hand specimens, fossils, gemstones, polished samples, thin-section photomicrographs, satellite imagery and maps to identify, classify and interpret geological materials found along rivers and drainage systems.
Your reasoning must be visual-first, context-aware and source-to-sink focused.

Output structure (strict). Start each section on its own line with its number:
1. Identification Summary: High-level overview.
2. Drainage & River Context: Pattern, position (Upper/Middle/Lower), energy regime, sediment characteristics.
3. Transport & Weathering History: Grain size, sorting, roundness, transport indicators.
4. Fossil / Gem / Mineral Assessment: Detailed IDs of fossils or minerals.
5. Economic Significance: Placer Probability Score (%) and potential classification (Low/Moderate/High).
6. Confidence Level: Your estimated accuracy as a percentage.
7. Exploration Recommendations: Upstream guidance, sampling zones."""

MODE_INSTRUCTIONS: dict[AnalysisMode, str] = {
    AnalysisMode.TEACHING: (
        "Use simple explanations, educational diagram descriptions, and focus on foundational learning."
    ),
    AnalysisMode.PROFESSIONAL: (
        "Use advanced technical terminology, discuss tectonics, provenance, and detailed lithology."
    ),
    AnalysisMode.EXPLORATION: (
        "Focus heavily on economic geology, placer probability, and specific mining/sampling targets."
    ),
}

# Sensitivity bands (0-100)
_SPECULATIVE_BELOW = 30
_CONSERVATIVE_ABOVE = 70
# Below this the model samples more freely
_HIGH_TEMPERATURE_BELOW = 40
_TEMPERATURE_HIGH = 0.7
_TEMPERATURE_LOW = 0.3


def sensitivity_guidance(sensitivity: int) -> str:
    if sensitivity < _SPECULATIVE_BELOW:
        return (
            "Be SPECULATIVE: Flag even subtle morphological patterns or ambiguous mineral traces. "
            "Prioritize identifying potential features over certainty."
        )
    if sensitivity > _CONSERVATIVE_ABOVE:
        return (
            "Be CONSERVATIVE: Only report features that are clearly identifiable with high visual "
            "evidence. Avoid speculation on ambiguous textures."
        )
    return (
        "Be BALANCED: Provide standard professional interpretation of visual evidence with "
        "appropriate caveats."
    )


def temperature_for(sensitivity: int) -> float:
    return _TEMPERATURE_HIGH if sensitivity < _HIGH_TEMPERATURE_BELOW else _TEMPERATURE_LOW


def build_analysis_prompt(mode: AnalysisMode, sensitivity: int, field_log: FieldLog | None = None) -> str:
    lines = [
        f"Perform a geological analysis of the attached riverine images in {mode.value}.",
        f"ANALYSIS THRESHOLD ({sensitivity}%): {sensitivity_guidance(sensitivity)}",
        MODE_INSTRUCTIONS[mode],
    ]
    if field_log is not None:
        lines += [
            "FIELD OBSERVATIONS:",
            f"- Texture: {field_log.texture_notes or 'N/A'}",
            f"- Mineralogy: {field_log.mineral_observations or 'N/A'}",
        ]
    lines += [
        "Analyze the drainage context, identify rocks/minerals/fossils, and estimate placer potential.",
        "Strictly follow the output structure provided in your system instructions.",
    ]
    return "\n".join(lines)
