"""Field report composition and parsing.

The report is plain text: an offline marker line, then seven sections each
starting a line with ``"<n>. "``. Renderers split on that prefix and may
drop whatever precedes the first colon of a section, so the title text is
decorative and the numbering is the contract.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from lithoscope.engine.features import FeatureVector
from lithoscope.engine.labels import FossilLikelihood, Roundness, fossil_details
from lithoscope.engine.matcher import MatchResult

OFFLINE_MARKER = "[OFFLINE MODE: Advanced Heuristic Preview]"

SECTION_TITLES: tuple[str, ...] = (
    "Identification Summary",
    "Drainage & River Context",
    "Transport & Weathering History",
    "Fossil / Gem / Mineral Assessment",
    "Economic Significance",
    "Confidence Level",
    "Exploration Recommendations",
)

_SECTION_RE = re.compile(r"^(\d+)\.\s", re.MULTILINE)


@dataclass(frozen=True)
class ReportSection:
    number: int
    title: str
    body: str


def compose_report(
    match: MatchResult,
    roundness: Roundness,
    fossil: FossilLikelihood,
    features: FeatureVector,
) -> str:
    archetype = match.archetype
    r, g, b = features.rgb
    target = "lithology" if fossil is FossilLikelihood.LOW else "structural anomalies"

    bodies = (
        f"Visual proxy analysis identifies this specimen as {archetype.name}. {archetype.description}",
        "Local sensors indicate fluvial environment. Specific drainage hierarchy requires cloud analysis.",
        f"Roundness index ({features.normalized_edge_density * 100:.1f}%) suggests a {roundness.label} profile.",
        "\n".join(
            [
                "",
                f"   - Fossil Potential: {fossil.label}. {fossil_details(fossil, features.biomorphic_index)}",
                f"   - Mineral Signature: RGB({r}, {g}, {b}) -> {features.color_bias.value.upper()} BIAS",
                f"   - Grain Complexity: {features.texture_score:.1f} SD (Structural Heterogeneity)",
            ]
        ),
        "Placer potential restricted in offline mode. Heuristic match suggests "
        f"{archetype.heavy_mineral_potential} probability for associated heavy minerals.",
        f"{match.confidence}% (Archetype Variance Match).",
        "Re-run with cloud analysis when connectivity returns to perform high-resolution "
        f"feature extraction of identified {target}.",
    )

    lines = [OFFLINE_MARKER]
    for number, (title, body) in enumerate(zip(SECTION_TITLES, bodies), start=1):
        sep = "" if body.startswith("\n") else " "
        lines.append(f"{number}. {title}:{sep}{body}")
    return "\n".join(lines)


def is_offline_report(text: str) -> bool:
    return text.lstrip().startswith(OFFLINE_MARKER)


def split_sections(text: str) -> list[ReportSection]:
    """Split a report (offline or cloud) at its line-leading section numbers."""
    matches = list(_SECTION_RE.finditer(text))
    sections: list[ReportSection] = []
    for i, m in enumerate(matches):
        end = matches[i + 1].start() if i + 1 < len(matches) else len(text)
        chunk = text[m.end():end].strip("\n")
        first, _, rest = chunk.partition("\n")
        title, colon, head = first.partition(":")
        if not colon:
            title, head = "", first
        body = "\n".join(part for part in (head.strip(), rest.rstrip()) if part)
        sections.append(ReportSection(number=int(m.group(1)), title=title.strip(), body=body))
    return sections
