"""Compliance export fragments (CSRD, SPDX SBOM, EU CRA)."""

from __future__ import annotations

import json

from ..scoring.bonus import VERIFIED_THRESHOLD
from ..score import CrabScore


def export_csrd(score: CrabScore) -> str:
    """Sustainability-reporting fragment with overall and energy scores."""
    return json.dumps(
        {
            "standard": "CSRD",
            "overall": score.overall,
            "energy": score.energy,
            "timestamp": score.timestamp.isoformat(),
            "certification": score.certification.value,
        },
        indent=2,
    )


def export_sbom(score: CrabScore) -> str:
    """Minimal SPDX snippet."""
    return json.dumps(
        {
            "SPDXID": "SPDXRef-CrabScore",
            "name": "CrabScore Report",
            "summary": f"Overall {score.overall}",
        },
        indent=2,
    )


def export_cra(score: CrabScore) -> str:
    """Cyber Resilience Act stub; passes at the Verified threshold."""
    return json.dumps(
        {
            "standard": "EU CRA",
            "score": score.overall,
            "compliance": "PASS" if score.overall >= VERIFIED_THRESHOLD else "FAIL",
        },
        indent=2,
    )
