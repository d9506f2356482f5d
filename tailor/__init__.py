"""
Resume Tailor - keyword-driven résumé tailoring

Parses free-form résumé text into a structured record, profiles a job
description's keywords, re-weights the résumé toward that profile, and renders
it in a fixed ATS-friendly text layout.

Architecture:
- Templating Context: Résumé data model and text parsing
- Intake Context: Job description analysis
- Targeting Context: Relevance scoring and reordering
- Rendering Context: Canonical text layout
"""

__version__ = "0.1.0"

from tailor.contexts.intake import JDAnalysis, KeywordWeight, analyze_job_description
from tailor.contexts.rendering import format_resume
from tailor.contexts.targeting import optimize_resume
from tailor.contexts.templating import OptimizedResume, StructuredResume, parse_resume
from tailor.pipeline import TailoringResult, tailor_resume, tailor_structured_resume

__all__ = [
    "parse_resume",
    "analyze_job_description",
    "optimize_resume",
    "format_resume",
    "tailor_resume",
    "tailor_structured_resume",
    "StructuredResume",
    "OptimizedResume",
    "JDAnalysis",
    "KeywordWeight",
    "TailoringResult",
]
