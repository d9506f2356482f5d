"""
End-to-end tailoring orchestration.

Chains the four stages (parse → analyze → optimize → format) for the two
entry points a request layer needs:

- tailor_resume: raw résumé text + job description → rendered résumé
- tailor_structured_resume: an already structured (possibly user-edited)
  record + job description → rendered résumé
"""

import time
from dataclasses import dataclass
from typing import Any, Dict

from tailor.contexts.intake import JDAnalysis, analyze_job_description
from tailor.contexts.rendering import format_resume
from tailor.contexts.targeting import optimize_resume
from tailor.contexts.targeting.logger import log_tailoring_result
from tailor.contexts.templating import OptimizedResume, StructuredResume, parse_resume


@dataclass(frozen=True)
class TailoringResult:
    """Outcome of one tailoring run."""

    resume: OptimizedResume
    analysis: JDAnalysis
    rendered: str
    time_s: float = 0.0

    @property
    def job_title(self) -> str:
        return self.analysis.job_title

    def to_dict(self) -> Dict[str, Any]:
        """Response shape: rendered text, detected title and the tailored record."""
        return {
            "resume": self.rendered,
            "jobTitle": self.job_title,
            "structured": self.resume.to_dict(),
        }


def tailor_structured_resume(resume: StructuredResume, jd_text: str) -> TailoringResult:
    """
    Tailor an existing résumé record to a job description and render it.

    Args:
        resume: Parsed or loaded résumé record
        jd_text: Job description text

    Returns:
        TailoringResult with the optimized record, keyword profile and rendered text
    """
    start = time.perf_counter()
    analysis = analyze_job_description(jd_text)
    optimized = optimize_resume(resume, analysis, jd_text)
    rendered = format_resume(optimized)
    elapsed = time.perf_counter() - start

    log_tailoring_result(analysis.job_title, len(analysis.all_keywords()), elapsed)
    return TailoringResult(resume=optimized, analysis=analysis, rendered=rendered, time_s=elapsed)


def tailor_resume(resume_text: str, jd_text: str) -> TailoringResult:
    """
    Parse raw résumé text, then tailor and render it.

    Example:
        result = tailor_resume(resume_text, jd_text)
        print(result.rendered)
    """
    return tailor_structured_resume(parse_resume(resume_text), jd_text)
