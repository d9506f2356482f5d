"""
Résumé optimizer.

Re-weights a StructuredResume toward a job description's keyword profile:

1. Skills are reordered within each category by the weight of the keyword they
   match; unmatched skills keep their source order after the matched ones.
2. Bullets get synonym forms rewritten to the job description's spelling, then
   are stably reordered within their entry by keyword score.
3. An empty summary is synthesized from matched skills; a non-empty one is kept.

Nothing else changes: experience entries keep their order and facts, and
education, projects, achievements and certifications pass through.
"""

from typing import List, Optional, Tuple

from tailor.contexts.intake.job_analysis import JDAnalysis, KeywordWeight
from tailor.contexts.targeting.logger import _log_debug
from tailor.contexts.targeting.relevance import (
    bullet_score,
    mentions_term,
    skill_weight,
    substitute_synonyms,
)
from tailor.contexts.templating.resume_data_structure import (
    ExperienceEntry,
    OptimizedResume,
    SkillSet,
    StructuredResume,
)
from tailor.utils.text_processing import human_join, truncate_display
from tailor.utils.vocabulary import SKILL_CATEGORIES, Vocabulary, get_vocabulary


class ResumeOptimizer:
    """
    Deterministic résumé tailoring against one keyword profile.

    Example:
        optimizer = ResumeOptimizer()
        optimized = optimizer.optimize(resume, analysis, jd_text)
    """

    def __init__(self, vocabulary: Optional[Vocabulary] = None):
        self.vocabulary = vocabulary or get_vocabulary()

    def reorder_skills(self, skills: SkillSet, analysis: JDAnalysis) -> SkillSet:
        """
        Stable sort each category by descending matched weight.

        Skills are matched against their own category's keywords; "others" is
        the catch-all for unlabeled skills, so it is matched against every keyword.
        """
        reordered = skills
        for category, items in skills.items():
            keywords = analysis.all_keywords() if category == "others" else analysis.keywords(category)
            weights = [skill_weight(skill, keywords, self.vocabulary) for skill in items]
            order = sorted(range(len(items)), key=lambda i: -weights[i])
            reordered = reordered.with_category(category, tuple(items[i] for i in order))
        return reordered

    def tailor_bullets(self, bullets: Tuple[str, ...], keywords: Tuple[KeywordWeight, ...]) -> Tuple[str, ...]:
        """Rewrite synonyms, then stable sort by descending keyword score."""
        rewritten = [substitute_synonyms(b, keywords, self.vocabulary) for b in bullets]
        scores = [bullet_score(b, keywords) for b in rewritten]
        order = sorted(range(len(rewritten)), key=lambda i: -scores[i])
        return tuple(rewritten[i] for i in order)

    def matched_skills(self, resume: StructuredResume, analysis: JDAnalysis, jd_text: str) -> List[str]:
        """
        Résumé skills relevant to the job, best first.

        Keyword-matched skills come first by weight; skills the job description
        names as a whole word but the profile does not weigh follow in source order.
        """
        keywords = analysis.all_keywords()
        weighted, mentioned = [], []
        for index, skill in enumerate(s for _, items in resume.skills.items() for s in items):
            weight = skill_weight(skill, keywords, self.vocabulary)
            if weight > 0:
                weighted.append((-weight, index, skill))
            elif mentions_term(jd_text, skill):
                mentioned.append(skill)

        ranked = [skill for _, _, skill in sorted(weighted)] + mentioned
        unique = []
        for skill in ranked:
            if skill.lower() not in {u.lower() for u in unique}:
                unique.append(skill)
        return unique[: self.vocabulary.summary_max_skills]

    def synthesize_summary(self, resume: StructuredResume, analysis: JDAnalysis, jd_text: str) -> str:
        """
        One-sentence summary for résumés without one.

        The role is the detected job title when one of the résumé's experience
        titles contains it, otherwise the most recent experience title.
        """
        skills = self.matched_skills(resume, analysis, jd_text)
        if not skills:
            return ""

        titles = [e.title for e in resume.experience if e.title]
        role = ""
        job_title = analysis.job_title.strip()
        if job_title and any(job_title.lower() in t.lower() for t in titles):
            role = job_title
        elif titles:
            role = titles[0]

        if role:
            return f"{role} with experience in {human_join(skills)}."
        return f"Experience in {human_join(skills)}."

    def optimize(self, resume: StructuredResume, analysis: JDAnalysis, jd_text: str = "") -> OptimizedResume:
        keywords = analysis.all_keywords()

        experience = tuple(
            ExperienceEntry(
                title=entry.title,
                company=entry.company,
                start_date=entry.start_date,
                end_date=entry.end_date,
                bullets=self.tailor_bullets(entry.bullets, keywords),
            )
            for entry in resume.experience
        )

        summary = resume.summary
        if not summary.strip():
            summary = self.synthesize_summary(resume, analysis, jd_text)
            if summary:
                _log_debug(f"Synthesized summary: {truncate_display(summary, 80)}")

        optimized = OptimizedResume.from_resume(
            resume,
            skills=self.reorder_skills(resume.skills, analysis),
            experience=experience,
            summary=summary,
        )

        _log_debug(
            f"Optimized resume against {len(keywords)} keywords "
            f"({len(resume.experience)} entries, "
            f"{sum(len(items) for _, items in resume.skills.items())} skills)"
        )
        return optimized


def optimize_resume(resume: StructuredResume, analysis: JDAnalysis, jd_text: str) -> OptimizedResume:
    """
    Tailor a résumé record to a job description's keyword profile.

    Pure and deterministic: the same inputs always produce the same output,
    and the input record is never modified.

    Args:
        resume: Parsed or loaded résumé record
        analysis: Keyword profile from analyze_job_description
        jd_text: The job description text the profile was built from

    Returns:
        OptimizedResume with reordered skills and bullets

    Raises:
        TypeError: If an argument has the wrong type
    """
    if not isinstance(resume, StructuredResume):
        raise TypeError(f"resume must be StructuredResume, got {type(resume).__name__}")
    if not isinstance(analysis, JDAnalysis):
        raise TypeError(f"analysis must be JDAnalysis, got {type(analysis).__name__}")
    if not isinstance(jd_text, str):
        raise TypeError(f"jd_text must be str, got {type(jd_text).__name__}")

    return ResumeOptimizer().optimize(resume, analysis, jd_text)
