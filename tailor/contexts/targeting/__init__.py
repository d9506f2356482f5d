"""
Targeting Context

Responsibilities:
- Scores relevance of résumé skills and bullets against a keyword profile
- Reorders skills within categories and bullets within experience entries
- Rewrites synonym forms in bullets to the job description's spelling
- Synthesizes a summary when the résumé has none

Owns: Prioritization algorithms, relevance scoring
Never: Parses raw text, reorders experience entries, or adds facts to a résumé
"""

from tailor.contexts.targeting.optimizer import ResumeOptimizer, optimize_resume

__all__ = ["optimize_resume", "ResumeOptimizer"]
