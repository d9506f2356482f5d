"""
Intake Context

Responsibilities:
- Ingests free-form job description text
- Normalizes unicode and line structure
- Extracts the job title and a weighted keyword profile per skill category

Owns: Job description analysis, keyword profile contract
Never: Reads or modifies résumé records
"""

from tailor.contexts.intake.exceptions import (
    InvalidKeywordWeightError,
    KeywordOrderError,
    KeywordProfileError,
    UnknownKeywordCategoryError,
)
from tailor.contexts.intake.job_analysis import KEYWORD_CATEGORIES, JDAnalysis, KeywordWeight
from tailor.contexts.intake.job_analyzer import JobDescriptionAnalyzer, analyze_job_description

__all__ = [
    "analyze_job_description",
    "JobDescriptionAnalyzer",
    "JDAnalysis",
    "KeywordWeight",
    "KEYWORD_CATEGORIES",
    "KeywordProfileError",
    "InvalidKeywordWeightError",
    "UnknownKeywordCategoryError",
    "KeywordOrderError",
]
