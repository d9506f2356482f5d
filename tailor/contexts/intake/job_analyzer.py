"""
Job description analyzer.

Builds a weighted keyword profile (JDAnalysis) from free-form job description
text using the shared vocabulary:

- Vocabulary terms and their synonyms are matched as whole tokens,
  case-insensitively, with one longest-first alternation so multi-word names
  ("Power BI", "SQL Server") count once. Aliases fold into their canonical term.
- Terms outside the vocabulary that follow a requirement signal ("must have",
  "experience with") within a short window land in the "requirements" bucket.
- Each occurrence weighs 1.0, or the configured boost when it sits in the
  priority zone (first non-blank lines) or in a bullet introduced by a
  requirement-signal line.

Results are deterministic: ties are broken by first occurrence in the text.
"""

import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Dict, List, Optional, Tuple

from tailor.contexts.intake.extraction_patterns import JobTextPatterns, build_phrase_pattern
from tailor.contexts.intake.job_analysis import KEYWORD_CATEGORIES, JDAnalysis, KeywordWeight
from tailor.contexts.intake.logger import log_keyword_profile
from tailor.contexts.intake.normalizer import normalize_job_text
from tailor.utils.vocabulary import Vocabulary, get_vocabulary

# Leading words skipped before a job title ("seeking an experienced ...")
TITLE_FILLERS = frozenset(
    {
        "a",
        "an",
        "the",
        "for",
        "of",
        "as",
        "is",
        "to",
        "our",
        "new",
        "talented",
        "experienced",
        "motivated",
        "passionate",
        "skilled",
        "highly",
    }
)

# Fallback titles are taken from short lines only
MAX_TITLE_LINE_WORDS = 8


@dataclass
class _Occurrence:
    """Running tally for one keyword."""

    display: str
    category: str
    first_position: int
    weight: float = 0.0
    seen_canonical: bool = False


@dataclass(frozen=True)
class _JobLine:
    text: str
    offset: int
    boost: float


@dataclass
class _Tally:
    by_key: Dict[Tuple[str, str], _Occurrence] = field(default_factory=dict)

    def add(self, category: str, key: str, display: str, position: int, weight: float) -> _Occurrence:
        occurrence = self.by_key.get((category, key))
        if occurrence is None:
            occurrence = _Occurrence(display=display, category=category, first_position=position)
            self.by_key[(category, key)] = occurrence
        occurrence.weight += weight
        return occurrence

    def ranked(self, category: str) -> Tuple[KeywordWeight, ...]:
        occurrences = [o for (c, _), o in self.by_key.items() if c == category]
        occurrences.sort(key=lambda o: (-o.weight, o.first_position))
        return tuple(KeywordWeight(term=o.display, weight=o.weight) for o in occurrences)


class JobDescriptionAnalyzer:
    """
    Keyword profiler bound to a vocabulary.

    Patterns are compiled once per instance; use get_job_analyzer() for the
    shared instance built from the process-wide vocabulary.
    """

    def __init__(self, vocabulary: Optional[Vocabulary] = None):
        self.vocabulary = vocabulary or get_vocabulary()
        self.term_forms = {form.lower(): canonical for form, canonical in self.vocabulary.all_term_forms().items()}
        self.alias_display = {form.lower(): form for form in self.vocabulary.all_term_forms()}
        self.term_pattern = build_phrase_pattern(self.vocabulary.all_term_forms())
        self.signal_pattern = build_phrase_pattern(self.vocabulary.requirement_signals)
        self.lead_in_pattern = build_phrase_pattern(self.vocabulary.title_lead_ins)
        self.signal_words = frozenset(
            word.lower() for signal in self.vocabulary.requirement_signals for word in signal.split()
        )

    # ========================================================================
    # LINE WEIGHTING
    # ========================================================================

    def weighted_lines(self, text: str) -> List[_JobLine]:
        """
        Split text into lines with their occurrence multiplier.

        The first priority_zone_lines non-blank lines are boosted, as are
        bullets whose introducing (non-bullet) line contains a requirement signal.
        """
        vocab = self.vocabulary
        lines = []
        offset = 0
        non_blank = 0
        signal_context = False

        for raw in text.split("\n"):
            line_offset = offset
            offset += len(raw) + 1
            if not raw.strip():
                continue

            is_bullet = bool(JobTextPatterns.BULLET.match(raw))
            if not is_bullet:
                signal_context = bool(self.signal_pattern.search(raw))

            boosted = non_blank < vocab.priority_zone_lines or (is_bullet and signal_context)
            lines.append(_JobLine(text=raw, offset=line_offset, boost=vocab.boost if boosted else 1.0))
            non_blank += 1

        return lines

    # ========================================================================
    # KEYWORDS
    # ========================================================================

    def collect_vocabulary_terms(self, lines: List[_JobLine], tally: _Tally) -> List[Tuple[int, int]]:
        """Tally vocabulary matches; return their absolute spans."""
        spans = []
        for line in lines:
            for match in self.term_pattern.finditer(line.text):
                form = " ".join(match.group(0).split()).lower()
                canonical = self.term_forms[form]
                category = self.vocabulary.category_for_term(canonical)
                is_canonical = form == canonical.lower()

                occurrence = tally.add(
                    category,
                    canonical.lower(),
                    canonical if is_canonical else self.alias_display[form],
                    line.offset + match.start(),
                    line.boost,
                )
                # The canonical spelling wins as soon as the text uses it once
                if is_canonical and not occurrence.seen_canonical:
                    occurrence.display = canonical
                    occurrence.seen_canonical = True

                spans.append((line.offset + match.start(), line.offset + match.end()))
        return spans

    def requirement_candidates(self, lines: List[_JobLine], vocab_spans: List[Tuple[int, int]]) -> List[str]:
        """
        Non-vocabulary tokens within the window after each requirement signal.

        Windows stop at clause boundaries. Stopwords, signal words, numbers,
        short tokens and vocabulary-covered tokens are excluded.
        """
        vocab = self.vocabulary
        candidates = []
        for line in lines:
            clause_start = 0
            clauses = []
            for boundary in JobTextPatterns.CLAUSE_BOUNDARY.finditer(line.text):
                clauses.append((clause_start, boundary.start()))
                clause_start = boundary.end()
            clauses.append((clause_start, len(line.text)))

            for start, end in clauses:
                clause = line.text[start:end]
                for signal in self.signal_pattern.finditer(clause):
                    tokens = list(JobTextPatterns.TOKEN.finditer(clause, signal.end()))
                    for token in tokens[: vocab.requirement_window]:
                        word = token.group(0).lower()
                        position = line.offset + start + token.start()
                        if (
                            len(word) < 3
                            or word.isdigit()
                            or word in vocab.stopwords
                            or word in self.signal_words
                            or any(s <= position < e for s, e in vocab_spans)
                        ):
                            continue
                        if word not in candidates:
                            candidates.append(word)
        return candidates

    def collect_requirements(self, lines: List[_JobLine], candidates: List[str], tally: _Tally) -> None:
        """Weight each requirement candidate by all of its occurrences in the text."""
        if not candidates:
            return
        pattern = re.compile(
            r"(?<![A-Za-z0-9])(?:" + "|".join(re.escape(c) for c in candidates) + r")(?![A-Za-z0-9])",
            re.IGNORECASE,
        )
        for line in lines:
            for match in pattern.finditer(line.text):
                word = match.group(0).lower()
                tally.add("requirements", word, word, line.offset + match.start(), line.boost)

    # ========================================================================
    # JOB TITLE
    # ========================================================================

    def _is_role_noun(self, word: str) -> bool:
        word = word.lower().strip(".,:;()")
        return word in self.vocabulary.role_nouns or word.rstrip("s") in self.vocabulary.role_nouns

    def detect_job_title(self, text: str) -> str:
        """
        Title from the first lead-in phrase followed by a role noun, else from
        a short leading line that names a role.

        Example:
            "We are seeking a Senior Backend Engineer to join" -> "Senior Backend Engineer"
        """
        for lead_in in self.lead_in_pattern.finditer(text):
            rest = text[lead_in.end() :]
            boundary = JobTextPatterns.SENTENCE_BOUNDARY.search(rest)
            sentence = rest[: boundary.start()] if boundary else rest
            sentence = sentence.split("\n")[0]
            words = JobTextPatterns.TITLE_WORD.findall(sentence)[: self.vocabulary.title_window]

            start = 0
            while start < len(words) and words[start].lower() in TITLE_FILLERS:
                start += 1

            end = next((i for i in range(start, len(words)) if self._is_role_noun(words[i])), None)
            # A role noun right after the lead-in is a compound ("hiring manager"), not a title
            if end is None or end == 0:
                continue

            title_words = words[start : end + 1]
            if any(w.lower() in self.vocabulary.stopwords for w in title_words):
                continue
            return " ".join(title_words).strip(JobTextPatterns.TITLE_TRIM)

        for line in text.split("\n"):
            candidate = line.strip(JobTextPatterns.TITLE_TRIM)
            if not candidate:
                continue
            words = candidate.split()
            if len(words) <= MAX_TITLE_LINE_WORDS and any(self._is_role_noun(w) for w in words):
                return candidate
            # Only the first non-blank line is considered
            break

        return ""

    # ========================================================================
    # ORCHESTRATION
    # ========================================================================

    def analyze(self, jd_text: str) -> JDAnalysis:
        text = normalize_job_text(jd_text)
        if not text.strip():
            return JDAnalysis()

        lines = self.weighted_lines(text)
        tally = _Tally()
        vocab_spans = self.collect_vocabulary_terms(lines, tally)
        candidates = self.requirement_candidates(lines, vocab_spans)
        self.collect_requirements(lines, candidates, tally)

        analysis = JDAnalysis(
            job_title=self.detect_job_title(text),
            keywords_by_category={category: tally.ranked(category) for category in KEYWORD_CATEGORIES},
        )

        log_keyword_profile(analysis)
        return analysis


@lru_cache(maxsize=1)
def get_job_analyzer() -> JobDescriptionAnalyzer:
    """Shared analyzer built from the process-wide vocabulary."""
    return JobDescriptionAnalyzer(get_vocabulary())


def analyze_job_description(jd_text: str) -> JDAnalysis:
    """
    Build a weighted keyword profile of a job description.

    Args:
        jd_text: Free-form job description text

    Returns:
        JDAnalysis with six keyword categories (all empty for blank text)

    Raises:
        TypeError: If jd_text is not a str
        InvalidVocabularyError: If the configured vocabulary file cannot be loaded

    Example:
        analysis = analyze_job_description(
            "We require experience with PostgreSQL and React. Must have AWS."
        )
        [kw.term for kw in analysis.keywords("databases")]
        # ["PostgreSQL"]
    """
    if not isinstance(jd_text, str):
        raise TypeError(f"jd_text must be str, got {type(jd_text).__name__}")
    return get_job_analyzer().analyze(jd_text)
