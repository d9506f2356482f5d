"""
Plain-text résumé parser.

Turns free-form résumé text (as extracted from a PDF) into a StructuredResume.

Parsing happens in two passes:
1. Segmentation: every line is classified (blank, header, bullet, dated,
   continuation, text) and driven through a small state machine whose
   transition table groups lines into sections and, within a section, into
   entries (header lines followed by bullets).
2. Extraction: one extractor per section kind turns its blocks into record
   fields. Contact details are extracted from the whole text independently of
   sectioning, since contact lines can appear anywhere.

Malformed input never raises: unrecognized structure yields empty fields, and
text without any recognized section header yields the fallback record.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

from dotenv import load_dotenv

from tailor.contexts.templating.logger import _log_debug, _log_error, _log_warning, log_parse_summary
from tailor.contexts.templating.resume_data_structure import (
    ContactInfo,
    EducationEntry,
    ExperienceEntry,
    ProjectEntry,
    SkillSet,
    StructuredResume,
)
from tailor.contexts.templating.resume_patterns import (
    ContactPatterns,
    DatePatterns,
    EducationPatterns,
    ExperiencePatterns,
    LinePatterns,
    ListPatterns,
    NamePatterns,
)
from tailor.utils.text_processing import dedupe_casefold, normalize_whitespace
from tailor.utils.vocabulary import SKILL_CATEGORIES, Vocabulary, get_vocabulary

load_dotenv()

MAX_RESUME_CHARS = int(os.getenv("TAILOR_MAX_RESUME_CHARS") or 50000)

# Experience header lines this long are description text, not title/company
_SENTENCE_WORDS = 8


# ============================================================================
# SEGMENTATION
# ============================================================================


class LineKind(Enum):
    BLANK = "blank"
    HEADER = "header"
    BULLET = "bullet"
    DATED = "dated"
    CONTINUATION = "continuation"
    TEXT = "text"


class ParserState(Enum):
    PREAMBLE = "preamble"
    IN_SECTION = "in_section"
    ENTRY_HEADER = "entry_header"
    ENTRY_BODY = "entry_body"


@dataclass(frozen=True)
class Line:
    """A classified input line. For bullets, text excludes the glyph."""

    kind: LineKind
    text: str
    section: Optional[str] = None


@dataclass
class EntryBlock:
    """Header lines of one entry followed by its bullets."""

    header_lines: List[Line] = field(default_factory=list)
    bullets: List[str] = field(default_factory=list)

    @property
    def dated_index(self) -> Optional[int]:
        for i, line in enumerate(self.header_lines):
            if line.kind is LineKind.DATED:
                return i
        return None


@dataclass
class SectionBlock:
    """All content of one recognized section, in source order."""

    kind: str
    lines: List[Line] = field(default_factory=list)
    entries: List[EntryBlock] = field(default_factory=list)
    loose_bullets: List[str] = field(default_factory=list)

    @property
    def texts(self) -> List[str]:
        return [line.text for line in self.lines]


@dataclass
class Segmentation:
    preamble: List[str] = field(default_factory=list)
    sections: List[SectionBlock] = field(default_factory=list)

    def of_kind(self, kind: str) -> List[SectionBlock]:
        return [s for s in self.sections if s.kind == kind]


class ResumeSegmenter:
    """
    Line classifier plus the section/entry state machine.

    The transition table maps (state, line kind) to a handler and the next
    state. Handlers only mutate the Segmentation being built.
    """

    def __init__(self, vocabulary: Vocabulary):
        self.vocabulary = vocabulary
        self._segmentation = Segmentation()
        self._section: Optional[SectionBlock] = None
        self._entry: Optional[EntryBlock] = None

        S, K = ParserState, LineKind
        self.transitions: Dict[Tuple[ParserState, LineKind], Tuple[Callable, ParserState]] = {
            (S.PREAMBLE, K.HEADER): (self._start_section, S.IN_SECTION),
            (S.PREAMBLE, K.BULLET): (self._add_preamble, S.PREAMBLE),
            (S.PREAMBLE, K.DATED): (self._add_preamble, S.PREAMBLE),
            (S.PREAMBLE, K.CONTINUATION): (self._add_preamble, S.PREAMBLE),
            (S.PREAMBLE, K.TEXT): (self._add_preamble, S.PREAMBLE),
            (S.IN_SECTION, K.HEADER): (self._start_section, S.IN_SECTION),
            (S.IN_SECTION, K.BULLET): (self._add_loose_bullet, S.IN_SECTION),
            (S.IN_SECTION, K.DATED): (self._open_entry, S.ENTRY_HEADER),
            (S.IN_SECTION, K.CONTINUATION): (self._open_entry, S.ENTRY_HEADER),
            (S.IN_SECTION, K.TEXT): (self._open_entry, S.ENTRY_HEADER),
            (S.ENTRY_HEADER, K.HEADER): (self._start_section, S.IN_SECTION),
            (S.ENTRY_HEADER, K.BULLET): (self._add_bullet, S.ENTRY_BODY),
            (S.ENTRY_HEADER, K.DATED): (self._add_dated_header_line, S.ENTRY_HEADER),
            (S.ENTRY_HEADER, K.CONTINUATION): (self._add_header_line, S.ENTRY_HEADER),
            (S.ENTRY_HEADER, K.TEXT): (self._add_header_line, S.ENTRY_HEADER),
            (S.ENTRY_BODY, K.HEADER): (self._start_section, S.IN_SECTION),
            (S.ENTRY_BODY, K.BULLET): (self._add_bullet, S.ENTRY_BODY),
            (S.ENTRY_BODY, K.DATED): (self._open_entry, S.ENTRY_HEADER),
            (S.ENTRY_BODY, K.CONTINUATION): (self._extend_bullet, S.ENTRY_BODY),
            (S.ENTRY_BODY, K.TEXT): (self._open_entry, S.ENTRY_HEADER),
        }

    def classify(self, raw_line: str) -> Line:
        """
        Classify one raw line.

        Order matters: header before bullet (a header is never bulleted),
        bullet before dated (bullets may mention years).
        """
        text = normalize_whitespace(raw_line)
        if not text or LinePatterns.RULE.match(text):
            return Line(LineKind.BLANK, "")

        header_candidate = LinePatterns.HEADER_DECORATION.sub("", text)
        section = self.vocabulary.section_for_header(header_candidate) if header_candidate else None
        if section:
            return Line(LineKind.HEADER, header_candidate, section=section)

        bullet = LinePatterns.BULLET.match(text)
        if bullet:
            return Line(LineKind.BULLET, bullet.group("text").strip())
        if text in LinePatterns.BULLET_ONLY:
            return Line(LineKind.BLANK, "")

        if DatePatterns.RANGE.search(text):
            return Line(LineKind.DATED, text)

        if text[0].islower():
            return Line(LineKind.CONTINUATION, text)

        return Line(LineKind.TEXT, text)

    def segment(self, lines: List[str]) -> Segmentation:
        self._segmentation = Segmentation()
        self._section = None
        self._entry = None

        state = ParserState.PREAMBLE
        for raw_line in lines:
            line = self.classify(raw_line)
            if line.kind is LineKind.BLANK:
                continue
            handler, next_state = self.transitions[(state, line.kind)]
            handler(line)
            state = next_state

        return self._segmentation

    # Handlers

    def _add_preamble(self, line: Line) -> None:
        self._segmentation.preamble.append(line.text)

    def _start_section(self, line: Line) -> None:
        self._section = SectionBlock(kind=line.section)
        self._segmentation.sections.append(self._section)
        self._entry = None
        _log_debug(f"Section '{line.section}' starts at header '{line.text}'")

    def _open_entry(self, line: Line) -> None:
        self._entry = EntryBlock(header_lines=[line])
        self._section.entries.append(self._entry)
        self._section.lines.append(line)

    def _add_header_line(self, line: Line) -> None:
        self._entry.header_lines.append(line)
        self._section.lines.append(line)

    def _add_dated_header_line(self, line: Line) -> None:
        # A second date range means the previous entry had no bullets
        if self._entry.dated_index is None:
            self._add_header_line(line)
        else:
            self._open_entry(line)

    def _add_loose_bullet(self, line: Line) -> None:
        self._section.loose_bullets.append(line.text)
        self._section.lines.append(line)

    def _add_bullet(self, line: Line) -> None:
        self._entry.bullets.append(line.text)
        self._section.lines.append(line)

    def _extend_bullet(self, line: Line) -> None:
        self._entry.bullets[-1] = f"{self._entry.bullets[-1]} {line.text}"
        last = self._section.lines[-1]
        self._section.lines[-1] = Line(last.kind, f"{last.text} {line.text}")


# ============================================================================
# FIELD EXTRACTION
# ============================================================================


def _strip_edges(text: str) -> str:
    return text.strip(DatePatterns.EDGE_SEPARATORS).strip()


def _split_header_fields(text: str) -> List[str]:
    """Split 'Title | Company' / 'Title at Company' / 'Title — Company' into fields."""
    parts = []
    for piece in ExperiencePatterns.FIELD_SEPARATOR.split(text):
        parts.extend(ExperiencePatterns.AT_SEPARATOR.split(piece))
    return [_strip_edges(p) for p in parts if _strip_edges(p)]


def _split_items(text: str) -> List[str]:
    """
    Split a list line on separators outside parentheses.

    Example:
        _split_items("Python (Django, Flask), SQL")
        # ["Python (Django, Flask)", "SQL"]
    """
    items, current, depth = [], [], 0
    for char in text:
        if char in "([{":
            depth += 1
        elif char in ")]}" and depth:
            depth -= 1
        if depth == 0 and ListPatterns.ITEM_SEPARATOR.fullmatch(char):
            items.append("".join(current))
            current = []
        else:
            current.append(char)
    items.append("".join(current))
    return [item.strip().rstrip(".").strip() for item in items if item.strip(" .")]


def extract_contact(text: str) -> ContactInfo:
    """
    Extract contact details from the whole résumé text; first match wins.

    Values are kept as they appear in the source.
    """
    email_match = ContactPatterns.EMAIL.search(text)
    email = email_match.group(0) if email_match else ""

    phone = None
    for pattern in ContactPatterns.PHONES:
        match = pattern.search(text)
        if match:
            phone = match.group(0).strip()
            break

    linkedin_match = ContactPatterns.LINKEDIN.search(text)
    github_match = ContactPatterns.GITHUB.search(text)

    portfolio = None
    label = ContactPatterns.PORTFOLIO_LABEL.search(text)
    if label and not _is_profile_url(label.group("url")):
        portfolio = label.group("url")
    else:
        for match in ContactPatterns.URL.finditer(text):
            if not _is_profile_url(match.group(0)):
                portfolio = match.group(0)
                break

    return ContactInfo(
        email=email,
        phone=phone,
        linkedin=linkedin_match.group(0).rstrip(".") if linkedin_match else None,
        github=github_match.group(0).rstrip(".") if github_match else None,
        portfolio=portfolio.rstrip(".") if portfolio else None,
    )


def _is_profile_url(url: str) -> bool:
    lowered = url.lower()
    return "linkedin.com" in lowered or "github.com" in lowered


def extract_name(preamble: List[str], scan_lines: int = 15) -> str:
    """
    Find the candidate's name among the first preamble lines.

    Contact lines are skipped; "Jane Doe | jane@example.com" yields "Jane Doe".
    """
    for line in preamble[:scan_lines]:
        candidate = line.split("|")[0].strip()
        if not candidate or ContactPatterns.CONTACT_MARKER.search(candidate):
            continue
        if any(char.isdigit() for char in candidate):
            continue
        if (
            NamePatterns.TITLE_CASE.match(candidate)
            or NamePatterns.ALL_CAPS.match(candidate)
            or NamePatterns.MIDDLE_INITIAL.match(candidate)
        ):
            return candidate
    return ""


def extract_experience(blocks: List[SectionBlock]) -> Tuple[ExperienceEntry, ...]:
    entries = []
    for block in blocks:
        # Bullets before any entry header form an untitled entry
        if block.loose_bullets:
            entries.append(ExperienceEntry(bullets=tuple(block.loose_bullets)))
        for entry in block.entries:
            parsed = _experience_entry(entry)
            if parsed:
                entries.append(parsed)
    return tuple(entries)


def _experience_entry(entry: EntryBlock) -> Optional[ExperienceEntry]:
    dated_index = entry.dated_index
    if dated_index is None and not entry.bullets:
        return None

    start_date = end_date = ""
    primary: List[str] = []
    before: List[str] = []
    after: List[str] = []
    descriptions: List[str] = []

    for i, line in enumerate(entry.header_lines):
        if i == dated_index:
            match = DatePatterns.RANGE.search(line.text)
            start_date, end_date = match.group("start"), match.group("end")
            # Fields may sit on either side of the range ("Jan 2019 - Dec 2021 | Engineer | Acme")
            primary = _split_header_fields(line.text[: match.start()]) + _split_header_fields(
                line.text[match.end() :]
            )
        elif len(line.text.split()) >= _SENTENCE_WORDS:
            descriptions.append(line.text)
        elif dated_index is None or i < dated_index:
            before.extend(_split_header_fields(line.text))
        else:
            after.extend(_split_header_fields(line.text))

    bullets = descriptions + list(entry.bullets)
    candidates = primary + after + before

    title, company = "", ""
    if candidates:
        title_index = next(
            (i for i, c in enumerate(candidates) if ExperiencePatterns.TITLE_KEYWORD.search(c)),
            0,
        )
        title = candidates[title_index]
        rest = candidates[:title_index] + candidates[title_index + 1 :]
        company = rest[0] if rest else ""

    return ExperienceEntry(
        title=title,
        company=company,
        start_date=start_date,
        end_date=end_date,
        bullets=tuple(bullets),
    )


def extract_education(blocks: List[SectionBlock]) -> Tuple[EducationEntry, ...]:
    """
    Slot-fill degree / university / years / location over the section lines.

    A slot that is already filled starts the next entry.
    """
    entries = []
    slots: Dict[str, str] = {}

    def flush():
        if slots.get("degree") or slots.get("university"):
            entries.append(
                EducationEntry(
                    degree=slots.get("degree", ""),
                    university=slots.get("university", ""),
                    years=slots.get("years"),
                    location=slots.get("location"),
                )
            )
        slots.clear()

    def fill(slot: str, value: str):
        if slot in slots:
            flush()
        slots[slot] = value

    for block in blocks:
        for text in block.texts:
            years_match = DatePatterns.RANGE.search(text) or DatePatterns.YEAR.search(text)
            rest = text
            if years_match:
                rest = f"{text[: years_match.start()]} | {text[years_match.end():]}"

            piped = "|" in text
            pieces = [
                _strip_edges(p)
                for p in rest.replace(" — ", "|").replace(" – ", "|").split("|")
                if _strip_edges(p)
            ]
            for piece in pieces:
                has_degree = EducationPatterns.DEGREE.search(piece)
                has_university = EducationPatterns.UNIVERSITY.search(piece)
                if has_degree and has_university:
                    degree, university, location = _split_degree_and_university(piece)
                    fill("degree", degree)
                    if university:
                        fill("university", university)
                    if location:
                        slots["location"] = location
                elif has_degree:
                    fill("degree", piece)
                elif has_university:
                    fill("university", piece)
                elif piped and slots and "university" not in slots:
                    # "| Stanford | Stanford, CA |" names the institution first
                    slots["university"] = piece
                elif slots and "location" not in slots and _looks_like_location(piece):
                    slots["location"] = piece

            if years_match:
                if "years" in slots:
                    flush()
                slots["years"] = years_match.group(0)
        flush()

    return tuple(entries)


def _looks_like_location(text: str) -> bool:
    """Short, digit-free text without a label (rules out GPA and coursework lines)."""
    return len(text.split()) <= 5 and ":" not in text and not any(c.isdigit() for c in text)


def _split_degree_and_university(text: str) -> Tuple[str, str, str]:
    """
    Split 'B.S. Computer Science, Stanford University, Stanford, CA'.

    Returns:
        (degree, university, location) where location may be ""
    """
    parts = [p.strip() for p in EducationPatterns.INLINE_SEPARATOR.split(text) if p.strip()]
    index = next(
        (i for i, p in enumerate(parts) if i and EducationPatterns.UNIVERSITY.search(p)), None
    )
    if index is None:
        return text, "", ""
    return ", ".join(parts[:index]), parts[index], ", ".join(parts[index + 1 :])


def extract_skills(blocks: List[SectionBlock], vocabulary: Vocabulary) -> SkillSet:
    """Route each skills line by its label; unlabeled or unknown labels go to others."""
    buckets: Dict[str, List[str]] = {category: [] for category in SKILL_CATEGORIES}

    for block in blocks:
        for text in block.texts:
            category = "others"
            rest = text
            labeled = ListPatterns.LABEL.match(text)
            if labeled:
                category = vocabulary.category_for_label(labeled.group("label")) or "others"
                rest = labeled.group("rest")
            buckets[category].extend(_split_items(rest))

    return SkillSet(**{c: tuple(dedupe_casefold(items)) for c, items in buckets.items()})


def extract_projects(blocks: List[SectionBlock]) -> Tuple[ProjectEntry, ...]:
    projects = []
    for block in blocks:
        for bullet in block.loose_bullets:
            title, _, description = _split_title(bullet)
            projects.append(ProjectEntry(title=title, description=description or None))

        for entry in block.entries:
            title_line = entry.header_lines[0].text
            title, _, tech_stack = title_line.partition("|")
            body = [line.text for line in entry.header_lines[1:]]
            for bullet in entry.bullets:
                stack = ListPatterns.TECH_STACK_LABEL.match(bullet)
                if stack and not tech_stack.strip():
                    tech_stack = stack.group("stack")
                else:
                    body.append(bullet)

            projects.append(
                ProjectEntry(
                    title=_strip_edges(title),
                    description=body[0] if body else None,
                    contribution=" ".join(body[1:]) or None,
                    tech_stack=_strip_edges(tech_stack) or None,
                )
            )
    return tuple(projects)


def _split_title(text: str) -> Tuple[str, str, str]:
    """Split 'Title: description' or 'Title - description'."""
    for separator in (":", " — ", " – ", " - "):
        title, sep, rest = text.partition(separator)
        if sep and title.strip() and rest.strip():
            return title.strip(), sep, rest.strip()
    return text.strip(), "", ""


def extract_list_items(blocks: List[SectionBlock]) -> Tuple[str, ...]:
    """
    One item per bullet or non-bullet line.

    A title line followed by bullets collapses to "Title: b1; b2".
    """
    items = []
    for block in blocks:
        items.extend(block.loose_bullets)
        for entry in block.entries:
            header_texts = [line.text for line in entry.header_lines]
            if entry.bullets:
                items.extend(header_texts[:-1])
                items.append(f"{header_texts[-1].rstrip(':')}: {'; '.join(entry.bullets)}")
            else:
                items.extend(header_texts)
    return tuple(items)


def extract_summary(blocks: List[SectionBlock], preamble: List[str], min_chars: int) -> str:
    texts = [text for block in blocks for text in block.texts]
    if texts:
        return " ".join(texts)
    return next((line for line in preamble if len(line) >= min_chars), "")


# ============================================================================
# ORCHESTRATION
# ============================================================================


class ResumeTextParser:
    """
    Plain-text résumé parser bound to a vocabulary.

    Example:
        parser = ResumeTextParser()
        resume = parser.parse(text)
    """

    def __init__(self, vocabulary: Optional[Vocabulary] = None, max_chars: int = MAX_RESUME_CHARS):
        self.vocabulary = vocabulary or get_vocabulary()
        self.max_chars = max_chars

    def prepare_lines(self, raw_text: str) -> List[str]:
        """Apply the input bounds: character limit, then non-blank line limit."""
        text = raw_text[: self.max_chars]
        lines = [line for line in text.splitlines() if line.strip()]
        if len(lines) > self.vocabulary.max_lines:
            _log_warning(f"Resume truncated to {self.vocabulary.max_lines} lines")
        return lines[: self.vocabulary.max_lines]

    def fallback(self, raw_text: str) -> StructuredResume:
        """Record for text with no recognizable structure: a truncated summary only."""
        return StructuredResume(summary=raw_text.strip()[: self.vocabulary.fallback_summary_chars])

    def parse(self, raw_text: str) -> StructuredResume:
        lines = self.prepare_lines(raw_text)
        segmentation = ResumeSegmenter(self.vocabulary).segment(lines)

        if not segmentation.sections:
            if raw_text.strip():
                _log_warning("No section headers recognized, returning fallback record")
            return self.fallback(raw_text[: self.max_chars])

        vocab = self.vocabulary
        resume = StructuredResume(
            name=extract_name(segmentation.preamble, vocab.name_scan_lines),
            contact=extract_contact("\n".join(lines)),
            summary=extract_summary(
                segmentation.of_kind("summary"), segmentation.preamble, vocab.summary_min_chars
            ),
            experience=extract_experience(segmentation.of_kind("experience")),
            education=extract_education(segmentation.of_kind("education")),
            skills=extract_skills(segmentation.of_kind("skills"), vocab),
            projects=extract_projects(segmentation.of_kind("projects")),
            achievements=extract_list_items(segmentation.of_kind("achievements")),
            certifications=extract_list_items(segmentation.of_kind("certifications")),
        )

        log_parse_summary(resume, [s.kind for s in segmentation.sections])
        return resume


def parse_resume(raw_text: str) -> StructuredResume:
    """
    Parse free-form résumé text into a StructuredResume.

    Never raises for malformed text. Text without a recognized section header
    yields a record whose only field is a summary holding the first 500
    characters; parse_resume("") yields an empty record.

    Args:
        raw_text: Résumé text as extracted from a PDF

    Returns:
        StructuredResume with every identifiable field populated

    Raises:
        TypeError: If raw_text is not a str
        InvalidVocabularyError: If the configured vocabulary file cannot be loaded
    """
    if not isinstance(raw_text, str):
        raise TypeError(f"raw_text must be str, got {type(raw_text).__name__}")

    parser = ResumeTextParser()
    try:
        return parser.parse(raw_text)
    except Exception as e:
        _log_error(f"Resume parsing failed, returning fallback record: {e}")
        return parser.fallback(raw_text[: parser.max_chars])
