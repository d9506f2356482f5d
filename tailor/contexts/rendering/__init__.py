"""
Rendering Context

Responsibilities:
- Renders résumé records into the canonical plain-text layout
- Owns layout constants (column width, bullet prefix, separators, section order)

Owns: Text layout
Never: Modifies record content or ordering
"""

from tailor.contexts.rendering.formatter import LINE_WIDTH, SECTION_ORDER, format_resume

__all__ = ["format_resume", "LINE_WIDTH", "SECTION_ORDER"]
