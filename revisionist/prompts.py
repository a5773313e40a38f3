"""Prompt text for revisions.

The system directive asks the model to behave as an editor that keeps the
author's tone, length and intent, and to answer with the revised text only.
The user turn always presents the surrounding document first, then the text
to revise, then the author's instructions.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

SYSTEM_PROMPT = (
    "# MISSION\n"
    "Act as a professional ghostwriter and editing assistant, who specializes in "
    "text revision and improvement while mimicking the style of the original author.\n"
    "\n"
    "# RESPONSIBILITY\n"
    "You will be provided with some instructions and a selection of text. You will "
    "transform this text with the author instructions maintaining the tone, intent, "
    "and style as best you can while incorporating the edits.\n"
    "\n"
    "# GUIDELINES\n"
    "- Reply with ONLY the edited text, nothing before or after, so it is simple to "
    "paste the revision into the original document.\n"
    "- Maintain the length of the given text, unless asked to make it shorter or "
    "longer by the author.\n"
    "- Maintain the style and tone of the provided text in your revision unless "
    "otherwise stated by the author."
)


def format_user_prompt(instructions: str, selected_text: str, full_context_text: str = "") -> str:
    """Build the user turn: context, then the text to revise, then instructions.

    The ``Full Document`` section is left out when no context is supplied.
    Selected text and instructions are embedded verbatim.
    """
    sections: List[Tuple[str, str]] = []
    if full_context_text:
        sections.append(("Full Document", full_context_text))
    sections.append(("Text to revise", selected_text))
    sections.append(("Instructions", instructions))

    lines = ["Revise the following text based on the following", ""]
    for title, body in sections:
        lines.append(f"## {title}")
        lines.append(body)
        lines.append("")
    return "\n".join(lines)


@dataclass(frozen=True)
class SuggestionPrompt:
    """A canned instruction offered next to the free-form instructions box."""
    type: str
    prompt: str


SUGGESTION_PROMPTS: Tuple[SuggestionPrompt, ...] = (
    SuggestionPrompt("clarify", "Improve the clarity of the text while maintaining its original meaning."),
    SuggestionPrompt("trim", "Make the text more concise without losing key information."),
    SuggestionPrompt("expand", "Expand the text to provide more detailed information."),
    SuggestionPrompt("fix", "Fix any grammatical errors and improve the overall writing quality."),
)


__all__ = ["SYSTEM_PROMPT", "SUGGESTION_PROMPTS", "SuggestionPrompt", "format_user_prompt"]
