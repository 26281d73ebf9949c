"""Markdown rendering for question text served to the quiz page.

Questions authored in the sheet may use light markdown (emphasis, inline code,
lists). The quiz endpoints send both the raw text and HTML so the page can show
the HTML directly. Raw HTML typed into the sheet is escaped, never passed on.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from markdown_it import MarkdownIt

from trivia_quiz.core.models import QuizQuestion

EMPTY_QUESTION_HTML = "<p><em>No question text.</em></p>"


@dataclass(slots=True)
class QuestionRenderer:
    """Turns question and option markdown into HTML."""

    _markdown: MarkdownIt = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._markdown = MarkdownIt("commonmark", {"html": False}).enable("strikethrough")

    def render_fragment(self, markdown_text: str) -> str:
        """Render block markdown (the question body) into an HTML fragment."""
        text = markdown_text.strip()
        if not text:
            return EMPTY_QUESTION_HTML
        return self._markdown.render(text)

    def render_inline(self, markdown_text: str) -> str:
        """Render a single line (an answer option) without wrapping paragraphs."""
        return self._markdown.renderInline(markdown_text.strip())

    def render_question(self, question: QuizQuestion) -> dict[str, object]:
        return {
            "question_html": self.render_fragment(question.question_text),
            "options_html": [self.render_inline(option) for option in question.options],
        }


renderer = QuestionRenderer()
