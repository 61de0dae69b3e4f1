"""Pipeline — beautify then annotate, the way an editor host uses it.

Usage:

    pipeline = Pipeline.create()
    result = pipeline.process(editor_text)
    render(result.text)

Every call is independent; a host that fires calls faster than it
applies results is responsible for dropping the stale ones.
"""

from __future__ import annotations
from dataclasses import dataclass

from .annotator import Annotator, AnnotatorConfig, escape_markup
from .beautifier import Beautifier, BeautifyConfig
from .patterns import scan
from .types import AnnotatedText, Finding


@dataclass
class Pipeline:
    """Beautifier and annotator sharing one configuration."""

    beautifier: Beautifier
    annotator: Annotator

    @classmethod
    def create(
        cls,
        *,
        beautify_config: BeautifyConfig | None = None,
        annotator_config: AnnotatorConfig | None = None,
    ) -> "Pipeline":
        return cls(
            beautifier=Beautifier(beautify_config),
            annotator=Annotator(annotator_config),
        )

    def beautify(self, text: str) -> str:
        return self.beautifier.beautify(text)

    def scan(self, text: str) -> list[Finding]:
        """Findings against the text as the annotator would see it."""
        config = self.annotator.config
        source = escape_markup(text) if config.escape else text
        return scan(source, config.scanner)

    def annotate(self, text: str) -> AnnotatedText:
        return self.annotator.annotate(text)

    def process(self, text: str) -> AnnotatedText:
        """Beautify ``text`` and annotate the result.

        Blank input comes back as an empty ``AnnotatedText``.
        """
        formatted = self.beautifier.beautify(text)
        if not formatted:
            return AnnotatedText(text="")
        return self.annotator.annotate(formatted)
