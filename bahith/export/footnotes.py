from collections.abc import Iterable
from dataclasses import dataclass

from bahith.citations.matcher import CitationSpan, find_citation_spans


@dataclass(frozen=True)
class TextFragment:
	value: str


@dataclass(frozen=True)
class FootnoteMarker:
	id: int


Fragment = TextFragment | FootnoteMarker


@dataclass(frozen=True)
class FootnoteDefinition:
	id: int
	body: str


@dataclass(frozen=True)
class RenderedParagraph:
	fragments: tuple[Fragment, ...]
	footnotes: tuple[FootnoteDefinition, ...]
	next_id: int


def render_paragraph(
	paragraph: str, next_id: int = 1, spans: Iterable[CitationSpan] | None = None
) -> RenderedParagraph:
	"""Split a paragraph into text runs and footnote markers.

	``next_id`` is the first footnote number available to this paragraph; the
	returned ``next_id`` is what the following paragraph must continue from.
	Blank paragraphs yield no fragments and consume no ids.
	"""
	if next_id < 1:
		raise ValueError(f'Footnote ids start at 1, got {next_id}')

	if not paragraph.strip():
		return RenderedParagraph(fragments=(), footnotes=(), next_id=next_id)

	if spans is None:
		spans = find_citation_spans(paragraph)

	fragments: list[Fragment] = []
	footnotes: list[FootnoteDefinition] = []
	last_index = 0

	for span in spans:
		if span.start > last_index:
			fragments.append(TextFragment(paragraph[last_index : span.start]))

		fragments.append(FootnoteMarker(next_id))
		footnotes.append(FootnoteDefinition(id=next_id, body=span.body))
		next_id += 1
		last_index = span.end

	if last_index < len(paragraph):
		fragments.append(TextFragment(paragraph[last_index:]))

	return RenderedParagraph(fragments=tuple(fragments), footnotes=tuple(footnotes), next_id=next_id)


def reconstruct_paragraph(fragments: Iterable[Fragment], footnotes: Iterable[FootnoteDefinition]) -> str:
	bodies = {footnote.id: footnote.body for footnote in footnotes}
	parts = []
	for fragment in fragments:
		if isinstance(fragment, FootnoteMarker):
			parts.append(f'({bodies[fragment.id]})')
		else:
			parts.append(fragment.value)
	return ''.join(parts)
