from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date

from bahith.export.footnotes import FootnoteDefinition, Fragment, render_paragraph
from bahith.models import ResearchData, ResearchMode, ResearchSection, Source
from bahith.utils.logger import logger


@dataclass(frozen=True)
class RenderedSection:
	title: str
	paragraphs: tuple[tuple[Fragment, ...], ...]
	degraded: bool = False


@dataclass(frozen=True)
class AssembledDocument:
	title: str
	mode: ResearchMode
	generated_on: date
	sections: tuple[RenderedSection, ...]
	footnotes: tuple[FootnoteDefinition, ...]
	bibliography: tuple[Source, ...]


def collect_sources(sections: Iterable[ResearchSection]) -> list[Source]:
	# Sources compare by title and uri together; the first occurrence keeps its position
	seen: set[Source] = set()
	unique: list[Source] = []
	for section in sections:
		for source in section.sources:
			if source in seen:
				continue
			seen.add(source)
			unique.append(source)
	return unique


def assemble_document(data: ResearchData, generated_on: date | None = None) -> AssembledDocument:
	if not data.is_complete:
		raise ValueError(
			f'Research data is incomplete: {len(data.sections)} sections for {len(data.outline)} outline items'
		)

	next_id = 1
	footnotes: list[FootnoteDefinition] = []
	rendered_sections: list[RenderedSection] = []

	for section in data.sections:
		paragraphs = []
		for line in section.content.split('\n'):
			rendered = render_paragraph(line, next_id)
			if not rendered.fragments:
				continue
			paragraphs.append(rendered.fragments)
			footnotes.extend(rendered.footnotes)
			next_id = rendered.next_id

		rendered_sections.append(
			RenderedSection(title=section.title, paragraphs=tuple(paragraphs), degraded=section.degraded)
		)

	bibliography = collect_sources(data.sections)
	logger.info(
		f'Assembled document: {len(rendered_sections)} sections, {len(footnotes)} footnotes, '
		f'{len(bibliography)} sources'
	)

	return AssembledDocument(
		title=data.topic,
		mode=data.mode,
		generated_on=generated_on or date.today(),
		sections=tuple(rendered_sections),
		footnotes=tuple(footnotes),
		bibliography=tuple(bibliography),
	)
