from datetime import date

from bahith.export.assembler import assemble_document
from bahith.export.labels import ENGLISH_LABELS
from bahith.export.text_exporter import export_markdown, export_plain_text, write_text
from bahith.models import OutlineItem, ResearchData, ResearchSection, Source


def make_data(sources=()):
	return ResearchData(
		topic='Water',
		outline=(OutlineItem('section-0', 'Intro'), OutlineItem('section-1', 'Body')),
		sections=(
			ResearchSection(title='Intro', content='water is essential (Book A, p. 12) for life.', sources=sources),
			ResearchSection(title='Body', content='Second line.'),
		),
	)


def test_plain_text_keeps_citations_inline():
	text = export_plain_text(make_data())

	assert text == 'Intro\n\nwater is essential (Book A, p. 12) for life.\n\n---\n\nBody\n\nSecond line.'


def test_markdown_uses_footnote_markers():
	document = assemble_document(make_data((Source('Book A', 'https://a.example'),)), generated_on=date(2026, 1, 1))

	markdown = export_markdown(document, ENGLISH_LABELS)

	assert markdown.startswith('# Water\n')
	assert '## Intro' in markdown
	assert 'water is essential [^1] for life.' in markdown
	assert '[^1]: Book A, p. 12' in markdown
	assert '1. [Book A](https://a.example)' in markdown
	assert 'Date: 2026-01-01' in markdown


def test_markdown_placeholder_without_sources():
	markdown = export_markdown(assemble_document(make_data()), ENGLISH_LABELS)

	assert ENGLISH_LABELS.bibliography_empty in markdown


def test_write_text_creates_parent_dirs(tmp_path):
	output_path = write_text('content', tmp_path / 'nested' / 'out.txt')

	assert output_path.read_text(encoding='utf-8') == 'content'
