from datetime import date

import pytest

from bahith.export.assembler import assemble_document, collect_sources
from bahith.export.footnotes import FootnoteMarker, TextFragment
from bahith.models import OutlineItem, ResearchData, ResearchMode, ResearchSection, Source


def make_data(*sections: ResearchSection, topic: str = 'Water') -> ResearchData:
	outline = tuple(OutlineItem(id=f'section-{i}', title=s.title) for i, s in enumerate(sections))
	return ResearchData(topic=topic, outline=outline, sections=sections, mode=ResearchMode.SCIENTIFIC)


@pytest.fixture
def research_data():
	return make_data(
		ResearchSection(
			title='Kinds of water',
			content='water is essential (Book A, p. 12) for life.\n\nRain is pure (Book B, vol. 1, p. 3).',
			sources=(Source('Book A', 'https://a.example'), Source('Shared', 'https://shared.example')),
		),
		ResearchSection(
			title='Rulings',
			content='Sea water purifies (Book C, p. 7) and (Book D, p. 8).\n   \nNo citation in this line.',
			sources=(Source('Shared', 'https://shared.example'), Source('Book C', 'https://c.example')),
		),
	)


def test_footnote_ids_are_global_and_start_at_one(research_data):
	document = assemble_document(research_data, generated_on=date(2026, 1, 1))

	assert [footnote.id for footnote in document.footnotes] == [1, 2, 3, 4]
	assert [footnote.body for footnote in document.footnotes] == [
		'Book A, p. 12',
		'Book B, vol. 1, p. 3',
		'Book C, p. 7',
		'Book D, p. 8',
	]

	markers = [
		fragment.id
		for section in document.sections
		for paragraph in section.paragraphs
		for fragment in paragraph
		if isinstance(fragment, FootnoteMarker)
	]
	assert markers == [1, 2, 3, 4]


def test_blank_lines_are_not_paragraphs(research_data):
	document = assemble_document(research_data)

	assert [len(section.paragraphs) for section in document.sections] == [2, 2]
	assert document.sections[1].paragraphs[1] == (TextFragment('No citation in this line.'),)


def test_title_block_fields(research_data):
	document = assemble_document(research_data, generated_on=date(2026, 1, 1))

	assert document.title == 'Water'
	assert document.mode == ResearchMode.SCIENTIFIC
	assert document.generated_on == date(2026, 1, 1)
	assert [section.title for section in document.sections] == ['Kinds of water', 'Rulings']


def test_bibliography_is_union_of_unique_sources(research_data):
	document = assemble_document(research_data)

	assert document.bibliography == (
		Source('Book A', 'https://a.example'),
		Source('Shared', 'https://shared.example'),
		Source('Book C', 'https://c.example'),
	)


def test_sources_compare_by_title_and_uri():
	sections = [
		ResearchSection(title='A', content='', sources=(Source('One', 'https://x.example'),)),
		ResearchSection(title='B', content='', sources=(Source('Other title', 'https://x.example'),)),
	]

	assert len(collect_sources(sections)) == 2


def test_empty_sources_give_empty_bibliography():
	document = assemble_document(make_data(ResearchSection(title='A', content='text')))

	assert document.bibliography == ()


def test_degraded_flag_is_carried():
	document = assemble_document(make_data(ResearchSection(title='A', content='failed', degraded=True)))

	assert document.sections[0].degraded


def test_incomplete_data_is_rejected():
	data = ResearchData(
		topic='Water',
		outline=(OutlineItem('section-0', 'A'), OutlineItem('section-1', 'B')),
		sections=(ResearchSection(title='A', content='text'),),
	)

	with pytest.raises(ValueError):
		assemble_document(data)
