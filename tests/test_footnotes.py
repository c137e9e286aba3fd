import pytest

from bahith.citations import find_citation_spans
from bahith.export.footnotes import (
	FootnoteDefinition,
	FootnoteMarker,
	TextFragment,
	reconstruct_paragraph,
	render_paragraph,
)

PARAGRAPHS = [
	'water is essential (Book A, p. 12) for life.',
	'(Opening, p. 1) starts with a citation and ends with another (Closing, vol. 2, p. 3)',
	'Adjacent (A, p. 1)(B, p. 2) citations.',
	'الماء طهور (ينظر: المغني، ج 1، ص 12) وهو كذلك (المجموع، ج 2، ص 5).',
	'No citations here (just an aside).',
	'He wrote (in passing, a remark (Book, p. 3) about water.',
]


def test_renders_text_and_marker_fragments():
	rendered = render_paragraph('water is essential (Book A, p. 12) for life.')

	assert rendered.fragments == (
		TextFragment('water is essential '),
		FootnoteMarker(1),
		TextFragment(' for life.'),
	)
	assert rendered.footnotes == (FootnoteDefinition(id=1, body='Book A, p. 12'),)
	assert rendered.next_id == 2


def test_continues_numbering_from_given_id():
	rendered = render_paragraph('A (X, p. 1) B (Y, p. 2)', next_id=5)

	assert [f.id for f in rendered.fragments if isinstance(f, FootnoteMarker)] == [5, 6]
	assert [footnote.id for footnote in rendered.footnotes] == [5, 6]
	assert rendered.next_id == 7


def test_leading_citation_has_no_empty_text_fragment():
	rendered = render_paragraph('(A, p. 1) starts here')

	assert rendered.fragments == (FootnoteMarker(1), TextFragment(' starts here'))


@pytest.mark.parametrize('paragraph', ['', '   ', '\t'])
def test_blank_paragraphs_are_skipped(paragraph):
	rendered = render_paragraph(paragraph, next_id=3)

	assert rendered.fragments == ()
	assert rendered.footnotes == ()
	assert rendered.next_id == 3


@pytest.mark.parametrize('paragraph', PARAGRAPHS)
def test_rendering_is_lossless(paragraph):
	rendered = render_paragraph(paragraph)

	assert reconstruct_paragraph(rendered.fragments, rendered.footnotes) == paragraph


def test_accepts_precomputed_spans():
	text = 'A (X, p. 1) B'
	spans = list(find_citation_spans(text))

	rendered = render_paragraph(text, spans=spans)

	assert rendered.footnotes == (FootnoteDefinition(id=1, body='X, p. 1'),)


def test_rejects_non_positive_ids():
	with pytest.raises(ValueError):
		render_paragraph('text', next_id=0)


def test_unclosed_parenthetical_stays_in_text():
	rendered = render_paragraph('He wrote (in passing, a remark (Book, p. 3) about water.')

	assert rendered.fragments == (
		TextFragment('He wrote (in passing, a remark '),
		FootnoteMarker(1),
		TextFragment(' about water.'),
	)
	assert rendered.footnotes == (FootnoteDefinition(id=1, body='Book, p. 3'),)
