"""
Recognition of inline source references in generated prose.

A citation is a parenthesized group holding at least one unit marker
(volume, page, part or number, in Arabic or English) directly followed by
digits, e.g. ``(Book A, p. 12)`` or ``(ينظر: المغني، ج 3، ص 45)``. Ordinary
parenthetical remarks never match.
"""

import re
from collections.abc import Iterator
from dataclasses import dataclass

UNIT_MARKERS = ('مجلد', 'صفحة', 'ج', 'ص', 'vol', 'pp', 'pg', 'p', 'no')

_UNIT = '|'.join(re.escape(marker) for marker in UNIT_MARKERS)
_LOCATOR = rf'[،,/]\s*(?:{_UNIT})\.?\s*\d+(?:\s*[-–]\s*\d+)?'

CITATION_PATTERN = re.compile(
	r'\('
	r'(?P<attribution>(?:(?:ينظر|انظر|see)\s*:|cf\.?:?)\s*)?'
	r'[^()]+?'
	rf'(?:{_LOCATOR})+'
	r'\s*\)',
	re.IGNORECASE,
)


@dataclass(frozen=True)
class CitationSpan:
	start: int
	end: int
	text: str
	attribution: str | None = None

	@property
	def body(self) -> str:
		"""Payload without the enclosing parentheses."""
		return self.text[1:-1]

	@classmethod
	def from_match(cls, match: re.Match) -> 'CitationSpan':
		attribution = match.group('attribution')
		return cls(
			start=match.start(),
			end=match.end(),
			text=match.group(0),
			attribution=attribution.strip() if attribution else None,
		)


class CitationScan:
	"""Lazy, restartable scan; every iteration rescans from the beginning."""

	def __init__(self, text: str):
		self.text = text

	def __iter__(self) -> Iterator[CitationSpan]:
		# finditer resumes strictly after each match so spans never overlap
		for match in CITATION_PATTERN.finditer(self.text):
			yield CitationSpan.from_match(match)


def find_citation_spans(text: str) -> CitationScan:
	return CitationScan(text)


def extract_citations(text: str) -> list[str]:
	return [span.text for span in find_citation_spans(text)]
