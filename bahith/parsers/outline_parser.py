import json
import re
from collections.abc import Iterable

from bahith.llm.errors import OutlineParseError
from bahith.models import OutlineItem
from bahith.utils.logger import logger

_FENCE = re.compile(r'```(?:json)?', re.IGNORECASE)


def parse_outline_response(text: str | None) -> list[OutlineItem]:
	"""Parse the model's JSON outline: ``[{"title": ...}, ...]``."""
	if not text or not text.strip():
		raise OutlineParseError('No response received from the model for the outline')

	cleaned = _FENCE.sub('', text).strip()

	try:
		parsed = json.loads(cleaned)
	except json.JSONDecodeError as e:
		raise OutlineParseError(f'Outline response is not valid JSON: {e}') from e

	if not isinstance(parsed, list):
		raise OutlineParseError(f'Outline response must be a JSON array, got {type(parsed).__name__}')

	items = []
	for index, entry in enumerate(parsed):
		title = entry.get('title') if isinstance(entry, dict) else None
		if not isinstance(title, str) or not title.strip():
			raise OutlineParseError(f'Outline entry {index} has no title: {entry!r}')
		items.append(OutlineItem(id=f'section-{index}', title=title))

	logger.info(f'Parsed outline with {len(items)} items')
	return items


def parse_outline_text(text: str) -> list[OutlineItem]:
	"""One item per non-blank line, in order."""
	lines = [line.strip() for line in text.split('\n')]
	return [OutlineItem(id=f'custom-{index}', title=line) for index, line in enumerate(filter(None, lines))]


def dedupe_outline(items: Iterable[OutlineItem]) -> list[OutlineItem]:
	# Case-sensitive comparison of trimmed titles; first occurrence wins
	seen: set[str] = set()
	unique = []
	for item in items:
		key = item.title.strip()
		if key in seen:
			logger.debug(f'Dropping duplicate outline item: {item.title!r}')
			continue
		seen.add(key)
		unique.append(item)
	return unique
