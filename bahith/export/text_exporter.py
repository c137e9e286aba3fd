from pathlib import Path

from bahith.export.assembler import AssembledDocument
from bahith.export.footnotes import FootnoteMarker
from bahith.export.labels import DocumentLabels
from bahith.models import ResearchData
from bahith.utils.logger import logger

SECTION_SEPARATOR = '\n\n---\n\n'


def export_plain_text(data: ResearchData) -> str:
	"""Sections as ``title`` + blank line + raw content; citations stay inline."""
	return SECTION_SEPARATOR.join(f'{section.title}\n\n{section.content}' for section in data.sections)


def export_markdown(document: AssembledDocument, labels: DocumentLabels | None = None) -> str:
	labels = labels or DocumentLabels()
	lines = [
		f'# {document.title}',
		'',
		f'*{labels.subtitle(document.mode)}*',
		'',
		f'{labels.date_prefix}: {document.generated_on.isoformat()}',
		'',
	]

	for section in document.sections:
		lines.extend([f'## {section.title}', ''])
		for fragments in section.paragraphs:
			text = ''.join(
				f'[^{fragment.id}]' if isinstance(fragment, FootnoteMarker) else fragment.value for fragment in fragments
			)
			lines.extend([text, ''])

	lines.extend([f'## {labels.bibliography_title}', ''])
	if document.bibliography:
		for number, source in enumerate(document.bibliography, start=1):
			lines.append(f'{number}. [{source.title}]({source.uri})')
	else:
		lines.append(labels.bibliography_empty)

	if document.footnotes:
		lines.append('')
		lines.extend(f'[^{footnote.id}]: {footnote.body}' for footnote in document.footnotes)

	return '\n'.join(lines) + '\n'


def write_text(content: str, output_path: Path) -> Path:
	output_path = Path(output_path)
	output_path.parent.mkdir(parents=True, exist_ok=True)
	output_path.write_text(content, encoding='utf-8')
	logger.info(f'Research exported to: {output_path}')
	return output_path
