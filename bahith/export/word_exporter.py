from io import BytesIO
from pathlib import Path

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.opc.constants import CONTENT_TYPE as CT
from docx.opc.constants import RELATIONSHIP_TYPE as RT
from docx.opc.packuri import PackURI
from docx.opc.part import XmlPart
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Inches, Pt, RGBColor

from bahith.config.settings import settings
from bahith.export.assembler import AssembledDocument, RenderedSection
from bahith.export.footnotes import FootnoteDefinition, FootnoteMarker, Fragment
from bahith.export.labels import DocumentLabels
from bahith.utils.filenames import default_filename
from bahith.utils.logger import logger

TITLE_COLOR = RGBColor(0x2E, 0x7D, 0x32)
HEADING_COLOR = RGBColor(0x00, 0x69, 0x5C)
DEGRADED_COLOR = RGBColor(0xB7, 0x1C, 0x1C)

BODY_SIZE = Pt(14)
NOTE_SIZE = Pt(10)

# Children of w:pPr that must follow w:bidi
_BIDI_SUCCESSORS = (
	'w:adjustRightInd',
	'w:snapToGrid',
	'w:spacing',
	'w:ind',
	'w:contextualSpacing',
	'w:mirrorIndents',
	'w:suppressOverlap',
	'w:jc',
	'w:textDirection',
	'w:textAlignment',
	'w:textboxTightWrap',
	'w:outlineLvl',
	'w:divId',
	'w:cnfStyle',
	'w:rPr',
	'w:sectPr',
	'w:pPrChange',
)


class WordExporter:
	def __init__(
		self,
		output_dir: Path | None = None,
		font_name: str | None = None,
		right_to_left: bool | None = None,
		labels: DocumentLabels | None = None,
	):
		self.output_dir = Path(output_dir or settings.OUTPUT_DIR)
		self.font_name = font_name or settings.DOCUMENT_FONT
		self.right_to_left = settings.RIGHT_TO_LEFT if right_to_left is None else right_to_left
		self.labels = labels or DocumentLabels()

	def export(self, document: AssembledDocument, output_path: Path | None = None) -> Path:
		logger.info(f'Exporting research to Word: {document.title}')

		if output_path is None:
			output_path = self.output_dir / default_filename(document.title, '.docx')
		output_path = Path(output_path)
		output_path.parent.mkdir(parents=True, exist_ok=True)

		self.build(document).save(output_path)

		logger.info(f'Research exported to: {output_path}')
		return output_path

	def to_bytes(self, document: AssembledDocument) -> bytes:
		buffer = BytesIO()
		self.build(document).save(buffer)
		return buffer.getvalue()

	def build(self, document: AssembledDocument):
		doc = Document()
		self._setup_document_style(doc)
		self._add_title_block(doc, document)
		for section in document.sections:
			self._add_section(doc, section)
		self._add_bibliography(doc, document)
		self._add_footnotes(doc, document.footnotes)
		return doc

	def _setup_document_style(self, doc):
		style = doc.styles['Normal']
		style.font.name = self.font_name
		style.font.size = BODY_SIZE

		paragraph_format = style.paragraph_format
		paragraph_format.line_spacing = 1.5
		paragraph_format.space_after = Pt(10)

		for section in doc.sections:
			section.top_margin = Inches(1)
			section.bottom_margin = Inches(1)
			section.left_margin = Inches(1)
			section.right_margin = Inches(1)

	def _add_title_block(self, doc, document: AssembledDocument):
		title_para = doc.add_heading('', 0)
		self._set_bidi(title_para)
		title_para.alignment = WD_ALIGN_PARAGRAPH.CENTER
		title_run = title_para.add_run(document.title)
		self._format_run(title_run, Pt(24), bold=True, color=TITLE_COLOR)

		subtitle_para = doc.add_paragraph()
		self._set_bidi(subtitle_para)
		subtitle_para.alignment = WD_ALIGN_PARAGRAPH.CENTER
		subtitle_run = subtitle_para.add_run(self.labels.subtitle(document.mode))
		self._format_run(subtitle_run, BODY_SIZE)
		subtitle_run.italic = True

		date_para = doc.add_paragraph()
		self._set_bidi(date_para)
		date_para.alignment = WD_ALIGN_PARAGRAPH.CENTER
		date_para.paragraph_format.space_after = Pt(40)
		date_run = date_para.add_run(f'{self.labels.date_prefix}: {document.generated_on.isoformat()}')
		self._format_run(date_run, BODY_SIZE)

	def _add_section(self, doc, section: RenderedSection):
		heading = doc.add_heading('', 1)
		self._set_bidi(heading)
		heading.paragraph_format.space_before = Pt(20)
		heading_run = heading.add_run(section.title)
		self._format_run(heading_run, Pt(16), bold=True, color=HEADING_COLOR)

		if section.degraded:
			logger.warning(f'Exporting degraded section: {section.title}')

		for fragments in section.paragraphs:
			self._add_paragraph(doc, fragments, degraded=section.degraded)

	def _add_paragraph(self, doc, fragments: tuple[Fragment, ...], degraded: bool = False):
		para = doc.add_paragraph()
		self._set_bidi(para)
		para.alignment = WD_ALIGN_PARAGRAPH.JUSTIFY

		for fragment in fragments:
			if isinstance(fragment, FootnoteMarker):
				self._add_footnote_reference(para, fragment.id)
				continue

			run = para.add_run(fragment.value)
			self._format_run(run, BODY_SIZE, color=DEGRADED_COLOR if degraded else None)
			if degraded:
				run.italic = True

	def _add_footnote_reference(self, para, footnote_id: int):
		# Bracketed superscript marker: (n)
		opening = para.add_run('(')
		self._format_run(opening, NOTE_SIZE, superscript=True)

		reference_run = para.add_run()
		reference_run.font.superscript = True
		reference = OxmlElement('w:footnoteReference', {qn('w:id'): str(footnote_id)})
		reference_run._r.append(reference)

		closing = para.add_run(')')
		self._format_run(closing, NOTE_SIZE, superscript=True)

	def _add_bibliography(self, doc, document: AssembledDocument):
		doc.add_page_break()

		heading = doc.add_heading('', 1)
		self._set_bidi(heading)
		heading.alignment = WD_ALIGN_PARAGRAPH.CENTER
		self._format_run(heading.add_run(self.labels.bibliography_title), Pt(18), bold=True)

		if not document.bibliography:
			para = doc.add_paragraph()
			self._set_bidi(para)
			para.alignment = WD_ALIGN_PARAGRAPH.CENTER
			self._format_run(para.add_run(self.labels.bibliography_empty), BODY_SIZE)
			logger.info('No grounding sources, added placeholder notice')
			return

		intro = doc.add_paragraph()
		self._set_bidi(intro)
		self._format_run(intro.add_run(self.labels.bibliography_intro), Pt(12))

		for number, source in enumerate(document.bibliography, start=1):
			para = doc.add_paragraph()
			self._set_bidi(para)
			self._format_run(para.add_run(f'{number}. {source.title} - {source.uri}'), Pt(12))

		logger.info(f'Added {len(document.bibliography)} sources')

	def _add_footnotes(self, doc, footnotes: tuple[FootnoteDefinition, ...]):
		if not footnotes:
			return

		root = OxmlElement('w:footnotes')
		root.append(_separator_footnote(-1, 'separator'))
		root.append(_separator_footnote(0, 'continuationSeparator'))
		for footnote in footnotes:
			root.append(self._footnote_element(footnote))

		existing = next(
			(rel.target_part for rel in doc.part.rels.values() if rel.reltype == RT.FOOTNOTES and not rel.is_external),
			None,
		)
		if isinstance(existing, XmlPart):
			existing._element = root
		else:
			part = XmlPart(PackURI('/word/footnotes.xml'), CT.WML_FOOTNOTES, root, doc.part.package)
			doc.part.relate_to(part, RT.FOOTNOTES)
		logger.debug(f'Attached {len(footnotes)} footnotes')

	def _footnote_element(self, footnote: FootnoteDefinition):
		element = OxmlElement('w:footnote', {qn('w:id'): str(footnote.id)})
		p = OxmlElement('w:p')
		if self.right_to_left:
			p_pr = OxmlElement('w:pPr')
			p_pr.append(OxmlElement('w:bidi'))
			p.append(p_pr)

		ref_run = OxmlElement('w:r')
		ref_props = OxmlElement('w:rPr')
		ref_props.append(OxmlElement('w:vertAlign', {qn('w:val'): 'superscript'}))
		ref_run.append(ref_props)
		ref_run.append(OxmlElement('w:footnoteRef'))
		p.append(ref_run)

		text_run = OxmlElement('w:r')
		text_props = OxmlElement('w:rPr')
		text_props.append(
			OxmlElement(
				'w:rFonts',
				{qn('w:ascii'): self.font_name, qn('w:hAnsi'): self.font_name, qn('w:cs'): self.font_name},
			)
		)
		half_points = str(int(NOTE_SIZE.pt * 2))
		text_props.append(OxmlElement('w:sz', {qn('w:val'): half_points}))
		text_props.append(OxmlElement('w:szCs', {qn('w:val'): half_points}))
		if self.right_to_left:
			text_props.append(OxmlElement('w:rtl'))
		text_run.append(text_props)
		text = OxmlElement('w:t', {'{http://www.w3.org/XML/1998/namespace}space': 'preserve'})
		text.text = f' {footnote.body}'
		text_run.append(text)
		p.append(text_run)

		element.append(p)
		return element

	def _set_bidi(self, para):
		if not self.right_to_left:
			return
		p_pr = para._p.get_or_add_pPr()
		p_pr.insert_element_before(OxmlElement('w:bidi'), *_BIDI_SUCCESSORS)

	def _format_run(self, run, size, bold: bool = False, color: RGBColor | None = None, superscript: bool = False):
		run.font.name = self.font_name
		run.font.size = size
		if bold:
			run.bold = True
		if color is not None:
			run.font.color.rgb = color
		if superscript:
			run.font.superscript = True
		if self.right_to_left:
			run.font.rtl = True
			# Arabic text is laid out with the complex-script font
			run._r.get_or_add_rPr().get_or_add_rFonts().set(qn('w:cs'), self.font_name)


def _separator_footnote(footnote_id: int, kind: str):
	element = OxmlElement('w:footnote', {qn('w:type'): kind, qn('w:id'): str(footnote_id)})
	p = OxmlElement('w:p')
	r = OxmlElement('w:r')
	r.append(OxmlElement(f'w:{kind}'))
	p.append(r)
	element.append(p)
	return element
