import argparse
import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv

from bahith.config.settings import Settings
from bahith.core.generator import create_generator_from_settings
from bahith.core.orchestrator import ResearchOrchestrator
from bahith.core.workflow import Completed
from bahith.export.assembler import assemble_document
from bahith.export.labels import labels_for_language
from bahith.export.text_exporter import export_markdown, export_plain_text, write_text
from bahith.export.word_exporter import WordExporter
from bahith.llm.client import GeminiClient
from bahith.llm.errors import BahithError
from bahith.models import ResearchData, ResearchMode
from bahith.parsers.outline_parser import parse_outline_text
from bahith.utils.filenames import default_filename
from bahith.utils.logger import logger

FORMAT_SUFFIXES = {'docx': '.docx', 'txt': '.txt', 'md': '.md'}


def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(description='Bahith - long-form research writer')
	parser.add_argument('topic', help='Research topic')
	parser.add_argument('--instructions', default='', help='Directions the model must follow')
	parser.add_argument(
		'--mode', choices=[mode.value for mode in ResearchMode], default=ResearchMode.SCIENTIFIC.value
	)
	parser.add_argument('--outline-file', type=Path, help='Use this outline (one title per line) instead of generating one')
	parser.add_argument('--review', action='store_true', help='Show the generated outline and ask before writing')
	parser.add_argument('--format', choices=sorted(FORMAT_SUFFIXES), default='docx', dest='output_format')
	parser.add_argument('--output', type=Path, help='Output file path')
	parser.add_argument(
		'--abort-on-section-failure',
		action='store_true',
		help='Stop at the first failing section instead of inserting a placeholder',
	)
	return parser


def confirm_outline(outline) -> bool:
	print('\nProposed outline:')
	for number, item in enumerate(outline, start=1):
		print(f'  {number}. {item.title}')
	answer = input('\nWrite the research with this outline? (yes/no): ')
	return answer.strip().lower() in ('y', 'yes')


async def run_research(args: argparse.Namespace, config: Settings) -> ResearchData | None:
	client = GeminiClient(api_key=config.GEMINI_API_KEY)
	orchestrator = ResearchOrchestrator(
		create_generator_from_settings(config, client=client),
		section_delay=config.SECTION_DELAY_SECONDS,
		abort_on_section_failure=args.abort_on_section_failure or config.ABORT_ON_SECTION_FAILURE,
	)

	suggested_outline = ''
	if args.outline_file:
		suggested_outline = args.outline_file.read_text(encoding='utf-8')
		print(f'Loaded {len(parse_outline_text(suggested_outline))} outline items from {args.outline_file}')

	try:
		state = await orchestrator.submit_topic(
			args.topic, args.instructions, ResearchMode(args.mode), suggested_outline
		)
		if isinstance(state, Completed):
			return state.data

		if args.review:
			pending = orchestrator.begin_review()
			if not confirm_outline(pending.outline):
				orchestrator.reset()
				print('Research cancelled')
				return None

		return await orchestrator.confirm_outline()
	finally:
		usage = client.get_usage_stats()
		logger.info(
			f'Token usage: {usage["input_tokens"]} input, {usage["output_tokens"]} output, '
			f'{usage["total_tokens"]} total'
		)


def export(data: ResearchData, args: argparse.Namespace, config: Settings) -> Path:
	suffix = FORMAT_SUFFIXES[args.output_format]
	output_path = args.output or config.OUTPUT_DIR / default_filename(data.topic, suffix)

	if args.output_format == 'txt':
		return write_text(export_plain_text(data), output_path)

	labels = labels_for_language(config.OUTPUT_LANGUAGE)
	document = assemble_document(data)
	if args.output_format == 'md':
		return write_text(export_markdown(document, labels), output_path)

	exporter = WordExporter(
		config.OUTPUT_DIR, font_name=config.DOCUMENT_FONT, right_to_left=config.RIGHT_TO_LEFT, labels=labels
	)
	return exporter.export(document, output_path)


def run(argv: list[str] | None = None):
	load_dotenv()
	args = build_parser().parse_args(argv)
	config = Settings()

	if not config.GEMINI_API_KEY:
		print('Error: GEMINI_API_KEY is not set. Add it to your environment or .env file.')
		sys.exit(1)

	print(f'Starting research: {args.topic}')
	data = asyncio.run(run_research(args, config))
	if data is None:
		return

	output_path = export(data, args, config)
	degraded = sum(1 for section in data.sections if section.degraded)
	print(f'\nResearch complete: {len(data.sections)} sections ({degraded} failed)')
	print(f'Output: {output_path}')


def main(argv: list[str] | None = None):
	try:
		run(argv)
	except KeyboardInterrupt:
		print('\n\nResearch interrupted.')
		sys.exit(0)
	except BahithError as e:
		print(f'\nError: {e}')
		sys.exit(1)


if __name__ == '__main__':
	main()
