import time

from bahith.citations.matcher import extract_citations
from bahith.config.settings import Settings, settings
from bahith.llm.client import GeminiClient, ModelProfile, TextGenerator
from bahith.llm.fallback import FallbackPolicy
from bahith.llm.prompts import outline_prompt, section_prompt, system_instruction
from bahith.models import OutlineItem, ResearchMode, ResearchSection
from bahith.parsers.outline_parser import parse_outline_response
from bahith.utils.logger import logger

EMPTY_CONTENT = 'تعذر توليد المحتوى.'


class ResearchGenerator:
	def __init__(
		self,
		client: TextGenerator,
		primary_model: str,
		fallback_model: str,
		use_search: bool = True,
		outline_thinking_budget: int | None = 2048,
		section_thinking_budget: int | None = 4096,
		language: str = 'Arabic',
	):
		self.policy = FallbackPolicy(client, fallback_model)
		self.primary_model = primary_model
		self.use_search = use_search
		self.outline_thinking_budget = outline_thinking_budget
		self.section_thinking_budget = section_thinking_budget
		self.language = language

	async def generate_outline(
		self, topic: str, instructions: str = '', mode: ResearchMode = ResearchMode.SCIENTIFIC
	) -> list[OutlineItem]:
		logger.info(f'Requesting outline for: {topic} ({mode.value})')

		result = await self.policy.generate(
			outline_prompt(topic, instructions, mode),
			self._profile(self.outline_thinking_budget),
			system_instruction=system_instruction(mode, self.language),
		)
		return parse_outline_response(result.text)

	async def generate_section(
		self,
		topic: str,
		section_title: str,
		instructions: str = '',
		mode: ResearchMode = ResearchMode.SCIENTIFIC,
	) -> ResearchSection:
		logger.info(f'=== Generating: {section_title} ===')
		start_time = time.time()

		result = await self.policy.generate(
			section_prompt(topic, section_title, instructions, mode),
			self._profile(self.section_thinking_budget),
			system_instruction=system_instruction(mode, self.language),
		)

		content = result.text or EMPTY_CONTENT
		# Split like the assembler does: a citation broken across lines is not a citation
		citations = [citation for line in content.split('\n') for citation in extract_citations(line)]

		logger.info(
			f'Section completed in {time.time() - start_time:.2f}s '
			f'({len(citations)} citations, {len(result.sources)} sources)'
		)

		return ResearchSection(
			title=section_title,
			content=content,
			citations=tuple(citations),
			sources=tuple(result.sources),
		)

	def _profile(self, thinking_budget: int | None) -> ModelProfile:
		return ModelProfile(model=self.primary_model, use_search=self.use_search, thinking_budget=thinking_budget)


def create_generator_from_settings(config: Settings = settings, client: TextGenerator | None = None) -> ResearchGenerator:
	if client is None:
		if not config.GEMINI_API_KEY:
			raise ValueError('GEMINI_API_KEY is not set. Add it to your environment or .env file.')
		client = GeminiClient(api_key=config.GEMINI_API_KEY)

	return ResearchGenerator(
		client,
		primary_model=config.PRIMARY_MODEL,
		fallback_model=config.FALLBACK_MODEL,
		use_search=config.ENABLE_SEARCH,
		outline_thinking_budget=config.OUTLINE_THINKING_BUDGET,
		section_thinking_budget=config.SECTION_THINKING_BUDGET,
		language=config.OUTPUT_LANGUAGE,
	)
