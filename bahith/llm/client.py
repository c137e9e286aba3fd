from dataclasses import dataclass, replace
from typing import Any, Protocol

from google.genai import types

from bahith.models import GenerationResult, Source
from bahith.utils.logger import logger


@dataclass(frozen=True)
class ModelProfile:
	model: str
	use_search: bool = True
	thinking_budget: int | None = None

	def for_fallback(self, model: str, drop_search: bool = False) -> 'ModelProfile':
		return replace(
			self,
			model=model,
			use_search=self.use_search and not drop_search,
			thinking_budget=None,
		)


class TextGenerator(Protocol):
	async def generate(
		self, prompt: str, *, system_instruction: str | None, profile: ModelProfile
	) -> GenerationResult: ...


class GeminiClient:
	def __init__(self, api_key: str, client: Any | None = None):
		if client is None:
			from google import genai

			client = genai.Client(api_key=api_key)
		self._client = client

		self.total_input_tokens = 0
		self.total_output_tokens = 0

		logger.info('Gemini client initialized')

	async def generate(
		self, prompt: str, *, system_instruction: str | None, profile: ModelProfile
	) -> GenerationResult:
		logger.info(
			f'Generating with {profile.model} (search={profile.use_search}, thinking={profile.thinking_budget})'
		)

		response = await self._client.aio.models.generate_content(
			model=profile.model,
			contents=prompt,
			config=build_config(profile, system_instruction),
		)

		usage = getattr(response, 'usage_metadata', None)
		if usage:
			self.total_input_tokens += usage.prompt_token_count or 0
			self.total_output_tokens += usage.candidates_token_count or 0

		return GenerationResult(text=response.text or '', sources=extract_sources(response))

	def get_usage_stats(self) -> dict[str, int]:
		"""Get token usage statistics."""
		return {
			'input_tokens': self.total_input_tokens,
			'output_tokens': self.total_output_tokens,
			'total_tokens': self.total_input_tokens + self.total_output_tokens,
		}


def build_config(profile: ModelProfile, system_instruction: str | None) -> types.GenerateContentConfig:
	kwargs: dict[str, Any] = {}
	if system_instruction:
		kwargs['system_instruction'] = system_instruction
	if profile.use_search:
		kwargs['tools'] = [types.Tool(google_search=types.GoogleSearch())]
	if profile.thinking_budget is not None:
		kwargs['thinking_config'] = types.ThinkingConfig(thinking_budget=profile.thinking_budget)

	return types.GenerateContentConfig(**kwargs)


def extract_sources(response: Any) -> list[Source]:
	candidates = getattr(response, 'candidates', None) or []
	if not candidates:
		return []

	metadata = getattr(candidates[0], 'grounding_metadata', None)
	chunks = getattr(metadata, 'grounding_chunks', None) or []

	sources = []
	for chunk in chunks:
		web = getattr(chunk, 'web', None)
		if web is None or not web.uri or not web.title:
			continue
		sources.append(Source(title=web.title, uri=web.uri))
	return sources
