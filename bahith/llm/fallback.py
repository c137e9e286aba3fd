from tenacity import AsyncRetrying, RetryCallState, retry_if_exception, stop_after_attempt, wait_none

from bahith.llm.client import ModelProfile, TextGenerator
from bahith.llm.errors import classify_error, exhausted_search_quota, is_transient
from bahith.models import GenerationResult
from bahith.utils.logger import logger


class FallbackPolicy:
	"""Primary attempt, then at most one retry on the fallback model.

	Only transient failures (rate limits, quota, server faults) trigger the
	fallback; anything else is re-raised straight away. The fallback attempt
	never uses extended thinking, and drops web search when the failure was
	a search quota.
	"""

	def __init__(self, generator: TextGenerator, fallback_model: str):
		self.generator = generator
		self.fallback_model = fallback_model

	async def generate(
		self, prompt: str, profile: ModelProfile, system_instruction: str | None = None
	) -> GenerationResult:
		failures: list[BaseException] = []

		def remember_failure(retry_state: RetryCallState):
			error = retry_state.outcome.exception()
			failures.append(error)
			logger.warning(f'Primary model {profile.model} failed ({classify_error(error).value}): {error}')

		retrying = AsyncRetrying(
			stop=stop_after_attempt(2),
			wait=wait_none(),
			retry=retry_if_exception(is_transient),
			before_sleep=remember_failure,
			reraise=True,
		)

		async for attempt in retrying:
			with attempt:
				current = profile
				if failures:
					current = self._fallback_profile(profile, failures[-1])
				result = await self.generator.generate(prompt, system_instruction=system_instruction, profile=current)

		return result

	def _fallback_profile(self, profile: ModelProfile, error: BaseException) -> ModelProfile:
		drop_search = profile.use_search and exhausted_search_quota(error)
		if drop_search:
			logger.warning('Disabling web search for the fallback attempt due to grounding quota limits')

		fallback = profile.for_fallback(self.fallback_model, drop_search=drop_search)
		logger.warning(f'Falling back to {fallback.model}')
		return fallback
