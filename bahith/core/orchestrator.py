import asyncio
from collections.abc import Awaitable, Callable

from bahith.core.generator import ResearchGenerator
from bahith.core.workflow import (
	BeginReview,
	Completed,
	ConfirmOutline,
	EditOutline,
	Idle,
	OutlineFailed,
	OutlineGenerated,
	Reset,
	ReviewPending,
	SectionFinished,
	SectionsInFlight,
	SubmitTopic,
	WorkflowEvent,
	WorkflowState,
	transition,
)
from bahith.llm.errors import BahithError, OutlineGenerationError, SectionGenerationError
from bahith.models import OutlineItem, Progress, ResearchData, ResearchMode, ResearchRequest, ResearchSection
from bahith.utils.logger import logger

DEGRADED_CONTENT = 'حدث خطأ أثناء توليد هذا القسم. يرجى المحاولة لاحقاً.'


class RunAbandoned(BahithError):
	pass


def degraded_section(title: str) -> ResearchSection:
	return ResearchSection(title=title, content=DEGRADED_CONTENT, citations=(), sources=(), degraded=True)


class ResearchOrchestrator:
	"""Drives outline and section generation for one research run at a time.

	Sections are generated one after another in outline order, with a fixed
	pause before every request but the first. A failing section becomes a
	placeholder (or aborts the run when ``abort_on_section_failure`` is set);
	a failing outline resets the workflow and raises ``OutlineGenerationError``.
	"""

	def __init__(
		self,
		generator: ResearchGenerator,
		section_delay: float = 2.5,
		abort_on_section_failure: bool = False,
		on_progress: Callable[[Progress], None] | None = None,
		sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
	):
		self.generator = generator
		self.section_delay = section_delay
		self.abort_on_section_failure = abort_on_section_failure
		self.on_progress = on_progress
		self.sleep = sleep

		self._state: WorkflowState = Idle()
		self._progress = Progress(current=0, total=0)
		self._run = 0

	@property
	def state(self) -> WorkflowState:
		return self._state

	@property
	def progress(self) -> Progress:
		return self._progress

	async def submit_topic(
		self,
		topic: str,
		instructions: str = '',
		mode: ResearchMode = ResearchMode.SCIENTIFIC,
		suggested_outline: str = '',
	) -> WorkflowState:
		request = ResearchRequest(topic=topic, instructions=instructions, mode=mode, suggested_outline=suggested_outline)
		self._apply(SubmitTopic(request))
		self._run += 1
		run = self._run

		if isinstance(self._state, SectionsInFlight | Completed):
			logger.info('Using the supplied outline, skipping outline generation')
			await self._generate_sections(run)
			return self._state

		try:
			outline = await self.generator.generate_outline(topic, instructions, mode)
		except Exception as e:
			self._ensure_current(run)
			logger.error(f'Error generating outline: {e}')
			self._apply(OutlineFailed(str(e)))
			self.reset()
			raise OutlineGenerationError(
				f'Outline generation failed: {e}. Check your GEMINI_API_KEY and try again.'
			) from e

		self._ensure_current(run)
		self._apply(OutlineGenerated(tuple(outline)))
		logger.info(f'Outline ready with {len(outline)} items')
		return self._state

	def begin_review(self) -> ReviewPending:
		self._apply(BeginReview())
		return self._state

	def edit_outline(self, outline: list[OutlineItem]) -> ReviewPending:
		self._apply(EditOutline(tuple(outline)))
		return self._state

	async def confirm_outline(self, outline: list[OutlineItem] | None = None) -> ResearchData:
		self._apply(ConfirmOutline(tuple(outline) if outline is not None else None))
		return await self._generate_sections(self._run)

	async def research(
		self,
		topic: str,
		instructions: str = '',
		mode: ResearchMode = ResearchMode.SCIENTIFIC,
		suggested_outline: str = '',
		review: Callable[[list[OutlineItem]], list[OutlineItem]] | None = None,
	) -> ResearchData:
		state = await self.submit_topic(topic, instructions, mode, suggested_outline)
		if isinstance(state, Completed):
			return state.data

		if review is None:
			return await self.confirm_outline()

		pending = self.begin_review()
		edited = review(list(pending.outline))
		self.edit_outline(edited)
		return await self.confirm_outline()

	def reset(self):
		self._run += 1
		self._apply(Reset())
		self._progress = Progress(current=0, total=0)

	async def _generate_sections(self, run: int) -> ResearchData:
		total = len(self._state.outline) if isinstance(self._state, SectionsInFlight) else 0
		if total:
			self._report(Progress(current=0, total=total))
			logger.info(f'Generating {total} sections sequentially')

		while isinstance(self._state, SectionsInFlight):
			index = len(self._state.sections)
			if index > 0:
				await self.sleep(self.section_delay)
				self._ensure_current(run)

			section = await self._generate_section(run, self._state.request, self._state.next_item)
			self._ensure_current(run)
			self._apply(SectionFinished(section))
			self._report(Progress(current=index + 1, total=total))

		logger.info('All sections completed')
		return self._state.data

	async def _generate_section(self, run: int, request: ResearchRequest, item: OutlineItem) -> ResearchSection:
		try:
			return await self.generator.generate_section(request.topic, item.title, request.instructions, request.mode)
		except Exception as e:
			self._ensure_current(run)
			if self.abort_on_section_failure:
				logger.error(f'Failed to generate section "{item.title}": {e}')
				self.reset()
				raise SectionGenerationError(item.title, f'Section "{item.title}" failed: {e}') from e

			logger.warning(f'Failed to generate section "{item.title}", inserting placeholder: {e}')
			return degraded_section(item.title)

	def _apply(self, event: WorkflowEvent):
		previous = self._state
		self._state = transition(previous, event)
		logger.debug(f'{type(previous).__name__} --{type(event).__name__}--> {type(self._state).__name__}')

	def _ensure_current(self, run: int):
		if run != self._run:
			logger.warning('Research run was reset while waiting on the model, discarding its result')
			raise RunAbandoned('The research run was reset before it finished')

	def _report(self, progress: Progress):
		self._progress = progress
		if progress.current:
			logger.info(
				f'Progress: {progress.current}/{progress.total} sections ({progress.percentage:.1f}%)'
			)
		if self.on_progress:
			self.on_progress(progress)
