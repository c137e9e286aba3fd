"""
Research workflow as an explicit state machine.

States and events are immutable values; ``transition`` is a pure function
that either returns the next state or raises ``InvalidTransition``. The
orchestrator owns the current state and performs the remote calls between
transitions.

    Idle -> OutlineRequested -> OutlineReady -> ReviewPending
                  |                   \\            |
                  v                    -> SectionsInFlight -> Completed
                Failed
"""

from dataclasses import dataclass

from bahith.llm.errors import BahithError
from bahith.models import OutlineItem, ResearchData, ResearchRequest, ResearchSection
from bahith.parsers.outline_parser import dedupe_outline, parse_outline_text


class InvalidTransition(BahithError):
	pass


# States


@dataclass(frozen=True)
class Idle:
	pass


@dataclass(frozen=True)
class OutlineRequested:
	request: ResearchRequest


@dataclass(frozen=True)
class OutlineReady:
	request: ResearchRequest
	outline: tuple[OutlineItem, ...]


@dataclass(frozen=True)
class ReviewPending:
	request: ResearchRequest
	outline: tuple[OutlineItem, ...]


@dataclass(frozen=True)
class SectionsInFlight:
	request: ResearchRequest
	outline: tuple[OutlineItem, ...]
	sections: tuple[ResearchSection, ...] = ()

	@property
	def next_item(self) -> OutlineItem:
		return self.outline[len(self.sections)]


@dataclass(frozen=True)
class Completed:
	data: ResearchData


@dataclass(frozen=True)
class Failed:
	request: ResearchRequest
	error: str


WorkflowState = Idle | OutlineRequested | OutlineReady | ReviewPending | SectionsInFlight | Completed | Failed


# Events


@dataclass(frozen=True)
class SubmitTopic:
	request: ResearchRequest


@dataclass(frozen=True)
class OutlineGenerated:
	outline: tuple[OutlineItem, ...]


@dataclass(frozen=True)
class OutlineFailed:
	error: str


@dataclass(frozen=True)
class BeginReview:
	pass


@dataclass(frozen=True)
class EditOutline:
	outline: tuple[OutlineItem, ...]


@dataclass(frozen=True)
class ConfirmOutline:
	outline: tuple[OutlineItem, ...] | None = None


@dataclass(frozen=True)
class SectionFinished:
	section: ResearchSection


@dataclass(frozen=True)
class Reset:
	pass


WorkflowEvent = (
	SubmitTopic
	| OutlineGenerated
	| OutlineFailed
	| BeginReview
	| EditOutline
	| ConfirmOutline
	| SectionFinished
	| Reset
)


def start_sections(request: ResearchRequest, outline: tuple[OutlineItem, ...]) -> SectionsInFlight | Completed:
	unique = tuple(dedupe_outline(outline))
	if not unique:
		return Completed(ResearchData(topic=request.topic, outline=(), sections=(), mode=request.mode))
	return SectionsInFlight(request=request, outline=unique)


def transition(state: WorkflowState, event: WorkflowEvent) -> WorkflowState:
	if isinstance(event, Reset):
		return Idle()

	match state, event:
		case (Idle() | Completed() | Failed()), SubmitTopic(request=request):
			suggested = parse_outline_text(request.suggested_outline) if request.suggested_outline else []
			if suggested:
				return start_sections(request, tuple(suggested))
			return OutlineRequested(request)

		case OutlineRequested(request=request), OutlineGenerated(outline=outline):
			return OutlineReady(request, tuple(outline))

		case OutlineRequested(request=request), OutlineFailed(error=error):
			return Failed(request, error)

		case OutlineReady(request=request, outline=outline), BeginReview():
			return ReviewPending(request, outline)

		case ReviewPending(request=request), EditOutline(outline=outline):
			return ReviewPending(request, tuple(outline))

		case (
			OutlineReady(request=request, outline=current) | ReviewPending(request=request, outline=current),
			ConfirmOutline(outline=confirmed),
		):
			return start_sections(request, tuple(confirmed) if confirmed is not None else current)

		case SectionsInFlight(request=request, outline=outline, sections=sections), SectionFinished(section=section):
			sections = (*sections, section)
			if len(sections) < len(outline):
				return SectionsInFlight(request, outline, sections)
			return Completed(ResearchData(topic=request.topic, outline=outline, sections=sections, mode=request.mode))

	raise InvalidTransition(f'{type(event).__name__} is not allowed while {type(state).__name__}')
