from dataclasses import dataclass, field
from enum import Enum


class ResearchMode(Enum):
	SCIENTIFIC = 'scientific'
	INTELLECTUAL = 'intellectual'


@dataclass(frozen=True)
class OutlineItem:
	id: str
	title: str


@dataclass(frozen=True)
class Source:
	title: str
	uri: str


@dataclass(frozen=True)
class ResearchSection:
	title: str
	content: str
	citations: tuple[str, ...] = ()
	sources: tuple[Source, ...] = ()
	degraded: bool = False


@dataclass(frozen=True)
class ResearchData:
	topic: str
	outline: tuple[OutlineItem, ...]
	sections: tuple[ResearchSection, ...]
	mode: ResearchMode = ResearchMode.SCIENTIFIC

	@property
	def is_complete(self) -> bool:
		return len(self.sections) == len(self.outline)


@dataclass(frozen=True)
class ResearchRequest:
	topic: str
	instructions: str = ''
	mode: ResearchMode = ResearchMode.SCIENTIFIC
	suggested_outline: str = ''


@dataclass(frozen=True)
class Progress:
	current: int
	total: int

	@property
	def percentage(self) -> float:
		return (self.current / self.total * 100) if self.total > 0 else 0.0


@dataclass
class GenerationResult:
	text: str
	sources: list[Source] = field(default_factory=list)
