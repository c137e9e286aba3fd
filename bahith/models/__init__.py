from .research import (
	GenerationResult,
	OutlineItem,
	Progress,
	ResearchData,
	ResearchMode,
	ResearchRequest,
	ResearchSection,
	Source,
)

__all__ = [
	'GenerationResult',
	'OutlineItem',
	'Progress',
	'ResearchData',
	'ResearchMode',
	'ResearchRequest',
	'ResearchSection',
	'Source',
]
