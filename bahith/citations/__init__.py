from .matcher import CITATION_PATTERN, CitationSpan, extract_citations, find_citation_spans

__all__ = ['CITATION_PATTERN', 'CitationSpan', 'extract_citations', 'find_citation_spans']
