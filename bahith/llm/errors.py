"""Failure taxonomy for remote generation calls.

The SDK raises ``ClientError``/``ServerError`` carrying ``code``, ``status``
and ``message``, and network faults surface as ``httpx`` transport errors.
Everything is reduced here to two categories so the fallback policy never
inspects raw errors itself.
"""

from enum import Enum

import httpx
from google.genai import errors as genai_errors

TRANSIENT_CODES = {429}
TRANSIENT_STATUSES = {'RESOURCE_EXHAUSTED', 'UNKNOWN', 'INTERNAL', 'UNAVAILABLE', 'DEADLINE_EXCEEDED'}
TRANSIENT_EXCEPTIONS = (genai_errors.ServerError, httpx.TransportError, TimeoutError, ConnectionError)
TRANSIENT_MARKERS = ('429', 'quota', 'Rpc failed')
SEARCH_QUOTA_MARKERS = ('search_grounding_request', 'quota')


class ErrorCategory(Enum):
	TRANSIENT = 'transient'
	NON_RETRYABLE = 'non_retryable'


class BahithError(Exception):
	pass


class GenerationError(BahithError):
	pass


class OutlineParseError(BahithError):
	pass


class OutlineGenerationError(GenerationError):
	pass


class SectionGenerationError(GenerationError):
	def __init__(self, section_title: str, message: str):
		super().__init__(message)
		self.section_title = section_title


def _error_text(exc: BaseException) -> str:
	message = getattr(exc, 'message', None)
	text = str(exc)
	if message and str(message) not in text:
		return f'{message} {text}'
	return text


def classify_error(exc: BaseException) -> ErrorCategory:
	# SDK 5xx responses and network faults
	if isinstance(exc, TRANSIENT_EXCEPTIONS):
		return ErrorCategory.TRANSIENT

	code = getattr(exc, 'code', None)
	status = getattr(exc, 'status', None)

	if code in TRANSIENT_CODES or (isinstance(code, int) and 500 <= code < 600):
		return ErrorCategory.TRANSIENT
	if isinstance(status, str) and status.upper() in TRANSIENT_STATUSES:
		return ErrorCategory.TRANSIENT

	text = _error_text(exc)
	if any(marker in text for marker in TRANSIENT_MARKERS):
		return ErrorCategory.TRANSIENT

	return ErrorCategory.NON_RETRYABLE


def is_transient(exc: BaseException) -> bool:
	return classify_error(exc) == ErrorCategory.TRANSIENT


def exhausted_search_quota(exc: BaseException) -> bool:
	text = _error_text(exc)
	return any(marker in text for marker in SEARCH_QUOTA_MARKERS)
