import httpx
import pytest
from fakes import APIErrorStub, sdk_server_error
from google.genai import errors

from bahith.llm.errors import (
	BahithError,
	ErrorCategory,
	GenerationError,
	OutlineGenerationError,
	SectionGenerationError,
	classify_error,
	exhausted_search_quota,
)


@pytest.mark.parametrize(
	'error',
	[
		APIErrorStub(code=429, status='RESOURCE_EXHAUSTED', message='Too many requests'),
		APIErrorStub(code=None, status='RESOURCE_EXHAUSTED'),
		APIErrorStub(code=500, status='INTERNAL'),
		APIErrorStub(code=503, status='UNAVAILABLE', message='The model is overloaded'),
		APIErrorStub(status='UNKNOWN'),
		APIErrorStub(message='You exceeded your current quota'),
		RuntimeError('Rpc failed due to xhr error'),
		RuntimeError('got status 429 from upstream'),
		sdk_server_error(502, 'UNAVAILABLE', 'Bad gateway'),
		sdk_server_error(504, 'DEADLINE_EXCEEDED', 'Deadline expired'),
		httpx.ReadTimeout('The read operation timed out'),
		httpx.ConnectError('Connection refused'),
		TimeoutError(),
	],
)
def test_transient_errors(error):
	assert classify_error(error) == ErrorCategory.TRANSIENT


@pytest.mark.parametrize(
	'error',
	[
		APIErrorStub(code=400, status='INVALID_ARGUMENT', message='Request contains an invalid argument.'),
		APIErrorStub(code=403, status='PERMISSION_DENIED', message='API key not valid'),
		errors.ClientError(400, {'error': {'code': 400, 'status': 'INVALID_ARGUMENT', 'message': 'bad'}}),
		ValueError('malformed prompt'),
	],
)
def test_non_retryable_errors(error):
	assert classify_error(error) == ErrorCategory.NON_RETRYABLE


def test_grounding_quota_is_detected():
	error = APIErrorStub(code=429, message='Quota exceeded for metric: search_grounding_request')

	assert exhausted_search_quota(error)


def test_server_fault_is_not_a_search_quota():
	assert not exhausted_search_quota(APIErrorStub(code=503, status='UNAVAILABLE', message='overloaded'))


def test_stage_failures_share_a_base():
	section_error = SectionGenerationError('Intro', 'Section "Intro" failed')

	assert isinstance(section_error, GenerationError)
	assert isinstance(OutlineGenerationError('no outline'), GenerationError)
	assert isinstance(section_error, BahithError)
	assert section_error.section_title == 'Intro'
