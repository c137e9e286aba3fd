from google.genai import errors

from bahith.models import GenerationResult, ResearchSection


class FakeTextGenerator:
	"""Scripted stand-in for the remote model: each call pops the next outcome."""

	def __init__(self, outcomes):
		self.outcomes = list(outcomes)
		self.calls = []

	async def generate(self, prompt, *, system_instruction, profile):
		self.calls.append({'prompt': prompt, 'system_instruction': system_instruction, 'profile': profile})
		outcome = self.outcomes.pop(0)
		if isinstance(outcome, BaseException):
			raise outcome
		if isinstance(outcome, str):
			return GenerationResult(text=outcome)
		return outcome


class FakeResearchGenerator:
	def __init__(self, outline=None, outline_error=None, failing_sections=(), events=None):
		self.outline = outline or []
		self.outline_error = outline_error
		self.failing_sections = set(failing_sections)
		self.events = events if events is not None else []
		self.outline_calls = 0

	async def generate_outline(self, topic, instructions='', mode=None):
		self.outline_calls += 1
		if self.outline_error:
			raise self.outline_error
		return list(self.outline)

	async def generate_section(self, topic, section_title, instructions='', mode=None):
		self.events.append(('start', section_title))
		if section_title in self.failing_sections:
			self.events.append(('fail', section_title))
			raise ValueError(f'400 INVALID_ARGUMENT for {section_title}')
		self.events.append(('end', section_title))
		return ResearchSection(title=section_title, content=f'{section_title} body (Book, p. 1)')


class APIErrorStub(Exception):
	"""Same attribute shape as google.genai.errors.APIError."""

	def __init__(self, code=None, status=None, message=''):
		super().__init__(f'{code} {status}. {message}')
		self.code = code
		self.status = status
		self.message = message


def sdk_server_error(code, status, message=''):
	return errors.ServerError(code, {'error': {'code': code, 'status': status, 'message': message}})
