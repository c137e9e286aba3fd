import re

_UNSAFE = re.compile(r'[\\/:*?"<>|\x00-\x1f]+')


def default_filename(topic: str, suffix: str, max_length: int = 30) -> str:
	stem = _UNSAFE.sub('_', topic[:max_length]).strip(' ._')
	return f'{stem or "research"}{suffix}'
