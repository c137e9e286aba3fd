import sys
from pathlib import Path

from loguru import logger

from bahith.config.settings import settings

CONSOLE_FORMAT = (
	'<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <magenta>{extra[app]}</magenta> | '
	'<cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>'
)
FILE_FORMAT = '{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[app]} | {name}:{function}:{line} - {message}'


def setup_logger(level: str | None = None, log_file: Path | None = None) -> list[int]:
	"""Send logs to stderr and, when a log file is configured, to a rotating file.

	Returns the loguru sink ids that were added.
	"""
	level = (level or settings.LOG_LEVEL).upper()
	log_file = log_file or settings.LOG_FILE

	logger.remove()
	logger.configure(extra={'app': settings.APP_NAME})

	sinks = [logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT)]
	if log_file:
		sinks.append(
			logger.add(
				log_file,
				rotation='500 MB',
				retention='10 days',
				level=level,
				format=FILE_FORMAT,
				encoding='utf-8',
			)
		)
	return sinks


setup_logger()
