import logging
import sys
import os
from logging.handlers import RotatingFileHandler
from datetime import datetime

_LOGGER_NAME = "region_utils"
_LOG_DIR_DEFAULT = "logs"
_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
_MAX_LINES = 5000
_BACKUP_COUNT = 20

class LineRotatingFileHandler(RotatingFileHandler):
	"""
	Rotates log after a maximum number of lines, not bytes.
	"""
	def __init__(self, filename, maxLines, backupCount=0, encoding=None):
		super().__init__(filename, maxBytes=0, backupCount=backupCount, encoding=encoding)
		self.maxLines = maxLines
		self.lineCount = 0
		self._count_existing_lines()

	def _count_existing_lines(self):
		try:
			with open(self.baseFilename, 'r', encoding=self.encoding or 'utf-8') as f:
				self.lineCount = sum(1 for _ in f)
		except FileNotFoundError:
			self.lineCount = 0

	def emit(self, record):
		super().emit(record)
		self.lineCount += 1
		if self.lineCount >= self.maxLines:
			self.doRollover()
			self.lineCount = 0

def setup_logger(log_dir=None, level=logging.INFO, log_to_file=True):
	"""
	Set up the shared region_utils logger: stdout plus a timestamped build log
	under log_dir (default ./logs) that rolls over every 5000 lines and keeps
	the last 20 files. Safe to call more than once; handlers are only added
	the first time.
	"""
	logger = logging.getLogger(_LOGGER_NAME)
	logger.setLevel(level)
	if not logger.handlers:
		ch = logging.StreamHandler(sys.stdout)
		ch.setFormatter(logging.Formatter(_LOG_FORMAT))
		logger.addHandler(ch)

		if log_to_file:
			log_dir = log_dir or _LOG_DIR_DEFAULT
			os.makedirs(log_dir, exist_ok=True)
			log_file = os.path.join(log_dir, f"region_build_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log")
			fh = LineRotatingFileHandler(log_file, maxLines=_MAX_LINES, backupCount=_BACKUP_COUNT, encoding="utf-8")
			fh.setFormatter(logging.Formatter(_LOG_FORMAT))
			logger.addHandler(fh)
	return logger

def get_logger(name=None):
	"""
	Get the shared project logger, or a named child of it.
	"""
	if name:
		return logging.getLogger(f"{_LOGGER_NAME}.{name}")
	return logging.getLogger(_LOGGER_NAME)
