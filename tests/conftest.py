# Standard Library
import os
from datetime import datetime

import pytest


#============================================
@pytest.fixture
def write_transcript(tmp_path):
	"""
	Return a helper that writes a transcript with a local-date mtime.
	"""
	history_dir = tmp_path / "history"
	history_dir.mkdir()

	def _write(relative_path: str, text: str, day: str, hour: int = 12):
		path = history_dir / relative_path
		path.parent.mkdir(parents=True, exist_ok=True)
		path.write_text(text, encoding="utf-8")
		stamp = datetime.strptime(day, "%Y-%m-%d").replace(hour=hour).timestamp()
		os.utime(path, (stamp, stamp))
		return str(path)

	_write.history_dir = str(history_dir)
	return _write
