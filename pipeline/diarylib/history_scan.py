"""Chat history discovery, date grouping, and date-range filtering.

Transcript files are found by glob under the history root, bucketed by the
local calendar date of their modification time, and the resulting date keys
can be narrowed to an inclusive YYYY-MM-DD range.
"""

# Standard Library
import glob
import os
import re
from dataclasses import dataclass
from datetime import date
from datetime import datetime


DATE_FORMAT = "%Y-%m-%d"
DATE_ARG_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


#============================================
@dataclass(frozen=True)
class TranscriptFile:
	"""
	One discovered chat transcript on disk.
	"""

	path: str
	mtime: float


#============================================
@dataclass(frozen=True)
class DateRange:
	"""
	Inclusive calendar date range.
	"""

	start: date
	end: date


#============================================
def find_transcript_files(history_path: str, pattern: str = "*.md") -> list[str]:
	"""
	Return every file under history_path matching pattern, recursively.

	A missing history directory yields an empty list. Paths are sorted so
	repeated runs see the same order.
	"""
	if not os.path.isdir(history_path):
		return []
	search = os.path.join(glob.escape(history_path), "**", pattern)
	matches = [path for path in glob.glob(search, recursive=True) if os.path.isfile(path)]
	matches.sort()
	return matches


#============================================
def date_key_for_timestamp(timestamp: float) -> str:
	"""
	Format a POSIX timestamp as a local YYYY-MM-DD key.
	"""
	return datetime.fromtimestamp(timestamp).strftime(DATE_FORMAT)


#============================================
def group_files_by_date(paths: list[str]) -> dict[str, list[TranscriptFile]]:
	"""
	Bucket files by the local calendar date of their modification time.

	Args:
		paths: transcript file paths in discovery order.

	Returns:
		Mapping of date key to TranscriptFile list, each list in input order.
	"""
	groups: dict[str, list[TranscriptFile]] = {}
	for path in paths:
		mtime = os.stat(path).st_mtime
		key = date_key_for_timestamp(mtime)
		groups.setdefault(key, []).append(TranscriptFile(path=path, mtime=mtime))
	return groups


#============================================
def parse_date_arg(text: str, label: str) -> date:
	"""
	Parse a strict zero-padded YYYY-MM-DD argument.
	"""
	message = f"Invalid {label} format: {text}. Use YYYY-MM-DD format."
	if not DATE_ARG_RE.match(text or ""):
		raise ValueError(message)
	try:
		return datetime.strptime(text, DATE_FORMAT).date()
	except ValueError as error:
		raise ValueError(message) from error


#============================================
def parse_date_range(from_text: str, to_text: str) -> DateRange:
	"""
	Validate two date arguments into an inclusive DateRange.
	"""
	start = parse_date_arg(from_text, "from_date")
	end = parse_date_arg(to_text, "to_date")
	if start > end:
		raise ValueError(f"from_date ({from_text}) cannot be after to_date ({to_text})")
	return DateRange(start=start, end=end)


#============================================
def filter_dates_by_range(dates: list[str], date_range: DateRange | None) -> list[str]:
	"""
	Keep date keys inside the inclusive range; no range keeps everything.
	"""
	if date_range is None:
		return dates
	selected = []
	for key in dates:
		current = datetime.strptime(key, DATE_FORMAT).date()
		if date_range.start <= current <= date_range.end:
			selected.append(key)
	return selected
