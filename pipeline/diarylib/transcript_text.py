# Standard Library
from dataclasses import dataclass


ENTRY_SEPARATOR = "\n\n---\n\n"


#============================================
@dataclass(frozen=True)
class ReadResult:
	"""
	Outcome of reading one transcript: text on success, error otherwise.
	"""

	path: str
	text: str = ""
	error: str | None = None

	@property
	def ok(self) -> bool:
		return self.error is None


#============================================
def read_transcript(path: str) -> ReadResult:
	"""
	Read one transcript as UTF-8 text, capturing read failures.
	"""
	try:
		with open(path, "r", encoding="utf-8") as handle:
			text = handle.read()
	except (OSError, UnicodeDecodeError) as error:
		return ReadResult(path=path, error=str(error))
	return ReadResult(path=path, text=text)


#============================================
def concat_chat_text(results: list[ReadResult]) -> str:
	"""
	Join readable, non-blank transcripts with a visible separator.

	Failed reads and whitespace-only files contribute nothing.
	"""
	parts = []
	for result in results:
		if not result.ok:
			continue
		if not result.text.strip():
			continue
		parts.append(result.text)
	return ENTRY_SEPARATOR.join(parts)


#============================================
def collect_day_text(files, log_fn=None) -> str:
	"""
	Read all transcripts for one date and return the joined text.

	Args:
		files: TranscriptFile list for a single date key.
		log_fn: optional callable for reporting unreadable files.

	Returns:
		Joined transcript text, possibly empty.
	"""
	results = [read_transcript(item.path) for item in files]
	for result in results:
		if not result.ok and log_fn is not None:
			log_fn(f"Could not read {result.path}: {result.error}")
	return concat_chat_text(results)
