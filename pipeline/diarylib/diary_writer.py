# Standard Library
import os

# local repo modules
from diarylib import prompt_loader


#============================================
def generate_diary_entry(transport, instruction: str, raw_text: str, temperature: float, date_key: str = "") -> str:
	"""
	Request one diary entry for a day's chat text and return it trimmed.

	Args:
		transport: object exposing generate(prompt, *, purpose, temperature).
		instruction: diary prompt placed before the chat text.
		raw_text: joined transcripts for the day.
		temperature: sampling temperature for the call.
		date_key: date label used in the request purpose.

	Returns:
		Generated diary text without surrounding whitespace.
	"""
	prompt = prompt_loader.build_day_prompt(instruction, raw_text)
	purpose = f"diary entry {date_key}".strip()
	text = transport.generate(prompt, purpose=purpose, temperature=temperature)
	return text.strip()


#============================================
def build_entry_path(output_dir: str, date_key: str, extension: str = "md") -> str:
	"""
	Build the diary file path for one date key.
	"""
	return os.path.join(output_dir, f"{date_key}.{extension}")


#============================================
def write_diary_entry(output_dir: str, date_key: str, text: str, extension: str = "md") -> str:
	"""
	Write one diary entry, replacing any existing file for the date.
	"""
	os.makedirs(output_dir, exist_ok=True)
	path = build_entry_path(output_dir, date_key, extension)
	with open(path, "w", encoding="utf-8") as handle:
		handle.write(text + "\n")
	return path
