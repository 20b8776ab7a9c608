#!/usr/bin/env python3
"""Write daily diary entries from Cursor chat history.

Scans the chat history directory for markdown transcripts, groups them by
modification date, and asks the OpenAI chat API for one short diary entry
per day. Entries are written to diary/<YYYY-MM-DD>.md in the current
working directory.

Usage:
	generate_diary.py                          # process all history
	generate_diary.py 2024-01-01 2024-01-31    # process an inclusive date range
"""

# Standard Library
import argparse
import os
import sys
from datetime import datetime

# PIP3 modules
from dotenv import load_dotenv

# local repo modules
from diarylib import diary_settings
from diarylib import diary_writer
from diarylib import history_scan
from diarylib import transcript_text
from diarylib.openai_transport import DiaryGenerationError
from diarylib.openai_transport import OpenAITransport


USAGE_LINES = [
	"Usage: generate_diary.py [from_date] [to_date]",
	"  from_date and to_date should be in YYYY-MM-DD format",
	"  Or run without arguments to process all history",
]


#============================================
def log_step(message: str) -> None:
	"""
	Print one timestamped progress line.
	"""
	now_text = datetime.now().strftime("%H:%M:%S")
	print(f"[generate_diary {now_text}] {message}", flush=True)


#============================================
def log_error(message: str) -> None:
	"""
	Print one error line to stderr.
	"""
	print(f"Error: {message}", file=sys.stderr, flush=True)


#============================================
def parse_args(argv: list[str] | None = None) -> list[str]:
	"""
	Parse command-line arguments and return the positional date strings.
	"""
	parser = argparse.ArgumentParser(
		description="Turn Cursor chat history into daily diary entries."
	)
	parser.add_argument(
		'dates', nargs='*', metavar='DATE',
		help="Optional from_date and to_date (YYYY-MM-DD, inclusive).",
	)
	args, extra = parser.parse_known_args(argv)
	return list(args.dates) + list(extra)


#============================================
def resolve_date_range(dates: list[str]) -> history_scan.DateRange | None:
	"""
	Validate positional dates; exit 1 with a message when they are unusable.
	"""
	if not dates:
		return None
	if len(dates) != 2:
		for line in USAGE_LINES:
			print(line, file=sys.stderr)
		sys.exit(1)
	try:
		return history_scan.parse_date_range(dates[0], dates[1])
	except ValueError as error:
		log_error(str(error))
		sys.exit(1)


#============================================
def describe_range(date_range: history_scan.DateRange | None) -> str:
	"""
	Return ' between <from> and <to>' for messages, or empty text.
	"""
	if date_range is None:
		return ""
	return f" between {date_range.start.isoformat()} and {date_range.end.isoformat()}"


#============================================
def run_diary(
	config: diary_settings.DiaryConfig,
	date_range: history_scan.DateRange | None = None,
	transport=None,
	base_dir: str | None = None,
) -> int:
	"""
	Generate diary entries for every selected date, oldest first.

	Stops at the first generation or write failure; entries already written
	for earlier dates are kept.

	Args:
		config: resolved run settings.
		date_range: optional inclusive range of dates to process.
		transport: generation transport; built from config when None.
		base_dir: directory the diary output dir is relative to (default cwd).

	Returns:
		Process exit status, 0 on success and 1 after a fatal failure.
	"""
	files = history_scan.find_transcript_files(config.history_path, config.file_pattern)
	if not files:
		log_step("No Cursor chats found. Nothing to do.")
		return 0

	files_by_date = history_scan.group_files_by_date(files)
	all_dates = sorted(files_by_date)
	dates = history_scan.filter_dates_by_range(all_dates, date_range)
	range_text = describe_range(date_range)

	if not dates:
		log_step(f"No chat history found{range_text}.")
		return 0

	log_step(f"Processing {len(dates)} days with chat history{range_text}.")

	if transport is None:
		transport = OpenAITransport.from_config(config)
	output_dir = os.path.join(base_dir or os.getcwd(), config.output_dir)

	for date_key in dates:
		raw_text = transcript_text.collect_day_text(files_by_date[date_key], log_fn=log_step)
		if not raw_text.strip():
			log_step(f"Skipping {date_key}: no meaningful content found.")
			continue
		try:
			entry = diary_writer.generate_diary_entry(
				transport,
				config.prompt,
				raw_text,
				config.temperature,
				date_key=date_key,
			)
			path = diary_writer.write_diary_entry(output_dir, date_key, entry, config.extension)
		except (DiaryGenerationError, OSError) as error:
			log_error(f"Stopped at {date_key}: {error}")
			return 1
		log_step(f"Diary written for {date_key}: {path}")
	return 0


#============================================
def main(argv: list[str] | None = None) -> None:
	"""
	CLI entry point.
	"""
	dates = parse_args(argv)
	date_range = resolve_date_range(dates)
	load_dotenv(os.path.join(os.getcwd(), ".env"))
	try:
		config = diary_settings.load_config()
	except (RuntimeError, OSError) as error:
		log_error(str(error))
		sys.exit(1)
	try:
		status = run_diary(config, date_range)
	except OSError as error:
		log_error(str(error))
		sys.exit(1)
	if status != 0:
		sys.exit(status)


if __name__ == "__main__":
	main()
