# Standard Library
import math
import os
import sys
from dataclasses import dataclass

# PIP3 modules
import yaml

# local repo modules
from diarylib import prompt_loader


DEFAULT_TEMPERATURE = 0.7
DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_TIMEOUT_SECONDS = 120
DEFAULT_FILE_PATTERN = "*.md"
DEFAULT_OUTPUT_DIR = "diary"
DEFAULT_EXTENSION = "md"
DEFAULT_SETTINGS_PATH = "settings.yaml"


#============================================
@dataclass(frozen=True)
class DiaryConfig:
	"""
	Resolved settings for one diary run. Read-only after startup.
	"""

	api_key: str
	prompt: str
	temperature: float
	history_path: str
	model: str = DEFAULT_MODEL
	base_url: str = DEFAULT_BASE_URL
	system_message: str = ""
	timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS
	file_pattern: str = DEFAULT_FILE_PATTERN
	output_dir: str = DEFAULT_OUTPUT_DIR
	extension: str = DEFAULT_EXTENSION


#============================================
def resolve_settings_path(path_text: str) -> str:
	"""
	Resolve a settings path, expanding ~ and anchoring relative paths at cwd.
	"""
	return os.path.abspath(os.path.expanduser(path_text))


#============================================
def load_settings(path_text: str) -> tuple[dict, str]:
	"""
	Load YAML settings dict and return it with resolved path.
	"""
	resolved_path = resolve_settings_path(path_text)
	if not os.path.isfile(resolved_path):
		return {}, resolved_path
	with open(resolved_path, "r", encoding="utf-8") as handle:
		try:
			data = yaml.safe_load(handle.read())
		except yaml.YAMLError as error:
			raise RuntimeError(f"Invalid YAML in settings file {resolved_path}: {error}") from error
	if data is None:
		return {}, resolved_path
	if not isinstance(data, dict):
		raise RuntimeError(f"Settings file must contain a mapping: {resolved_path}")
	return data, resolved_path


#============================================
def get_nested_value(settings: dict, keys: list[str], default_value):
	"""
	Read nested mapping value by key path.
	"""
	current = settings
	for key in keys:
		if not isinstance(current, dict):
			return default_value
		if key not in current:
			return default_value
		current = current[key]
	return current


#============================================
def get_setting_str(settings: dict, keys: list[str], default_value: str) -> str:
	"""
	Read a string setting from nested path with fallback.
	"""
	value = get_nested_value(settings, keys, default_value)
	if value is None:
		return default_value
	return str(value).strip()


#============================================
def get_setting_int(settings: dict, keys: list[str], default_value: int) -> int:
	"""
	Read an integer setting from nested path with fallback.
	"""
	value = get_nested_value(settings, keys, default_value)
	if value is None:
		return default_value
	try:
		return int(value)
	except ValueError as error:
		raise RuntimeError(f"Invalid integer for setting path {'.'.join(keys)}: {value}") from error


#============================================
def parse_temperature(value, default_value: float = DEFAULT_TEMPERATURE) -> float:
	"""
	Parse a temperature, falling back to the default when unusable or not finite.
	"""
	if value is None:
		return default_value
	text = str(value).strip()
	if not text:
		return default_value
	try:
		temperature = float(text)
	except ValueError:
		return default_value
	if not math.isfinite(temperature):
		return default_value
	return temperature


#============================================
def default_history_path(platform_name: str | None = None, environ=None) -> str:
	"""
	Return the Cursor chat history directory for the current platform.
	"""
	env = os.environ if environ is None else environ
	platform_name = platform_name or sys.platform
	home = env.get("HOME") or env.get("USERPROFILE") or ""
	if platform_name == "darwin":
		return os.path.join(home, "Library", "Application Support", "Cursor", "User", "History")
	if platform_name.startswith("win"):
		appdata = env.get("APPDATA") or os.path.join(home, "AppData", "Roaming")
		return os.path.join(appdata, "Cursor", "User", "History")
	return os.path.join(home, ".config", "Cursor", "User", "History")


#============================================
def _env_value(env, name: str) -> str:
	"""
	Return a stripped environment value or empty string.
	"""
	return (env.get(name) or "").strip()


#============================================
def load_config(environ=None, settings: dict | None = None) -> DiaryConfig:
	"""
	Resolve DiaryConfig from environment, settings.yaml, and built-in defaults.

	Environment variables win over settings.yaml values, which win over the
	built-in defaults. The API key is only read from the environment.

	Args:
		environ: mapping used instead of os.environ (tests pass a dict).
		settings: pre-loaded settings mapping; loaded from DIARY_SETTINGS
			(default settings.yaml) when None.

	Returns:
		Frozen DiaryConfig.
	"""
	env = os.environ if environ is None else environ
	if settings is None:
		settings_path = _env_value(env, "DIARY_SETTINGS") or DEFAULT_SETTINGS_PATH
		settings, _ = load_settings(settings_path)

	prompt = _env_value(env, "CUSTOM_PROMPT")
	if not prompt:
		prompt = get_setting_str(settings, ["diary", "prompt"], "")
	if not prompt:
		prompt = prompt_loader.load_prompt("diary_entry.txt").strip()

	temperature_text = _env_value(env, "TEMPERATURE")
	if temperature_text:
		temperature = parse_temperature(temperature_text)
	else:
		temperature = parse_temperature(get_nested_value(settings, ["llm", "temperature"], None))

	history_path = _env_value(env, "HISTORY_PATH")
	if not history_path:
		history_path = get_setting_str(settings, ["history", "path"], "")
	if not history_path:
		history_path = default_history_path(environ=env)
	history_path = os.path.expanduser(history_path)

	model = _env_value(env, "OPENAI_MODEL") or get_setting_str(settings, ["llm", "model"], DEFAULT_MODEL)
	base_url = _env_value(env, "OPENAI_BASE_URL") or get_setting_str(
		settings, ["llm", "base_url"], DEFAULT_BASE_URL,
	)

	system_message = get_setting_str(settings, ["llm", "system_message"], "")
	if not system_message:
		system_message = prompt_loader.load_prompt("diary_system.txt").strip()

	extension = get_setting_str(settings, ["diary", "extension"], DEFAULT_EXTENSION).lstrip(".")

	config = DiaryConfig(
		api_key=_env_value(env, "OPENAI_API_KEY"),
		prompt=prompt,
		temperature=temperature,
		history_path=history_path,
		model=model or DEFAULT_MODEL,
		base_url=base_url or DEFAULT_BASE_URL,
		system_message=system_message,
		timeout_seconds=get_setting_int(settings, ["llm", "timeout_seconds"], DEFAULT_TIMEOUT_SECONDS),
		file_pattern=get_setting_str(settings, ["history", "pattern"], DEFAULT_FILE_PATTERN),
		output_dir=get_setting_str(settings, ["diary", "output_dir"], DEFAULT_OUTPUT_DIR),
		extension=extension or DEFAULT_EXTENSION,
	)
	return config
