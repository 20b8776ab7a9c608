# Standard Library
import os


_PROMPT_CACHE = {}


#============================================
def get_prompt_root() -> str:
	"""
	Return the prompts/ directory shipped inside this package.
	"""
	package_dir = os.path.dirname(os.path.abspath(__file__))
	return os.path.join(package_dir, "prompts")


#============================================
def load_prompt(prompt_name: str) -> str:
	"""
	Load a prompt template from diarylib/prompts/.
	"""
	if not prompt_name:
		raise ValueError("prompt_name is required")
	path = os.path.join(get_prompt_root(), prompt_name)
	if path in _PROMPT_CACHE:
		return _PROMPT_CACHE[path]
	if not os.path.exists(path):
		raise FileNotFoundError(f"Prompt file not found: {path}")
	with open(path, "r", encoding="utf-8") as handle:
		text = handle.read()
	_PROMPT_CACHE[path] = text
	return text


#============================================
def build_day_prompt(instruction: str, raw_text: str) -> str:
	"""
	Prepend the diary instruction to one day's joined chat text.
	"""
	return instruction + "\n" + raw_text
