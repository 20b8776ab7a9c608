"""
OpenAI chat completions transport.
"""

from __future__ import annotations

# PIP3 modules
import requests


#============================================
class DiaryGenerationError(RuntimeError):
	"""
	Raised when the generation service cannot produce a diary entry.
	"""


class OpenAITransport:
	name = "OpenAI"

	def __init__(
		self,
		api_key: str,
		model: str = "gpt-4o-mini",
		base_url: str = "https://api.openai.com/v1",
		system_message: str = "",
		timeout_seconds: int = 120,
	) -> None:
		self.api_key = api_key
		self.model = model
		self.base_url = base_url.rstrip("/")
		self.system_message = system_message
		self.timeout_seconds = timeout_seconds

	@classmethod
	def from_config(cls, config) -> OpenAITransport:
		return cls(
			api_key=config.api_key,
			model=config.model,
			base_url=config.base_url,
			system_message=config.system_message,
			timeout_seconds=config.timeout_seconds,
		)

	def _build_messages(self, prompt: str) -> list[dict[str, str]]:
		messages: list[dict[str, str]] = []
		if self.system_message:
			messages.append({"role": "system", "content": self.system_message})
		messages.append({"role": "user", "content": prompt})
		return messages

	def _chat_endpoint(self) -> str:
		return self.base_url + "/chat/completions"

	def _extract_content(self, payload) -> str:
		"""
		Pull choices[0].message.content out of a completion payload.
		"""
		try:
			content = payload["choices"][0]["message"]["content"]
		except (KeyError, IndexError, TypeError) as exc:
			raise DiaryGenerationError("OpenAI response did not include a message.") from exc
		if not isinstance(content, str) or not content.strip():
			raise DiaryGenerationError("OpenAI chat returned empty content")
		return content

	def generate(self, prompt: str, *, purpose: str, temperature: float) -> str:
		if not self.api_key:
			raise DiaryGenerationError(
				f"OPENAI_API_KEY is not set; cannot request {purpose}."
			)
		payload: dict[str, object] = {
			"model": self.model,
			"messages": self._build_messages(prompt),
			"temperature": temperature,
		}
		headers = {
			"Authorization": f"Bearer {self.api_key}",
			"Content-Type": "application/json",
		}
		try:
			response = requests.post(
				self._chat_endpoint(),
				json=payload,
				headers=headers,
				timeout=self.timeout_seconds,
			)
			response.raise_for_status()
			parsed = response.json()
		except requests.HTTPError as exc:
			status = getattr(exc.response, "status_code", "unknown")
			raise DiaryGenerationError(
				f"OpenAI chat error for {purpose}: status {status}"
			) from exc
		except requests.RequestException as exc:
			raise DiaryGenerationError(f"OpenAI request failed for {purpose}: {exc}") from exc
		except ValueError as exc:
			raise DiaryGenerationError(f"OpenAI returned invalid JSON for {purpose}.") from exc
		return self._extract_content(parsed)
