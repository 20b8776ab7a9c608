"""Tests for pipeline/diarylib/openai_transport.py."""

# Standard Library
import os
import sys
from types import SimpleNamespace

import pytest
import requests

# add pipeline directory to path for diarylib imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "pipeline"))

from diarylib import openai_transport
from diarylib.openai_transport import DiaryGenerationError


#============================================
def make_response(payload=None, status_code=200, json_error=None):
	"""
	Build a stub requests response.
	"""
	def raise_for_status():
		if status_code >= 400:
			raise requests.HTTPError(
				f"{status_code} error",
				response=SimpleNamespace(status_code=status_code),
			)

	def json_fn():
		if json_error is not None:
			raise json_error
		return payload

	return SimpleNamespace(
		status_code=status_code,
		raise_for_status=raise_for_status,
		json=json_fn,
	)


#============================================
def make_transport(**kwargs):
	"""
	Build a transport with test defaults.
	"""
	options = {
		"api_key": "sk-test",
		"model": "gpt-4o-mini",
		"base_url": "https://api.example.test/v1/",
		"system_message": "You are a helpful diary ghost writer.",
		"timeout_seconds": 5,
	}
	options.update(kwargs)
	return openai_transport.OpenAITransport(**options)


#============================================
def test_generate_posts_chat_request(monkeypatch):
	"""The request carries model, messages, temperature, and auth."""
	calls = []

	def fake_post(url, json=None, headers=None, timeout=None):
		calls.append({"url": url, "json": json, "headers": headers, "timeout": timeout})
		return make_response({"choices": [{"message": {"content": "  Dear diary.  "}}]})

	monkeypatch.setattr(openai_transport.requests, "post", fake_post)
	transport = make_transport()
	text = transport.generate("prompt text", purpose="diary entry 2024-01-05", temperature=0.4)
	assert text == "  Dear diary.  "
	assert len(calls) == 1
	call = calls[0]
	assert call["url"] == "https://api.example.test/v1/chat/completions"
	assert call["headers"]["Authorization"] == "Bearer sk-test"
	assert call["timeout"] == 5
	assert call["json"]["model"] == "gpt-4o-mini"
	assert call["json"]["temperature"] == 0.4
	assert call["json"]["messages"] == [
		{"role": "system", "content": "You are a helpful diary ghost writer."},
		{"role": "user", "content": "prompt text"},
	]


#============================================
def test_generate_without_system_message(monkeypatch):
	"""No system message means only the user message is sent."""
	captured = {}

	def fake_post(url, json=None, headers=None, timeout=None):
		captured.update(json)
		return make_response({"choices": [{"message": {"content": "ok"}}]})

	monkeypatch.setattr(openai_transport.requests, "post", fake_post)
	make_transport(system_message="").generate("hi", purpose="test", temperature=0.7)
	assert captured["messages"] == [{"role": "user", "content": "hi"}]


#============================================
def test_generate_missing_api_key_raises(monkeypatch):
	"""Without a key no request is made."""
	def fail_post(*args, **kwargs):
		raise AssertionError("requests.post should not be called")

	monkeypatch.setattr(openai_transport.requests, "post", fail_post)
	with pytest.raises(DiaryGenerationError, match="OPENAI_API_KEY"):
		make_transport(api_key="").generate("hi", purpose="test", temperature=0.7)


#============================================
def test_generate_http_error_raises(monkeypatch):
	"""HTTP error statuses become DiaryGenerationError."""
	monkeypatch.setattr(
		openai_transport.requests, "post",
		lambda *args, **kwargs: make_response({}, status_code=429),
	)
	with pytest.raises(DiaryGenerationError, match="status 429"):
		make_transport().generate("hi", purpose="test", temperature=0.7)


#============================================
def test_generate_network_error_raises(monkeypatch):
	"""Connection failures become DiaryGenerationError."""
	def broken_post(*args, **kwargs):
		raise requests.ConnectionError("connection refused")

	monkeypatch.setattr(openai_transport.requests, "post", broken_post)
	with pytest.raises(DiaryGenerationError, match="connection refused"):
		make_transport().generate("hi", purpose="test", temperature=0.7)


#============================================
def test_generate_invalid_json_raises(monkeypatch):
	"""A body that is not JSON is a generation failure."""
	monkeypatch.setattr(
		openai_transport.requests, "post",
		lambda *args, **kwargs: make_response(json_error=ValueError("no json")),
	)
	with pytest.raises(DiaryGenerationError, match="invalid JSON"):
		make_transport().generate("hi", purpose="test", temperature=0.7)


#============================================
@pytest.mark.parametrize("payload", [
	{},
	{"choices": []},
	{"choices": [{"message": {}}]},
	{"choices": [{"message": {"content": "   "}}]},
	{"choices": [{"message": {"content": None}}]},
])
def test_generate_malformed_payload_raises(monkeypatch, payload):
	"""Missing or empty content is a generation failure."""
	monkeypatch.setattr(
		openai_transport.requests, "post",
		lambda *args, **kwargs: make_response(payload),
	)
	with pytest.raises(DiaryGenerationError):
		make_transport().generate("hi", purpose="test", temperature=0.7)


#============================================
def test_from_config_copies_settings():
	"""from_config reads transport fields off a config object."""
	config = SimpleNamespace(
		api_key="sk-x",
		model="gpt-4o",
		base_url="https://proxy.test/v1",
		system_message="sys",
		timeout_seconds=9,
	)
	transport = openai_transport.OpenAITransport.from_config(config)
	assert transport.api_key == "sk-x"
	assert transport.model == "gpt-4o"
	assert transport.base_url == "https://proxy.test/v1"
	assert transport.timeout_seconds == 9
