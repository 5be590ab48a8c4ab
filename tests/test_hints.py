"""Tests for hint parsing, the hint client and the hint panel."""

import json
import threading
from concurrent.futures import ThreadPoolExecutor
from urllib.error import HTTPError, URLError

import pytest

from adaptlearn.classroom import FETCH_FAILED_MESSAGE, NO_HINT_MESSAGE, HintClient, HintPanel
from adaptlearn.classroom import hints as hints_module
from adaptlearn.utils import parse_hint, sanitize_hint_text


class TestParseHint:

    def test_empty(self):
        parsed = parse_hint("")
        assert (parsed.hint, parsed.next) == ("", "")

    def test_next_step_marker(self):
        parsed = parse_hint("Think of halves.\nNext step: Divide 8 into 2 groups.")
        assert parsed.hint == "Think of halves."
        assert parsed.next == "Divide 8 into 2 groups."

    def test_markers_case_insensitive(self):
        parsed = parse_hint("Compare decimals. NEXT: convert 2/3.")
        assert parsed.hint == "Compare decimals."
        assert parsed.next == "convert 2/3."

    def test_suggestion_marker(self):
        parsed = parse_hint("Look at the denominators.\n\nSuggestion: make them equal first")
        assert parsed.hint == "Look at the denominators."
        assert parsed.next == "make them equal first"

    def test_next_step_wins_over_suggestion(self):
        parsed = parse_hint("Suggestion: draw it. Next step: count parts.")
        assert parsed.hint == "Suggestion: draw it."
        assert parsed.next == "count parts."

    def test_blank_line_fallback(self):
        parsed = parse_hint("First idea here.\n\nSecond idea.\n\nThird idea.")
        assert parsed.hint == "First idea here."
        assert parsed.next == "Second idea."

    def test_carriage_returns_split_paragraphs(self):
        parsed = parse_hint("Hint one.\r\rHint two.")
        assert (parsed.hint, parsed.next) == ("Hint one.", "Hint two.")

    def test_single_paragraph(self):
        parsed = parse_hint("Just one   line\nof text")
        assert parsed.hint == "Just one line of text"
        assert parsed.next == ""

    def test_sanitize(self):
        assert sanitize_hint_text('**"Think  about\n halves"**') == "Think about halves"
        assert sanitize_hint_text("“Curly quotes”") == "Curly quotes"
        assert sanitize_hint_text("") == ""


class FakeResponse:
    def __init__(self, body: bytes, status: int = 200):
        self._body = body
        self.status = status

    def read(self):
        return self._body

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


@pytest.fixture
def captured(monkeypatch):
    """Patch urlopen; configure behaviour via the returned dict."""
    state = {"requests": [], "response": FakeResponse(b'{"hint": "Divide by 2"}'), "error": None}

    def fake_urlopen(req, timeout=None):
        state["requests"].append((req, timeout))
        if state["error"] is not None:
            raise state["error"]
        return state["response"]

    monkeypatch.setattr(hints_module, "urlopen", fake_urlopen)
    return state


class TestHintClient:

    def test_posts_prompt_with_token(self, captured):
        client = HintClient("https://api.example.test/", token="abc", timeout=3)
        assert client.fetch_hint("What is 1/2 of 8?") == "Divide by 2"

        req, timeout = captured["requests"][0]
        assert req.full_url == "https://api.example.test/api/ai/hint"
        assert req.get_method() == "POST"
        assert req.get_header("Authorization") == "Bearer abc"
        assert json.loads(req.data) == {"prompt": "What is 1/2 of 8?"}
        assert timeout == 3

    def test_no_auth_header_without_token(self, captured):
        HintClient("https://api.example.test").fetch_hint("p")
        req, _ = captured["requests"][0]
        assert req.get_header("Authorization") is None

    def test_http_error(self, captured):
        captured["error"] = HTTPError("https://api.example.test/api/ai/hint", 500, "boom", None, None)
        assert HintClient("https://api.example.test").fetch_hint("p") == NO_HINT_MESSAGE

    def test_non_success_status(self, captured):
        captured["response"] = FakeResponse(b"{}", status=204)
        assert HintClient("https://api.example.test").fetch_hint("p") == NO_HINT_MESSAGE

    def test_network_error(self, captured):
        captured["error"] = URLError("connection refused")
        assert HintClient("https://api.example.test").fetch_hint("p") == FETCH_FAILED_MESSAGE

    def test_bad_json(self, captured):
        captured["response"] = FakeResponse(b"<html>")
        assert HintClient("https://api.example.test").fetch_hint("p") == FETCH_FAILED_MESSAGE

    def test_missing_hint_field(self, captured):
        captured["response"] = FakeResponse(b'{"message": "ok"}')
        assert HintClient("https://api.example.test").fetch_hint("p") == NO_HINT_MESSAGE

    def test_no_api_base(self, captured):
        assert HintClient(None).fetch_hint("p") == NO_HINT_MESSAGE
        assert captured["requests"] == []


class SlowClient:
    """Fake client; prompts listed in blocked wait for release."""

    def __init__(self, blocked=()):
        self.blocked = set(blocked)
        self.release = threading.Event()

    def fetch_hint(self, prompt):
        if prompt in self.blocked:
            self.release.wait(timeout=5)
        return f"Hint for {prompt}"


class TestHintPanel:

    def test_request_populates_text(self):
        panel = HintPanel(SlowClient())
        panel.request("q1").result(timeout=5)
        assert panel.text == "Hint for q1"
        assert not panel.loading
        assert panel.parsed.hint == "Hint for q1"
        panel.shutdown()

    def test_loading_until_reply(self):
        client = SlowClient(blocked={"q1"})
        panel = HintPanel(client)
        future = panel.request("q1")
        assert panel.loading
        assert panel.text is None
        client.release.set()
        future.result(timeout=5)
        assert not panel.loading
        panel.shutdown()

    def test_later_request_wins(self):
        client = SlowClient(blocked={"old"})
        panel = HintPanel(client)
        old = panel.request("old")
        panel.request("new").result(timeout=5)
        assert panel.text == "Hint for new"

        client.release.set()
        old.result(timeout=5)
        assert panel.text == "Hint for new"
        panel.shutdown()

    def test_clear_drops_pending_reply(self):
        client = SlowClient(blocked={"q1"})
        panel = HintPanel(client)
        future = panel.request("q1")
        panel.clear()
        client.release.set()
        future.result(timeout=5)
        assert panel.text is None
        assert panel.parsed is None
        panel.shutdown()

    def test_shared_executor_survives_panel_shutdown(self):
        executor = ThreadPoolExecutor(max_workers=1)
        try:
            first = HintPanel(SlowClient(), executor=executor)
            first.request("q1").result(timeout=5)
            first.shutdown()

            second = HintPanel(SlowClient(), executor=executor)
            second.request("q2").result(timeout=5)
            assert second.text == "Hint for q2"
        finally:
            executor.shutdown(wait=True)

    def test_shutdown_stops_owned_executor(self):
        panel = HintPanel(SlowClient())
        panel.shutdown()
        with pytest.raises(RuntimeError):
            panel.request("q1")
