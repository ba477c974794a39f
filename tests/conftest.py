"""Shared fixtures for the scoring tests."""

import json
import logging
import threading
import time

import pytest

from seo_scoring.storage import LocalSqliteAnalysisStore

READABILITY_REPLY = json.dumps({
    "readabilityScore": 80,
    "readingLevel": "High School",
    "sentenceComplexity": "Simple",
    "vocabularyLevel": "Basic",
    "passiveVoicePercentage": 5,
    "improvementAreas": ["Use shorter sentences"],
    "analysisSummary": "Easy to read.",
})


class FakeTextGenerator:
    """Deterministic stand-in for an LLM client.

    Routes readability prompts and keyword-extraction prompts to fixed
    replies and records every prompt it receives.
    """

    def __init__(self, readability_reply=READABILITY_REPLY, keywords_reply='["seo"]',
                 error=None, delay=0.0):
        self.readability_reply = readability_reply
        self.keywords_reply = keywords_reply
        self.error = error
        self.delay = delay
        self.prompts = []
        self._lock = threading.Lock()

    @property
    def call_count(self):
        return len(self.prompts)

    def generate(self, prompt, *, temperature=0.1, max_tokens=1000):
        with self._lock:
            self.prompts.append(prompt)
        if self.delay:
            time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        if prompt.startswith("Analyze the following text for readability"):
            return self.readability_reply
        return self.keywords_reply


@pytest.fixture
def generator():
    return FakeTextGenerator()


@pytest.fixture
def store(tmp_path):
    """SQLite analysis store in a temporary directory."""
    db = LocalSqliteAnalysisStore(db_url=f"sqlite:///{tmp_path / 'analysis.db'}")
    yield db
    db.close()


@pytest.fixture
def reset_logging():
    """Drop handlers installed by setup_logging and restore the root level."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in root.handlers[:]:
        if isinstance(handler, logging.StreamHandler) and not type(handler).__module__.startswith("_pytest"):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
    logging.getLogger("seo_scoring").setLevel(logging.NOTSET)
