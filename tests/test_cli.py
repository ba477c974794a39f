"""Tests for the command-line interface."""

import json
from unittest.mock import patch

import pytest

from conftest import FakeTextGenerator
from seo_scoring import cli

pytestmark = pytest.mark.usefixtures("reset_logging")

PAGE = "<h1>SEO Guide</h1><p>seo tips for seo beginners and seo experts</p>"


@pytest.fixture
def page_file(tmp_path):
    path = tmp_path / "page.html"
    path.write_text(PAGE, encoding="utf-8")
    return path


class TestCli:
    """Test cases for the CLI commands."""

    def test_grade(self, capsys):
        assert cli.main(["--log-level", "ERROR", "grade", "95"]) == 0

        out = capsys.readouterr().out
        assert "A (Excellent" in out
        assert "Maintain current implementation" in out

    def test_normalize_lower_better(self, capsys):
        assert cli.main(["--log-level", "ERROR", "normalize", "3250", "2500", "4000", "6000"]) == 0
        assert capsys.readouterr().out.strip() == "88"

    def test_normalize_higher_better(self, capsys):
        assert cli.main([
            "--log-level", "ERROR", "normalize", "70", "80", "60", "40", "--higher-better"
        ]) == 0
        assert capsys.readouterr().out.strip() == "88"

    def test_no_command_prints_help(self, capsys):
        assert cli.main(["--log-level", "ERROR"]) == 0
        assert "usage" in capsys.readouterr().out

    def test_analyze_requires_api_key(self, page_file, monkeypatch, capsys):
        monkeypatch.setattr(cli.settings, "LLM_API_KEY", None)

        assert cli.main(["--log-level", "ERROR", "analyze", str(page_file), "--title", "SEO Guide"]) == 1
        assert "LLM API key is required" in capsys.readouterr().out

    def test_analyze_unsupported_provider(self, page_file, monkeypatch, capsys):
        monkeypatch.setattr(cli.settings, "LLM_API_KEY", "test-key")
        monkeypatch.setattr(cli.settings, "LLM_PROVIDER", "bogus")

        assert cli.main(["--log-level", "ERROR", "analyze", str(page_file), "--title", "SEO Guide"]) == 1
        assert "Unsupported provider: bogus" in capsys.readouterr().out

    def test_analyze_json(self, page_file, tmp_path, monkeypatch, capsys):
        monkeypatch.setattr(cli.settings, "LLM_API_KEY", "test-key")
        db_url = f"sqlite:///{tmp_path / 'cli.db'}"

        with patch.object(cli, "LLMClient", return_value=FakeTextGenerator()) as mock_client:
            code = cli.main([
                "--log-level", "ERROR", "analyze", str(page_file),
                "--title", "SEO Guide", "-k", "seo", "--content-id", "page-1",
                "--db", db_url, "--json",
            ])

        assert code == 0
        assert mock_client.call_args.kwargs["api_key"] == "test-key"
        data = json.loads(capsys.readouterr().out)
        assert data["content_id"] == "page-1"
        assert data["keyword_analysis"]["primary_keyword"] == "seo"
        assert data["keyword_analysis"]["keyword_in_headings"] == 1
        assert data["analysis_id"] is not None
        assert 0 <= data["content_score"] <= 100

    def test_analyze_text_report(self, page_file, tmp_path, monkeypatch, capsys):
        monkeypatch.setattr(cli.settings, "LLM_API_KEY", "test-key")
        db_url = f"sqlite:///{tmp_path / 'cli.db'}"

        with patch.object(cli, "LLMClient", return_value=FakeTextGenerator()):
            assert cli.main([
                "--log-level", "ERROR", "analyze", str(page_file),
                "--title", "SEO Guide", "--db", db_url,
            ]) == 0

        out = capsys.readouterr().out
        assert "Content Score:" in out
        assert "Primary keyword: \"seo\"" in out
