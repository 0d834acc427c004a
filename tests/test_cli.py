"""Tests for the whisk command line."""

import io
import json
from unittest.mock import AsyncMock, patch

from whisk import cli
from whisk.services.payload import parse_completion


class TestParseCommand:

    def test_parse_file(self, tmp_path, caesar_salad, capsys):
        completion = tmp_path / "completion.txt"
        completion.write_text(f"Here you go!\n```json\n{caesar_salad}\n```", encoding="utf-8")

        assert cli.main(["parse", str(completion)]) == 0

        output = json.loads(capsys.readouterr().out)
        assert output["multiple"] is False
        assert output["recipes"][0]["title"] == "Caesar Salad 🥗"
        assert [g["name"] for g in output["recipes"][0]["ingredientGroups"]] == ["Dressing", "Salad"]

    def test_parse_stdin(self, monkeypatch, three_recipes, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO(three_recipes))

        assert cli.main(["parse", "-"]) == 0

        output = json.loads(capsys.readouterr().out)
        assert len(output["recipes"]) == 3

    def test_parse_failure_exit_code(self, tmp_path, capsys):
        completion = tmp_path / "refusal.txt"
        completion.write_text("Sorry, I can't help with that.", encoding="utf-8")

        assert cli.main(["parse", str(completion)]) == 1
        assert "try rephrasing" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        assert cli.main(["parse", str(tmp_path / "nope.txt")]) == 1
        assert "Error" in capsys.readouterr().err


class TestGenerateCommand:

    def test_generate(self, caesar_salad, capsys):
        with patch("whisk.cli.RecipeGenerator") as generator_cls:
            generator_cls.return_value.generate = AsyncMock(return_value=parse_completion(caesar_salad))

            assert cli.main(["generate", "a crunchy salad", "--count", "1", "--provider", "openrouter"]) == 0

        generator_cls.assert_called_once_with(provider="openrouter")
        generator_cls.return_value.generate.assert_awaited_once_with("a crunchy salad", count=1)
        assert json.loads(capsys.readouterr().out)["recipes"][0]["description"] == "Crisp salad."

    def test_generate_without_key(self, monkeypatch, capsys):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        monkeypatch.setattr(cli, "load_dotenv", lambda: None)

        assert cli.main(["generate", "soup", "--provider", "openai"]) == 1
        assert "OPENAI_API_KEY" in capsys.readouterr().err
