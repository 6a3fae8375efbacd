"""Tests for gitbuddy.cli module."""

import pytest
from typer.testing import CliRunner

from gitbuddy import global_config
from gitbuddy.cli import app
from gitbuddy.cli import ui
from gitbuddy.config import Vendor
from gitbuddy.git import GitError, NoStagedChangesError
from gitbuddy.llm import LLMResult, Prompt, TokenUsage, TransportError


runner = CliRunner()


@pytest.fixture
def result_two():
    """Generation result with two candidates."""
    return LLMResult(
        commit_message="feat: add x",
        commit_messages=["feat: add x", "fix: handle y\n\nDetails here."],
        usage=TokenUsage(prompt_tokens=100, completion_tokens=20, total_tokens=120),
    )


@pytest.fixture
def generation_env(mocker, config_dir, monkeypatch, sample_diff, result_two):
    """Patch git and the model call for the generation flow."""
    monkeypatch.setenv("DEEPSEEK_API_KEY", "sk-test-key-1234567890")
    mocks = {
        "ensure": mocker.patch("gitbuddy.cli.main.ensure_git_repository"),
        "diff": mocker.patch("gitbuddy.cli.main.get_staged_diff", return_value=sample_diff),
        "generate": mocker.patch("gitbuddy.cli.main.generate_commit_messages", return_value=result_two),
        "commit": mocker.patch("gitbuddy.cli.main.git_commit"),
        "push": mocker.patch("gitbuddy.cli.main.git_push"),
    }
    return mocks


class TestGenerateCommand:
    """Tests for the default command and `gitbuddy ai`."""

    def test_enter_selects_first_option(self, generation_env):
        """Test that pressing Enter commits option 1."""
        result = runner.invoke(app, [], input="\n")

        assert result.exit_code == 0
        assert "Option 1:" in result.output
        assert "Option 2:" in result.output
        generation_env["commit"].assert_called_once_with("feat: add x", dry_run=False)
        generation_env["push"].assert_not_called()

    def test_select_second_option(self, generation_env):
        """Test choosing a numbered option."""
        result = runner.invoke(app, ["ai"], input="2\n")

        assert result.exit_code == 0
        generation_env["commit"].assert_called_once_with(
            "fix: handle y\n\nDetails here.", dry_run=False
        )

    def test_cancel(self, generation_env):
        """Test that 'n' cancels without committing."""
        result = runner.invoke(app, ["ai"], input="n\n")

        assert result.exit_code == 0
        assert "cancelled" in result.output.lower()
        generation_env["commit"].assert_not_called()

    def test_invalid_choice(self, generation_env):
        """Test that an out-of-range choice exits with an error."""
        result = runner.invoke(app, ["ai"], input="9\n")

        assert result.exit_code == 1
        assert "Invalid input choice" in result.output
        generation_env["commit"].assert_not_called()

    def test_push_and_dry_run(self, generation_env):
        """Test that --push and --dry-run reach git."""
        result = runner.invoke(app, ["ai", "--push", "--dry-run"], input="\n")

        assert result.exit_code == 0
        generation_env["commit"].assert_called_once_with("feat: add x", dry_run=True)
        generation_env["push"].assert_called_once_with(dry_run=True)

    def test_global_options_are_forwarded(self, generation_env, sample_diff):
        """Test that options before the subcommand reach the generator."""
        result = runner.invoke(
            app,
            [
                "--vendor", "ollama",
                "--model", "llama3.2",
                "--prompt", "p2",
                "--hint", "be brief",
                "-n", "2",
                "-r", "#42",
                "--language", "german",
                "ai",
            ],
            input="\n",
        )

        assert result.exit_code == 0
        args, kwargs = generation_env["generate"].call_args
        assert args[0] == sample_diff
        assert args[1].vendor == Vendor.OLLAMA
        assert args[1].model == "llama3.2"
        assert kwargs["prompt"] == Prompt.P2
        assert kwargs["hint"] == "be brief"
        assert kwargs["number"] == 2
        assert kwargs["reference"] == "#42"
        assert kwargs["language"] == "german"

    def test_defaults_come_from_config(self, generation_env):
        """Test that configured language and wrap width are used."""
        global_config.save_global_config({"language": "french", "wrap_width": 72})

        runner.invoke(app, [], input="\n")

        kwargs = generation_env["generate"].call_args[1]
        assert kwargs["language"] == "french"
        assert kwargs["wrap_width"] == 72
        assert kwargs["number"] == 3

    def test_prints_stats(self, generation_env):
        """Test that token usage is shown."""
        result = runner.invoke(app, [], input="\n")

        assert "120" in result.output
        assert "Prompt Tokens" in result.output

    def test_no_staged_changes(self, generation_env):
        """Test the message when nothing is staged."""
        generation_env["diff"].side_effect = NoStagedChangesError("No files added to staging!")

        result = runner.invoke(app, [])

        assert result.exit_code == 1
        assert "No files added to staging" in result.output
        generation_env["generate"].assert_not_called()

    def test_git_error(self, generation_env):
        """Test handling of git errors."""
        generation_env["ensure"].side_effect = GitError("Not in a git repository.")

        result = runner.invoke(app, [])

        assert result.exit_code == 1
        assert "Git error" in result.output

    def test_llm_error(self, generation_env):
        """Test handling of model call failures."""
        generation_env["generate"].side_effect = TransportError(500, "boom")

        result = runner.invoke(app, [])

        assert result.exit_code == 1
        assert "LLM error" in result.output
        assert "status code: 500" in result.output

    def test_missing_api_key(self, generation_env, monkeypatch):
        """Test that a missing key is reported before any request."""
        monkeypatch.delenv("DEEPSEEK_API_KEY")

        result = runner.invoke(app, [])

        assert result.exit_code == 1
        assert "API key not found" in result.output
        generation_env["generate"].assert_not_called()

    def test_unknown_vendor(self, generation_env):
        """Test that an unknown vendor is a configuration error."""
        result = runner.invoke(app, ["--vendor", "acme"])

        assert result.exit_code == 1
        assert "Unknown vendor" in result.output

    def test_empty_result(self, generation_env):
        """Test that zero candidates exit with an error."""
        generation_env["generate"].return_value = LLMResult(commit_message="")

        result = runner.invoke(app, [])

        assert result.exit_code == 1
        assert "no commit messages" in result.output


class TestConfigCommands:
    """Tests for `gitbuddy config` commands."""

    def test_show_without_config(self, config_dir):
        """Test show before init."""
        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 0
        assert "gitbuddy init" in result.output

    def test_show_masks_key(self, config_dir):
        """Test that show prints settings and a masked key."""
        global_config.initialize_default_config()
        global_config.save_credential("DEEPSEEK_API_KEY", "sk-1234567890abcdef")

        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 0
        assert "deepseek" in result.output
        assert "sk-12345...cdef" in result.output
        assert "sk-1234567890abcdef" not in result.output

    def test_set_key(self, config_dir):
        """Test saving a key through the prompt."""
        result = runner.invoke(app, ["config", "set-key", "openai"], input="sk-new\n")

        assert result.exit_code == 0
        assert global_config.get_credential("OPENAI_API_KEY") == "sk-new"

    def test_set_key_invalid_vendor(self, config_dir):
        """Test set-key with an unknown vendor."""
        result = runner.invoke(app, ["config", "set-key", "acme"])

        assert result.exit_code == 1
        assert "Invalid vendor" in result.output

    def test_set_vendor(self, config_dir):
        """Test switching vendor with model and endpoint."""
        result = runner.invoke(
            app,
            ["config", "set-vendor", "ollama", "--model", "mistral", "--base-url", "http://box:11434/v1"],
        )

        assert result.exit_code == 0
        config = global_config.load_global_config()
        assert config["default_vendor"] == "ollama"
        assert config["vendors"]["ollama"] == {"model": "mistral", "base_url": "http://box:11434/v1"}

    def test_set_vendor_defaults(self, config_dir):
        """Test that set-vendor falls back to the default model and URL."""
        result = runner.invoke(app, ["config", "set-vendor", "openai"])

        assert result.exit_code == 0
        config = global_config.load_global_config()
        assert config["vendors"]["openai"] == {
            "model": "gpt-4o-mini",
            "base_url": "https://api.openai.com/v1",
        }

    def test_list_vendors(self):
        """Test listing vendors and models."""
        result = runner.invoke(app, ["config", "list-vendors"])

        assert result.exit_code == 0
        for vendor in Vendor:
            assert vendor.value in result.output
        assert "deepseek-chat" in result.output


class TestInitCommand:
    """Tests for `gitbuddy init`."""

    def test_init_with_key(self, config_dir):
        """Test interactive setup for a vendor that needs a key."""
        # vendor 1 (openai), model 2, default URL, key
        result = runner.invoke(app, ["init"], input="1\n2\n\nsk-init\n")

        assert result.exit_code == 0
        config = global_config.load_global_config()
        assert config["default_vendor"] == "openai"
        assert config["vendors"]["openai"]["model"] == "gpt-4o"
        assert global_config.get_credential("OPENAI_API_KEY") == "sk-init"

    def test_init_ollama_skips_key(self, config_dir):
        """Test that ollama setup does not ask for a key."""
        result = runner.invoke(app, ["init"], input="3\n1\n\n")

        assert result.exit_code == 0
        assert global_config.get_default_vendor() == Vendor.OLLAMA
        assert global_config.load_credentials() == {}

    def test_init_keeps_existing(self, config_dir):
        """Test declining to overwrite an existing config."""
        global_config.save_global_config({"default_vendor": "openai"})

        result = runner.invoke(app, ["init"], input="n\n")

        assert result.exit_code == 0
        assert "Keeping existing configuration" in result.output

    def test_init_invalid_choice(self, config_dir):
        """Test that an out-of-range vendor aborts."""
        result = runner.invoke(app, ["init"], input="9\n")

        assert result.exit_code == 1


class TestUi:
    """Tests for gitbuddy.cli.ui helpers."""

    def test_parse_choice(self, result_two):
        """Test the choice mapping."""
        assert ui.parse_choice("", result_two) == "feat: add x"
        assert ui.parse_choice("2", result_two) == "fix: handle y\n\nDetails here."
        assert ui.parse_choice("N", result_two) is None

    def test_parse_choice_rejects_text(self, result_two):
        """Test that non-numeric input is rejected."""
        with pytest.raises(ValueError):
            ui.parse_choice("first", result_two)

    def test_parse_choice_rejects_zero(self, result_two):
        """Test that option numbers start at 1."""
        with pytest.raises(ValueError):
            ui.parse_choice("0", result_two)

    def test_format_stats_skips_zero(self):
        """Test that zero values are left out of the stats."""
        result = LLMResult(
            commit_message="x",
            commit_messages=["x"],
            usage=TokenUsage(total_tokens=10, completion_tokens=10),
        )

        lines = ui.format_stats(result, duration_ms=0)

        assert len(lines) == 2
        assert not any("Prompt Tokens" in line for line in lines)
        assert not any("Duration" in line for line in lines)
