"""CLI integration tests."""

import subprocess
import sys
from pathlib import Path

import pytest
from click.testing import CliRunner

from popcorn.cli import cli
from popcorn.config import ConfigManager
from popcorn.core.models import WatchedEntry
from popcorn.core.services import JsonFileStore, WatchlistStore


@pytest.fixture
def seeded_watchlist(config):
    """Watchlist file with one movie on it."""
    watchlist = WatchlistStore(config, JsonFileStore(config))
    watchlist.add(
        WatchedEntry(
            imdb_id="tt0096895",
            title="Batman",
            year="1989",
            imdb_rating=7.5,
            user_rating=8,
            runtime_minutes=126,
            rating_change_count=1,
        )
    )
    return watchlist


@pytest.mark.integration
def test_cli_help():
    """Test CLI help command."""
    result = subprocess.run(
        [sys.executable, "-m", "popcorn.cli", "--help"],
        capture_output=True,
        text=True,
        cwd=Path(__file__).parent.parent.parent,
    )

    assert result.returncode == 0
    assert "Popcorn Watchlist" in result.stdout
    for command in ("search", "details", "rate", "watched", "remove", "browse", "init"):
        assert command in result.stdout


@pytest.mark.integration
def test_cli_init_command(tmp_path):
    """Test CLI init command."""
    config_path = tmp_path / "test_config.yaml"

    result = CliRunner().invoke(cli, ["init", "--output", str(config_path)])

    assert result.exit_code == 0
    assert config_path.exists()
    content = config_path.read_text()
    assert "omdb:" in content
    assert "storage:" in content
    assert ConfigManager(config_path).validate_config_file(config_path)


@pytest.mark.integration
def test_cli_watched_lists_entries(temp_config_file, seeded_watchlist):
    """watched prints the summary and every entry."""
    result = CliRunner().invoke(cli, ["--config", str(temp_config_file), "watched"])

    assert result.exit_code == 0
    assert "1 movies" in result.output
    assert "Batman (1989)" in result.output


@pytest.mark.integration
def test_cli_remove(temp_config_file, config, seeded_watchlist):
    """remove drops the entry from the persisted list."""
    result = CliRunner().invoke(
        cli, ["--config", str(temp_config_file), "remove", "tt0096895"]
    )

    assert result.exit_code == 0
    assert "Removed 1 entry" in result.output
    assert WatchlistStore(config, JsonFileStore(config)).list() == []


@pytest.mark.integration
def test_cli_short_search_needs_no_network(temp_config_file):
    """Queries under three characters report zero results offline."""
    result = CliRunner().invoke(cli, ["--config", str(temp_config_file), "search", "ba"])

    assert result.exit_code == 0
    assert "Found 0 results" in result.output


@pytest.mark.integration
def test_cli_status(temp_config_file, seeded_watchlist):
    """status shows configuration and the watched count."""
    result = CliRunner().invoke(cli, ["--config", str(temp_config_file), "status"])

    assert result.exit_code == 0
    assert "Watched Movies: 1" in result.output


@pytest.mark.integration
def test_cli_missing_config(tmp_path):
    """A missing configuration file is reported by click."""
    result = CliRunner().invoke(cli, ["--config", str(tmp_path / "nope.yaml"), "watched"])

    assert result.exit_code != 0


@pytest.mark.integration
def test_cli_invalid_config(tmp_path):
    """An invalid configuration is reported and exits with status 1."""
    config_path = tmp_path / "config.yaml"
    config_path.write_text('omdb:\n  api_key: "x"\nui:\n  detail_title_format: "{year}"\n')

    result = CliRunner().invoke(cli, ["--config", str(config_path), "watched"])

    assert result.exit_code == 1
    assert "Configuration error" in result.output
