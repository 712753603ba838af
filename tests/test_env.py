"""Tests for tw_candidate.core.env — .env loading, walk-up logic and ParserConfig building."""

import os
from pathlib import Path

import pytest
from tw_candidate.core.env import _find_dotenv, _parse_dotenv, config_from_env, load_env
from tw_candidate.core.types import ConfigError, ParserConfig


class TestParseDotenv:
    def test_simple_key_value(self, tmp_path: Path) -> None:
        f = tmp_path / '.env'
        f.write_text('TW_SEPARATOR=_\n')
        assert _parse_dotenv(f) == {'TW_SEPARATOR': '_'}

    def test_quoted_values(self, tmp_path: Path) -> None:
        f = tmp_path / '.env'
        f.write_text('TW_PREFIX="tw-"\nTW_SEPARATOR=\'__\'\n')
        assert _parse_dotenv(f) == {'TW_PREFIX': 'tw-', 'TW_SEPARATOR': '__'}

    def test_export_prefix(self, tmp_path: Path) -> None:
        f = tmp_path / '.env'
        f.write_text('export TW_PREFIX=tw-\n')
        assert _parse_dotenv(f) == {'TW_PREFIX': 'tw-'}

    def test_comments_and_blank_lines_ignored(self, tmp_path: Path) -> None:
        f = tmp_path / '.env'
        f.write_text('# comment\n\nFOO=bar\n\n')
        assert _parse_dotenv(f) == {'FOO': 'bar'}

    def test_no_value(self, tmp_path: Path) -> None:
        f = tmp_path / '.env'
        f.write_text('NOEQUALS\nFOO=bar\n')
        assert _parse_dotenv(f) == {'FOO': 'bar'}


class TestFindDotenv:
    def test_finds_in_cwd(self, tmp_path: Path) -> None:
        dotenv = tmp_path / '.env'
        dotenv.write_text('X=1\n')
        assert _find_dotenv(tmp_path) == dotenv

    def test_finds_in_parent(self, tmp_path: Path) -> None:
        subdir = tmp_path / 'sub'
        subdir.mkdir()
        dotenv = tmp_path / '.env'
        dotenv.write_text('X=1\n')
        assert _find_dotenv(subdir) == dotenv

    def test_stops_at_git_dir(self, tmp_path: Path) -> None:
        repo = tmp_path / 'repo'
        repo.mkdir()
        (tmp_path / '.env').write_text('X=1\n')
        (repo / '.git').mkdir()
        subdir = repo / 'src'
        subdir.mkdir()
        assert _find_dotenv(subdir) is None

    def test_stops_at_git_file(self, tmp_path: Path) -> None:
        repo = tmp_path / 'repo'
        repo.mkdir()
        (tmp_path / '.env').write_text('X=1\n')
        (repo / '.git').write_text('gitdir: ../somewhere\n')
        subdir = repo / 'src'
        subdir.mkdir()
        assert _find_dotenv(subdir) is None


class TestLoadEnv:
    def test_sets_missing_vars(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv('TW_TEST_KEY', 'unset')
        monkeypatch.delenv('TW_TEST_KEY')
        (tmp_path / '.env').write_text('TW_TEST_KEY=secret\n')
        monkeypatch.chdir(tmp_path)
        load_env()
        assert os.environ.get('TW_TEST_KEY') == 'secret'

    def test_does_not_overwrite_existing(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv('TW_TEST_KEY2', 'original')
        (tmp_path / '.env').write_text('TW_TEST_KEY2=fromfile\n')
        monkeypatch.chdir(tmp_path)
        load_env()
        assert os.environ.get('TW_TEST_KEY2') == 'original'

    def test_explicit_env_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv('TW_TEST_KEY3', 'unset')
        monkeypatch.delenv('TW_TEST_KEY3')
        dotenv = tmp_path / 'custom.env'
        dotenv.write_text('TW_TEST_KEY3=custom\n')
        assert load_env(env_file=str(dotenv)) == dotenv
        assert os.environ.get('TW_TEST_KEY3') == 'custom'

    def test_missing_explicit_env_file(self, tmp_path: Path) -> None:
        assert load_env(env_file=str(tmp_path / 'nope.env')) is None

    def test_returns_none_when_no_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / '.git').mkdir()
        monkeypatch.chdir(tmp_path)
        assert load_env() is None


class TestConfigFromEnv:
    def test_defaults(self) -> None:
        assert config_from_env({}) == ParserConfig(separator=':', prefix='', strip_prefix=False)

    def test_reads_variables(self) -> None:
        env = {'TW_SEPARATOR': '_', 'TW_PREFIX': 'tw-', 'TW_STRIP_PREFIX': 'true'}
        assert config_from_env(env) == ParserConfig(separator='_', prefix='tw-', strip_prefix=True)

    def test_strip_prefix_falsy(self) -> None:
        assert config_from_env({'TW_STRIP_PREFIX': 'no'}).strip_prefix is False

    def test_arguments_win(self) -> None:
        env = {'TW_SEPARATOR': '_', 'TW_PREFIX': 'tw-'}
        config = config_from_env(env, separator='__', prefix='', strip_prefix=False)
        assert config == ParserConfig(separator='__', prefix='')

    def test_reads_os_environ(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv('TW_SEPARATOR', '__')
        monkeypatch.delenv('TW_PREFIX', raising=False)
        monkeypatch.delenv('TW_STRIP_PREFIX', raising=False)
        assert config_from_env().separator == '__'

    def test_bad_separator_raises(self) -> None:
        with pytest.raises(ConfigError):
            config_from_env({'TW_SEPARATOR': ''})
