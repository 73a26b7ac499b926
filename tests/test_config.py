"""Tests for configuration resolution and environment fallbacks."""
import pytest

from gardisto.config import GardistoOptions, env_flag, env_list, resolve_config
from gardisto.errors import ConfigurationError

GARDISTO_VARS = [
    'GARDISTO_DEBUG',
    'GARDISTO_SHOW_DEFAULT_VALUES',
    'GARDISTO_INCLUDE',
    'GARDISTO_EXCLUDE',
    'GARDISTO_ENV_FILE',
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in GARDISTO_VARS:
        monkeypatch.delenv(name, raising=False)


class TestResolveConfig:

    def test_defaults(self, tmp_path):
        config = resolve_config(GardistoOptions(project_path=tmp_path))

        assert config.project_path == tmp_path.resolve()
        assert config.include == []
        assert config.exclude == []
        assert config.debug is False
        assert config.show_default_values is False
        assert config.env_file is None

    def test_explicit_options_win(self, tmp_path, monkeypatch):
        monkeypatch.setenv('GARDISTO_DEBUG', 'true')
        monkeypatch.setenv('GARDISTO_INCLUDE', 'lib/*')
        config = resolve_config(GardistoOptions(project_path=tmp_path, debug=False, include=['src/*']))

        assert config.debug is False
        assert config.include == ['src/*']

    def test_environment_fallbacks(self, tmp_path, monkeypatch):
        monkeypatch.setenv('GARDISTO_SHOW_DEFAULT_VALUES', 'yes')
        monkeypatch.setenv('GARDISTO_EXCLUDE', '*.test.ts, dist/*')
        config = resolve_config(GardistoOptions(project_path=tmp_path))

        assert config.show_default_values is True
        assert config.exclude == ['*.test.ts', 'dist/*']

    def test_missing_project_path(self, tmp_path):
        with pytest.raises(ConfigurationError) as exc_info:
            resolve_config(GardistoOptions(project_path=tmp_path / 'nope'))
        assert exc_info.value.code == 'CONFIG_ERROR'

    def test_project_path_is_a_file(self, tmp_path):
        target = tmp_path / 'file.js'
        target.write_text('', encoding='utf-8')
        with pytest.raises(ConfigurationError):
            resolve_config(GardistoOptions(project_path=target))

    def test_env_file_relative_to_project(self, tmp_path):
        (tmp_path / '.env.test').write_text('A=1\n', encoding='utf-8')
        config = resolve_config(GardistoOptions(project_path=tmp_path, env_file='.env.test'))
        assert config.env_file == tmp_path.resolve() / '.env.test'

    def test_missing_env_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            resolve_config(GardistoOptions(project_path=tmp_path, env_file='.env.missing'))


class TestEnvHelpers:

    @pytest.mark.parametrize('value, expected', [
        ('1', True), ('TRUE', True), ('on', True), ('0', False), ('', False), ('nope', False),
    ])
    def test_env_flag(self, monkeypatch, value, expected):
        monkeypatch.setenv('GARDISTO_DEBUG', value)
        assert env_flag('GARDISTO_DEBUG') is expected

    def test_env_list_unset(self):
        assert env_list('GARDISTO_INCLUDE') == []
