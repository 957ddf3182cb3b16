"""
Tests for configuration loading, table lookup and environment persistence.
"""

import os
import stat

import pytest

from operadash.configuration import ConfigError, ConfigProvider, DrillTargetKind

ENV_YAML = """\
environments:
  local:
    url: http://localhost:8080/engine-rest
    username: demo
    password: demo
  prod:
    url: https://prod/engine-rest
    ui_color: red
active: local
"""

APP_YAML = """\
tables:
  - name: process-definitions
    columns:
      - name: key
        width: 30%
      - name: name
      - name: id
        visible: false
    drilldown:
      - target: process-instances
        param: processDefinitionKey
        column: key
  - name: external-task
    columns:
      - name: id
    drilldown:
      - target: incident
"""


@pytest.fixture
def config_files(tmp_path):
    env_path = tmp_path / 'env.yaml'
    app_path = tmp_path / 'cfg.yaml'
    env_path.write_text(ENV_YAML, encoding='utf-8')
    app_path.write_text(APP_YAML, encoding='utf-8')
    return env_path, app_path


@pytest.fixture
def loaded(config_files):
    return ConfigProvider.load(*config_files)


class TestLoad:
    """Test suite for reading the two YAML files."""

    def test_environments_parsed(self, loaded):
        assert loaded.environment_names == ['local', 'prod']
        assert loaded.environment('local').username == 'demo'
        assert loaded.environment('prod').ui_color == 'red'
        assert loaded.active == 'local'

    def test_tables_parsed(self, loaded):
        table_def = loaded.find_table_def('process-definitions')
        assert [c.name for c in table_def.visible_columns] == ['key', 'name']
        assert table_def.columns[0].percent == 30
        assert table_def.columns[1].percent is None
        assert table_def.drilldown[0].kind is DrillTargetKind.INSTANCES

    def test_drill_column_defaults_to_id(self, loaded):
        rule = loaded.find_table_def('external-task').drilldown[0]
        assert rule.column == 'id'
        assert rule.kind is DrillTargetKind.UNSUPPORTED

    def test_missing_file(self, tmp_path, config_files):
        with pytest.raises(ConfigError, match='file not found'):
            ConfigProvider.load(tmp_path / 'absent.yaml', config_files[1])

    def test_bad_yaml(self, tmp_path, config_files):
        broken = tmp_path / 'broken.yaml'
        broken.write_text('tables: [unclosed', encoding='utf-8')

        with pytest.raises(ConfigError, match='failed to parse app'):
            ConfigProvider.load(config_files[0], broken)

    def test_top_level_must_be_mapping(self, tmp_path, config_files):
        listing = tmp_path / 'list.yaml'
        listing.write_text('- a\n- b\n', encoding='utf-8')

        with pytest.raises(ConfigError, match='mapping'):
            ConfigProvider.load(listing, config_files[1])

    def test_empty_files_give_empty_config(self, tmp_path):
        env_path = tmp_path / 'env.yaml'
        app_path = tmp_path / 'cfg.yaml'
        env_path.write_text('', encoding='utf-8')
        app_path.write_text('', encoding='utf-8')

        config = ConfigProvider.load(env_path, app_path)

        assert config.environments == {}
        assert config.tables == []
        assert config.initial_environment() == ''

    def test_jmespath_get(self, loaded):
        assert loaded.get('environments.prod.url') == 'https://prod/engine-rest'
        assert loaded.get('tables[].name') == ['process-definitions', 'external-task']


class TestTableLookup:
    """Test suite for flexible table name matching."""

    @pytest.mark.parametrize(
        'name, expected',
        [
            ('process-definitions', 'process-definitions'),
            ('process-definition', 'process-definitions'),
            ('external-tasks', 'external-task'),
            ('process-def', 'process-definitions'),
            ('incident', None),
            ('', None),
        ],
    )
    def test_find_table_def(self, loaded, name, expected):
        table_def = loaded.find_table_def(name)
        assert (table_def.name if table_def else None) == expected

    def test_root_contexts_include_builtins_and_tables(self, loaded):
        contexts = loaded.root_contexts()
        assert 'process-definitions' in contexts
        assert 'job' in contexts
        assert 'external-task' in contexts
        assert contexts == sorted(set(contexts))


class TestActiveEnvironment:
    """Test suite for choosing and persisting the active environment."""

    def test_initial_environment_prefers_active(self, loaded):
        assert loaded.initial_environment() == 'local'

    def test_initial_environment_falls_back_to_first(self):
        config = ConfigProvider({'environments': {'b': {'url': 'u'}, 'a': {'url': 'u'}}, 'active': 'gone'})
        assert config.initial_environment() == 'a'

    def test_save_active_environment(self, loaded, config_files):
        env_path, app_path = config_files

        loaded.save_active_environment('prod')

        assert stat.S_IMODE(os.stat(env_path).st_mode) == 0o600
        reloaded = ConfigProvider.load(env_path, app_path)
        assert reloaded.active == 'prod'
        assert reloaded.environment('local').password == 'demo'

    def test_save_leaves_table_file_alone(self, loaded, config_files):
        env_path, app_path = config_files

        loaded.save_active_environment('prod')

        assert app_path.read_text(encoding='utf-8') == APP_YAML

    def test_save_without_path_is_in_memory(self):
        config = ConfigProvider({'environments': {'a': {'url': 'u'}}})

        config.save_active_environment('a')

        assert config.active == 'a'
