#!/usr/bin/env python3
"""
Unit tests for configuration loading (benchmark/config.py)
"""

import argparse
from pathlib import Path

import pytest
import yaml

from threadbench.benchmark.config import (
    DEFAULT_CONFIG,
    BenchmarkConfig,
    CpuWorkloadConfig,
    FileWorkloadConfig,
    merge_config_with_args,
)
from threadbench.core.errors import ConfigurationError


@pytest.fixture
def isolated(tmp_path, monkeypatch):
    """No config file in the working or home directory."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(Path, "home", lambda: tmp_path / "home")
    return tmp_path


def _write_yaml(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(data))
    return path


@pytest.mark.unit
class TestWorkloadConfigs:
    """Test the typed configuration sections"""

    def test_cpu_defaults(self):
        config = CpuWorkloadConfig()
        assert config.range_width == 1_000_000
        assert (config.lower_bound, config.upper_bound) == (33_550_300, 33_550_400)

    @pytest.mark.parametrize(
        "kwargs",
        [{"range_width": 0}, {"lower_bound": 0}, {"lower_bound": 10, "upper_bound": 9}],
    )
    def test_cpu_rejects_invalid_values(self, kwargs):
        with pytest.raises(ConfigurationError):
            CpuWorkloadConfig(**kwargs)

    def test_file_defaults_and_derived_sizes(self):
        config = FileWorkloadConfig()
        assert config.target_dir == Path("__target__")
        assert config.number_of_files == 200
        assert config.file_size == 10_000_000
        assert config.number_of_writes == 1220

    def test_file_target_dir_is_coerced_to_path(self):
        assert FileWorkloadConfig(target_dir="somewhere").target_dir == Path("somewhere")

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"number_of_files": 0},
            {"buffer_size": 0},
            {"total_number_of_bytes": -1},
            {"filename_pattern": "text-{name}.txt"},
        ],
    )
    def test_file_rejects_invalid_values(self, kwargs):
        with pytest.raises(ConfigurationError):
            FileWorkloadConfig(**kwargs)


@pytest.mark.unit
class TestBenchmarkConfig:
    """Test BenchmarkConfig loading"""

    def test_defaults_without_file(self, isolated):
        config = BenchmarkConfig()
        assert config.config_file is None
        assert config.get_default_number_of_threads() == 10
        assert config.get('debug_mode') is False
        assert config.get_cpu_config() == CpuWorkloadConfig()
        assert config.get_file_config() == FileWorkloadConfig()
        assert config.get_pool_timeout() == 300.0

    def test_finds_file_in_working_directory(self, isolated):
        _write_yaml(isolated / "threadbench.yaml", {"default_number_of_threads": 4})
        config = BenchmarkConfig()
        assert config.config_file == Path.cwd() / "threadbench.yaml"
        assert config.get_default_number_of_threads() == 4

    def test_finds_file_in_home_directory(self, isolated):
        _write_yaml(isolated / "home" / ".threadbench" / "threadbench.yaml", {"debug_mode": True})
        assert BenchmarkConfig().get('debug_mode') is True

    def test_partial_sections_are_filled_with_defaults(self, tmp_path):
        path = _write_yaml(tmp_path / "c.yaml", {"files": {"number_of_files": 5}, "pool": None})
        config = BenchmarkConfig(path)

        files = config.get_file_config()
        assert files.number_of_files == 5
        assert files.buffer_size == DEFAULT_CONFIG['files']['buffer_size']
        assert config.get_pool_timeout() == 300.0

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            BenchmarkConfig(tmp_path / "absent.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("cpu: [unclosed\n")
        with pytest.raises(ConfigurationError):
            BenchmarkConfig(path)

    def test_top_level_must_be_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ConfigurationError):
            BenchmarkConfig(path)

    def test_section_must_be_mapping(self, tmp_path):
        path = _write_yaml(tmp_path / "c.yaml", {"cpu": 5})
        with pytest.raises(ConfigurationError) as exc_info:
            BenchmarkConfig(path)
        assert exc_info.value.details == {"config_key": "cpu"}

    @pytest.mark.parametrize(
        "data,getter",
        [
            ({"cpu": {"range_width": "wide"}}, "get_cpu_config"),
            ({"files": {"buffer_size": None}}, "get_file_config"),
            ({"pool": {"shutdown_timeout": 0}}, "get_pool_timeout"),
            ({"pool": {"shutdown_timeout": "soon"}}, "get_pool_timeout"),
            ({"default_number_of_threads": 0}, "get_default_number_of_threads"),
            ({"default_number_of_threads": "many"}, "get_default_number_of_threads"),
        ],
    )
    def test_invalid_values(self, tmp_path, data, getter):
        config = BenchmarkConfig(_write_yaml(tmp_path / "c.yaml", data))
        with pytest.raises(ConfigurationError):
            getattr(config, getter)()

    def test_example_config_round_trip(self, tmp_path, capsys):
        path = tmp_path / "out" / "threadbench.yaml"
        BenchmarkConfig.save_example_config(path)

        assert yaml.safe_load(path.read_text()) == DEFAULT_CONFIG
        assert BenchmarkConfig(path).get_file_config() == FileWorkloadConfig()
        assert "Example config saved" in capsys.readouterr().out

    def test_print_config(self, isolated, capsys):
        BenchmarkConfig().print_config()
        out = capsys.readouterr().out
        assert "Using default configuration" in out
        assert "range_width: 1000000" in out


@pytest.mark.unit
class TestMergeConfigWithArgs:
    """Test command-line overrides"""

    def test_overrides_take_precedence(self, isolated):
        args = argparse.Namespace(target_dir=Path("/tmp/bench"), pool_timeout=2.5, debug=True)
        config = merge_config_with_args(BenchmarkConfig(), args)

        assert config.get_file_config().target_dir == Path("/tmp/bench")
        assert config.get_pool_timeout() == 2.5
        assert config.get('debug_mode') is True

    def test_unset_arguments_keep_file_values(self, tmp_path):
        path = _write_yaml(tmp_path / "c.yaml", {"debug_mode": True, "pool": {"shutdown_timeout": 7}})
        args = argparse.Namespace(target_dir=None, pool_timeout=None, debug=False)
        config = merge_config_with_args(BenchmarkConfig(path), args)

        assert config.get('debug_mode') is True
        assert config.get_pool_timeout() == 7.0
        assert config.get_file_config().target_dir == Path("__target__")
