import os

import pytest

from wekaflow.flows.config import DEFAULT_TAGS, BridgeConfig
from wekaflow.flows.store import DirectoryFlowStore, InMemoryFlowStore


class TestBridgeConfig:
    def test_defaults(self):
        config = BridgeConfig()
        assert config.store == "memory"
        assert config.tags == DEFAULT_TAGS
        assert config.use_sentinel is True
        assert isinstance(config.create_store(), InMemoryFlowStore)

    def test_from_string(self, tmp_path):
        config = BridgeConfig.from_string(
            f"store=directory; store_path={tmp_path}; tags=OpenmlWeka, weka, test; use_sentinel=false"
        )
        assert config.store == "directory"
        assert config.store_path == str(tmp_path)
        assert config.tags == ["OpenmlWeka", "weka", "test"]
        assert config.use_sentinel is False
        assert isinstance(config.create_store(), DirectoryFlowStore)

    def test_from_string_ignores_empty_entries(self):
        assert BridgeConfig.from_string("store=memory;;  ;") == BridgeConfig()

    def test_relative_store_path_made_absolute(self):
        config = BridgeConfig.from_dict({"store": "directory", "store_path": "flows"})
        assert config.store_path == os.path.abspath("flows")

    @pytest.mark.parametrize(
        "config_string",
        ["store", "stores=memory", "use_sentinel=maybe"],
    )
    def test_from_string_errors(self, config_string):
        with pytest.raises(ValueError):
            BridgeConfig.from_string(config_string)

    def test_from_yaml(self, tmp_path):
        config_file = tmp_path / "bridge.yaml"
        config_file.write_text("store: memory\ntags:\n  - weka\nuse_sentinel: no\n")
        config = BridgeConfig.from_yaml(str(config_file))
        assert config.tags == ["weka"]
        assert config.use_sentinel is False

    def test_from_yaml_missing_file(self, tmp_path):
        with pytest.raises(ValueError):
            BridgeConfig.from_yaml(str(tmp_path / "missing.yaml"))

    def test_validate(self):
        with pytest.raises(ValueError):
            BridgeConfig(store="openml").validate()
        with pytest.raises(ValueError):
            BridgeConfig(store="directory").validate()
        BridgeConfig(store="Memory").validate()
