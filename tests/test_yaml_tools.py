import pytest
import yaml

from shanoir_deployer.errors import ConfigurationError
from shanoir_deployer.lib.yaml_tools import deep_merge, dump_manifests, load_string


def test_deep_merge_prefers_second_mapping():
    base = {"smtp": {"host": "a", "port": 25}, "labels": {"x": "1"}, "allowed_admin_ips": ["192.0.2.1"]}
    overlay = {"smtp": {"port": 587}, "allowed_admin_ips": ["192.0.2.2"]}

    merged = deep_merge(base, overlay)

    assert merged == {
        "smtp": {"host": "a", "port": 587},
        "labels": {"x": "1"},
        "allowed_admin_ips": ["192.0.2.2"],
    }
    assert base["smtp"]["port"] == 25


def test_deep_merge_replaces_nested_lists_and_nulls():
    base = {"smtp": {"port": 25}, "volume_claims": {"tmp": {"access_modes": ["ReadWriteOnce"]}}}
    overlay = {"smtp": None, "volume_claims": {"tmp": {"access_modes": ["ReadWriteMany"]}}}

    merged = deep_merge(base, overlay)

    assert merged == {"smtp": None, "volume_claims": {"tmp": {"access_modes": ["ReadWriteMany"]}}}


def test_dump_manifests_multi_document():
    text = dump_manifests([
        {"kind": "ConfigMap", "data": {"motd": "hello\nworld"}},
        {"kind": "Secret", "stringData": {"a": "b"}},
    ])

    assert text.count("---\n") == 2
    assert "motd: |-" in text
    docs = list(yaml.safe_load_all(text))
    assert docs[0]["data"]["motd"] == "hello\nworld"
    assert docs[1]["kind"] == "Secret"


def test_load_string_empty_document():
    assert load_string("") == {}


def test_load_string_invalid_yaml():
    with pytest.raises(ConfigurationError, match="Invalid yaml in site.yml"):
        load_string("url: [", "site.yml")
