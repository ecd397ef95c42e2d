"""Tests for configuration loading and validation."""

from pathlib import Path

import pytest
import yaml

from lanwake.config.loader import (
    Host,
    find_host,
    hosts_from_config,
    load_config,
    runtime_settings,
    validate_config,
)
from lanwake.core.wol import WakeRequest


class TestLoadConfig:
    """Tests for load_config function."""

    def test_load_valid_yaml(self, tmp_path: Path) -> None:
        """Should load a valid YAML config file."""
        config_data = {"hosts": [{"name": "nas", "mac_address": "00:1B:44:11:3A:B7"}]}
        config_file = tmp_path / "config.yaml"
        config_file.write_text(yaml.dump(config_data))

        result = load_config(config_file)

        assert result == config_data
        assert result["hosts"][0]["name"] == "nas"

    def test_load_missing_file_raises(self) -> None:
        """Should raise FileNotFoundError for missing config."""
        with pytest.raises(FileNotFoundError):
            load_config(Path("/nonexistent/config.yaml"))

    def test_load_empty_file(self, tmp_path: Path) -> None:
        """Should return None for empty YAML file."""
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("")

        assert load_config(config_file) is None

    def test_load_invalid_yaml_raises(self, tmp_path: Path) -> None:
        """Should raise error for invalid YAML syntax."""
        config_file = tmp_path / "invalid.yaml"
        config_file.write_text("invalid: yaml: content: [")

        with pytest.raises(yaml.YAMLError):
            load_config(config_file)


class TestValidateConfig:
    """Tests for validate_config function."""

    def _host(self, **overrides: object) -> dict:
        base: dict = {"name": "nas", "mac_address": "00:1B:44:11:3A:B7"}
        base.update(overrides)
        return base

    def test_valid_config_no_errors(self) -> None:
        assert validate_config({"hosts": [self._host()]}) == []

    def test_hosts_optional(self) -> None:
        assert validate_config({}) == []
        assert validate_config({"hosts": []}) == []

    def test_root_must_be_mapping(self) -> None:
        assert validate_config(["nope"]) == ["Config root must be a YAML mapping"]  # type: ignore[arg-type]

    def test_hosts_must_be_list(self) -> None:
        errors = validate_config({"hosts": {"nas": "00:1B:44:11:3A:B7"}})
        assert any("list" in e for e in errors)

    def test_host_must_be_mapping(self) -> None:
        errors = validate_config({"hosts": ["nas"]})
        assert errors == ["hosts[0]: must be a mapping"]

    def test_invalid_mac(self) -> None:
        errors = validate_config({"hosts": [self._host(mac_address="NOTAMAC")]})
        assert any("mac_address" in e for e in errors)

    def test_bare_mac_accepted(self) -> None:
        assert validate_config({"hosts": [self._host(mac_address="001b44113ab7")]}) == []

    def test_missing_required_field(self) -> None:
        host = self._host()
        del host["mac_address"]
        errors = validate_config({"hosts": [host]})
        assert any("mac_address" in e for e in errors)

    def test_duplicate_names(self) -> None:
        errors = validate_config({"hosts": [self._host(), self._host()]})
        assert any("duplicate" in e for e in errors)

    @pytest.mark.parametrize("port", [0, 65536, "nine"])
    def test_invalid_host_port(self, port: object) -> None:
        errors = validate_config({"hosts": [self._host(port=port)]})
        assert any("port" in e for e in errors)

    def test_invalid_settings(self) -> None:
        config = {
            "settings": {"port": 70000, "timeout": -1, "workers": 0},
            "hosts": [self._host()],
        }
        errors = validate_config(config)
        assert len(errors) == 3

    @pytest.mark.parametrize("field", ["broadcast_ip", "interface"])
    @pytest.mark.parametrize("value", [None, "", "  ", 42])
    def test_host_address_fields_must_be_strings(self, field: str, value: object) -> None:
        """A blank ``broadcast_ip:`` line loads as None and must not reach the sender."""
        errors = validate_config({"hosts": [self._host(**{field: value})]})
        assert any(field in e for e in errors)

    def test_blank_host_broadcast_ip_from_yaml(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "hosts:\n  - name: nas\n    mac_address: '00:1B:44:11:3A:B7'\n    broadcast_ip:\n"
        )
        errors = validate_config(load_config(config_file))
        assert errors == ["hosts[0]: broadcast_ip must be a non-empty string, got None"]

    def test_null_settings_broadcast_ip(self) -> None:
        errors = validate_config({"settings": {"broadcast_ip": None}, "hosts": [self._host()]})
        assert any("settings: broadcast_ip" in e for e in errors)

    def test_address_fields_accepted(self) -> None:
        config = {
            "settings": {"broadcast_ip": "192.168.1.0/24"},
            "hosts": [self._host(broadcast_ip="10.0.0.255", interface="10.0.0.2")],
        }
        assert validate_config(config) == []

    def test_settings_must_be_mapping(self) -> None:
        errors = validate_config({"settings": "fast", "hosts": [self._host()]})
        assert any("settings" in e for e in errors)


class TestHostsFromConfig:
    """Tests for hosts_from_config."""

    def test_creates_host_with_defaults(self) -> None:
        hosts = hosts_from_config({"hosts": [{"name": "nas", "mac_address": "00:1B:44:11:3A:B7"}]})
        assert len(hosts) == 1
        h = hosts[0]
        assert h.name == "nas"
        assert h.broadcast_ip == "255.255.255.255"
        assert h.port == 9
        assert h.interface is None

    def test_respects_global_settings(self) -> None:
        config = {
            "settings": {"broadcast_ip": "192.168.1.255", "port": 7},
            "hosts": [{"name": "nas", "mac_address": "00:1B:44:11:3A:B7"}],
        }
        h = hosts_from_config(config)[0]
        assert h.broadcast_ip == "192.168.1.255"
        assert h.port == 7

    def test_host_values_override_settings(self) -> None:
        config = {
            "settings": {"broadcast_ip": "192.168.1.255", "port": 7},
            "hosts": [
                {
                    "name": "nas",
                    "mac_address": "00:1B:44:11:3A:B7",
                    "broadcast_ip": "10.0.0.255",
                    "port": 9,
                    "interface": "10.0.0.2",
                    "description": "Storage",
                }
            ],
        }
        h = hosts_from_config(config)[0]
        assert (h.broadcast_ip, h.port, h.interface, h.description) == (
            "10.0.0.255",
            9,
            "10.0.0.2",
            "Storage",
        )

    def test_host_to_request(self) -> None:
        host = Host("nas", "00:1B:44:11:3A:B7", broadcast_ip="10.0.0.255", port=7, interface="10.0.0.2")
        assert host.to_request() == WakeRequest(
            "00:1B:44:11:3A:B7", ip_address="10.0.0.255", port=7, interface="10.0.0.2"
        )

    def test_find_host(self) -> None:
        hosts = [Host("nas", "00:1B:44:11:3A:B7"), Host("desk", "AA:BB:CC:DD:EE:FF")]
        assert find_host(hosts, "desk") is hosts[1]
        assert find_host(hosts, "ghost") is None


class TestRuntimeSettings:
    def test_defaults(self) -> None:
        assert runtime_settings(None) == {
            "broadcast_ip": "255.255.255.255",
            "port": 9,
            "timeout": 5.0,
            "workers": 4,
        }

    def test_overrides(self) -> None:
        settings = runtime_settings({"settings": {"timeout": 2, "workers": 8}})
        assert settings["timeout"] == 2.0
        assert settings["workers"] == 8
