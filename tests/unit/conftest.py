"""Pytest configuration and fixtures for unit tests."""

from pathlib import Path

import pytest

from cloudcore_config.config.models import CloudCoreConfig
from cloudcore_config.config.settings import reload_settings


@pytest.fixture
def tls_files(tmp_path: Path) -> dict:
    """CA, certificate and private key files that exist on disk."""
    certs = tmp_path / "certs"
    certs.mkdir()
    files = {}
    for name in ("rootCA.crt", "edge.crt", "edge.key"):
        p = certs / name
        p.write_text("-----BEGIN PLACEHOLDER-----\n", encoding="utf-8")
        files[name] = str(p)
    return files


@pytest.fixture
def kubeconfig_file(tmp_path: Path) -> str:
    p = tmp_path / "kubeconfig"
    p.write_text("apiVersion: v1\nkind: Config\n", encoding="utf-8")
    return str(p)


@pytest.fixture
def socket_dir(tmp_path: Path) -> Path:
    """Directory for the cloudHub unix socket; exists before validation."""
    d = tmp_path / "run"
    d.mkdir()
    return d


@pytest.fixture
def valid_config(tls_files: dict, kubeconfig_file: str, socket_dir: Path) -> CloudCoreConfig:
    """A fully valid configuration with every module enabled."""
    config = CloudCoreConfig()
    config.kube_api_config.kube_config = kubeconfig_file
    hub = config.modules.cloud_hub
    hub.tls_ca_file = tls_files["rootCA.crt"]
    hub.tls_cert_file = tls_files["edge.crt"]
    hub.tls_private_key_file = tls_files["edge.key"]
    hub.unix_socket.address = f"unix://{socket_dir}/kubeedge.sock"
    return config


@pytest.fixture
def valid_config_dict(valid_config: CloudCoreConfig) -> dict:
    """valid_config as a cloudcore.yaml-style mapping (camelCase keys)."""
    return valid_config.model_dump(by_alias=True)


@pytest.fixture
def fresh_settings():
    """Reload global settings before and after the test so env patches take effect and do not leak."""
    yield reload_settings
    reload_settings()
