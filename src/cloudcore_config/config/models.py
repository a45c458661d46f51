"""
CloudCore configuration records.

Plain Pydantic models mirroring the cloudcore.yaml layout: kube API client
settings plus four independently enable-able modules (cloudHub, edgeController,
deviceController, syncController). Python attributes are snake_case; the
camelCase keys of the YAML file are accepted as aliases.

Models accept any port, address or path value. Range and
existence checks belong to cloudcore_config.validation so that every problem
is reported together.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

logger = structlog.get_logger(__name__)

DEFAULT_CA_FILE = "/etc/kubeedge/ca/rootCA.crt"
DEFAULT_CERT_FILE = "/etc/kubeedge/certs/edge.crt"
DEFAULT_KEY_FILE = "/etc/kubeedge/certs/edge.key"
DEFAULT_UNIX_SOCKET_ADDRESS = "unix:///var/lib/kubeedge/kubeedge.sock"


class _CamelModel(BaseModel):
    """Base for all records: camelCase aliases, snake_case attributes."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


# -----------------------------------------------------------------------------
# Kube API client
# -----------------------------------------------------------------------------


class KubeAPIConfig(_CamelModel):
    """How CloudCore talks to the Kubernetes API server."""

    master: str = Field(default="", description="API server address; overrides kubeconfig when set")
    content_type: str = Field(default="application/vnd.kubernetes.protobuf", description="Request content type")
    qps: int = Field(default=100, description="Client-side QPS limit")
    burst: int = Field(default=200, description="Client-side burst limit")
    kube_config: str = Field(default="", alias="kubeConfig", description="Absolute path to a kubeconfig file")


# -----------------------------------------------------------------------------
# cloudHub
# -----------------------------------------------------------------------------


class CloudHubWebSocket(_CamelModel):
    enable: bool = True
    address: str = "0.0.0.0"
    port: int = 10000


class CloudHubQuic(_CamelModel):
    enable: bool = False
    address: str = "0.0.0.0"
    port: int = 10001
    max_incoming_streams: int = 10000


class CloudHubUnixSocket(_CamelModel):
    enable: bool = True
    address: str = Field(default=DEFAULT_UNIX_SOCKET_ADDRESS, description="Must use the unix:// scheme")


class CloudHub(_CamelModel):
    """Edge-facing hub: websocket/quic listeners, local unix socket and TLS material."""

    enable: bool = True
    keepalive_interval: int = Field(default=30, description="Seconds between keepalive messages")
    node_limit: int = Field(default=1000, description="Maximum number of connected edge nodes")
    tls_ca_file: str = Field(default=DEFAULT_CA_FILE, alias="tlsCAFile")
    tls_cert_file: str = Field(default=DEFAULT_CERT_FILE)
    tls_private_key_file: str = Field(default=DEFAULT_KEY_FILE)
    write_timeout: int = Field(default=30, description="Seconds allowed for a single write")
    quic: CloudHubQuic = Field(default_factory=CloudHubQuic)
    unix_socket: CloudHubUnixSocket = Field(default_factory=CloudHubUnixSocket, alias="unixsocket")
    websocket: CloudHubWebSocket = Field(default_factory=CloudHubWebSocket)


# -----------------------------------------------------------------------------
# Controllers
# -----------------------------------------------------------------------------


class EdgeControllerBuffer(_CamelModel):
    """Queue sizes for edgeController message channels."""

    update_pod_status: int = 1024
    update_node_status: int = 1024
    query_configmap: int = 1024
    query_secret: int = 1024
    query_service: int = 1024
    query_endpoints: int = 1024
    pod_event: int = 1
    configmap_event: int = 1
    secret_event: int = 1
    service_event: int = 1
    endpoints_event: int = 1
    query_persistent_volume: int = 1024
    query_persistent_volume_claim: int = 1024
    query_volume_attachment: int = 1024
    query_node: int = 1024
    update_node: int = 1024


class EdgeControllerLoad(_CamelModel):
    """Worker counts for edgeController message handlers."""

    update_pod_status_workers: int = 1
    update_node_status_workers: int = 1
    query_configmap_workers: int = 1
    query_secret_workers: int = 1
    query_service_workers: int = 4
    query_endpoints_workers: int = 4
    query_persistent_volume_workers: int = 4
    query_persistent_volume_claim_workers: int = 4
    query_volume_attachment_workers: int = 4
    query_node_workers: int = 4
    update_node_workers: int = 4


class EdgeController(_CamelModel):
    enable: bool = True
    node_update_frequency: int = Field(default=10, description="Seconds between node status updates; must be > 0")
    buffer: EdgeControllerBuffer = Field(default_factory=EdgeControllerBuffer)
    load: EdgeControllerLoad = Field(default_factory=EdgeControllerLoad)


class DeviceControllerBuffer(_CamelModel):
    update_device_status: int = 1024
    device_event: int = 1
    device_model_event: int = 1


class DeviceControllerLoad(_CamelModel):
    update_device_status_workers: int = 1


class DeviceController(_CamelModel):
    enable: bool = True
    buffer: DeviceControllerBuffer = Field(default_factory=DeviceControllerBuffer)
    load: DeviceControllerLoad = Field(default_factory=DeviceControllerLoad)


class SyncController(_CamelModel):
    enable: bool = True


# -----------------------------------------------------------------------------
# Root
# -----------------------------------------------------------------------------


class Modules(_CamelModel):
    cloud_hub: CloudHub = Field(default_factory=CloudHub)
    edge_controller: EdgeController = Field(default_factory=EdgeController)
    device_controller: DeviceController = Field(default_factory=DeviceController)
    sync_controller: SyncController = Field(default_factory=SyncController)


class CloudCoreConfig(_CamelModel):
    """
    Root CloudCore configuration. CloudCoreConfig() is the default configuration.

    Top-level YAML keys: kubeAPIConfig, modules.
    """

    kube_api_config: KubeAPIConfig = Field(default_factory=KubeAPIConfig, alias="kubeAPIConfig")
    modules: Modules = Field(default_factory=Modules)

    def to_yaml(self) -> str:
        """Render as cloudcore.yaml text with camelCase keys."""
        return yaml.safe_dump(self.model_dump(by_alias=True), sort_keys=False)


def new_default_cloudcore_config() -> CloudCoreConfig:
    """Return the default CloudCore configuration."""
    return CloudCoreConfig()


def load_cloudcore_config(path: str | Path) -> CloudCoreConfig:
    """
    Load a CloudCore configuration from a YAML file.

    Missing sections fall back to defaults; an empty file yields the default
    configuration.

    :raises FileNotFoundError: If the file does not exist.
    :raises OSError: If the path cannot be read (a directory, no permission).
    :raises ValueError: If the file is not valid YAML or the document is not a mapping.
    :raises pydantic.ValidationError: If a field has the wrong type.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path, encoding="utf-8") as f:
        try:
            data: Any = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Config file {path} is not valid YAML: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping, got {type(data).__name__}")
    config = CloudCoreConfig.model_validate(data)
    logger.debug("cloudcore_config_loaded", path=str(path))
    return config
