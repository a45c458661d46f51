"""
Pre-startup validation of the CloudCore configuration.

Each module validator returns an ErrorList; the aggregate validator runs all of
them and concatenates the results. Nothing short-circuits: a bad websocket port
does not hide a missing certificate. A disabled module is not checked at all.

Side effect: when the cloudHub unix socket's parent directory is missing it is
created here, and a failure to create it is reported as a field error.
"""

from __future__ import annotations

import os
import posixpath
from typing import Optional

import structlog

from cloudcore_config.config.models import (
    CloudCoreConfig,
    CloudHub,
    DeviceController,
    EdgeController,
    KubeAPIConfig,
    SyncController,
)
from cloudcore_config.validation.field import ErrorList, FieldPath, invalid
from cloudcore_config.validation.util import file_is_exist, is_valid_ip, is_valid_port_num

logger = structlog.get_logger(__name__)

UNIX_SOCKET_SCHEME = "unix://"

_MODULES_PATH = FieldPath("modules")


def validate_cloudcore_configuration(config: CloudCoreConfig) -> ErrorList:
    """
    Validate every section of ``config``.

    :return: All problems found, in section order. Empty means the configuration may be used.
    """
    modules = config.modules
    all_errs = ErrorList()
    all_errs.extend(validate_kube_api_config(config.kube_api_config))
    all_errs.extend(validate_module_cloudhub(modules.cloud_hub))
    all_errs.extend(validate_module_edge_controller(modules.edge_controller))
    all_errs.extend(validate_module_device_controller(modules.device_controller))
    all_errs.extend(validate_module_sync_controller(modules.sync_controller))
    logger.info(
        "cloudcore_config_validated",
        valid=not all_errs,
        error_count=len(all_errs),
        fields=sorted({e.field for e in all_errs}),
    )
    return all_errs


def ensure_valid(config: CloudCoreConfig) -> CloudCoreConfig:
    """
    Return ``config`` unchanged if it validates cleanly.

    :raises ConfigValidationError: Carrying every field error found.
    """
    err = validate_cloudcore_configuration(config).to_aggregate()
    if err is not None:
        raise err
    return config


def validate_module_cloudhub(hub: CloudHub, fld_path: Optional[FieldPath] = None) -> ErrorList:
    """Check listener ports and addresses, TLS files and the unix socket address."""
    fld_path = fld_path or _MODULES_PATH.child("cloudHub")
    if not hub.enable:
        logger.debug("module_validation_skipped", module=str(fld_path))
        return ErrorList()

    all_errs = ErrorList()
    ws_path = fld_path.child("websocket")
    quic_path = fld_path.child("quic")

    for msg in is_valid_port_num(hub.websocket.port):
        all_errs.append(invalid(ws_path.child("port"), hub.websocket.port, msg))
    for msg in is_valid_ip(hub.websocket.address):
        all_errs.append(invalid(ws_path.child("address"), hub.websocket.address, msg))
    for msg in is_valid_port_num(hub.quic.port):
        all_errs.append(invalid(quic_path.child("port"), hub.quic.port, msg))
    for msg in is_valid_ip(hub.quic.address):
        all_errs.append(invalid(quic_path.child("address"), hub.quic.address, msg))

    for name, value in (
        ("tlsPrivateKeyFile", hub.tls_private_key_file),
        ("tlsCertFile", hub.tls_cert_file),
        ("tlsCAFile", hub.tls_ca_file),
    ):
        if not file_is_exist(value):
            all_errs.append(invalid(fld_path.child(name), value, f"{name} does not exist"))

    all_errs.extend(_validate_unix_socket_address(hub.unix_socket.address, fld_path.child("unixsocket", "address")))
    return all_errs


def _validate_unix_socket_address(address: str, fld_path: FieldPath) -> ErrorList:
    """Require the unix:// scheme and make sure the socket's directory exists."""
    all_errs = ErrorList()
    if not address.lower().startswith(UNIX_SOCKET_SCHEME):
        all_errs.append(invalid(fld_path, address, f"unix socket address must have prefix {UNIX_SOCKET_SCHEME}"))

    parts = address.split("://", 1)
    if len(parts) < 2:
        return all_errs
    socket_dir = posixpath.normpath(posixpath.dirname(parts[1]) or ".")
    if file_is_exist(socket_dir):
        return all_errs
    try:
        os.makedirs(socket_dir, exist_ok=True)
    except (OSError, ValueError) as e:
        logger.warning("unix_socket_dir_create_failed", address=address, dir=socket_dir, error=str(e))
        all_errs.append(
            invalid(
                fld_path,
                address,
                f"create unix socket address {address} dir {socket_dir} error: {e}",
            )
        )
    else:
        logger.info("unix_socket_dir_created", address=address, dir=socket_dir)
    return all_errs


def validate_module_edge_controller(ec: EdgeController, fld_path: Optional[FieldPath] = None) -> ErrorList:
    fld_path = fld_path or _MODULES_PATH.child("edgeController")
    if not ec.enable:
        logger.debug("module_validation_skipped", module=str(fld_path))
        return ErrorList()

    all_errs = ErrorList()
    if ec.node_update_frequency <= 0:
        all_errs.append(
            invalid(
                fld_path.child("nodeUpdateFrequency"),
                ec.node_update_frequency,
                "nodeUpdateFrequency must be greater than 0",
            )
        )
    return all_errs


def validate_module_device_controller(dc: DeviceController, fld_path: Optional[FieldPath] = None) -> ErrorList:
    fld_path = fld_path or _MODULES_PATH.child("deviceController")
    if not dc.enable:
        logger.debug("module_validation_skipped", module=str(fld_path))
        return ErrorList()

    # Nothing to check on an enabled device controller.
    return ErrorList()


def validate_module_sync_controller(sc: SyncController, fld_path: Optional[FieldPath] = None) -> ErrorList:
    fld_path = fld_path or _MODULES_PATH.child("syncController")
    if not sc.enable:
        logger.debug("module_validation_skipped", module=str(fld_path))
        return ErrorList()

    return ErrorList()


def validate_kube_api_config(k: KubeAPIConfig, fld_path: Optional[FieldPath] = None) -> ErrorList:
    """An optional kubeconfig must be an absolute path to an existing file."""
    fld_path = fld_path or FieldPath("kubeAPIConfig")
    all_errs = ErrorList()
    if not k.kube_config:
        return all_errs
    kc_path = fld_path.child("kubeConfig")
    if not os.path.isabs(k.kube_config):
        all_errs.append(invalid(kc_path, k.kube_config, "kubeConfig must be an absolute path"))
    if not file_is_exist(k.kube_config):
        all_errs.append(invalid(kc_path, k.kube_config, "kubeConfig does not exist"))
    return all_errs
