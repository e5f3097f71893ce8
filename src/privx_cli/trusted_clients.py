"""Trusted-client type dispatch, filtering and pre-configuration downloads."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Iterable, Literal, Mapping

from pydantic import ValidationError

from privx_cli.errors import InvalidResponseError, UnknownClientTypeError
from privx_cli.models import ConfigDownloadHandle

ClientKind = Literal["extender", "webproxy", "carrier"]

TRUSTED_CLIENT_KINDS: tuple[ClientKind, ...] = ("extender", "webproxy", "carrier")
CA_CLIENT_KINDS: tuple[ClientKind, ...] = ("extender", "webproxy")

# The service names the web-proxy client type after its ICAP protocol.
_CATEGORY_OVERRIDES = {"webproxy": "ICAP"}

logger = logging.getLogger(__name__)


def parse_client_kind(value: str, allowed: Iterable[str] = TRUSTED_CLIENT_KINDS) -> str:
    kind = value.strip().lower()
    if kind not in tuple(allowed):
        raise UnknownClientTypeError(f"client type does not exist: {value}")
    return kind


def normalize_client_type(value: str, allowed: Iterable[str] = TRUSTED_CLIENT_KINDS) -> str:
    """Map a client-type token to the category the service stores on clients."""
    kind = parse_client_kind(value, allowed)
    return _CATEGORY_OVERRIDES.get(kind, kind.upper())


def filter_trusted_clients(
    clients: Iterable[Mapping[str, Any]], category: str
) -> list[Mapping[str, Any]]:
    return [client for client in clients if client.get("type") == category]


def list_trusted_clients(client, client_type: str) -> list[Mapping[str, Any]]:
    category = normalize_client_type(client_type)
    return filter_trusted_clients(client.trusted_clients(), category)


@dataclass(frozen=True)
class CertificateAuthorityOperations:
    list_certificates: Callable[[Any, str | None], list]
    show_certificate: Callable[[Any, str], dict]
    download_crl: Callable[[Any, str, str], Path]


@dataclass(frozen=True)
class ConfigDownloadOperations:
    get_handle: Callable[[Any, str], dict]
    download_with_session: Callable[[Any, str, str, str], Path]


CA_OPERATIONS: dict[str, CertificateAuthorityOperations] = {
    "extender": CertificateAuthorityOperations(
        list_certificates=lambda client, group_id: client.extender_ca_certificates(group_id),
        show_certificate=lambda client, cert_id: client.extender_ca_certificate(cert_id),
        download_crl=lambda client, file_name, cert_id: client.download_extender_certificate_crl(
            file_name, cert_id
        ),
    ),
    "webproxy": CertificateAuthorityOperations(
        list_certificates=lambda client, group_id: client.webproxy_ca_certificates(group_id),
        show_certificate=lambda client, cert_id: client.webproxy_ca_certificate(cert_id),
        download_crl=lambda client, file_name, cert_id: client.download_webproxy_certificate_crl(
            file_name, cert_id
        ),
    ),
}

CONFIG_DOWNLOADS: dict[str, ConfigDownloadOperations] = {
    "extender": ConfigDownloadOperations(
        get_handle=lambda client, client_id: client.extender_config_download_handle(client_id),
        download_with_session=lambda client, client_id, session_id, file_name: (
            client.download_extender_config(client_id, session_id, file_name)
        ),
    ),
    "webproxy": ConfigDownloadOperations(
        get_handle=lambda client, client_id: client.webproxy_session_download_handle(client_id),
        download_with_session=lambda client, client_id, session_id, file_name: (
            client.download_webproxy_config(client_id, session_id, file_name)
        ),
    ),
    "carrier": ConfigDownloadOperations(
        get_handle=lambda client, client_id: client.carrier_config_download_handle(client_id),
        download_with_session=lambda client, client_id, session_id, file_name: (
            client.download_carrier_config(client_id, session_id, file_name)
        ),
    ),
}


def resolve_ca_operations(client_type: str) -> CertificateAuthorityOperations:
    return CA_OPERATIONS[parse_client_kind(client_type, CA_CLIENT_KINDS)]


def resolve_config_download(client_type: str) -> ConfigDownloadOperations:
    return CONFIG_DOWNLOADS[parse_client_kind(client_type, TRUSTED_CLIENT_KINDS)]


def download_preconfiguration(client, client_type: str, client_id: str, file_name: str) -> Path:
    """Request a single-use download handle, then fetch the configuration with it.

    A failure in either step aborts the download; the handle is never reused.
    """
    operations = resolve_config_download(client_type)
    raw_handle = operations.get_handle(client, client_id)
    try:
        handle = ConfigDownloadHandle.model_validate(raw_handle)
    except ValidationError as exc:
        raise InvalidResponseError(
            f"download handle for trusted client {client_id} has no session_id"
        ) from exc
    logger.debug("acquired %s download session for %s", client_type, client_id)
    return operations.download_with_session(client, client_id, handle.session_id, file_name)


__all__ = [
    "CA_CLIENT_KINDS",
    "CA_OPERATIONS",
    "CONFIG_DOWNLOADS",
    "CertificateAuthorityOperations",
    "ClientKind",
    "ConfigDownloadOperations",
    "TRUSTED_CLIENT_KINDS",
    "download_preconfiguration",
    "filter_trusted_clients",
    "list_trusted_clients",
    "normalize_client_type",
    "parse_client_kind",
    "resolve_ca_operations",
    "resolve_config_download",
]
