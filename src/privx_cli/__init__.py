"""privx-cli SDK public surface."""

from privx_cli.client import PrivXClient
from privx_cli.errors import (
    InvalidResponseError,
    LocalFileError,
    PrivXSDKError,
    ServiceRequestError,
    ServiceUnavailableError,
    UnknownClientTypeError,
)
from privx_cli.models import ConfigDownloadHandle, RoleDefinition, RoleUpdate
from privx_cli.roles import (
    collect_role_members,
    delete_roles,
    resolve_role_names,
    split_identifiers,
)
from privx_cli.trusted_clients import (
    download_preconfiguration,
    filter_trusted_clients,
    list_trusted_clients,
    normalize_client_type,
    resolve_ca_operations,
    resolve_config_download,
)

__all__ = [
    "PrivXClient",
    "PrivXSDKError",
    "ServiceUnavailableError",
    "ServiceRequestError",
    "InvalidResponseError",
    "UnknownClientTypeError",
    "LocalFileError",
    "RoleDefinition",
    "RoleUpdate",
    "ConfigDownloadHandle",
    "split_identifiers",
    "delete_roles",
    "collect_role_members",
    "resolve_role_names",
    "normalize_client_type",
    "filter_trusted_clients",
    "list_trusted_clients",
    "resolve_ca_operations",
    "resolve_config_download",
    "download_preconfiguration",
]
