"""Typed SDK client for role-store, user-store and authorizer endpoints."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from privx_cli.errors import (
    InvalidResponseError,
    LocalFileError,
    ServiceRequestError,
    ServiceUnavailableError,
)

API_TOKEN_ENV_VAR = "PRIVX_API_TOKEN"
PARTIAL_SUFFIX = ".part"
_CHUNK_SIZE = 64 * 1024

ROLE_STORE = "/role-store/api/v1"
USER_STORE = "/local-user-store/api/v1"
AUTHORIZER = "/authorizer/api/v1"

logger = logging.getLogger(__name__)


def _items(payload: object) -> list:
    if isinstance(payload, dict) and "items" in payload:
        payload = payload["items"]
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise InvalidResponseError(f"expected a list response, got {type(payload).__name__}")
    return payload


@dataclass
class PrivXClient:
    base_url: str
    api_token: str | None = None
    timeout: float = 30.0
    retries: int = 0

    def __post_init__(self) -> None:
        self._session = requests.Session()
        # Only failed connection attempts are retried, for any method; reads and
        # error statuses never are.
        retry = Retry(
            total=max(0, int(self.retries)),
            connect=max(0, int(self.retries)),
            read=0,
            status=0,
            backoff_factor=0.2,
            allowed_methods=("GET",),
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry)
        self._session.mount("http://", adapter)
        self._session.mount("https://", adapter)
        if self.api_token is None:
            env_api_token = os.getenv(API_TOKEN_ENV_VAR)
            self.api_token = env_api_token.strip() or None if env_api_token else None

    def _url(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"

    def _headers(self) -> dict | None:
        if not self.api_token:
            return None
        return {"Authorization": f"Bearer {self.api_token}"}

    def _send(
        self,
        method: str,
        path: str,
        *,
        json_payload: object | None = None,
        params: dict | None = None,
        stream: bool = False,
    ):
        try:
            response = self._session.request(
                method,
                self._url(path),
                json=json_payload,
                params=params,
                headers=self._headers(),
                timeout=self.timeout,
                stream=stream,
            )
        except requests.RequestException as exc:
            raise ServiceUnavailableError(str(exc)) from exc

        logger.debug("%s %s -> %s", method, path, response.status_code)
        if response.status_code >= 400:
            raise self._request_error(response)
        return response

    @staticmethod
    def _request_error(response) -> ServiceRequestError:
        body: object | None = None
        detail: object | None = None
        error_code: str | None = None
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            detail = body.get("error_message") or body.get("details") or body.get("detail")
            raw_error_code = body.get("error_code")
            error_code = str(raw_error_code) if isinstance(raw_error_code, str) else None
        if isinstance(detail, str):
            message = f"request failed: {response.status_code} {detail}"
        elif error_code:
            message = f"request failed: {response.status_code} {error_code}"
        else:
            message = f"request failed: {response.status_code} {response.text}"
        return ServiceRequestError(
            message,
            status_code=response.status_code,
            detail=detail,
            error_code=error_code,
            body=body,
        )

    def _request(
        self,
        method: str,
        path: str,
        *,
        json_payload: object | None = None,
        params: dict | None = None,
    ):
        response = self._send(method, path, json_payload=json_payload, params=params)
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise InvalidResponseError(f"invalid JSON response from {path}") from exc

    def _download(self, path: str, file_name: str | os.PathLike) -> Path:
        """Stream a response body into ``file_name``.

        The body is written to ``<file_name>.part`` and renamed onto the
        destination once complete. On failure the partial file is removed and
        any existing destination is left untouched.
        """
        destination = Path(file_name)
        partial = destination.with_name(destination.name + PARTIAL_SUFFIX)
        response = self._send("GET", path, stream=True)
        try:
            with partial.open("wb") as handle:
                for chunk in response.iter_content(chunk_size=_CHUNK_SIZE):
                    if chunk:
                        handle.write(chunk)
            os.replace(partial, destination)
        # RequestException derives from OSError, so it must be matched first.
        except requests.RequestException as exc:
            partial.unlink(missing_ok=True)
            raise ServiceUnavailableError(f"download interrupted: {exc}") from exc
        except OSError as exc:
            partial.unlink(missing_ok=True)
            raise LocalFileError(f"failed to write {destination}: {exc}") from exc
        finally:
            response.close()

        logger.info("downloaded %s to %s", path, destination)
        return destination

    # role-store

    def roles(self) -> list:
        return _items(self._request("GET", f"{ROLE_STORE}/roles"))

    def create_role(self, role: dict) -> dict:
        return self._request("POST", f"{ROLE_STORE}/roles", json_payload=role)

    def role(self, role_id: str) -> dict:
        return self._request("GET", f"{ROLE_STORE}/roles/{role_id}")

    def update_role(self, role_id: str, role: dict) -> None:
        self._request("PUT", f"{ROLE_STORE}/roles/{role_id}", json_payload=role)

    def delete_role(self, role_id: str) -> None:
        self._request("DELETE", f"{ROLE_STORE}/roles/{role_id}")

    def get_role_members(self, role_id: str) -> list:
        return _items(self._request("GET", f"{ROLE_STORE}/roles/{role_id}/members"))

    def resolve_roles(self, names: list[str]) -> list:
        return _items(self._request("POST", f"{ROLE_STORE}/roles/resolve", json_payload=names))

    def aws_token(self, role_id: str, token_code: str | None = None, ttl: int = 50) -> dict:
        params: dict[str, object] = {"ttl": ttl}
        if token_code:
            params["tokencode"] = token_code
        return self._request("GET", f"{ROLE_STORE}/roles/{role_id}/awstoken", params=params)

    # local user-store

    def trusted_clients(self) -> list:
        return _items(self._request("GET", f"{USER_STORE}/trusted-clients"))

    def trusted_client(self, client_id: str) -> dict:
        return self._request("GET", f"{USER_STORE}/trusted-clients/{client_id}")

    # authorizer: certificate authorities

    def _ca_certificates(self, kind: str, access_group_id: str | None) -> list:
        params = {"access_group_id": access_group_id} if access_group_id else None
        return _items(self._request("GET", f"{AUTHORIZER}/{kind}/cas", params=params))

    def extender_ca_certificates(self, access_group_id: str | None = None) -> list:
        return self._ca_certificates("extender", access_group_id)

    def webproxy_ca_certificates(self, access_group_id: str | None = None) -> list:
        return self._ca_certificates("icap", access_group_id)

    def extender_ca_certificate(self, certificate_id: str) -> dict:
        return self._request("GET", f"{AUTHORIZER}/extender/cas/{certificate_id}")

    def webproxy_ca_certificate(self, certificate_id: str) -> dict:
        return self._request("GET", f"{AUTHORIZER}/icap/cas/{certificate_id}")

    def download_extender_certificate_crl(self, file_name: str, certificate_id: str) -> Path:
        return self._download(f"{AUTHORIZER}/extender/cas/{certificate_id}/crl", file_name)

    def download_webproxy_certificate_crl(self, file_name: str, certificate_id: str) -> Path:
        return self._download(f"{AUTHORIZER}/icap/cas/{certificate_id}/crl", file_name)

    # authorizer: pre-configuration downloads

    def extender_config_download_handle(self, client_id: str) -> dict:
        return self._request("POST", f"{AUTHORIZER}/extender/conf/{client_id}")

    def download_extender_config(self, client_id: str, session_id: str, file_name: str) -> Path:
        return self._download(f"{AUTHORIZER}/extender/conf/{client_id}/{session_id}", file_name)

    def webproxy_session_download_handle(self, client_id: str) -> dict:
        return self._request("POST", f"{AUTHORIZER}/icap/conf/{client_id}")

    def download_webproxy_config(self, client_id: str, session_id: str, file_name: str) -> Path:
        return self._download(f"{AUTHORIZER}/icap/conf/{client_id}/{session_id}", file_name)

    def carrier_config_download_handle(self, client_id: str) -> dict:
        return self._request("POST", f"{AUTHORIZER}/carrier/conf/{client_id}")

    def download_carrier_config(self, client_id: str, session_id: str, file_name: str) -> Path:
        return self._download(f"{AUTHORIZER}/carrier/conf/{client_id}/{session_id}", file_name)


__all__ = ["PrivXClient"]
