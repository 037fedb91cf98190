"""Azure Blob Storage utilities for archiving uploaded workbooks."""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from azure.core.exceptions import ResourceExistsError, ResourceNotFoundError
from azure.storage.blob import BlobServiceClient, ContainerClient, ContentSettings

from fleetdata.config import get_settings


@lru_cache
def _get_blob_service_client() -> BlobServiceClient:
    settings = get_settings()
    if not settings.azure_storage_connection_string:
        msg = "Azure storage connection string is not configured"
        raise RuntimeError(msg)
    return BlobServiceClient.from_connection_string(
        settings.azure_storage_connection_string
    )


@lru_cache
def _get_container_client() -> ContainerClient:
    settings = get_settings()
    if not settings.azure_storage_container_name:
        msg = "Azure storage container name is not configured"
        raise RuntimeError(msg)
    service_client = _get_blob_service_client()
    try:
        service_client.create_container(settings.azure_storage_container_name)
    except ResourceExistsError:
        pass
    return service_client.get_container_client(settings.azure_storage_container_name)


def upload_blob(
    blob_path: str,
    data: bytes,
    *,
    content_type: Optional[str] = None,
) -> None:
    """Upload ``data`` to the configured storage container at ``blob_path``."""

    blob_client = _get_container_client().get_blob_client(blob_path)
    content_settings = None
    if content_type is not None:
        content_settings = ContentSettings(content_type=content_type)
    blob_client.upload_blob(
        data,
        overwrite=True,
        content_settings=content_settings,
    )


def download_blob(blob_path: str) -> bytes:
    """Return the content of the blob stored at ``blob_path``."""

    blob_client = _get_container_client().get_blob_client(blob_path)
    try:
        stream = blob_client.download_blob()
    except ResourceNotFoundError as exc:  # pragma: no cover - network edge case
        raise FileNotFoundError(blob_path) from exc
    return stream.readall()


__all__ = ["download_blob", "upload_blob"]
