"""File storage backed by Azure Blob Storage or, when unconfigured, local disk."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from azure.core.exceptions import ResourceExistsError, ResourceNotFoundError
from azure.storage.blob import BlobServiceClient, ContentSettings

from app.config import get_settings

logger = logging.getLogger(__name__)

AZURE = "azure"
LOCAL = "local"
LOCAL_URL_PREFIX = "/uploads"


@dataclass(frozen=True)
class StoredObject:
    storage: str
    path: str
    url: str


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
def _get_container_name() -> str:
    settings = get_settings()
    if not settings.azure_storage_container_name:
        msg = "Azure storage container name is not configured"
        raise RuntimeError(msg)
    return settings.azure_storage_container_name


@lru_cache
def _get_container_client():
    service_client = _get_blob_service_client()
    container_name = _get_container_name()
    try:
        service_client.create_container(container_name)
    except ResourceExistsError:
        pass
    return service_client.get_container_client(container_name)


def azure_enabled() -> bool:
    settings = get_settings()
    return bool(
        settings.azure_storage_connection_string and settings.azure_storage_container_name
    )


def upload_blob(
    blob_path: str,
    data: bytes,
    *,
    content_type: Optional[str] = None,
) -> str:
    """Upload ``data`` to the configured storage container and return its URL."""

    container_client = _get_container_client()
    blob_client = container_client.get_blob_client(blob_path)
    content_settings = None
    if content_type is not None:
        content_settings = ContentSettings(content_type=content_type)
    blob_client.upload_blob(
        data,
        overwrite=True,
        content_settings=content_settings,
    )
    return blob_client.url


def delete_blob(blob_path: str) -> None:
    """Delete the blob located at ``blob_path`` if it exists."""

    container_client = _get_container_client()
    blob_client = container_client.get_blob_client(blob_path)
    try:
        blob_client.delete_blob()
    except ResourceNotFoundError:
        return


def local_root() -> Path:
    root = Path(get_settings().upload_dir)
    root.mkdir(parents=True, exist_ok=True)
    return root


def store_file(relative_path: str, data: bytes, *, content_type: Optional[str] = None) -> StoredObject:
    """Persist ``data`` under ``relative_path`` in the active backend."""

    if azure_enabled():
        url = upload_blob(relative_path, data, content_type=content_type)
        return StoredObject(storage=AZURE, path=relative_path, url=url)

    destination = local_root() / relative_path
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_bytes(data)
    return StoredObject(
        storage=LOCAL,
        path=relative_path,
        url=f"{LOCAL_URL_PREFIX}/{relative_path}",
    )


def remove_file(storage: str, relative_path: str) -> None:
    """Delete a previously stored object; missing objects are ignored."""

    if storage == AZURE:
        delete_blob(relative_path)
        return
    target = local_root() / relative_path
    try:
        target.unlink()
    except FileNotFoundError:
        logger.info("Upload %s already removed from disk", relative_path)


__all__ = [
    "AZURE",
    "LOCAL",
    "LOCAL_URL_PREFIX",
    "StoredObject",
    "azure_enabled",
    "delete_blob",
    "local_root",
    "remove_file",
    "store_file",
    "upload_blob",
]
