"""
API Dependencies

Dependency injection for the API.
Every collaborator is built from the RuntimeConfig stored on the app at
startup; nothing is cached at module level.
"""

from __future__ import annotations

from fastapi import Depends, Request

from archive.exporter import Exporter
from archive.importer import Importer
from core.config.runtime import RuntimeConfig
from core.store.attachments import AttachmentDirectory
from core.store.database import EmployeeStore
from core.store.uploads import UploadService


def get_config(request: Request) -> RuntimeConfig:
    """The configuration the application was created with."""
    return request.app.state.config


def get_store(request: Request) -> EmployeeStore:
    """The dataset store shared by the application (it holds the write lock)."""
    return request.app.state.store


def get_attachments(config: RuntimeConfig = Depends(get_config)) -> AttachmentDirectory:
    return AttachmentDirectory(config.storage.resources_path)


def get_upload_service(
    config: RuntimeConfig = Depends(get_config),
    attachments: AttachmentDirectory = Depends(get_attachments),
) -> UploadService:
    return UploadService(attachments, config.uploads)


def get_exporter(
    store: EmployeeStore = Depends(get_store),
    attachments: AttachmentDirectory = Depends(get_attachments),
) -> Exporter:
    return Exporter(store, attachments)


def get_importer(
    config: RuntimeConfig = Depends(get_config),
    store: EmployeeStore = Depends(get_store),
    attachments: AttachmentDirectory = Depends(get_attachments),
) -> Importer:
    return Importer(store, attachments, config.transfer)
