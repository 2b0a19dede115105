# infra/storage.py
"""
Stockage des pièces des dossiers marins (disque local, interface type S3).

Contrat :
    store(content, filename, content_type) -> référence opaque
    retrieve(reference)                    -> bytes
        référence inconnue        → StoredFileNotFound   (404)
        stockage indisponible     → StorageUnavailable   (503)

La référence ne sort jamais vers un client : elle reste en base
(crew_documents.storage_ref).
"""
import os
import uuid
from typing import Protocol

from crewdesk.core.config import settings
from crewdesk.shared.errors import DownstreamUnavailable, NotFound


class StoredFileNotFound(NotFound):
    def __init__(self, detail: str = "Document file not found"):
        super().__init__(detail)


class StorageUnavailable(DownstreamUnavailable):
    def __init__(self, detail: str = "Document storage unavailable"):
        super().__init__(detail)


class FileStore(Protocol):
    def store(self, content: bytes, filename: str, content_type: str) -> str: ...

    def retrieve(self, reference: str) -> bytes: ...

    def delete(self, reference: str) -> None: ...


class LocalFileStore:

    def __init__(self, base_dir: str):
        self.base_dir = base_dir

    def store(self, content: bytes, filename: str, content_type: str) -> str:
        extension = os.path.splitext(filename or "")[1].lower().lstrip(".") or "bin"
        reference = f"{uuid.uuid4()}.{extension}"
        try:
            os.makedirs(self.base_dir, exist_ok=True)
            with open(self._path(reference), "wb") as buffer:
                buffer.write(content)
        except OSError as e:
            raise StorageUnavailable() from e
        return reference

    def retrieve(self, reference: str) -> bytes:
        path = self._path(reference)
        try:
            with open(path, "rb") as f:
                return f.read()
        except FileNotFoundError:
            raise StoredFileNotFound()
        except OSError as e:
            raise StorageUnavailable() from e

    def delete(self, reference: str) -> None:
        try:
            os.remove(self._path(reference))
        except FileNotFoundError:
            pass
        except OSError as e:
            raise StorageUnavailable() from e

    def _path(self, reference: str) -> str:
        # Une référence est un simple nom de fichier généré par store()
        if not reference or os.path.basename(reference) != reference:
            raise StoredFileNotFound()
        return os.path.join(self.base_dir, reference)


def get_file_store() -> FileStore:
    """Dépendance FastAPI - surchargée dans les tests."""
    return LocalFileStore(settings.UPLOAD_DIR)
