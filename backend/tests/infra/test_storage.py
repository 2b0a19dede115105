# tests/infra/test_storage.py
import pytest

from crewdesk.infra.storage import LocalFileStore, StorageUnavailable, StoredFileNotFound

pytestmark = pytest.mark.engine


class TestLocalFileStore:
    def test_store_puis_retrieve(self, tmp_path):
        store = LocalFileStore(str(tmp_path))
        ref = store.store(b"%PDF-1.4", "Passport.PDF", "application/pdf")
        assert ref.endswith(".pdf")
        assert "Passport" not in ref
        assert store.retrieve(ref) == b"%PDF-1.4"

    def test_reference_inconnue(self, tmp_path):
        with pytest.raises(StoredFileNotFound) as exc:
            LocalFileStore(str(tmp_path)).retrieve("missing.pdf")
        assert exc.value.status_code == 404

    @pytest.mark.parametrize("ref", ["../etc/passwd", "a/b.pdf", ""])
    def test_reference_hors_dossier_refusee(self, tmp_path, ref):
        with pytest.raises(StoredFileNotFound):
            LocalFileStore(str(tmp_path)).retrieve(ref)

    def test_delete(self, tmp_path):
        store = LocalFileStore(str(tmp_path))
        ref = store.store(b"x", "cv.pdf", "application/pdf")
        store.delete(ref)
        with pytest.raises(StoredFileNotFound):
            store.retrieve(ref)
        store.delete(ref)  # déjà supprimé : sans effet

    def test_dossier_inutilisable_503(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        store = LocalFileStore(str(blocker / "uploads"))
        with pytest.raises(StorageUnavailable) as exc:
            store.store(b"x", "cv.pdf", "application/pdf")
        assert exc.value.status_code == 503
