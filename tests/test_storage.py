"""Tests for upload storage and the transactional unit of work."""

import io

import pytest
from werkzeug.datastructures import FileStorage

from core.errors import ConflictError, ValidationError
from models.userModel import Users
from services.storage import UploadStorage
from services.transaction import unit_of_work


@pytest.fixture
def folder(tmp_path):
    return tmp_path / "store"


@pytest.fixture
def storage(folder):
    return UploadStorage(str(folder), {"png", "jpg"})


def upload(name):
    return FileStorage(stream=io.BytesIO(b"data"), filename=name)


class TestUploadStorage:
    def test_allowed_file(self, storage):
        assert storage.allowed_file("photo.PNG")
        assert not storage.allowed_file("photo.gif")
        assert not storage.allowed_file("photo")

    def test_save_uses_unique_safe_name(self, storage, folder):
        first = storage.save(upload("../../etc/menu.png"))
        second = storage.save(upload("../../etc/menu.png"))

        assert first != second
        assert first.endswith("_etc_menu.png")
        assert (folder / first).read_bytes() == b"data"

    def test_rejects_other_extensions(self, storage):
        with pytest.raises(ValidationError):
            storage.save(upload("menu.pdf"))

    def test_staged_removes_file_on_failure(self, app, storage, folder):
        with app.test_request_context():
            with pytest.raises(RuntimeError):
                with storage.staged(upload("menu.png")) as url:
                    assert url.startswith("http://localhost/uploads/")
                    raise RuntimeError("insert failed")
        assert list(folder.iterdir()) == []

    def test_staged_without_file(self, storage):
        with storage.staged(None) as url:
            assert url is None


class TestUnitOfWork:
    def test_integrity_error_becomes_conflict(self, session, buyer):
        with pytest.raises(ConflictError):
            with unit_of_work(session):
                session.add(Users(student_number="23-0001", full_name="Copy", password_hash="x", role="BUYER"))
                session.flush()

        assert session.query(Users).count() == 1

    def test_domain_error_rolls_back(self, session):
        with pytest.raises(ValidationError):
            with unit_of_work(session):
                session.add(Users(student_number="23-0009", full_name="Temp", password_hash="x", role="BUYER"))
                session.flush()
                raise ValidationError("nope")

        assert session.query(Users).count() == 0
