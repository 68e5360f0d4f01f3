import pytest
from django.core.files.uploadedfile import SimpleUploadedFile

from apps.documents.utils import validate_file

MAX_SIZE = 10 * 1024 * 1024


class FakeFile:
    """Only the attributes validate_file looks at, so size can be large without allocating."""

    def __init__(self, name, size, content_type=None):
        self.name = name
        self.size = size
        self.content_type = content_type


@pytest.mark.parametrize('name,content_type', [
    ('policy.pdf', 'application/pdf'),
    ('scan.jpg', 'image/jpeg'),
    ('scan.JPEG', 'image/jpeg'),
    ('card.png', 'image/png'),
])
def test_accepts_allowed_types(name, content_type):
    assert validate_file(FakeFile(name, 2048, content_type)) == (True, None)


@pytest.mark.parametrize('name,content_type', [
    ('notes.txt', 'text/plain'),
    ('archive.zip', 'application/zip'),
    ('sheet.docx', 'application/vnd.openxmlformats-officedocument.wordprocessingml.document'),
    ('noextension', 'application/pdf'),
])
def test_rejects_other_types(name, content_type):
    is_valid, error = validate_file(FakeFile(name, 2048, content_type))
    assert is_valid is False
    assert 'PDF, JPG, or PNG' in error


def test_rejects_mismatched_content_type():
    is_valid, _ = validate_file(FakeFile('policy.pdf', 2048, 'text/html'))
    assert is_valid is False


def test_generic_content_type_falls_back_to_extension():
    assert validate_file(FakeFile('policy.pdf', 2048, 'application/octet-stream')) == (True, None)
    assert validate_file(FakeFile('policy.pdf', 2048, None)) == (True, None)


def test_size_boundary():
    assert validate_file(FakeFile('policy.pdf', MAX_SIZE, 'application/pdf')) == (True, None)

    is_valid, error = validate_file(FakeFile('policy.pdf', MAX_SIZE + 1, 'application/pdf'))
    assert is_valid is False
    assert '10MB' in error


def test_missing_file():
    assert validate_file(None) == (False, "No file provided.")


def test_real_uploaded_file():
    upload = SimpleUploadedFile('home.png', b'\x89PNG' + b'0' * 100, content_type='image/png')
    assert validate_file(upload) == (True, None)
