"""Tests for the on-disk document file storage."""

import os

import pytest

from prolist.storage.files import LocalFileStorage, get_file_extension, safe_filename


@pytest.mark.asyncio
async def test_save_read_delete(tmp_path):
    storage = LocalFileStorage(str(tmp_path / "uploads"))
    file_ref = await storage.save("../coo signed.pdf", b"%PDF-1.4")

    assert os.path.dirname(file_ref) == str(tmp_path / "uploads")
    assert file_ref.endswith("_coo_signed.pdf")
    assert await storage.read(file_ref) == b"%PDF-1.4"

    await storage.delete(file_ref)
    assert not os.path.exists(file_ref)


@pytest.mark.asyncio
async def test_delete_missing_file_is_ignored(tmp_path):
    storage = LocalFileStorage(str(tmp_path))
    await storage.delete(str(tmp_path / "gone.pdf"))


def test_safe_filename():
    assert safe_filename("") == "upload"
    assert safe_filename("/etc/passwd") == "passwd"
    assert get_file_extension("Invoice.PDF") == "pdf"
