from __future__ import annotations

import hashlib
import re
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import Mock

import pytest

from mediapool.domain.models import Media, MediaStatus, ResolvedFile
from mediapool.exceptions import InvalidBinaryContentError, MissingMediaNameError
from mediapool.infrastructure.media_storage import InMemoryFilesystem
from mediapool.providers import FileProvider

FIXED_NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)
REFERENCE_RE = re.compile(r"^[0-9a-f]{40}\.pdf$")


def _persist(provider: FileProvider, media: Media, media_id: int = 1) -> Media:
    provider.pre_persist(media)
    media.id = media_id
    provider.post_persist(media)
    return media


def test_fix_binary_content_resolves_existing_path(file_provider, ten_byte_file: Path) -> None:
    media = Media(binary_content=str(ten_byte_file))

    file_provider.fix_binary_content(media)

    resolved = media.binary_content
    assert isinstance(resolved, ResolvedFile)
    assert resolved.basename == "report.pdf"
    assert resolved.extension == "pdf"
    assert resolved.size == 10
    assert resolved.mime_type == "application/pdf"
    assert resolved.real_path == ten_byte_file.resolve()
    assert resolved.client_original_name is None


def test_fix_binary_content_accepts_pathlike(file_provider, ten_byte_file: Path) -> None:
    media = Media(binary_content=ten_byte_file)

    file_provider.fix_binary_content(media)

    assert isinstance(media.binary_content, ResolvedFile)


def test_fix_binary_content_is_noop_without_content(file_provider) -> None:
    media = Media()

    file_provider.fix_binary_content(media)

    assert media.binary_content is None


def test_fix_binary_content_rejects_missing_path(file_provider, tmp_path: Path) -> None:
    media = Media(binary_content=str(tmp_path / "missing.pdf"))

    with pytest.raises(InvalidBinaryContentError):
        file_provider.fix_binary_content(media)


def test_fix_binary_content_rejects_directory(file_provider, tmp_path: Path) -> None:
    with pytest.raises(InvalidBinaryContentError):
        file_provider.fix_binary_content(Media(binary_content=str(tmp_path)))


def test_fix_binary_content_rejects_unsupported_type(file_provider) -> None:
    with pytest.raises(InvalidBinaryContentError):
        file_provider.fix_binary_content(Media(binary_content=42))  # type: ignore[arg-type]


def test_fix_binary_content_wraps_raw_bytes(file_provider) -> None:
    media = Media(name="notes.txt", binary_content=b"hello")

    file_provider.fix_binary_content(media)

    resolved = media.binary_content
    assert isinstance(resolved, ResolvedFile)
    assert resolved.read_bytes() == b"hello"
    assert resolved.size == 5
    assert resolved.extension == "txt"
    assert resolved.mime_type == "text/plain"


def test_fix_filename_keeps_existing_name(file_provider, ten_byte_file: Path) -> None:
    media = Media(name="report", binary_content=ResolvedFile.from_path(ten_byte_file))

    file_provider.fix_filename(media)

    assert media.name == "report"


def test_fix_filename_uses_basename(file_provider, tmp_path: Path) -> None:
    path = tmp_path / "chart.png"
    path.write_bytes(b"png")
    media = Media(binary_content=ResolvedFile.from_path(path))

    file_provider.fix_filename(media)

    assert media.name == "chart.png"


def test_fix_filename_prefers_client_original_name(file_provider, tmp_path: Path) -> None:
    path = tmp_path / "phpA1B2.tmp"
    path.write_bytes(b"data")
    media = Media(
        binary_content=ResolvedFile.from_path(path, client_original_name="holiday.jpg")
    )

    file_provider.fix_filename(media)

    assert media.name == "holiday.jpg"


def test_fix_filename_without_any_name_raises(file_provider) -> None:
    media = Media(binary_content=ResolvedFile.from_bytes(b"anonymous"))

    with pytest.raises(MissingMediaNameError):
        file_provider.fix_filename(media)


def test_pre_persist_populates_metadata(file_provider, ten_byte_file: Path) -> None:
    media = Media(binary_content=str(ten_byte_file))

    file_provider.pre_persist(media)

    assert media.provider_name == "file"
    assert media.provider_status is MediaStatus.OK
    assert media.name == "report.pdf"
    assert REFERENCE_RE.match(media.provider_reference or "")
    assert media.content_type == "application/pdf"
    assert media.size == 10
    assert media.extension == "pdf"
    assert media.created_at == FIXED_NOW
    assert media.updated_at == FIXED_NOW


def test_pre_persist_reference_hashes_name_with_salt(file_provider, ten_byte_file: Path) -> None:
    first = Media(binary_content=str(ten_byte_file))
    second = Media(binary_content=str(ten_byte_file))

    file_provider.pre_persist(first)
    file_provider.pre_persist(second)

    assert first.name == second.name
    assert first.provider_reference != second.provider_reference
    assert first.provider_reference != hashlib.sha1(b"report.pdf").hexdigest() + ".pdf"


def test_pre_persist_without_content_only_marks_provider(file_provider) -> None:
    media = Media(name="placeholder")

    file_provider.pre_persist(media)

    assert media.provider_name == "file"
    assert media.provider_status is MediaStatus.OK
    assert media.provider_reference is None
    assert media.created_at is None


def test_pre_persist_missing_path_leaves_reference_unset(file_provider, tmp_path: Path) -> None:
    media = Media(binary_content=str(tmp_path / "nope.bin"))

    with pytest.raises(InvalidBinaryContentError):
        file_provider.pre_persist(media)

    assert media.provider_reference is None
    assert media.created_at is None
    assert media.updated_at is None


def test_pre_persist_keeps_existing_reference(file_provider, ten_byte_file: Path) -> None:
    media = Media(provider_reference="fixed.pdf", binary_content=str(ten_byte_file))

    file_provider.pre_persist(media)

    assert media.provider_reference == "fixed.pdf"


def test_pre_persist_omits_dot_when_extension_is_unknown(file_provider) -> None:
    media = Media(name="README", binary_content=b"text")

    file_provider.pre_persist(media)

    assert re.fullmatch(r"[0-9a-f]{40}", media.provider_reference or "")


def test_create_stores_ten_bytes_at_reference_key(
    file_provider, filesystem: InMemoryFilesystem, thumbnail, ten_byte_file: Path
) -> None:
    media = _persist(file_provider, Media(binary_content=str(ten_byte_file)), media_id=7)

    key = file_provider.get_reference_image(media)
    assert key == f"default/0001/01/{media.provider_reference}"
    assert filesystem.has(key)
    assert filesystem.read(key) == b"0123456789"
    assert len(filesystem.read(key)) == 10
    assert media.provider_status is MediaStatus.OK
    assert thumbnail.generated == [("file", 7)]


def test_post_persist_without_content_writes_nothing(
    file_provider, filesystem: InMemoryFilesystem, thumbnail
) -> None:
    media = Media(id=1, name="placeholder")

    file_provider.post_persist(media)

    assert filesystem.files == {}
    assert thumbnail.generated == []


def test_set_file_contents_is_idempotent(
    file_provider, filesystem: InMemoryFilesystem, ten_byte_file: Path
) -> None:
    media = _persist(file_provider, Media(binary_content=str(ten_byte_file)))
    key = file_provider.get_reference_image(media)
    before = hashlib.sha256(filesystem.read(key)).hexdigest()

    file_provider.set_file_contents(media, str(ten_byte_file))

    assert list(filesystem.files) == [key]
    assert hashlib.sha256(filesystem.read(key)).hexdigest() == before


def test_set_file_contents_overwrites_with_bytes(
    file_provider, filesystem: InMemoryFilesystem, ten_byte_file: Path
) -> None:
    media = _persist(file_provider, Media(binary_content=str(ten_byte_file)))

    file_provider.set_file_contents(media, b"new")

    assert filesystem.read(file_provider.get_reference_image(media)) == b"new"


def test_set_file_contents_requires_resolved_content(file_provider) -> None:
    media = Media(id=1, provider_reference="abc.pdf")

    with pytest.raises(InvalidBinaryContentError):
        file_provider.set_file_contents(media)


def test_update_keeps_reference_and_replaces_bytes(
    file_provider, filesystem: InMemoryFilesystem, ten_byte_file: Path, tmp_path: Path
) -> None:
    media = _persist(file_provider, Media(binary_content=str(ten_byte_file)))
    reference = media.provider_reference
    created_at = media.created_at
    replacement = tmp_path / "other-name.pdf"
    replacement.write_bytes(b"replacement bytes")

    media.binary_content = str(replacement)
    file_provider.pre_update(media)
    file_provider.post_update(media)

    assert media.provider_reference == reference
    assert media.created_at == created_at
    assert media.size == len(b"replacement bytes")
    assert media.name == "report.pdf"
    assert filesystem.read(file_provider.get_reference_image(media)) == b"replacement bytes"
    assert len(filesystem.files) == 1


def test_pre_update_mints_reference_for_media_created_without_bytes(
    file_provider, ten_byte_file: Path
) -> None:
    media = Media(name="later")
    file_provider.pre_persist(media)
    assert media.provider_reference is None

    media.binary_content = str(ten_byte_file)
    file_provider.pre_update(media)

    assert REFERENCE_RE.match(media.provider_reference or "")
    assert media.updated_at == FIXED_NOW
    assert media.created_at is None


def test_pre_update_without_content_is_noop(file_provider) -> None:
    media = Media(id=1, name="unchanged", provider_reference="abc.pdf")

    file_provider.pre_update(media)

    assert media.updated_at is None
    assert media.provider_reference == "abc.pdf"


def test_post_update_ignores_unresolved_content(
    file_provider, filesystem: InMemoryFilesystem, ten_byte_file: Path
) -> None:
    media = Media(id=1, provider_reference="abc.pdf", binary_content=str(ten_byte_file))

    file_provider.post_update(media)

    assert filesystem.files == {}
    assert media.binary_content == str(ten_byte_file)


def test_post_update_flushes_cdn_when_flushable(ten_byte_file: Path) -> None:
    cdn = Mock()
    provider = FileProvider("file", filesystem=InMemoryFilesystem(), cdn=cdn)
    media = Media(cdn_is_flushable=True, binary_content=str(ten_byte_file))
    provider.pre_persist(media)
    media.id = 3

    provider.post_update(media)

    cdn.flush_paths.assert_called_once_with([provider.get_reference_image(media)])


def test_remove_hooks_keep_bytes_by_default(
    file_provider, filesystem: InMemoryFilesystem, ten_byte_file: Path
) -> None:
    media = _persist(file_provider, Media(binary_content=str(ten_byte_file)))

    file_provider.pre_remove(media)
    file_provider.post_remove(media)

    assert filesystem.has(file_provider.get_reference_image(media))


def test_post_remove_deletes_bytes_when_enabled(cdn, thumbnail, ten_byte_file: Path) -> None:
    filesystem = InMemoryFilesystem()
    provider = FileProvider(
        "file", filesystem=filesystem, cdn=cdn, thumbnail=thumbnail, delete_files_on_remove=True
    )
    media = _persist(provider, Media(binary_content=str(ten_byte_file)), media_id=5)

    provider.post_remove(media)

    assert filesystem.files == {}
    assert thumbnail.deleted == [("file", 5)]


def test_public_url_points_to_static_icon(file_provider) -> None:
    media = Media(id=1, provider_reference="abc.pdf")

    assert (
        file_provider.generate_public_url(media, "small")
        == "https://cdn.mediapool.test/media_bundle/images/files/small/file.png"
    )
    assert file_provider.generate_private_url(media, "small") is False


def test_helper_properties_merge_with_overrides(file_provider) -> None:
    media = Media(id=1, name="report.pdf", provider_reference="abc.pdf")

    properties = file_provider.get_helper_properties(media, "small", {"title": "Custom", "x": 1})

    assert properties == {
        "title": "Custom",
        "thumbnail": "default/0001/01/abc.pdf",
        "file": "default/0001/01/abc.pdf",
        "x": 1,
    }


def test_forms_describe_binary_content_field(file_provider) -> None:
    create_fields = file_provider.build_create_form()
    edit_names = [field.name for field in file_provider.build_edit_form()]

    assert [(f.name, f.type, f.required) for f in create_fields] == [
        ("binary_content", "file", True)
    ]
    assert "binary_content" in edit_names
    assert "cdn_is_flushable" in edit_names


def test_reference_key_of_media_without_bytes_has_empty_name(file_provider) -> None:
    media = _persist(file_provider, Media(name="placeholder"), media_id=5)

    assert media.provider_reference is None
    assert file_provider.get_reference_image(media) == "default/0001/01/"
    assert file_provider.get_helper_properties(media, "small")["file"] == "default/0001/01/"
