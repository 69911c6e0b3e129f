"""Tests for candidate photo decoding."""

from __future__ import annotations

import base64
import logging
import struct
import zlib
from io import BytesIO

import pytest
from PIL import Image

from career_craft.layout.photo import DecodedPhoto, Photo, decode_photo, validate_photo
from career_craft.services.resume_document import compose_resume_layout


def _gif_bytes() -> bytes:
    buffer = BytesIO()
    Image.new("RGB", (4, 4)).save(buffer, format="GIF")
    return buffer.getvalue()


def _png_chunk(kind: bytes, payload: bytes) -> bytes:
    crc = zlib.crc32(kind + payload) & 0xFFFFFFFF
    return struct.pack(">I", len(payload)) + kind + payload + struct.pack(">I", crc)


def _oversized_png_header() -> bytes:
    """A tiny PNG whose header declares a 60000 x 60000 image."""
    header = struct.pack(">IIBBBBB", 60000, 60000, 8, 2, 0, 0, 0)
    return b"\x89PNG\r\n\x1a\n" + _png_chunk(b"IHDR", header) + _png_chunk(b"IEND", b"")


class TestPhotoFromDataUri:
    """Tests for Photo.from_data_uri."""

    def test_parses_mime_type_and_payload(self, png_bytes: bytes) -> None:
        uri = "data:image/png;base64," + base64.b64encode(png_bytes).decode()

        photo = Photo.from_data_uri(uri)

        assert photo == Photo(mime_type="image/png", data=png_bytes)

    def test_normalizes_jpeg_alias(self, jpeg_bytes: bytes) -> None:
        uri = "data:IMAGE/JPG;base64," + base64.b64encode(jpeg_bytes).decode()

        assert Photo.from_data_uri(uri).mime_type == "image/jpeg"

    def test_accepts_bare_base64(self, png_bytes: bytes) -> None:
        photo = Photo.from_data_uri(base64.b64encode(png_bytes).decode())

        assert photo.mime_type is None
        assert photo.data == png_bytes

    @pytest.mark.parametrize("uri", ["data:image/png;base64", "data:image/png;base64,@@@", "%%%"])
    def test_invalid_uri_raises(self, uri: str) -> None:
        with pytest.raises(ValueError):
            Photo.from_data_uri(uri)


class TestValidatePhoto:
    """Tests for validate_photo."""

    def test_png(self, png_bytes: bytes) -> None:
        decoded = validate_photo(Photo("image/png", png_bytes))

        assert decoded == DecodedPhoto(data=png_bytes, image_format="PNG", width_px=20, height_px=20)

    def test_jpeg_without_declared_type(self, jpeg_bytes: bytes) -> None:
        assert validate_photo(Photo(None, jpeg_bytes)).image_format == "JPEG"

    def test_mismatched_type_raises(self, png_bytes: bytes) -> None:
        with pytest.raises(ValueError, match="does not match"):
            validate_photo(Photo("image/jpeg", png_bytes))

    def test_too_large_raises(self, png_bytes: bytes) -> None:
        with pytest.raises(ValueError, match="exceeds"):
            validate_photo(Photo("image/png", png_bytes), max_bytes=10)

    def test_empty_raises(self) -> None:
        with pytest.raises(ValueError, match="empty"):
            validate_photo(Photo("image/png", b""))

    def test_gif_is_unsupported(self) -> None:
        with pytest.raises(ValueError, match="Unsupported"):
            validate_photo(Photo("image/gif", _gif_bytes()))

    def test_garbage_raises(self) -> None:
        with pytest.raises(ValueError, match="could not be decoded"):
            validate_photo(Photo("image/png", b"definitely not an image"))


class TestDecodePhoto:
    """Tests for decode_photo."""

    def test_none_stays_none(self) -> None:
        assert decode_photo(None) is None

    def test_valid_photo_is_decoded(self, png_bytes: bytes) -> None:
        decoded = decode_photo(Photo("image/png", png_bytes))

        assert decoded is not None
        assert decoded.image_format == "PNG"

    def test_bad_photo_is_logged_and_dropped(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="career_craft.layout.photo"):
            assert decode_photo(Photo("image/png", b"garbage")) is None

        assert "Skipping candidate photo" in caplog.text


class TestOversizedPhoto:
    """A header that declares a huge image is rejected before decoding."""

    def test_validate_raises_value_error(self) -> None:
        with pytest.raises(ValueError, match="could not be decoded"):
            validate_photo(Photo("image/png", _oversized_png_header()))

    def test_decode_logs_and_drops(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="career_craft.layout.photo"):
            assert decode_photo(Photo("image/png", _oversized_png_header())) is None

        assert "Skipping candidate photo" in caplog.text

    def test_layout_still_succeeds(self, sample_resume: str) -> None:
        layout = compose_resume_layout(
            sample_resume, "en", photo=Photo("image/png", _oversized_png_header())
        )

        assert layout.page_count == 1
        assert all(command.kind != "image" for command in layout.commands())
