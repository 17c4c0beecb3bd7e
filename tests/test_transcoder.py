from __future__ import annotations

import pytest
from PIL import Image

from errors import TranscodeError
from transcoder import transcode


def _make_image(path, mode="RGB", size=(64, 48), fmt=None):
    color = (200, 30, 30, 128) if mode == "RGBA" else 0
    Image.new(mode, size, color).save(path, fmt)
    return str(path)


class TestTranscode:
    def test_writes_jpeg_and_keeps_source(self, tmp_path) -> None:
        source = _make_image(tmp_path / "in.png")
        dest = tmp_path / "out_compressed.jpg"

        transcode(source, str(dest), quality=50)

        assert (tmp_path / "in.png").exists()
        with Image.open(dest) as img:
            assert img.format == "JPEG"
            assert img.size == (64, 48)

    def test_converts_alpha_images(self, tmp_path) -> None:
        source = _make_image(tmp_path / "in.png", mode="RGBA")
        dest = tmp_path / "out.jpg"

        transcode(source, str(dest))

        with Image.open(dest) as img:
            assert img.mode == "RGB"

    def test_corrupt_input_raises(self, tmp_path) -> None:
        source = tmp_path / "broken.jpg"
        source.write_bytes(b"<html>not an image</html>")

        with pytest.raises(TranscodeError) as exc_info:
            transcode(str(source), str(tmp_path / "out.jpg"))
        assert exc_info.value.path == str(source)

    def test_missing_input_raises(self, tmp_path) -> None:
        with pytest.raises(TranscodeError):
            transcode(str(tmp_path / "nope.jpg"), str(tmp_path / "out.jpg"))

    def test_unwritable_destination_raises(self, tmp_path) -> None:
        source = _make_image(tmp_path / "in.png")
        with pytest.raises(TranscodeError):
            transcode(source, str(tmp_path / "missing-dir" / "out.jpg"))

    @pytest.mark.parametrize("quality", [-1, 101])
    def test_rejects_out_of_range_quality(self, tmp_path, quality) -> None:
        source = _make_image(tmp_path / "in.png")
        with pytest.raises(ValueError):
            transcode(source, str(tmp_path / "out.jpg"), quality=quality)

    def test_oversized_image_raises(self, tmp_path, write_oversized_png) -> None:
        source = write_oversized_png(tmp_path / "huge.png")

        with pytest.raises(TranscodeError) as exc_info:
            transcode(source, str(tmp_path / "out.jpg"))
        assert isinstance(exc_info.value.__cause__, Image.DecompressionBombError)
        assert not (tmp_path / "out.jpg").exists()
