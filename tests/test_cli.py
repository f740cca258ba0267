"""Tests for the splatview-inspect entry point."""

import logging

import numpy as np

from src.infrastructure.processing.ply import write_ply_bytes
from src.splatview.core.main import main


class TestInspectMain:
    """Test main() return codes and reporting."""

    def test_reports_point_count(self, temp_dir, sample_points, caplog):
        path = temp_dir / "cloud.ply"
        path.write_bytes(write_ply_bytes(sample_points))

        with caplog.at_level(logging.INFO):
            assert main(str(path)) == 0
        assert f"Points: {sample_points.count}" in caplog.text

    def test_raw_file(self, temp_dir, caplog):
        path = temp_dir / "cloud.bin"
        path.write_bytes(np.zeros(12, dtype="<f4").tobytes())

        with caplog.at_level(logging.INFO):
            assert main(str(path)) == 0
        assert "Encoding: raw" in caplog.text

    def test_empty_raw_file(self, temp_dir):
        path = temp_dir / "empty.bin"
        path.write_bytes(b"")

        assert main(str(path)) == 0

    def test_invalid_ply(self, temp_dir, caplog):
        path = temp_dir / "broken.ply"
        path.write_bytes(b"ply\nformat ascii 1.0\nend_header\n")

        with caplog.at_level(logging.ERROR):
            assert main(str(path)) == 1
        assert "missing or empty vertex element" in caplog.text

    def test_missing_file(self, temp_dir):
        assert main(str(temp_dir / "missing.ply")) == 1
