"""
Unit tests for utils.py
"""

import logging
import sys
import tempfile
from pathlib import Path

import pytest

from schemadump.utils import STDOUT, open_output, print_dry_run_info, setup_logging


class TestSetupLogging:
    """Tests for setup_logging function."""

    @pytest.fixture(autouse=True)
    def reset_logging(self):
        """Reset logging configuration before each test."""
        root_logger = logging.getLogger()
        # Remove all handlers
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)
        # Reset level to NOTSET so basicConfig will work
        root_logger.setLevel(logging.NOTSET)
        yield

    def test_default_log_level(self):
        """Test default log level is INFO."""
        setup_logging({})
        assert logging.getLogger().level == logging.INFO

    def test_custom_log_level(self):
        """Test setting custom log level."""
        setup_logging({"level": "DEBUG"})
        assert logging.getLogger().level == logging.DEBUG

    def test_log_level_case_insensitive(self):
        """Test log level is case insensitive."""
        setup_logging({"level": "warning"})
        assert logging.getLogger().level == logging.WARNING

    def test_logs_to_stderr(self):
        """Test console logging stays off stdout, which may carry the dump."""
        setup_logging({})
        streams = [
            h.stream for h in logging.getLogger().handlers
            if type(h) is logging.StreamHandler
        ]
        assert streams == [sys.stderr]

    def test_log_to_file(self):
        """Test logging to a file."""
        with tempfile.TemporaryDirectory() as tmpdir:
            log_file = Path(tmpdir) / "test.log"
            setup_logging({"file": str(log_file)})

            # Log a message
            logging.info("Test message")

            # Check the file was created
            assert log_file.exists()

    def test_creates_log_directory(self):
        """Test that log directory is created if it doesn't exist."""
        with tempfile.TemporaryDirectory() as tmpdir:
            log_file = Path(tmpdir) / "nested" / "dir" / "test.log"
            setup_logging({"file": str(log_file)})

            # Directory should be created
            assert log_file.parent.exists()


class TestOpenOutput:
    """Tests for open_output function."""

    def test_dash_is_stdout(self):
        assert open_output(STDOUT) is sys.stdout

    def test_opens_file_for_writing(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "dump.sql"
            path.write_text("old content")

            handle = open_output(str(path))
            handle.write("new")
            handle.close()

            assert path.read_text() == "new"

    def test_creates_parent_directory(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "nested" / "dump.sql"

            handle = open_output(str(path))
            handle.close()

            assert path.exists()

    def test_writes_utf8(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "dump.sql"

            handle = open_output(str(path))
            handle.write("'café'")
            handle.close()

            assert path.read_bytes() == "'café'".encode("utf-8")


class TestPrintDryRunInfo:
    """Tests for print_dry_run_info function."""

    @pytest.fixture(autouse=True)
    def setup_logging(self):
        """Setup logging for tests."""
        logging.basicConfig(level=logging.INFO)

    def test_database_and_host(self, caplog):
        """Test dry run info names the database and server."""
        with caplog.at_level(logging.INFO):
            print_dry_run_info(
                {"database": "shop", "host": "db.local", "port": 3307},
                {"file": "./dumps/shop.sql"}
            )

        assert "Would dump database: shop from db.local:3307" in caplog.text
        assert "Output: ./dumps/shop.sql" in caplog.text

    def test_default_port_and_stdout(self, caplog):
        """Test dry run info defaults to port 3306 and stdout."""
        with caplog.at_level(logging.INFO):
            print_dry_run_info({"database": "shop", "host": "localhost"}, {})

        assert "localhost:3306" in caplog.text
        assert "Output: -" in caplog.text

    def test_page_size_shown(self, caplog):
        """Test dry run info shows a configured page size."""
        with caplog.at_level(logging.INFO):
            print_dry_run_info(
                {"database": "shop", "host": "localhost"}, {"page_size": 100}
            )

        assert "Page size: 100 rows" in caplog.text
