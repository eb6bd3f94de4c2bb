"""Unit tests for environment initialization."""

import os

from perf_compare.startup import ensure_initialized, reset_initialization


class TestEnsureInitialized:
    """Tests for ensure_initialized."""

    def test_loads_env_file_once(self, tmp_path, monkeypatch):
        monkeypatch.delenv("PERF_COMPARE_TEST_VAR", raising=False)
        (tmp_path / ".env").write_text("PERF_COMPARE_TEST_VAR=loaded\n")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        reset_initialization()

        try:
            assert ensure_initialized(nested) == (tmp_path / ".env").resolve()
            assert os.environ["PERF_COMPARE_TEST_VAR"] == "loaded"

            (tmp_path / ".env").write_text("PERF_COMPARE_TEST_VAR=changed\n")
            monkeypatch.delenv("PERF_COMPARE_TEST_VAR")
            ensure_initialized(nested)
            assert "PERF_COMPARE_TEST_VAR" not in os.environ
        finally:
            monkeypatch.delenv("PERF_COMPARE_TEST_VAR", raising=False)
            reset_initialization()
