"""
Tests for the command line entry point.
"""

import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

import main
from docsie_connector.config import ConfigManager
from docsie_connector.models import (
    DocsieValidationResult,
    MavenValidationResult,
    SyncResult,
    ValidationResult,
)

ENV = {
    "DOCSIE_API_KEY": "docsie-key",
    "MAVEN_ORGANIZATION_ID": "org-1",
    "MAVEN_AGENT_ID": "agent-1",
    "MAVEN_API_KEY": "maven-key",
}


def context_mock():
    client = MagicMock()
    client.__enter__.return_value = client
    return client


class TestArguments(unittest.TestCase):
    """Test command line parsing."""

    def test_defaults(self):
        """Test sync is the default command with default options."""
        args = main.parse_arguments([])

        self.assertEqual(args.command, "sync")
        self.assertEqual(args.config, "config.yaml")
        self.assertIsNone(args.knowledge_base_id)
        self.assertIsNone(args.expected_count)

    def test_validate_with_options(self):
        """Test validate options are parsed."""
        args = main.parse_arguments(["validate", "--expected-count", "109", "--knowledge-base-id", "kb"])

        self.assertEqual(args.command, "validate")
        self.assertEqual(args.expected_count, 109)
        self.assertEqual(args.knowledge_base_id, "kb")


@patch("main.setup_logging")
@patch("main.load_dotenv")
class TestMain(unittest.TestCase):
    """Test the main entry point dispatch."""

    def test_missing_environment_exits_with_error(self, _load_dotenv, _setup_logging):
        """Test missing credentials stop the run with exit code 1."""
        with patch.dict(os.environ, {}, clear=True), patch("main.run_sync") as run_sync:
            exit_code = main.main(["--config", "missing.yaml"])

        self.assertEqual(exit_code, 1)
        run_sync.assert_not_called()

    def test_dispatches_sync(self, _load_dotenv, _setup_logging):
        """Test the sync command runs with the given knowledge base."""
        with patch.dict(os.environ, ENV, clear=True), patch("main.run_sync") as run_sync:
            run_sync.return_value = main.RunResult(success=True, exit_code=0)
            exit_code = main.main(["sync", "--config", "missing.yaml", "--knowledge-base-id", "kb"])

        self.assertEqual(exit_code, 0)
        self.assertEqual(run_sync.call_args[0][1], "kb")

    def test_dispatches_validate(self, _load_dotenv, _setup_logging):
        """Test the validate command receives the expected count."""
        with patch.dict(os.environ, ENV, clear=True), patch("main.run_validate") as run_validate:
            run_validate.return_value = main.RunResult(success=False, exit_code=1)
            exit_code = main.main(["validate", "--config", "missing.yaml", "--expected-count", "3"])

        self.assertEqual(exit_code, 1)
        _, kb_id, expected = run_validate.call_args[0]
        self.assertEqual(kb_id, "docsie-kb")
        self.assertEqual(expected, 3)


@patch("main.build_maven_client")
@patch("main.build_docsie_client")
class TestCommands(unittest.TestCase):
    """Test exit codes of the sync and validate commands."""

    def setUp(self):
        """Set up a fully configured ConfigManager."""
        self.config = ConfigManager("missing.yaml", environ=ENV)

    def test_sync_success_exit_code(self, build_docsie, build_maven):
        """Test a completed sync exits 0 even with upload failures."""
        build_docsie.return_value = context_mock()
        build_maven.return_value = context_mock()

        with patch("main.DocsieSync") as sync_cls:
            sync_cls.return_value.sync_all.return_value = SyncResult(articles=2, uploaded=1, failed=1)
            result = main.run_sync(self.config, "docsie-kb")

        # Partial upload failures still count as a completed run
        self.assertEqual(result.exit_code, 0)
        self.assertEqual(result.sync_result.failed, 1)

    def test_sync_fetch_failure_exit_code(self, build_docsie, build_maven):
        """Test a failing sync exits 1 with the error message."""
        build_docsie.return_value = context_mock()
        build_maven.return_value = context_mock()

        with patch("main.DocsieSync") as sync_cls:
            sync_cls.return_value.sync_all.side_effect = RuntimeError("Docsie unreachable")
            result = main.run_sync(self.config, "docsie-kb")

        self.assertEqual(result.exit_code, 1)
        self.assertEqual(result.error, "Docsie unreachable")

    def test_validate_exit_code_follows_readiness(self, build_docsie, build_maven):
        """Test validate exits 0 only when both APIs are ready."""
        build_docsie.return_value = context_mock()
        build_maven.return_value = context_mock()

        for ready, expected_code in ((True, 0), (False, 1)):
            validation = ValidationResult(
                docsie=DocsieValidationResult(success=True, workspaces=1, articles=3),
                maven=MavenValidationResult(success=ready),
                ready=ready,
            )
            with patch("main.run_validation", return_value=validation):
                result = main.run_validate(self.config, "docsie-kb")

            self.assertEqual(result.exit_code, expected_code)

    def test_sync_tolerates_unknown_retry_settings(self, build_docsie, build_maven):
        """Test extra keys under upload.retry do not break the sync."""
        build_docsie.return_value = context_mock()
        build_maven.return_value = context_mock()

        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.yaml"
            config_path.write_text("upload:\n  retry:\n    max_attempts: 2\n    jitter: true\n")
            config = ConfigManager(str(config_path), environ=ENV)

        with patch("main.DocsieSync") as sync_cls:
            sync_cls.return_value.sync_all.return_value = SyncResult()
            result = main.run_sync(config, "docsie-kb")

        self.assertEqual(result.exit_code, 0)
        uploader = sync_cls.call_args[0][1]
        self.assertEqual(uploader.retry_config.max_attempts, 2)


if __name__ == '__main__':
    unittest.main()
