"""
Unit tests for pre-sync validation.
"""

import unittest
from unittest.mock import Mock

from docsie_connector.errors import AuthenticationError, MavenApiError
from docsie_connector.models import DocsieArticle, DocsieWorkspace, MavenKnowledgeBase
from docsie_connector.sync import run_validation, validate_docsie_connection, validate_maven_connection

from fakes import make_article


class TestValidation(unittest.TestCase):
    """Test the API connectivity checks."""

    def setUp(self):
        """Set up mocked Docsie and Maven clients."""
        self.docsie = Mock()
        self.docsie.get_workspaces.return_value = [DocsieWorkspace(id="ws_1", name="Docs")]
        self.docsie.get_articles.return_value = [
            DocsieArticle.model_validate(make_article(i)) for i in range(1, 4)
        ]
        self.maven = Mock()
        self.maven.get_knowledge_base.return_value = MavenKnowledgeBase(name="Docsie KB")

    def test_docsie_success(self):
        """Test a reachable Docsie API reports counts."""
        result = validate_docsie_connection(self.docsie)

        self.assertTrue(result.success)
        self.assertEqual(result.workspaces, 1)
        self.assertEqual(result.articles, 3)

    def test_docsie_failure_is_reported(self):
        """Test Docsie errors are reported, not raised."""
        self.docsie.get_workspaces.side_effect = AuthenticationError(401, "Unauthorized", "/workspaces/")

        result = validate_docsie_connection(self.docsie)

        self.assertFalse(result.success)
        self.assertIn("401 Unauthorized", result.error)

    def test_maven_success(self):
        """Test a reachable knowledge base reports its name."""
        result = validate_maven_connection(self.maven, "docsie-kb")

        self.assertTrue(result.success)
        self.assertEqual(result.knowledge_base_name, "Docsie KB")
        self.maven.get_knowledge_base.assert_called_once_with("docsie-kb")

    def test_maven_failure_is_reported(self):
        """Test Maven errors are reported, not raised."""
        self.maven.get_knowledge_base.side_effect = MavenApiError(404, "Not Found", "/v1/knowledge/x")

        result = validate_maven_connection(self.maven, "x")

        self.assertFalse(result.success)
        self.assertIn("404", result.error)

    def test_ready_when_both_succeed(self):
        """Test readiness requires both checks to pass."""
        result = run_validation(self.docsie, self.maven, "docsie-kb")

        self.assertTrue(result.ready)
        self.assertIsNone(result.count_mismatch)

    def test_not_ready_when_one_fails(self):
        """Test one failing check means not ready."""
        self.maven.get_knowledge_base.side_effect = RuntimeError("unreachable")

        result = run_validation(self.docsie, self.maven, "docsie-kb")

        self.assertFalse(result.ready)
        self.assertTrue(result.docsie.success)

    def test_expected_count(self):
        """Test the expected count is compared with fetched articles."""
        self.assertFalse(run_validation(self.docsie, self.maven, "kb", expected_document_count=3).count_mismatch)

        with self.assertLogs(level="WARNING") as logs:
            result = run_validation(self.docsie, self.maven, "kb", expected_document_count=109)

        self.assertTrue(result.count_mismatch)
        self.assertEqual(result.expected_count, 109)
        self.assertIn("Expected 109 documents, found 3", logs.output[0])


if __name__ == '__main__':
    unittest.main()
