#!/usr/bin/env python3
"""
Docsie Connector - Docsie to Maven AGI knowledge base sync

Main entry point. Loads configuration, builds the API clients and runs
either a full sync or the pre-sync validation.
"""

import logging
import sys
import argparse
from dataclasses import dataclass
from typing import List, Optional

from dotenv import load_dotenv

from docsie_connector import __version__
from docsie_connector.config import ConfigManager
from docsie_connector.docsie import DocsieClient
from docsie_connector.maven import MavenClient, MavenUploader
from docsie_connector.models import SyncResult, ValidationResult
from docsie_connector.sync import DocsieSync, run_validation
from docsie_connector.utils import RetryConfig


@dataclass
class RunResult:
    """Outcome of a CLI command."""

    success: bool
    exit_code: int
    error: Optional[str] = None
    sync_result: Optional[SyncResult] = None
    validation_result: Optional[ValidationResult] = None


def setup_logging(config: ConfigManager):
    """Configure logging for the application."""
    level = getattr(logging, str(config.get("logging.level", "INFO")).upper(), logging.INFO)
    format_str = config.get("logging.format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if config.log_filename:
        handlers.append(logging.FileHandler(config.log_filename))

    logging.basicConfig(level=level, format=format_str, handlers=handlers, force=True)


def build_docsie_client(config: ConfigManager) -> DocsieClient:
    return DocsieClient(
        api_key=config.docsie_api_key,
        base_url=config.docsie_base_url,
        max_concurrent=config.max_concurrent,
        min_time=config.min_time,
        timeout=config.docsie_timeout,
        page_size=config.page_size,
    )


def build_maven_client(config: ConfigManager) -> MavenClient:
    return MavenClient(
        organization_id=config.maven_organization_id,
        agent_id=config.maven_agent_id,
        api_key=config.maven_api_key,
        app_id=config.maven_app_id,
        base_url=config.maven_base_url,
        timeout=config.maven_timeout,
    )


def log_sync_summary(result: SyncResult):
    """Log the final tallies and any per-document errors."""
    logging.info("=== Sync Complete ===")
    logging.info(f"Workspaces: {result.workspaces}")
    logging.info(f"Articles: {result.articles}")
    logging.info(f"Uploaded: {result.uploaded}")
    logging.info(f"Failed: {result.failed}")
    logging.info(f"Skipped: {result.skipped}")
    logging.info(f"Duration: {result.duration_ms}ms")

    if result.errors:
        logging.info("Errors:")
        for error in result.errors:
            logging.info(f"  - {error.doc_id}: {error.error}")


def run_sync(config: ConfigManager, knowledge_base_id: str) -> RunResult:
    """
    Run the full sync.

    Args:
        config: Resolved configuration
        knowledge_base_id: Target Maven knowledge base

    Returns:
        RunResult with exit code 0 on success (even with partial upload failures)
    """
    logging.info("=== Docsie to Maven Sync ===")

    try:
        with build_docsie_client(config) as docsie_client, build_maven_client(config) as maven_client:
            uploader = MavenUploader(
                maven_client,
                knowledge_base_id,
                batch_size=config.batch_size,
                retry_config=RetryConfig.from_mapping(config.retry_settings),
            )
            sync = DocsieSync(docsie_client, uploader, workspace_ids=config.workspace_ids)
            result = sync.sync_all()

        log_sync_summary(result)
        return RunResult(success=True, exit_code=0, sync_result=result)

    except Exception as e:
        logging.error(f"Sync failed: {e}")
        return RunResult(success=False, exit_code=1, error=str(e))


def run_validate(config: ConfigManager, knowledge_base_id: str,
                 expected_count: Optional[int] = None) -> RunResult:
    """
    Run the pre-sync validation only.

    Returns:
        RunResult with exit code 0 when both APIs are reachable
    """
    try:
        with build_docsie_client(config) as docsie_client, build_maven_client(config) as maven_client:
            result = run_validation(
                docsie_client,
                maven_client,
                knowledge_base_id,
                expected_document_count=expected_count,
            )

        return RunResult(
            success=result.ready,
            exit_code=0 if result.ready else 1,
            validation_result=result,
        )

    except Exception as e:
        logging.error(f"Validation failed: {e}")
        return RunResult(success=False, exit_code=1, error=str(e))


def parse_arguments(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Docsie Connector - sync Docsie documentation to a Maven AGI knowledge base",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py                        # Run a full sync
  python main.py validate               # Check credentials and count articles
  python main.py validate --expected-count 109
  python main.py sync --knowledge-base-id my-kb

Required environment variables (a .env file is loaded if present):
  DOCSIE_API_KEY, MAVEN_ORGANIZATION_ID, MAVEN_AGENT_ID, MAVEN_API_KEY
        """
    )

    parser.add_argument(
        "command",
        nargs="?",
        choices=["sync", "validate"],
        default="sync",
        help="Command to run (default: sync)"
    )

    parser.add_argument(
        "--config",
        type=str,
        default="config.yaml",
        help="Path to the YAML configuration file (default: config.yaml)"
    )

    parser.add_argument(
        "--knowledge-base-id",
        type=str,
        help="Maven knowledge base id (overrides MAVEN_KNOWLEDGE_BASE_ID)"
    )

    parser.add_argument(
        "--expected-count",
        type=int,
        help="Expected number of Docsie articles (validate only)"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"Docsie Connector {__version__}"
    )

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_arguments(argv)
    load_dotenv(override=False)

    config = ConfigManager(args.config)
    setup_logging(config)

    logging.info(f"Docsie Connector v{__version__}")

    missing = config.validate_env()
    if missing:
        logging.error("Missing required credentials (set them in the environment or config.yaml):")
        for name in missing:
            logging.error(f"  - {name}")
        logging.error("See .env.example for required configuration.")
        return 1

    knowledge_base_id = args.knowledge_base_id or config.knowledge_base_id

    if args.command == "validate":
        result = run_validate(config, knowledge_base_id, args.expected_count)
    else:
        result = run_sync(config, knowledge_base_id)

    return result.exit_code


if __name__ == "__main__":
    sys.exit(main())
