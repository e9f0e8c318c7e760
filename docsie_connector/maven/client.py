"""
Maven AGI API client.

Wraps the ``mavenagi`` SDK for the two knowledge-base calls the connector
needs: creating (or updating, by reference id) a document and looking up a
knowledge base. SDK errors are re-raised as MavenApiError.
"""

from typing import Any, Callable, Optional, TypeVar

import httpx
from mavenagi import MavenAGI
from mavenagi.core.api_error import ApiError as SdkApiError

from ..errors import ConfigurationError, MavenApiError
from ..models import MavenKnowledgeBase, MavenKnowledgeDocument

T = TypeVar("T")


class MavenClient:
    """
    Manages communication with the Maven AGI knowledge API.
    """

    def __init__(self, organization_id: str, agent_id: str, api_key: str,
                 app_id: Optional[str] = None, base_url: Optional[str] = None,
                 timeout: float = 30.0, sdk: Optional[Any] = None):
        """
        Initialize the Maven client.

        Args:
            organization_id: Maven organization id
            agent_id: Maven agent id
            api_key: Maven app secret
            app_id: Maven app id (the SDK reads MAVENAGI_APP_ID when omitted)
            base_url: API base URL override (SDK production endpoint by default)
            timeout: Per-request timeout in seconds
            sdk: Preconfigured MavenAGI client, mainly for tests

        Raises:
            ConfigurationError: If any credential is empty or the SDK rejects them
        """
        missing = [name for name, value in (
            ("organization_id", organization_id),
            ("agent_id", agent_id),
            ("api_key", api_key),
        ) if not value]
        if missing:
            raise ConfigurationError(f"Maven credentials missing: {', '.join(missing)}")

        self.organization_id = organization_id
        self.agent_id = agent_id
        self._http: Optional[httpx.Client] = None

        if sdk is not None:
            self.sdk = sdk
            return

        self._http = httpx.Client(timeout=timeout)
        options = {
            "organization_id": organization_id,
            "agent_id": agent_id,
            "app_secret": api_key,
            "timeout": timeout,
            "httpx_client": self._http,
        }
        if app_id:
            options["app_id"] = app_id
        if base_url:
            options["base_url"] = base_url.rstrip("/")

        try:
            self.sdk = MavenAGI(**options)
        except SdkApiError as e:
            self._http.close()
            raise ConfigurationError(f"Maven client setup failed: {e.body}") from e

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()

    def close(self) -> None:
        if self._http is not None:
            self._http.close()

    def _call(self, endpoint: str, operation: Callable[[], T]) -> T:
        try:
            return operation()
        except SdkApiError as e:
            status_code = e.status_code or 0
            reason = httpx.codes.get_reason_phrase(status_code) if status_code else "Request failed"
            detail = str(e.body) if e.body else None
            raise MavenApiError(status_code, reason, endpoint, detail=detail) from e

    def create_knowledge_document(self, knowledge_base_id: str, document: MavenKnowledgeDocument) -> Any:
        """
        Create a document in a knowledge base.

        Maven treats the document's reference id as the deduplication key,
        so creating an existing reference id updates it.

        Raises:
            MavenApiError: When Maven rejects the request
        """
        return self._call(
            f"knowledge/{knowledge_base_id}/document",
            lambda: self.sdk.knowledge.create_knowledge_document(
                knowledge_base_id,
                request=document.to_request(),
            ),
        )

    def get_knowledge_base(self, knowledge_base_id: str) -> MavenKnowledgeBase:
        """Look up a knowledge base by reference id."""
        response = self._call(
            f"knowledge/{knowledge_base_id}",
            lambda: self.sdk.knowledge.get_knowledge_base(knowledge_base_id),
        )
        return MavenKnowledgeBase(name=response.name or "")
