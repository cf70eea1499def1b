"""Test configuration and fixtures."""

import pytest

from issue_qa_mcp.models import IssueComment, IssueData
from issue_qa_mcp.settings import Settings


@pytest.fixture(autouse=True)
def reset_settings():
    """Re-read settings after each test so env patches don't leak."""
    yield
    Settings.reload_config()


@pytest.fixture
def issue_data() -> IssueData:
    """A typical issue with labels, assignees and a structured description."""
    return IssueData(
        title="Implementar login con Google OAuth",
        description=(
            "El sistema debe soportar OAuth2 para el login. Revisar seguridad del token.\n"
            "- Usuario puede iniciar sesión con Google"
        ),
        labels=["security", "feature"],
        assignees=["alice", "bob"],
        author="carol",
        state="opened",
        created_at="2024-03-05T10:20:30Z",
        updated_at="2024-03-06T08:00:00Z",
        web_url="https://gitlab.com/acme/portal/-/issues/42",
        project_name="portal",
        iid=42,
    )


@pytest.fixture
def make_comments():
    """Factory for n comments with predictable authors and bodies."""

    def _make(count: int) -> list[IssueComment]:
        return [
            IssueComment(
                author=f"user{i}",
                created_at=f"2024-01-0{i}T12:00:00Z",
                body=f"comment body {i}",
            )
            for i in range(1, count + 1)
        ]

    return _make
