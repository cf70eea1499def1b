"""
Data models shared by the provider clients, the QA analyzer and the report formatter
"""
from dataclasses import dataclass, field
from typing import List


@dataclass
class IssueData:
    """Provider-agnostic view of a GitHub or GitLab issue. Every field always has a value."""
    title: str = ""
    description: str = ""
    labels: List[str] = field(default_factory=list)
    assignees: List[str] = field(default_factory=list)
    author: str = ""
    state: str = ""
    created_at: str = ""
    updated_at: str = ""
    web_url: str = ""
    project_name: str = ""
    iid: int = 0


@dataclass
class IssueComment:
    """A user comment (GitHub issue comment or non-system GitLab note)"""
    author: str
    created_at: str
    body: str


@dataclass
class QAAnalysis:
    """Derived QA information for one issue"""
    requirements: List[str] = field(default_factory=list)
    acceptance_criteria: List[str] = field(default_factory=list)
    testing_suggestions: List[str] = field(default_factory=list)
    risk_areas: List[str] = field(default_factory=list)
    test_types: List[str] = field(default_factory=list)
