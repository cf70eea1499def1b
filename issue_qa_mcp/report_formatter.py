"""
Markdown rendering of QA analyses
"""
from datetime import datetime
from typing import List

from issue_qa_mcp.models import IssueComment, IssueData, QAAnalysis

MAX_COMMENTS_SHOWN = 3

NO_ACCEPTANCE_CRITERIA = (
    "No se encontraron criterios de aceptación explícitos. Revisar descripción del issue."
)
NO_RISK_AREAS = "No se identificaron áreas de riesgo específicas."
NO_DESCRIPTION = "Sin descripción proporcionada"
FOOTER = "*Análisis generado automáticamente por Issue QA MCP Server*"


def _numbered(items: List[str]) -> str:
    return "\n".join(f"{index}. {item}" for index, item in enumerate(items, 1))


def format_comment_date(timestamp: str) -> str:
    """Render an ISO-8601 timestamp as a short es-ES date (d/m/yyyy)"""
    try:
        parsed = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
    except (AttributeError, ValueError):
        return timestamp or ""
    return f"{parsed.day}/{parsed.month}/{parsed.year}"


def _format_comments(comments: List[IssueComment]) -> str:
    shown = comments[:MAX_COMMENTS_SHOWN]
    rendered = "\n---\n".join(
        f"**{comment.author}** ({format_comment_date(comment.created_at)}):\n{comment.body}\n"
        for comment in shown
    )
    section = f"## 💬 Comentarios Relevantes ({len(comments)})\n{rendered}"
    if len(comments) > MAX_COMMENTS_SHOWN:
        section += f"\n*(Mostrando {MAX_COMMENTS_SHOWN} de {len(comments)} comentarios)*"
    return section


def format_qa_analysis(issue_data: IssueData, qa_analysis: QAAnalysis, comments: List[IssueComment]) -> str:
    """Render the complete QA report for one issue"""
    assignees = ", ".join(issue_data.assignees) if issue_data.assignees else "Sin asignar"
    labels = ", ".join(issue_data.labels) if issue_data.labels else "Sin etiquetas"

    if qa_analysis.acceptance_criteria:
        criteria = _numbered(qa_analysis.acceptance_criteria)
    else:
        criteria = NO_ACCEPTANCE_CRITERIA

    risks = _numbered(qa_analysis.risk_areas) if qa_analysis.risk_areas else NO_RISK_AREAS
    comments_section = _format_comments(comments) if comments else ""

    sections = [
        "# 📋 Análisis QA Completo",
        "## 📄 Información del Issue\n"
        f"**Proyecto:** {issue_data.project_name}\n"
        f"**Issue:** #{issue_data.iid} - {issue_data.title}\n"
        f"**Estado:** {issue_data.state}\n"
        f"**Autor:** {issue_data.author}\n"
        f"**Asignados:** {assignees}\n"
        f"**Etiquetas:** {labels}\n"
        f"**URL:** {issue_data.web_url}",
        f"## 🎯 Requerimientos Identificados\n{_numbered(qa_analysis.requirements)}",
        f"## ✅ Criterios de Aceptación\n{criteria}",
        f"## 🧪 Sugerencias de Testing\n{_numbered(qa_analysis.testing_suggestions)}",
        f"## ⚠️ Áreas de Riesgo Identificadas\n{risks}",
        f"## 🔬 Tipos de Testing Recomendados\n{_numbered(qa_analysis.test_types)}",
        f"## 📝 Descripción Original del Issue\n{issue_data.description or NO_DESCRIPTION}",
        comments_section,
        f"---\n{FOOTER}",
    ]
    return "\n\n".join(sections)


def format_qa_summary(issue_data: IssueData, qa_analysis: QAAnalysis, location: str) -> str:
    """Short executive summary; location is e.g. '**Repositorio:** owner/repo'"""
    return (
        f"🔍 **Resumen QA - Issue #{issue_data.iid}**\n\n"
        f"{location}\n"
        f"**Título:** {issue_data.title}\n"
        f"**Estado:** {issue_data.state}\n\n"
        f"**Requerimientos identificados:** {len(qa_analysis.requirements)}\n"
        f"**Criterios de aceptación:** {len(qa_analysis.acceptance_criteria)}\n"
        f"**Sugerencias de testing:** {len(qa_analysis.testing_suggestions)}\n"
        f"**Áreas de riesgo:** {len(qa_analysis.risk_areas)}\n"
        f"**Tipos de testing:** {', '.join(qa_analysis.test_types)}"
    )
