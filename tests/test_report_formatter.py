"""Tests for the Markdown report formatter."""

from issue_qa_mcp.models import IssueData, QAAnalysis
from issue_qa_mcp.report_formatter import (
    FOOTER,
    NO_ACCEPTANCE_CRITERIA,
    NO_DESCRIPTION,
    NO_RISK_AREAS,
    format_comment_date,
    format_qa_analysis,
    format_qa_summary,
)


def _analysis(**overrides) -> QAAnalysis:
    values = dict(
        requirements=["Implementar: algo"],
        acceptance_criteria=[],
        testing_suggestions=["Probar A", "Probar B"],
        risk_areas=[],
        test_types=["Testing Funcional", "Testing de Regresión"],
    )
    values.update(overrides)
    return QAAnalysis(**values)


class TestFormatQAAnalysis:
    """Test the complete QA report."""

    def test_header_block(self, issue_data: IssueData) -> None:
        """Test the identification block lists the issue metadata."""
        report = format_qa_analysis(issue_data, _analysis(), [])

        assert report.startswith("# 📋 Análisis QA Completo")
        assert "**Proyecto:** portal" in report
        assert "**Issue:** #42 - Implementar login con Google OAuth" in report
        assert "**Estado:** opened" in report
        assert "**Autor:** carol" in report
        assert "**Asignados:** alice, bob" in report
        assert "**Etiquetas:** security, feature" in report
        assert "**URL:** https://gitlab.com/acme/portal/-/issues/42" in report
        assert report.endswith(FOOTER)

    def test_unassigned_and_unlabeled(self) -> None:
        """Test empty assignees and labels render their placeholders."""
        report = format_qa_analysis(IssueData(title="T"), _analysis(), [])

        assert "**Asignados:** Sin asignar" in report
        assert "**Etiquetas:** Sin etiquetas" in report
        assert NO_DESCRIPTION in report

    def test_empty_acceptance_criteria_fallback(self, issue_data: IssueData) -> None:
        """Test empty criteria render the fallback sentence."""
        report = format_qa_analysis(issue_data, _analysis(), [])
        assert f"## ✅ Criterios de Aceptación\n{NO_ACCEPTANCE_CRITERIA}" in report

    def test_acceptance_criteria_numbered_in_order(self, issue_data: IssueData) -> None:
        """Test criteria render as a 1-based list in input order."""
        report = format_qa_analysis(issue_data, _analysis(acceptance_criteria=["second", "first"]), [])

        assert "## ✅ Criterios de Aceptación\n1. second\n2. first" in report
        assert NO_ACCEPTANCE_CRITERIA not in report

    def test_risk_areas(self, issue_data: IssueData) -> None:
        """Test risk areas list and fallback."""
        assert NO_RISK_AREAS in format_qa_analysis(issue_data, _analysis(), [])

        report = format_qa_analysis(issue_data, _analysis(risk_areas=["Pagos"]), [])
        assert "## ⚠️ Áreas de Riesgo Identificadas\n1. Pagos" in report
        assert NO_RISK_AREAS not in report

    def test_section_order(self, issue_data: IssueData) -> None:
        """Test sections appear in the fixed order."""
        report = format_qa_analysis(issue_data, _analysis(), [])
        headings = [
            "## 📄 Información del Issue",
            "## 🎯 Requerimientos Identificados",
            "## ✅ Criterios de Aceptación",
            "## 🧪 Sugerencias de Testing",
            "## ⚠️ Áreas de Riesgo Identificadas",
            "## 🔬 Tipos de Testing Recomendados",
            "## 📝 Descripción Original del Issue",
        ]
        positions = [report.index(heading) for heading in headings]
        assert positions == sorted(positions)

    def test_description_is_verbatim(self, issue_data: IssueData) -> None:
        """Test the original description is included unchanged."""
        report = format_qa_analysis(issue_data, _analysis(), [])
        assert issue_data.description in report

    def test_no_comments_section_without_comments(self, issue_data: IssueData) -> None:
        """Test the comments section is omitted for an empty list."""
        report = format_qa_analysis(issue_data, _analysis(), [])
        assert "Comentarios Relevantes" not in report

    def test_five_comments_show_three_with_note(self, issue_data: IssueData, make_comments) -> None:
        """Test only the first three comments render, followed by the count note."""
        report = format_qa_analysis(issue_data, _analysis(), make_comments(5))

        assert "## 💬 Comentarios Relevantes (5)" in report
        for i in (1, 2, 3):
            assert f"comment body {i}" in report
        assert "comment body 4" not in report
        assert "comment body 5" not in report
        assert "*(Mostrando 3 de 5 comentarios)*" in report
        assert "**user1** (1/1/2024):\ncomment body 1\n\n---\n**user2**" in report

    def test_two_comments_have_no_note(self, issue_data: IssueData, make_comments) -> None:
        """Test short comment lists render fully without the note."""
        report = format_qa_analysis(issue_data, _analysis(), make_comments(2))

        assert "comment body 1" in report
        assert "comment body 2" in report
        assert "Mostrando" not in report


class TestFormatQASummary:
    """Test the short QA summary."""

    def test_summary_counts(self, issue_data: IssueData) -> None:
        """Test the summary shows counts and joined test types."""
        analysis = _analysis(acceptance_criteria=["a", "b"], risk_areas=["r"])
        summary = format_qa_summary(issue_data, analysis, "**Repositorio:** acme/portal")

        assert summary.startswith("🔍 **Resumen QA - Issue #42**")
        assert "**Repositorio:** acme/portal" in summary
        assert "**Requerimientos identificados:** 1" in summary
        assert "**Criterios de aceptación:** 2" in summary
        assert "**Sugerencias de testing:** 2" in summary
        assert "**Áreas de riesgo:** 1" in summary
        assert summary.endswith("**Tipos de testing:** Testing Funcional, Testing de Regresión")


class TestFormatCommentDate:
    """Test comment date rendering."""

    def test_iso_timestamp(self) -> None:
        """Test ISO timestamps render as d/m/yyyy."""
        assert format_comment_date("2024-03-05T10:20:30Z") == "5/3/2024"
        assert format_comment_date("2023-12-25T23:00:00.123+00:00") == "25/12/2023"

    def test_unparseable_value_is_kept(self) -> None:
        """Test unparseable values are returned as-is."""
        assert format_comment_date("yesterday") == "yesterday"
        assert format_comment_date("") == ""
