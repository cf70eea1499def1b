"""
Heuristic QA analyzer for issues

Turns an issue's title and description into requirements, acceptance criteria,
testing suggestions, risk areas and recommended test types. Every extractor is
an ordered list of independent rules; rule order and length thresholds decide
the output order, so they must not be reshuffled.
"""
import logging
import re
from dataclasses import dataclass
from typing import Iterable, List, Pattern, Tuple

from issue_qa_mcp.models import IssueData, QAAnalysis

logger = logging.getLogger(__name__)

# Extraction patterns run over the original-case description
_SCAN_FLAGS = re.IGNORECASE | re.DOTALL


@dataclass(frozen=True)
class CaptureRule:
    """Collects the first capture group of every match longer than min_length"""
    name: str
    pattern: Pattern
    min_length: int

    def __call__(self, text: str) -> List[str]:
        found = []
        for match in self.pattern.finditer(text):
            captured = match.group(1).strip()
            if len(captured) > self.min_length:
                found.append(captured)
        return found


@dataclass(frozen=True)
class KeywordRule:
    """Yields all suggestions when any keyword is a substring of the text"""
    name: str
    keywords: Tuple[str, ...]
    suggestions: Tuple[str, ...]

    def __call__(self, text: str) -> List[str]:
        if any(keyword in text for keyword in self.keywords):
            return list(self.suggestions)
        return []


@dataclass(frozen=True)
class FlagRule:
    """Yields a single message when the pattern is found in the text"""
    pattern: Pattern
    message: str

    @property
    def name(self) -> str:
        return self.message

    def __call__(self, text: str) -> List[str]:
        return [self.message] if self.pattern.search(text) else []


REQUIREMENT_RULES = (
    CaptureRule(
        "requirement_section",
        re.compile(r"(?:requisito|requerimiento|requirement)s?[:\-\s]*(.*?)(?:\n\n|\n[A-Z]|\Z)", _SCAN_FLAGS),
        10,
    ),
    CaptureRule(
        "modal_statement",
        re.compile(r"(?:necesita|debe|should|must)[:\-\s]*(.*?)(?:\n|\.|\Z)", _SCAN_FLAGS),
        10,
    ),
    CaptureRule(
        "user_story",
        re.compile(r"(?:como|as a).*?(?:quiero|want|need).*?(?:para|so that)(.*?)(?:\n|\.|\Z)", _SCAN_FLAGS),
        10,
    ),
)

ACCEPTANCE_CRITERIA_RULES = (
    CaptureRule(
        "criteria_section",
        re.compile(
            r"(?:criterios? de aceptaci[oó]n|acceptance criteria)[:\-\s]*((?:.*\n)*?)(?:\n[A-Z]|\n\n|\Z)",
            _SCAN_FLAGS,
        ),
        5,
    ),
    CaptureRule(
        "given_when_then",
        re.compile(r"(?:dado|given).*?(?:cuando|when).*?(?:entonces|then)(.*?)(?:\n|\.|\Z)", _SCAN_FLAGS),
        5,
    ),
    # Bullets are matched case-sensitively and line by line
    CaptureRule("bullet", re.compile(r"[-*]\s*(.+?)(?:\n|\Z)"), 5),
)

TESTING_SUGGESTION_RULES = (
    KeywordRule(
        "auth",
        ("login", "auth", "password", "usuario"),
        (
            "Verificar login con credenciales válidas",
            "Verificar error con credenciales inválidas",
            "Verificar logout funciona correctamente",
            "Probar casos de seguridad (inyección, XSS)",
        ),
    ),
    KeywordRule(
        "forms",
        ("form", "formulario", "input", "campo"),
        (
            "Validar todos los campos obligatorios",
            "Probar validaciones de formato",
            "Verificar mensajes de error apropiados",
            "Probar envío con datos válidos e inválidos",
        ),
    ),
    KeywordRule(
        "api",
        ("api", "endpoint", "service"),
        (
            "Probar respuestas con datos válidos",
            "Verificar manejo de errores HTTP",
            "Validar estructura de respuestas JSON",
            "Probar autenticación y autorización",
        ),
    ),
    KeywordRule(
        "ui",
        ("ui", "interfaz", "button", "botón"),
        (
            "Verificar diseño responsive",
            "Probar accesibilidad (WCAG)",
            "Validar navegación entre pantallas",
            "Verificar estados de loading y error",
        ),
    ),
    KeywordRule(
        "data",
        ("database", "datos", "guardar", "save"),
        (
            "Verificar persistencia de datos",
            "Probar integridad referencial",
            "Validar rollback en errores",
            "Probar concurrencia de acceso",
        ),
    ),
)

UNIVERSAL_SUGGESTIONS = (
    "Verificar que el cambio no rompe funcionalidad existente",
    "Probar en diferentes navegadores/dispositivos",
    "Validar performance bajo carga normal",
    "Revisar logs de errores durante las pruebas",
)

RISK_RULES = (
    FlagRule(re.compile(r"security|seguridad|auth|password"), "Seguridad - requiere testing exhaustivo"),
    FlagRule(re.compile(r"payment|pago|billing|facturación"), "Pagos - crítico para el negocio"),
    FlagRule(re.compile(r"data|datos|database"), "Integridad de datos - riesgo de pérdida"),
    FlagRule(re.compile(r"migration|migración"), "Migración - riesgo de downtime"),
    FlagRule(re.compile(r"integration|integración|third.party"), "Integraciones externas - dependencias"),
    FlagRule(re.compile(r"performance|rendimiento"), "Performance - impacto en UX"),
)

CRITICAL_LABELS = frozenset(["critical", "crítico", "high-priority", "security", "bug"])
HIGH_PRIORITY_RISK = "Alta prioridad - requiere testing completo antes de release"

TEST_TYPE_RULES = (
    FlagRule(re.compile(r"unit|unitario"), "Testing Unitario"),
    FlagRule(re.compile(r"integration|integración"), "Testing de Integración"),
    FlagRule(re.compile(r"ui|interfaz|frontend"), "Testing de UI/UX"),
    FlagRule(re.compile(r"api|service|backend"), "Testing de API"),
    FlagRule(re.compile(r"performance|rendimiento"), "Testing de Performance"),
    FlagRule(re.compile(r"security|seguridad"), "Testing de Seguridad"),
    FlagRule(re.compile(r"mobile|móvil"), "Testing Mobile"),
    FlagRule(re.compile(r"accessibility|accesibilidad"), "Testing de Accesibilidad"),
)

BASELINE_TEST_TYPES = ("Testing Funcional", "Testing de Regresión")


def unique_in_order(items: Iterable[str]) -> List[str]:
    """Drop duplicates, keeping the first occurrence of each item"""
    seen = []
    for item in items:
        if item not in seen:
            seen.append(item)
    return seen


def _run_rules(rules, text: str) -> List[str]:
    results = []
    for rule in rules:
        hits = rule(text)
        if hits:
            logger.debug(f"Rule {rule.name!r} matched {len(hits)} time(s)")
        results.extend(hits)
    return results


def build_full_text(issue_data: IssueData) -> str:
    """Lower-cased title and description joined by a space, used by keyword matchers"""
    return f"{(issue_data.title or '').lower()} {(issue_data.description or '').lower()}"


def extract_requirements(issue_data: IssueData) -> List[str]:
    """Requirement statements from the description, or one synthetic entry built from the title"""
    requirements = _run_rules(REQUIREMENT_RULES, issue_data.description or "")
    if not requirements:
        requirements.append(f"Implementar: {issue_data.title}")
    return requirements


def extract_acceptance_criteria(issue_data: IssueData) -> List[str]:
    return _run_rules(ACCEPTANCE_CRITERIA_RULES, issue_data.description or "")


def generate_testing_suggestions(issue_data: IssueData, full_text: str) -> List[str]:
    suggestions = _run_rules(TESTING_SUGGESTION_RULES, full_text)
    suggestions.extend(UNIVERSAL_SUGGESTIONS)
    return unique_in_order(suggestions)


def identify_risk_areas(full_text: str, labels: List[str]) -> List[str]:
    risks = _run_rules(RISK_RULES, full_text)
    if any(label.lower() in CRITICAL_LABELS for label in labels or []):
        risks.append(HIGH_PRIORITY_RISK)
    return risks


def determine_test_types(full_text: str, labels: List[str]) -> List[str]:
    # labels are accepted for interface parity only; test types come from the text
    test_types = _run_rules(TEST_TYPE_RULES, full_text)
    test_types.extend(BASELINE_TEST_TYPES)
    return unique_in_order(test_types)


def analyze_issue_for_qa(issue_data: IssueData) -> QAAnalysis:
    """Run every extractor over the issue. Never raises for well-formed IssueData."""
    full_text = build_full_text(issue_data)

    analysis = QAAnalysis(
        requirements=extract_requirements(issue_data),
        acceptance_criteria=extract_acceptance_criteria(issue_data),
        testing_suggestions=generate_testing_suggestions(issue_data, full_text),
        risk_areas=identify_risk_areas(full_text, issue_data.labels),
        test_types=determine_test_types(full_text, issue_data.labels),
    )

    logger.debug(
        f"QA analysis for #{issue_data.iid}: {len(analysis.requirements)} requirements, "
        f"{len(analysis.acceptance_criteria)} criteria, {len(analysis.risk_areas)} risks"
    )
    return analysis
