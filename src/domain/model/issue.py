# domain/model/issue.py

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from domain.model.errors import UnknownTemplateError, ValidationError


class FieldType(str, Enum):
    """How a template field contributes to the issue body."""
    MARKDOWN = 'markdown'
    TEXTAREA = 'textarea'
    INPUT = 'input'


@dataclass(frozen=True)
class TemplateField:
    """A single section of an issue template."""
    id: str
    label: str
    type: FieldType
    required: bool = False
    value: str = ''

    @property
    def display_label(self) -> str:
        return self.label if self.label.strip() else self.id


@dataclass(frozen=True)
class IssueTemplate:
    """Issue form definition: default title, GitHub labels and body fields."""
    id: str
    title: str
    labels: tuple[str, ...]
    body: tuple[TemplateField, ...]

    def render_body(self, fields: dict[str, str]) -> str:
        """Render submitted field values into the Markdown issue body.

        Raises:
            ValidationError: if a required field is missing or blank.
        """
        sections: list[str] = []
        for template_field in self.body:
            if template_field.type == FieldType.MARKDOWN:
                if template_field.value.strip():
                    sections.append(template_field.value)
                continue

            value = (fields.get(template_field.id) or '').strip()
            if not value:
                if template_field.required:
                    raise ValidationError(
                        f"Field '{template_field.display_label}' is required"
                    )
                continue
            sections.append(f"### {template_field.display_label}\n{value}")

        return "\n\n".join(sections).strip()


# ── Submission / result DTOs ─────────────────────────────


@dataclass(frozen=True)
class IssueDraft:
    """Validated issue ready to be sent to the tracker."""
    template_id: str
    title: str
    labels: tuple[str, ...]
    body: str


@dataclass(frozen=True)
class CreatedIssue:
    """Issue as reported back by the tracker."""
    number: int
    html_url: str
    node_id: str


@dataclass(frozen=True)
class SubmissionResult:
    """Outcome of an intake submission.

    ``project_error`` is set when the issue exists but could not be linked
    to the project board.
    """
    issue: CreatedIssue
    project_error: str | None = None

    @property
    def linked_to_project(self) -> bool:
        return self.project_error is None


# ── Template registry ────────────────────────────────────
# Labels must match the GitHub board exactly, including spacing quirks.

TEMPLATES: dict[str, IssueTemplate] = {
    "blank": IssueTemplate(
        id="blank",
        title="[ISSUE] Título",
        labels=("Status: Ideas", "Tipo :Blank Issue"),
        body=(
            TemplateField(
                id="descripcion",
                label="Descripción",
                type=FieldType.TEXTAREA,
                value="**Contexto**\n-\n\n**Detalles**\n-\n\n**Criterio de aceptación**\n-",
            ),
        ),
    ),
    "bug": IssueTemplate(
        id="bug",
        title="fix: <resumen>",
        labels=("Tipo: Bug", "Status :En planeación"),
        body=(
            TemplateField("summary", "Resumen", FieldType.INPUT, required=True),
            TemplateField("steps", "Pasos para reproducir", FieldType.TEXTAREA, required=True),
            TemplateField("expected", "Comportamiento esperado", FieldType.TEXTAREA, required=True),
            TemplateField("actual", "Comportamiento actual", FieldType.TEXTAREA, required=True),
            TemplateField("env", "Entorno", FieldType.TEXTAREA),
            TemplateField("logs", "Logs/evidencia", FieldType.TEXTAREA),
        ),
    ),
    "change_request": IssueTemplate(
        id="change_request",
        title="chore: change-request <resumen>",
        labels=("Tipo: Change Request", "Status: Ideas"),
        body=(
            TemplateField(
                id="intro",
                label="",
                type=FieldType.MARKDOWN,
                value="Describe el cambio propuesto y el impacto (tiempo, costo, riesgo). Será evaluado.",
            ),
            TemplateField("description", "Descripción del cambio", FieldType.TEXTAREA, required=True),
            TemplateField("impact", "Impacto (alcance/tiempo/costo/riesgo)", FieldType.TEXTAREA, required=True),
            TemplateField("requester", "Solicitante", FieldType.INPUT, required=True),
        ),
    ),
    "feature": IssueTemplate(
        id="feature",
        title="[FEAT] Título de la feature",
        labels=("Tipo: Feature", "Status: Ideas"),
        body=(
            TemplateField("descripcion", "Descripción", FieldType.TEXTAREA, required=True),
            TemplateField("criterio", "Criterio de aceptación (resumen)", FieldType.INPUT, required=True),
        ),
    ),
}


def get_template(template_id: str) -> IssueTemplate:
    """Look up a template by id.

    Raises:
        UnknownTemplateError: if no template has this id.
    """
    template = TEMPLATES.get(template_id)
    if template is None:
        raise UnknownTemplateError(template_id)
    return template
