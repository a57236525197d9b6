"""Diagnostic emitter: turns final complaints into ordered Finding records."""

from dataclasses import dataclass, field

from i18nlint.models.findings import Finding
from i18nlint.syntax.nodes import SyntaxNode

MESSAGES: dict[str, str] = {
    "literal": "Forbidden literal string {string} in {code}.",
    "property": "Forbidden literal assigned to property: {code}",
    "attribute": (
        "Forbidden literal string {string} as value for attribute '{attribute}' "
        "for tag '{tag}' in {code}"
    ),
    "placeholder": (
        "Forbidden template literal placeholder ${{}} in translation string, "
        "use {{{{}}}} instead: {code}"
    ),
    "text": "Forbidden text content {string}",
}


@dataclass
class Complaint:
    """A candidate finding: message id plus the data it is rendered with."""

    message_id: str
    data: dict[str, str] = field(default_factory=dict)

    def render(self) -> str:
        return MESSAGES[self.message_id].format(**self.data)


class DiagnosticEmitter:
    """Collects one finding per violating node, in traversal order."""

    def __init__(self) -> None:
        self.findings: list[Finding] = []

    def emit(self, node: SyntaxNode, complaint: Complaint) -> Finding:
        finding = Finding(
            message_id=complaint.message_id,
            message=complaint.render(),
            data=dict(complaint.data),
            position=node.span,
        )
        self.findings.append(finding)
        return finding
