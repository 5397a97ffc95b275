"""Default diagram renderer for ``mermaid`` project components.

The browser draws the final SVG; on the server we only check that the source
opens with a diagram declaration mermaid understands, so obviously broken
diagrams surface as an inline error instead of an empty box.
"""

import re

DIAGRAM_KEYWORDS = (
    "graph",
    "flowchart",
    "sequenceDiagram",
    "classDiagram",
    "stateDiagram",
    "stateDiagram-v2",
    "erDiagram",
    "journey",
    "gantt",
    "pie",
    "quadrantChart",
    "requirementDiagram",
    "gitGraph",
    "mindmap",
    "timeline",
    "sankey-beta",
    "xychart-beta",
    "block-beta",
    "C4Context",
)

_FRONTMATTER = re.compile(r"\A\s*---\n.*?\n---\s*\n", re.DOTALL)


class DiagramSyntaxError(ValueError):
    pass


def _first_statement(source: str) -> str:
    body = _FRONTMATTER.sub("", source, count=1)
    for line in body.splitlines():
        stripped = line.strip()
        # %% starts a comment or an init directive
        if stripped and not stripped.startswith("%%"):
            return stripped
    return ""


def validate_mermaid(source: str) -> str:
    """Return the diagram source unchanged, or raise DiagramSyntaxError."""
    if not isinstance(source, str) or not source.strip():
        raise DiagramSyntaxError("Diagram is empty")
    first = _first_statement(source)
    if not first:
        raise DiagramSyntaxError("Diagram has no statements")
    keyword = first.split()[0].rstrip(":;")
    if keyword not in DIAGRAM_KEYWORDS:
        raise DiagramSyntaxError(f"Unknown diagram type '{keyword}'")
    return source
