"""Conversion between plain text and Atlassian Document Format (ADF).

Only the subset needed for issue descriptions is modelled: a ``doc`` of
``paragraph`` nodes holding ``text`` nodes. Unknown node types are kept in
the tree and walked for their text.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

ADF_VERSION = 1
PARAGRAPH_SEPARATOR = "\n\n"


class DocNode(BaseModel):
    model_config = ConfigDict(extra="ignore")

    type: str = ""
    text: str | None = None
    content: list[DocNode] = Field(default_factory=list)

    @field_validator("content", mode="before")
    @classmethod
    def content_not_null(cls, value: Any) -> Any:
        return [] if value is None else value

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the JSON shape Jira expects."""
        if self.type == "text":
            return {"type": "text", "text": self.text or ""}
        payload: dict[str, Any] = {"type": self.type, "content": [child.to_payload() for child in self.content]}
        if self.type == "doc":
            payload = {"version": ADF_VERSION, **payload}
        return payload


DocNode.model_rebuild()


def text_to_adf(text: str) -> DocNode:
    """Build a document with one paragraph per non-empty blank-line-separated chunk."""
    paragraphs = []
    for chunk in text.split(PARAGRAPH_SEPARATOR):
        chunk = chunk.strip()
        if not chunk:
            continue
        paragraphs.append(DocNode(type="paragraph", content=[DocNode(type="text", text=chunk)]))
    return DocNode(type="doc", content=paragraphs)


def adf_to_text(raw: Any) -> str:
    """Extract plain text from an ADF description.

    A plain string description is returned unchanged; anything that is not a
    recognizable document yields ``""``.
    """
    if raw is None:
        return ""
    if isinstance(raw, str):
        return raw
    if isinstance(raw, DocNode):
        node = raw
    else:
        try:
            node = DocNode.model_validate(raw)
        except ValidationError:
            return ""

    parts: list[str] = []
    _extract_text(node, parts)
    return "".join(parts).strip()


def _extract_text(node: DocNode, parts: list[str]) -> None:
    if node.type == "text":
        if node.text:
            parts.append(node.text)
        return

    last = len(node.content) - 1
    for index, child in enumerate(node.content):
        _extract_text(child, parts)
        # Only top-level blocks of the document are separated by a blank line.
        if node.type == "doc" and index < last:
            parts.append(PARAGRAPH_SEPARATOR)
