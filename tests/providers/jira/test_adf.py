from __future__ import annotations

from tdsync.providers.jira.adf import DocNode, adf_to_text, text_to_adf


def test_text_to_adf_builds_one_paragraph_per_block() -> None:
    payload = text_to_adf("First line\n\n  Second  \n\n\n\n").to_payload()

    assert payload == {
        "version": 1,
        "type": "doc",
        "content": [
            {"type": "paragraph", "content": [{"type": "text", "text": "First line"}]},
            {"type": "paragraph", "content": [{"type": "text", "text": "Second"}]},
        ],
    }


def test_text_to_adf_of_empty_text_is_an_empty_doc() -> None:
    assert text_to_adf("").to_payload() == {"version": 1, "type": "doc", "content": []}


def test_adf_to_text_joins_top_level_blocks_with_blank_line() -> None:
    raw = {
        "type": "doc",
        "version": 1,
        "content": [
            {
                "type": "paragraph",
                "content": [{"type": "text", "text": "Hello "}, {"type": "text", "text": "world"}],
            },
            {"type": "bulletList", "content": [{"type": "listItem", "content": [{"type": "text", "text": "item"}]}]},
        ],
    }

    assert adf_to_text(raw) == "Hello world\n\nitem"


def test_adf_to_text_accepts_strings_nodes_and_junk() -> None:
    assert adf_to_text(None) == ""
    assert adf_to_text("plain description") == "plain description"
    assert adf_to_text(text_to_adf("a\n\nb")) == "a\n\nb"
    assert adf_to_text({"type": "doc", "content": None}) == ""
    assert adf_to_text(["not", "a", "doc"]) == ""


def test_doc_node_ignores_unknown_attributes() -> None:
    node = DocNode.model_validate({"type": "text", "text": "x", "marks": [{"type": "strong"}]})

    assert node.to_payload() == {"type": "text", "text": "x"}
