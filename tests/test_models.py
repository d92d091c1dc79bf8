"""Tests for Pydantic models."""

import json

import pytest
from pydantic import ValidationError

from app.docstruct.models import (
    DocumentDetails,
    ParagraphItem,
    SaveDocumentRequest,
    Section,
    StructuredTableItem,
    TableItem,
)
from app.docstruct.services.document_store import (
    parse_structured_content,
    serialize_structured_content,
    structured_content_text,
)


class TestContentItems:
    """Tests for the content item variants."""

    def test_section_content_is_discriminated_by_type(self):
        section = Section.model_validate(
            {
                "heading": "1. Intro",
                "content": [
                    {"type": "paragraph", "text": "Hello"},
                    {"type": "table", "data": ["a", "b"]},
                    {
                        "type": "structured_table",
                        "tableIndex": 0,
                        "headers": ["h"],
                        "rows": [["r"]],
                    },
                ],
            }
        )
        assert isinstance(section.content[0], ParagraphItem)
        assert isinstance(section.content[1], TableItem)
        assert isinstance(section.content[2], StructuredTableItem)
        assert section.content[2].table_index == 0

    def test_unknown_item_type_rejected(self):
        with pytest.raises(ValidationError):
            Section.model_validate(
                {"heading": "x", "content": [{"type": "image", "src": "a.png"}]}
            )

    def test_structured_table_dumps_alias(self):
        item = StructuredTableItem(table_index=2, headers=["a"], rows=[["1"]])
        assert item.model_dump(by_alias=True) == {
            "type": "structured_table",
            "tableIndex": 2,
            "headers": ["a"],
            "rows": [["1"]],
        }

    def test_rows_may_differ_from_header_width(self):
        item = StructuredTableItem(table_index=0, headers=["a", "b"], rows=[["1"]])
        assert item.rows == [["1"]]

    def test_extra_keys_survive_serialization(self):
        section = Section.model_validate(
            {
                "heading": "x",
                "collapsed": True,
                "content": [{"type": "paragraph", "text": "y", "style": "bold"}],
            }
        )
        assert json.loads(serialize_structured_content([section])) == [
            {
                "heading": "x",
                "collapsed": True,
                "content": [{"type": "paragraph", "text": "y", "style": "bold"}],
            }
        ]


class TestSaveDocumentRequest:
    """Tests for the save request body."""

    def test_accepts_sections(self):
        request = SaveDocumentRequest.model_validate(
            {"data": [{"heading": "Untitled Section", "content": []}]}
        )
        assert isinstance(request.data[0], Section)

    def test_accepts_flat_paragraphs(self):
        request = SaveDocumentRequest.model_validate(
            {"data": [{"type": "paragraph", "text": "docx line"}]}
        )
        assert isinstance(request.data[0], ParagraphItem)

    def test_rejects_non_array(self):
        with pytest.raises(ValidationError):
            SaveDocumentRequest.model_validate({"data": {"heading": "x"}})

    def test_rejects_missing_data(self):
        with pytest.raises(ValidationError):
            SaveDocumentRequest.model_validate({})

    def test_accepts_serialized_array(self):
        payload = json.dumps([{"heading": "1. Intro", "content": [{"type": "paragraph", "text": "x"}]}])
        request = SaveDocumentRequest.model_validate({"data": payload})
        assert isinstance(request.data[0], Section)
        assert request.data[0].content == [ParagraphItem(text="x")]

    def test_rejects_serialized_non_json(self):
        with pytest.raises(ValidationError):
            SaveDocumentRequest.model_validate({"data": "not json"})

    def test_rejects_serialized_object(self):
        with pytest.raises(ValidationError):
            SaveDocumentRequest.model_validate({"data": json.dumps({"heading": "x"})})


class TestStructuredContentSerialization:
    """Tests for storing and loading structured content."""

    def test_serialize_then_parse_preserves_order(self):
        blocks = [
            Section(heading="B", content=[ParagraphItem(text="2"), ParagraphItem(text="1")]),
            Section(heading="A"),
        ]
        data = parse_structured_content(serialize_structured_content(blocks))
        assert [s["heading"] for s in data] == ["B", "A"]
        assert [i["text"] for i in data[0]["content"]] == ["2", "1"]

    def test_malformed_json_is_empty(self):
        assert parse_structured_content("{not json") == []

    def test_non_array_json_is_empty(self):
        assert parse_structured_content(json.dumps({"heading": "x"})) == []

    def test_missing_content_is_empty(self):
        assert parse_structured_content(None) == []
        assert parse_structured_content("") == []

    def test_content_text_returns_stored_blob(self):
        raw = json.dumps([{"heading": "A", "content": []}])
        assert structured_content_text(raw) == raw

    def test_content_text_replaces_malformed_blob(self):
        assert structured_content_text("{broken") == "[]"
        assert structured_content_text(json.dumps({"a": 1})) == "[]"
        assert structured_content_text(None) == "[]"


class TestDocumentDetails:
    def test_dumps_camel_case(self):
        details = DocumentDetails(id=1, file_url="/uploads/1-a.pdf", data="[]", file_type="pdf")
        assert details.model_dump(by_alias=True) == {
            "id": 1,
            "fileUrl": "/uploads/1-a.pdf",
            "data": "[]",
            "fileType": "pdf",
        }
