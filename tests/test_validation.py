"""Tests for response validation."""

import pytest

from smartform.models.field_definitions import FormField, default_options
from smartform.models.form_schema import FormSchema
from smartform.models.submission import FileUpload
from smartform.validation import is_valid_email, validate_response


def _schema(*fields: FormField) -> FormSchema:
    return FormSchema(title="T", fields=list(fields))


class TestEmailPattern:
    @pytest.mark.parametrize("value", ["a@b.com", "x@y.co.uk", "first.last@example.org"])
    def test_valid(self, value):
        assert is_valid_email(value)

    @pytest.mark.parametrize("value", ["abc", "a@b", "@b.com", "a@.com"])
    def test_invalid(self, value):
        assert not is_valid_email(value)


class TestRequired:
    """Tests for required-field checks."""

    def test_required_text_empty(self):
        schema = _schema(FormField(id="name", type="text", label="Name", required=True))
        result = validate_response(schema, {"name": ""})
        assert result.to_error_dict() == {"name": "Required"}
        assert result.error_count == 1

    def test_required_text_missing(self):
        schema = _schema(FormField(id="name", type="text", label="Name", required=True))
        assert validate_response(schema, {}).to_error_dict() == {"name": "Required"}

    def test_required_checkbox_empty_selection(self):
        schema = _schema(
            FormField(id="topics", type="checkbox", label="Topics", required=True, options=default_options())
        )
        assert validate_response(schema, {"topics": []}).to_error_dict() == {"topics": "Required"}
        assert validate_response(schema, {"topics": ["option1"]}).is_valid

    @pytest.mark.parametrize("value", ["", None, ()])
    def test_required_checkbox_blank_scalar(self, value):
        """A blank raw value is an empty selection, not a selection of one."""
        schema = _schema(
            FormField(id="topics", type="checkbox", label="Topics", required=True, options=default_options())
        )
        assert validate_response(schema, {"topics": value}).to_error_dict() == {"topics": "Required"}
        assert validate_response(schema, {"topics": "option1"}).is_valid

    def test_optional_empty_field(self):
        schema = _schema(
            FormField(id="name", type="text", label="Name"),
            FormField(id="topics", type="checkbox", label="Topics", options=default_options()),
        )
        assert validate_response(schema, {"name": "", "topics": []}).is_valid

    def test_zero_counts_as_present(self):
        schema = _schema(FormField(id="age", type="number", label="Age", required=True))
        assert validate_response(schema, {"age": 0}).is_valid

    def test_required_file(self):
        schema = _schema(FormField(id="cv", type="file", label="CV", required=True))
        upload = FileUpload(filename="cv.pdf", content=b"%PDF", content_type="application/pdf")
        assert validate_response(schema, {}).to_error_dict() == {"cv": "Required"}
        assert validate_response(schema, {"cv": upload}).is_valid

    def test_errors_follow_field_order(self):
        schema = _schema(
            FormField(id="b", type="text", label="B", required=True),
            FormField(id="a", type="text", label="A", required=True),
        )
        result = validate_response(schema, {})
        assert [e.field_id for e in result.errors] == ["b", "a"]


class TestEmailScenario:
    """A required email field through its three states."""

    @pytest.fixture
    def schema(self):
        return _schema(FormField(id="f1", type="email", label="Email", required=True))

    def test_missing(self, schema):
        assert validate_response(schema, {}).to_error_dict() == {"f1": "Required"}

    def test_no_dot_suffix(self, schema):
        assert validate_response(schema, {"f1": "x@y"}).to_error_dict() == {"f1": "Invalid email"}

    def test_valid(self, schema):
        result = validate_response(schema, {"f1": "x@y.com"})
        assert result.is_valid
        assert result.to_error_dict() == {}

    def test_optional_email_still_checked(self):
        schema = _schema(FormField(id="f1", type="email", label="Email"))
        assert validate_response(schema, {}).is_valid
        assert validate_response(schema, {"f1": "abc"}).to_error_dict() == {"f1": "Invalid email"}
