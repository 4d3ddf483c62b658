import logging

import pytest

from openapi_to_code.pipeline.diagnostics import Diagnostic, DiagnosticKind, Diagnostics
from openapi_to_code.pipeline.errors import OpenApiToCodeError, StrictModeError


def test_report_records_and_logs(caplog):
    diagnostics = Diagnostics()
    with caplog.at_level(logging.WARNING):
        diagnostic = diagnostics.report(DiagnosticKind.UNSUPPORTED_SCHEMA, "schema type allOf is unimplemented", "Foo::bar")

    assert list(diagnostics) == [diagnostic]
    assert str(diagnostic) == "[unsupported_schema] Foo::bar: schema type allOf is unimplemented"
    assert "Foo::bar" in caplog.text


def test_of_kind_and_truthiness():
    diagnostics = Diagnostics()
    assert not diagnostics

    diagnostics.report(DiagnosticKind.DUPLICATE_SCHEMA, "a")
    diagnostics.report(DiagnosticKind.REFERENCE_ENTRY_SKIPPED, "b")

    assert diagnostics
    assert len(diagnostics) == 2
    assert diagnostics.of_kind(DiagnosticKind.DUPLICATE_SCHEMA) == [Diagnostic(DiagnosticKind.DUPLICATE_SCHEMA, "a")]


def test_raise_if_any():
    diagnostics = Diagnostics()
    diagnostics.raise_if_any()

    diagnostics.report(DiagnosticKind.DUPLICATE_TYPE_NAME, "duplicate type name", "Foo")
    with pytest.raises(StrictModeError) as exc_info:
        diagnostics.raise_if_any()

    assert isinstance(exc_info.value, OpenApiToCodeError)
    assert len(exc_info.value.diagnostics) == 1
    assert "[duplicate_type_name] Foo" in str(exc_info.value)
