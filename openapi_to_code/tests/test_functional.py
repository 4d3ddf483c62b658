"""
Functional tests for the pipeline generator.

Each test case in test_data/functional/*_tests.json gives a document (inline
or as a fixture file), an optional config, and snippets that must or must
not appear in the generated Rust source.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from openapi_to_code.pipeline import CodeGeneratorConfig, PipelineGenerator
from openapi_to_code.pipeline.document import load_document

TEST_DATA_DIR = Path(__file__).parent / "test_data"


def load_all_test_cases():
    """Load all test cases from all JSON files in test_data/functional directory."""
    functional_dir = TEST_DATA_DIR / "functional"
    test_cases = []

    for json_file in sorted(functional_dir.glob("*_tests.json")):
        with open(json_file) as f:
            data = json.load(f)

        for test_case in data:
            test_case["_source_file"] = json_file.name
            test_cases.append(test_case)

    return test_cases


def _load_document(test_case):
    """Load document from test case (either inline or from file)."""
    if "document" in test_case:
        return test_case["document"]
    elif "document_file" in test_case:
        return load_document(TEST_DATA_DIR / test_case["document_file"])
    else:
        raise ValueError("Test case must have either 'document' or 'document_file'")


@pytest.mark.parametrize("test_case", load_all_test_cases(), ids=lambda tc: tc["name"])
def test_functional_generation(test_case):
    """Unified test for all JSON test cases using a single pattern."""
    config = CodeGeneratorConfig.from_dict({"add_generation_comment": False, **test_case.get("config", {})})

    generated_code = PipelineGenerator(_load_document(test_case), config).generate()

    for expected in test_case.get("expected_contains", []):
        assert expected in generated_code, f"Expected pattern '{expected}' not found in output:\n{generated_code}"

    for not_expected in test_case.get("expected_not_contains", []):
        assert not_expected not in generated_code, f"Unwanted pattern '{not_expected}' found in output:\n{generated_code}"
