import pytest

from openapi_to_code.pipeline.errors import RenderError
from openapi_to_code.pipeline.output import AtomicWriter, validate_rust

VALID = "use serde::{Deserialize, Serialize};\n\npub struct Foo {\n    pub bar: Option<String>,\n}\n"


class TestValidateRust:
    """Test the structural heuristics"""

    def test_valid(self):
        validate_rust(VALID)

    def test_missing_serde_import(self):
        with pytest.raises(RenderError):
            validate_rust("pub struct Foo {}\n")

    def test_unbalanced_braces(self):
        with pytest.raises(RenderError) as exc_info:
            validate_rust("use serde::{Deserialize, Serialize};\npub struct Foo {\n")
        assert "unbalanced" in str(exc_info.value)

    def test_delimiters_in_comments_and_strings_are_ignored(self):
        validate_rust(VALID + '/// Returns {id} -> Pet\n#[serde(rename = "a{<(")]\npub struct Bar {}\n')


class TestAtomicWriter:
    """Test atomic file writes"""

    def test_write_creates_parents(self, tmp_path):
        target = tmp_path / "src" / "models.rs"
        AtomicWriter().write(target, VALID)

        assert target.read_text(encoding="utf-8") == VALID
        assert list(target.parent.iterdir()) == [target]

    def test_write_replaces_existing(self, tmp_path):
        target = tmp_path / "models.rs"
        target.write_text("old", encoding="utf-8")

        AtomicWriter().write(target, VALID)
        assert target.read_text(encoding="utf-8") == VALID

    def test_failed_validation_leaves_target_untouched(self, tmp_path):
        target = tmp_path / "models.rs"
        target.write_text("old", encoding="utf-8")

        with pytest.raises(RenderError):
            AtomicWriter().write(target, "pub struct Broken {")

        assert target.read_text(encoding="utf-8") == "old"
        # No temporary file left behind
        assert list(tmp_path.iterdir()) == [target]

    def test_validation_can_be_skipped(self, tmp_path):
        target = tmp_path / "models.rs"
        AtomicWriter().write(target, "not rust", validate=False)
        assert target.read_text(encoding="utf-8") == "not rust"

    def test_custom_validator(self, tmp_path):
        seen = []
        AtomicWriter(validate=seen.append).write(tmp_path / "a.rs", "content")
        assert seen == ["content"]

    def test_write_if_not_exists(self, tmp_path):
        target = tmp_path / "models.rs"
        writer = AtomicWriter()
        writer.write_if_not_exists(target, VALID)

        with pytest.raises(FileExistsError):
            writer.write_if_not_exists(target, VALID)
