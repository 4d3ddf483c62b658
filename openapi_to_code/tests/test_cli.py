import json
import shutil
from pathlib import Path

import pytest
from click.testing import CliRunner

from openapi_to_code import __version__
from openapi_to_code.openapi_to_code import openapi_to_code

FIXTURES = Path(__file__).parent / "test_data" / "fixtures"


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def petstore(tmp_path):
    path = tmp_path / "petstore.yaml"
    shutil.copy(FIXTURES / "petstore.yaml", path)
    return path


class TestGenerateCommand:
    """Test the generate command"""

    def test_generate(self, runner, petstore, tmp_path):
        output = tmp_path / "models.rs"
        result = runner.invoke(openapi_to_code, ["generate", str(petstore), str(output)])

        assert result.exit_code == 0, result.output
        code = output.read_text(encoding="utf-8")
        assert code.startswith(f"// Generated by openapi_to_code v{__version__} : openapi_to_code generate petstore.yaml ")
        assert "pub struct Pet {" in code

    def test_existing_output_requires_force(self, runner, petstore, tmp_path):
        output = tmp_path / "models.rs"
        output.write_text("// keep\n", encoding="utf-8")

        result = runner.invoke(openapi_to_code, ["generate", str(petstore), str(output)])
        assert result.exit_code == 1
        assert "already exists" in result.output
        assert output.read_text(encoding="utf-8") == "// keep\n"

        result = runner.invoke(openapi_to_code, ["generate", "--force", str(petstore), str(output)])
        assert result.exit_code == 0, result.output
        assert "pub struct Pet {" in output.read_text(encoding="utf-8")

    def test_config_file(self, runner, petstore, tmp_path):
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"ignore_types": ["Error"], "add_generation_comment": False}), encoding="utf-8")
        output = tmp_path / "models.rs"

        result = runner.invoke(openapi_to_code, ["generate", "--config", str(config), str(petstore), str(output)])

        assert result.exit_code == 0, result.output
        code = output.read_text(encoding="utf-8")
        assert code.startswith("use serde::")
        assert "pub struct Error" not in code

    def test_strict_failure(self, runner, tmp_path):
        document = tmp_path / "api.json"
        document.write_text(
            json.dumps({"components": {"schemas": {"Foo": {"type": "object", "properties": {"a": {"anyOf": []}}}}}}),
            encoding="utf-8",
        )
        output = tmp_path / "models.rs"

        result = runner.invoke(openapi_to_code, ["generate", "--strict", str(document), str(output)])

        assert result.exit_code == 1
        assert "strict mode" in result.output
        assert not output.exists()

    def test_structural_error(self, runner, tmp_path):
        output = tmp_path / "models.rs"
        result = runner.invoke(openapi_to_code, ["generate", str(FIXTURES / "bad_reference.yaml"), str(output)])

        assert result.exit_code == 1
        assert "currently not supported" in result.output
        assert not output.exists()

    def test_missing_input(self, runner, tmp_path):
        result = runner.invoke(openapi_to_code, ["generate", str(tmp_path / "nope.yaml"), str(tmp_path / "out.rs")])
        assert result.exit_code == 2


class TestSchemasCommand:
    """Test the schemas command"""

    def test_lists_keys(self, runner):
        result = runner.invoke(openapi_to_code, ["schemas", str(FIXTURES / "tree.json")])

        assert result.exit_code == 0, result.output
        assert result.output.splitlines() == [
            "Node",
            "Node.value",
            "Node.children",
            "Node.attributes",
            "Node.attributes.Additional",
        ]

    def test_full_listing(self, runner):
        result = runner.invoke(openapi_to_code, ["schemas", "--full", str(FIXTURES / "petstore.yaml")])

        assert result.exit_code == 0, result.output
        lines = result.output.splitlines()
        assert "createPets.201.application/json\tobject" in lines
        assert "createPets.201.application/json.status\tstring enum" in lines
        assert "Pets\tarray" in lines

    def test_cyclic_document(self, runner):
        result = runner.invoke(openapi_to_code, ["schemas", str(FIXTURES / "cyclic.json")])
        assert result.exit_code == 1
        assert "Cyclic reference" in result.output


def test_version(runner):
    result = runner.invoke(openapi_to_code, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output
