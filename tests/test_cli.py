import json
from pathlib import Path

import yaml
from click.testing import CliRunner

from restdocs_examples.cli import main
from restdocs_examples.config import PATH_ENV

FIXTURES = Path(__file__).parent / "fixtures"
RESTDOCS = FIXTURES / "restdocs"


class TestCliRead:
    def test_read_prints_responses(self):
        runner = CliRunner()
        result = runner.invoke(main, ["read", "get-pet", "--path", str(RESTDOCS)])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert [r["code"] for r in data] == ["200", "404"]
        assert [h["name"] for h in data[0]["headers"]] == ["Content-Length", "Content-Type", "X-Request-Id"]
        assert data[0]["examples"] == [{"media_type": "application/json", "value": '{"id":1,"name":"Fido"}'}]

    def test_read_unknown_operation(self):
        runner = CliRunner()
        result = runner.invoke(main, ["read", "nothing", "--path", str(RESTDOCS)])
        assert result.exit_code == 0
        assert json.loads(result.output) == []

    def test_read_uses_env_path(self):
        runner = CliRunner()
        result = runner.invoke(main, ["read", "create-pet"], env={PATH_ENV: str(RESTDOCS)})
        assert result.exit_code == 0
        assert [r["code"] for r in json.loads(result.output)] == ["201"]

    def test_read_with_other_extension(self, tmp_path):
        capture = tmp_path / "op" / "http-response.http"
        capture.parent.mkdir()
        capture.write_bytes(b"HTTP/1.1 204 No Content\r\n\r\n")
        runner = CliRunner()
        result = runner.invoke(main, ["read", "op", "--path", str(tmp_path), "--extension", "http"])
        assert result.exit_code == 0
        assert [r["code"] for r in json.loads(result.output)] == ["204"]


    def test_read_from_package(self, tmp_path, monkeypatch):
        package = tmp_path / "captured_examples_cli"
        capture = package / "op" / "http-response.springfox"
        capture.parent.mkdir(parents=True)
        (package / "__init__.py").write_text("", encoding="utf-8")
        capture.write_bytes(b"HTTP/1.1 200 OK\r\nContent-Length: 2\r\n\r\nok")
        monkeypatch.syspath_prepend(str(tmp_path))

        runner = CliRunner()
        result = runner.invoke(main, ["read", "op", "--path", str(tmp_path / "empty"), "--package", "captured_examples_cli"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data[0]["examples"] == [{"media_type": None, "value": "ok"}]

    def test_read_unknown_package(self):
        runner = CliRunner()
        result = runner.invoke(main, ["read", "op", "--package", "no_such_package_here"])
        assert result.exit_code != 0
        assert "cannot search package" in result.output


class TestCliMerge:
    def test_merge_writes_yaml(self, tmp_path):
        output = tmp_path / "out" / "petstore.yaml"
        runner = CliRunner()
        result = runner.invoke(main, [
            "merge", str(FIXTURES / "petstore.yaml"),
            "-o", str(output),
            "--path", str(RESTDOCS),
        ])

        assert result.exit_code == 0
        assert "Added examples to 3 operations." in result.output
        doc = yaml.safe_load(output.read_text(encoding="utf-8"))
        example = doc["paths"]["/pets/{petId}"]["get"]["responses"]["404"]["content"]["application/json"]["example"]
        assert example == '{"error":"Pet not found"}'

    def test_merge_writes_json(self, tmp_path):
        output = tmp_path / "petstore.json"
        runner = CliRunner()
        result = runner.invoke(main, [
            "merge", str(FIXTURES / "petstore.yaml"),
            "-o", str(output),
            "-p", str(RESTDOCS),
        ])

        assert result.exit_code == 0
        doc = json.loads(output.read_text(encoding="utf-8"))
        assert doc["openapi"] == "3.0.0"
        assert "201" in doc["paths"]["/pets"]["post"]["responses"]

    def test_merge_rejects_swagger_12(self, tmp_path):
        doc_path = tmp_path / "api.yaml"
        doc_path.write_text("swaggerVersion: '1.2'\napis: []\n", encoding="utf-8")
        runner = CliRunner()
        result = runner.invoke(main, ["merge", str(doc_path), "-o", str(tmp_path / "out.yaml")])

        assert result.exit_code != 0
        assert "cannot add examples" in result.output
        assert not (tmp_path / "out.yaml").exists()

    def test_merge_rejects_invalid_yaml(self, tmp_path):
        doc_path = tmp_path / "api.yaml"
        doc_path.write_text("openapi: [3.0\n", encoding="utf-8")
        runner = CliRunner()
        result = runner.invoke(main, ["merge", str(doc_path), "-o", str(tmp_path / "out.yaml")])

        assert result.exit_code != 0
        assert "not valid YAML or JSON" in result.output

    def test_merge_rejects_non_document(self, tmp_path):
        doc_path = tmp_path / "api.yaml"
        doc_path.write_text("- just\n- a list\n", encoding="utf-8")
        runner = CliRunner()
        result = runner.invoke(main, ["merge", str(doc_path), "-o", str(tmp_path / "out.yaml")])

        assert result.exit_code != 0
        assert "does not contain an API document" in result.output
