"""
Tests for use cases — generate and check against real files.
"""

import io
import textwrap
from pathlib import Path

from propfile.core.models import GENERIC_GROUP_TITLE
from propfile.core.use_cases.config_check import check_descriptors
from propfile.core.use_cases.generate import (
    STDOUT,
    ordered_groups,
    resolve_descriptors,
    run_generate,
    write_properties,
)


def _write(path: Path, content: str) -> Path:
    path.write_text(textwrap.dedent(content))
    return path


# ═══════════════════════════════════════════════════════════════════
#  run_generate
# ═══════════════════════════════════════════════════════════════════


class TestRunGenerate:
    def test_writes_default_file(self, descriptor_yml: Path):
        result = run_generate(config_path=descriptor_yml)
        assert result.error is None
        target = descriptor_yml.parent / "Demo.properties"
        assert result.output_path == target
        assert target.read_text() == result.content

    def test_counts(self, descriptor_yml: Path):
        result = run_generate(config_path=descriptor_yml, output=STDOUT)
        assert result.property_count == 4
        assert result.visible_count == 3
        assert result.group_count == 3

    def test_group_order_from_file(self, descriptor_yml: Path):
        content = run_generate(config_path=descriptor_yml, output=STDOUT).content
        server = content.index("# Server")
        database = content.index("# Database")
        generic = content.index(f"# {GENERIC_GROUP_TITLE}")
        assert server < database < generic
        assert "server.port=9090" in content
        assert "# - Connection -" in content
        assert "secret.token" not in content

    def test_order_override(self, descriptor_yml: Path):
        content = run_generate(
            config_path=descriptor_yml, group_order=[GENERIC_GROUP_TITLE], output=STDOUT,
        ).content
        assert content.index(f"# {GENERIC_GROUP_TITLE}") < content.index("# Database")
        assert content.index("# Database") < content.index("# Server")

    def test_project_override(self, descriptor_yml: Path):
        content = run_generate(config_path=descriptor_yml, project="Other", output=STDOUT).content
        assert content.startswith("# Properties file created for: 'Other' ")

    def test_stdout_writes_nothing(self, descriptor_yml: Path):
        result = run_generate(config_path=descriptor_yml, output=STDOUT)
        assert result.output_path is None
        assert result.generated is not None
        assert result.generated.path == STDOUT
        assert not (descriptor_yml.parent / "Demo.properties").exists()

    def test_explicit_output_creates_dirs(self, descriptor_yml: Path, tmp_path: Path):
        target = tmp_path / "out" / "app.properties"
        result = run_generate(config_path=descriptor_yml, output=str(target))
        assert result.output_path == target
        assert target.is_file()

    def test_template_file(self, descriptor_yml: Path, tmp_path: Path):
        template = _write(tmp_path / "tpl.txt", "${header}${footer}")
        content = run_generate(
            config_path=descriptor_yml, template_path=template, output=STDOUT,
        ).content
        assert content.startswith("# Properties file created for: 'Demo' \n\n\n# Properties file")
        assert "#db.url" not in content

    def test_missing_config(self, tmp_path: Path):
        result = run_generate(config_path=tmp_path / "missing.yml")
        assert result.error is not None
        assert "not found" in result.error
        assert result.generated is None

    def test_bad_model_ref(self):
        result = run_generate(model_ref="not-a-ref")
        assert result.error is not None
        assert "Invalid model reference" in result.error

    def test_write_failure_reported(self, descriptor_yml: Path, tmp_path: Path):
        blocker = tmp_path / "file"
        blocker.write_text("x")
        result = run_generate(config_path=descriptor_yml, output=str(blocker / "sub" / "a.properties"))
        assert result.error is not None
        assert "Cannot write" in result.error
        assert result.output_path is None

    def test_from_model(self, tmp_path: Path, monkeypatch):
        _write(tmp_path / "demo_model.py", """\
            from pydantic import BaseModel, ConfigDict, Field

            class DemoConfig(BaseModel):
                model_config = ConfigDict(json_schema_extra={"group_order": ["Web"]})

                level: str = Field("INFO", alias="log.level")
                port: int = Field(80, json_schema_extra={"key": "web.port", "group": "Web"})
        """)
        monkeypatch.syspath_prepend(str(tmp_path))
        result = run_generate(model_ref="demo_model:DemoConfig", output=STDOUT)
        assert result.error is None
        assert result.project == "DemoConfig"
        content = result.content
        assert content.index("# Web") < content.index(f"# {GENERIC_GROUP_TITLE}")
        assert "#web.port=80" in content
        assert "#log.level=INFO" in content

    def test_to_dict(self, descriptor_yml: Path):
        data = run_generate(config_path=descriptor_yml, output=STDOUT).to_dict()
        assert data["project"] == "Demo"
        assert data["properties"] == {"total": 4, "visible": 3}
        assert data["groups"] == 3
        assert data["error"] is None
        assert isinstance(data["duration_ms"], int)


class TestHelpers:
    def test_write_properties(self):
        sink = io.StringIO()
        write_properties(sink, "a=b\n")
        assert sink.getvalue() == "a=b\n"

    def test_ordered_groups(self, descriptor_yml: Path):
        groups = ordered_groups(resolve_descriptors(config_path=descriptor_yml))
        assert [g.title for g in groups] == ["Server", "Database", GENERIC_GROUP_TITLE]
        assert [c.title for c in groups[1].children] == ["Connection"]

    def test_resolve_keeps_file_order_when_not_overridden(self, descriptor_yml: Path):
        assert resolve_descriptors(config_path=descriptor_yml).group_order == ["Server", "Database"]


# ═══════════════════════════════════════════════════════════════════
#  check_descriptors
# ═══════════════════════════════════════════════════════════════════


class TestCheckDescriptors:
    def test_valid(self, descriptor_yml: Path):
        result = check_descriptors(descriptor_yml)
        assert result.valid
        assert result.errors == []
        assert result.warnings == []
        assert result.to_dict()["property_count"] == 4

    def test_missing(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = check_descriptors()
        assert not result.valid
        assert result.errors == ["No propfile.yml found."]

    def test_invalid(self, tmp_path: Path):
        path = _write(tmp_path / "propfile.yml", "properties: []\n")
        result = check_descriptors(path)
        assert not result.valid
        assert "Invalid descriptor file" in result.errors[0]

    def test_warnings(self, tmp_path: Path):
        path = _write(tmp_path / "propfile.yml", """\
            project: P
            group_order: [A, Ghost, A]
            properties:
              - name: dup
                group: [A]
              - name: dup
              - name: odd
                group: ["", x]
        """)
        result = check_descriptors(path)
        assert result.valid
        joined = "\n".join(result.warnings)
        assert "Duplicate property keys: dup" in joined
        assert "'odd' has an empty group segment" in joined
        assert "unknown group 'Ghost'" in joined
        assert "repeats 'A'" in joined

    def test_no_properties_warning(self, tmp_path: Path):
        path = _write(tmp_path / "propfile.yml", "project: P\n")
        result = check_descriptors(path)
        assert result.valid
        assert any("No properties" in w for w in result.warnings)
