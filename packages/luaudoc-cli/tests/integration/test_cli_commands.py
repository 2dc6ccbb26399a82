import json

from typer.testing import CliRunner

from luaudoc.cli.main import app
from luaudoc.test_utils import WorkspaceFactory

runner = CliRunner()

CLEAN_SOURCE = """
--- @class Greeter
local Greeter = {}

--- Says hello.
--- @param name string
--- @return string
function Greeter.greet(name)
    return "hello " .. name
end
"""

AMBIGUOUS_SOURCE = """
--- @class A
local A = {}
--- @class B
local B = {}

--- @function shared
"""


def test_generate_writes_catalog_in_cwd(workspace_factory):
    project_root = workspace_factory.with_source("src/Greeter.luau", CLEAN_SOURCE).build()

    result = runner.invoke(app, ["generate"])

    assert result.exit_code == 0, result.output
    assert "Wrote json catalog to reference.json." in result.output
    assert "Done: 1 module(s), 2 symbol(s)." in result.output

    data = json.loads((project_root / "reference.json").read_text(encoding="utf-8"))
    symbols = data["modules"][0]["symbols"]
    assert symbols[1]["qualifiedName"] == "Greeter.greet"
    assert symbols[1]["types"]["display"] == "(name: string) -> string"


def test_generate_options_override_config(tmp_path):
    WorkspaceFactory(tmp_path).with_config({"src_dir": "nowhere"}).with_source(
        "lib/Greeter.luau", CLEAN_SOURCE
    ).build()

    result = runner.invoke(
        app,
        [
            "generate",
            "--root",
            str(tmp_path),
            "--src",
            "lib",
            "--format",
            "yaml",
            "--out",
            "out/api.yaml",
            "--generator-version",
            "9.9.9",
            "-j",
            "2",
        ],
    )

    assert result.exit_code == 0, result.output
    text = (tmp_path / "out/api.yaml").read_text(encoding="utf-8")
    assert "generatorVersion: 9.9.9" in text
    assert "id: Greeter" in text


def test_generate_rejects_unknown_format(tmp_path):
    result = runner.invoke(
        app, ["generate", "--root", str(tmp_path), "--format", "xml"]
    )

    assert result.exit_code == 1
    assert "Invalid configuration: format must be one of json, yaml" in result.output
    assert not (tmp_path / "reference.json").exists()


def test_generate_warnings_only_fail_when_asked(tmp_path):
    WorkspaceFactory(tmp_path).with_source("src/Pair.luau", AMBIGUOUS_SOURCE).build()
    expected = (
        "[luau-docgen] WARNING src/Pair.luau:6 "
        "@within missing for ambiguous class ownership."
    )

    lenient = runner.invoke(app, ["generate", "--root", str(tmp_path)])
    strict = runner.invoke(
        app, ["generate", "--root", str(tmp_path), "--fail-on-warning"]
    )

    assert lenient.exit_code == 0
    assert expected in lenient.output
    assert strict.exit_code == 1
    assert (tmp_path / "reference.json").is_file()


def test_check_exits_non_zero_on_errors(tmp_path):
    WorkspaceFactory(tmp_path).with_source(
        "src/Loose.luau", "--- @function orphan\n"
    ).build()

    result = runner.invoke(app, ["check", "--root", str(tmp_path)])

    assert result.exit_code == 1
    assert "[luau-docgen] ERROR src/Loose.luau:1 @class missing for this file." in (
        result.output
    )
    assert "Found 1 error(s) and 0 warning(s)." in result.output
    assert not (tmp_path / "reference.json").exists()


def test_check_passes_on_clean_sources(tmp_path):
    WorkspaceFactory(tmp_path).with_source("src/Greeter.luau", CLEAN_SOURCE).build()

    result = runner.invoke(app, ["check", "--root", str(tmp_path)])

    assert result.exit_code == 0, result.output
    assert "No documentation issues found in 1 module(s)." in result.output


def test_project_message_overrides_follow_root(tmp_path):
    WorkspaceFactory(tmp_path).with_source("src/Greeter.luau", CLEAN_SOURCE).build()
    overrides = tmp_path / ".luaudoc" / "needle" / "en"
    overrides.mkdir(parents=True)
    (overrides / "check.yaml").write_text(
        "check.run.clean: 'All {modules} module(s) look good.'\n", encoding="utf-8"
    )

    result = runner.invoke(app, ["check", "--root", str(tmp_path)])

    assert result.exit_code == 0, result.output
    assert "All 1 module(s) look good." in result.output
