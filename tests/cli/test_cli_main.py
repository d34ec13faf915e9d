"""
Tests for the rdfrio command line.

Tests cover:
- Argument parsing and exit codes
- File conversions with formats from extensions and names
- --list-formats output
- Settings files
"""

import importlib
import json

import pytest

from rdfrio import rio
from rdfrio.cli.helpers import load_config
from rdfrio.errors import RioConfigurationError
from rdfrio.formats import NTRIPLES, RDFXML, TURTLE
from rdfrio.plugins.registry import RDFParserRegistry
from rdfrio.settings import BasicWriterSettings, NTriplesParserSettings

cli_main = importlib.import_module("rdfrio.cli.main")


@pytest.fixture(autouse=True)
def no_logging_setup(monkeypatch):
    """Keep main() from installing root handlers bound to captured stdout."""
    monkeypatch.setattr(cli_main, "setup_logging", lambda *args, **kwargs: None)


@pytest.fixture
def nt_file(tmp_path, sample_ntriples):
    path = tmp_path / "people.nt"
    path.write_text(sample_ntriples, encoding="utf-8")
    return path


@pytest.mark.unit
class TestArgumentParser:
    def test_defaults(self):
        args = cli_main.create_argument_parser().parse_args(["in.nt", "out.ttl"])
        assert args.input == "in.nt"
        assert args.output == "out.ttl"
        assert args.log_level == "WARNING"
        assert not args.progress

    def test_missing_output_is_usage_error(self, nt_file):
        with pytest.raises(SystemExit) as exc_info:
            cli_main.main([str(nt_file)])
        assert exc_info.value.code == 2

    def test_invalid_log_level(self):
        with pytest.raises(SystemExit) as exc_info:
            cli_main.main(["a.nt", "b.nt", "--log-level", "LOUD"])
        assert exc_info.value.code == 2


@pytest.mark.unit
class TestResolveFormat:
    def test_by_name_ignores_case(self):
        registry = RDFParserRegistry.get_instance()
        assert cli_main.resolve_format(registry, "turtle", "x.nt", "parser") == TURTLE

    def test_unknown_extension_falls_back(self):
        registry = RDFParserRegistry.get_instance()
        assert cli_main.resolve_format(registry, None, "data.unknownext", "parser") == RDFXML


@pytest.mark.integration
class TestMain:
    def test_convert_to_yars(self, nt_file, tmp_path, capsys):
        out = tmp_path / "people.yarsc"
        assert cli_main.main([str(nt_file), str(out)]) == cli_main.EXIT_OK
        text = out.read_text(encoding="utf-8")
        assert "(<http://example.org/alice>{<http://example.org/name>:'Alice'@en})" in text
        assert "Converted 3 statements from N-Triples to YARS" in capsys.readouterr().out

    def test_convert_with_format_names(self, nt_file, tmp_path):
        out = tmp_path / "people.out"
        code = cli_main.main([str(nt_file), str(out), "--input-format", "n-triples",
                              "--output-format", "Turtle"])
        assert code == cli_main.EXIT_OK
        with open(out, "rb") as f:
            converted = rio.parse(f, "http://example.org/", TURTLE)
        with open(nt_file, "rb") as f:
            original = rio.parse(f, "http://example.org/", NTRIPLES)
        assert {st.triple for st in converted} == {st.triple for st in original}

    def test_missing_input_file(self, tmp_path):
        code = cli_main.main([str(tmp_path / "nope.nt"), str(tmp_path / "out.nt")])
        assert code == cli_main.EXIT_FAILURE

    def test_unknown_format_name(self, nt_file, tmp_path):
        code = cli_main.main([str(nt_file), str(tmp_path / "o.nt"), "--input-format", "nope"])
        assert code == cli_main.EXIT_FAILURE

    def test_unwritable_format(self, nt_file, tmp_path):
        code = cli_main.main([str(nt_file), str(tmp_path / "o.brf"), "--output-format", "BinaryRDF"])
        assert code == cli_main.EXIT_FAILURE

    def test_malformed_input(self, tmp_path):
        bad = tmp_path / "bad.nt"
        bad.write_text("<http://example.org/a> oops\n", encoding="utf-8")
        assert cli_main.main([str(bad), str(tmp_path / "o.nt")]) == cli_main.EXIT_FAILURE

    def test_config_file(self, tmp_path, sample_ntriples):
        nt_file = tmp_path / "people.nt"
        nt_file.write_text(sample_ntriples.split("\n", 1)[1], encoding="utf-8")
        config = tmp_path / "settings.json"
        config.write_text(json.dumps({"writer": {"rdfrio.writer.pretty-print": False}}))
        out = tmp_path / "people.yarsc"
        code = cli_main.main([str(nt_file), str(out), "--config", str(config)])
        assert code == cli_main.EXIT_OK
        assert out.read_text(encoding="utf-8").count("\n") == 1

    def test_bad_config_file(self, nt_file, tmp_path):
        config = tmp_path / "settings.json"
        config.write_text(json.dumps({"parser": {"no.such.setting": True}}))
        code = cli_main.main([str(nt_file), str(tmp_path / "o.nt"), "--config", str(config)])
        assert code == cli_main.EXIT_FAILURE

    def test_list_formats(self, capsys):
        assert cli_main.main(["--list-formats"]) == cli_main.EXIT_OK
        out = capsys.readouterr().out
        assert "RDF formats" in out
        assert "YARS" in out
        rows = {line.split()[0]: line for line in out.splitlines() if line.startswith("  ")}
        assert rows["BinaryRDF"].rstrip().endswith("-")
        assert rows["Turtle"].rstrip().endswith("parse, write")


@pytest.mark.unit
class TestLoadConfig:
    def test_all_sections(self, tmp_path):
        path = tmp_path / "c.json"
        path.write_text(json.dumps({
            "parser": {"rdfrio.parser.preserve-bnode-ids": True},
            "writer": {"rdfrio.writer.pretty-print": False},
            "non_fatal_errors": ["rdfrio.ntriples.fail-on-invalid-lines"],
        }))
        parser_config, writer_config = load_config(str(path))
        assert writer_config.get(BasicWriterSettings.PRETTY_PRINT) is False
        assert parser_config.is_non_fatal(NTriplesParserSettings.FAIL_ON_INVALID_LINES)

    @pytest.mark.parametrize("content", [
        "{not json",
        "[]",
        '{"extra": {}}',
        '{"writer": []}',
        '{"non_fatal_errors": "rdfrio.ntriples.fail-on-invalid-lines"}',
        '{"writer": {"rdfrio.writer.pretty-print": "yes"}}',
    ])
    def test_rejected(self, tmp_path, content):
        path = tmp_path / "c.json"
        path.write_text(content)
        with pytest.raises(RioConfigurationError):
            load_config(str(path))
