"""
Unit tests for the converter pipeline.
"""

import os
import pytest

import msgpack

from apiinfo.converters.yaml_converter import YamlConverter
from apiinfo.core import (
    DEFAULT_COMMAND,
    DEFAULT_OUTPUT,
    ApiInfoConverter,
    convert,
    write_text,
)
from apiinfo.errors import (
    DecodeError,
    EncodeError,
    ProcessError,
    SpawnError,
    WriteError,
)
from apiinfo.model import ApiInfo
from tests.fixtures import (
    failing_command,
    nested_document,
    nested_payload,
    pack,
    payload_command,
)


class TestApiInfoConverter:
    """Tests for ApiInfoConverter."""

    def test_defaults(self):
        """Test the default command and output match nvim --api-info > api_info.yml."""
        converter = ApiInfoConverter()
        assert converter.command == ["nvim", "--api-info"]
        assert list(DEFAULT_COMMAND) == converter.command
        assert DEFAULT_OUTPUT == "api_info.yml"
        assert converter.timeout is None

    def test_convert_writes_file(self, quiet_converter, output_path, sample_document):
        """Test conversion writes YAML equal to the returned text."""
        text = quiet_converter.convert(output_path)

        with open(output_path, encoding="utf-8") as f:
            assert f.read() == text
        assert YamlConverter.load(text) == sample_document

    def test_convert_overwrites_existing_file(self, quiet_converter, existing_output):
        """Test an existing output file is truncated, not appended to."""
        quiet_converter.convert(str(existing_output))
        assert "previous" not in existing_output.read_text(encoding="utf-8")

    def test_convert_without_output_path(self, quiet_converter, tmp_path):
        """Test output_path=None returns YAML without writing anything."""
        text = quiet_converter.convert(None)
        assert text.startswith("error_types:")
        assert list(tmp_path.iterdir()) == []

    def test_convert_bytes(self, sample_payload, output_path, sample_document):
        """Test converting a payload that was captured elsewhere."""
        converter = ApiInfoConverter(verbose=False)
        converter.convert_bytes(sample_payload, output_path)

        with open(output_path, encoding="utf-8") as f:
            assert YamlConverter.load(f.read()) == sample_document

    def test_fetch_returns_raw_bytes(self, quiet_converter, sample_payload):
        assert quiet_converter.fetch() == sample_payload

    def test_load_model(self, quiet_converter):
        """Test building the typed view straight from the command."""
        api = quiet_converter.load_model()
        assert isinstance(api, ApiInfo)
        assert api.version.api_level == 11

    def test_status_lines(self, sample_command, output_path, capsys):
        """Test each stage prints a tagged status line when verbose."""
        ApiInfoConverter(command=sample_command).convert(output_path)

        out = capsys.readouterr().out
        for tag in ("[SPAWN]", "[DECODE]", "[ENCODE]", "[SAVED]"):
            assert tag in out

    def test_quiet_prints_nothing(self, quiet_converter, output_path, capsys):
        quiet_converter.convert(output_path)
        assert capsys.readouterr().out == ""


class TestConvertFunction:
    """Tests for the module-level convert function and its failure modes."""

    def test_example_scenario(self, minimal_document, output_path):
        """Test the documented example converts to equivalent YAML."""
        convert(payload_command(pack(minimal_document)), output_path)

        with open(output_path, encoding="utf-8") as f:
            text = f.read()
        assert "nvim_get_mode" in text
        assert YamlConverter.load(text) == minimal_document

    def test_idempotent(self, sample_command, tmp_path):
        """Test two runs over the same output give byte-identical files."""
        first = tmp_path / "first.yml"
        second = tmp_path / "second.yml"

        convert(sample_command, str(first))
        convert(sample_command, str(second))
        convert(sample_command, str(second))

        assert first.read_bytes() == second.read_bytes()

    def test_process_error_leaves_file_untouched(self, existing_output):
        """Test a failing command does not modify the output file."""
        with pytest.raises(ProcessError):
            convert(failing_command(), str(existing_output))
        assert existing_output.read_text(encoding="utf-8") == "previous: run\n"

    def test_process_error_does_not_create_file(self, output_path):
        with pytest.raises(ProcessError):
            convert(failing_command(), output_path)
        assert not os.path.exists(output_path)

    def test_missing_program(self, tmp_path, output_path):
        """Test a missing program raises SpawnError."""
        with pytest.raises(SpawnError):
            convert([str(tmp_path / "nvim-missing"), "--api-info"], output_path)

    def test_empty_command(self, output_path):
        """Test an empty command is not replaced by the default."""
        with pytest.raises(SpawnError):
            convert([], output_path)

    def test_truncated_payload(self, sample_payload, existing_output):
        """Test truncated bytes raise DecodeError without writing."""
        with pytest.raises(DecodeError):
            convert(payload_command(sample_payload[:-3]), str(existing_output))
        assert existing_output.read_text(encoding="utf-8") == "previous: run\n"

    def test_unrepresentable_value(self, tmp_path):
        """Test an unknown extension type raises EncodeError without writing."""
        out = tmp_path / "out.yml"
        payload = msgpack.packb({"odd": msgpack.ExtType(42, b"xy")})

        with pytest.raises(EncodeError):
            convert(payload_command(payload), str(out))
        assert not out.exists()

    def test_deeply_nested_payload(self, output_path):
        """Test a payload 500 levels deep converts and reads back intact."""
        convert(payload_command(nested_payload(500)), output_path)

        with open(output_path, encoding="utf-8") as f:
            assert YamlConverter.load(f.read()) == nested_document(500)

    def test_too_deeply_nested_payload(self, existing_output):
        """Test a payload past the nesting limit fails in the decode stage."""
        with pytest.raises(DecodeError):
            convert(payload_command(nested_payload(2000)), str(existing_output))
        assert existing_output.read_text(encoding="utf-8") == "previous: run\n"

    def test_missing_parent_directory(self, sample_command, tmp_path):
        """Test a destination in a missing directory raises WriteError."""
        out = tmp_path / "missing" / "api_info.yml"

        with pytest.raises(WriteError) as exc_info:
            convert(sample_command, str(out))

        assert str(exc_info.value).startswith("write: ")
        assert not out.parent.exists()

    def test_output_is_directory(self, sample_command, tmp_path):
        with pytest.raises(WriteError, match="directory"):
            convert(sample_command, str(tmp_path))


class TestWriteText:
    """Tests for write_text."""

    def test_creates_file(self, tmp_path):
        path = tmp_path / "out.yml"
        write_text(str(path), "a: 1\n")
        assert path.read_text(encoding="utf-8") == "a: 1\n"

    def test_truncates_file(self, existing_output):
        write_text(str(existing_output), "a: 1\n")
        assert existing_output.read_text(encoding="utf-8") == "a: 1\n"
