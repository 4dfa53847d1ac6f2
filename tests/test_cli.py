"""Tests for the k1tool command line interface."""

import sys
from pathlib import Path

from typer.testing import CliRunner

sys.path.insert(0, str(Path(__file__).parent.parent))

from cli.app import app
from cli.commands.info import message_sizes
from k1manager.formats.k1.sysex_parser import split_messages

runner = CliRunner()


class TestVerifyCommand:
    """Test cases for `k1tool verify`."""

    def test_single_bank(self, make_single_bank, syx_file):
        result = runner.invoke(app, ["verify", str(syx_file(make_single_bank()))])

        assert result.exit_code == 0
        assert "Got 1 messages" in result.output
        assert "Fretless 1" in result.output
        assert "32/32" in result.output

    def test_patch_name_filter(self, make_single_bank, syx_file):
        path = syx_file(make_single_bank())
        result = runner.invoke(app, ["verify", str(path), "fretless 2", "--detail"])

        assert result.exit_code == 0
        assert "16 patches" in result.output
        assert "IA-2" in result.output

    def test_hex_dump(self, make_single_bank, syx_file):
        path = syx_file(make_single_bank())
        result = runner.invoke(app, ["verify", str(path), "Fretless 1", "--hex"])

        assert result.exit_code == 0
        assert "INGOING SINGLE DATA" in result.output
        assert "OUTGOING SINGLE DATA" in result.output

    def test_multi_bank_exits_1(self, make_multi_bank, syx_file):
        result = runner.invoke(app, ["verify", str(syx_file(make_multi_bank()))])

        assert result.exit_code == 1
        assert "Multis not handled yet" in result.output

    def test_one_patch_dump_exits_1(self, fretless_message, syx_file):
        result = runner.invoke(app, ["verify", str(syx_file(fretless_message))])

        assert result.exit_code == 1
        assert "One patch dumps not handled yet" in result.output

    def test_empty_file(self, syx_file):
        result = runner.invoke(app, ["verify", str(syx_file(b""))])

        assert result.exit_code == 0
        assert "Got 0 messages" in result.output

    def test_truncated_header(self, syx_file):
        result = runner.invoke(app, ["verify", str(syx_file(b"\xf0\x40\x00\xf7"))])

        assert result.exit_code == 1
        assert "Error" in result.output

    def test_missing_argument(self):
        result = runner.invoke(app, ["verify"])

        assert result.exit_code == 1
        assert "Usage" in result.output

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["verify", str(tmp_path / "missing.syx")])

        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_trailing_fragment_needs_drop_trailing(self, make_single_bank, syx_file):
        path = syx_file(make_single_bank() + b"\xf0\x40\x00")

        result = runner.invoke(app, ["verify", str(path)])
        assert result.exit_code == 1
        assert "Error" in result.output

        result = runner.invoke(app, ["verify", str(path), "--drop-trailing"])
        assert result.exit_code == 0
        assert "Got 1 messages" in result.output
        assert "32/32" in result.output

    def test_bad_checksum_flagged(self, make_single_bank, fretless_record, syx_file):
        """A record with a wrong checksum byte still round trips."""
        corrupted = bytearray(fretless_record)
        corrupted[10] ^= 0x01
        records = [bytes(corrupted)] + [fretless_record] * 31
        path = syx_file(make_single_bank(records=records))

        result = runner.invoke(app, ["verify", str(path)])

        assert result.exit_code == 0
        assert "BAD" in result.output
        assert "32/32" in result.output

    def test_mismatch_shows_comparison(self, make_single_bank, syx_file, monkeypatch):
        from k1manager.formats.k1 import dump

        real_encode = dump.encode_single

        def faulty_encode(patch):
            data = bytearray(real_encode(patch))
            data[20] ^= 0x01
            return bytes(data)

        monkeypatch.setattr(dump, "encode_single", faulty_encode)
        result = runner.invoke(app, ["verify", str(syx_file(make_single_bank())), "Fretless 1"])

        assert result.exit_code == 0
        assert "NO :-(" in result.output
        assert "Re-encoded" in result.output
        assert "0/32" in result.output

    def test_verbose_logs_progress(self, make_single_bank, syx_file, caplog):
        path = syx_file(make_single_bank())

        result = runner.invoke(app, ["--verbose", "verify", str(path)])
        assert result.exit_code == 0
        assert "Got 1 messages" in caplog.text

        caplog.clear()
        result = runner.invoke(app, ["verify", str(path)])
        assert result.exit_code == 0
        assert "Got 1 messages" not in caplog.text


class TestInfoAndNames:
    """Test cases for `k1tool info` and `k1tool names`."""

    def test_info(self, make_single_bank, make_multi_bank, syx_file):
        path = syx_file(make_single_bank() + make_multi_bank())
        result = runner.invoke(app, ["info", str(path)])

        assert result.exit_code == 0
        assert "2825" in result.output
        assert "2441" in result.output

    def test_info_trailing_fragment_size(self, make_single_bank, make_header, syx_file):
        path = syx_file(make_single_bank() + make_header(0x21, 0x00, 0x40) + bytes(5))
        result = runner.invoke(app, ["info", str(path)])

        assert result.exit_code == 0
        assert "2825" in result.output

    def test_message_sizes(self, make_single_bank, make_header):
        data = make_single_bank() + make_header(0x21, 0x00, 0x40) + bytes(5)
        assert message_sizes(data, split_messages(data)) == [2825, 13]

        terminated = data + b"\xf7"
        assert message_sizes(terminated, split_messages(terminated)) == [2825, 14]

        assert message_sizes(b"", []) == []

    def test_names_checksum_column(self, make_single_bank, syx_file):
        result = runner.invoke(app, ["names", str(syx_file(make_single_bank()))])

        assert result.exit_code == 0
        assert "Checksum" in result.output
        assert "OK" in result.output

    def test_names(self, make_single_bank, make_multi_bank, syx_file):
        path = syx_file(make_single_bank() + make_multi_bank())
        result = runner.invoke(app, ["names", str(path)])

        assert result.exit_code == 0
        assert "Fretless 2" in result.output
        assert "MULTI 32" in result.output

    def test_version(self):
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert "k1tool" in result.output
