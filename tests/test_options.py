# SPDX-License-Identifier: MIT
"""Tests for archbuild.options."""

from pathlib import Path

import pytest

from archbuild.core.errors import UsageError
from archbuild.options import Options, build_parser, parse_args


class TestParseArgs:
    def test_target_only(self):
        opts = parse_args(["-t", "arm"])
        assert opts == Options(target="arm")
        assert opts.config_path == Path("config/config.json")

    def test_long_target(self):
        assert parse_args(["--target", "riscv"]).target == "riscv"

    def test_valued_option_takes_next_token_verbatim(self):
        opts = parse_args(["-t", "--dry-run", "--config", "-cfg.json"])
        assert opts.target == "--dry-run"
        assert not opts.dry_run
        assert opts.config_path == Path("-cfg.json")

    def test_all_flags(self):
        opts = parse_args(
            ["-t", "arm", "-c", "--inc", "-v", "--dry-run", "--json-log"]
        )
        assert opts.clean
        assert opts.increment
        assert opts.verbose
        assert opts.dry_run
        assert opts.json_log

    def test_long_flags(self):
        opts = parse_args(["--clean", "--verbose", "-t", "arm"])
        assert opts.clean
        assert opts.verbose
        assert not opts.increment

    def test_any_order(self):
        assert parse_args(["--dry-run", "-t", "arm", "-c"]) == Options(
            target="arm", clean=True, dry_run=True
        )

    def test_config_path(self):
        opts = parse_args(["-t", "arm", "--config", "other/targets.json"])
        assert opts.config_path == Path("other/targets.json")

    def test_last_target_wins(self):
        assert parse_args(["-t", "arm", "-t", "riscv"]).target == "riscv"

    def test_options_are_immutable(self):
        opts = parse_args(["-t", "arm"])
        with pytest.raises(AttributeError):
            opts.target = "riscv"  # type: ignore[misc]


class TestParseErrors:
    def test_unknown_flag(self):
        with pytest.raises(UsageError) as exc_info:
            parse_args(["-t", "arm", "--bogus"])
        assert exc_info.value.message == "Unknown option: --bogus"
        assert exc_info.value.exit_code == 1

    def test_unknown_positional(self):
        with pytest.raises(UsageError, match="Unknown option: extra"):
            parse_args(["-t", "arm", "extra"])

    def test_abbreviation_rejected(self):
        with pytest.raises(UsageError, match="Unknown option: --cle"):
            parse_args(["-t", "arm", "--cle"])

    def test_missing_target(self):
        with pytest.raises(UsageError) as exc_info:
            parse_args(["--clean"])
        assert exc_info.value.message == "Error: -t <target> is required"

    def test_no_arguments(self):
        with pytest.raises(UsageError, match="required"):
            parse_args([])

    def test_target_without_value(self):
        with pytest.raises(UsageError) as exc_info:
            parse_args(["-t"])
        assert exc_info.value.message == "Error: option -t requires a value"

    @pytest.mark.parametrize(
        "argv,token",
        [
            (["-t", "arm", "-cv"], "-cv"),
            (["-tarm"], "-tarm"),
            (["--target=arm"], "--target=arm"),
            (["-t", "arm", "--config=c.json"], "--config=c.json"),
            (["-t", "arm", "--"], "--"),
            (["--bogus", "-h"], "--bogus"),
            (["-t", "arm", "--bogus", "--version"], "--bogus"),
            (["-t", "arm", "--verb"], "--verb"),
        ],
    )
    def test_only_exact_tokens_accepted(self, argv, token, capsys):
        with pytest.raises(UsageError) as exc_info:
            parse_args(argv)
        assert exc_info.value.message == f"Unknown option: {token}"
        assert capsys.readouterr().out == ""

    def test_help_after_valid_tokens(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            parse_args(["-t", "arm", "-c", "-h", "--bogus"])
        assert exc_info.value.code == 0
        assert "usage: archbuild" in capsys.readouterr().out


class TestHelp:
    def test_help_exits_zero(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            parse_args(["-h"])
        assert exc_info.value.code == 0
        out = capsys.readouterr().out
        assert "usage: archbuild -t <target> [options]" in out
        for flag in ("--target", "--clean", "--inc", "--dry-run", "--json-log"):
            assert flag in out

    def test_version_exits_zero(self, capsys):
        from archbuild import __version__

        with pytest.raises(SystemExit) as exc_info:
            parse_args(["--version"])
        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_build_parser_prog(self):
        assert build_parser().prog == "archbuild"
