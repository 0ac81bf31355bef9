import pytest

from hplbench.cli import CommandLine, help_text, parse_args, version_text
from hplbench.settings import ConfigError


def test_defaults_without_arguments():
    opts = parse_args([])
    assert opts == CommandLine()
    assert opts.n == 45312
    assert opts.nb == 384
    assert opts.input_file == "HPL.dat"
    assert opts.use_input_file


def test_none_behaves_like_empty():
    assert parse_args(None) == parse_args([])


def test_grid_and_sizes():
    opts = parse_args(["-P", "2", "--ranksQ", "4", "-N", "1000", "--sizeNB", "64"])
    assert (opts.big_p, opts.big_q, opts.n, opts.nb) == (2, 4, 1000, 64)
    assert opts.cmdline_run
    assert not opts.use_input_file


def test_local_grid_options():
    opts = parse_args(["-p", "2", "-q", "3"])
    assert (opts.p, opts.q) == (2, 3)
    assert opts.cmdline_run


def test_frac_does_not_mark_command_line_run():
    opts = parse_args(["-f", "0.25"])
    assert opts.frac == 0.25
    assert not opts.cmdline_run
    assert opts.use_input_file


def test_input_file_overrides_command_line():
    opts = parse_args(["-N", "100", "--input", "my.dat"])
    assert opts.input_file == "my.dat"
    assert opts.input_given
    assert opts.use_input_file


@pytest.mark.parametrize(
    "argv, message",
    [
        (["-P", "0"], "Illegal value for P. Exiting ..."),
        (["-Q", "-1"], "Illegal value for Q. Exiting ..."),
        (["-N", "0"], "Illegal value for N. Exiting ..."),
        (["-NB", "abc"], "Illegal value for NB. Exiting ..."),
    ],
)
def test_illegal_values(argv, message):
    with pytest.raises(ConfigError) as info:
        parse_args(argv)
    assert str(info.value) == message


def test_missing_value():
    with pytest.raises(ConfigError):
        parse_args(["-N"])


def test_leading_integer_is_read():
    assert parse_args(["-N", "12abc"]).n == 12


def test_help_stops_parsing():
    opts = parse_args(["--help", "-P", "0"])
    assert opts.show_help
    assert opts.big_p == 1


def test_version_flag():
    opts = parse_args(["--version"])
    assert opts.show_version
    assert not opts.show_help


def test_unknown_arguments_ignored():
    assert parse_args(["--bogus", "x"]) == CommandLine()


def test_help_text_lists_options():
    text = help_text()
    assert text.endswith("\n")
    for flag in ("--ranksP", "--ranksQ", "--sizeN", "--sizeNB", "--frac", "--input", "--version"):
        assert flag in text


def test_version_text_shape():
    text = version_text()
    assert text.startswith("hplbench version: ")
    assert text.endswith("\n")
    assert text.strip().split(": ")[1].count(".") == 2