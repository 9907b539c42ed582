"""Tests for console input parsing, prompting and the command-line setup."""

import pytest

from connectfour.debug import debug, DebugLevel
from connectfour.interfaces.cli import (SimpleCLI, configure_debug, parse_args,
                                        parse_column, parse_dimensions,
                                        parse_game_count)
from connectfour.utils import ColumnChoice, EndSession, InvalidInputFormat, OutOfRange


class TestParseDimensions:

    def test_empty_means_default(self):
        assert parse_dimensions("") == (6, 7)

    @pytest.mark.parametrize("text, expected", [
        ("5x9", (5, 9)),
        ("  7 X 8 ", (7, 8)),
        ("9 x 5", (9, 5)),
    ])
    def test_valid(self, text, expected):
        assert parse_dimensions(text) == expected

    @pytest.mark.parametrize("text", ["6", "6x", "x7", "6*7", "six x seven", " ", "6 x 7 x 8",
                                      "٦ x ٧", "6 x ７", "+6 x 7", "6_0 x 7"])
    def test_invalid_format(self, text):
        with pytest.raises(InvalidInputFormat, match="Invalid input"):
            parse_dimensions(text)

    def test_rows_out_of_range_reported_first(self):
        with pytest.raises(OutOfRange, match="Board rows should be from 5 to 9"):
            parse_dimensions("4 x 10")

    def test_columns_out_of_range(self):
        with pytest.raises(OutOfRange, match="Board columns should be from 5 to 9"):
            parse_dimensions("6 x 10")


class TestParseGameCount:

    def test_empty_means_single_game(self):
        assert parse_game_count("") == 1

    def test_number(self):
        assert parse_game_count("3") == 3

    @pytest.mark.parametrize("text, error", [
        ("abc", InvalidInputFormat),
        ("1.5", InvalidInputFormat),
        ("1_0", InvalidInputFormat),
        (" 2 ", InvalidInputFormat),
        ("٣", InvalidInputFormat),
        ("0", OutOfRange),
        ("-2", OutOfRange),
    ])
    def test_rejected(self, text, error):
        with pytest.raises(error, match="Invalid input"):
            parse_game_count(text)


class TestParseColumn:

    def test_column_choice(self):
        assert parse_column("4", 7) == ColumnChoice(4)

    def test_end_command(self):
        assert parse_column("end", 7) == EndSession()

    def test_not_a_number(self):
        with pytest.raises(InvalidInputFormat, match="Incorrect column number"):
            parse_column("four", 7)

    @pytest.mark.parametrize("text", ["0_5", " 3 ", "3\n", "٣", "３", "3.0", "", "+", "End"])
    def test_only_plain_ascii_integers(self, text):
        with pytest.raises(InvalidInputFormat, match="Incorrect column number"):
            parse_column(text, 7)

    def test_signed_integer_is_a_number(self):
        assert parse_column("+3", 7) == ColumnChoice(3)
        with pytest.raises(OutOfRange):
            parse_column("-3", 7)

    @pytest.mark.parametrize("text", ["0", "8", "-1"])
    def test_out_of_range(self, text):
        with pytest.raises(OutOfRange, match=r"The column number is out of range \(1 - 7\)"):
            parse_column(text, 7)


class TestConsolePrompts:

    def test_dimensions_retry_until_valid(self, scripted_console):
        console = scripted_console(["banana", "4 x 6", "6 x 10", "8 x 8"])
        assert console.request_board_dimensions() == (8, 8)
        assert "Invalid input" in console.output
        assert "Board rows should be from 5 to 9" in console.output
        assert "Board columns should be from 5 to 9" in console.output
        assert console.output.count("Set the board dimensions (Rows x Columns)") == 4

    def test_game_count_retry_until_valid(self, scripted_console):
        console = scripted_console(["zero", "0", "2"])
        assert console.request_game_count() == 2
        assert console.output.count("Invalid input") == 2

    def test_column_retry_until_valid(self, scripted_console):
        console = scripted_console(["x", "9", "3"])
        assert console.request_column("Anna", 7) == ColumnChoice(3)
        assert console.output == [
            "Anna's turn", "Incorrect column number",
            "Anna's turn", "The column number is out of range (1 - 7)",
            "Anna's turn",
        ]

    def test_closed_input_ends_session(self, scripted_console):
        console = scripted_console([])
        assert console.request_column("Anna", 7) == EndSession()

    def test_player_names(self, scripted_console):
        console = scripted_console(["Anna", "Ben"])
        assert console.request_player_name(1) == "Anna"
        assert console.request_player_name(2) == "Ben"
        assert console.output == ["First player's name:", "Second player's name:"]


class TestArguments:

    def test_defaults(self):
        args = parse_args([])
        assert args.rows is None and args.columns is None and args.games is None
        assert args.debug_level == "warning"

    def test_board_options(self):
        args = parse_args(["--rows", "5", "--columns", "9", "--games", "2"])
        assert (args.rows, args.columns, args.games) == (5, 9, 2)

    @pytest.mark.parametrize("argv", [["--rows", "4"], ["--columns", "10"], ["--games", "0"]])
    def test_out_of_range_options(self, argv):
        with pytest.raises(SystemExit):
            parse_args(argv)

    def test_configure_debug_level(self):
        try:
            configure_debug(parse_args(["--debug-level", "info"]))
            assert debug.level == DebugLevel.INFO
            configure_debug(parse_args(["--debug"]))
            assert debug.level == DebugLevel.DEBUG
        finally:
            debug.configure(level=DebugLevel.WARNING)


class TestSimpleCLI:

    def test_single_game_from_prompts(self, scripted_console):
        console = scripted_console(["Anna", "Ben", "", ""] + ["1", "2"] * 3 + ["1"])
        result = SimpleCLI(parse_args([]), console).run()

        assert not result.aborted
        out = console.output
        assert out[0] == "Connect Four"
        assert "Anna VS Ben" in out
        assert "6 x 7 board" in out
        assert "Single game" in out
        assert "Player Anna won" in out
        assert out[-1] == "Game over!"

    def test_options_skip_prompts(self, scripted_console):
        console = scripted_console(["Anna", "Ben", "end"])
        args = parse_args(["--rows", "5", "--columns", "5", "--games", "3"])
        result = SimpleCLI(args, console).run()

        assert result.aborted
        out = console.output
        assert "Set the board dimensions (Rows x Columns)" not in out
        assert "5 x 5 board" in out
        assert "Total 3 games" in out
        assert "Game #1" in out
        assert " 1 2 3 4 5" in out
        assert out[-2:] == ["Anna's turn", "Game over!"]

    def test_single_dimension_option_defaults_the_other(self, scripted_console):
        console = scripted_console(["Anna", "Ben", "end"])
        result = SimpleCLI(parse_args(["--rows", "8", "--games", "1"]), console).run()

        assert result.aborted
        assert "Set the board dimensions (Rows x Columns)" not in console.output
        assert "8 x 7 board" in console.output

    def test_closed_input_during_setup(self, scripted_console):
        console = scripted_console(["Anna"])
        result = SimpleCLI(parse_args([]), console).run()
        assert result.aborted
        assert console.output[-1] == "Game over!"
