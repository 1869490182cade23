"""
Tests for the dispatch algorithm.

Run with:  python -m pytest tests/test_dispatch.py -v
"""

import pytest

from textconsole.commands import DispatchResult, Outcome, make_command
from textconsole.interface import dispatch, format_help, tokenize

UNRECOGNIZED = "Input unrecognized. Type help for more information about commands"


def run(commands, line, blank_command=None):
    return dispatch(commands, tokenize(line),
                    unrecognized_text=UNRECOGNIZED, blank_command=blank_command)


@pytest.fixture
def quit_cmd(calls):
    return make_command(["quit", "q", "exit"], calls.recorder("quit"), "Leave", arity=0)


class TestMatching:

    def test_alias_invokes_once(self, calls, quit_cmd):
        result = run([quit_cmd], "q")
        assert result.outcome is Outcome.OK
        assert result.alias == "q"
        assert result.command is quit_cmd
        assert calls.count("quit") == 1

    def test_every_alias_matches(self, calls, quit_cmd):
        for line in ("quit", "q", "exit"):
            run([quit_cmd], line)
        assert calls.count("quit") == 3

    def test_arguments_passed_as_strings(self, calls):
        cmd = make_command(["add"], calls.recorder("add"), arity=2)
        run([cmd], "add 1 2")
        assert calls.seen == [("add", ("1", "2"))]

    def test_empty_tokens_count_as_arguments(self, calls):
        cmd = make_command(["pair"], calls.recorder("pair"), arity=2)
        result = run([cmd], "pair  x")
        assert result.ok
        assert calls.seen == [("pair", ("", "x"))]

    def test_matching_is_case_sensitive(self, calls, quit_cmd):
        result = run([quit_cmd], "Q")
        assert result.outcome is Outcome.UNRECOGNIZED_INPUT
        assert calls.count("quit") == 0

    def test_return_value_becomes_message(self):
        cmd = make_command(["echo"], lambda word: word.upper())
        assert run([cmd], "echo hi").message == "HI"

    def test_none_return_prints_nothing(self, quit_cmd):
        assert run([quit_cmd], "q").message == ""


class TestArityMismatch:

    def test_extra_argument_not_invoked(self, calls, quit_cmd):
        result = run([quit_cmd], "q extra")
        assert result.outcome is Outcome.ARITY_MISMATCH
        assert calls.count("quit") == 0
        assert result.expected == 0
        assert result.actual == 1
        assert result.message == (
            "The command q takes 0 arguments. You entered 1. "
            "Type help for more information about commands."
        )

    def test_missing_argument(self, calls):
        cmd = make_command(["add"], calls.recorder("add"), arity=2)
        result = run([cmd], "add 1")
        assert result.outcome is Outcome.ARITY_MISMATCH
        assert "takes 2 arguments" in result.message
        assert "You entered 1" in result.message

    def test_first_match_commits(self, calls):
        first = make_command(["go"], calls.recorder("first"), arity=0)
        second = make_command(["go"], calls.recorder("second"), arity=1)
        result = run([first, second], "go there")
        assert result.outcome is Outcome.ARITY_MISMATCH
        assert result.command is first
        assert calls.seen == []

    def test_active_order_decides_collisions(self, calls):
        first = make_command(["go"], calls.recorder("first"), arity=0)
        second = make_command(["go"], calls.recorder("second"), arity=0)
        run([second, first], "go")
        assert calls.seen == [("second", ())]


class TestUnrecognized:

    def test_unknown_token(self, calls, quit_cmd):
        result = run([quit_cmd], "zzz")
        assert result.outcome is Outcome.UNRECOGNIZED_INPUT
        assert result.message == UNRECOGNIZED
        assert result.command is None

    def test_custom_text_unchanged(self, quit_cmd):
        result = dispatch([quit_cmd], ["zzz"], unrecognized_text="What?")
        assert result.message == "What?"

    def test_no_active_commands(self):
        assert run([], "q").outcome is Outcome.UNRECOGNIZED_INPUT

    def test_leading_space_is_unrecognized(self, calls, quit_cmd):
        assert run([quit_cmd], " q").outcome is Outcome.UNRECOGNIZED_INPUT
        assert calls.seen == []


class TestBlankInput:

    def test_blank_does_not_invoke_handlers(self, calls, quit_cmd):
        other = make_command(["ping"], calls.recorder("ping"), arity=0)
        result = run([quit_cmd, other], "")
        assert result.outcome is Outcome.UNRECOGNIZED_INPUT
        assert calls.seen == []

    def test_designated_blank_command(self, calls, quit_cmd):
        ping = make_command(["ping"], calls.recorder("ping"), arity=0)
        result = run([quit_cmd, ping], "", blank_command="ping")
        assert result.ok
        assert calls.seen == [("ping", ())]

    def test_inactive_blank_command_ignored(self, calls, quit_cmd):
        result = run([quit_cmd], "", blank_command="ping")
        assert result.outcome is Outcome.UNRECOGNIZED_INPUT

    def test_blank_command_must_take_no_arguments(self, calls):
        echo = make_command(["echo"], calls.recorder("echo"), arity=1)
        result = run([echo], "", blank_command="echo")
        assert result.outcome is Outcome.UNRECOGNIZED_INPUT
        assert calls.seen == []


class TestHandlerError:

    def test_exception_reported_not_raised(self):
        def boom():
            raise RuntimeError("disk on fire")
        result = run([make_command(["boom"], boom)], "boom")
        assert result.outcome is Outcome.HANDLER_ERROR
        assert result.message == "disk on fire"
        assert isinstance(result.error, RuntimeError)

    def test_empty_message_uses_type_name(self):
        def boom():
            raise KeyError()
        assert run([make_command(["boom"], boom)], "boom").message == "KeyError"

    def test_multiline_message_folded_to_one_line(self):
        def boom():
            raise ValueError("bad value\nsecond line\r\n")
        result = run([make_command(["boom"], boom)], "boom")
        assert result.outcome is Outcome.HANDLER_ERROR
        assert result.message == "bad value second line"

    def test_whitespace_only_message_uses_type_name(self):
        def boom():
            raise RuntimeError("\n\n")
        assert run([make_command(["boom"], boom)], "boom").message == "RuntimeError"

    def test_no_fallback_after_error(self, calls):
        def boom():
            raise ValueError("bad")
        first = make_command(["go"], boom)
        second = make_command(["go"], calls.recorder("second"), arity=0)
        result = run([first, second], "go")
        assert result.outcome is Outcome.HANDLER_ERROR
        assert calls.seen == []

    def test_system_exit_propagates(self):
        def leave():
            raise SystemExit(0)
        with pytest.raises(SystemExit):
            run([make_command(["quit"], leave)], "quit")


class TestResultAndHelp:

    def test_result_str_is_message(self):
        assert str(DispatchResult(Outcome.OK, "done")) == "done"

    def test_format_help(self, quit_cmd):
        echo = make_command(["echo", "say"], lambda w: w, "Echo a word")
        assert format_help([echo, quit_cmd]) == ["echo : Echo a word", "quit : Leave"]
