import pytest

from linedispatch.config import Action, Command, ConfigError, parse_command, read_commands


def test_spawn_command():
    assert parse_command("0 C1 S\n") == Command(0, Action.SPAWN, 1)


def test_terminate_command():
    assert parse_command("12 C3 T\n") == Command(12, Action.TERMINATE, 3)


def test_exit_command_has_no_child():
    command = parse_command("100 EXIT\n")
    assert command.action is Action.EXIT
    assert command.loop == 100
    assert command.child is None


def test_child_zero_is_kept():
    assert parse_command("7 C0 S").child == 0


@pytest.mark.parametrize("line", ["", "   \n", "abc C1 S", "5 C1", "5 Cx S", "5"])
def test_malformed_lines_raise(line):
    with pytest.raises(ConfigError):
        parse_command(line)


def test_read_commands_skips_blank_lines():
    commands = list(read_commands(["0 C1 S\n", "\n", "5 C1 T\n", "9 EXIT\n"]))
    assert [c.action for c in commands] == [Action.SPAWN, Action.TERMINATE, Action.EXIT]
    assert [c.loop for c in commands] == [0, 5, 9]


def test_read_commands_reports_line_number():
    with pytest.raises(ConfigError, match="line 2"):
        list(read_commands(["0 C1 S\n", "x C1 S\n"]))


def test_read_commands_is_lazy_after_exit():
    commands = read_commands(["3 EXIT\n", "garbage\n"])
    assert next(commands) == Command(3, Action.EXIT)