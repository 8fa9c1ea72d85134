import io
import re

import pytest

from kuruk.simerrors import (
    MoveCommand,
    RadioResponse,
    RobotCommand,
    RobotFeedback,
    SimError,
    SimErrorSource,
    SimulatorError,
    check_robot_commands,
    log,
    make_error,
    robot_feedback,
    warn_latency,
)


def test_log_prefixes_time():
    buf = io.StringIO()
    log(buf, "hello\n")
    text = buf.getvalue()
    assert text[8:] == " hello\n"
    assert re.fullmatch(r"\d{2}:\d{2}:\d{2}", text[:8]) is not None


@pytest.mark.parametrize(
    "code, wire",
    [
        (SimError.UNREADABLE, "UNREADABLE"),
        (SimError.UNSUPPORTED_VELOCITY, "VELOCITY_TYPE"),
        (SimError.UNSUPPORTED_ANGLE, "ANGLE_VALUE"),
        (SimError.MISSING_SPEC, "INVALID_SPEC"),
        (SimError.INVALID_REALISM, "INVALID_REALISM"),
    ],
)
def test_make_error_codes(code, wire, capsys):
    err = make_error(code, SimErrorSource.CONTROLLER, "")
    assert err.code == wire
    assert err.message.startswith(code.description)


def test_make_error_message_and_log(capsys):
    err = make_error(SimError.UNREADABLE, SimErrorSource.BLUE_TEAM, "extra")
    assert err == SimulatorError("UNREADABLE", "The received message was unreadable extra")
    written = capsys.readouterr().err
    assert "[BLUE       - UNREADABLE     ] The received message was unreadable extra\n" in written


def test_make_error_empty_appendix_keeps_space(capsys):
    err = make_error(SimError.UNREADABLE, SimErrorSource.YELLOW_TEAM, "")
    assert err.message == "The received message was unreadable "
    assert "[YELLOW" in capsys.readouterr().err


def test_warn_latency_threshold():
    buf = io.StringIO()
    assert warn_latency(1_000_000, buf) is False
    assert buf.getvalue() == ""
    assert warn_latency(2_000_000, buf) is True
    assert "Warning: Handled Datagram in 2000000ns, should be lower than 1e6\n" in buf.getvalue()


def test_check_robot_commands_flags_unsupported(capsys):
    commands = [
        RobotCommand(1, MoveCommand(local_velocity=(1.0, 0.0, 0.0))),
        RobotCommand(2, MoveCommand(wheel_velocity=(1.0, 1.0, 1.0, 1.0))),
        RobotCommand(3),
        RobotCommand(4, MoveCommand(global_velocity=(0.0, 1.0, 0.0))),
    ]
    errors = check_robot_commands(commands, SimErrorSource.BLUE_TEAM)
    assert [e.code for e in errors] == ["VELOCITY_TYPE", "VELOCITY_TYPE"]
    assert errors[0].message.endswith("(Robot :2)")
    assert errors[1].message.endswith("(Robot :4)")


def test_check_robot_commands_all_fine():
    commands = [RobotCommand(i, MoveCommand(local_velocity=(0.0, 0.0, 0.0))) for i in range(3)]
    assert check_robot_commands(commands, SimErrorSource.YELLOW_TEAM) == []


def test_robot_feedback_filters_team_and_fields():
    responses = [
        RadioResponse(0, is_blue=True, ball_detected=True),
        RadioResponse(1, is_blue=False, ball_detected=True),
        RadioResponse(2, is_blue=True, ball_detected=None),
        RadioResponse(3, is_blue=None, ball_detected=False),
        RadioResponse(4, is_blue=True, ball_detected=False),
    ]
    assert robot_feedback(responses, True) == [
        RobotFeedback(0, True),
        RobotFeedback(4, False),
    ]
    assert robot_feedback(responses, False) == [RobotFeedback(1, True)]


def test_robot_feedback_empty():
    assert robot_feedback([], True) == []