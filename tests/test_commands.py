import math

import pytest

from kuruk.commands import (
    ErForceSpecs,
    RobotLimits,
    RobotSpecs,
    StrategySpecs,
    TeamCommandMerger,
    convert_all_specs,
    convert_specs,
    scale_teleport_ball,
    scale_teleport_robot,
    scale_up,
)


def _limits(**overrides):
    values = dict(
        acc_speedup_absolute_max=3.0,
        acc_speedup_angular_max=50.0,
        acc_brake_absolute_max=4.0,
        acc_brake_angular_max=60.0,
        vel_absolute_max=2.5,
        vel_angular_max=10.0,
    )
    values.update(overrides)
    return RobotLimits(**values)


def _spec(**overrides):
    values = dict(
        id=3,
        team="BLUE",
        radius=0.09,
        height=0.15,
        mass=2.0,
        center_to_dribbler=0.06,
        limits=_limits(),
        custom=(ErForceSpecs(shoot_radius=0.067, dribbler_width=0.07),),
    )
    values.update(overrides)
    return RobotSpecs(**values)


def _chip(speed):
    return speed * 2


def test_scale_up_scales_only_present_fields():
    values = {"x": 1.5, "y": None, "id": 4}
    result = scale_up(values, ["x", "y", "z"])
    assert result == {"x": 1500.0, "y": None, "id": 4}
    assert values["x"] == 1.5


def test_scale_teleport_ball_fields():
    ball = {"x": 1.0, "y": 2.0, "z": 0.5, "vx": 0.25, "vy": -1.0, "vz": 3.0, "by_force": True}
    result = scale_teleport_ball(ball)
    assert result == {
        "x": 1000.0, "y": 2000.0, "z": 500.0,
        "vx": 250.0, "vy": -1000.0, "vz": 3000.0, "by_force": True,
    }


def test_scale_teleport_robot_leaves_orientation():
    robot = {"x": 1.0, "y": -2.0, "v_x": 0.5, "v_y": 0.25, "orientation": 1.0}
    result = scale_teleport_robot(robot)
    assert result["orientation"] == 1.0
    assert result["x"] == 1000.0
    assert result["v_y"] == 250.0


def test_convert_specs_fixed_values():
    is_blue, out = convert_specs(_spec(), _chip)
    assert is_blue is True
    assert out["year"] == 1970
    assert out["generation"] == 0
    assert out["dribbler_height"] == 0.04
    assert out["shot_linear_max"] == 100
    assert out["shot_chip_max"] == 100
    assert out["id"] == 3
    assert out["v_max"] == 2.5
    assert out["omega_max"] == 10.0


def test_convert_specs_strategy_duplicates_absolute_limits():
    _, out = convert_specs(_spec(), _chip)
    assert out["strategy"] == StrategySpecs(3.0, 3.0, 50.0, 4.0, 4.0, 60.0)


def test_convert_specs_angle_invariant():
    _, out = convert_specs(_spec(), _chip)
    assert math.cos(out["angle"] / 2) == pytest.approx(0.06 / 0.09)


def test_convert_specs_kick_speeds():
    _, out = convert_specs(_spec(max_linear_kick_speed=6.5, max_chip_kick_speed=3.0), _chip)
    assert out["shot_linear_max"] == 6.5
    assert out["shot_chip_max"] == _chip(3.0)


def test_convert_specs_yellow_team():
    is_blue, _ = convert_specs(_spec(team="YELLOW"), _chip)
    assert is_blue is False


def test_convert_specs_picks_erforce_extension_among_custom():
    spec = _spec(custom=("other", ErForceSpecs(shoot_radius=0.05, dribbler_width=0.08)))
    _, out = convert_specs(spec, _chip)
    assert out["shoot_radius"] == 0.05
    assert out["dribbler_width"] == 0.08


@pytest.mark.parametrize(
    "overrides",
    [
        {"mass": None},
        {"limits": None},
        {"center_to_dribbler": None},
        {"custom": ()},
        {"custom": (ErForceSpecs(dribbler_width=0.07),)},
        {"custom": (ErForceSpecs(shoot_radius=0.07),)},
        {"limits": _limits(vel_angular_max=None)},
        {"limits": _limits(acc_brake_absolute_max=None)},
        {"id": None},
        {"team": None},
    ],
)
def test_convert_specs_missing_field(overrides):
    with pytest.raises(ValueError):
        convert_specs(_spec(**overrides), _chip)


def test_convert_all_specs_splits_teams_and_reports_errors(capsys):
    specs = [_spec(id=0), _spec(id=1, team="YELLOW"), _spec(id=2, mass=None), _spec(id=4)]
    command, errors = convert_all_specs(specs, _chip)
    assert [r["id"] for r in command["set_team_blue"]] == [0, 4]
    assert [r["id"] for r in command["set_team_yellow"]] == [1]
    assert len(errors) == 1
    assert errors[0].code == "INVALID_SPEC"
    captured = capsys.readouterr()
    assert "Updated to 3 robots" in captured.out


def test_convert_all_specs_omits_empty_team():
    command, errors = convert_all_specs([_spec(team="YELLOW")], _chip)
    assert "set_team_blue" not in command
    assert errors == []


def test_merger_forwards_plain_command_unchanged():
    merger = TeamCommandMerger()
    command = {"set_team_blue": [{"id": 1}]}
    assert merger.handle(command) == [command]
    assert merger.team_command == {"set_team_blue": [{"id": 1}]}
    assert merger.setup is None


def test_merger_replays_teams_on_setup():
    merger = TeamCommandMerger()
    merger.handle({"set_team_yellow": [{"id": 2}], "simulator": {"realism_config": {"noise": 1}}})
    command = {
        "set_team_blue": [{"id": 1}],
        "simulator": {"simulator_setup": {"geometry": "g"}},
    }
    team, forwarded = merger.handle(command)
    assert team["set_team_blue"] == [{"id": 1}]
    assert team["set_team_yellow"] == [{"id": 2}]
    assert team["simulator"] == {"realism_config": {"noise": 1}, "enable": True}
    assert team["transceiver"] == {"charge": True}
    assert "set_team_blue" not in forwarded
    assert forwarded["simulator"] == {"simulator_setup": {"geometry": "g"}}
    assert merger.setup == {"geometry": "g"}
    assert "set_team_blue" in command


def test_merger_strips_realism_from_setup_command():
    merger = TeamCommandMerger()
    result = merger.handle(
        {"simulator": {"simulator_setup": {"geometry": "g"}, "realism_config": {"noise": 2}}}
    )
    assert len(result) == 2
    assert result[0]["simulator"]["realism_config"] == {"noise": 2}
    assert "realism_config" not in result[1]["simulator"]


def test_merger_keeps_realism_without_setup():
    merger = TeamCommandMerger()
    command = {"simulator": {"realism_config": {"noise": 3}}}
    (forwarded,) = merger.handle(command)
    assert forwarded["simulator"]["realism_config"] == {"noise": 3}
    assert merger.team_command["simulator"]["realism_config"] == {"noise": 3}


def test_convert_specs_dribbler_at_rim_gives_zero_angle():
    _, out = convert_specs(_spec(center_to_dribbler=0.09), _chip)
    assert out["angle"] == pytest.approx(0.0)
    assert out["radius"] == pytest.approx(0.09)