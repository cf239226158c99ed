"""
End-to-end tests for the bike_driving command line

Run with:  python -m pytest test_bike_driving.py -v
"""

import logging

import pytest

from bike_driving import main


@pytest.fixture
def test_env(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    return tmp_path


@pytest.fixture
def command_file(test_env):
    def write(text):
        path = test_env / "commands.txt"
        path.write_text(text)
        return str(path)
    return write


class TestExitCodes:

    def test_help_exits_zero(self, test_env, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--help"])
        assert exc.value.code == 0
        assert "input_file" in capsys.readouterr().out

    def test_missing_input_file_argument(self, test_env, capsys):
        assert main([]) == 1
        out = capsys.readouterr().out
        assert "ABORT: You must specify an input file" in out
        assert "usage:" in out

    def test_nonexistent_input_file(self, test_env, capsys):
        assert main(["nope.txt"]) == 1
        assert "ABORT: nope.txt is not a valid input file" in capsys.readouterr().out

    def test_invalid_board_config(self, command_file):
        path = command_file("GPS_REPORT\n")
        assert main([path, "--width", "-1"]) == 1

    def test_create_config(self, test_env):
        assert main(["--create-config", "sample.yaml"]) == 0
        assert (test_env / "sample.yaml").exists()


class TestRun:

    def test_report(self, command_file, capsys):
        path = command_file("PLACE 1,1,WEST\nGPS_REPORT\n")
        assert main([path]) == 0
        assert capsys.readouterr().out.splitlines() == ["1,1,WEST"]

    def test_ignored_commands_are_printed(self, command_file, capsys):
        path = command_file(
            "FORWARD\n"
            "PLACE 0,0,SOUTH\n"
            "FORWARD\n"
            "TURN_RIGHT\n"
            "TURN_RIGHT\n"
            "FORWARD 3\n"
            "GPS_REPORT\n"
        )
        assert main([path]) == 0
        assert capsys.readouterr().out.splitlines() == [
            'Ignored "forward": Bike cannot move if unplaced.',
            'Ignored "forward": Bike cannot move to invalid position (0, -1)',
            "0,3,NORTH",
        ]

    def test_unknown_and_malformed_lines_are_silent(self, command_file, capsys):
        path = command_file(
            "\n"
            "JUMP 3\n"
            "PLACE 1,x,NORTH\n"
            "PLACE 2,2\n"
            "place 2,2,east\n"
            "gps_report\n"
        )
        assert main([path]) == 0
        assert capsys.readouterr().out.splitlines() == ["2,2,EAST"]

    def test_board_size_from_cli(self, command_file, capsys):
        path = command_file("PLACE 8,8,NORTH\nGPS_REPORT\n")
        assert main([path, "--width", "10", "--height", "10"]) == 0
        assert capsys.readouterr().out.splitlines() == ["8,8,NORTH"]

    def test_default_board_rejects_outside_seven_by_seven(self, command_file, capsys):
        path = command_file("PLACE 7,0,NORTH\nGPS_REPORT\n")
        assert main([path]) == 0
        assert capsys.readouterr().out.splitlines() == [
            'Ignored "place": Invalid position (7, 0)',
            'Ignored "gps_report": Bike cannot report if unplaced.',
        ]

    def test_verbose_does_not_gate_ignored_lines(self, command_file, capsys):
        path = command_file("TURN_LEFT\n")
        assert main([path, "-v"]) == 0
        out = capsys.readouterr().out
        assert "VERBOSE" in out
        assert 'Ignored "turn_left": Bike cannot rotate left if unplaced.' in out

    def test_quiet_still_prints_ignored_lines(self, command_file, capsys):
        path = command_file("TURN_LEFT\n")
        assert main([path, "-q"]) == 0
        assert 'Ignored "turn_left"' in capsys.readouterr().out

    def test_normal_run_logs_nothing_at_info(self, command_file, caplog):
        path = command_file("PLACE 1,1,WEST\nFORWARD\nGPS_REPORT\n")
        with caplog.at_level(logging.INFO):
            assert main([path]) == 0
        noisy = [
            record for record in caplog.records
            if record.name.startswith("bike_commands") and record.levelno >= logging.INFO
        ]
        assert noisy == []
