import json
import os
import re

from conftest import SMALL_BOARD
from play_fortune import default_log_path, simulate_game


def test_simulate_game_writes_log(tmp_path):
    log_file = tmp_path / "sim.jsonl"

    game = simulate_game(num_players=3, seed=4, verbose=False, max_rounds=8, log_file=str(log_file))

    assert game.game_over
    with open(log_file) as f:
        lines = [json.loads(line) for line in f]
    assert lines[0]["event_type"] == "game_start"
    assert lines[-1]["event_type"] == "game_end"
    assert any(line["event_type"] == "player_state" for line in lines)


def test_simulate_game_with_board_file(tmp_path, capsys):
    board_file = tmp_path / "board.json"
    board_file.write_text(json.dumps(SMALL_BOARD))

    game = simulate_game(
        num_players=2,
        agent_type="random",
        seed=1,
        max_rounds=3,
        board_file=str(board_file),
        log_file=str(tmp_path / "sim.jsonl"),
    )

    assert game.board.cycle_length() == 10
    assert game.game_over
    assert "GAME OVER" in capsys.readouterr().out


def test_default_log_path_named_after_seed(tmp_path):
    assert default_log_path(str(tmp_path), 7) == os.path.join(str(tmp_path), "fortune_game_seed7.jsonl")


def test_unseeded_runs_get_timestamped_logs(tmp_path):
    path = default_log_path(str(tmp_path), None)

    assert os.path.dirname(path) == str(tmp_path)
    assert "None" not in path
    assert re.fullmatch(r"fortune_game_\d{8}_\d{6}_\d{6}\.jsonl", os.path.basename(path))
