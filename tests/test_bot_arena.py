from bots.bot_arena import main, run_match
from bots.heuristic import HeuristicBot
from bots.random_bot import RandomBot


def test_run_match_executes():
    results = run_match(HeuristicBot(seed=1), RandomBot(seed=2), seed=7, dealer=0)
    assert len(results["scores"]) == 2
    assert max(results["scores"]) == 121
    assert results["scores"][results["winner"]] == 121
    assert results["rounds"] == len(results["history"])
    assert isinstance(results["skunk"], bool)


def test_run_match_is_repeatable():
    first = run_match(HeuristicBot(seed=3), HeuristicBot(seed=4), seed=11)
    second = run_match(HeuristicBot(seed=3), HeuristicBot(seed=4), seed=11)
    assert first == second


def test_cli_reports_totals(capsys):
    main(["--bot-a", "heuristic", "--bot-b", "random", "--n", "2", "--seed", "5"])
    out = capsys.readouterr().out
    assert "heuristic vs random over 2 matches" in out
