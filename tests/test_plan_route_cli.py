import matplotlib

matplotlib.use("Agg")

from scripts.plan_route import main


def test_cli_prints_narration_and_writes_csv(tmp_path, capsys):
    out = tmp_path / "route.csv"
    code = main(["--zones", "dairy", "--products", "Bread", "nothing", "--log_csv", str(out)])
    text = capsys.readouterr().out
    assert code == 0
    assert "Start at the Store Entrance" in text
    assert "Dairy" in text and "Bakery" in text
    assert "Distance:" in text
    assert out.exists()


def test_cli_reports_skipped_zones(capsys):
    code = main(["--zones", "nope"])
    text = capsys.readouterr().out
    assert code == 0
    assert "Skipped nope: unknown-zone" in text
