import pytest

from id3py.cli import main


def test_training_mode_prints_the_tree(weather_path, capsys):
    assert main(["-f", str(weather_path), "-v", "training", "--no-shuffle"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "b(root, temperature)"
    assert len(out) == 4
    assert out[-1] == "training accuracy: 1.0"


def test_training_mode_respects_levels(weather_path, capsys):
    assert main(["-f", str(weather_path), "-v", "training", "--no-shuffle", "--levels", "1"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out == ["b(root, temperature)", "training accuracy: 1.0"]


@pytest.mark.parametrize("prune", [[], ["--prune"]])
def test_random_mode(weather_path, capsys, prune):
    assert main(["-f", str(weather_path), "-v", "random", "60", "--seed", "3", *prune]) == 0
    out = capsys.readouterr().out
    assert out.startswith("test accuracy: ")
    assert 0.0 <= float(out.split(": ")[1]) <= 1.0


def test_cross_mode(weather_path, capsys):
    assert main(["-f", str(weather_path), "-v", "cross", "7", "--prune", "--seed", "0"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert [line.split(": ")[0] for line in out] == ["mean accuracy", "mean live nodes", "mean depth"]


def test_malformed_file_exits_with_status_1(tmp_path, capsys):
    path = tmp_path / "bad.arff"
    path.write_text("@attribute a {x, y}\n@attribute c {p, n}\n@data\nz,p\n")
    assert main(["-f", str(path), "-v", "training"]) == 1
    assert "id3py: error:" in capsys.readouterr().err


def test_too_many_folds_exits_with_status_1(weather_path, capsys):
    assert main(["-f", str(weather_path), "-v", "cross", "20"]) == 1
    assert "fold count" in capsys.readouterr().err


@pytest.mark.parametrize(
    "validation",
    [
        ["bogus"],
        ["cross"],
        ["cross", "x"],
        ["cross", "1"],
        ["random", "150"],
        ["random", "abc"],
        ["training", "3"],
    ],
)
def test_invalid_validation_arguments(weather_path, validation):
    with pytest.raises(SystemExit) as exc:
        main(["-f", str(weather_path), "-v", *validation])
    assert exc.value.code == 2


def test_missing_file(tmp_path):
    with pytest.raises(SystemExit) as exc:
        main(["-f", str(tmp_path / "missing.arff"), "-v", "training"])
    assert exc.value.code == 2


def test_learner_is_reserved(weather_path):
    with pytest.raises(SystemExit):
        main(["-f", str(weather_path), "-v", "training", "-l", "forest"])


def test_random_mode_prunes_tiny_training_parts(weather_path, capsys):
    # 10% of 14 records leaves a single training record
    assert main(["-f", str(weather_path), "-v", "random", "10", "--no-shuffle", "--prune"]) == 0
    assert capsys.readouterr().out.startswith("test accuracy: ")
