import importlib.util
from pathlib import Path

import pytest

from crk_langid.models.naive_bayes import Language
from crk_langid.scripts import classify, evaluate

PROJECT_ROOT = Path(__file__).resolve().parents[1]


@pytest.fixture
def word_lists(write_list):
    crk = write_list("itwêwina", ["ab", "Âb!", "acimosis"])
    eng = write_list("words", ["ab", "cd", "cd"])
    return crk, eng


def test_build_model_trains_and_prunes(word_lists, capsys) -> None:
    model = classify.build_model(*word_lists)
    assert dict(model.lines_seen) == {Language.CRK: 3, Language.ENG: 3}
    assert model.classify("ab") is Language.CRK
    assert model.classify("cd") is Language.ENG
    err = capsys.readouterr().err
    assert "[INFO] Counted 3 crk lines" in err
    assert "[INFO] Kept" in err


def test_build_model_fails_before_training_on_missing_file(write_list, tmp_path) -> None:
    crk = write_list("itwêwina", ["ab"])
    with pytest.raises(FileNotFoundError, match="Missing file"):
        classify.build_model(crk, tmp_path / "missing")


def test_main_reports_missing_word_list(tmp_path, capsys) -> None:
    code = classify.main(["--crk_words", str(tmp_path / "nope"), "--eng_words", str(tmp_path / "nada")])
    assert code == 1
    assert "[ERROR] Missing file" in capsys.readouterr().err


def _deny_open(monkeypatch, name: str) -> None:
    real_open = Path.open

    def _open(self, *args, **kwargs):
        if self.name == name:
            raise PermissionError(13, "Permission denied", str(self))
        return real_open(self, *args, **kwargs)

    monkeypatch.setattr(Path, "open", _open)


def test_main_reports_unreadable_word_list(word_lists, monkeypatch, capsys) -> None:
    crk, eng = word_lists
    _deny_open(monkeypatch, eng.name)
    code = classify.main(["--crk_words", str(crk), "--eng_words", str(eng)])
    assert code == 1
    assert "[ERROR]" in capsys.readouterr().err


def test_main_reports_directory_word_list(word_lists, tmp_path, capsys) -> None:
    crk, _ = word_lists
    code = classify.main(["--crk_words", str(crk), "--eng_words", str(tmp_path)])
    assert code == 1
    assert "[ERROR] Not a file" in capsys.readouterr().err


def test_evaluate_main_reports_unreadable_dev_list(word_lists, write_list, monkeypatch, capsys) -> None:
    crk, eng = word_lists
    crk_dev = write_list("crk_dev", ["ab"])
    eng_dev = write_list("eng_dev", ["cd"])
    _deny_open(monkeypatch, eng_dev.name)
    code = evaluate.main([
        "--crk_words", str(crk), "--eng_words", str(eng),
        "--crk_dev", str(crk_dev), "--eng_dev", str(eng_dev),
    ])
    assert code == 1
    assert "[ERROR]" in capsys.readouterr().err


def test_main_classifies_query_file(word_lists, write_list, capsys) -> None:
    crk, eng = word_lists
    queries = write_list("queries", ["AB!", "", "!!", "cd", "zz"])
    code = classify.main(["--crk_words", str(crk), "--eng_words", str(eng), "--input", str(queries)])
    assert code == 0
    captured = capsys.readouterr()
    assert captured.out.splitlines() == ["ab: crk", ": eng", ": eng", "cd: eng", "zz: eng"]
    assert "[WARN] Empty query line" in captured.err


def test_verbose_prints_probabilities(word_lists, capsys) -> None:
    model = classify.build_model(*word_lists)
    capsys.readouterr()
    assert classify.run_queries(model, ["ab\n"], verbose=True) == 1
    out = capsys.readouterr().out
    assert "P(crk|ab) =" in out
    assert "P(eng|ab) =" in out
    assert out.splitlines()[-1] == "ab: crk"


def test_show_features_renders_markers(word_lists, capsys) -> None:
    crk, eng = word_lists
    assert classify.main(["--crk_words", str(crk), "--eng_words", str(eng), "--show_features"]) == 0
    rows = capsys.readouterr().out.splitlines()
    assert rows[0].split() == ["bigram", "crk", "eng"]
    assert ["^a", "3", "1"] in [r.split() for r in rows[2:]]
    assert ["d$", "0", "2"] in [r.split() for r in rows[2:]]


def test_evaluate_reports_accuracy_and_confusion(word_lists) -> None:
    model = classify.build_model(*word_lists)
    acc, conf, errors = evaluate.evaluate(
        model, {Language.CRK: ["ab", "cd"], Language.ENG: ["cd"]}
    )
    assert acc == pytest.approx(2 / 3)
    assert conf[Language.CRK][Language.ENG] == 1
    assert conf[Language.ENG][Language.ENG] == 1
    assert [e[3] for e in errors] == ["cd"]

    report = evaluate.format_report(acc, conf, errors)
    assert "Dev accuracy: 0.667" in report
    assert "Confusion Matrix (Dev set):" in report


def test_evaluate_main_writes_report(word_lists, write_list, tmp_path, capsys) -> None:
    crk, eng = word_lists
    crk_dev = write_list("crk_dev", ["ab"])
    eng_dev = write_list("eng_dev", ["cd"])
    out = tmp_path / "out" / "report.txt"
    code = evaluate.main([
        "--crk_words", str(crk), "--eng_words", str(eng),
        "--crk_dev", str(crk_dev), "--eng_dev", str(eng_dev),
        "--out", str(out),
    ])
    assert code == 0
    assert "Dev accuracy: 1.000" in out.read_text(encoding="utf-8")
    assert "[SAVED]" in capsys.readouterr().out


def _load_prepare_wordlists():
    path = PROJECT_ROOT / "data" / "scripts" / "prepare_wordlists.py"
    spec = importlib.util.spec_from_file_location("prepare_wordlists", path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_sample_words_is_seeded_and_sorted_case_insensitively() -> None:
    prep = _load_prepare_wordlists()
    dictionary = ["banana", "Apple", "cherry", "Date", "elder", "fig"]
    words = prep.sample_words(dictionary, 4, seed=13)
    assert len(words) == 4
    assert set(words) <= set(dictionary)
    assert words == sorted(words, key=str.upper)
    assert words == prep.sample_words(dictionary, 4, seed=13)


def test_sample_words_refuses_to_oversample() -> None:
    prep = _load_prepare_wordlists()
    with pytest.raises(ValueError):
        prep.sample_words(["a", "b"], 3, seed=0)
