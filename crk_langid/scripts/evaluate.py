#!/usr/bin/env python3
import argparse
import sys
from pathlib import Path

from crk_langid.data.datasets import ensure_exists, load_words
from crk_langid.data.utils import default_word_lists
from crk_langid.models.naive_bayes import LANGS, PRUNE_THRESHOLD, Language
from crk_langid.scripts.classify import build_model


def evaluate(model, dev_by_lang):
    """Returns (accuracy, confusion matrix, misclassified rows)."""
    conf = {true: {pred: 0 for pred in LANGS} for true in LANGS}
    errors = []
    correct = total = 0
    for true, words in dev_by_lang.items():
        for w in words:
            pred, scores = model.predict(w)
            conf[true][pred] += 1
            if pred == true:
                correct += 1
            else:
                errors.append((true, pred, scores, w))
            total += 1
    return correct / max(1, total), conf, errors


def format_report(acc, conf, errors, max_errors=20):
    lines = [f"Dev accuracy: {acc:.3f}", "", "Confusion Matrix (Dev set):"]
    lines.append("true\\pred".ljust(10) + "".join(f"{str(lg):>7}" for lg in LANGS))
    for true in LANGS:
        lines.append(str(true).ljust(10) + "".join(f"{conf[true][p]:>7}" for p in LANGS))
    if errors:
        lines.append("")
        lines.append(f"{'True':<5} {'Pred':<5} " + " ".join(f"{str(lg):>9}" for lg in LANGS) + "  Word")
        lines.append("-" * 60)
        for true, pred, sc, w in errors[:max_errors]:
            score_str = " ".join(f"{sc[lg]:9.2f}" for lg in LANGS)
            lines.append(f"{str(true):<5} {str(pred):<5} {score_str}  {w}")
    return "\n".join(lines)


def main(argv=None):
    crk_default, eng_default = default_word_lists()
    ap = argparse.ArgumentParser()
    ap.add_argument("--crk_words", type=Path, default=crk_default)
    ap.add_argument("--eng_words", type=Path, default=eng_default)
    ap.add_argument("--crk_dev", type=Path, required=True)
    ap.add_argument("--eng_dev", type=Path, required=True)
    ap.add_argument("--threshold", type=int, default=PRUNE_THRESHOLD)
    ap.add_argument("--max_errors", type=int, default=20)
    ap.add_argument("--out", type=Path, default=None)
    args = ap.parse_args(argv)

    try:
        for p in (args.crk_dev, args.eng_dev):
            ensure_exists(p)
        model = build_model(args.crk_words, args.eng_words, args.threshold)
        dev = {Language.CRK: load_words(args.crk_dev), Language.ENG: load_words(args.eng_dev)}
    except OSError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1

    acc, conf, errors = evaluate(model, dev)
    report = format_report(acc, conf, errors, args.max_errors)
    print(report)

    if args.out is not None:
        args.out.parent.mkdir(parents=True, exist_ok=True)
        args.out.write_text(report, encoding="utf-8")
        print(f"[SAVED] {args.out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
