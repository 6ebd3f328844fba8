#!/usr/bin/env python3
"""
Train on a nêhiyawêwin and an English word list, then label words read one per
line from stdin (or --input) as crk or eng.
"""
import argparse
import math
import sys
from pathlib import Path

from crk_langid.data.datasets import ensure_exists, iter_lines, iter_queries
from crk_langid.data.tokenizer import render_bigram
from crk_langid.data.utils import default_word_lists, normalize
from crk_langid.models.naive_bayes import PRUNE_THRESHOLD, Language, UnderConstruction


def log(msg):
    print(msg, file=sys.stderr)


def build_model(crk_path, eng_path, threshold=PRUNE_THRESHOLD):
    """Train on both lists and prune. Both files must exist before training starts."""
    for p in (crk_path, eng_path):
        ensure_exists(p)

    model = UnderConstruction()
    for lang, path in ((Language.CRK, crk_path), (Language.ENG, eng_path)):
        model = model.train(iter_lines(path), lang)
        log(f"[INFO] Counted {model.lines_seen[lang]} {lang} lines from {path}")

    n_before = len(model)
    ready = model.prune(threshold)
    log(f"[INFO] Kept {ready.num_features} of {n_before} bigrams (pruned total <= {threshold})")
    return ready


def show_features(model, out=None):
    rows = sorted(model.items(), key=lambda kv: -kv[1].total())
    print(f"{'bigram':<8} {'crk':>7} {'eng':>7}", file=out)
    print("-" * 24, file=out)
    for bg, occ in rows:
        print(f"{render_bigram(bg):<8} {occ.crk:>7} {occ.eng:>7}", file=out)


def run_queries(model, lines, verbose=False, out=None):
    """Classify each line, one output line per query; an empty word is reported but never fatal."""
    n = 0
    for line in lines:
        word = normalize(line)
        if not word:
            # no bigrams, so this is the English tie
            log(f"[WARN] Empty query line: {line!r}")
        pred, scores = model.predict(word)
        if verbose:
            for lang in (Language.CRK, Language.ENG):
                print(f"  P({lang}|{word}) = {math.exp(scores[lang]):.6g}"
                      f"  (log {scores[lang]:.4f})", file=out)
        print(f"{word}: {pred}", file=out)
        n += 1
    return n


def main(argv=None):
    crk_default, eng_default = default_word_lists()
    ap = argparse.ArgumentParser(description=__doc__)
    ap.add_argument("--crk_words", type=Path, default=crk_default)
    ap.add_argument("--eng_words", type=Path, default=eng_default)
    ap.add_argument("--input", type=Path, default=None,
                    help="query file, one word per line (default: stdin)")
    ap.add_argument("--threshold", type=int, default=PRUNE_THRESHOLD)
    ap.add_argument("--verbose", action="store_true",
                    help="also print P(crk|word) and P(eng|word)")
    ap.add_argument("--show_features", action="store_true",
                    help="print the pruned bigram table and exit")
    args = ap.parse_args(argv)

    try:
        model = build_model(args.crk_words, args.eng_words, args.threshold)
        queries = iter_queries(args.input)
    except OSError as e:
        log(f"[ERROR] {e}")
        return 1

    if args.show_features:
        show_features(model)
        return 0

    n = run_queries(model, queries, verbose=args.verbose)
    log(f"[INFO] Classified {n} words")
    return 0


if __name__ == "__main__":
    sys.exit(main())
