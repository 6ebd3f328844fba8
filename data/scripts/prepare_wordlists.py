#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Build the English training list for the crk/eng classifier:
- Count the lines of the nêhiyawêwin list (data/itwêwina)
- Sample as many words from a system dictionary (seeded shuffle)
- Sort case-insensitively and write data/words
"""
from __future__ import annotations
import argparse
import random
from pathlib import Path
from typing import List

from crk_langid.data.datasets import ensure_exists, load_words


def read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8")

def write_lines(path: Path, lines: List[str]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")

def count_lines(path: Path) -> int:
    ensure_exists(path)
    return len(read_text(path).splitlines())


def sample_words(dictionary: List[str], n: int, seed: int) -> List[str]:
    """Pick n distinct dictionary entries and sort them like `sort -f`."""
    if n > len(dictionary):
        raise ValueError(f"Dictionary has {len(dictionary)} words, {n} requested")
    rng = random.Random(seed)
    words = list(dictionary)
    rng.shuffle(words)
    return sorted(words[:n], key=lambda w: (w.upper(), w))


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--crk_words", type=Path, default=Path("data/itwêwina"))
    ap.add_argument("--dictionary", type=Path, default=Path("/usr/share/dict/words"))
    ap.add_argument("--out", type=Path, default=Path("data/words"))
    ap.add_argument("--seed", type=int, default=13)
    args = ap.parse_args()

    n = count_lines(args.crk_words)
    print(f"[INFO] {args.crk_words} has {n} lines")

    dictionary = sorted(set(load_words(args.dictionary)))
    words = sample_words(dictionary, n, args.seed)
    write_lines(args.out, words)
    print(f"[SAVED] {args.out}  ({len(words)} words from {args.dictionary})")

if __name__ == "__main__":
    main()
