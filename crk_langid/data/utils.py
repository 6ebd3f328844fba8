from pathlib import Path

# Trimmed from the end of a line only.
TRAILING = "!? \n"

# Circumflex vowels of the standard Roman orthography.
CIRCUMFLEX = str.maketrans({"â": "a", "ê": "e", "î": "i", "ô": "o"})


def normalize(line: str) -> str:
    """
    Turn a raw line into a word:
      - strip trailing '!', '?', spaces and newlines (leading ones stay)
      - lowercase every character
      - drop circumflexes from â, ê, î, ô
    """
    word = line.rstrip(TRAILING)
    # first char of the lowercase mapping, so the word never changes length
    lowered = "".join(ch.lower()[0] for ch in word)
    return lowered.translate(CIRCUMFLEX)


def default_word_lists(data_dir=Path("data")):
    """Return (crk, eng) word-list paths under data_dir."""
    return data_dir / "itwêwina", data_dir / "words"
