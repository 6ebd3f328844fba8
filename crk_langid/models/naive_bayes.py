"""
Naive-Bayes word classifier over boundary-aware character bigrams.

The model moves through three handles, each offering only what is valid in
its phase:

    UnderConstruction --train--> Trained --train--> Trained --prune--> Ready

A handle that has passed its feature table on is spent, and using it again
raises PhaseError. Only Ready can classify.
"""
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

import numpy as np

from crk_langid.data.tokenizer import bigram_sort_key, bigrams_of
from crk_langid.data.utils import normalize

# Features with total() <= this are dropped by prune().
PRUNE_THRESHOLD = 1


class Language(Enum):
    CRK = "crk"  # nêhiyawêwin / Plains Cree
    ENG = "eng"  # English

    def __str__(self):
        return self.value


# Column order of the count and log-probability matrices.
LANGS = (Language.CRK, Language.ENG)


class PhaseError(RuntimeError):
    """A model handle was used after handing its table to the next phase."""


@dataclass
class Occurrence:
    crk: int = 0
    eng: int = 0

    def total(self):
        return self.crk + self.eng

    def of(self, language):
        if language is Language.CRK:
            return self.crk
        if language is Language.ENG:
            return self.eng
        raise ValueError(f"Unknown language: {language!r}")


def _check_language(language):
    if language not in LANGS:
        raise ValueError(f"Unknown language: {language!r}")


def count_bigrams(features, lines, language):
    """Add one to `language`'s counter for every distinct bigram of every line.

    Returns the number of lines read.
    """
    _check_language(language)
    n_lines = 0
    for line in lines:
        n_lines += 1
        for bg in bigrams_of(normalize(line)):
            occ = features.get(bg)
            if occ is None:
                occ = features[bg] = Occurrence()
            if language is Language.CRK:
                occ.crk += 1
            else:
                occ.eng += 1
    return n_lines


class _Handle:
    def __init__(self, features):
        self._features = features

    def _hand_over(self):
        if self._features is None:
            raise PhaseError(
                f"{type(self).__name__} was already advanced; "
                "use the handle it returned"
            )
        features, self._features = self._features, None
        return features

    def _table(self):
        if self._features is None:
            raise PhaseError(f"{type(self).__name__} was already advanced")
        return self._features


class UnderConstruction(_Handle):
    """Empty model. The only thing to do with it is train."""

    def __init__(self):
        super().__init__({})

    def train(self, lines, language):
        _check_language(language)
        features = self._hand_over()
        n_lines = count_bigrams(features, lines, language)
        return Trained(features, {language: n_lines})


class Trained(_Handle):
    """Model with counts, not yet pruned. Can train further or prune."""

    def __init__(self, features, lines_seen):
        super().__init__(features)
        self.lines_seen = dict(lines_seen)

    def __len__(self):
        return len(self._table())

    def occurrence(self, bigram):
        occ = self._table()[bigram]
        return Occurrence(occ.crk, occ.eng)

    def train(self, lines, language):
        _check_language(language)
        features = self._hand_over()
        n_lines = count_bigrams(features, lines, language)
        lines_seen = dict(self.lines_seen)
        lines_seen[language] = lines_seen.get(language, 0) + n_lines
        return Trained(features, lines_seen)

    def prune(self, threshold=PRUNE_THRESHOLD):
        """Drop bigrams witnessed `threshold` times or fewer across both languages."""
        features = self._hand_over()
        kept = {bg: occ for bg, occ in features.items() if occ.total() > threshold}
        return Ready(kept, n_pruned=len(features) - len(kept), lines_seen=self.lines_seen)


class Ready:
    """
    Pruned, read-only model.

    Counts live in an (F, 2) int matrix and the smoothed log-probabilities
      log_prob[b, lang] = ln(c + 1) - ln(t + F)
    are computed once, where c is the count for lang, t the bigram's total
    and F the number of features that survived pruning.
    """

    def __init__(self, features, n_pruned=0, lines_seen=None):
        bigrams = sorted(features, key=bigram_sort_key)
        self._index = MappingProxyType({bg: i for i, bg in enumerate(bigrams)})
        self.n_pruned = n_pruned
        self.lines_seen = MappingProxyType(dict(lines_seen or {}))

        counts = np.array(
            [[features[bg].crk, features[bg].eng] for bg in bigrams], dtype=np.int64
        ).reshape(len(bigrams), len(LANGS))
        totals = counts.sum(axis=1, keepdims=True)
        F = len(bigrams)
        log_probs = np.log(counts + 1.0) - np.log(totals + float(F))

        counts.setflags(write=False)
        log_probs.setflags(write=False)
        self._counts = counts
        self._log_probs = log_probs

    @property
    def num_features(self):
        return len(self._index)

    def __len__(self):
        return self.num_features

    def __contains__(self, bigram):
        return bigram in self._index

    def __iter__(self):
        return iter(self._index)

    def occurrence(self, bigram):
        row = self._counts[self._index[bigram]]
        return Occurrence(int(row[0]), int(row[1]))

    def items(self):
        for bg in self._index:
            yield bg, self.occurrence(bg)

    def log_prob(self, bigram, language):
        """ln((c + 1) / (t + F)); only defined for bigrams in the table."""
        _check_language(language)
        i = self._index.get(bigram)
        if i is None:
            raise KeyError(f"Bigram not in feature table: {bigram!r}")
        return float(self._log_probs[i, LANGS.index(language)])

    def scores(self, word):
        """Log-likelihood sum per language; unseen bigrams add nothing."""
        rows = sorted(
            self._index[bg] for bg in bigrams_of(normalize(word)) if bg in self._index
        )
        sums = self._log_probs[np.asarray(rows, dtype=np.intp)].sum(axis=0)
        return {lang: float(sums[j]) for j, lang in enumerate(LANGS)}

    def predict(self, word):
        scores = self.scores(word)
        # ties go to English
        if scores[Language.CRK] > scores[Language.ENG]:
            return Language.CRK, scores
        return Language.ENG, scores

    def classify(self, word):
        return self.predict(word)[0]


def fit_per_language(data_by_lang, threshold=PRUNE_THRESHOLD):
    """Train on {Language: lines} in order, then prune. Returns a Ready model."""
    if not data_by_lang:
        raise ValueError("No training data")
    model = UnderConstruction()
    for lang, lines in data_by_lang.items():
        model = model.train(lines, lang)
    return model.prune(threshold)
