import logging
import numbers

import numpy as np

from ksa.exceptions import InvalidSymbol
from ksa.sampling import SampleSet, nonsample_positions, residue_class
from ksa.sorting import adjacent_duplicate_exists, radix_sorted_indices, ranks, shifted_key

logger = logging.getLogger(__name__)

SENTINEL_RANK = 0  # Rank of the positions past the end of the sequence
RANK_TABLE_PADDING = 3


class SampleRanking(object):
    """Ranks of the sample windows, before any recursion."""

    def __init__(self, ranks_by_sample_index, sorted_indices, sorted_ranks):
        self._ranks_by_sample_index = ranks_by_sample_index  # may contain duplicates
        self._sorted_indices = sorted_indices
        self._sorted_ranks = sorted_ranks

    @property
    def ranks_by_sample_index(self):
        return self._ranks_by_sample_index

    @property
    def sorted_indices(self):
        return self._sorted_indices

    @property
    def sorted_ranks(self):
        return self._sorted_ranks

    @property
    def highest_rank(self):
        return self._sorted_ranks[-1] if self._sorted_ranks else 0

    @property
    def has_collisions(self):
        return adjacent_duplicate_exists(self._sorted_ranks)

    def __repr__(self):
        return f"SampleRanking({self._ranks_by_sample_index})"


def _is_integral(value):
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def validate_symbols(sequence, max_symbol=None):
    """
    Return ``(symbols, max_symbol)`` with symbols as a list of Python ints.

    Without a declared ``max_symbol`` the alphabet is compacted to the distinct
    symbols present, order preserved, so bucket domains never exceed the input
    length. Integers too wide for int64 are compacted the same way.
    """
    if max_symbol is not None and max_symbol < 0:
        raise InvalidSymbol(max_symbol, reason="max_symbol must be non-negative")

    values = np.asarray(sequence)
    if values.ndim != 1:
        raise InvalidSymbol(sequence, reason="a sequence must be one-dimensional")
    if values.size == 0:
        return [], max_symbol if max_symbol is not None else 0

    wide = values.dtype == object
    if wide:
        for position, value in enumerate(values.tolist()):
            if not _is_integral(value):
                raise InvalidSymbol(value, position, reason="symbols must be integers")
    elif not np.issubdtype(values.dtype, np.integer):
        raise InvalidSymbol(values.dtype, reason="symbols must be integers")

    position = int(np.argmin(values))
    if int(values[position]) < 0:
        raise InvalidSymbol(int(values[position]), position)

    position = int(np.argmax(values))
    highest = int(values[position])
    if max_symbol is not None and highest > max_symbol:
        raise InvalidSymbol(highest, position, reason=f"symbols must not exceed max_symbol={max_symbol}")

    if max_symbol is None or wide:
        distinct, compacted = np.unique(values, return_inverse=True)
        return compacted.ravel().tolist(), len(distinct) - 1
    return values.tolist(), max_symbol


def build_sample(symbols):
    sample = SampleSet(len(symbols))
    return sample, sample.windows(symbols)


def rank_sample(windows, max_symbol):
    # Radix sort the windows, then rename them by their ranks
    sorted_indices = radix_sorted_indices(windows, key=shifted_key, max_key=max_symbol + 1)
    sorted_ranks = ranks(windows, sorted_indices)
    ranks_by_sample_index = [0] * len(windows)
    for index, rank in zip(sorted_indices, sorted_ranks):
        ranks_by_sample_index[index] = rank
    return SampleRanking(ranks_by_sample_index, sorted_indices, sorted_ranks)


def order_from_unique_ranks(ranks_by_sample_index):
    """Rank r puts sample index k in sorted slot r - 1."""
    order = [None] * len(ranks_by_sample_index)
    for index, rank in enumerate(ranks_by_sample_index):
        if not 1 <= rank <= len(order) or order[rank - 1] is not None:
            raise RuntimeError(f"ranks are not a permutation of 1..{len(order)}: {ranks_by_sample_index}")
        order[rank - 1] = index
    return order


def order_sample(ranking, depth=0, collisions=None):
    """Sorted order of the sample indices, recursing while windows collide."""
    if collisions is None:
        collisions = ranking.has_collisions
    if collisions:
        return _ksa(ranking.ranks_by_sample_index, ranking.highest_rank, depth + 1)
    return order_from_unique_ranks(ranking.ranks_by_sample_index)


def build_rank_table(sample, sample_order):
    rank_table = [SENTINEL_RANK] * (sample.length + RANK_TABLE_PADDING)
    for rank, sample_index in enumerate(sample_order, start=1):
        rank_table[sample.to_position(sample_index)] = rank
    return rank_table


def sort_nonsample(symbols, rank_table, max_symbol):
    # (t_i, rank(S_i+1)) for every i in B0
    positions = nonsample_positions(len(symbols))
    pairs = [(symbols[i], rank_table[i + 1]) for i in positions]
    max_key = max(max_symbol, max(rank_table)) + 1
    return [positions[k] for k in radix_sorted_indices(pairs, key=shifted_key, max_key=max_key)]


def _symbol_at(symbols, i):
    return symbols[i] if i < len(symbols) else -1


def _sample_precedes(symbols, rank_table, i, j):
    """Whether sample suffix i sorts before (or equal to) non-sample suffix j."""
    if residue_class(i) == 1:
        return (symbols[i], rank_table[i + 1]) <= (symbols[j], rank_table[j + 1])
    return (symbols[i], _symbol_at(symbols, i + 1), rank_table[i + 2]) <= \
        (symbols[j], _symbol_at(symbols, j + 1), rank_table[j + 2])


def merge(symbols, rank_table, sorted_sample_positions, sorted_nonsample_positions):
    result = []
    i = 0
    j = 0

    while i < len(sorted_sample_positions) and j < len(sorted_nonsample_positions):
        sample_position = sorted_sample_positions[i]
        nonsample_position = sorted_nonsample_positions[j]

        if _sample_precedes(symbols, rank_table, sample_position, nonsample_position):
            result.append(sample_position)
            i += 1
        else:
            result.append(nonsample_position)
            j += 1

    result.extend(sorted_sample_positions[i:])
    result.extend(sorted_nonsample_positions[j:])
    return result


def _ksa(symbols, max_symbol, depth):
    length = len(symbols)
    if length == 0:
        return []
    if length == 1:
        return [0]

    sample, windows = build_sample(symbols)
    ranking = rank_sample(windows, max_symbol)
    collisions = ranking.has_collisions
    logger.debug("ksa depth=%d length=%d sample=%d distinct=%d recurse=%s",
                 depth, length, len(sample), ranking.highest_rank, collisions)

    sample_order = order_sample(ranking, depth, collisions)
    rank_table = build_rank_table(sample, sample_order)

    sorted_sample_positions = [sample.to_position(k) for k in sample_order]
    if sample.has_dummy:
        sorted_sample_positions.remove(sample.dummy_position)
    sorted_nonsample_positions = sort_nonsample(symbols, rank_table, max_symbol)

    return merge(symbols, rank_table, sorted_sample_positions, sorted_nonsample_positions)


def ksa(sequence, max_symbol=None):
    """
    Suffix array of a sequence of non-negative integer symbols, built with the
    Karkkainen-Sanders skew (DC3) algorithm.

    ``max_symbol`` bounds the bucket domains. Without it the symbols are first
    renamed to their rank among the distinct symbols present. Raises ``InvalidSymbol`` for a negative or non-integer
    symbol, or one above ``max_symbol``.
    """
    symbols, max_symbol = validate_symbols(sequence, max_symbol)
    return _ksa(symbols, max_symbol, 0)


def naive_suffix_array(sequence):
    """Naive approach to build the suffix array."""
    symbols = list(sequence)
    suffixes = [(symbols[i:], i) for i in range(len(symbols))]
    suffixes.sort()  # Sort the suffixes lexicographically
    return [index for (_, index) in suffixes]
