import operator

import numpy as np

from ksa.exceptions import InvalidSymbol

ABSENT_KEY = 0  # Key reserved for a missing sub-element


def shifted_key(x):
    """Absent sub-element -> 0, symbol x -> x + 1."""
    if x is None:
        return ABSENT_KEY
    return x + 1


def safe_get(items, index):
    if 0 <= index < len(items):
        return items[index]
    return None


def bucket_sorted_indices(items, key, max_key=None):
    """
    Stable counting sort.

    Returns the indices of ``items`` grouped by ascending ``key(item)``, keeping
    insertion order within a bucket. Keys must lie in ``[0, max_key]``; when
    ``max_key`` is omitted the largest key produced is used.
    """
    n = len(items)
    if n == 0:
        return []

    keys = np.fromiter((key(item) for item in items), dtype=np.int64, count=n)
    lowest, highest = int(keys.min()), int(keys.max())
    if max_key is None:
        max_key = highest
    if lowest < 0:
        position = int(np.argmin(keys))
        raise InvalidSymbol(lowest, position, reason="bucket keys must be non-negative")
    if highest > max_key:
        position = int(np.argmax(keys))
        raise InvalidSymbol(highest, position, reason=f"bucket keys must not exceed {max_key}")

    # Start offset of every bucket
    counts = np.bincount(keys, minlength=max_key + 1)
    offsets = np.concatenate(([0], np.cumsum(counts)[:-1])).tolist()

    sorted_indices = [0] * n
    for index, k in enumerate(keys.tolist()):
        sorted_indices[offsets[k]] = index
        offsets[k] += 1
    return sorted_indices


def bucket_sort(items, key, max_key=None):
    return [items[i] for i in bucket_sorted_indices(items, key, max_key)]


def radix_sorted_indices(sequences, key=shifted_key, max_key=None):
    """
    Least-significant-first radix sort over a collection of sequences.

    One stable bucket pass per sub-element position, from the last position
    down to the first. ``key`` receives ``None`` where a sequence is too short,
    so with ``shifted_key`` a strict prefix sorts before its extensions.
    """
    if len(sequences) == 0:
        return []

    sorted_indices = list(range(len(sequences)))
    longest = max(len(s) for s in sequences)
    for depth in reversed(range(longest)):
        digits = [safe_get(sequences[i], depth) for i in sorted_indices]
        order = bucket_sorted_indices(digits, key, max_key)
        sorted_indices = [sorted_indices[k] for k in order]
    return sorted_indices


def radix_sort(sequences, key=shifted_key, max_key=None):
    return [sequences[i] for i in radix_sorted_indices(sequences, key, max_key)]


def ranks(items, sorted_indices, are_equal=operator.eq):
    """
    Dense ranks of ``items`` taken in ``sorted_indices`` order.

    e.g. ranks([2, 1, 4, 2], [1, 0, 3, 2]) == [1, 2, 2, 3]
    """
    if not sorted_indices:
        return []

    result = [1]
    previous = items[sorted_indices[0]]
    for i in sorted_indices[1:]:
        element = items[i]
        if are_equal(element, previous):
            result.append(result[-1])
        else:
            result.append(result[-1] + 1)
        previous = element
    return result


def adjacent_duplicate_exists(items, are_equal=operator.eq):
    for previous, element in zip(items, items[1:]):
        if are_equal(previous, element):
            return True
    return False
