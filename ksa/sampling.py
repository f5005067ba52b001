WINDOW_SIZE = 3


def residue_class(position):
    return position % 3


def nonsample_positions(length):
    return list(range(0, length, 3))


class SampleSet(object):
    """
    The sample positions C of a sequence: B1 positions ascending, then B2
    positions ascending.

    When ``length % 3 == 1`` the B1 block also holds the dummy position
    ``length``, whose window is empty: the last B1 window always touches the
    end of the text.
    """

    def __init__(self, length):
        self._length = length
        self._n1 = (length + 2) // 3  # B1 entries, dummy included
        self._n2 = length // 3

    @property
    def length(self):
        return self._length

    @property
    def n1(self):
        return self._n1

    @property
    def n2(self):
        return self._n2

    @property
    def has_dummy(self):
        return self._length % 3 == 1

    @property
    def dummy_position(self):
        return self._length if self.has_dummy else None

    def __len__(self):
        return self._n1 + self._n2

    @property
    def positions(self):
        return [self.to_position(k) for k in range(len(self))]

    def to_position(self, sample_index):
        if not 0 <= sample_index < len(self):
            raise ValueError(f"sample index {sample_index} outside [0, {len(self)})")
        if sample_index < self._n1:
            return 1 + 3 * sample_index
        return 2 + 3 * (sample_index - self._n1)

    def to_sample_index(self, position):
        cls = residue_class(position)
        if cls == 1:
            index = (position - 1) // 3
            if 0 <= index < self._n1:
                return index
        elif cls == 2:
            index = (position - 2) // 3
            if 0 <= index < self._n2:
                return self._n1 + index
        raise ValueError(f"position {position} is not a sample position of a length {self._length} sequence")

    def windows(self, symbols):
        return [list(symbols[p:p + WINDOW_SIZE]) for p in self.positions]

    def __repr__(self):
        return f"SampleSet(length={self._length}, n1={self._n1}, n2={self._n2})"
