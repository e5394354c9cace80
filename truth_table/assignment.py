from collections.abc import Mapping, Sequence


class VariableSet(Sequence):
    """
    Distinct variable names in first-occurrence order

    The order fixes both the table columns and which bit of a row index
    feeds which variable.
    """

    def __init__(self, names=()):
        self._names = []
        self._seen = set()
        for name in names:
            self.add(name)

    def add(self, name):
        if name not in self._seen:
            self._seen.add(name)
            self._names.append(name)

    def __getitem__(self, idx):
        return self._names[idx]

    def __len__(self):
        return len(self._names)

    def __contains__(self, name):
        return name in self._seen

    def __eq__(self, other):
        if isinstance(other, VariableSet):
            return self._names == other._names
        if isinstance(other, (list, tuple)):
            return self._names == list(other)
        return NotImplemented

    def __repr__(self):
        return f"VariableSet({self._names!r})"


class Assignment(Mapping):
    """
    Read-only mapping of variable name to boolean value

    Holds only the row index. Bit n-1-i of the index is the value of the i-th
    variable, so the first variable is the most significant bit.
    """

    __slots__ = ("_names", "_shifts", "_index")

    def __init__(self, names, index, shifts=None):
        names = tuple(names)
        if not 0 <= index < 2 ** len(names):
            raise ValueError(f"index {index} out of range for {len(names)} variables")
        self._names = names
        self._shifts = self.shifts(names) if shifts is None else shifts
        self._index = index

    @staticmethod
    def shifts(names):
        """
        Name to bit position, shareable by every assignment over `names`
        """
        n = len(names)
        return {name: n - 1 - i for i, name in enumerate(names)}

    @classmethod
    def from_index(cls, names, index):
        return cls(names, index)

    @property
    def names(self):
        return self._names

    @property
    def bits(self):
        """
        0/1 per variable, in variable order
        """
        n = len(self._names)
        return tuple((self._index >> (n - 1 - i)) & 1 for i in range(n))

    @property
    def index(self):
        return self._index

    def __getitem__(self, name):
        return bool((self._index >> self._shifts[name]) & 1)

    def __iter__(self):
        return iter(self._names)

    def __len__(self):
        return len(self._names)

    def __repr__(self):
        pairs = ", ".join(f"{k}={v}" for k, v in zip(self._names, self.bits))
        return f"Assignment({pairs})"
