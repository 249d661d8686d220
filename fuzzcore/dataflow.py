"""Data-flow and block-coverage tracing for fuzz targets.

A tracer records, for every instrumented function, which input bytes flow
into its comparisons, and which basic blocks were executed. Input bytes are
processed in windows of :data:`NUM_LABELS` bytes, one window per iteration.
Byte ``i`` of a window carries the label bit ``1 << i``.

Report format::

    F0 11111111111111
    F1 10000000000000
    C0 1 2 3 4 5
    C1 8

``FN bits`` tells which input bytes function N depends on. ``CN X Y T`` tells
that function N had blocks X and Y covered in addition to its entry block,
out of T instrumented blocks.
"""

from collections.abc import Sequence

NUM_LABELS = 8
PCFLAG_FUNC_ENTRY = 1


def format_label_bits(label: int, length: int) -> str:
    """Render the low ``length`` bits of ``label``, least significant first."""
    if not 0 <= length <= NUM_LABELS:
        raise ValueError(f"length {length} must be between 0 and {NUM_LABELS}")
    bits = "".join("1" if label & (1 << i) else "0" for i in range(NUM_LABELS))
    return bits[:length]


def format_data_flow(func_labels_per_iter: Sequence[Sequence[int]], input_len: int) -> str:
    """Return the ``F`` lines for labels gathered over all iterations.

    ``func_labels_per_iter[iteration][function]`` is the label set of a
    function during one iteration. Functions with no label are left out.
    """
    if not func_labels_per_iter:
        return ""
    num_funcs = len(func_labels_per_iter[0])
    last_len = input_len % NUM_LABELS or NUM_LABELS
    last_iter = len(func_labels_per_iter) - 1
    lines = []
    for func in range(num_funcs):
        labels = [labels_of_iter[func] for labels_of_iter in func_labels_per_iter]
        if not any(labels):
            continue
        bits = "".join(
            format_label_bits(label, last_len if it == last_iter else NUM_LABELS)
            for it, label in enumerate(labels)
        )
        lines.append(f"F{func} {bits}\n")
    return "".join(lines)


def format_coverage(block_is_entry: Sequence[bool], bb_executed: Sequence[bool]) -> str:
    """Return the ``C`` lines for functions whose entry block was executed."""
    num_guards = len(block_is_entry)
    if len(bb_executed) != num_guards:
        raise ValueError("block_is_entry and bb_executed differ in length")
    if num_guards and not block_is_entry[0]:
        raise ValueError("the first block must be a function entry")
    entries = [i for i, is_entry in enumerate(block_is_entry) if is_entry]
    bounds = zip(entries, entries[1:] + [num_guards])
    lines = []
    for func_num, (begin, end) in enumerate(bounds):
        if not bb_executed[begin]:
            continue
        covered = [str(i - begin) for i in range(begin + 1, end) if bb_executed[i]]
        lines.append(" ".join([f"C{func_num}", *covered, str(end - begin)]) + "\n")
    return "".join(lines)


class DataFlowTracer:
    """Collects comparison labels per function and executed basic blocks."""

    def __init__(self, pc_flags: Sequence[int]) -> None:
        self.block_is_entry = [bool(flag & PCFLAG_FUNC_ENTRY) for flag in pc_flags]
        self._guards: list[int] = []
        num_funcs = 0
        for is_entry in self.block_is_entry:
            if is_entry:
                num_funcs += 1
                self._guards.append(num_funcs)
            else:
                self._guards.append(0)
        self.num_funcs = num_funcs
        self.num_guards = len(self.block_is_entry)
        self.bb_executed = [False] * self.num_guards
        self.func_labels_per_iter: list[list[int]] = []
        self._current_func = 0

    def start_iteration(self) -> None:
        """Begin a new window of input bytes with fresh function labels."""
        self.func_labels_per_iter.append([0] * self.num_funcs)

    def _labels(self) -> list[int]:
        if not self.func_labels_per_iter:
            raise RuntimeError("no iteration has been started")
        if not self._current_func < self.num_funcs:
            raise RuntimeError("no instrumented function is current")
        return self.func_labels_per_iter[-1]

    def trace_pc_guard(self, guard_index: int) -> None:
        """Mark a block executed; entering a function makes it current."""
        self.bb_executed[guard_index] = True
        guard = self._guards[guard_index]
        if guard:
            self._current_func = guard - 1

    def trace_cmp(self, label1: int, label2: int) -> None:
        """Record a comparison whose operands carry the given labels."""
        self._labels()[self._current_func] |= label1 | label2

    def trace_switch(self, label: int) -> None:
        """Record a switch on a value carrying ``label``."""
        self._labels()[self._current_func] |= label

    def report(self, input_len: int) -> str:
        """Return the data-flow lines followed by the coverage lines."""
        return format_data_flow(self.func_labels_per_iter, input_len) + format_coverage(
            self.block_is_entry, self.bb_executed
        )