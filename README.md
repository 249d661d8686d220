# fuzzcore

Pure-Python building blocks of a coverage-guided fuzzer. The package has
no third-party dependencies.

## What is inside

| Module                | Purpose                                                              |
|-----------------------|----------------------------------------------------------------------|
| `fuzzcore.bits`       | `bswap`, `clzll` and `popcountll`: byte swapping, leading-zero count and population count on unsigned values of up to 64 bits. |
| `fuzzcore.rng`        | `Random`, a deterministic minimal-standard linear congruential generator with `below`, `between`, `rand_bool` and `skew_towards_last`. |
| `fuzzcore.bitmap`     | `ValueBitMap`, a 65,536-bit map of observed values.                  |
| `fuzzcore.options`    | `FuzzingOptions`, a dataclass of fuzzer settings with their defaults. |
| `fuzzcore.command`    | `Command`, a command line whose arguments and flags can be edited.   |
| `fuzzcore.dictionary` | `Word`, `DictionaryEntry` and `Dictionary` for mutation dictionaries. |
| `fuzzcore.corpus`     | `InputCorpus`, `InputInfo`, `EntropicOptions` and `sha1_hex`: corpus storage, feature tracking and the entropic power schedule. |
| `fuzzcore.dataflow`   | `DataFlowTracer`, `format_label_bits`, `format_data_flow` and `format_coverage` for data-flow and block-coverage traces. |
| `fuzzcore.standalone` | `run_inputs`, which feeds input files one by one to a fuzz target.   |

## Examples

### Editing a command line

Flags are written as `-name=value`. The marker `-ignore_remaining_args=1`
(`Command.IGNORE_REMAINING_ARGS`) closes the editable part of the line:
added arguments go in front of it, and lookups and removals ignore
everything after it.

```python
from fuzzcore.command import Command

cmd = Command(["foo", "-bar=baz", "qux"])
cmd.add_flag("fred", "plugh")
assert cmd.has_flag("fred")
assert cmd.get_flag_value("fred") == "plugh"
assert str(cmd) == "foo -bar=baz qux -fred=plugh"

cmd.remove_flag("fred")
cmd.combine_out_and_err(True)
assert str(cmd) == "foo -bar=baz qux 2>&1"
```

Setting `cmd.output_file` adds a `>file` redirection to the string form.

### Deterministic random numbers

The same seed always gives the same sequence of numbers.

```python
from fuzzcore.rng import Random

a, b = Random(0), Random(0)
assert [a.below(10) for _ in range(5)] == [b.below(10) for _ in range(5)]
assert 3 <= a.between(3, 7) <= 7
```

`between` raises `ValueError` unless its lower bound is below its upper
bound; `below(0)` returns 0.

### Recording observed values

`add_value` returns `True` only when the value's bit was not set before.
Iterating the map yields the indices of the set bits in ascending order.

```python
from fuzzcore.bitmap import ValueBitMap

bits = ValueBitMap()
assert bits.add_value(42) is True
assert bits.add_value(42) is False
assert bits.get(42)
assert list(bits) == [42]
```

### Bit helpers

```python
from fuzzcore.bits import bswap, clzll, popcountll

assert bswap(0x1234, 2) == 0x3412
assert clzll(1) == 63
assert popcountll(0xFF) == 8
```

### Dictionaries

A `Word` holds at most 64 bytes. A `Dictionary` keeps at most 16,384
entries and silently drops entries appended after that.

```python
from fuzzcore.dictionary import Dictionary, DictionaryEntry, Word

words = Dictionary()
words.append(DictionaryEntry(Word(b"GET ")))
assert words.contains_word(Word(b"GET "))
assert len(words) == 1
```

### A corpus

```python
from fuzzcore.corpus import EntropicOptions, InputCorpus, sha1_hex
from fuzzcore.rng import Random

corpus = InputCorpus("", EntropicOptions(False, 100, 0xFF, False))
corpus.add_to_corpus(b"abc", 1, False, False, False, 0, [], None, None)
assert corpus.has_unit(b"abc")
assert corpus.has_unit(sha1_hex(b"abc"))
assert corpus.choose_unit_idx_to_mutate(Random(0)) == 0
```

With the entropic schedule enabled, `add_feature`, `add_rare_feature` and
`update_feature_frequency` keep track of rare features, and each input's
energy steers which one `choose_unit_idx_to_mutate` picks. When the corpus
is given an output directory, `delete_file` removes an evicted input's
file from it if the input allows that.

### Data-flow traces

A `DataFlowTracer` is built from the flags of each instrumented block
(flag bit 1 marks a function entry). It records executed blocks and the
labels that reach comparisons in the current function; `report` returns
the `F` (data flow) and `C` (coverage) lines.

```python
from fuzzcore.dataflow import DataFlowTracer

tracer = DataFlowTracer([1, 0, 1])
tracer.start_iteration()
tracer.trace_pc_guard(0)
tracer.trace_cmp(1, 0)
assert tracer.report(3) == "F0 100\nC0 2\n"
```

### Replaying inputs

`fuzzcore.standalone.run_inputs(target, paths, initialize)` reads each file
in `paths` and passes its bytes to `target`, without doing any fuzzing,
and returns the number of inputs run. Progress goes to standard error.
Use it to reproduce a failure from saved inputs.

## What this package does not do

It provides parts, not a complete fuzzer. There is no fuzzing loop, no
mutation of inputs, no merging of corpora, no reading of dictionary files,
no instrumentation of code under test, and no command-line program:
everything is used by importing the modules above.

## Running the tests

Install the `test` extra and run `pytest` from the project directory.