import pytest

from fuzzcore.dataflow import (
    DataFlowTracer,
    format_coverage,
    format_data_flow,
    format_label_bits,
)


@pytest.mark.parametrize("label", [0, 1, 5, 0x80, 0xFF, 0x3C])
@pytest.mark.parametrize("length", [1, 4, 8])
def test_label_bits_round_trip(label, length):
    bits = format_label_bits(label, length)
    assert len(bits) == length
    assert set(bits) <= {"0", "1"}
    assert int(bits[::-1], 2) == label & ((1 << length) - 1)


def test_label_bits_too_long():
    with pytest.raises(ValueError):
        format_label_bits(1, 9)


def test_data_flow_documented_example():
    labels = [[0xFF, 0x01], [0x3F, 0x00]]
    assert format_data_flow(labels, 14) == "F0 11111111111111\nF1 10000000000000\n"


def test_data_flow_skips_functions_without_labels():
    out = format_data_flow([[0, 0xFF, 0]], 8)
    assert out.startswith("F1 ")
    assert out.count("\n") == 1


def test_data_flow_empty():
    assert format_data_flow([], 0) == ""


def test_coverage_documented_example():
    entry = [True, False, False, False, False, True] + [False] * 7
    executed = [True] * 5 + [True] + [False] * 7
    assert format_coverage(entry, executed) == "C0 1 2 3 4 5\nC1 8\n"


def test_coverage_skips_unentered_function_but_keeps_numbering():
    entry = [True, False, True, False]
    executed = [False, False, True, True]
    out = format_coverage(entry, executed)
    assert out.startswith("C1 ")
    assert "C0" not in out


def test_coverage_requires_entry_first():
    with pytest.raises(ValueError):
        format_coverage([False, True], [True, True])


def test_tracer_collects_labels_and_coverage():
    tracer = DataFlowTracer([1, 0, 0, 1, 0])
    assert tracer.num_funcs == 2
    assert tracer.num_guards == 5
    tracer.start_iteration()
    tracer.trace_pc_guard(0)
    tracer.trace_cmp(1, 2)
    tracer.trace_pc_guard(2)
    tracer.trace_pc_guard(3)
    tracer.trace_switch(4)
    assert tracer.func_labels_per_iter == [[1 | 2, 4]]
    assert tracer.bb_executed == [True, False, True, True, False]
    assert tracer.report(3) == format_data_flow([[3, 4]], 3) + format_coverage(
        [True, False, False, True, False], [True, False, True, True, False]
    )


def test_tracer_iterations_are_separate():
    tracer = DataFlowTracer([1])
    tracer.start_iteration()
    tracer.trace_pc_guard(0)
    tracer.trace_cmp(0xFF, 0)
    tracer.start_iteration()
    tracer.trace_cmp(0x01, 0)
    assert tracer.func_labels_per_iter == [[0xFF], [0x01]]
    assert tracer.report(9).splitlines()[0] == "F0 111111111"


def test_tracer_needs_iteration():
    tracer = DataFlowTracer([1])
    tracer.trace_pc_guard(0)
    with pytest.raises(RuntimeError):
        tracer.trace_cmp(1, 1)


def test_tracer_needs_function():
    tracer = DataFlowTracer([])
    tracer.start_iteration()
    with pytest.raises(RuntimeError):
        tracer.trace_switch(1)