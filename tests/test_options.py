import dataclasses

from fuzzcore.options import UNLIMITED_RUNS, FuzzingOptions


def test_exit_code_defaults():
    opts = FuzzingOptions()
    assert (
        opts.timeout_exit_code,
        opts.oom_exit_code,
        opts.interrupt_exit_code,
        opts.error_exit_code,
    ) == (70, 71, 72, 77)


def test_timing_and_length_defaults():
    opts = FuzzingOptions()
    assert opts.unit_timeout_sec == 300
    assert opts.len_control == 1000
    assert opts.mutate_depth == 5
    assert opts.max_len == 0


def test_entropic_defaults():
    opts = FuzzingOptions()
    assert opts.entropic is True
    assert opts.entropic_feature_frequency_threshold == 0xFF
    assert opts.entropic_number_of_rarest_features == 100
    assert opts.entropic_scale_per_exec_time is False


def test_artifact_prefix_and_runs_defaults():
    opts = FuzzingOptions()
    assert opts.artifact_prefix == "./"
    assert opts.max_number_of_runs == UNLIMITED_RUNS
    assert opts.output_corpus == ""


def test_replace_leaves_original_untouched():
    base = FuzzingOptions()
    changed = dataclasses.replace(base, verbosity=3, only_ascii=True)
    assert changed.verbosity == 3
    assert changed.only_ascii is True
    assert base.verbosity == 1
    assert base.only_ascii is False


def test_equality_follows_fields():
    assert FuzzingOptions() == FuzzingOptions()
    assert FuzzingOptions(shrink=True) != FuzzingOptions()