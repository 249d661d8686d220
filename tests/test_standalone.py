import pytest

from fuzzcore.standalone import run_inputs


@pytest.fixture
def files(tmp_path):
    a = tmp_path / "a"
    b = tmp_path / "b"
    a.write_bytes(b"hello")
    b.write_bytes(b"\x00\x01")
    return [a, b]


def test_runs_each_input_in_order(files):
    seen = []
    count = run_inputs(seen.append, files)
    assert count == 2
    assert seen == [b"hello", b"\x00\x01"]


def test_reports_progress(files, capsys):
    run_inputs(lambda data: 0, files)
    err = capsys.readouterr().err
    assert "StandaloneFuzzTargetMain: running 2 inputs" in err
    assert f"Running: {files[0]}" in err
    assert f"Done:    {files[0]}: (5 bytes)" in err


def test_initialize_can_edit_in_place(files):
    seen = []
    calls = []

    def init(paths):
        calls.append(list(paths))
        paths.pop()

    assert run_inputs(seen.append, files, init) == 1
    assert calls == [files]
    assert seen == [b"hello"]


def test_initialize_can_replace(files):
    seen = []
    assert run_inputs(seen.append, files, lambda paths: [files[1]]) == 1
    assert seen == [b"\x00\x01"]


def test_no_inputs():
    seen = []
    assert run_inputs(seen.append, []) == 0
    assert seen == []


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        run_inputs(lambda data: 0, [tmp_path / "missing"])