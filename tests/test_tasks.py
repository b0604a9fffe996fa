# tests/test_tasks.py
from shop_admin.utils.tasks import TaskRunner


def test_inline_submit_captures_value_and_error(runner):
    got = []
    runner.submit(lambda: 42, got.append)
    runner.submit(lambda: 1 / 0, got.append)
    assert got[0].ok and got[0].value == 42
    assert not got[1].ok
    assert isinstance(got[1].error, ZeroDivisionError)


def test_submit_all_collects_by_key(runner):
    got = []
    runner.submit_all({"a": lambda: 1, "b": lambda: 2}, got.append)
    assert len(got) == 1
    assert {k: r.value for k, r in got[0].items()} == {"a": 1, "b": 2}


def test_submit_all_empty_completes_immediately(runner):
    got = []
    runner.submit_all({}, got.append)
    assert got == [{}]


def test_threaded_result_arrives_on_gui_thread(qtbot):
    runner = TaskRunner()
    got = []
    runner.submit(lambda: "done", got.append)
    qtbot.waitUntil(lambda: len(got) == 1, timeout=5000)
    assert got[0].value == "done"
    qtbot.waitUntil(lambda: runner.pending == 0, timeout=5000)
