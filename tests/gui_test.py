import pytest

pytest.importorskip("tkinter")

from glassvis import gui  # noqa: E402
from glassvis.errors import DimensionMismatchError  # noqa: E402


def call_now(callback, value):
    callback(value)


def run_job(monkeypatch, outcome):
    def fake_run_diff_files(*args, **kwargs):
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    monkeypatch.setattr(gui, "run_diff_files", fake_run_diff_files)
    done, failed = [], []
    gui.run_diff_job(call_now, done.append, failed.append,
                     "ref.png", "capt.png", significance=10)
    return done, failed


def test_diff_job_reports_result(monkeypatch):
    done, failed = run_job(monkeypatch, {'count': 3})
    assert done == [{'count': 3}]
    assert failed == []


def test_diff_job_reports_glassvis_errors(monkeypatch):
    error = DimensionMismatchError((5, 5, 4), (6, 6, 4))
    done, failed = run_job(monkeypatch, error)
    assert done == []
    assert failed == [error]


def test_diff_job_reports_unexpected_errors(monkeypatch):
    error = PermissionError("data/output is read-only")
    done, failed = run_job(monkeypatch, error)
    assert done == []
    assert failed == [error]
