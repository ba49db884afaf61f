from __future__ import annotations

import logging

import pytest

import run_task
from managers import paths
from tasks import tasks
from tasks.registry import TASKS, Task, get_task
from utils.task_arguments import GrammarConformanceError, ValueListError


# ---------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------

def test_demo_tasks_are_registered() -> None:
    assert {"compute_site_metrics", "compute_network_metrics"} <= set(TASKS)
    assert get_task("compute_site_metrics").description


def test_unknown_task_lookup_names_available_tasks() -> None:
    with pytest.raises(KeyError) as excinfo:
        get_task("no_such_task")

    assert "compute_site_metrics" in str(excinfo.value)


def test_task_runs_once_until_reenabled() -> None:
    calls = []

    def record(args):
        calls.append(args)
        return len(calls)

    task = Task(record)
    assert task.invoke(args=["record", "--a"]) == 1
    assert task.invoke(args=["record", "--b"]) is None

    task.reenable()
    assert task.invoke(args=["record", "--c"]) == 2
    assert calls == [["record", "--a"], ["record", "--c"]]


# ---------------------------------------------------------------------
# SiteTaskManager
# ---------------------------------------------------------------------

def test_site_lists_follow_task_matrix() -> None:
    mngr = tasks.SiteTaskManager()

    assert "legacy.net" in mngr.get_site_list()
    assert "legacy.net" not in mngr.get_site_list_for_task("compute_site_metrics")
    assert mngr.get_site_list_for_task("compute_site_metrics", disabled=True) == ["legacy.net"]
    assert "bar.com" not in mngr.get_site_list_for_task("compute_network_metrics")
    assert mngr.get_task_list_for_site("bar.com") == ["compute_site_metrics"]


def test_set_site_task_status_and_write(tmp_path) -> None:
    mngr = tasks.SiteTaskManager()
    mngr.set_site_task_status(site="legacy.net", task="compute_site_metrics", status=True)
    assert "legacy.net" in mngr.get_site_list_for_task("compute_site_metrics")

    output = tmp_path / "tasks.csv"
    mngr.write_tasks_config(path=output)
    assert output.read_text().splitlines()[0] == "Site,compute_site_metrics,compute_network_metrics"

    with pytest.raises(TypeError):
        mngr.set_site_task_status(site="legacy.net", task="compute_site_metrics", status="yes")


# ---------------------------------------------------------------------
# Task definitions
# ---------------------------------------------------------------------

def test_compute_site_metrics_runs_once_per_site() -> None:
    results = tasks.compute_site_metrics(
        args=[
            "compute_site_metrics", "--",
            "--sites=foo.com,bar.com", "--aggregates=daily",
            "--start-date=2024-01-01", "--end-date=2024-01-05",
        ]
    )

    assert [result["site"] for result in results] == ["foo.com", "bar.com"]
    assert all(result["aggregates"] == ["daily"] for result in results)
    assert all(result["start_date"] == "2024-01-01" for result in results)
    assert all(result["end_date"] == "2024-01-05" for result in results)
    assert not any(result["uploaded"] for result in results)


def test_compute_site_metrics_defaults(frozen_clock) -> None:
    (result,) = tasks.compute_site_metrics(
        args=["compute_site_metrics", "--", "--sites=foo.com", "--upload"]
    )

    assert result["aggregates"] == ["daily", "weekly", "monthly"]
    assert (result["start_date"], result["end_date"]) == ("2024-01-03", "2024-01-10")
    assert result["uploaded"] is True


def test_compute_site_metrics_rejects_disabled_site() -> None:
    with pytest.raises(ValueListError) as excinfo:
        tasks.compute_site_metrics(args=["compute_site_metrics", "--", "--sites=legacy.net"])

    assert "'legacy.net'" in str(excinfo.value)


def test_compute_site_metrics_requires_sites() -> None:
    with pytest.raises(GrammarConformanceError):
        tasks.compute_site_metrics(args=["compute_site_metrics", "--", "--days-ago=7"])


def test_compute_network_metrics_invokes_child_per_aggregate(frozen_clock, caplog) -> None:
    caplog.set_level(logging.INFO, logger="tasks")

    results = tasks.compute_network_metrics(
        args=["compute_network_metrics", "--", "--aggregates=daily,weekly", "--days-ago=7", "--upload"]
    )

    assert len(results) == 6
    assert [result["aggregates"] for result in results[::3]] == [["daily"], ["weekly"]]
    assert {result["site"] for result in results} == {"example.com", "example.org", "foo.com"}
    assert all(result["start_date"] == "2024-01-03" for result in results)
    assert all(result["uploaded"] for result in results)
    assert get_task("compute_site_metrics").already_invoked is False
    assert "Invoking task compute_site_metrics" in caplog.text


def test_compute_network_metrics_uses_configured_defaults(frozen_clock) -> None:
    results = tasks.compute_network_metrics(args=["compute_network_metrics"])

    assert len(results) == 9
    assert all(result["start_date"] == "2023-12-11" for result in results)
    assert not any(result["uploaded"] for result in results)


def test_compute_network_metrics_reenables_child_before_invoking(frozen_clock) -> None:
    child = get_task("compute_site_metrics")
    child.already_invoked = True

    results = tasks.compute_network_metrics(
        args=["compute_network_metrics", "--", "--aggregates=daily"]
    )

    assert len(results) == 3
    assert child.already_invoked is False


def test_compute_network_metrics_rejects_unknown_aggregate() -> None:
    with pytest.raises(ValueListError):
        tasks.compute_network_metrics(args=["compute_network_metrics", "--", "--aggregates=hourly"])


# ---------------------------------------------------------------------
# Task running boundary
# ---------------------------------------------------------------------

def test_run_task_logs_to_task_log(tmp_log_path) -> None:
    results = tasks.run_task(
        "compute_site_metrics",
        ["compute_site_metrics", "--", "--sites=foo.com", "--start-date=2024-01-01", "--end-date=2024-01-02"],
    )

    assert results[0]["site"] == "foo.com"
    log_text = tmp_log_path.read_text()
    assert "Running task compute_site_metrics..." in log_text
    assert "Task completed without error" in log_text


def test_run_task_exits_with_validation_message(tmp_log_path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        tasks.run_task("compute_site_metrics", ["compute_site_metrics", "--", "--sites=nowhere.com"])

    assert "An invalid value was provided: 'nowhere.com'" in str(excinfo.value.code)
    assert get_task("compute_site_metrics").already_invoked is False


def test_run_task_exits_with_usage_on_bad_grammar(tmp_log_path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        tasks.run_task("compute_site_metrics", ["compute_site_metrics", "--", "--days-ago=7"])

    assert "Usage:" in str(excinfo.value.code)


def test_run_task_unknown_task() -> None:
    with pytest.raises(SystemExit) as excinfo:
        tasks.run_task("no_such_task")

    assert "not implemented" in str(excinfo.value.code)


def test_main_without_task_prints_usage() -> None:
    with pytest.raises(SystemExit) as excinfo:
        run_task.main([])

    assert "compute_network_metrics" in str(excinfo.value.code)


def test_main_passes_full_vector_to_task(tmp_log_path) -> None:
    results = run_task.main(
        ["compute_site_metrics", "--", "--sites=example.com", "--start-date=2024-03-01", "--end-date=2024-03-31"]
    )

    assert results == [
        {
            "site": "example.com",
            "aggregates": ["daily", "weekly", "monthly"],
            "start_date": "2024-03-01",
            "end_date": "2024-03-31",
            "uploaded": False,
        }
    ]


# ---------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------

def test_internal_configs_are_listed() -> None:
    assert {"paths", "py_logger", "tasks", "task_arguments"} <= set(paths.list_internal_config_names())


def test_unknown_internal_config() -> None:
    with pytest.raises(KeyError):
        paths.get_internal_config_path("nope")


def test_log_path_is_per_task() -> None:
    log_path = paths.get_log_path("compute_site_metrics")

    assert log_path.parts[-3:] == ("logs", "compute_site_metrics", "compute_site_metrics.log")
    assert log_path.is_absolute()
