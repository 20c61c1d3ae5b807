"""RunLogger domain events and component binding."""

import pytest

from webflow_tools.common import RunLogger


def test_child_logger_binds_component(run_logger, log_records):
    run_logger.child("session").info("Browser started")

    assert log_records[-1]["extra"]["component"] == "session"
    assert log_records[-1]["message"] == "Browser started"


def test_allure_step_logs_step_event(run_logger, log_records):
    with run_logger.allure_step("Submit login form"):
        run_logger.info("inside")

    assert log_records[0]["extra"]["event"] == "step"
    assert "Submit login form" in log_records[0]["message"]
    assert log_records[1]["message"] == "inside"


def test_allure_step_propagates_errors(run_logger):
    with pytest.raises(RuntimeError):
        with run_logger.allure_step("Failing step"):
            raise RuntimeError("boom")


def test_test_end_level_follows_result(log_records):
    run_logger = RunLogger("unit")
    run_logger.test_end("test_a", "passed", duration_ms=12)
    run_logger.test_end("test_b", "failed")

    assert [r["level"].name for r in log_records] == ["INFO", "ERROR"]
    assert "(12ms)" in log_records[0]["message"]
