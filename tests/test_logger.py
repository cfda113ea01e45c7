import logging

import pytest

from dispatch_analytics.logger import DEBUG_LOG_FORMAT, build_logger, d_logger, logger


@pytest.fixture
def scratch_logger_name(request):
    name = f"dispatch_analytics.tests.{request.node.name}"
    yield name
    scratch = logging.getLogger(name)
    for handler in list(scratch.handlers):
        handler.close()
        scratch.removeHandler(handler)


def test_handlers_are_attached_once(tmp_path, scratch_logger_name):
    log_file = tmp_path / "reports.log"
    first = build_logger(scratch_logger_name, log_file, logging.INFO)
    second = build_logger(scratch_logger_name, log_file, logging.INFO)

    assert first is second
    assert len(first.handlers) == 2


def test_report_lines_carry_the_thread_name(tmp_path, scratch_logger_name):
    log_file = tmp_path / "reports.log"
    report_logger = build_logger(scratch_logger_name, log_file, logging.INFO, console=False)

    report_logger.info("Report revenue_risk completed in 0.10 seconds")
    report_logger.debug("not written below INFO")
    for handler in report_logger.handlers:
        handler.flush()

    (line,) = log_file.read_text(encoding="utf-8").splitlines()
    assert f"{scratch_logger_name} - INFO - [MainThread] Report revenue_risk completed" in line


def test_debug_log_stays_out_of_the_report_log(tmp_path, scratch_logger_name):
    diagnostics = build_logger(
        scratch_logger_name,
        tmp_path / "debug.log",
        logging.DEBUG,
        log_format=DEBUG_LOG_FORMAT,
        console=False,
        propagate=False,
    )
    assert not diagnostics.propagate
    assert [type(handler) for handler in diagnostics.handlers] == [logging.FileHandler]


def test_package_loggers():
    assert logger.name == "dispatch_analytics"
    assert d_logger.name == "dispatch_analytics.debug"
    assert not d_logger.propagate
    assert d_logger.level == logging.DEBUG
