#!/usr/bin/env python3
"""
Tests for logging setup, error tracking and output folder management.
"""

import logging
import sys
from pathlib import Path

# Add the src directory to the path
src_path = Path(__file__).parent / "src"
sys.path.insert(0, str(src_path))

from cssresolver.core.config import BuildConfig, ResolutionConfig
from cssresolver.core.controller import BuildController
from cssresolver.core.logger import ErrorTracker, initialize_logging
from cssresolver.core.planner import OutputPlanner


def _drop_handlers(logger):
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def test_logging_writes_rotating_files(tmp_path):
    logger = initialize_logging(str(tmp_path / 'logs'), logging.WARNING, app_name='cssresolver_test_files')
    logging.getLogger('cssresolver_test_files.pipeline').error("copy failed")

    for handler in logger.handlers:
        handler.flush()
    assert 'copy failed' in (tmp_path / 'logs' / 'cssresolver_test_files.log').read_text(encoding='utf-8')
    assert 'copy failed' in (tmp_path / 'logs' / 'cssresolver_test_files_errors.log').read_text(encoding='utf-8')

    # Calling again must not stack handlers
    handler_count = len(logger.handlers)
    assert initialize_logging(str(tmp_path / 'logs'), app_name='cssresolver_test_files') is logger
    assert len(logger.handlers) == handler_count
    _drop_handlers(logger)


def test_log_dir_added_after_console_only_setup(tmp_path):
    logger = initialize_logging(None, app_name='cssresolver_test_late_files')
    assert len(logger.handlers) == 1

    initialize_logging(str(tmp_path / 'logs'), app_name='cssresolver_test_late_files')
    logger.error("late failure")

    for handler in logger.handlers:
        handler.flush()
    assert len(logger.handlers) == 3
    assert 'late failure' in (tmp_path / 'logs' / 'cssresolver_test_late_files.log').read_text(encoding='utf-8')
    _drop_handlers(logger)


def test_error_tracker_records_failures_and_report(tmp_path):
    tracker = ErrorTracker(logging.getLogger('cssresolver.test'))
    try:
        raise PermissionError(13, "Permission denied", "/src/img/logo.png")
    except PermissionError as e:
        issue = tracker.record_failure("site.css", e)
    tracker.record_warning("site.txt", "odd extension")
    try:
        raise FileNotFoundError(2, "No such file", "page.css")
    except FileNotFoundError as e:
        missing = tracker.record_failure("page.css", e)

    assert issue.id == 'ERR_001'
    assert issue.asset == '/src/img/logo.png'
    assert missing.asset is None
    assert 'PermissionError' in issue.traceback
    assert tracker.count_by_type() == {'PermissionError': 1, 'FileNotFoundError': 1}
    assert len(tracker.warnings) == 1

    report = tmp_path / 'report.txt'
    tracker.write_report(str(report))
    text = report.read_text(encoding='utf-8')
    assert 'Failed documents: 2' in text
    assert 'Asset: /src/img/logo.png' in text
    assert 'site.txt: odd extension' in text


def test_planner_destinations_and_cleanup(tmp_path):
    planner = OutputPlanner(str(tmp_path / 'dist'))

    dest = planner.plan('/src/fonts/a.WOFF2', 'abc123', 'fonts')
    assert dest == str(tmp_path / 'dist' / 'fonts' / 'abc123.WOFF2')
    assert (tmp_path / 'dist' / 'fonts').is_dir()
    assert planner.plan('/src/x.bin', 'def456', '') == str(tmp_path / 'dist' / 'def456.bin')

    (tmp_path / 'dist' / 'fonts' / 'abc123.WOFF2').write_bytes(b'1234')
    assert planner.get_output_stats()['fonts'] == {'files': 1, 'bytes': 4}

    (tmp_path / 'dist' / 'css').mkdir()
    planner.clear_category_directories()
    assert not (tmp_path / 'dist' / 'fonts').exists()
    assert (tmp_path / 'dist' / 'css').exists()
    assert planner.get_output_stats()['img'] == {'files': 0, 'bytes': 0}


def test_unrecognized_extension_is_processed_with_warning(tmp_path):
    doc = tmp_path / 'theme.scss'
    doc.write_text("a{color:red}", encoding='utf-8')
    config = BuildConfig(inputs=[str(doc)], output_dir=str(tmp_path / 'out'),
                         resolution=ResolutionConfig(public_path='dist', base_dir=str(tmp_path)))

    controller = BuildController(config)
    stats = controller.run()

    assert stats['failed'] == 0
    assert len(controller.errors.warnings) == 1
    assert (tmp_path / 'out' / 'theme.scss').read_text(encoding='utf-8') == "a{color:red}"
