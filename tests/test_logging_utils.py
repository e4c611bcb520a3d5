import logging

import numpy as np
import pytest

from pathkernel import intersections, logging_utils
from pathkernel.logging_utils import apply_debug_logging, debug_log_call

LOGGER_NAME = 'pathkernel.tests.tracing'


def _messages(caplog):
    return [record.getMessage() for record in caplog.records if record.name == LOGGER_NAME]


def test_debug_log_call_traces_arguments_and_result(caplog):
    caplog.set_level(logging.DEBUG, logger=LOGGER_NAME)
    logger = logging.getLogger(LOGGER_NAME)

    @debug_log_call(logger, name='add')
    def add(a, b):
        return a + b

    assert add(1, 2) == 3
    assert _messages(caplog) == ['-> add(1, 2)', '<- add = 3']


def test_debug_log_call_reports_exceptions(caplog):
    caplog.set_level(logging.DEBUG, logger=LOGGER_NAME)
    logger = logging.getLogger(LOGGER_NAME)

    @debug_log_call(logger, name='boom')
    def boom():
        raise ValueError('nope')

    with pytest.raises(ValueError):
        boom()
    assert '!! boom raised' in _messages(caplog)


def test_debug_log_call_is_silent_above_debug(caplog):
    caplog.set_level(logging.INFO, logger=LOGGER_NAME)
    logger = logging.getLogger(LOGGER_NAME)
    traced = debug_log_call(logger)(lambda: 1)
    assert traced() == 1
    assert _messages(caplog) == []


def test_wrapping_is_idempotent():
    logger = logging.getLogger(LOGGER_NAME)
    traced = debug_log_call(logger)(len)
    assert debug_log_call(logger)(traced) is traced


def test_safe_repr_summaries():
    assert logging_utils._safe_repr((0.0,) * 8) == 'curve[(0, 0) (0, 0) (0, 0) (0, 0)]'
    summary = logging_utils._safe_repr(np.arange(10, dtype=float))
    assert 'shape=(10,)' in summary
    assert 'min=0' in summary
    assert 'max=9' in summary
    assert logging_utils._safe_repr(list(range(10))) == '[0, 1, 2, 3, 4, 5, ... 4 more]'
    assert logging_utils._safe_repr(0.1 + 0.2) == '0.3'


def test_apply_debug_logging_respects_module_and_skip():
    def local():
        return 1

    def skipped():
        return 2

    local.__module__ = 'fake.module'
    skipped.__module__ = 'fake.module'
    namespace = {'__name__': 'fake.module', 'local': local, 'skipped': skipped, 'foreign': len}
    apply_debug_logging(namespace, logger=logging.getLogger(LOGGER_NAME), skip={'skipped'})
    assert getattr(namespace['local'], '_pathkernel_traced', False)
    assert namespace['local']() == 1
    assert namespace['skipped'] is skipped
    assert namespace['foreign'] is len


def test_intersection_entry_points_are_traced():
    assert getattr(intersections.get_intersections, '_pathkernel_traced', False)
    assert not getattr(intersections.add_curve_intersections, '_pathkernel_traced', False)
