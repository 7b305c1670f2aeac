# tests/conftest.py
import pytest
import sys
from pathlib import Path

import matplotlib
matplotlib.use('Agg')

# Aggiunge src/ al path
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

import shared.logger as logger_module
from segments.intensity_segments import IntensitySegments


# =============================================================================
# STATO GLOBALE LOGGER
# =============================================================================

@pytest.fixture(autouse=True)
def reset_logger_state():
    """
    Resetta lo stato globale di shared.logger prima e dopo ogni test.
    Chiude gli handler aperti per non lasciare file descriptor pendenti.
    """
    def _close_and_reset():
        if logger_module._segment_logger is not None:
            for handler in logger_module._segment_logger.handlers[:]:
                handler.close()
                logger_module._segment_logger.removeHandler(handler)
        logger_module._segment_logger = None
        logger_module._segment_logger_initialized = False
        logger_module.SEGMENT_LOG_CONFIG.update({
            'enabled': True,
            'console_enabled': True,
            'file_enabled': False,
            'log_dir': './logs',
            'log_filename': None,
            'validation_mode': 'strict',
            'log_operations': True,
        })
        logger_module.SEGMENT_LOG_CONFIG.pop('scenario_name', None)

    _close_and_reset()
    yield
    _close_and_reset()


# =============================================================================
# FIXTURES STORE
# =============================================================================

@pytest.fixture
def segments():
    """Store vuoto."""
    return IntensitySegments(store_id='test')


@pytest.fixture
def overlapping_segments(segments):
    """
    Due intervalli sovrapposti.
    [10, 20): 1
    [20, 30): 2
    [30, 40): 1
    """
    segments.add(10, 30, 1)
    segments.add(20, 40, 1)
    return segments


# =============================================================================
# FIXTURES SCENARIO YAML
# =============================================================================

@pytest.fixture
def write_scenario(tmp_path):
    """
    Factory: scrive uno scenario YAML in tmp_path e ritorna il path.

    Usage:
        path = write_scenario('''
        stores:
          - store_id: a
            operations: [[add, 10, 30, 1]]
        ''')
    """
    def _write(content: str, name: str = 'scenario.yml') -> str:
        path = tmp_path / name
        path.write_text(content, encoding='utf-8')
        return str(path)

    return _write
