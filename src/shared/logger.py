# =============================================================================
# logger.py - Gestione logging per le operazioni sugli IntensitySegments
# =============================================================================
import logging
from datetime import datetime
import os

# =============================================================================
# CONFIGURAZIONE
# =============================================================================
SEGMENT_LOG_CONFIG = {
    'enabled': True,                    # Master switch: False disabilita tutto
    'console_enabled': True,            # Stampa su terminale (solo WARNING+)
    'file_enabled': False,              # Scrive su file (INFO+)
    'log_dir': './logs',                # Directory per i file di log
    'log_filename': None,               # None = auto-genera con timestamp
    'validation_mode': 'strict',        # 'strict' = solleva, 'warn' = logga
    'log_operations': True,             # Logga ogni add/set riuscita
}

_segment_logger = None
_segment_logger_initialized = False


# =============================================================================
# FUNZIONI PUBBLICHE
# =============================================================================

def configure_segment_logger(
    enabled=True,
    console_enabled=True,
    file_enabled=False,
    log_dir='./logs',
    scenario_name=None,
    log_operations=True,
    validation_mode='strict'
):
    """
    Configura il logger delle operazioni sugli store.
    Chiamare PRIMA di creare gli store.

    Args:
        enabled: Master switch - se False, nessun logging
        console_enabled: Se True, stampa warning su terminale
        file_enabled: Se True, scrive su file
        log_dir: Directory dove salvare i file di log
        scenario_name: Nome dello scenario YAML (senza path, senza estensione)
                       Il file sara': segments_{scenario_name}.log
        log_operations: Se True, logga ogni mutazione riuscita
        validation_mode: 'strict' o 'warn' per le violazioni di invarianti
    """
    global _segment_logger, _segment_logger_initialized

    if validation_mode not in ('strict', 'warn'):
        raise ValueError(
            f"validation_mode non valido: {validation_mode!r}. "
            "Valori ammessi: 'strict', 'warn'"
        )

    SEGMENT_LOG_CONFIG['enabled'] = enabled
    SEGMENT_LOG_CONFIG['console_enabled'] = console_enabled
    SEGMENT_LOG_CONFIG['file_enabled'] = file_enabled
    SEGMENT_LOG_CONFIG['log_dir'] = log_dir
    SEGMENT_LOG_CONFIG['scenario_name'] = scenario_name
    SEGMENT_LOG_CONFIG['log_operations'] = log_operations
    SEGMENT_LOG_CONFIG['validation_mode'] = validation_mode

    _close_handlers()
    _segment_logger = None
    _segment_logger_initialized = False


def get_segment_logger():
    """
    Ottiene il logger delle operazioni (lazy initialization).
    Rispetta la configurazione in SEGMENT_LOG_CONFIG.

    Returns:
        logging.Logger o None se disabilitato
    """
    global _segment_logger, _segment_logger_initialized

    if _segment_logger_initialized:
        return _segment_logger

    _segment_logger_initialized = True

    if not SEGMENT_LOG_CONFIG['enabled']:
        _segment_logger = None
        return None

    if not SEGMENT_LOG_CONFIG['console_enabled'] and not SEGMENT_LOG_CONFIG['file_enabled']:
        _segment_logger = None
        return None

    _segment_logger = logging.getLogger('intensity_segments')
    _segment_logger.setLevel(logging.INFO)
    _segment_logger.handlers = []
    _segment_logger.propagate = False

    # === FILE HANDLER ===
    if SEGMENT_LOG_CONFIG['file_enabled']:
        log_dir = SEGMENT_LOG_CONFIG['log_dir']
        os.makedirs(log_dir, exist_ok=True)

        if SEGMENT_LOG_CONFIG.get('log_filename'):
            log_filename = SEGMENT_LOG_CONFIG['log_filename']
        elif SEGMENT_LOG_CONFIG.get('scenario_name'):
            log_filename = f"segments_{SEGMENT_LOG_CONFIG['scenario_name']}.log"
        else:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            log_filename = f'segments_{timestamp}.log'

        log_path = os.path.join(log_dir, log_filename)

        file_handler = logging.FileHandler(log_path, mode='w', encoding='utf-8')
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s | %(levelname)-7s | %(message)s',
            datefmt='%H:%M:%S'
        ))
        _segment_logger.addHandler(file_handler)

    # === CONSOLE HANDLER ===
    if SEGMENT_LOG_CONFIG['console_enabled']:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(logging.Formatter('⚠️  SEGMENTS: %(message)s'))
        _segment_logger.addHandler(console_handler)

    return _segment_logger


def get_segment_log_path():
    """
    Ritorna il percorso del file di log corrente (se esiste).

    Returns:
        str o None
    """
    if _segment_logger is None:
        return None

    for handler in _segment_logger.handlers:
        if isinstance(handler, logging.FileHandler):
            return handler.baseFilename
    return None


def log_segment_operation(store_id, op, from_point, to_point, amount,
                          before, after):
    """
    Logga una mutazione riuscita.

    Args:
        store_id: ID dello store
        op: 'add' o 'set'
        from_point, to_point, amount: argomenti della chiamata
        before: serializzazione prima della mutazione
        after: serializzazione dopo la mutazione
    """
    if not SEGMENT_LOG_CONFIG.get('log_operations', True):
        return

    logger = get_segment_logger()
    if logger is None:
        return

    logger.info(
        f"[{store_id}] {op:<3} [{from_point!r}, {to_point!r}) "
        f"amount={amount!r} | {before} → {after}"
    )


def log_rejected_operation(store_id, op, from_point, to_point, amount, error):
    """
    Logga una mutazione rifiutata dalla validazione.

    Args:
        error: eccezione sollevata (InvalidType/InvalidRange/InvalidAmount)
    """
    logger = get_segment_logger()
    if logger is None:
        return

    logger.warning(
        f"[{store_id}] {op:<3} [{from_point!r}, {to_point!r}) "
        f"amount={amount!r} | RIFIUTATA: {type(error).__name__}: {error}"
    )


def log_invariant_violation(store_id, violations):
    """Logga le violazioni di invarianti in validation_mode='warn'."""
    logger = get_segment_logger()
    if logger is None:
        return

    for violation in violations:
        logger.warning(f"[{store_id}] INVARIANTE: {violation}")


# =============================================================================
# HELPERS
# =============================================================================

def _close_handlers():
    if _segment_logger is None:
        return
    for handler in _segment_logger.handlers[:]:
        handler.close()
        _segment_logger.removeHandler(handler)
