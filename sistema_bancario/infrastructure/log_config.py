"""
Configuración de `logging` para el sistema bancario.

Solo se usa cuando la bitácora elegida es LoggingLogger; ConsoleLogger
imprime directamente y no necesita esta configuración. Se configura el
logger del paquete, no el raíz, así que los handlers de quien importe
el paquete quedan intactos.
"""

import logging
import sys

LOGGER_PAQUETE = "sistema_bancario"
FORMATO = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
FORMATO_FECHA = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Deja el logger del paquete con un único handler a stdout.

    Args:
        level: Nivel de log (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               Un nombre desconocido se toma como INFO.

    Returns:
        El logger "sistema_bancario" ya configurado.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(LOGGER_PAQUETE)
    logger.setLevel(log_level)
    logger.propagate = False

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt=FORMATO, datefmt=FORMATO_FECHA))
    logger.addHandler(handler)
    return logger
