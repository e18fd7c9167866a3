"""
Tests para las dos implementaciones de Bitacora.
"""

import logging

import pytest

from sistema_bancario.adapters.output.loggers.console_logger import ConsoleLogger
from sistema_bancario.adapters.output.loggers.logging_logger import LoggingLogger
from sistema_bancario.domain.exceptions import PersistenciaError
from sistema_bancario.domain.models import Movimiento

MOVIMIENTO = Movimiento(
    id=1,
    tipo="retiro",
    monto=30,
    fecha="19/10/2026, 14:03:05",
    saldo_anterior=100,
    saldo_nuevo=70,
    cuenta_id="123-ahorros",
)


def _sesion(logger):
    logger.log_registro("123")
    logger.log_login("123", True, 0)
    logger.log_login("123", False, 1)
    logger.log_bloqueo("123")
    logger.log_movimiento("123", MOVIMIENTO)
    logger.log_transferencia("123", "456", 50)
    logger.log_rechazo("retirar", "123", "Saldo insuficiente")
    logger.log_error("consignar", PersistenciaError("usuarios.json", "disco lleno"))


RESUMEN_ESPERADO = {
    "usuarios_registrados": 1,
    "logins_exitosos": 1,
    "logins_fallidos": 1,
    "bloqueos": 1,
    "movimientos": 3,
    "transferencias": 1,
    "rechazos": 1,
}


@pytest.mark.parametrize("crear", [lambda: ConsoleLogger(verbose=False), LoggingLogger])
def test_resumen(crear):
    logger = crear()
    _sesion(logger)
    resumen = logger.get_summary()
    errores = resumen.pop("errores")
    assert resumen == RESUMEN_ESPERADO
    assert errores == [
        {
            "operacion": "consignar",
            "error": "Error de persistencia en 'usuarios.json': disco lleno",
        }
    ]


class TestConsoleLogger:
    def test_imprime_eventos(self, capsys):
        logger = ConsoleLogger()
        logger.log_movimiento("123", MOVIMIENTO)
        salida = capsys.readouterr().out
        assert "Retiro" in salida
        assert "$100 → $70" in salida

    def test_silencioso(self, capsys):
        _sesion(ConsoleLogger(verbose=False))
        assert capsys.readouterr().out == ""

    def test_print_summary(self, capsys):
        logger = ConsoleLogger(verbose=False)
        _sesion(logger)
        logger.print_summary()
        salida = capsys.readouterr().out
        assert "RESUMEN DE LA SESIÓN" in salida
        assert "consignar: Error de persistencia" in salida


class TestLoggingLogger:
    def test_niveles(self, caplog):
        with caplog.at_level(logging.INFO, logger="sistema_bancario.bitacora"):
            _sesion(LoggingLogger())

        niveles = {r.getMessage().split(":")[0]: r.levelno for r in caplog.records}
        assert niveles["Usuario registrado"] == logging.INFO
        assert niveles["Login fallido"] == logging.WARNING
        assert niveles["Usuario bloqueado"] == logging.WARNING
        assert niveles["Error en consignar"] == logging.ERROR

    def test_logger_inyectado(self, caplog):
        with caplog.at_level(logging.INFO, logger="pruebas"):
            LoggingLogger(logging.getLogger("pruebas")).log_registro("123")
        assert caplog.records[0].name == "pruebas"
        assert caplog.records[0].getMessage() == "Usuario registrado: 123"
