"""
Adaptador de salida: Bitácora sobre el módulo `logging`.

Envía cada evento de negocio a un logger estándar de Python
("sistema_bancario.bitacora"), con niveles según su gravedad:

    registro, login exitoso, movimiento, transferencia → INFO
    login fallido, rechazo                              → WARNING
    bloqueo                                             → WARNING
    error de persistencia/exportación                   → ERROR (con traceback)

El formato y el destino los decide la configuración de logging
(ver infrastructure/log_config.py).
"""

import logging
from collections import Counter

from sistema_bancario.domain.models.movimiento import Movimiento
from sistema_bancario.domain.ports.bitacora import Bitacora


class LoggingLogger(Bitacora):
    """Bitácora que delega en `logging`."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._log = logger or logging.getLogger("sistema_bancario.bitacora")
        self._contadores: Counter[str] = Counter()
        self._errores: list[dict] = []

    def log_registro(self, usuario_id: str) -> None:
        self._contadores["usuarios_registrados"] += 1
        self._log.info("Usuario registrado: %s", usuario_id)

    def log_login(self, usuario_id: str, exito: bool, intentos_fallidos: int) -> None:
        if exito:
            self._contadores["logins_exitosos"] += 1
            self._log.info("Login exitoso: %s", usuario_id)
        else:
            self._contadores["logins_fallidos"] += 1
            self._log.warning(
                "Login fallido: %s (intentos fallidos: %d)", usuario_id, intentos_fallidos
            )

    def log_bloqueo(self, usuario_id: str) -> None:
        self._contadores["bloqueos"] += 1
        self._log.warning("Usuario bloqueado: %s", usuario_id)

    def log_movimiento(self, usuario_id: str, movimiento: Movimiento) -> None:
        self._contadores["movimientos"] += 1
        self._log.info(
            "%s de %d en %s (%s): saldo %d -> %d",
            movimiento.tipo,
            movimiento.monto,
            movimiento.cuenta_id,
            usuario_id,
            movimiento.saldo_anterior,
            movimiento.saldo_nuevo,
        )

    def log_transferencia(self, origen_id: str, destino_id: str, monto: int) -> None:
        self._contadores["transferencias"] += 1
        self._contadores["movimientos"] += 2
        self._log.info("Transferencia de %d: %s -> %s", monto, origen_id, destino_id)

    def log_rechazo(self, operacion: str, usuario_id: str, motivo: str) -> None:
        self._contadores["rechazos"] += 1
        self._log.warning("Operación %s rechazada para %s: %s", operacion, usuario_id, motivo)

    def log_error(self, operacion: str, error: Exception) -> None:
        self._errores.append({"operacion": operacion, "error": str(error)})
        self._log.error("Error en %s: %s", operacion, error, exc_info=error)

    def get_summary(self) -> dict:
        return {
            "usuarios_registrados": self._contadores["usuarios_registrados"],
            "logins_exitosos": self._contadores["logins_exitosos"],
            "logins_fallidos": self._contadores["logins_fallidos"],
            "bloqueos": self._contadores["bloqueos"],
            "movimientos": self._contadores["movimientos"],
            "transferencias": self._contadores["transferencias"],
            "rechazos": self._contadores["rechazos"],
            "errores": self._errores,
        }
