"""
Puerto de salida: Bitácora de operaciones.

Define el contrato para registrar los eventos de negocio del banco:
registros, inicios de sesión, bloqueos, movimientos y rechazos.

El dominio solo conoce los EVENTOS ("se bloqueó el usuario 123"); cada
implementación decide el formato y el destino:
- ConsoleLogger: imprime a consola y acumula un resumen.
- LoggingLogger: envía los eventos al módulo `logging`.
"""

from abc import ABC, abstractmethod

from sistema_bancario.domain.models.movimiento import Movimiento


class Bitacora(ABC):
    """Interfaz para la bitácora de operaciones."""

    # --- Usuarios y acceso ---

    @abstractmethod
    def log_registro(self, usuario_id: str) -> None:
        """Registra que se creó un usuario nuevo."""
        ...

    @abstractmethod
    def log_login(self, usuario_id: str, exito: bool, intentos_fallidos: int) -> None:
        """Registra un intento de inicio de sesión.

        Args:
            usuario_id: Cédula con la que se intentó entrar.
            exito: True si la contraseña fue correcta.
            intentos_fallidos: Contador después del intento.
        """
        ...

    @abstractmethod
    def log_bloqueo(self, usuario_id: str) -> None:
        """Registra que un usuario pasó al estado bloqueado."""
        ...

    # --- Movimientos ---

    @abstractmethod
    def log_movimiento(self, usuario_id: str, movimiento: Movimiento) -> None:
        """Registra un retiro o consignación aplicado a una cuenta."""
        ...

    @abstractmethod
    def log_transferencia(
        self, origen_id: str, destino_id: str, monto: int
    ) -> None:
        """Registra una transferencia completa (ambas patas aplicadas)."""
        ...

    # --- Rechazos y errores ---

    @abstractmethod
    def log_rechazo(self, operacion: str, usuario_id: str, motivo: str) -> None:
        """Registra una operación rechazada por una regla de negocio.

        Args:
            operacion: Nombre de la operación ('retirar', 'consignar', ...).
            usuario_id: Usuario que la solicitó.
            motivo: Mensaje devuelto al usuario.
        """
        ...

    @abstractmethod
    def log_error(self, operacion: str, error: Exception) -> None:
        """Registra un error de infraestructura (persistencia, exportación)."""
        ...

    # --- Resumen ---

    @abstractmethod
    def get_summary(self) -> dict:
        """Devuelve un resumen de la sesión.

        Returns:
            Diccionario con métricas:
            {
                'usuarios_registrados': int,
                'logins_exitosos': int,
                'logins_fallidos': int,
                'bloqueos': int,
                'movimientos': int,
                'transferencias': int,
                'rechazos': int,
                'errores': List[dict],  # [{operacion, error}]
            }
        """
        ...
