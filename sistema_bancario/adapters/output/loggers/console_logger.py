"""
Adaptador de salida: Bitácora a consola.

Implementación simple de Bitacora que imprime cada evento a stdout en un
formato consistente y acumula contadores para un resumen final.

Útil para:
- La ejecución manual desde la terminal (CLI).
- Pruebas: el resumen permite hacer asserts sobre lo que pasó.
"""

from sistema_bancario.domain.models.movimiento import Movimiento
from sistema_bancario.domain.ports.bitacora import Bitacora
from sistema_bancario.domain.shared.money import format_money


class ConsoleLogger(Bitacora):
    """Bitácora que imprime eventos a consola."""

    def __init__(self, verbose: bool = True) -> None:
        """
        Args:
            verbose: Si es False solo acumula contadores, sin imprimir.
        """
        self._verbose = verbose
        self._usuarios_registrados: int = 0
        self._logins_exitosos: int = 0
        self._logins_fallidos: int = 0
        self._bloqueos: int = 0
        self._movimientos: int = 0
        self._transferencias: int = 0
        self._rechazos: int = 0
        self._errores: list[dict] = []

    def _print(self, texto: str) -> None:
        if self._verbose:
            print(texto)

    # --- Usuarios y acceso ---

    def log_registro(self, usuario_id: str) -> None:
        self._usuarios_registrados += 1
        self._print(f"  👤 Usuario registrado: {usuario_id}")

    def log_login(self, usuario_id: str, exito: bool, intentos_fallidos: int) -> None:
        if exito:
            self._logins_exitosos += 1
            self._print(f"  🔓 Login exitoso: {usuario_id}")
        else:
            self._logins_fallidos += 1
            self._print(f"  🔒 Login fallido: {usuario_id} — intentos fallidos: {intentos_fallidos}")

    def log_bloqueo(self, usuario_id: str) -> None:
        self._bloqueos += 1
        self._print(f"  ⛔ Usuario bloqueado: {usuario_id}")

    # --- Movimientos ---

    def log_movimiento(self, usuario_id: str, movimiento: Movimiento) -> None:
        self._movimientos += 1
        self._print(
            f"  💵 {movimiento.tipo.capitalize()}: {usuario_id} ({movimiento.cuenta_id}) — "
            f"{format_money(movimiento.monto)}, saldo "
            f"{format_money(movimiento.saldo_anterior)} → {format_money(movimiento.saldo_nuevo)}"
        )

    def log_transferencia(self, origen_id: str, destino_id: str, monto: int) -> None:
        # Cada transferencia son dos movimientos (retiro + consignación).
        self._transferencias += 1
        self._movimientos += 2
        self._print(f"  🔁 Transferencia: {origen_id} → {destino_id} — {format_money(monto)}")

    # --- Rechazos y errores ---

    def log_rechazo(self, operacion: str, usuario_id: str, motivo: str) -> None:
        self._rechazos += 1
        self._print(f"  ⚠️  Rechazado ({operacion}): {usuario_id} — {motivo}")

    def log_error(self, operacion: str, error: Exception) -> None:
        self._errores.append({"operacion": operacion, "error": str(error)})
        self._print(f"  ❌ Error ({operacion}): {error}")

    # --- Resumen ---

    def get_summary(self) -> dict:
        return {
            "usuarios_registrados": self._usuarios_registrados,
            "logins_exitosos": self._logins_exitosos,
            "logins_fallidos": self._logins_fallidos,
            "bloqueos": self._bloqueos,
            "movimientos": self._movimientos,
            "transferencias": self._transferencias,
            "rechazos": self._rechazos,
            "errores": self._errores,
        }

    def print_summary(self) -> None:
        """Imprime el resumen de la sesión."""
        print("\n" + "=" * 60)
        print("RESUMEN DE LA SESIÓN")
        print("=" * 60)
        print(f"  Usuarios registrados: {self._usuarios_registrados}")
        print(f"  Logins exitosos:      {self._logins_exitosos}")
        print(f"  Logins fallidos:      {self._logins_fallidos}")
        print(f"  Bloqueos:             {self._bloqueos}")
        print(f"  Movimientos:          {self._movimientos}")
        print(f"  Transferencias:       {self._transferencias}")
        print(f"  Rechazos:             {self._rechazos}")

        if self._errores:
            print("\n  ERRORES:")
            for err in self._errores:
                print(f"    - {err['operacion']}: {err['error']}")

        print("=" * 60)
