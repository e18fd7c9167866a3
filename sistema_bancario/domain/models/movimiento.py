"""
Modelo de dominio: Movimiento de una cuenta.

Un Movimiento registra un cambio de saldo: una consignación o un retiro.
Las transferencias no tienen tipo propio; producen un retiro en la cuenta
de origen y una consignación en la de destino.

Decisiones de diseño:
- Los montos son enteros (pesos sin centavos), igual que en el documento
  persistido.
- `fecha` es el texto legible que se muestra al usuario
  ("19/10/2026, 14:03:05"). No sirve para ordenar; para eso está `id`,
  que son los milisegundos desde epoch del momento de creación.
- Los movimientos solo se agregan, nunca se editan ni se eliminan.
"""

from dataclasses import dataclass
from datetime import datetime

TIPO_RETIRO = "retiro"
TIPO_CONSIGNACION = "consignacion"
TIPOS_MOVIMIENTO = (TIPO_RETIRO, TIPO_CONSIGNACION)


@dataclass(frozen=True)
class Movimiento:
    """Representa un movimiento individual de una cuenta.

    frozen=True: un movimiento registrado no cambia nunca.
    """

    id: int
    """Milisegundos desde epoch. Estrictamente creciente dentro de un usuario."""

    tipo: str
    """'retiro' o 'consignacion'."""

    monto: int
    """Monto del movimiento. Siempre > 0; el signo lo da `tipo`."""

    fecha: str
    """Fecha legible con formato DD/MM/YYYY, HH:MM:SS."""

    saldo_anterior: int
    """Saldo de la cuenta antes de aplicar el movimiento."""

    saldo_nuevo: int
    """Saldo de la cuenta después de aplicar el movimiento."""

    cuenta_id: str = ""
    """Id de la cuenta dueña del movimiento. No se persiste: se reconstruye
    a partir de la cuenta que contiene al movimiento."""

    @property
    def es_retiro(self) -> bool:
        return self.tipo == TIPO_RETIRO

    @property
    def monto_con_signo(self) -> int:
        """Monto con signo: negativo para retiros, positivo para consignaciones."""
        return -self.monto if self.es_retiro else self.monto

    @property
    def instante(self) -> datetime:
        """Momento de creación reconstruido a partir del id."""
        return datetime.fromtimestamp(self.id / 1000)

    def __post_init__(self) -> None:
        if self.tipo not in TIPOS_MOVIMIENTO:
            raise ValueError(
                f"Tipo de movimiento no reconocido: '{self.tipo}'. "
                f"Esperado: {', '.join(TIPOS_MOVIMIENTO)}"
            )
        if self.monto <= 0:
            raise ValueError(f"El monto del movimiento debe ser positivo: {self.monto}")
        if self.saldo_nuevo != self.saldo_anterior + self.monto_con_signo:
            raise ValueError(
                f"Saldos inconsistentes en movimiento {self.id}: "
                f"{self.saldo_anterior} {'-' if self.es_retiro else '+'} {self.monto} "
                f"!= {self.saldo_nuevo}"
            )
        if self.saldo_nuevo < 0:
            raise ValueError(f"El saldo no puede quedar negativo: {self.saldo_nuevo}")
