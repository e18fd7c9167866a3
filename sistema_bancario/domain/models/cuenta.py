"""
Modelo de dominio: Cuenta bancaria de un usuario.

Cada usuario tiene una o más cuentas identificadas por tipo ("ahorros",
"corriente"). El id de la cuenta es "<cedula>-<tipo>".
"""

from dataclasses import dataclass, field

from sistema_bancario.domain.models.movimiento import Movimiento

TIPO_AHORROS = "ahorros"
TIPO_CORRIENTE = "corriente"

NOMBRES_POR_TIPO = {
    TIPO_AHORROS: "Cuenta de ahorros",
    TIPO_CORRIENTE: "Cuenta corriente",
}


def id_cuenta(cedula: str, tipo: str) -> str:
    """Construye el id canónico de una cuenta: '<cedula>-<tipo>'."""
    return f"{cedula}-{tipo}"


def nombre_por_defecto(tipo: str) -> str:
    return NOMBRES_POR_TIPO.get(tipo, f"Cuenta {tipo}")


@dataclass(frozen=True)
class Cuenta:
    """Sub-libro con saldo propio dentro de un usuario."""

    id: str
    tipo: str
    nombre: str
    saldo: int = 0
    movimientos: tuple[Movimiento, ...] = field(default_factory=tuple)

    @property
    def saldo_calculado(self) -> int:
        """Suma con signo de todos los movimientos de la cuenta."""
        return sum(mov.monto_con_signo for mov in self.movimientos)

    @property
    def es_consistente(self) -> bool:
        """Indica si el saldo coincide con la suma de los movimientos.

        Las cuentas migradas desde el esquema plano pueden no cumplirlo
        (el saldo inicial no siempre venía acompañado de movimientos), por
        eso no se valida en __post_init__.
        """
        return self.saldo == self.saldo_calculado

    @property
    def ultimo_movimiento(self) -> Movimiento | None:
        return self.movimientos[-1] if self.movimientos else None

    @classmethod
    def nueva(cls, cedula: str, tipo: str) -> "Cuenta":
        """Crea una cuenta vacía con saldo 0 para el tipo dado."""
        return cls(id=id_cuenta(cedula, tipo), tipo=tipo, nombre=nombre_por_defecto(tipo))

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("El id de la cuenta no puede estar vacío")
        if not self.tipo:
            raise ValueError("El tipo de la cuenta no puede estar vacío")
        if self.saldo < 0:
            raise ValueError(f"El saldo no puede ser negativo: {self.saldo}")
