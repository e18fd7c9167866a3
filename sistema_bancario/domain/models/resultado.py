"""
Modelo de dominio: Resultado de una operación bancaria.

Todas las operaciones del servicio Banco devuelven uno de estos objetos en
lugar de lanzar excepciones. La capa de presentación solo necesita mirar
`exito` y mostrar `mensaje`; si la operación modificó datos, el nuevo
estado viene en `usuario` (y en `destino` para transferencias a terceros).
"""

from dataclasses import dataclass

from sistema_bancario.domain.models.cuenta import Cuenta
from sistema_bancario.domain.models.usuario import Usuario


@dataclass(frozen=True)
class ResultadoOperacion:
    """Resultado de una operación sobre cuentas o datos del usuario."""

    exito: bool
    mensaje: str
    usuario: Usuario | None = None
    """Estado actualizado del usuario que hizo la operación."""

    cuenta: Cuenta | None = None
    """Cuenta afectada (la de origen en transferencias)."""

    destino: Usuario | None = None
    """Estado actualizado del usuario destino de una transferencia."""

    @classmethod
    def fallo(cls, mensaje: str) -> "ResultadoOperacion":
        return cls(exito=False, mensaje=mensaje)


@dataclass(frozen=True)
class ResultadoLogin:
    """Resultado de un intento de inicio de sesión."""

    exito: bool
    mensaje: str = ""
    usuario: Usuario | None = None
