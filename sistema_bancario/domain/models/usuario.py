"""
Modelo de dominio: Usuario del banco.

El id del usuario es su cédula. La contraseña se guarda y compara en texto
plano; es una debilidad conocida del sistema y queda fuera de alcance.

El estado de acceso (intentos fallidos y bloqueo) vive en el propio
usuario porque se persiste junto con él en el mismo registro.
"""

from dataclasses import dataclass, field

from sistema_bancario.domain.models.cuenta import Cuenta


@dataclass(frozen=True)
class Usuario:
    """Cliente del banco con credenciales y una o más cuentas."""

    id: str
    nombre: str
    cedula: str
    celular: str
    email: str
    password: str
    cuentas: tuple[Cuenta, ...] = field(default_factory=tuple)
    intentos_fallidos: int = 0
    bloqueado: bool = False

    @property
    def saldo_total(self) -> int:
        """Suma de los saldos de todas las cuentas."""
        return sum(cuenta.saldo for cuenta in self.cuentas)

    @property
    def ultimo_id_movimiento(self) -> int:
        """Id más alto entre los movimientos de todas las cuentas (0 si no hay)."""
        return max(
            (mov.id for cuenta in self.cuentas for mov in cuenta.movimientos),
            default=0,
        )

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("El id del usuario no puede estar vacío")
        if not self.cuentas:
            raise ValueError(f"El usuario {self.id} debe tener al menos una cuenta")
        if self.intentos_fallidos < 0:
            raise ValueError(f"intentos_fallidos no puede ser negativo: {self.intentos_fallidos}")
