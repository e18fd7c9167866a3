"""
Modelo de dominio: Reglas de negocio parametrizables del banco.

Los valores por defecto son los de la versión web del banco. La configuración
(infrastructure/config.py) puede construir otras reglas a partir de
variables de entorno.
"""

from dataclasses import dataclass

from sistema_bancario.domain.models.cuenta import TIPO_AHORROS, TIPO_CORRIENTE


@dataclass(frozen=True)
class ReglasBanco:
    max_intentos: int = 3
    """Intentos fallidos de login que bloquean al usuario."""

    longitud_minima_password: int = 4
    longitud_minima_celular: int = 7

    tipos_cuenta: tuple[str, ...] = (TIPO_AHORROS, TIPO_CORRIENTE)
    """Cuentas que se crean al registrar un usuario. La primera es la
    cuenta por defecto cuando no existe una de ahorros."""

    def __post_init__(self) -> None:
        if self.max_intentos < 1:
            raise ValueError(f"max_intentos debe ser >= 1: {self.max_intentos}")
        if self.longitud_minima_password < 1:
            raise ValueError(
                f"longitud_minima_password debe ser >= 1: {self.longitud_minima_password}"
            )
        if not self.tipos_cuenta:
            raise ValueError("Debe existir al menos un tipo de cuenta")
