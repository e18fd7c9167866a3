"""
Servicio de dominio: Directorio de cuentas.

Traduce la referencia de cuenta que da quien llama a una Cuenta concreta
del usuario. Orden de resolución:

1. Id exacto de la cuenta ("123-ahorros").
2. Tipo de cuenta ("ahorros").
3. Cuenta por defecto, solo si no se indicó referencia.

Un texto suelto se prueba primero como id y luego como tipo. Si nada
coincide se lanza CuentaNoEncontradaError; no se cae a la cuenta por
defecto cuando la referencia sí se indicó.

Los registros antiguos (saldo plano sin cuentas) ya llegan convertidos
a varias cuentas desde el repositorio, así que aquí no se migra nada.
"""

from dataclasses import replace

from sistema_bancario.domain.exceptions import CuentaNoEncontradaError
from sistema_bancario.domain.models.cuenta import TIPO_AHORROS, Cuenta
from sistema_bancario.domain.models.referencia_cuenta import (
    PorDefecto,
    PorIdentificador,
    PorTipo,
    ReferenciaCuenta,
)
from sistema_bancario.domain.models.usuario import Usuario


def candidatas(referencia: ReferenciaCuenta | str | None) -> tuple[ReferenciaCuenta, ...]:
    """Convierte lo que da quien llama en las referencias a probar, en orden."""
    if referencia is None:
        return (PorDefecto(),)
    if isinstance(referencia, str):
        texto = referencia.strip()
        if not texto:
            return (PorDefecto(),)
        return (PorIdentificador(texto), PorTipo(texto))
    return (referencia,)


def buscar_cuenta(usuario: Usuario, referencia: ReferenciaCuenta) -> Cuenta | None:
    """Busca una cuenta con una referencia tipada. None si no existe."""
    if isinstance(referencia, PorIdentificador):
        return next((c for c in usuario.cuentas if c.id == referencia.valor), None)
    if isinstance(referencia, PorTipo):
        return next((c for c in usuario.cuentas if c.tipo == referencia.valor), None)
    if isinstance(referencia, PorDefecto):
        return cuenta_por_defecto(usuario)
    raise TypeError(f"Referencia de cuenta no soportada: {type(referencia).__name__}")


def cuenta_por_defecto(usuario: Usuario) -> Cuenta:
    """La cuenta de ahorros si existe; si no, la primera cuenta."""
    for cuenta in usuario.cuentas:
        if cuenta.tipo == TIPO_AHORROS:
            return cuenta
    return usuario.cuentas[0]


def resolver_cuenta(
    usuario: Usuario,
    referencia: ReferenciaCuenta | str | None = None,
    mensaje_error: str = "Cuenta no encontrada",
) -> Cuenta:
    """Resuelve una referencia a una cuenta del usuario.

    Args:
        usuario: Dueño de las cuentas.
        referencia: Referencia tipada, texto (id o tipo) o None.
        mensaje_error: Texto de la excepción si no se encuentra. Las
            transferencias lo cambian para la cuenta destino.

    Raises:
        CuentaNoEncontradaError: Si ninguna candidata coincide.
    """
    for candidata in candidatas(referencia):
        cuenta = buscar_cuenta(usuario, candidata)
        if cuenta is not None:
            return cuenta
    raise CuentaNoEncontradaError(str(referencia), mensaje_error)


def reemplazar_cuenta(usuario: Usuario, cuenta: Cuenta) -> Usuario:
    """Devuelve un Usuario nuevo con `cuenta` en lugar de la del mismo id."""
    if not any(c.id == cuenta.id for c in usuario.cuentas):
        raise CuentaNoEncontradaError(cuenta.id)
    cuentas = tuple(cuenta if c.id == cuenta.id else c for c in usuario.cuentas)
    return replace(usuario, cuentas=cuentas)


def crear_cuentas_iniciales(cedula: str, tipos: tuple[str, ...]) -> tuple[Cuenta, ...]:
    """Una cuenta vacía por cada tipo, en el orden dado."""
    return tuple(Cuenta.nueva(cedula, tipo) for tipo in tipos)
