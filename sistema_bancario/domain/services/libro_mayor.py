"""
Servicio de dominio: Libro mayor.

Funciones puras que calculan el nuevo estado de un usuario para cada
operación. No leen ni escriben persistencia y nunca modifican sus
argumentos: siempre devuelven Usuarios nuevos (los modelos son frozen).

Las reglas de negocio se expresan lanzando excepciones de dominio; el
servicio Banco las convierte en resultados fallidos.
"""

from dataclasses import replace
from datetime import datetime

from sistema_bancario.domain.exceptions import (
    PasswordIncorrectaError,
    SaldoInsuficienteError,
    UsuarioExistenteError,
    ValidacionError,
)
from sistema_bancario.domain.models.cuenta import Cuenta
from sistema_bancario.domain.models.datos_usuario import CambiosPerfil, DatosRegistro
from sistema_bancario.domain.models.movimiento import (
    TIPO_CONSIGNACION,
    TIPO_RETIRO,
    Movimiento,
)
from sistema_bancario.domain.models.referencia_cuenta import ReferenciaCuenta
from sistema_bancario.domain.models.reglas import ReglasBanco
from sistema_bancario.domain.models.usuario import Usuario
from sistema_bancario.domain.services.directorio_cuentas import (
    crear_cuentas_iniciales,
    reemplazar_cuenta,
    resolver_cuenta,
)
from sistema_bancario.domain.shared.fechas import format_fecha, siguiente_id

Referencia = ReferenciaCuenta | str | None


def validar_monto(monto: int) -> None:
    """El monto debe ser un entero mayor a 0."""
    if isinstance(monto, bool) or not isinstance(monto, int):
        raise ValidacionError("El monto debe ser un número entero")
    if monto <= 0:
        raise ValidacionError("El monto debe ser mayor a 0")


def agregar_movimiento(
    usuario: Usuario,
    cuenta: Cuenta,
    tipo: str,
    monto: int,
    instante: datetime,
) -> tuple[Usuario, Cuenta]:
    """Agrega un movimiento a una cuenta y devuelve (usuario, cuenta) nuevos.

    No valida reglas de negocio: quien llama ya verificó monto y saldo.
    """
    saldo_nuevo = cuenta.saldo - monto if tipo == TIPO_RETIRO else cuenta.saldo + monto
    movimiento = Movimiento(
        id=siguiente_id(instante, usuario.ultimo_id_movimiento),
        tipo=tipo,
        monto=monto,
        fecha=format_fecha(instante),
        saldo_anterior=cuenta.saldo,
        saldo_nuevo=saldo_nuevo,
        cuenta_id=cuenta.id,
    )
    cuenta_actualizada = replace(
        cuenta,
        saldo=saldo_nuevo,
        movimientos=cuenta.movimientos + (movimiento,),
    )
    return reemplazar_cuenta(usuario, cuenta_actualizada), cuenta_actualizada


def aplicar_consignacion(
    usuario: Usuario,
    monto: int,
    referencia: Referencia,
    instante: datetime,
    mensaje_cuenta: str = "Cuenta no encontrada",
) -> tuple[Usuario, Cuenta]:
    cuenta = resolver_cuenta(usuario, referencia, mensaje_cuenta)
    validar_monto(monto)
    return agregar_movimiento(usuario, cuenta, TIPO_CONSIGNACION, monto, instante)


def aplicar_retiro(
    usuario: Usuario,
    monto: int,
    referencia: Referencia,
    instante: datetime,
) -> tuple[Usuario, Cuenta]:
    cuenta = resolver_cuenta(usuario, referencia)
    validar_monto(monto)
    if monto > cuenta.saldo:
        raise SaldoInsuficienteError(cuenta.id, cuenta.saldo, monto)
    return agregar_movimiento(usuario, cuenta, TIPO_RETIRO, monto, instante)


def aplicar_transferencia(
    origen: Usuario,
    destino: Usuario | None,
    monto: int,
    referencia_origen: Referencia,
    referencia_destino: Referencia,
    instante: datetime,
) -> tuple[Usuario, Usuario, Cuenta]:
    """Calcula las dos patas de una transferencia.

    Si `destino` es None o es el mismo usuario que `origen`, la
    consignación se aplica sobre el usuario ya debitado (transferencia
    entre cuentas propias). En ese caso, sin `referencia_destino` se
    usa la misma referencia de origen.

    Returns:
        (origen_actualizado, destino_actualizado, cuenta_origen_actualizada).
        En transferencias propias ambos usuarios son el mismo objeto.
    """
    validar_monto(monto)
    origen_debitado, cuenta_origen = aplicar_retiro(origen, monto, referencia_origen, instante)

    if destino is None or destino.id == origen.id:
        if referencia_destino is None:
            referencia_destino = referencia_origen
        acreditado, _ = aplicar_consignacion(
            origen_debitado, monto, referencia_destino, instante, "Cuenta destino no encontrada"
        )
        cuenta_origen = resolver_cuenta(acreditado, cuenta_origen.id)
        return acreditado, acreditado, cuenta_origen

    destino_acreditado, _ = aplicar_consignacion(
        destino, monto, referencia_destino, instante, "Cuenta destino no encontrada"
    )
    return origen_debitado, destino_acreditado, cuenta_origen


def aplicar_cambio_password(
    usuario: Usuario, actual: str, nuevo: str, reglas: ReglasBanco
) -> Usuario:
    if usuario.password != actual:
        raise PasswordIncorrectaError()
    if len(nuevo) < reglas.longitud_minima_password:
        raise ValidacionError(
            f"La nueva contraseña debe tener al menos "
            f"{reglas.longitud_minima_password} caracteres"
        )
    return replace(usuario, password=nuevo)


def validar_cambios_perfil(cambios: CambiosPerfil | None, reglas: ReglasBanco) -> dict[str, str]:
    """Valida los cambios y devuelve solo los campos a modificar."""
    if cambios is None or cambios.vacio:
        raise ValidacionError("No hay cambios para guardar")
    if cambios.email and "@" not in cambios.email:
        raise ValidacionError("Email no válido")
    if cambios.celular and len(cambios.celular.strip()) < reglas.longitud_minima_celular:
        raise ValidacionError("Celular no válido")
    return cambios.como_dict()


def crear_usuario(
    datos: DatosRegistro, existentes: dict[str, Usuario], reglas: ReglasBanco
) -> Usuario:
    """Crea un usuario nuevo con una cuenta vacía por tipo configurado.

    Raises:
        ValidacionError: Si algún campo está en blanco.
        UsuarioExistenteError: Si la cédula ya está registrada.
    """
    if datos.campos_vacios:
        raise ValidacionError("Por favor complete todos los campos")
    cedula = datos.cedula.strip()
    if cedula in existentes:
        raise UsuarioExistenteError(cedula)
    return Usuario(
        id=cedula,
        nombre=datos.nombre,
        cedula=cedula,
        celular=datos.celular,
        email=datos.email,
        password=datos.password,
        cuentas=crear_cuentas_iniciales(cedula, reglas.tipos_cuenta),
    )
