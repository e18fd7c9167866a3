"""
Esquema del documento persistido y normalización de versiones antiguas.

El documento es un objeto JSON { <id_usuario>: <registro> }. A lo largo
del tiempo el registro tuvo tres formas:

    v1  saldo y movimientos planos en el usuario (una sola cuenta implícita)
    v2  "cuentas" como lista de {id, tipo, saldo, movimientos}
    v3  "cuentas" como objeto { <tipo>: {id, nombre, saldo, movimientos} }

Los repositorios llaman a `tabla_desde_documento` una vez al leer, así que
el dominio solo ve la forma v3 convertida a modelos. Al escribir siempre
se genera v3 (`documento_desde_tabla`).

Un registro que no se puede convertir no detiene la lectura: queda aparte
como RegistroIlegible y se vuelve a escribir tal cual, sin tocarlo.

Los números con decimales de versiones antiguas se redondean a pesos
enteros (mitad hacia arriba) en todos los campos por igual: saldo, monto
y saldos de cada movimiento.
"""

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from sistema_bancario.domain.models.cuenta import (
    TIPO_AHORROS,
    TIPO_CORRIENTE,
    Cuenta,
    id_cuenta,
    nombre_por_defecto,
)
from sistema_bancario.domain.models.movimiento import TIPO_CONSIGNACION, Movimiento
from sistema_bancario.domain.models.usuario import Usuario

VERSION_PLANA = 1
VERSION_LISTA = 2
VERSION_ACTUAL = 3

TIPOS_POR_DEFECTO = (TIPO_AHORROS, TIPO_CORRIENTE)

# Variantes de escritura que dejaron versiones anteriores para el mismo tipo.
_ALIAS_TIPO_MOVIMIENTO = {
    "consignación": TIPO_CONSIGNACION,
    "Consignación": TIPO_CONSIGNACION,
    "deposito": TIPO_CONSIGNACION,
    "depósito": TIPO_CONSIGNACION,
}


def detectar_version(registro: dict[str, Any]) -> int:
    cuentas = registro.get("cuentas")
    if isinstance(cuentas, dict):
        return VERSION_ACTUAL
    if isinstance(cuentas, list):
        return VERSION_LISTA
    return VERSION_PLANA


def normalizar_registro(
    registro: dict[str, Any],
    clave: str = "",
    tipos: tuple[str, ...] = TIPOS_POR_DEFECTO,
) -> dict[str, Any]:
    """Convierte un registro de cualquier versión a la forma v3.

    No modifica el diccionario recibido.

    Args:
        registro: Registro tal como se leyó del documento.
        clave: Clave del registro en el documento; se usa como cédula si
               el registro no trae ni `cedula` ni `id`.
        tipos: Tipos de cuenta que todo usuario debe tener. Los que falten
               se agregan vacíos.
    """
    cedula = str(registro.get("cedula") or registro.get("id") or clave)
    version = detectar_version(registro)

    if version == VERSION_ACTUAL:
        cuentas = {
            tipo: _normalizar_cuenta(datos, cedula, tipo)
            for tipo, datos in registro["cuentas"].items()
        }
    elif version == VERSION_LISTA:
        cuentas = {}
        for datos in registro["cuentas"]:
            tipo = datos.get("tipo") or TIPO_AHORROS
            cuentas[tipo] = _normalizar_cuenta(datos, cedula, tipo)
    else:
        # La cuenta implícita de v1 pasa a ser la de ahorros.
        cuentas = {
            TIPO_AHORROS: _normalizar_cuenta(
                {"saldo": registro.get("saldo"), "movimientos": registro.get("movimientos")},
                cedula,
                TIPO_AHORROS,
            )
        }

    for tipo in tipos:
        if tipo not in cuentas:
            cuentas[tipo] = _normalizar_cuenta({}, cedula, tipo)

    return {
        "id": str(registro.get("id") or cedula),
        "cedula": cedula,
        "nombre": registro.get("nombre", ""),
        "celular": registro.get("celular", ""),
        "email": registro.get("email", ""),
        "password": registro.get("password", ""),
        "cuentas": cuentas,
        "intentosFallidos": _entero(registro.get("intentosFallidos"), 0),
        "bloqueado": bool(registro.get("bloqueado", False)),
    }


def _normalizar_cuenta(datos: dict[str, Any], cedula: str, tipo: str) -> dict[str, Any]:
    movimientos = datos.get("movimientos")
    return {
        "id": datos.get("id") or id_cuenta(cedula, tipo),
        "nombre": datos.get("nombre") or nombre_por_defecto(tipo),
        "saldo": _entero(datos.get("saldo"), 0),
        "movimientos": [
            _normalizar_movimiento(mov) for mov in movimientos
        ] if isinstance(movimientos, list) else [],
    }


_CAMPOS_NUMERICOS_MOVIMIENTO = ("id", "monto", "saldoAnterior", "saldoNuevo")


def _normalizar_movimiento(mov: dict[str, Any]) -> dict[str, Any]:
    tipo = mov.get("tipo", "")
    normalizado = {**mov, "tipo": _ALIAS_TIPO_MOVIMIENTO.get(tipo, tipo)}
    for campo in _CAMPOS_NUMERICOS_MOVIMIENTO:
        if _es_numero(mov.get(campo)):
            normalizado[campo] = _redondear(mov[campo])
    return normalizado


def _es_numero(valor: Any) -> bool:
    if isinstance(valor, bool):
        return False
    if isinstance(valor, float):
        return math.isfinite(valor)
    return isinstance(valor, int)


def _redondear(valor: int | float) -> int:
    """10.5 → 11, 10.4 → 10. Los enteros pasan sin cambios."""
    if isinstance(valor, int):
        return valor
    return int(Decimal(str(valor)).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def _entero(valor: Any, defecto: int) -> int:
    """Saldo/contador no numérico → defecto (así lo trataba la versión web).

    Un número con decimales se redondea; nunca se reemplaza por el defecto.
    """
    if not _es_numero(valor):
        return defecto
    return _redondear(valor)


# =================================================================
# dict v3 ↔ modelos
# =================================================================


def usuario_desde_dict(registro: dict[str, Any]) -> Usuario:
    """Construye un Usuario desde un registro YA normalizado (v3).

    Raises:
        ValueError / KeyError / TypeError: Si el registro no cumple las
            invariantes de los modelos (montos negativos, saldos
            inconsistentes dentro de un movimiento, etc.).
    """
    cuentas = tuple(
        _cuenta_desde_dict(datos, tipo) for tipo, datos in registro["cuentas"].items()
    )
    return Usuario(
        id=registro["id"],
        nombre=registro["nombre"],
        cedula=registro["cedula"],
        celular=registro["celular"],
        email=registro["email"],
        password=registro["password"],
        cuentas=cuentas,
        intentos_fallidos=registro["intentosFallidos"],
        bloqueado=registro["bloqueado"],
    )


def _cuenta_desde_dict(datos: dict[str, Any], tipo: str) -> Cuenta:
    return Cuenta(
        id=datos["id"],
        tipo=tipo,
        nombre=datos["nombre"],
        saldo=datos["saldo"],
        movimientos=tuple(
            Movimiento(
                id=int(mov["id"]),
                tipo=mov["tipo"],
                monto=int(mov["monto"]),
                fecha=str(mov["fecha"]),
                saldo_anterior=int(mov["saldoAnterior"]),
                saldo_nuevo=int(mov["saldoNuevo"]),
                cuenta_id=datos["id"],
            )
            for mov in datos["movimientos"]
        ),
    )


def usuario_a_dict(usuario: Usuario) -> dict[str, Any]:
    """Serializa un Usuario con la forma v3 del documento."""
    return {
        "id": usuario.id,
        "nombre": usuario.nombre,
        "cedula": usuario.cedula,
        "celular": usuario.celular,
        "email": usuario.email,
        "password": usuario.password,
        "cuentas": {
            cuenta.tipo: {
                "id": cuenta.id,
                "nombre": cuenta.nombre,
                "saldo": cuenta.saldo,
                "movimientos": [
                    {
                        "id": mov.id,
                        "tipo": mov.tipo,
                        "monto": mov.monto,
                        "fecha": mov.fecha,
                        "saldoAnterior": mov.saldo_anterior,
                        "saldoNuevo": mov.saldo_nuevo,
                    }
                    for mov in cuenta.movimientos
                ],
            }
            for cuenta in usuario.cuentas
        },
        "intentosFallidos": usuario.intentos_fallidos,
        "bloqueado": usuario.bloqueado,
    }


@dataclass(frozen=True)
class RegistroIlegible:
    """Registro del documento que no se pudo convertir a Usuario."""

    registro: Any
    """Contenido original, tal como se leyó."""

    motivo: str


def tabla_desde_documento(
    documento: dict[str, Any], tipos: tuple[str, ...] = TIPOS_POR_DEFECTO
) -> tuple[dict[str, Usuario], dict[str, RegistroIlegible]]:
    """Normaliza y convierte cada registro del documento.

    Un registro inválido no impide leer los demás.

    Returns:
        (usuarios, ilegibles): los registros convertidos y los que no se
        pudieron convertir, ambos por clave del documento.
    """
    tabla: dict[str, Usuario] = {}
    ilegibles: dict[str, RegistroIlegible] = {}
    for clave, registro in documento.items():
        if not isinstance(registro, dict):
            ilegibles[clave] = RegistroIlegible(registro, "no es un objeto")
            continue
        try:
            tabla[clave] = usuario_desde_dict(normalizar_registro(registro, clave, tipos))
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            ilegibles[clave] = RegistroIlegible(registro, str(e))
    return tabla, ilegibles


def documento_desde_tabla(
    tabla: dict[str, Usuario], ilegibles: dict[str, RegistroIlegible] | None = None
) -> dict[str, Any]:
    """Arma el documento v3, conservando sin cambios los registros ilegibles.

    Raises:
        ValueError: Si la tabla trae un usuario con la clave de un registro
                    ilegible; escribirlo borraría el registro original.
    """
    ilegibles = ilegibles or {}
    pisados = sorted(set(tabla) & set(ilegibles))
    if pisados:
        raise ValueError(f"El registro '{pisados[0]}' no se pudo leer y no se sobrescribe")

    documento = {clave: ilegible.registro for clave, ilegible in ilegibles.items()}
    documento.update((clave, usuario_a_dict(usuario)) for clave, usuario in tabla.items())
    return documento
