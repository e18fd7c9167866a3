"""
Modelos de dominio del sistema bancario.

Todos los modelos son dataclasses inmutables (frozen=True) que representan
los datos del negocio sin dependencias externas.

Uso:
    from sistema_bancario.domain.models import Usuario, Cuenta, Movimiento
"""

from sistema_bancario.domain.models.cuenta import Cuenta
from sistema_bancario.domain.models.datos_usuario import CambiosPerfil, DatosRegistro
from sistema_bancario.domain.models.movimiento import (
    TIPO_CONSIGNACION,
    TIPO_RETIRO,
    Movimiento,
)
from sistema_bancario.domain.models.referencia_cuenta import (
    PorDefecto,
    PorIdentificador,
    PorTipo,
    ReferenciaCuenta,
)
from sistema_bancario.domain.models.reglas import ReglasBanco
from sistema_bancario.domain.models.resultado import ResultadoLogin, ResultadoOperacion
from sistema_bancario.domain.models.usuario import Usuario

__all__ = [
    "CambiosPerfil",
    "Cuenta",
    "DatosRegistro",
    "Movimiento",
    "PorDefecto",
    "PorIdentificador",
    "PorTipo",
    "ReferenciaCuenta",
    "ReglasBanco",
    "ResultadoLogin",
    "ResultadoOperacion",
    "TIPO_CONSIGNACION",
    "TIPO_RETIRO",
    "Usuario",
]
