"""
Configuración del sistema bancario.

Todos los valores tienen un default razonable; `from_env` permite
cambiarlos con variables de entorno:

    BANCO_DATOS          Ruta del documento JSON (default: usuarios.json)
    BANCO_MAX_INTENTOS   Intentos fallidos antes de bloquear (default: 3)
    BANCO_LOG_LEVEL      Nivel de log para la bitácora 'logging' (default: INFO)
    BANCO_BITACORA       'consola' o 'logging' (default: consola)
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

from sistema_bancario.domain.exceptions import ConfiguracionError
from sistema_bancario.domain.models.cuenta import TIPO_AHORROS, TIPO_CORRIENTE
from sistema_bancario.domain.models.reglas import ReglasBanco

BITACORAS = ("consola", "logging")
NIVELES_LOG = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ConfiguracionBanco:
    """Configuración principal."""

    ruta_datos: Path = field(default_factory=lambda: Path("usuarios.json"))
    max_intentos: int = 3
    longitud_minima_password: int = 4
    longitud_minima_celular: int = 7
    tipos_cuenta: tuple[str, ...] = (TIPO_AHORROS, TIPO_CORRIENTE)
    log_level: str = "INFO"
    bitacora: str = "consola"

    def reglas(self) -> ReglasBanco:
        """Reglas de negocio que recibe el servicio Banco."""
        return ReglasBanco(
            max_intentos=self.max_intentos,
            longitud_minima_password=self.longitud_minima_password,
            longitud_minima_celular=self.longitud_minima_celular,
            tipos_cuenta=self.tipos_cuenta,
        )

    @classmethod
    def from_env(cls) -> "ConfiguracionBanco":
        """Crea la configuración a partir de variables de entorno.

        Raises:
            ConfiguracionError: Si BANCO_MAX_INTENTOS no es un entero >= 1
                               BANCO_BITACORA o BANCO_LOG_LEVEL
                               no son valores conocidos.
        """
        max_intentos_str = os.getenv("BANCO_MAX_INTENTOS", "3")
        try:
            max_intentos = int(max_intentos_str)
        except ValueError:
            raise ConfiguracionError("BANCO_MAX_INTENTOS", max_intentos_str, "debe ser entero")
        if max_intentos < 1:
            raise ConfiguracionError("BANCO_MAX_INTENTOS", max_intentos_str, "debe ser >= 1")

        bitacora = os.getenv("BANCO_BITACORA", "consola").lower()
        if bitacora not in BITACORAS:
            raise ConfiguracionError(
                "BANCO_BITACORA", bitacora, f"valores posibles: {', '.join(BITACORAS)}"
            )

        log_level = os.getenv("BANCO_LOG_LEVEL", "INFO").upper()
        if log_level not in NIVELES_LOG:
            raise ConfiguracionError(
                "BANCO_LOG_LEVEL", log_level, f"valores posibles: {', '.join(NIVELES_LOG)}"
            )

        return cls(
            ruta_datos=Path(os.getenv("BANCO_DATOS", "usuarios.json")),
            max_intentos=max_intentos,
            log_level=log_level,
            bitacora=bitacora,
        )
