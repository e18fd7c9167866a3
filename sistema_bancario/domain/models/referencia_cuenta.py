"""
Modelo de dominio: Referencia a una cuenta de un usuario.

Quien llama a una operación puede señalar la cuenta de tres formas:

    ReferenciaCuenta
    ├── PorIdentificador("123-ahorros")   → id exacto de la cuenta
    ├── PorTipo("corriente")              → tipo de cuenta
    └── PorDefecto()                      → la cuenta principal del usuario

La resolución vive en domain/services/directorio_cuentas.py.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class PorIdentificador:
    valor: str

    def __str__(self) -> str:
        return self.valor


@dataclass(frozen=True)
class PorTipo:
    valor: str

    def __str__(self) -> str:
        return self.valor


@dataclass(frozen=True)
class PorDefecto:
    def __str__(self) -> str:
        return "por defecto"


ReferenciaCuenta = PorIdentificador | PorTipo | PorDefecto
