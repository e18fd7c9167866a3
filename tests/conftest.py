"""
Fixtures compartidas: usuarios de prueba, reloj fijo y un Banco en memoria.
"""

from datetime import datetime

import pytest

from sistema_bancario.adapters.output.loggers.console_logger import ConsoleLogger
from sistema_bancario.adapters.persistence.memory_repository import MemoryRepository
from sistema_bancario.domain.models import Cuenta, Usuario
from sistema_bancario.domain.services.banco import Banco

INSTANTE = datetime(2026, 10, 19, 14, 3, 5)


def nuevo_usuario(cedula: str = "123", nombre: str = "Ana", password: str = "1234", **kwargs) -> Usuario:
    datos = dict(
        id=cedula,
        nombre=nombre,
        cedula=cedula,
        celular="3001234567",
        email=f"{nombre.lower()}@correo.com",
        password=password,
        cuentas=(Cuenta.nueva(cedula, "ahorros"), Cuenta.nueva(cedula, "corriente")),
    )
    datos.update(kwargs)
    return Usuario(**datos)


@pytest.fixture
def crear_usuario():
    """Fábrica: crear_usuario("456", nombre="Luis", ...)."""
    return nuevo_usuario


@pytest.fixture
def usuario() -> Usuario:
    return nuevo_usuario()


@pytest.fixture
def repositorio() -> MemoryRepository:
    return MemoryRepository()


@pytest.fixture
def logger() -> ConsoleLogger:
    return ConsoleLogger(verbose=False)


@pytest.fixture
def banco(repositorio: MemoryRepository, logger: ConsoleLogger) -> Banco:
    return Banco(repositorio=repositorio, logger=logger, reloj=lambda: INSTANTE)
