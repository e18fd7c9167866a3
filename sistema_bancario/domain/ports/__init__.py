"""
Puertos (interfaces) del dominio.

Los puertos definen QUÉ necesita el dominio, sin decir CÓMO se implementa.
Cada puerto tiene uno o más adaptadores que lo implementan.

Uso:
    from sistema_bancario.domain.ports import Bitacora, RepositorioUsuarios
"""

from sistema_bancario.domain.ports.bitacora import Bitacora
from sistema_bancario.domain.ports.extracto_writer import ExtractoWriter
from sistema_bancario.domain.ports.repositorio_usuarios import RepositorioUsuarios

__all__ = [
    "Bitacora",
    "ExtractoWriter",
    "RepositorioUsuarios",
]
