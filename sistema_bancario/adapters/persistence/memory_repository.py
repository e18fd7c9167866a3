"""
Adaptador de persistencia: Documento en memoria.

Mantiene el documento como diccionarios planos (la misma forma que se
escribiría en JSON) y pasa por el mismo normalizador que el repositorio
de archivo. Útil para pruebas y para sesiones que no deben dejar rastro.
"""

import copy
from typing import Any

from sistema_bancario.adapters.persistence.esquema import (
    TIPOS_POR_DEFECTO,
    RegistroIlegible,
    documento_desde_tabla,
    tabla_desde_documento,
)
from sistema_bancario.domain.exceptions import PersistenciaError
from sistema_bancario.domain.models.usuario import Usuario
from sistema_bancario.domain.ports.repositorio_usuarios import RepositorioUsuarios


class MemoryRepository(RepositorioUsuarios):
    """Repositorio de usuarios en memoria."""

    def __init__(
        self,
        documento: dict[str, Any] | None = None,
        tipos_cuenta: tuple[str, ...] = TIPOS_POR_DEFECTO,
    ) -> None:
        """
        Args:
            documento: Contenido inicial, en cualquier versión del esquema.
            tipos_cuenta: Tipos de cuenta obligatorios al normalizar.
        """
        self._documento: dict[str, Any] = copy.deepcopy(documento) if documento else {}
        self._tipos = tipos_cuenta
        self._ilegibles: dict[str, RegistroIlegible] = {}
        self.escrituras = 0

    @property
    def documento(self) -> dict[str, Any]:
        """Copia del documento tal como quedó en la última escritura."""
        return copy.deepcopy(self._documento)

    def cargar(self) -> dict[str, Usuario]:
        tabla, self._ilegibles = tabla_desde_documento(self._documento, self._tipos)
        return tabla

    def guardar(self, usuarios: dict[str, Usuario]) -> None:
        try:
            self._documento = documento_desde_tabla(usuarios, self._ilegibles)
        except ValueError as e:
            raise PersistenciaError("<memoria>", str(e))
        self.escrituras += 1

    def registros_ilegibles(self) -> dict[str, str]:
        return {clave: ilegible.motivo for clave, ilegible in self._ilegibles.items()}
