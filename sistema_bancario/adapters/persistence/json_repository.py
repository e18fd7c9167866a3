"""
Adaptador de persistencia: Documento JSON en disco.

Guarda la tabla completa de usuarios en un único archivo JSON, que es el
equivalente en disco del "localStorage" de la versión web. Cada
lectura normaliza los registros antiguos (ver esquema.py) y cada
escritura reemplaza el archivo entero. Los registros que no se pueden
convertir quedan fuera de la tabla y se reescriben tal como estaban.

La escritura va primero a un archivo temporal en el mismo directorio y
luego se renombra con os.replace, así un corte a mitad de escritura deja
el documento anterior intacto. No hay bloqueo entre procesos: si dos
procesos guardan a la vez, gana el último.
"""

import json
import os
import tempfile
from pathlib import Path

from sistema_bancario.adapters.persistence.esquema import (
    TIPOS_POR_DEFECTO,
    RegistroIlegible,
    documento_desde_tabla,
    tabla_desde_documento,
)
from sistema_bancario.domain.exceptions import PersistenciaError
from sistema_bancario.domain.models.usuario import Usuario
from sistema_bancario.domain.ports.repositorio_usuarios import RepositorioUsuarios


class JsonFileRepository(RepositorioUsuarios):
    """Repositorio de usuarios respaldado por un archivo JSON."""

    def __init__(
        self,
        path: str | Path,
        pretty: bool = True,
        tipos_cuenta: tuple[str, ...] = TIPOS_POR_DEFECTO,
    ) -> None:
        """
        Args:
            path: Ruta del archivo. No necesita existir; se crea al guardar.
            pretty: Indentar el JSON para que sea legible a mano.
            tipos_cuenta: Tipos de cuenta que se agregan vacíos a los
                         registros antiguos que no los tengan.
        """
        self.path = Path(path)
        self.pretty = pretty
        self._tipos = tipos_cuenta
        self._ilegibles: dict[str, RegistroIlegible] = {}

    def cargar(self) -> dict[str, Usuario]:
        self._ilegibles = {}
        if not self.path.exists():
            return {}

        try:
            contenido = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise PersistenciaError(str(self.path), str(e))

        if not contenido.strip():
            return {}

        try:
            documento = json.loads(contenido)
        except json.JSONDecodeError as e:
            raise PersistenciaError(str(self.path), f"JSON inválido: {e}")

        if not isinstance(documento, dict):
            raise PersistenciaError(
                str(self.path),
                f"Se esperaba un objeto JSON, se encontró {type(documento).__name__}",
            )

        tabla, self._ilegibles = tabla_desde_documento(documento, self._tipos)
        return tabla

    def guardar(self, usuarios: dict[str, Usuario]) -> None:
        try:
            documento = documento_desde_tabla(usuarios, self._ilegibles)
        except ValueError as e:
            raise PersistenciaError(str(self.path), str(e))

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    if self.pretty:
                        json.dump(documento, f, indent=2, ensure_ascii=False)
                    else:
                        json.dump(documento, f, ensure_ascii=False)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise PersistenciaError(str(self.path), str(e))

    def registros_ilegibles(self) -> dict[str, str]:
        return {clave: ilegible.motivo for clave, ilegible in self._ilegibles.items()}
