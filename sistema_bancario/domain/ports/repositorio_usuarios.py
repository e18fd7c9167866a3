"""
Puerto de salida: Repositorio de usuarios (Persistence Gateway).

Define el contrato para leer y escribir la tabla completa de usuarios.
La tabla es un solo documento: se lee entera y se escribe entera en cada
mutación. No hay bloqueo; si dos procesos escriben, gana el último.

El dominio no sabe si el documento vive en un archivo JSON, en memoria o
en otro lugar. El servicio Banco recibe una implementación por constructor.
"""

from abc import ABC, abstractmethod

from sistema_bancario.domain.models.usuario import Usuario


class RepositorioUsuarios(ABC):
    """Interfaz para la persistencia de la tabla de usuarios."""

    @abstractmethod
    def cargar(self) -> dict[str, Usuario]:
        """Lee la tabla completa.

        Un registro que no se puede interpretar se deja fuera de la tabla
        (ver `registros_ilegibles`) sin impedir la lectura de los demás.

        Returns:
            Diccionario id_usuario → Usuario, ya normalizado al esquema
            vigente. Vacío si todavía no hay datos.

        Raises:
            PersistenciaError: Si el documento completo no se puede leer o
                interpretar.
        """
        ...

    @abstractmethod
    def guardar(self, usuarios: dict[str, Usuario]) -> None:
        """Escribe la tabla completa, reemplazando la anterior.

        Raises:
            PersistenciaError: Si la escritura falla o si un usuario pisa
                un registro ilegible.
        """
        ...

    def registros_ilegibles(self) -> dict[str, str]:
        """Registros de la última lectura que no se pudieron convertir.

        No forman parte de la tabla que devuelve `cargar`, pero se
        conservan en el documento al guardar.

        Returns:
            Diccionario clave → motivo. Vacío por defecto.
        """
        return {}
