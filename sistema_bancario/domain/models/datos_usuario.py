"""
Modelos de entrada para registro y actualización de perfil.
"""

from dataclasses import dataclass, fields


@dataclass(frozen=True)
class DatosRegistro:
    """Datos que pide el formulario de registro. Todos son obligatorios."""

    nombre: str
    cedula: str
    celular: str
    email: str
    password: str

    @property
    def campos_vacios(self) -> list[str]:
        """Nombres de los campos que quedaron en blanco."""
        return [f.name for f in fields(self) if not getattr(self, f.name).strip()]


@dataclass(frozen=True)
class CambiosPerfil:
    """Cambios de perfil. None significa "no cambiar este campo"."""

    nombre: str | None = None
    celular: str | None = None
    email: str | None = None

    def como_dict(self) -> dict[str, str]:
        """Solo los campos que traen un valor."""
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name)}

    @property
    def vacio(self) -> bool:
        return not self.como_dict()
