"""
Servicio de dominio: Control de acceso (intentos de login y bloqueo).

Máquina de estados por usuario:

    Activo(n) ──contraseña correcta──────────────→ Activo(0)   (login OK)
    Activo(n) ──contraseña incorrecta, n+1 < max─→ Activo(n+1)
    Activo(n) ──contraseña incorrecta, n+1 ≥ max─→ Bloqueado
    Bloqueado ──cualquier intento────────────────→ Bloqueado   (sin cambios)

No existe transición de Bloqueado a Activo. El mensaje habla de 24 horas,
pero ningún proceso desbloquea al usuario; solo una edición manual del
documento persistido lo hace.
"""

from dataclasses import replace

from sistema_bancario.domain.models.resultado import ResultadoLogin
from sistema_bancario.domain.models.usuario import Usuario

MENSAJE_BLOQUEADA = "Cuenta bloqueada por 24 horas"
MENSAJE_BLOQUEO_NUEVO = "Cuenta bloqueada por 24 horas, comunícate con tu banco"


def intentos_restantes(usuario: Usuario, max_intentos: int) -> int:
    return max(max_intentos - usuario.intentos_fallidos, 0)


def evaluar_intento(
    usuario: Usuario, password: str, max_intentos: int = 3
) -> tuple[Usuario, ResultadoLogin]:
    """Aplica un intento de login y devuelve (nuevo_estado, resultado).

    Si el usuario ya estaba bloqueado, el estado devuelto es el mismo
    objeto recibido, así quien llama puede saber que no hay nada que
    persistir.
    """
    if usuario.bloqueado:
        return usuario, ResultadoLogin(exito=False, mensaje=MENSAJE_BLOQUEADA)

    if usuario.password == password:
        actualizado = replace(usuario, intentos_fallidos=0, bloqueado=False)
        return actualizado, ResultadoLogin(exito=True, usuario=actualizado)

    nuevos_intentos = usuario.intentos_fallidos + 1
    bloqueado = nuevos_intentos >= max_intentos
    actualizado = replace(usuario, intentos_fallidos=nuevos_intentos, bloqueado=bloqueado)

    if bloqueado:
        return actualizado, ResultadoLogin(exito=False, mensaje=MENSAJE_BLOQUEO_NUEVO)

    return actualizado, ResultadoLogin(
        exito=False,
        mensaje=(
            "Contraseña incorrecta. Intentos restantes: "
            f"{intentos_restantes(actualizado, max_intentos)}"
        ),
    )
