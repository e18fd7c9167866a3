"""
Excepciones de dominio del sistema bancario.

Las funciones puras del libro mayor, el control de acceso y el directorio
de cuentas lanzan estas excepciones. El servicio Banco las captura en el
borde de cada operación y las convierte en un ResultadoOperacion fallido
con el mensaje de la excepción, de modo que la capa de presentación nunca
recibe un traceback por un error de negocio.

Jerarquía:
    BancoBaseError
    ├── ValidacionError            → Monto, email, celular o campos inválidos
    ├── UsuarioNoEncontradoError   → El id no existe en la tabla persistida
    ├── UsuarioExistenteError      → Registro con una cédula ya usada
    ├── CuentaNoEncontradaError    → La referencia no resuelve a una cuenta
    ├── SaldoInsuficienteError     → Retiro o transferencia mayor al saldo
    ├── CuentaBloqueadaError       → Login sobre un usuario bloqueado
    ├── PasswordIncorrectaError    → Contraseña actual no coincide
    ├── PersistenciaError          → Falla al leer o escribir el documento
    ├── ConfiguracionError         → Variable de entorno inválida
    └── ExportacionError           → Falla al generar el extracto
"""


class BancoBaseError(Exception):
    """Excepción base del proyecto. Todas las demás heredan de esta.

    El mensaje (str(error)) es el texto que se muestra al usuario final.
    """


class ValidacionError(BancoBaseError):
    """Se lanza cuando un dato de entrada no cumple las reglas de negocio.

    Ejemplos:
    - Monto menor o igual a 0.
    - Email sin '@' o celular con menos de 7 caracteres.
    - Contraseña nueva demasiado corta.
    """


class UsuarioNoEncontradoError(BancoBaseError):
    """Se lanza cuando un id de usuario no existe en la tabla persistida."""

    def __init__(self, usuario_id: str, mensaje: str = "Usuario no encontrado"):
        self.usuario_id = usuario_id
        super().__init__(mensaje)


class UsuarioExistenteError(BancoBaseError):
    """Se lanza al registrar una cédula que ya tiene usuario."""

    def __init__(self, usuario_id: str):
        self.usuario_id = usuario_id
        super().__init__("El usuario ya existe")


class CuentaNoEncontradaError(BancoBaseError):
    """Se lanza cuando una referencia de cuenta no resuelve a ninguna cuenta
    del usuario (ni por id, ni por tipo)."""

    def __init__(self, referencia: str, mensaje: str = "Cuenta no encontrada"):
        self.referencia = referencia
        super().__init__(mensaje)


class SaldoInsuficienteError(BancoBaseError):
    """Se lanza cuando el monto a retirar supera el saldo de la cuenta."""

    def __init__(self, cuenta_id: str, saldo: int, monto: int):
        self.cuenta_id = cuenta_id
        self.saldo = saldo
        self.monto = monto
        super().__init__("Saldo insuficiente")


class CuentaBloqueadaError(BancoBaseError):
    """Se lanza cuando se intenta iniciar sesión con un usuario bloqueado.

    El texto menciona 24 horas, pero no existe ningún mecanismo de
    desbloqueo: el estado bloqueado es terminal.
    """

    def __init__(self, usuario_id: str, mensaje: str = "Cuenta bloqueada por 24 horas"):
        self.usuario_id = usuario_id
        super().__init__(mensaje)


class PasswordIncorrectaError(BancoBaseError):
    """Se lanza cuando la contraseña actual no coincide con la guardada."""

    def __init__(self, mensaje: str = "Contraseña actual incorrecta"):
        super().__init__(mensaje)


class PersistenciaError(BancoBaseError):
    """Se lanza cuando falla la lectura o escritura del documento de usuarios.

    Esto puede pasar porque:
    - No hay permisos de escritura en el directorio de datos.
    - El archivo JSON está corrupto.
    - El disco está lleno.
    """

    def __init__(self, ruta: str, causa: str):
        self.ruta = ruta
        self.causa = causa
        super().__init__(f"Error de persistencia en '{ruta}': {causa}")


class ExportacionError(BancoBaseError):
    """Se lanza cuando falla la generación del extracto de movimientos."""

    def __init__(self, ruta_salida: str, causa: str):
        self.ruta_salida = ruta_salida
        self.causa = causa
        super().__init__(f"Error generando extracto en '{ruta_salida}': {causa}")


class ConfiguracionError(BancoBaseError):
    """Se lanza cuando una variable de entorno de configuración es inválida."""

    def __init__(self, variable: str, valor: str, detalle: str = ""):
        self.variable = variable
        self.valor = valor
        mensaje = f"Valor inválido para {variable}: '{valor}'"
        if detalle:
            mensaje += f" ({detalle})"
        super().__init__(mensaje)
