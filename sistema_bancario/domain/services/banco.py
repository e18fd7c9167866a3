"""
Servicio de dominio: Banco.

Orquesta cada operación del sistema:
1. Recibe el Usuario que tiene la capa de presentación (o un id).
2. Calcula el nuevo estado con las funciones puras del libro mayor.
3. Persiste a través del RepositorioUsuarios.
4. Registra el evento en la Bitácora.
5. Devuelve un ResultadoOperacion / ResultadoLogin.

Ninguna operación lanza excepciones de negocio: todas terminan en un
resultado con `exito` y `mensaje`.
"""

from collections.abc import Callable
from dataclasses import replace
from datetime import datetime
from pathlib import Path

from sistema_bancario.domain.exceptions import (
    BancoBaseError,
    CuentaBloqueadaError,
    PersistenciaError,
    UsuarioNoEncontradoError,
    ValidacionError,
)
from sistema_bancario.domain.models.datos_usuario import CambiosPerfil, DatosRegistro
from sistema_bancario.domain.models.resultado import ResultadoLogin, ResultadoOperacion
from sistema_bancario.domain.models.reglas import ReglasBanco
from sistema_bancario.domain.models.usuario import Usuario
from sistema_bancario.domain.ports.bitacora import Bitacora
from sistema_bancario.domain.ports.extracto_writer import ExtractoWriter
from sistema_bancario.domain.ports.repositorio_usuarios import RepositorioUsuarios
from sistema_bancario.domain.services import control_acceso, libro_mayor
from sistema_bancario.domain.services.directorio_cuentas import resolver_cuenta
from sistema_bancario.domain.services.libro_mayor import Referencia
from sistema_bancario.domain.shared.money import format_money


class Banco:
    """Punto de entrada de todas las operaciones bancarias.

    Recibe sus dependencias por constructor; no conoce el formato de
    persistencia ni el destino de la bitácora.
    """

    def __init__(
        self,
        repositorio: RepositorioUsuarios,
        logger: Bitacora,
        reglas: ReglasBanco | None = None,
        extracto_writer: ExtractoWriter | None = None,
        reloj: Callable[[], datetime] = datetime.now,
    ) -> None:
        """
        Args:
            repositorio: Persistencia de la tabla de usuarios.
            logger: Bitácora de operaciones.
            reglas: Reglas de negocio. Por defecto ReglasBanco().
            extracto_writer: Exportador de extractos. Opcional; sin él,
                            exportar_extracto devuelve un fallo.
            reloj: Fuente de la hora para los movimientos.
        """
        self._repositorio = repositorio
        self._logger = logger
        self._reglas = reglas or ReglasBanco()
        self._extracto_writer = extracto_writer
        self._reloj = reloj

    def registros_ilegibles(self) -> dict[str, str]:
        """Registros omitidos en la última lectura (clave → motivo)."""
        return self._repositorio.registros_ilegibles()

    # =================================================================
    # Usuarios y acceso
    # =================================================================

    def registrar_usuario(self, datos: DatosRegistro) -> ResultadoOperacion:
        try:
            usuarios = self._repositorio.cargar()
            usuario = libro_mayor.crear_usuario(datos, usuarios, self._reglas)
            usuarios[usuario.id] = usuario
            self._repositorio.guardar(usuarios)
        except BancoBaseError as e:
            return self._rechazar("registrar", datos.cedula, e)

        self._logger.log_registro(usuario.id)
        return ResultadoOperacion(
            exito=True, mensaje="Usuario registrado exitosamente", usuario=usuario
        )

    def iniciar_sesion(self, usuario_id: str, password: str) -> ResultadoLogin:
        """Aplica un intento de login y persiste el nuevo contador/bloqueo."""
        try:
            usuarios = self._repositorio.cargar()
            usuario = usuarios.get(usuario_id)
            if usuario is None:
                raise UsuarioNoEncontradoError(usuario_id)
            if usuario.bloqueado:
                raise CuentaBloqueadaError(usuario_id, control_acceso.MENSAJE_BLOQUEADA)

            actualizado, resultado = control_acceso.evaluar_intento(
                usuario, password, self._reglas.max_intentos
            )
            usuarios[usuario_id] = actualizado
            self._repositorio.guardar(usuarios)
        except BancoBaseError as e:
            return ResultadoLogin(exito=False, mensaje=self._rechazar("login", usuario_id, e).mensaje)

        self._logger.log_login(usuario_id, resultado.exito, actualizado.intentos_fallidos)
        if actualizado.bloqueado:
            self._logger.log_bloqueo(usuario_id)
        return resultado

    def obtener_usuario(self, usuario_id: str) -> ResultadoOperacion:
        """Relee un usuario desde la persistencia."""
        try:
            usuario = self._repositorio.cargar().get(usuario_id)
            if usuario is None:
                raise UsuarioNoEncontradoError(usuario_id)
        except BancoBaseError as e:
            return self._rechazar("obtener_usuario", usuario_id, e)
        return ResultadoOperacion(exito=True, mensaje="", usuario=usuario)

    def cambiar_password(
        self, usuario: Usuario, password_actual: str, password_nuevo: str
    ) -> ResultadoOperacion:
        try:
            actualizado = libro_mayor.aplicar_cambio_password(
                usuario, password_actual, password_nuevo, self._reglas
            )
            self._persistir(actualizado)
        except BancoBaseError as e:
            return self._rechazar("cambiar_password", usuario.id, e)

        return ResultadoOperacion(
            exito=True, mensaje="Contraseña actualizada exitosamente", usuario=actualizado
        )

    def actualizar_perfil(
        self, usuario: Usuario, cambios: CambiosPerfil | None
    ) -> ResultadoOperacion:
        """Fusiona los cambios sobre el registro GUARDADO, no sobre el snapshot."""
        try:
            campos = libro_mayor.validar_cambios_perfil(cambios, self._reglas)
            usuarios = self._repositorio.cargar()
            guardado = usuarios.get(usuario.id)
            if guardado is None:
                raise UsuarioNoEncontradoError(usuario.id)
            actualizado = replace(guardado, **campos)
            usuarios[usuario.id] = actualizado
            self._repositorio.guardar(usuarios)
        except BancoBaseError as e:
            return self._rechazar("actualizar_perfil", usuario.id, e)

        return ResultadoOperacion(exito=True, mensaje="Datos actualizados", usuario=actualizado)

    # =================================================================
    # Consultas
    # =================================================================

    def consultar_saldo(self, usuario: Usuario, referencia: Referencia = None) -> ResultadoOperacion:
        try:
            cuenta = resolver_cuenta(usuario, referencia)
        except BancoBaseError as e:
            return self._rechazar("consultar_saldo", usuario.id, e)

        return ResultadoOperacion(
            exito=True,
            mensaje=f"El saldo de {usuario.nombre} en {cuenta.tipo} es {format_money(cuenta.saldo)}",
            usuario=usuario,
            cuenta=cuenta,
        )

    def consultar_movimientos(
        self, usuario: Usuario, referencia: Referencia = None
    ) -> ResultadoOperacion:
        try:
            cuenta = resolver_cuenta(usuario, referencia)
        except BancoBaseError as e:
            return self._rechazar("consultar_movimientos", usuario.id, e)

        if not cuenta.movimientos:
            mensaje = f"{usuario.nombre} no tiene movimientos registrados en {cuenta.tipo}"
        else:
            lineas = [
                f"{mov.fecha} - {mov.tipo}: {format_money(mov.monto)} "
                f"(Saldo: {format_money(mov.saldo_nuevo)})"
                for mov in cuenta.movimientos
            ]
            mensaje = f"Historial de movimientos {usuario.nombre} ({cuenta.tipo}):\n" + "\n".join(
                lineas
            )

        return ResultadoOperacion(exito=True, mensaje=mensaje, usuario=usuario, cuenta=cuenta)

    def exportar_extracto(self, usuario: Usuario, output_path: Path) -> ResultadoOperacion:
        try:
            if self._extracto_writer is None:
                raise ValidacionError("Exportación de extractos no disponible")
            ruta = self._extracto_writer.write_extracto(usuario, output_path)
        except BancoBaseError as e:
            return self._rechazar("exportar_extracto", usuario.id, e)

        return ResultadoOperacion(
            exito=True, mensaje=f"Extracto generado: {ruta}", usuario=usuario
        )

    # =================================================================
    # Movimientos
    # =================================================================

    def consignar(
        self, usuario: Usuario, monto: int, referencia: Referencia = None
    ) -> ResultadoOperacion:
        try:
            actualizado, cuenta = libro_mayor.aplicar_consignacion(
                usuario, monto, referencia, self._reloj()
            )
            self._persistir(actualizado)
        except BancoBaseError as e:
            return self._rechazar("consignar", usuario.id, e)

        self._logger.log_movimiento(usuario.id, cuenta.movimientos[-1])
        return ResultadoOperacion(
            exito=True,
            mensaje=f"Consignación exitosa. Saldo actual en {cuenta.tipo}: {format_money(cuenta.saldo)}",
            usuario=actualizado,
            cuenta=cuenta,
        )

    def retirar(
        self, usuario: Usuario, monto: int, referencia: Referencia = None
    ) -> ResultadoOperacion:
        try:
            actualizado, cuenta = libro_mayor.aplicar_retiro(
                usuario, monto, referencia, self._reloj()
            )
            self._persistir(actualizado)
        except BancoBaseError as e:
            return self._rechazar("retirar", usuario.id, e)

        self._logger.log_movimiento(usuario.id, cuenta.movimientos[-1])
        return ResultadoOperacion(
            exito=True,
            mensaje=f"Retiro exitoso. Saldo actual en {cuenta.tipo}: {format_money(cuenta.saldo)}",
            usuario=actualizado,
            cuenta=cuenta,
        )

    def transferir(
        self,
        usuario: Usuario,
        monto: int,
        referencia_origen: Referencia = None,
        destino_id: str | None = None,
        referencia_destino: Referencia = None,
    ) -> ResultadoOperacion:
        """Transfiere `monto` desde una cuenta del usuario.

        Sin `destino_id` la transferencia es entre cuentas del mismo
        usuario. Las dos patas se escriben en una sola llamada a
        `guardar`, así que no puede quedar un retiro sin su consignación.
        """
        try:
            destino = None
            if destino_id and destino_id != usuario.id:
                destino = self._repositorio.cargar().get(destino_id)
                if destino is None:
                    raise UsuarioNoEncontradoError(destino_id, "Cliente destino no encontrado")

            origen_actualizado, destino_actualizado, cuenta = libro_mayor.aplicar_transferencia(
                usuario, destino, monto, referencia_origen, referencia_destino, self._reloj()
            )
            self._persistir(origen_actualizado, destino_actualizado)
        except BancoBaseError as e:
            return self._rechazar("transferir", usuario.id, e)

        self._logger.log_transferencia(usuario.id, destino_actualizado.id, monto)
        return ResultadoOperacion(
            exito=True,
            mensaje=(
                f"Transferencia de {format_money(monto)} a {destino_actualizado.nombre} "
                f"exitosa. Nuevo saldo: {format_money(cuenta.saldo)}"
            ),
            usuario=origen_actualizado,
            cuenta=cuenta,
            destino=destino_actualizado,
        )

    # =================================================================
    # Privados
    # =================================================================

    def _persistir(self, *usuarios: Usuario) -> None:
        """Escribe los usuarios dados sobre la tabla completa, en un solo guardado."""
        tabla = self._repositorio.cargar()
        for usuario in usuarios:
            tabla[usuario.id] = usuario
        self._repositorio.guardar(tabla)

    def _rechazar(self, operacion: str, usuario_id: str, error: BancoBaseError) -> ResultadoOperacion:
        if isinstance(error, PersistenciaError):
            self._logger.log_error(operacion, error)
        else:
            self._logger.log_rechazo(operacion, usuario_id, str(error))
        return ResultadoOperacion.fallo(str(error))
