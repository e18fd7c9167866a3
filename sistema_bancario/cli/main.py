"""
Punto de entrada CLI: sistema-bancario.

Uso:
    # Registrar un usuario
    sistema-bancario registrar --nombre "Ana" --cedula 123 --celular 3001234567 \\
        --email ana@correo.com --password 1234

    # Consignar, retirar y consultar (piden la contraseña si no se pasa)
    sistema-bancario consignar --cedula 123 --monto 100
    sistema-bancario retirar --cedula 123 --monto 30 --cuenta corriente
    sistema-bancario saldo --cedula 123

    # Transferir a otro usuario o entre cuentas propias
    sistema-bancario transferir --cedula 123 --monto 50 --destino 456
    sistema-bancario transferir --cedula 123 --monto 10 --cuenta ahorros --cuenta-destino corriente

    # Exportar el extracto a Excel
    sistema-bancario extracto --cedula 123 -o extracto_123.xlsx

Cada comando que toca cuentas inicia sesión primero, así que una
contraseña incorrecta cuenta como intento fallido.

Este módulo es el ÚNICO lugar donde se ensamblan los componentes:
crea el repositorio, la bitácora y el escritor de extractos concretos
y los inyecta en el servicio Banco. No contiene lógica de negocio.
"""

import argparse
import getpass
import sys
from pathlib import Path

from sistema_bancario.adapters.output.loggers.console_logger import ConsoleLogger
from sistema_bancario.adapters.output.loggers.logging_logger import LoggingLogger
from sistema_bancario.adapters.output.writers.excel_writer import ExcelWriter
from sistema_bancario.adapters.persistence.json_repository import JsonFileRepository
from sistema_bancario.domain.exceptions import ConfiguracionError
from sistema_bancario.domain.models.datos_usuario import CambiosPerfil, DatosRegistro
from sistema_bancario.domain.models.resultado import ResultadoOperacion
from sistema_bancario.domain.ports.bitacora import Bitacora
from sistema_bancario.domain.services.banco import Banco
from sistema_bancario.domain.shared.money import parse_monto
from sistema_bancario.infrastructure.config import BITACORAS, ConfiguracionBanco
from sistema_bancario.infrastructure.log_config import setup_logging


def main(argv: list[str] | None = None) -> None:
    """Punto de entrada principal del CLI."""
    args = _parse_args(argv)

    try:
        config = ConfiguracionBanco.from_env()
    except ConfiguracionError as e:
        print(f"❌ {e}")
        sys.exit(1)

    if args.datos:
        config.ruta_datos = Path(args.datos)
    if args.bitacora:
        config.bitacora = args.bitacora

    logger = crear_bitacora(config, verbose=args.verbose)
    banco = crear_banco(config, logger)

    resultado = args.comando(banco, args)
    for clave, motivo in banco.registros_ilegibles().items():
        print(f"⚠️  Registro '{clave}' ignorado: {motivo}")
    _mostrar(resultado)

    if args.verbose and isinstance(logger, ConsoleLogger):
        logger.print_summary()

    if not resultado.exito:
        sys.exit(1)


def crear_bitacora(config: ConfiguracionBanco, verbose: bool = False) -> Bitacora:
    """Elige la bitácora según la configuración."""
    if config.bitacora == "logging":
        setup_logging(config.log_level)
        return LoggingLogger()
    return ConsoleLogger(verbose=verbose)


def crear_banco(config: ConfiguracionBanco, logger: Bitacora) -> Banco:
    """Ensambla el servicio Banco con los adaptadores concretos."""
    return Banco(
        repositorio=JsonFileRepository(config.ruta_datos, tipos_cuenta=config.tipos_cuenta),
        logger=logger,
        reglas=config.reglas(),
        extracto_writer=ExcelWriter(),
    )


# =================================================================
# Comandos
# =================================================================


def _cmd_registrar(banco: Banco, args: argparse.Namespace) -> ResultadoOperacion:
    datos = DatosRegistro(
        nombre=args.nombre,
        cedula=args.cedula,
        celular=args.celular,
        email=args.email,
        password=_password(args),
    )
    return banco.registrar_usuario(datos)


def _sesion(banco: Banco, args: argparse.Namespace) -> ResultadoOperacion:
    """Inicia sesión y devuelve el usuario como ResultadoOperacion."""
    login = banco.iniciar_sesion(args.cedula, _password(args))
    if not login.exito:
        return ResultadoOperacion.fallo(login.mensaje)
    return ResultadoOperacion(
        exito=True, mensaje=f"Bienvenido, {login.usuario.nombre}", usuario=login.usuario
    )


def _cmd_login(banco: Banco, args: argparse.Namespace) -> ResultadoOperacion:
    return _sesion(banco, args)


def _cmd_saldo(banco: Banco, args: argparse.Namespace) -> ResultadoOperacion:
    sesion = _sesion(banco, args)
    if not sesion.exito:
        return sesion
    return banco.consultar_saldo(sesion.usuario, args.cuenta)


def _cmd_consignar(banco: Banco, args: argparse.Namespace) -> ResultadoOperacion:
    sesion = _sesion(banco, args)
    if not sesion.exito:
        return sesion
    return banco.consignar(sesion.usuario, args.monto, args.cuenta)


def _cmd_retirar(banco: Banco, args: argparse.Namespace) -> ResultadoOperacion:
    sesion = _sesion(banco, args)
    if not sesion.exito:
        return sesion
    return banco.retirar(sesion.usuario, args.monto, args.cuenta)


def _cmd_transferir(banco: Banco, args: argparse.Namespace) -> ResultadoOperacion:
    sesion = _sesion(banco, args)
    if not sesion.exito:
        return sesion
    return banco.transferir(
        sesion.usuario,
        args.monto,
        referencia_origen=args.cuenta,
        destino_id=args.destino,
        referencia_destino=args.cuenta_destino,
    )


def _cmd_movimientos(banco: Banco, args: argparse.Namespace) -> ResultadoOperacion:
    sesion = _sesion(banco, args)
    if not sesion.exito:
        return sesion
    return banco.consultar_movimientos(sesion.usuario, args.cuenta)


def _cmd_cambiar_password(banco: Banco, args: argparse.Namespace) -> ResultadoOperacion:
    password_actual = _password(args)
    login = banco.iniciar_sesion(args.cedula, password_actual)
    if not login.exito:
        return ResultadoOperacion.fallo(login.mensaje)
    nuevo = args.nuevo if args.nuevo is not None else getpass.getpass("Nueva contraseña: ")
    return banco.cambiar_password(login.usuario, password_actual, nuevo)


def _cmd_perfil(banco: Banco, args: argparse.Namespace) -> ResultadoOperacion:
    sesion = _sesion(banco, args)
    if not sesion.exito:
        return sesion
    cambios = CambiosPerfil(nombre=args.nombre, celular=args.celular, email=args.email)
    return banco.actualizar_perfil(sesion.usuario, cambios)


def _cmd_extracto(banco: Banco, args: argparse.Namespace) -> ResultadoOperacion:
    sesion = _sesion(banco, args)
    if not sesion.exito:
        return sesion
    salida = Path(args.output) if args.output else Path(f"extracto_{args.cedula}.xlsx")
    return banco.exportar_extracto(sesion.usuario, salida)


# =================================================================
# Utilidades
# =================================================================


def _password(args: argparse.Namespace) -> str:
    if args.password is not None:
        return args.password
    return getpass.getpass("Contraseña: ")


def _monto(texto: str) -> int:
    try:
        return parse_monto(texto)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def _mostrar(resultado: ResultadoOperacion) -> None:
    if resultado.exito:
        if resultado.mensaje:
            print(f"✅ {resultado.mensaje}")
    else:
        print(f"❌ {resultado.mensaje}")


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parsea los argumentos de línea de comandos."""
    parser = argparse.ArgumentParser(
        prog="sistema-bancario",
        description="Sistema bancario local: cuentas, movimientos y transferencias",
        epilog="Ejemplo: sistema-bancario consignar --cedula 123 --monto 100",
    )
    parser.add_argument(
        "--datos",
        help="Ruta del documento JSON de usuarios (default: BANCO_DATOS o usuarios.json)",
    )
    parser.add_argument(
        "--bitacora",
        choices=BITACORAS,
        help="Destino de la bitácora de operaciones (default: BANCO_BITACORA o consola)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Imprimir los eventos de la bitácora de consola",
    )

    sub = parser.add_subparsers(dest="nombre_comando", required=True)

    def con_sesion(nombre: str, ayuda: str) -> argparse.ArgumentParser:
        p = sub.add_parser(nombre, help=ayuda)
        p.add_argument("--cedula", required=True, help="Cédula del usuario")
        p.add_argument("--password", help="Contraseña (si se omite, se pide por consola)")
        return p

    p = sub.add_parser("registrar", help="Registrar un usuario nuevo")
    p.add_argument("--nombre", required=True)
    p.add_argument("--cedula", required=True)
    p.add_argument("--celular", required=True)
    p.add_argument("--email", required=True)
    p.add_argument("--password", help="Contraseña (si se omite, se pide por consola)")
    p.set_defaults(comando=_cmd_registrar)

    p = con_sesion("login", "Verificar credenciales")
    p.set_defaults(comando=_cmd_login)

    p = con_sesion("saldo", "Consultar el saldo de una cuenta")
    p.add_argument("--cuenta", help="Id o tipo de cuenta (default: ahorros)")
    p.set_defaults(comando=_cmd_saldo)

    p = con_sesion("consignar", "Consignar dinero en una cuenta")
    p.add_argument("--monto", required=True, type=_monto)
    p.add_argument("--cuenta", help="Id o tipo de cuenta (default: ahorros)")
    p.set_defaults(comando=_cmd_consignar)

    p = con_sesion("retirar", "Retirar dinero de una cuenta")
    p.add_argument("--monto", required=True, type=_monto)
    p.add_argument("--cuenta", help="Id o tipo de cuenta (default: ahorros)")
    p.set_defaults(comando=_cmd_retirar)

    p = con_sesion("transferir", "Transferir a otro usuario o entre cuentas propias")
    p.add_argument("--monto", required=True, type=_monto)
    p.add_argument("--cuenta", help="Cuenta de origen (default: ahorros)")
    p.add_argument("--destino", help="Cédula del destinatario (default: el mismo usuario)")
    p.add_argument(
        "--cuenta-destino",
        dest="cuenta_destino",
        help="Cuenta destino (default: la de origen si es propia, ahorros si es otro usuario)",
    )
    p.set_defaults(comando=_cmd_transferir)

    p = con_sesion("movimientos", "Ver el historial de movimientos")
    p.add_argument("--cuenta", help="Id o tipo de cuenta (default: ahorros)")
    p.set_defaults(comando=_cmd_movimientos)

    p = con_sesion("cambiar-password", "Cambiar la contraseña")
    p.add_argument("--nuevo", help="Nueva contraseña (si se omite, se pide por consola)")
    p.set_defaults(comando=_cmd_cambiar_password)

    p = con_sesion("perfil", "Actualizar nombre, celular o email")
    p.add_argument("--nombre")
    p.add_argument("--celular")
    p.add_argument("--email")
    p.set_defaults(comando=_cmd_perfil)

    p = con_sesion("extracto", "Exportar el extracto a Excel")
    p.add_argument("-o", "--output", help="Ruta del Excel (default: extracto_<cedula>.xlsx)")
    p.set_defaults(comando=_cmd_extracto)

    return parser.parse_args(argv)


if __name__ == "__main__":
    main()
