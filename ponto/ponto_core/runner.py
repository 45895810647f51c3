"""
CLI entry point. The only place errors become messages and exit codes.
"""

import argparse
import sys

from .constants import PONTO_VERSION
from .config import log, safe_print, setup_logging
from .errors import PontoError, AuthRejectedError, ClockInRejectedError
from .api import ClockInClient
from .enrollment import console_enroll

USAGE_EXAMPLES = """\
Examples
  $ ponto auth
  $ ponto
  $ ponto --update-cookies
"""


def build_parser():
    parser = argparse.ArgumentParser(
        prog="ponto",
        description="Registra o ponto no Facilita Ponto.",
        epilog=USAGE_EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("command", nargs="?", choices=["auth", "config"],
                        help="auth: configura autenticação (omitir para registrar o ponto)")
    parser.add_argument("--update-cookies", action="store_true",
                        help="Força atualização dos cookies de autenticação")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log detalhado no terminal")
    parser.add_argument("--version", action="version", version=f"%(prog)s {PONTO_VERSION}")
    return parser


def handle_cli_error(err):
    """Print the remediation for `err` and return the process exit code."""
    if isinstance(err, PontoError):
        safe_print(err.message, file=sys.stderr)

        if isinstance(err, (AuthRejectedError, ClockInRejectedError)) and err.status:
            safe_print(f"Detalhes: {err.status} {err.reason or ''}".strip(), file=sys.stderr)
        if isinstance(err, ClockInRejectedError) and err.body:
            safe_print("Resposta:", err.body, file=sys.stderr)

        if not err.is_operational:
            log.error("Non-operational error", exc_info=err)
        return err.exit_code

    log.error("Unexpected error", exc_info=err)
    safe_print("Erro inesperado:", err, file=sys.stderr)
    return 1


def register_point(force_refresh=False, client=None):
    client = client or ClockInClient()
    result = client.clock_in(force_refresh=force_refresh)
    safe_print("Ponto registrado com sucesso!")
    safe_print(f"Horário: {result.timestamp}")
    return result


def main(argv=None):
    """Primary CLI entry point. Returns the exit code."""
    args = build_parser().parse_args(argv)
    setup_logging(verbose=args.verbose)

    try:
        if args.command in ("auth", "config"):
            console_enroll()
        else:
            register_point(force_refresh=args.update_cookies)
    except KeyboardInterrupt:
        safe_print("\nInterrompido.", file=sys.stderr)
        return 130
    except Exception as e:
        return handle_cli_error(e)
    return 0


def run():
    sys.exit(main())
