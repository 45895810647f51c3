"""
One-time setup: authenticate once, decode the employee id from the
registration token, save credentials. Plus the interactive console dialog.
"""

from .config import log, safe_print, CREDENTIALS_FILE
from .credentials import Credentials, load_credentials, save_credentials, normalize_cpf
from .session import SessionManager
from .token_codec import extract_registration_token, decode_employee_id


# ─── Server handshake ────────────────────────────────────────────

def fetch_employee_id(emp, cpf, session_manager=None):
    """
    Authenticate and decode the employee id from the returned page.

    The cookies issued here are not kept. A non-2xx status fails
    immediately, with no retry.
    """
    session_manager = session_manager or SessionManager()
    resp = session_manager.authenticate(emp, cpf)
    token = extract_registration_token(resp.text)
    employee_id = decode_employee_id(token)
    log.info("Employee id obtained")
    return employee_id


def enroll(emp, cpf, session_manager=None, path=CREDENTIALS_FILE):
    """Run the handshake and persist the resulting credentials."""
    session_manager = session_manager or SessionManager()
    emp = emp.strip()
    cpf = normalize_cpf(cpf)

    credentials = Credentials(emp=emp, cpf=cpf, funcionario=fetch_employee_id(emp, cpf, session_manager))
    save_credentials(credentials, path)

    # A cached session belongs to whoever was configured before
    session_manager.invalidate()
    return credentials


# ─── Console dialog ──────────────────────────────────────────────

def _ask(input_fn, prompt, error):
    while True:
        value = input_fn(prompt).strip()
        if value:
            return value
        safe_print(error)


def _confirm(input_fn, prompt):
    answer = input_fn(f"{prompt} [s/N] ").strip().lower()
    return answer in ("s", "sim", "y", "yes")


def console_enroll(input_fn=input, session_manager=None, path=CREDENTIALS_FILE):
    """Interactive first-time setup. Returns Credentials, or None if cancelled."""
    existing = load_credentials(path)
    try:
        if existing:
            safe_print("Credenciais atuais:")
            safe_print(f"  emp: {existing.emp}")
            safe_print(f"  cpf: {existing.cpf}")
            safe_print(f"  funcionario: {existing.funcionario or ''}")
            if not _confirm(input_fn, "Deseja sobrescrever as credenciais existentes?"):
                safe_print("Nenhuma alteração realizada.")
                return None

        emp = _ask(input_fn, "Código da empresa (emp): ", "Informe o código da empresa")
        cpf = _ask(input_fn, "CPF: ", "Informe o CPF")
    except (EOFError, KeyboardInterrupt):
        safe_print()
        safe_print("Autenticação cancelada.")
        return None

    credentials = enroll(emp, cpf, session_manager=session_manager, path=path)
    safe_print(f"Credenciais salvas em {path}")
    return credentials
