"""
Error taxonomy. Every failure the CLI can report is a PontoError subclass.

Components raise; only runner.handle_cli_error turns errors into exit codes.
"""


class PontoError(Exception):
    """Base error. Operational errors are expected and user-actionable."""

    default_message = "Erro no ponto."

    def __init__(self, message=None, exit_code=1, is_operational=True):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message
        self.exit_code = exit_code
        self.is_operational = is_operational


class LocalCredentialsMissingError(PontoError):
    default_message = "Erro ao ler credenciais. Execute 'ponto auth' primeiro."


class CredentialsIncompleteError(PontoError):
    default_message = "Credenciais incompletas. Execute 'ponto auth' para configurar."


class AuthTransportError(PontoError):
    default_message = "Não foi possível contatar o servidor de autenticação."


class AuthRejectedError(PontoError):
    default_message = "Erro ao autenticar no Facilita Ponto. Verifique suas credenciais."

    def __init__(self, message=None, status=None, reason=None, **kwargs):
        super().__init__(message, **kwargs)
        self.status = status
        self.reason = reason


class RegistrationTokenNotFoundError(PontoError):
    default_message = "Token de registro não encontrado na resposta HTML."


class EmployeeTokenDecodeError(PontoError):
    default_message = "Token de registro inválido: não foi possível obter o funcionário."


class ClockInTransportError(PontoError):
    default_message = "Não foi possível enviar o registro de ponto."


class ClockInRejectedError(PontoError):
    default_message = "Erro ao registrar ponto."

    def __init__(self, message=None, status=None, reason=None, body=None, **kwargs):
        super().__init__(message, **kwargs)
        self.status = status
        self.reason = reason
        self.body = body


class StorageError(PontoError):
    """Local file could not be written. Points at an environment problem."""

    default_message = "Erro ao salvar arquivo de configuração."

    def __init__(self, message=None, path=None, **kwargs):
        kwargs.setdefault("is_operational", False)
        super().__init__(message, **kwargs)
        self.path = path
