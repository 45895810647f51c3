"""
Credential store: company code, CPF and employee id in config.json.
"""

import json
import re
from dataclasses import dataclass, asdict
from typing import Optional

from .config import log, atomic_write_text, CREDENTIALS_FILE
from .errors import StorageError


@dataclass
class Credentials:
    emp: str = ""
    cpf: str = ""
    funcionario: Optional[str] = None

    def can_authenticate(self) -> bool:
        """Company code and CPF are both present."""
        return bool(self.emp and self.cpf)

    def is_complete(self) -> bool:
        """Everything a clock-in payload needs, including the employee id."""
        return self.can_authenticate() and bool(self.funcionario)

    @classmethod
    def from_dict(cls, data):
        def _field(name):
            value = data.get(name)
            return None if value is None else str(value)

        return cls(
            emp=_field("emp") or "",
            cpf=_field("cpf") or "",
            funcionario=_field("funcionario"),
        )

    def to_dict(self):
        return asdict(self)


def normalize_cpf(cpf):
    """Strip punctuation: '123.456.789-00' → '12345678900'."""
    return re.sub(r"\D", "", cpf or "")


def load_credentials(path=CREDENTIALS_FILE):
    """Load credentials from disk. Returns Credentials or None, never raises."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return None
    except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
        log.warning("Ignoring unreadable credentials file %s: %s", path, e)
        return None

    if not isinstance(data, dict):
        log.warning("Ignoring credentials file %s: not a JSON object", path)
        return None
    return Credentials.from_dict(data)


def save_credentials(credentials, path=CREDENTIALS_FILE):
    """Write the whole record to disk, replacing any previous file."""
    try:
        atomic_write_text(path, json.dumps(credentials.to_dict(), indent=2))
    except OSError as e:
        raise StorageError(f"Erro ao salvar credenciais em {path}: {e}", path=path) from e
    log.info("Credentials saved to %s", path)
