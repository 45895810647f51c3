"""
Registration token extraction and clock-in payload encoding.

Both tokens are base64(UTF-8(JSON)). The JSON field names are fixed by the
portal and must not be translated.
"""

import base64
import binascii
import html
import json
import re
from datetime import datetime

from .constants import (
    FIELD_EMPLOYEE, FIELD_KEY, FIELD_REGISTRO, FIELD_TIMESTAMP, TIMESTAMP_FORMAT,
)
from .errors import RegistrationTokenNotFoundError, EmployeeTokenDecodeError

_INPUT_TAG_RE = re.compile(r"<input\b[^>]*>", re.IGNORECASE)
_ATTR_RE = re.compile(
    r"""([a-zA-Z_:][\w:.-]*)\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'=<>`]+))"""
)


def _input_attributes(tag):
    attrs = {}
    for match in _ATTR_RE.finditer(tag):
        name = match.group(1).lower()
        value = next(v for v in match.group(2, 3, 4) if v is not None)
        attrs.setdefault(name, html.unescape(value))
    return attrs


def extract_registration_token(page):
    """Value of <input name="registro" value="..."> from the auth page."""
    for tag in _INPUT_TAG_RE.findall(page or ""):
        attrs = _input_attributes(tag)
        if attrs.get("name") != FIELD_REGISTRO:
            continue
        token = attrs.get("value", "").strip()
        if token:
            return token
    raise RegistrationTokenNotFoundError()


def decode_employee_id(token):
    """Decode a registration token and return its 'funcionario' field."""
    padded = token.strip() + "=" * (-len(token.strip()) % 4)
    try:
        raw = base64.b64decode(padded, validate=True)
        data = json.loads(raw.decode("utf-8"))
    except (binascii.Error, ValueError) as e:
        # ValueError covers UnicodeDecodeError and JSONDecodeError
        raise EmployeeTokenDecodeError(
            f"Token de registro inválido: {e.__class__.__name__}"
        ) from e

    if not isinstance(data, dict):
        raise EmployeeTokenDecodeError("Token de registro inválido: JSON não é um objeto.")
    employee_id = data.get(FIELD_EMPLOYEE)
    if employee_id is None or str(employee_id).strip() == "":
        raise EmployeeTokenDecodeError(
            f"Token de registro inválido: campo '{FIELD_EMPLOYEE}' ausente."
        )
    return str(employee_id)


def encode_clock_in_token(timestamp, company_key, employee_id):
    payload = {
        FIELD_TIMESTAMP: timestamp,
        FIELD_KEY: company_key,
        FIELD_EMPLOYEE: employee_id,
    }
    encoded = json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
    return base64.b64encode(encoded.encode("utf-8")).decode("ascii")


def format_timestamp(moment=None):
    """Local time as YYYY-MM-DD HH:MM:SS."""
    return (moment or datetime.now()).strftime(TIMESTAMP_FORMAT)
