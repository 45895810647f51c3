"""
Constants: version, portal endpoints, timeouts and wire field names.
"""

PONTO_VERSION = "1.2.0"

# ─── Portal ──────────────────────────────────────────────────────
DEFAULT_BASE_URL = "https://sistema.facilitaponto.com.br"
AUTH_PATH = "/registrar/auth"
CLOCK_IN_PATH = "/registrar/grava"
USER_AGENT = f"ponto/{PONTO_VERSION}"

# ─── Network ─────────────────────────────────────────────────────
API_TIMEOUT_AUTH = 20          # Seconds, auth page renders server-side
API_TIMEOUT_CLOCK_IN = 30      # Clock-in writes to the portal DB
SESSION_EXPIRED_STATUSES = frozenset({401, 403})

# ─── Local files ─────────────────────────────────────────────────
CONFIG_DIR_PARTS = (".config", "severino", "ponto")
CREDENTIALS_FILENAME = "config.json"
COOKIES_FILENAME = "cookies.txt"
LOG_FILENAME = "ponto.log"
LOG_MAX_BYTES = 1_000_000

# ─── Wire field names (fixed by the portal, Portuguese) ──────────
FIELD_COMPANY = "emp"
FIELD_CPF = "cpf"
FIELD_EMPLOYEE = "funcionario"
FIELD_TIMESTAMP = "data_hora"
FIELD_KEY = "key"
FIELD_REGISTRO = "registro"
FIELD_UTMP = "utmp"

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
