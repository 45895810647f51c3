"""
ponto_core: Facilita Ponto clock-in client
=========================================
Architecture: one sequential run per invocation. No background state.

  constants.py    → Version, endpoints, timeouts, wire field names
  config.py       → Paths, env overrides, logging, atomic writes, safe_print
  errors.py       → PontoError hierarchy
  http_client.py  → HTTP session with retry/pooling + CA bundle
  credentials.py  → Credential store (config.json)
  cookies.py      → Cookie store (cookies.txt) + header codecs
  token_codec.py  → Registration token / clock-in payload codec
  session.py      → SessionManager (cached or fresh session cookies)
  api.py          → ClockInClient (submit, re-auth once on 401/403)
  enrollment.py   → One-time setup handshake + console dialog
  runner.py       → argparse CLI, error → exit code
"""
