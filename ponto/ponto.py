"""
Facilita Ponto clock-in CLI.

Usage:
    python ponto.py            # clock in
    python ponto.py auth       # one-time setup
    python ponto.py --update-cookies
"""

from ponto_core.runner import run

if __name__ == "__main__":
    run()
