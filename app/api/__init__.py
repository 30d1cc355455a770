# ================================
# API PACKAGE INITIALIZATION (api/__init__.py)
# ================================

"""
API Package

Root package für alle API-Routen
"""

# Version Info
API_VERSION = "1.0.0"
API_TITLE = "housnkuh Pricing API"
API_DESCRIPTION = """
Preisberechnung und Buchungsstatus für den housnkuh Marktplatz

## Features
- Preisberechnung für Mietfächer, Schaufenster und Zusatzleistungen
- Laufzeitrabatte (6 Monate: 5%, 12 Monate: 10%)
- Eingefrorene Paket-Snapshots für Buchungsanfragen
- Probemonat-Countdown und Buchungsstatus
- Package Tracking für Lager- und Versandservice
"""

__all__ = ["API_VERSION", "API_TITLE", "API_DESCRIPTION"]
