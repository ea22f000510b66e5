# vistoria/settings.py
import logging
import os

# ======================================================
# Page config
# ======================================================
PAGE_TITLE = "Sistema de Vistoria de Equipamentos"
PAGE_ICON = "📋"

# ======================================================
# Export
# ======================================================
EXPORT_FILENAME = "vistorias.xlsx"
EXPORT_CSV_FILENAME = "vistorias.csv"
EXPORT_SHEET_NAME = "Vistorias"

# pt-BR style, e.g. 19/10/2026, 14:03:22
TIMESTAMP_FORMAT = "%d/%m/%Y, %H:%M:%S"

# ======================================================
# Company code
# ======================================================
COMPANY_SEGMENTS = 3
COMPANY_SEGMENT_LENGTH = 3
COMPANY_SEPARATOR = "-"

# ======================================================
# Logging
# ======================================================
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def setup_logging() -> None:
    """Configure the root logger once per process."""
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        level=getattr(logging, LOG_LEVEL, logging.INFO),
    )
