"""Example: use the service layer directly (no Flask).

Controllers stay thin; the dues ledger comes straight from DuesService.
"""

import importlib
import logging

from config import get_settings_module

from src.membership_system.membership_system.container import build_container

logger = logging.getLogger("example_usage")


def main():
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, monthly_due_amount=settings.MONTHLY_DUE_AMOUNT)
    try:
        report = container.dues_service.build_year_report(year=2025)
        for record in report.records:
            logger.info("%-30s %-12s paid=%s due=%s", record.member_name, record.status.value, record.total_paid, record.total_due)
    finally:
        container.close()


if __name__ == "__main__":
    main()
