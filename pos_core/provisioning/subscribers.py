# pos_core/provisioning/subscribers.py
import logging

from pos_core.common.events import subscribe

logger = logging.getLogger(__name__)


@subscribe("company.registered")
def on_company_registered(payload: dict) -> None:
    # approval workflow hooks in here; until then the platform log is the queue
    logger.info(
        "Company registered: %s (%s), admin %s, awaiting approval",
        payload.get("company_name"),
        payload.get("company_code"),
        payload.get("admin_phone"),
    )
