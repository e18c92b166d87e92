# services/crisis_contact_service.py
from __future__ import annotations
import logging
from typing import Optional

from config import DEFAULT_COUNTRY
from db import SessionLocal, init_db
from models import CrisisContact
from seeds.crisis_contacts_seeds import seed_crisis_contacts
from services.errors import BadRequest

logger = logging.getLogger(__name__)

# Served when the database can't be reached at all
FALLBACK_CONTACT = {
    "id": 1,
    "country_code": "US",
    "country_name": "United States",
    "phone_number": "988",
    "sms_number": "741741",
    "description": "National Suicide Prevention Lifeline",
}


def _first_active(db, country_code: str) -> Optional[CrisisContact]:
    return (
        db.query(CrisisContact)
        .filter(CrisisContact.country_code == country_code, CrisisContact.is_active.is_(True))
        .order_by(CrisisContact.id.asc())
        .first()
    )


def get_crisis_contact(country_code: Optional[str] = None) -> Optional[dict]:
    country_code = country_code or DEFAULT_COUNTRY
    try:
        with SessionLocal() as db:
            init_db(db.get_bind(), tables=[CrisisContact.__table__])
            added = seed_crisis_contacts(db)
            if added:
                logger.info("Seeded %d crisis contacts", added)

            contact = _first_active(db, country_code)
            if contact is None:
                logger.info("No crisis contact for %s, falling back to %s", country_code, DEFAULT_COUNTRY)
                contact = _first_active(db, DEFAULT_COUNTRY)
            return contact.to_dict() if contact else None
    except Exception:
        logger.exception("Crisis contact lookup failed; serving built-in fallback")
        return dict(FALLBACK_CONTACT)


def create_crisis_contact(
    country_code: Optional[str],
    country_name: Optional[str],
    phone_number: Optional[str] = None,
    sms_number: Optional[str] = None,
    description: Optional[str] = None,
) -> dict:
    if not country_code or not country_name:
        raise BadRequest("Country code and name are required")

    with SessionLocal() as db:
        init_db(db.get_bind(), tables=[CrisisContact.__table__])
        contact = CrisisContact(
            country_code=country_code,
            country_name=country_name,
            phone_number=phone_number or None,
            sms_number=sms_number or None,
            description=description or None,
        )
        db.add(contact)
        db.commit()
        db.refresh(contact)
        return contact.to_dict()
