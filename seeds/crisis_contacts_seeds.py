# seeds/crisis_contacts_seeds.py
from sqlalchemy import func
from sqlalchemy.orm import Session
from models import CrisisContact

DEFAULTS = [
    dict(country_code="US", country_name="United States", phone_number="988", sms_number="741741", description="National Suicide Prevention Lifeline"),
    dict(country_code="UK", country_name="United Kingdom", phone_number="116 123", sms_number=None, description="Samaritans"),
    dict(country_code="CA", country_name="Canada", phone_number="1-833-456-4566", sms_number="45645", description="Talk Suicide Canada"),
    dict(country_code="AU", country_name="Australia", phone_number="13 11 14", sms_number=None, description="Lifeline Australia"),
    dict(country_code="DE", country_name="Germany", phone_number="0800 111 0 111", sms_number=None, description="Telefonseelsorge"),
    dict(country_code="FR", country_name="France", phone_number="3114", sms_number=None, description="Numéro national français de prévention du suicide"),
]

def seed_crisis_contacts(session: Session) -> int:
    """Insert the default hotlines when the table is empty. Returns rows added."""
    existing = session.query(func.count(CrisisContact.id)).scalar() or 0
    if existing:
        return 0
    session.add_all([CrisisContact(**row) for row in DEFAULTS])
    session.commit()
    return len(DEFAULTS)
