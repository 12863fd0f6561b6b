"""Contact form submissions."""

from __future__ import annotations

from typing import List

from core.exceptions import ValidationError
from models.support import ContactForm
from services.storage import Storage
from logging_config import get_logger


logger = get_logger(__name__)


class SupportService:
    def __init__(self, storage: Storage):
        self._storage = storage

    def submit(self, name: str, email: str, subject: str, message: str) -> ContactForm:
        for field_name, value in (("name", name), ("email", email), ("subject", subject), ("message", message)):
            if not value:
                raise ValidationError(f"{field_name.capitalize()} required", field=field_name)
        if "@" not in email:
            raise ValidationError("Valid email required", field="email")

        form = self._storage.add_contact_form(ContactForm(
            name=name, email=email, subject=subject, message=message,
        ))
        logger.info(f"Contact form {form.id} received: {subject}")
        return form

    def list_all(self) -> List[ContactForm]:
        return self._storage.list_contact_forms()
