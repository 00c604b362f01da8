"""Transactional emails. Failures are logged and never raised to the caller."""
import logging

from hospital import config
from hospital.services.mailer import send_email
from hospital.utils.email_templates import (
    admin_new_booking_template,
    admin_status_update_template,
    booking_received_template,
    contact_notification_template,
    status_update_template,
)


logger = logging.getLogger(__name__)


def _deliver(to, subject, html, label):
    try:
        send_email(to, subject, html)
    except Exception as e:
        logger.error(f"{label} email to {to} failed: {e}")


def notify_booking_created(booking):
    if booking.email:
        subject, html = booking_received_template(booking)
        _deliver(booking.email, subject, html, "Patient")

    if config.ADMIN_EMAIL:
        subject, html = admin_new_booking_template(booking)
        _deliver(config.ADMIN_EMAIL, subject, html, "Admin")
    else:
        logger.warning("ADMIN_EMAIL not set, admin not notified of new booking")


def notify_status_change(booking, status, next_slot=None):
    if booking.email:
        rendered = status_update_template(booking, status, next_slot)
        if rendered:
            subject, html = rendered
            _deliver(booking.email, subject, html, "Patient")

    if config.ADMIN_EMAIL:
        subject, html = admin_status_update_template(booking, status)
        _deliver(config.ADMIN_EMAIL, subject, html, "Admin")


def notify_contact_received(contact):
    if not config.ADMIN_EMAIL:
        logger.warning("ADMIN_EMAIL not set, contact message not forwarded")
        return
    subject, html = contact_notification_template(contact)
    _deliver(config.ADMIN_EMAIL, subject, html, "Contact")
